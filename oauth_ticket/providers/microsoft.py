"""Microsoft Entra ID (Azure AD) OAuth identity provider."""

from typing import Optional, Sequence

from .base import ProviderDefinition, configure
from ..config.settings import ProviderConfig
from ..core.auth import ClaimTypes
from ..core.mapping import ClaimMappingRule, custom, json_key
from ..core.profile import ProviderProfile

MICROSOFT_SCHEME = "Microsoft"
MICROSOFT_USER_INFORMATION_ENDPOINT = "https://graph.microsoft.com/v1.0/me"


def _email(profile: ProviderProfile):
    # Microsoft Graph leaves "mail" empty for many personal accounts
    return profile.get("mail") or profile.get("userPrincipalName")


MICROSOFT_CLAIM_RULES = (
    ClaimMappingRule(ClaimTypes.NAME_IDENTIFIER, "id"),
    json_key(ClaimTypes.NAME, "displayName"),
    json_key(ClaimTypes.GIVEN_NAME, "givenName"),
    json_key(ClaimTypes.SURNAME, "surname"),
    custom(ClaimTypes.EMAIL, _email),
    json_key(ClaimTypes.PREFERRED_USERNAME, "userPrincipalName"),
)

MICROSOFT = ProviderDefinition(
    name="microsoft",
    scheme_name=MICROSOFT_SCHEME,
    display_name="Microsoft",
    config=ProviderConfig(
        user_information_endpoint=MICROSOFT_USER_INFORMATION_ENDPOINT,
        scopes=("User.Read", "openid", "profile", "email"),
        access_token_parameter=None,
        send_bearer_token=True,
    ),
    rules=MICROSOFT_CLAIM_RULES,
)


def microsoft(scopes: Optional[Sequence[str]] = None, **config_changes) -> ProviderDefinition:
    """Microsoft Graph provider definition."""
    return configure(MICROSOFT, scopes, **config_changes)
