"""Google OAuth identity provider."""

from typing import Optional, Sequence

from .base import ProviderDefinition, configure
from ..config.settings import ProviderConfig
from ..core.auth import ClaimTypes
from ..core.mapping import ClaimMappingRule, json_key

GOOGLE_SCHEME = "Google"
GOOGLE_USER_INFORMATION_ENDPOINT = "https://www.googleapis.com/oauth2/v2/userinfo"

GOOGLE_CLAIM_RULES = (
    ClaimMappingRule(ClaimTypes.NAME_IDENTIFIER, "id"),
    ClaimMappingRule(ClaimTypes.EMAIL, "email"),
    json_key(ClaimTypes.NAME, "name"),
    json_key(ClaimTypes.GIVEN_NAME, "given_name"),
    json_key(ClaimTypes.SURNAME, "family_name"),
    json_key(ClaimTypes.EMAIL_VERIFIED, "verified_email"),
    json_key(ClaimTypes.PICTURE, "picture"),
    json_key(ClaimTypes.LOCALE, "locale"),
)

GOOGLE = ProviderDefinition(
    name="google",
    scheme_name=GOOGLE_SCHEME,
    display_name="Google",
    config=ProviderConfig(
        user_information_endpoint=GOOGLE_USER_INFORMATION_ENDPOINT,
        scopes=("openid", "email", "profile"),
        access_token_parameter=None,
        send_bearer_token=True,
    ),
    rules=GOOGLE_CLAIM_RULES,
)


def google(scopes: Optional[Sequence[str]] = None, **config_changes) -> ProviderDefinition:
    """Google provider definition."""
    return configure(GOOGLE, scopes, **config_changes)
