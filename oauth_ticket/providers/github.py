"""GitHub OAuth identity provider."""

from typing import Optional, Sequence

from .base import ProviderDefinition, configure
from ..config.settings import ProviderConfig
from ..core.auth import ClaimTypes
from ..core.mapping import ClaimMappingRule, custom, json_key
from ..core.profile import ProviderProfile

GITHUB_SCHEME = "GitHub"
GITHUB_USER_INFORMATION_ENDPOINT = "https://api.github.com/user"


def _display_name(profile: ProviderProfile):
    # Users without a public name still have a login
    return profile.get("name") or profile.get("login")


GITHUB_CLAIM_RULES = (
    ClaimMappingRule(ClaimTypes.NAME_IDENTIFIER, "id"),
    ClaimMappingRule(ClaimTypes.PREFERRED_USERNAME, "login"),
    custom(ClaimTypes.NAME, _display_name),
    json_key(ClaimTypes.EMAIL, "email"),
    json_key(ClaimTypes.PICTURE, "avatar_url"),
    json_key(ClaimTypes.WEBSITE, "blog"),
    json_key("urn:github:url", "html_url"),
)

GITHUB = ProviderDefinition(
    name="github",
    scheme_name=GITHUB_SCHEME,
    display_name="GitHub",
    config=ProviderConfig(
        user_information_endpoint=GITHUB_USER_INFORMATION_ENDPOINT,
        scopes=("user:email",),
        access_token_parameter=None,
        send_bearer_token=True,
    ),
    rules=GITHUB_CLAIM_RULES,
)


def github(scopes: Optional[Sequence[str]] = None, **config_changes) -> ProviderDefinition:
    """GitHub provider definition."""
    return configure(GITHUB, scopes, **config_changes)
