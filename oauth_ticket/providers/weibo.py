"""Sina Weibo OAuth identity provider."""

from typing import Optional, Sequence

from .base import ProviderDefinition, configure
from ..config.settings import ProviderConfig
from ..core.auth import ClaimTypes
from ..core.mapping import ClaimMappingRule, json_key

WEIBO_SCHEME = "Weibo"
WEIBO_USER_INFORMATION_ENDPOINT = "https://api.weibo.com/2/users/show.json"

WEIBO_CLAIM_RULES = (
    ClaimMappingRule(ClaimTypes.NAME_IDENTIFIER, "idstr"),
    json_key(ClaimTypes.NAME, "name"),
    json_key(ClaimTypes.GENDER, "gender"),
    json_key("urn:weibo:screen_name", "screen_name"),
    json_key("urn:weibo:location", "location"),
    json_key("urn:weibo:profile_image_url", "profile_image_url"),
    json_key("urn:weibo:avatar_large", "avatar_large"),
    json_key("urn:weibo:avatar_hd", "avatar_hd"),
    json_key("urn:weibo:cover_image_phone", "cover_image_phone"),
)

# users/show.json needs the user's uid, which only the token response carries
WEIBO = ProviderDefinition(
    name="weibo",
    scheme_name=WEIBO_SCHEME,
    display_name="Weibo",
    config=ProviderConfig(
        user_information_endpoint=WEIBO_USER_INFORMATION_ENDPOINT,
        scopes=("email",),
        scope_separator=",",
        access_token_parameter="access_token",
        identifier_parameters={"uid": "uid"},
    ),
    rules=WEIBO_CLAIM_RULES,
)


def weibo(scopes: Optional[Sequence[str]] = None, **config_changes) -> ProviderDefinition:
    """Weibo provider definition.

    Usage:
        provider = weibo(timeout=10)
        result = await provider.build_ticket(TicketBuilder(), token)
    """
    return configure(WEIBO, scopes, **config_changes)
