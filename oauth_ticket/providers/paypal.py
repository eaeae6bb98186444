"""PayPal OAuth identity provider."""

from typing import Optional, Sequence

from .base import ProviderDefinition, configure
from ..config.settings import ProviderConfig
from ..core.auth import ClaimTypes
from ..core.mapping import ClaimMappingRule, custom, first_with, json_key, last_segment

PAYPAL_SCHEME = "PayPal"
PAYPAL_USER_INFORMATION_ENDPOINT = (
    "https://api.paypal.com/v1/identity/oauth2/userinfo?schema=paypalv1.1"
)
PAYPAL_SANDBOX_USER_INFORMATION_ENDPOINT = (
    "https://api.sandbox.paypal.com/v1/identity/oauth2/userinfo?schema=paypalv1.1"
)

PAYPAL_CLAIM_RULES = (
    # user_id is a URL such as https://www.paypal.com/webapps/auth/identity/user/<id>
    ClaimMappingRule(ClaimTypes.NAME_IDENTIFIER, last_segment("user_id")),
    json_key(ClaimTypes.NAME, "name"),
    json_key(ClaimTypes.GIVEN_NAME, "given_name"),
    json_key(ClaimTypes.SURNAME, "family_name"),
    custom(ClaimTypes.EMAIL, first_with("emails", "primary", "value")),
    json_key(ClaimTypes.EMAIL_VERIFIED, "verified_account"),
    json_key("urn:paypal:payer_id", "payer_id"),
)

PAYPAL = ProviderDefinition(
    name="paypal",
    scheme_name=PAYPAL_SCHEME,
    display_name="PayPal",
    config=ProviderConfig(
        user_information_endpoint=PAYPAL_USER_INFORMATION_ENDPOINT,
        scopes=("openid", "profile", "email"),
        access_token_parameter=None,
        send_bearer_token=True,
    ),
    rules=PAYPAL_CLAIM_RULES,
)


def paypal(
    scopes: Optional[Sequence[str]] = None,
    sandbox: bool = False,
    **config_changes
) -> ProviderDefinition:
    """PayPal provider definition.

    Args:
        scopes: Requested scopes (defaults to openid profile email)
        sandbox: Use the PayPal sandbox endpoint
        **config_changes: Other ``ProviderConfig`` overrides
    """
    if sandbox:
        config_changes.setdefault(
            "user_information_endpoint", PAYPAL_SANDBOX_USER_INFORMATION_ENDPOINT
        )
    return configure(PAYPAL, scopes, **config_changes)
