"""OAuth identity providers."""

from typing import Callable, Dict

from .base import ProviderDefinition
from .github import GITHUB, github
from .google import GOOGLE, google
from .microsoft import MICROSOFT, microsoft
from .paypal import PAYPAL, paypal
from .weibo import WEIBO, weibo
from ..exceptions.auth import ConfigurationError

PROVIDERS: Dict[str, Callable[..., ProviderDefinition]] = {
    "github": github,
    "google": google,
    "microsoft": microsoft,
    "paypal": paypal,
    "weibo": weibo,
}


def get_provider(name: str, **overrides) -> ProviderDefinition:
    """Look up a provider definition by name.

    Args:
        name: Provider name (e.g. 'weibo', 'paypal'), case-insensitive
        **overrides: Passed to the provider factory (scopes, timeout, ...)

    Raises:
        ConfigurationError: If no provider has that name
    """
    try:
        factory = PROVIDERS[name.lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown identity provider '{name}'. "
            f"Available: {', '.join(sorted(PROVIDERS))}"
        ) from None
    return factory(**overrides)


__all__ = [
    "ProviderDefinition",
    "PROVIDERS",
    "get_provider",
    "GITHUB",
    "GOOGLE",
    "MICROSOFT",
    "PAYPAL",
    "WEIBO",
    "github",
    "google",
    "microsoft",
    "paypal",
    "weibo",
]
