"""
OAuth Ticket - identity tickets from third-party OAuth2 providers

This package turns an access token obtained through the OAuth2
authorization-code flow into a normalized identity: it calls the provider's
user-information endpoint, validates and parses the response, maps the
provider's fields onto claims and returns an identity ticket.

Quick Start:
    from oauth_ticket import ProviderToken, TicketBuilder, weibo

    provider = weibo()
    token = ProviderToken.from_response(token_endpoint_payload)

    result = await provider.build_ticket(TicketBuilder(), token)
    if result.failed:
        logger.warning("Sign-in failed: %s", result.error)
    else:
        print(result.ticket.name)
"""

__version__ = "1.0.0"
__author__ = "OAuth Ticket Contributors"
__license__ = "MIT"

# Core exports
from .core.auth import Claim, ClaimTypes, ClaimValueTypes, IdentityTicket, ProviderToken
from .core.mapping import ClaimMappingRule, custom, json_key, json_sub_key
from .core.profile import ProfileNode, ProviderProfile
from .core.ticket import CreatingTicketContext, TicketBuilder, TicketResult, TicketState

# Identity providers
from .providers import (
    ProviderDefinition,
    get_provider,
    github,
    google,
    microsoft,
    paypal,
    weibo,
)

# Exceptions
from .exceptions.auth import (
    OAuthError,
    TicketError,
    ConfigurationError,
    FetchError,
    ParseError,
    MappingError,
)

# Configuration
from .config.settings import ProviderConfig

__all__ = [
    # Core
    "Claim",
    "ClaimTypes",
    "ClaimValueTypes",
    "IdentityTicket",
    "ProviderToken",
    "ClaimMappingRule",
    "custom",
    "json_key",
    "json_sub_key",
    "ProfileNode",
    "ProviderProfile",
    "CreatingTicketContext",
    "TicketBuilder",
    "TicketResult",
    "TicketState",

    # Providers
    "ProviderDefinition",
    "get_provider",
    "github",
    "google",
    "microsoft",
    "paypal",
    "weibo",

    # Exceptions
    "OAuthError",
    "TicketError",
    "ConfigurationError",
    "FetchError",
    "ParseError",
    "MappingError",

    # Config
    "ProviderConfig",
]
