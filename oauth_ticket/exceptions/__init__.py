"""OAuth ticket-creation exceptions."""

from .auth import (
    OAuthError,
    TicketError,
    ConfigurationError,
    FetchError,
    ParseError,
    MappingError,
)

__all__ = [
    "OAuthError",
    "TicketError",
    "ConfigurationError",
    "FetchError",
    "ParseError",
    "MappingError",
]
