"""Provider configuration settings."""

import dataclasses
import os
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from ..exceptions.auth import ConfigurationError

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ProviderConfig:
    """Read-only configuration for one identity provider.

    Attributes:
        user_information_endpoint: URL of the provider's user profile resource
        scopes: Requested OAuth scopes, in order
        scope_separator: Separator used by ``format_scope``
        access_token_parameter: Query parameter carrying the access token,
            or ``None`` to keep the token out of the URL
        identifier_parameters: Query parameter name -> path into the raw
            token response, for identifiers the profile request needs
        send_bearer_token: Also send the token as an ``Authorization`` header
        timeout: Request timeout in seconds (``None`` uses the client's)
    """

    user_information_endpoint: Optional[str] = None
    scopes: Tuple[str, ...] = ()
    scope_separator: str = " "
    access_token_parameter: Optional[str] = "access_token"
    identifier_parameters: Dict[str, str] = field(default_factory=dict)
    send_bearer_token: bool = False
    timeout: Optional[float] = None

    def __post_init__(self):
        # Accept any iterable of scopes but store an immutable tuple
        object.__setattr__(self, "scopes", tuple(self.scopes))
        object.__setattr__(
            self, "identifier_parameters", dict(self.identifier_parameters)
        )

    def format_scope(self) -> str:
        """Join scopes the way the provider expects them."""
        return self.scope_separator.join(self.scopes)

    def replace(self, **changes) -> "ProviderConfig":
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_env(
        cls,
        prefix: str = "OAUTH_",
        defaults: Optional["ProviderConfig"] = None
    ) -> "ProviderConfig":
        """Create configuration from environment variables.

        Expected environment variables:
        - {prefix}USER_INFORMATION_ENDPOINT
        - {prefix}SCOPES (optional, comma separated)
        - {prefix}SCOPE_SEPARATOR (optional)
        - {prefix}ACCESS_TOKEN_PARAMETER (optional, empty disables it)
        - {prefix}SEND_BEARER_TOKEN (optional, true/false)
        - {prefix}TIMEOUT (optional, seconds)

        Values that are not set fall back to ``defaults`` (or the class
        defaults).
        """
        config = defaults or cls()
        changes = {}

        endpoint = os.getenv(f"{prefix}USER_INFORMATION_ENDPOINT")
        if endpoint is not None:
            changes["user_information_endpoint"] = endpoint

        scopes = os.getenv(f"{prefix}SCOPES")
        if scopes is not None:
            changes["scopes"] = tuple(
                scope.strip() for scope in scopes.split(",") if scope.strip()
            )

        separator = os.getenv(f"{prefix}SCOPE_SEPARATOR")
        if separator:
            changes["scope_separator"] = separator

        token_parameter = os.getenv(f"{prefix}ACCESS_TOKEN_PARAMETER")
        if token_parameter is not None:
            changes["access_token_parameter"] = token_parameter or None

        bearer = os.getenv(f"{prefix}SEND_BEARER_TOKEN")
        if bearer is not None:
            changes["send_bearer_token"] = bearer.strip().lower() in _TRUE_VALUES

        timeout = os.getenv(f"{prefix}TIMEOUT")
        if timeout is not None:
            try:
                changes["timeout"] = float(timeout)
            except ValueError as e:
                raise ConfigurationError(
                    f"{prefix}TIMEOUT must be a number of seconds, got {timeout!r}",
                    missing_config=f"{prefix}TIMEOUT"
                ) from e

        config = config.replace(**changes)
        config.validate()
        return config

    def validate(self):
        """Validate configuration."""
        if not self.user_information_endpoint:
            raise ConfigurationError(
                "user_information_endpoint is required",
                missing_config="user_information_endpoint"
            )

        if not self.user_information_endpoint.startswith(("https://", "http://")):
            raise ConfigurationError(
                "user_information_endpoint must be an absolute http(s) URL",
                missing_config="user_information_endpoint"
            )

        if not self.access_token_parameter and not self.send_bearer_token:
            raise ConfigurationError(
                "Either access_token_parameter or send_bearer_token must be set",
                missing_config="access_token_parameter"
            )

        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")
