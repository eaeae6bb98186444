"""Tokens, claims and identity tickets."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple


class ClaimTypes:
    """Canonical claim type names."""

    NAME_IDENTIFIER = "sub"
    NAME = "name"
    GIVEN_NAME = "given_name"
    SURNAME = "family_name"
    EMAIL = "email"
    EMAIL_VERIFIED = "email_verified"
    GENDER = "gender"
    LOCALE = "locale"
    PICTURE = "picture"
    WEBSITE = "website"
    PREFERRED_USERNAME = "preferred_username"


class ClaimValueTypes:
    """Value types a claim mapping rule can produce."""

    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    JSON = "json"


class Claim(NamedTuple):
    """A ``(type, value)`` pair asserted about an identity."""

    type: str
    value: Any

    def __str__(self) -> str:
        return f"{self.type}: {self.value}"


@dataclass(frozen=True)
class ProviderToken:
    """Access token returned by the provider's token endpoint."""

    access_token: str
    raw_response: Mapping[str, Any] = field(default_factory=dict)
    token_type: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "ProviderToken":
        """Create a token from a raw token-endpoint response."""
        expires_in = payload.get("expires_in")
        try:
            expires_in = int(expires_in) if expires_in is not None else None
        except (TypeError, ValueError):
            expires_in = None

        return cls(
            access_token=payload.get("access_token") or "",
            raw_response=dict(payload),
            token_type=payload.get("token_type"),
            refresh_token=payload.get("refresh_token"),
            expires_in=expires_in
        )

    @property
    def is_valid(self) -> bool:
        return isinstance(self.access_token, str) and bool(self.access_token.strip())

    def __repr__(self) -> str:
        # Keep the secret out of logs and tracebacks
        return (
            f"ProviderToken(access_token='***', token_type={self.token_type!r}, "
            f"expires_in={self.expires_in!r})"
        )


@dataclass(frozen=True)
class IdentityTicket:
    """Authenticated identity handed to the hosting framework."""

    claims: Tuple[Claim, ...]
    scheme_name: str
    properties: Dict[str, Any] = field(default_factory=dict)

    def find_first(self, claim_type: str) -> Optional[Claim]:
        """Return the first claim of the given type."""
        return next((claim for claim in self.claims if claim.type == claim_type), None)

    def find_all(self, claim_type: str) -> List[Claim]:
        """Return every claim of the given type, in order."""
        return [claim for claim in self.claims if claim.type == claim_type]

    def has_claim(self, claim_type: str, value: Any = None) -> bool:
        """Check if the ticket carries a claim (optionally with a value)."""
        return any(
            claim.type == claim_type and (value is None or claim.value == value)
            for claim in self.claims
        )

    @property
    def name(self) -> Optional[str]:
        claim = self.find_first(ClaimTypes.NAME)
        return claim.value if claim else None

    @property
    def subject(self) -> Optional[str]:
        claim = self.find_first(ClaimTypes.NAME_IDENTIFIER)
        return claim.value if claim else None

    def __str__(self) -> str:
        return f"{self.name or self.subject or '<anonymous>'} ({self.scheme_name})"
