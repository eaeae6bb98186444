"""OAuth ticket-creation exceptions."""

from typing import Mapping, Optional


class OAuthError(Exception):
    """Base exception for OAuth errors."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.error_code = error_code


class TicketError(OAuthError):
    """Base class for failures of the ticket-creation pipeline.

    ``stage`` names the pipeline state in which the failure occurred
    (``"built"``, ``"fetching"``, ``"validating"``, ``"parsing"`` or
    ``"mapping"``).
    """

    def __init__(self, message: str, error_code: str, stage: Optional[str] = None):
        super().__init__(message, error_code)
        self.stage = stage


class ConfigurationError(TicketError):
    """Raised when configuration or a required identifier is missing."""

    def __init__(
        self,
        message: str,
        missing_config: Optional[str] = None,
        stage: Optional[str] = None
    ):
        super().__init__(message, "configuration_error", stage)
        self.missing_config = missing_config


class FetchError(TicketError):
    """Raised when the user-information request fails.

    ``kind`` is ``"transport"`` for network-level failures (no response was
    received) and ``"protocol"`` for non-success HTTP statuses.
    """

    TRANSPORT = "transport"
    PROTOCOL = "protocol"

    def __init__(
        self,
        message: str,
        kind: str,
        status_code: Optional[int] = None,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[str] = None,
        stage: Optional[str] = None
    ):
        super().__init__(message, "fetch_error", stage)
        self.kind = kind
        self.status_code = status_code
        self.headers = dict(headers or {})
        self.body = body


class ParseError(TicketError):
    """Raised when the user-information response is not a JSON object."""

    def __init__(self, message: str, raw_body: str, stage: Optional[str] = None):
        super().__init__(message, "parse_error", stage)
        self.raw_body = raw_body


class MappingError(TicketError):
    """Raised when a required claim cannot be extracted from the profile."""

    def __init__(self, message: str, claim_type: str, stage: Optional[str] = None):
        super().__init__(message, "mapping_error", stage)
        self.claim_type = claim_type
