"""Ticket creation from a provider's user-information endpoint.

``TicketBuilder.build_ticket`` runs after the authorization code has been
exchanged for an access token:

    fetch -> validate -> parse -> map -> emit

Each failure is returned as a ``TicketError`` inside the ``TicketResult``
instead of being raised, so the hosting request pipeline decides how to
present it. Cancellation of the awaiting task is never converted.
"""

import enum
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

import httpx

from .auth import Claim, IdentityTicket, ProviderToken
from .mapping import ClaimMappingRule, apply_claim_rules, merge_claims
from .profile import PathNotFoundError, ProfileNode, ProviderProfile
from ..config.settings import ProviderConfig
from ..exceptions.auth import (
    ConfigurationError,
    FetchError,
    MappingError,
    ParseError,
    TicketError,
)
from ..utils.text import truncate
from ..utils.urls import add_query_params, redact_query_params

logger = logging.getLogger(__name__)


class TicketState(str, enum.Enum):
    """States of a single ticket build."""

    BUILT = "built"
    FETCHING = "fetching"
    VALIDATING = "validating"
    PARSING = "parsing"
    MAPPING = "mapping"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class TicketResult:
    """Outcome of ``build_ticket``: a ticket or a ``TicketError``."""

    ticket: Optional[IdentityTicket] = None
    error: Optional[TicketError] = None

    @property
    def succeeded(self) -> bool:
        return self.ticket is not None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def state(self) -> TicketState:
        return TicketState.DONE if self.succeeded else TicketState.FAILED

    def unwrap(self) -> IdentityTicket:
        """Return the ticket or raise the error."""
        if self.error is not None:
            raise self.error
        return self.ticket


@dataclass
class CreatingTicketContext:
    """Passed to the ``on_creating_ticket`` hook before the ticket is frozen.

    ``claims`` and ``properties`` may be modified in place.
    """

    token: ProviderToken
    profile: ProviderProfile
    claims: List[Claim]
    properties: Dict[str, Any]
    scheme_name: str
    config: ProviderConfig

    def add_claim(self, claim_type: str, value: Any):
        self.claims.append(Claim(claim_type, value))

    def remove_claims(self, claim_type: str):
        self.claims[:] = [claim for claim in self.claims if claim.type != claim_type]


CreatingTicketHook = Callable[[CreatingTicketContext], None]


class TicketBuilder:
    """Builds identity tickets from a provider's user-information endpoint.

    Args:
        http_client: Client used for the profile request. When omitted a
            client is created for each call and closed afterwards.
        transport: Transport for per-call clients (ignored when
            ``http_client`` is given); handy for stubbing in tests.
        on_creating_ticket: Optional hook called with a
            ``CreatingTicketContext`` right before the ticket is frozen.

    The builder keeps no per-call state, so one instance can serve
    concurrent calls.
    """

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        on_creating_ticket: Optional[CreatingTicketHook] = None
    ):
        self._http = http_client
        self._transport = transport
        self._on_creating_ticket = on_creating_ticket

    async def build_ticket(
        self,
        token: ProviderToken,
        config: ProviderConfig,
        rules: Sequence[ClaimMappingRule],
        *,
        scheme_name: str,
        properties: Optional[Dict[str, Any]] = None,
        base_claims: Sequence[Tuple[str, Any]] = ()
    ) -> TicketResult:
        """Fetch the user profile and build an identity ticket.

        Args:
            token: Access token from the token endpoint
            config: Provider configuration
            rules: Claim mapping rules, applied in order
            scheme_name: Authentication scheme the ticket is issued for
            properties: Authentication properties, passed through unchanged
            base_claims: Claims already known to the caller; mapped claims
                replace base claims of the same type

        Returns:
            TicketResult holding the ticket or the TicketError
        """
        properties = properties if properties is not None else {}
        try:
            address = self.build_address(token, config)
            response = await self._fetch(address, token, config)
            self._validate(response)
            profile = self._parse(response)
            claims = self._map(profile, rules, base_claims)
        except TicketError as e:
            return TicketResult(error=e)

        if self._on_creating_ticket is not None:
            context = CreatingTicketContext(
                token=token,
                profile=profile,
                claims=claims,
                properties=properties,
                scheme_name=scheme_name,
                config=config
            )
            self._on_creating_ticket(context)
            claims = context.claims

        ticket = IdentityTicket(
            claims=tuple(Claim(*claim) for claim in claims),
            scheme_name=scheme_name,
            properties=properties
        )
        logger.debug("Created %s ticket with %d claims", scheme_name, len(ticket.claims))
        return TicketResult(ticket=ticket)

    def build_address(self, token: ProviderToken, config: ProviderConfig) -> str:
        """Build the user-information URL for ``token``.

        Raises:
            ConfigurationError: If the configuration is invalid (no endpoint,
                no way to send the token) or the access token or a required
                identifier is missing
        """
        stage = TicketState.BUILT.value
        try:
            config.validate()
        except ConfigurationError as e:
            e.stage = stage
            logger.warning("Invalid provider configuration: %s", e)
            raise

        if token is None or not token.is_valid:
            raise ConfigurationError(
                "The token response did not contain an access token",
                missing_config="access_token",
                stage=stage
            )

        params: Dict[str, str] = {}
        if config.access_token_parameter:
            params[config.access_token_parameter] = token.access_token

        for parameter, path in config.identifier_parameters.items():
            params[parameter] = self._extract_identifier(
                token.raw_response, parameter, path, stage
            )

        address = add_query_params(config.user_information_endpoint, params)
        logger.debug(
            "Requesting user information from %s",
            redact_query_params(
                config.user_information_endpoint,
                params,
                (config.access_token_parameter,)
            )
        )
        return address

    def _extract_identifier(
        self,
        raw_response: Mapping[str, Any],
        parameter: str,
        path: str,
        stage: str
    ) -> str:
        try:
            node = ProviderProfile.from_json(dict(raw_response or {})).select(path)
            value = node.to_text() if node.is_scalar else ""
        except (PathNotFoundError, TypeError):
            value = ""

        if not value:
            logger.warning(
                "Token response has no '%s' value for the '%s' parameter",
                path,
                parameter
            )
            raise ConfigurationError(
                f"The token response did not contain the '{path}' value "
                f"required for the '{parameter}' parameter",
                missing_config=path,
                stage=stage
            )
        return value

    async def _fetch(
        self,
        address: str,
        token: ProviderToken,
        config: ProviderConfig
    ) -> httpx.Response:
        headers = {"Accept": "application/json"}
        if config.send_bearer_token:
            headers["Authorization"] = f"Bearer {token.access_token}"

        try:
            if self._http is not None:
                return await self._send(self._http, address, headers, config)
            async with httpx.AsyncClient(transport=self._transport) as client:
                return await self._send(client, address, headers, config)
        except httpx.RequestError as e:
            # Transport failures plus errors raised while reading the body
            # (bad content encoding, redirect loops)
            logger.warning(
                "An error occurred while retrieving the user profile: %s: %s",
                type(e).__name__,
                e
            )
            raise FetchError(
                f"Failed to retrieve the user profile: {e}",
                kind=FetchError.TRANSPORT,
                stage=TicketState.FETCHING.value
            ) from e

    async def _send(
        self,
        client: httpx.AsyncClient,
        address: str,
        headers: Dict[str, str],
        config: ProviderConfig
    ) -> httpx.Response:
        options = {}
        if config.timeout is not None:
            options["timeout"] = config.timeout
        request = client.build_request("GET", address, headers=headers, **options)
        # send() reads the whole body, so it stays available after the client closes
        return await client.send(request)

    def _validate(self, response: httpx.Response):
        if response.is_success:
            return

        body = response.text
        logger.error(
            "An error occurred while retrieving the user profile: the remote server "
            "returned a %s response with the following payload: %s %s.",
            response.status_code,
            dict(response.headers),
            body
        )
        raise FetchError(
            f"An error occurred while retrieving the user profile: "
            f"status {response.status_code}",
            kind=FetchError.PROTOCOL,
            status_code=response.status_code,
            headers=response.headers,
            body=body,
            stage=TicketState.VALIDATING.value
        )

    def _parse(self, response: httpx.Response) -> ProviderProfile:
        body = response.text
        try:
            data = json.loads(body)
        except ValueError as e:
            raise self._parse_error(f"invalid JSON ({e})", body) from e
        except RecursionError as e:
            raise self._parse_error("document is nested too deeply", body) from e

        if not isinstance(data, dict):
            raise self._parse_error(
                f"expected a JSON object, got {type(data).__name__}", body
            )
        try:
            return ProviderProfile(ProfileNode.from_json(data))
        except RecursionError as e:
            raise self._parse_error("document is nested too deeply", body) from e

    def _parse_error(self, reason: str, body: str) -> ParseError:
        raw = truncate(body)
        logger.warning("Could not parse the user profile: %s: %r", reason, raw)
        return ParseError(
            f"Could not parse the user profile: {reason}",
            raw_body=raw,
            stage=TicketState.PARSING.value
        )

    def _map(
        self,
        profile: ProviderProfile,
        rules: Sequence[ClaimMappingRule],
        base_claims: Sequence[Tuple[str, Any]]
    ) -> List[Claim]:
        try:
            mapped = apply_claim_rules(profile, rules)
        except MappingError as e:
            e.stage = TicketState.MAPPING.value
            logger.warning("%s", e)
            raise
        return merge_claims(base_claims, mapped)
