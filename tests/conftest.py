"""Shared fixtures for ticket-creation tests."""

from typing import List

import httpx
import pytest

from oauth_ticket import ClaimMappingRule, ProviderConfig, ProviderToken

ENDPOINT = "https://api.example.com/me"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it handled."""

    def __init__(self, handler):
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request):
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def recording_transport():
    """Factory wrapping a request handler in a RecordingTransport."""
    return RecordingTransport


@pytest.fixture
def token() -> ProviderToken:
    return ProviderToken(access_token="tok123", raw_response={"uid": "42"})


@pytest.fixture
def config() -> ProviderConfig:
    return ProviderConfig(
        user_information_endpoint=ENDPOINT,
        scopes=("email",),
        identifier_parameters={"uid": "uid"},
    )


@pytest.fixture
def name_rules() -> List[ClaimMappingRule]:
    return [ClaimMappingRule(claim_type="name", source="name", optional=False)]
