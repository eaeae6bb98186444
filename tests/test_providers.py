"""Unit tests for the provider presets."""

import httpx
import pytest

from oauth_ticket import (
    ClaimMappingRule,
    ClaimTypes,
    ConfigurationError,
    MappingError,
    ProviderToken,
    TicketBuilder,
    get_provider,
    github,
    google,
    microsoft,
    paypal,
    weibo,
)
from oauth_ticket.providers import PROVIDERS

WEIBO_USER = {
    "id": 1404376560,
    "idstr": "1404376560",
    "screen_name": "zaku",
    "name": "zaku",
    "location": "北京 朝阳区",
    "gender": "m",
    "profile_image_url": "http://tp1.sinaimg.cn/1404376560/50/0/1",
    "avatar_large": "http://tp1.sinaimg.cn/1404376560/180/0/1",
    "avatar_hd": None,
    "verified": False,
}

PAYPAL_USER = {
    "user_id": "https://www.paypal.com/webapps/auth/identity/user/mWq6_1sU85v5EG9yHdPxJRrhGHrnMJ-1PQKtX6pcsmA",
    "name": "identity test",
    "given_name": "identity",
    "family_name": "test",
    "payer_id": "WDJJHEBZ4X2LY",
    "verified_account": "true",
    "emails": [
        {"value": "old@example.com", "primary": False, "confirmed": True},
        {"value": "user1@example.com", "primary": True, "confirmed": True},
    ],
}


def test_registry_lists_all_presets() -> None:
    assert set(PROVIDERS) == {"github", "google", "microsoft", "paypal", "weibo"}


def test_get_provider_is_case_insensitive() -> None:
    assert get_provider("Weibo").scheme_name == "Weibo"
    assert get_provider("paypal", sandbox=True).config.user_information_endpoint.startswith(
        "https://api.sandbox.paypal.com/"
    )


def test_get_provider_unknown_name() -> None:
    with pytest.raises(ConfigurationError, match="Unknown identity provider"):
        get_provider("myspace")


@pytest.mark.parametrize("factory", [weibo, paypal, google, github, microsoft])
def test_presets_have_valid_config(factory) -> None:
    definition = factory()
    definition.config.validate()
    assert definition.rules
    assert definition.rules[0].claim_type == ClaimTypes.NAME_IDENTIFIER
    assert not definition.rules[0].optional


def test_weibo_scope_is_comma_separated() -> None:
    definition = weibo(scopes=["email", "follow_app_official_microblog"])
    assert definition.config.format_scope() == "email,follow_app_official_microblog"


def test_factory_overrides_do_not_touch_the_preset() -> None:
    changed = weibo(timeout=3.0)
    assert changed.config.timeout == 3.0
    assert weibo().config.timeout is None


async def test_weibo_ticket(recording_transport) -> None:
    """Verify the Weibo preset sends uid and access_token and maps the profile."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=WEIBO_USER)

    transport = recording_transport(handler)
    token = ProviderToken.from_response({
        "access_token": "2.00abc",
        "expires_in": "157679999",
        "uid": "1404376560",
    })

    result = await weibo().build_ticket(TicketBuilder(transport=transport), token)

    request = transport.requests[0]
    assert request.url.host == "api.weibo.com"
    assert request.url.path == "/2/users/show.json"
    assert request.url.params["access_token"] == "2.00abc"
    assert request.url.params["uid"] == "1404376560"

    ticket = result.unwrap()
    assert ticket.scheme_name == "Weibo"
    assert list(ticket.claims) == [
        (ClaimTypes.NAME_IDENTIFIER, "1404376560"),
        (ClaimTypes.NAME, "zaku"),
        (ClaimTypes.GENDER, "m"),
        ("urn:weibo:screen_name", "zaku"),
        ("urn:weibo:location", "北京 朝阳区"),
        ("urn:weibo:profile_image_url", "http://tp1.sinaimg.cn/1404376560/50/0/1"),
        ("urn:weibo:avatar_large", "http://tp1.sinaimg.cn/1404376560/180/0/1"),
    ]


async def test_weibo_without_uid_is_configuration_error(recording_transport) -> None:
    transport = recording_transport(lambda request: httpx.Response(200, json=WEIBO_USER))
    token = ProviderToken.from_response({"access_token": "2.00abc"})

    result = await weibo().build_ticket(TicketBuilder(transport=transport), token)

    assert isinstance(result.error, ConfigurationError)
    assert transport.requests == []


async def test_paypal_ticket(recording_transport) -> None:
    """Verify the PayPal preset uses a bearer token and picks the primary e-mail."""
    transport = recording_transport(lambda request: httpx.Response(200, json=PAYPAL_USER))
    token = ProviderToken.from_response({"access_token": "A21AA", "token_type": "Bearer"})

    result = await paypal().build_ticket(TicketBuilder(transport=transport), token)

    request = transport.requests[0]
    assert request.headers["Authorization"] == "Bearer A21AA"
    assert request.url.params["schema"] == "paypalv1.1"
    assert "access_token" not in request.url.params

    ticket = result.unwrap()
    assert ticket.subject == "mWq6_1sU85v5EG9yHdPxJRrhGHrnMJ-1PQKtX6pcsmA"
    assert ticket.find_first(ClaimTypes.EMAIL).value == "user1@example.com"
    assert ticket.find_first(ClaimTypes.GIVEN_NAME).value == "identity"
    assert ticket.find_first("urn:paypal:payer_id").value == "WDJJHEBZ4X2LY"


async def test_paypal_missing_user_id_is_mapping_error(recording_transport) -> None:
    transport = recording_transport(lambda request: httpx.Response(200, json={"name": "x"}))

    result = await paypal().build_ticket(
        TicketBuilder(transport=transport), ProviderToken(access_token="A21AA")
    )

    assert isinstance(result.error, MappingError)
    assert result.error.claim_type == ClaimTypes.NAME_IDENTIFIER


async def test_github_name_falls_back_to_login(recording_transport) -> None:
    transport = recording_transport(
        lambda request: httpx.Response(200, json={"id": 583231, "login": "octocat", "name": None})
    )

    result = await github().build_ticket(
        TicketBuilder(transport=transport), ProviderToken(access_token="gho_x")
    )

    ticket = result.unwrap()
    assert ticket.subject == "583231"
    assert ticket.name == "octocat"
    assert ticket.find_first(ClaimTypes.EMAIL) is None


async def test_microsoft_email_falls_back_to_principal_name(recording_transport) -> None:
    transport = recording_transport(lambda request: httpx.Response(200, json={
        "id": "87d349ed",
        "displayName": "Megan Bowen",
        "mail": None,
        "userPrincipalName": "MeganB@contoso.com",
    }))

    result = await microsoft().build_ticket(
        TicketBuilder(transport=transport), ProviderToken(access_token="eyJ0")
    )

    ticket = result.unwrap()
    assert ticket.find_first(ClaimTypes.EMAIL).value == "MeganB@contoso.com"
    assert ticket.name == "Megan Bowen"


async def test_google_ticket_with_base_claims(recording_transport) -> None:
    transport = recording_transport(lambda request: httpx.Response(200, json={
        "id": "1057",
        "email": "ada@example.com",
        "verified_email": True,
        "name": "Ada Lovelace",
    }))

    result = await google().build_ticket(
        TicketBuilder(transport=transport),
        ProviderToken(access_token="ya29"),
        base_claims=[(ClaimTypes.EMAIL, "stale@example.com"), ("amr", "oauth")],
        scheme_name="GoogleWorkspace",
    )

    ticket = result.unwrap()
    assert ticket.scheme_name == "GoogleWorkspace"
    assert ticket.find_all(ClaimTypes.EMAIL) == [(ClaimTypes.EMAIL, "ada@example.com")]
    assert ticket.claims[0] == ("amr", "oauth")
    assert ticket.has_claim(ClaimTypes.EMAIL_VERIFIED, "true")


def test_with_rules_appends() -> None:
    extra = ClaimMappingRule("urn:weibo:verified", "verified", optional=True)
    definition = weibo().with_rules(extra)
    assert definition.rules[-1] is extra
    assert len(definition.rules) == len(weibo().rules) + 1


def test_definition_from_env(monkeypatch) -> None:
    monkeypatch.setenv("WEIBO_TIMEOUT", "4")
    monkeypatch.setenv("WEIBO_SCOPES", "email,direct_messages_read")

    definition = weibo().from_env()

    assert definition.config.timeout == 4.0
    assert definition.config.format_scope() == "email,direct_messages_read"
    assert definition.config.identifier_parameters == {"uid": "uid"}


def test_token_from_response() -> None:
    token = ProviderToken.from_response({
        "access_token": "abc",
        "token_type": "bearer",
        "refresh_token": "r",
        "expires_in": "3600",
        "uid": "42",
    })
    assert token.access_token == "abc"
    assert token.expires_in == 3600
    assert token.raw_response["uid"] == "42"
    assert token.is_valid
    assert "abc" not in repr(token)
    assert not ProviderToken.from_response({}).is_valid
