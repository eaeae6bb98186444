"""Unit tests for URL and text helpers."""

from oauth_ticket.utils import (
    MAX_DIAGNOSTIC_LENGTH,
    add_query_params,
    redact_query_params,
    truncate,
)


def test_add_query_params_appends_in_order() -> None:
    url = add_query_params("https://api.weibo.com/2/users/show.json", {"access_token": "t", "uid": "42"})
    assert url == "https://api.weibo.com/2/users/show.json?access_token=t&uid=42"


def test_add_query_params_keeps_existing_query() -> None:
    url = add_query_params("https://api.example.com/me?schema=v1.1", {"access_token": "t"})
    assert url == "https://api.example.com/me?schema=v1.1&access_token=t"


def test_add_query_params_encodes_values() -> None:
    url = add_query_params("https://api.example.com/me", {"access_token": "a b&c"})
    assert url == "https://api.example.com/me?access_token=a+b%26c"


def test_add_query_params_without_params() -> None:
    assert add_query_params("https://api.example.com/me", {}) == "https://api.example.com/me"


def test_redact_query_params() -> None:
    url = redact_query_params(
        "https://api.example.com/me",
        {"access_token": "secret", "uid": "42"},
        ("access_token",),
    )
    assert "secret" not in url
    assert "uid=42" in url


def test_truncate() -> None:
    assert truncate("short") == "short"
    long_text = "x" * (MAX_DIAGNOSTIC_LENGTH + 10)
    truncated = truncate(long_text)
    assert truncated.startswith("x" * MAX_DIAGNOSTIC_LENGTH)
    assert truncated.endswith("[10 more characters]")
    assert truncate("abcdef", limit=3) == "abc... [3 more characters]"
