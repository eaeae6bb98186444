"""URL construction utilities."""

from typing import Mapping

from authlib.common.urls import add_params_to_uri

REDACTED = "***"


def add_query_params(endpoint: str, params: Mapping[str, str]) -> str:
    """Append query parameters to an endpoint URL.

    Parameters already present in the endpoint's query string are kept and
    the new ones are appended after them, in mapping order.

    Args:
        endpoint: Base URL, optionally with a query string
        params: Parameters to append

    Returns:
        Full URL with the encoded query string
    """
    if not params:
        return endpoint
    return add_params_to_uri(endpoint, list(params.items()))


def redact_query_params(
    endpoint: str,
    params: Mapping[str, str],
    secret_keys: tuple
) -> str:
    """Build the same URL as ``add_query_params`` with secrets masked.

    Used for log output so access tokens never reach the logs.
    """
    masked = {
        key: REDACTED if key in secret_keys else value
        for key, value in params.items()
    }
    return add_query_params(endpoint, masked)
