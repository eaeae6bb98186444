"""Utility functions for OAuth ticket creation."""

from .text import truncate, MAX_DIAGNOSTIC_LENGTH
from .urls import add_query_params, redact_query_params

__all__ = [
    "truncate",
    "MAX_DIAGNOSTIC_LENGTH",
    "add_query_params",
    "redact_query_params",
]
