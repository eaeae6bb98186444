"""Configuration for OAuth ticket creation."""

from .settings import ProviderConfig

__all__ = ["ProviderConfig"]
