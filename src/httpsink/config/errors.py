"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when configuration values are invalid."""


class ProviderConfigNotFoundError(ConfigurationError):
    """Raised when a referenced provider configuration does not exist."""
