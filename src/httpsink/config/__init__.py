"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, env_path
from .errors import ConfigurationError, ProviderConfigNotFoundError
from .logging import configure_logging
from .provider import ProviderConfig, ProviderConfigRegistry, load_provider_configs
from .storage import DatabaseConfig, get_data_dir, get_database_config
from .transport import DEFAULT_TRANSPORT, TransportConfig

__all__ = [
    "DEFAULT_TRANSPORT",
    "ConfigurationError",
    "DatabaseConfig",
    "ProviderConfig",
    "ProviderConfigNotFoundError",
    "ProviderConfigRegistry",
    "TransportConfig",
    "configure_logging",
    "env_flag",
    "env_path",
    "get_data_dir",
    "get_database_config",
    "load_provider_configs",
]
