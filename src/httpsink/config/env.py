"""Environment variable loaders for configuration."""

from __future__ import annotations

import os

from .errors import ConfigurationError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def env_flag(name: str) -> bool | None:
    """Return a boolean environment flag, or ``None`` when it is unset or blank."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean value for {name}: {value!r}")


def env_path(name: str) -> str | None:
    """Return a stripped path-like environment value, or ``None`` when blank."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()
