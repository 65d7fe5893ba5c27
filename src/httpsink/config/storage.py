"""Location of the SQLite database backing the keyed stores."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .env import env_path
from .errors import ConfigurationError

DATABASE_FILENAME = "httpsink.db"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def get_data_dir() -> Path:
    """Return ``$HTTPSINK_DATA_DIR``, else ``$XDG_DATA_HOME/httpsink`` (``~/.local/share``)."""

    override = env_path("HTTPSINK_DATA_DIR")
    if override:
        return Path(override).expanduser().resolve()
    xdg_home = env_path("XDG_DATA_HOME")
    base = Path(xdg_home) if xdg_home else Path.home() / ".local" / "share"
    return (base / "httpsink").expanduser().resolve()


def get_database_config() -> DatabaseConfig:
    uri = env_path("DATABASE_URI")
    if uri:
        return DatabaseConfig(uri=uri)

    data_dir = get_data_dir()
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigurationError(f"Cannot create data directory {data_dir}: {exc}") from exc
    return DatabaseConfig(uri=f"sqlite+pysqlite:///{data_dir / DATABASE_FILENAME}")
