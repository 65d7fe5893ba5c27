"""SQLAlchemy-backed keyed stores and engine lifecycle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from httpsink.config.storage import get_database_config
from httpsink.domain.model import SinkKind

from .mappings import metadata, store_entry_table
from .store import SqlAlchemyKeyedStore

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


class StartupError(RuntimeError):
    """Raised when the SQLAlchemy adapter is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    _engine: Engine | None = None
    _session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine | None:
        return self._engine

    @engine.setter
    def engine(self, value: Engine | None) -> None:
        self._session_factory = None
        self._engine = value

    @property
    def session_factory(self) -> sessionmaker[Session]:
        if self._engine is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call httpsink.adapters.sqlalchemy."
                "startup() before requesting a store."
            )
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        return self._session_factory


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Initialise the SQLAlchemy engine, tables, and session factory."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    resolved_engine = engine or create_engine(
        database_uri or get_database_config().uri, future=True
    )
    metadata.create_all(resolved_engine, checkfirst=True)
    _STATE.engine = resolved_engine


def is_started() -> bool:
    """Return whether the adapter has been initialised."""

    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None


def build_stores() -> dict[SinkKind, SqlAlchemyKeyedStore]:
    """Return one keyed store per sink kind sharing the adapter's session factory."""

    session_factory = _STATE.session_factory
    return {kind: SqlAlchemyKeyedStore(kind, session_factory) for kind in SinkKind}


__all__ = [
    "SqlAlchemyKeyedStore",
    "StartupError",
    "build_stores",
    "is_started",
    "shutdown",
    "startup",
    "store_entry_table",
]
