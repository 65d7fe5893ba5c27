from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from httpsink.adapters import sqlalchemy as sqlalchemy_adapter
from httpsink.adapters.memory import InMemoryKeyedStore
from httpsink.domain.model import HttpRequest, RequestSpec, SinkKind, SinkRef

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from sqlalchemy.engine import Engine

    from httpsink.domain.model import NamedValue


@pytest.fixture
def config_map_store() -> InMemoryKeyedStore:
    return InMemoryKeyedStore()


@pytest.fixture
def secret_store() -> InMemoryKeyedStore:
    return InMemoryKeyedStore()


@pytest.fixture
def stores(
    config_map_store: InMemoryKeyedStore,
    secret_store: InMemoryKeyedStore,
) -> dict[SinkKind, InMemoryKeyedStore]:
    return {SinkKind.CONFIG_MAP: config_map_store, SinkKind.SECRET: secret_store}


@pytest.fixture
def sink() -> SinkRef:
    return SinkRef(name="cm1", namespace="ns", key="data")


@pytest.fixture
def make_resource(sink: SinkRef) -> Callable[..., HttpRequest]:
    def factory(
        *,
        url: str = "https://example.com/a",
        method: str | None = None,
        params: tuple[NamedValue, ...] = (),
        headers: tuple[NamedValue, ...] = (),
    ) -> HttpRequest:
        spec = RequestSpec(url=url, method=method, params=params, headers=headers, sink=sink)
        return HttpRequest(name="sample", spec=spec)

    return factory


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    sqlalchemy_adapter.startup(engine=engine, force=True)
    try:
        yield engine
    finally:
        sqlalchemy_adapter.shutdown()
