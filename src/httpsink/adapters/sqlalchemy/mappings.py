"""SQLAlchemy table metadata for keyed store entries."""

from __future__ import annotations

from sqlalchemy import Column, Enum, Integer, MetaData, String, Table, Text, UniqueConstraint

from httpsink.domain.model import SinkKind

metadata = MetaData()

store_entry_table = Table(
    "store_entry",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("kind", Enum(SinkKind, native_enum=False, length=32), nullable=False),
    Column("namespace", String(253), nullable=False),
    Column("name", String(253), nullable=False),
    Column("key", String(253), nullable=False),
    Column("value", Text, nullable=False),
    UniqueConstraint("kind", "namespace", "name", "key", name="uq_store_entry_address"),
)
