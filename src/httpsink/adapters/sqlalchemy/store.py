"""Keyed store backed by a SQLAlchemy table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from httpsink.domain.errors import LookupFailedError, StoreWriteFailedError

from .mappings import store_entry_table

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement
    from sqlalchemy.orm import Session, sessionmaker

    from httpsink.domain.model import SinkKind


class SqlAlchemyKeyedStore:
    """Keyed store for one sink kind; every call runs in its own session."""

    def __init__(self, kind: SinkKind, session_factory: sessionmaker[Session]) -> None:
        self.kind = kind
        self.session_factory = session_factory

    def get(self, name: str, namespace: str, key: str) -> str | None:
        stmt = select(store_entry_table.c.value).where(*self._address(name, namespace, key))
        try:
            with self.session_factory() as session:
                return session.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise LookupFailedError(
                f"cannot read {self.kind} {namespace}/{name}[{key}]: {exc}"
            ) from exc

    def set(self, name: str, namespace: str, key: str, value: str) -> None:
        address = self._address(name, namespace, key)
        try:
            with self.session_factory.begin() as session:
                result = session.execute(
                    update(store_entry_table).where(*address).values(value=value)
                )
                if result.rowcount == 0:
                    session.execute(
                        insert(store_entry_table).values(
                            kind=self.kind,
                            namespace=namespace,
                            name=name,
                            key=key,
                            value=value,
                        )
                    )
        except SQLAlchemyError as exc:
            raise StoreWriteFailedError(
                f"cannot write {self.kind} {namespace}/{name}[{key}]: {exc}"
            ) from exc

    def delete(self, name: str, namespace: str, key: str) -> None:
        try:
            with self.session_factory.begin() as session:
                session.execute(
                    delete(store_entry_table).where(*self._address(name, namespace, key))
                )
        except SQLAlchemyError as exc:
            raise StoreWriteFailedError(
                f"cannot delete {self.kind} {namespace}/{name}[{key}]: {exc}"
            ) from exc

    def _address(self, name: str, namespace: str, key: str) -> tuple[ColumnElement[bool], ...]:
        columns = store_entry_table.c
        return (
            columns.kind == self.kind,
            columns.namespace == namespace,
            columns.name == name,
            columns.key == key,
        )
