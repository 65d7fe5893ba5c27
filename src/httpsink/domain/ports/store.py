"""Ports for the keyed stores that back value lookups and response sinks."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ValueLookup(Protocol):
    """Read access to one key of a named entry in a namespace.

    ``get`` returns ``None`` when the entry or the key does not exist and raises
    ``LookupFailedError`` when the store cannot be read.
    """

    def get(self, name: str, namespace: str, key: str) -> str | None: ...


@runtime_checkable
class KeyedStore(ValueLookup, Protocol):
    """Writable keyed store used as a response sink.

    ``set`` and ``delete`` raise ``StoreWriteFailedError`` on failure. ``delete``
    of a missing key is a no-op.
    """

    def set(self, name: str, namespace: str, key: str, value: str) -> None: ...

    def delete(self, name: str, namespace: str, key: str) -> None: ...


__all__ = ["KeyedStore", "ValueLookup"]
