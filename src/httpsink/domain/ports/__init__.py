"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import ContentFetcher
from .store import KeyedStore, ValueLookup

__all__ = ["ContentFetcher", "KeyedStore", "ValueLookup"]
