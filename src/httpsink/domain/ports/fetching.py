"""Ports for fetching remote content."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from httpsink.domain.context import PassContext
    from httpsink.domain.request import ResolvedRequest


@runtime_checkable
class ContentFetcher(Protocol):
    """Callable port that executes one resolved request and returns its body."""

    def __call__(self, request: ResolvedRequest, *, context: PassContext) -> bytes: ...


__all__ = ["ContentFetcher"]
