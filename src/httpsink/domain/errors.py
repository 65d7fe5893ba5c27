"""Errors raised during a reconciliation pass."""

from __future__ import annotations


class ReconcileError(RuntimeError):
    """Base class for failures of a reconciliation pass."""


class InvalidURLError(ReconcileError):
    """Raised when the request URL is not an absolute URI."""


class LookupFailedError(ReconcileError):
    """Raised when a keyed store cannot be read."""


class FormatInvalidError(ReconcileError):
    """Raised when a format template does not hold exactly one placeholder."""


class TransportError(ReconcileError):
    """Raised for network-level failures (DNS, TLS, refused connections, timeouts)."""


class UnexpectedStatusError(ReconcileError):
    """Raised when the remote endpoint answers with a non-2xx status."""

    def __init__(self, status_code: int, *, url: str) -> None:
        super().__init__(f"unexpected status code {status_code} from {url}")
        self.status_code = status_code
        self.url = url


class StoreWriteFailedError(ReconcileError):
    """Raised when a keyed store rejects a write or delete."""


class PassCancelledError(ReconcileError):
    """Raised when the deadline of a reconciliation pass expires."""


__all__ = [
    "FormatInvalidError",
    "InvalidURLError",
    "LookupFailedError",
    "PassCancelledError",
    "ReconcileError",
    "StoreWriteFailedError",
    "TransportError",
    "UnexpectedStatusError",
]
