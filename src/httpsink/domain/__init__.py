"""Reconciliation core for HttpRequest resources."""

from __future__ import annotations

from .context import BACKGROUND, PassContext
from .digest import compute_digest, digests_equal
from .errors import (
    FormatInvalidError,
    InvalidURLError,
    LookupFailedError,
    PassCancelledError,
    ReconcileError,
    StoreWriteFailedError,
    TransportError,
    UnexpectedStatusError,
)
from .reconciler import HttpRequestReconciler
from .request import ResolvedRequest, SkippedValue, build_request
from .resolve import apply_format, resolve_named_value

__all__ = [
    "BACKGROUND",
    "FormatInvalidError",
    "HttpRequestReconciler",
    "InvalidURLError",
    "LookupFailedError",
    "PassCancelledError",
    "PassContext",
    "ReconcileError",
    "ResolvedRequest",
    "SkippedValue",
    "StoreWriteFailedError",
    "TransportError",
    "UnexpectedStatusError",
    "apply_format",
    "build_request",
    "compute_digest",
    "digests_equal",
    "resolve_named_value",
]
