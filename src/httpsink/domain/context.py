"""Per-pass cancellation context."""

from __future__ import annotations

import time
from dataclasses import dataclass

from .errors import PassCancelledError


@dataclass(frozen=True, slots=True)
class PassContext:
    """Deadline shared by every blocking operation of one reconciliation pass.

    ``deadline`` is a ``time.monotonic()`` timestamp; ``None`` means no deadline.
    """

    deadline: float | None = None

    @classmethod
    def with_timeout(cls, seconds: float | None) -> PassContext:
        if seconds is None:
            return cls()
        return cls(deadline=time.monotonic() + seconds)

    def remaining(self) -> float | None:
        if self.deadline is None:
            return None
        return max(self.deadline - time.monotonic(), 0.0)

    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def check(self, operation: str) -> None:
        if self.expired():
            raise PassCancelledError(f"deadline exceeded before {operation}")


BACKGROUND = PassContext()
