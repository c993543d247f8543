from __future__ import annotations
"""Cooperative cancellation with an optional overall deadline."""

import threading
import time

from .errors import OperationCancelledError


class CancellationToken:
    """Shared cancel flag plus deadline handed to every capability call.

    Capabilities call `raise_if_cancelled()` before starting work and use
    `bound_timeout()` to clamp their own per-call timeout to what is left of
    the deadline.
    """

    def __init__(self, deadline_seconds: float | None = None) -> None:
        self._event = threading.Event()
        self._deadline = time.monotonic() + deadline_seconds if deadline_seconds is not None else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or `None` when unbounded."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0.0

    def raise_if_cancelled(self, operation: str = "operation") -> None:
        if self.cancelled:
            raise OperationCancelledError(f"{operation} was cancelled")
        if self.expired():
            raise OperationCancelledError(f"{operation} exceeded the request deadline")

    def bound_timeout(self, timeout_seconds: float) -> float:
        """Return the per-call timeout clamped to the remaining deadline."""
        remaining = self.remaining()
        if remaining is None:
            return timeout_seconds
        return min(timeout_seconds, remaining)
