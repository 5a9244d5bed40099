"""Attempt state shared between the retry loop and the interrupt listener."""

from __future__ import annotations

import threading
from enum import Enum


class Lifecycle(Enum):
    """Lifecycle of a single execute() call."""

    OPEN = "open"
    CLOSED = "closed"


class AttemptState:
    """Mutable record of one execute() call: attempt count, last error, lifecycle.

    Only ``lifecycle`` is touched by both the retry loop and the interrupt
    listener, so every read and write of it goes through the lock. ``count``
    and ``last_error`` have a single writer (the loop) and are left unguarded;
    read ``last_error`` only after execute() has returned.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._lifecycle = Lifecycle.OPEN
        self.count = 0
        self.last_error: Exception | None = None

    # --- lifecycle ------------------------------------------------------------

    @property
    def lifecycle(self) -> Lifecycle:
        with self._lock:
            return self._lifecycle

    def is_closed(self) -> bool:
        """True once the state has been closed by a cancellation signal."""
        with self._lock:
            return self._lifecycle is Lifecycle.CLOSED

    def close(self) -> None:
        """Mark the state closed. Closing twice is a no-op."""
        with self._lock:
            self._lifecycle = Lifecycle.CLOSED

    # --- attempts -------------------------------------------------------------

    def record_failure(self, error: Exception) -> None:
        """Remember the error raised by the latest attempt."""
        self.last_error = error

    def __repr__(self) -> str:
        return (
            f"AttemptState(count={self.count}, lifecycle={self.lifecycle.value}, "
            f"last_error={self.last_error!r})"
        )
