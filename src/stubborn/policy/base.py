"""Backoff policy protocol and shared defaults."""

from __future__ import annotations

from typing import Protocol

from stubborn.model.state import AttemptState

DEFAULT_LIMIT_MS = 30000
DEFAULT_MULTIPLIER = 2.0


class BackoffPolicy(Protocol):
    """Decides whether the retry loop should stop and how long it should wait.

    Both methods are evaluated against the live attempt state. A closed state
    always wins: ``should_stop`` returns True and ``delay`` returns 0.0.
    """

    def should_stop(self, state: AttemptState) -> bool: ...

    def delay(self, state: AttemptState) -> float:
        """Seconds to sleep before the next attempt."""
        ...
