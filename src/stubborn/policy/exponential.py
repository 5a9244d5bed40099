"""Exponential backoff retry policy with a per-wait cap."""

from __future__ import annotations

from dataclasses import dataclass

from stubborn.model.state import AttemptState
from stubborn.policy.base import DEFAULT_LIMIT_MS, DEFAULT_MULTIPLIER


@dataclass
class ExponentialBackoffRetryPolicy:
    """Wait ``initial_interval_ms * multiplier ** (count - 1)``, capped at ``limit_ms``.

    This policy never stops on its own: it retries until the operation
    succeeds or the template is interrupted. A zero ``multiplier`` resolves to
    2.0 and a zero ``limit_ms`` to 30 seconds.
    """

    initial_interval_ms: float
    multiplier: float = 0
    limit_ms: float = 0

    def __post_init__(self) -> None:
        if not self.multiplier:
            self.multiplier = DEFAULT_MULTIPLIER
        if not self.limit_ms:
            self.limit_ms = DEFAULT_LIMIT_MS

    def should_stop(self, state: AttemptState) -> bool:
        return state.is_closed()

    def delay(self, state: AttemptState) -> float:
        """Return the wait in seconds after attempt ``state.count`` (1-indexed).

        Attempt 1 waits initial_interval_ms, attempt 2 initial * multiplier, etc.
        """
        if state.is_closed():
            return 0.0
        try:
            delay_ms = self.initial_interval_ms * (self.multiplier ** (state.count - 1))
        except OverflowError:
            delay_ms = self.limit_ms
        delay_ms = min(delay_ms, self.limit_ms)
        return delay_ms / 1000.0
