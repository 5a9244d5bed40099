"""Fixed-interval retry policy with a cumulative wait ceiling."""

from __future__ import annotations

from dataclasses import dataclass

from stubborn.model.state import AttemptState
from stubborn.policy.base import DEFAULT_LIMIT_MS


def _to_us(ms: float) -> int:
    """Milliseconds as whole microseconds, so ceiling checks compare exactly."""
    return round(ms * 1000)


@dataclass
class FixedBackoffRetryPolicy:
    """Wait ``backoff_period_ms`` between attempts.

    Stops once the total wait implied by the attempt count
    (``backoff_period_ms * count``) reaches ``limit_ms``. A zero ``limit_ms``
    resolves to 30 seconds.
    """

    backoff_period_ms: float
    limit_ms: float = 0

    def __post_init__(self) -> None:
        if not self.limit_ms:
            self.limit_ms = DEFAULT_LIMIT_MS

    def should_stop(self, state: AttemptState) -> bool:
        if state.is_closed():
            return True
        return _to_us(self.backoff_period_ms) * state.count >= _to_us(self.limit_ms)

    def delay(self, state: AttemptState) -> float:
        if state.is_closed():
            return 0.0
        return self.backoff_period_ms / 1000.0
