"""Count-limited retry policy."""

from __future__ import annotations

from dataclasses import dataclass

from stubborn.model.state import AttemptState


@dataclass
class SimpleRetryPolicy:
    """Retry up to ``max_attempts`` times with no wait in between.

    ``max_attempts=0`` stops before the first attempt.
    """

    max_attempts: int

    def should_stop(self, state: AttemptState) -> bool:
        if state.is_closed():
            return True
        return state.count >= self.max_attempts

    def delay(self, state: AttemptState) -> float:
        return 0.0
