"""Event types emitted by RetryTemplate.execute()."""

from dataclasses import dataclass

from stubborn.model.outcome import Outcome


@dataclass(frozen=True)
class RetryOpened:
    pass


@dataclass(frozen=True)
class AttemptFailed:
    attempt: int
    error: Exception
    delay: float


@dataclass(frozen=True)
class RetryCancelled:
    attempts: int


@dataclass(frozen=True)
class RetryClosed:
    outcome: Outcome
