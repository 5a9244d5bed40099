"""Outcome model: the value/error pair produced by RetryTemplate.execute()."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of an execute() call.

    ``error`` is whatever the last attempted operation raised, or ``None`` if it
    returned. When the policy stopped before the first attempt both ``value``
    and ``error`` are ``None`` and ``attempts`` is 0.

    Unpacks like a pair: ``value, error = template.execute(op)``.
    """

    value: T | None = None
    error: Exception | None = None
    attempts: int = 0
    cancelled: bool = False

    @property
    def succeeded(self) -> bool:
        """True if at least one attempt ran and the last one did not fail."""
        return self.attempts > 0 and self.error is None

    def unwrap(self) -> T | None:
        """Return the value, re-raising the last error if there is one."""
        if self.error is not None:
            raise self.error
        return self.value

    def __iter__(self) -> Iterator[Any]:
        yield self.value
        yield self.error
