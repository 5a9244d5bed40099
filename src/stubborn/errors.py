"""Error hierarchy for stubborn.

Errors raised by caller-supplied operations are never wrapped in these; they
travel back to the caller verbatim on the :class:`~stubborn.model.outcome.Outcome`.
"""
from __future__ import annotations


class StubbornError(Exception):
    """Base error for all stubborn errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ConfigurationError(StubbornError):
    """A template or policy was configured incorrectly (e.g. no policy set)."""


# ---------------------------------------------------------------------------
# Failures produced by the bundled operations
# ---------------------------------------------------------------------------


class AttemptError(StubbornError):
    """A single attempt of a bundled operation failed."""

    def __init__(
        self,
        message: str,
        *,
        attempt: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.attempt = attempt


class CommandFailedError(AttemptError):
    """A shell command exited with a non-zero status."""

    def __init__(self, message: str, *, returncode: int, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.returncode = returncode


class ProbeFailedError(AttemptError):
    """An HTTP probe returned an unexpected status or could not connect."""

    def __init__(self, message: str, *, status_code: int | None = None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.status_code = status_code
