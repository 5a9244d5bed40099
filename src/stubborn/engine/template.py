"""Retry template: runs an operation under a backoff policy until it succeeds or stops."""

from __future__ import annotations

import logging
import time
from typing import Callable, Generic, TypeVar

from stubborn.engine.interrupt import CancellationSignal, InterruptListener
from stubborn.errors import ConfigurationError
from stubborn.events import types as events
from stubborn.events.bus import EventBus
from stubborn.model.outcome import Outcome
from stubborn.model.state import AttemptState
from stubborn.policy.base import BackoffPolicy

T = TypeVar("T")

logger = logging.getLogger(__name__)


class RetryTemplate(Generic[T]):
    """Invokes an operation repeatedly under a backoff policy.

    The loop runs on the caller's thread and sleeps between attempts. When an
    ``interrupt`` signal is configured, a listener thread closes the attempt
    state as soon as the signal fires; the loop sees this at its next
    stop/delay check, so an attempt already running is never cut short.

    Callbacks:
        on_open():              once, before the first attempt
        on_error(error):        once per failed attempt
        on_close(value, error): once, after the loop, with the final result
    """

    def __init__(
        self,
        policy: BackoffPolicy | None = None,
        *,
        on_open: Callable[[], None] | None = None,
        on_error: Callable[[Exception], None] | None = None,
        on_close: Callable[[T | None, Exception | None], None] | None = None,
        interrupt: CancellationSignal | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.policy = policy
        self.on_open = on_open
        self.on_error = on_error
        self.on_close = on_close
        self.interrupt = interrupt
        self.event_bus = event_bus or EventBus()
        self._state: AttemptState | None = None

    @property
    def last_state(self) -> AttemptState | None:
        """Attempt state of the most recent execute() call."""
        return self._state

    def execute(self, operation: Callable[[], T]) -> Outcome[T]:
        """Call *operation* until it returns, the policy stops, or the interrupt fires.

        Any ``Exception`` raised by *operation* counts as a failed attempt and
        is retried while the policy allows. The last error is returned on the
        outcome unchanged, never raised.
        """
        if self.policy is None:
            raise ConfigurationError("RetryTemplate.execute() requires a backoff policy")
        policy = self.policy

        state = AttemptState()
        self._state = state
        value: T | None = None
        error: Exception | None = None

        if self.on_open is not None:
            self.on_open()
        self.event_bus.emit(events.RetryOpened())

        listener = None
        if self.interrupt is not None:
            listener = InterruptListener(self.interrupt, state).start()

        try:
            while not policy.should_stop(state):
                state.count += 1
                logger.debug("Attempt %d starting", state.count)
                try:
                    value = operation()
                except Exception as exc:
                    value, error = None, exc
                else:
                    error = None
                    if state.count > 1:
                        logger.info("Succeeded on attempt %d", state.count)
                    break

                state.record_failure(error)
                if self.on_error is not None:
                    self.on_error(error)

                delay = policy.delay(state)
                logger.warning(
                    "Attempt %d failed: %s (next wait %.3fs)", state.count, error, delay
                )
                self.event_bus.emit(
                    events.AttemptFailed(attempt=state.count, error=error, delay=delay)
                )
                if delay > 0:
                    time.sleep(delay)
        finally:
            if listener is not None:
                listener.stop()

        cancelled = state.is_closed()
        if cancelled:
            logger.info("Retry loop cancelled after %d attempt(s)", state.count)
            self.event_bus.emit(events.RetryCancelled(attempts=state.count))

        if self.on_close is not None:
            self.on_close(value, error)

        outcome = Outcome(value=value, error=error, attempts=state.count, cancelled=cancelled)
        self.event_bus.emit(events.RetryClosed(outcome=outcome))
        return outcome
