"""Cancellation signals and the one-shot listener that closes an attempt state."""

from __future__ import annotations

import logging
import queue
import threading
from typing import Any, Protocol

from stubborn.model.state import AttemptState

logger = logging.getLogger(__name__)

# How often the listener checks whether execute() has already returned.
LISTEN_INTERVAL = 0.05


class CancellationSignal(Protocol):
    """Anything that can be waited on: ``wait`` returns True once signalled.

    :class:`threading.Event` satisfies this protocol as-is.
    """

    def wait(self, timeout: float | None = None) -> bool: ...


class Interrupt:
    """A one-shot cancellation signal for a running RetryTemplate.

    Firing it stops the template from starting another attempt; the attempt
    currently in flight is left to finish.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    @property
    def fired(self) -> bool:
        return self._event.is_set()

    def fire(self) -> None:
        self._event.set()

    def wait(self, timeout: float | None = None) -> bool:
        return self._event.wait(timeout)


class QueueSignal:
    """Treats each item put on a queue as one cancellation signal.

    Any item counts, including a ``None`` sentinel put by a producer that is
    shutting down. Each item is consumed and signals exactly once, so a signal
    spent on one execute() call does not cancel the next.
    """

    def __init__(self, source: queue.Queue[Any] | None = None) -> None:
        self.source: queue.Queue[Any] = source or queue.Queue()

    def send(self, item: Any = True) -> None:
        """Convenience method for the producing side."""
        self.source.put(item)

    def wait(self, timeout: float | None = None) -> bool:
        try:
            self.source.get(timeout=timeout)
        except queue.Empty:
            return False
        return True


class InterruptListener:
    """Background thread that closes *state* when *signal* fires.

    Reacts to at most one signal and then exits. A signal that has already
    fired when :meth:`start` is called closes the state immediately, without
    a thread. :meth:`stop` ends the listener without closing the state; after
    it returns the state is no longer touched.
    """

    def __init__(self, signal: CancellationSignal, state: AttemptState) -> None:
        self._signal = signal
        self._state = state
        self._done = threading.Event()
        self._thread = threading.Thread(
            target=self._listen, name="stubborn-interrupt", daemon=True
        )

    def start(self) -> InterruptListener:
        if self._signal.wait(0):
            self._close()
            return self
        logger.debug("Starting interrupt listener")
        self._thread.start()
        return self

    def stop(self) -> None:
        self._done.set()
        if self._thread.is_alive():
            self._thread.join()
        logger.debug("Interrupt listener stopped")

    def _listen(self) -> None:
        while not self._done.is_set():
            if self._signal.wait(LISTEN_INTERVAL):
                self._close()
                return

    def _close(self) -> None:
        self._state.close()
        logger.info("Interrupt received; no further attempts will start")
