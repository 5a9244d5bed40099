"""Simple synchronous event bus for retry lifecycle events."""

from typing import Any, Callable


class EventBus:
    """Synchronous publish-subscribe event bus.

    A listener registered without event types receives every event. Events are
    dispatched on the emitting thread, in registration order.
    """

    def __init__(self) -> None:
        self._listeners: list[tuple[tuple[type, ...], Callable[[Any], None]]] = []

    def subscribe(self, callback: Callable[[Any], None], *event_types: type) -> None:
        """Register *callback* for the given event types, or for all events if none."""
        self._listeners.append((event_types, callback))

    def emit(self, event: Any) -> None:
        """Dispatch an event to all matching listeners."""
        for event_types, cb in self._listeners:
            if not event_types or isinstance(event, event_types):
                cb(event)
