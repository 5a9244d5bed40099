"""Event system: bus and event types for the retry lifecycle."""

from stubborn.events.bus import EventBus
from stubborn.events.types import (
    AttemptFailed,
    RetryCancelled,
    RetryClosed,
    RetryOpened,
)

__all__ = [
    "EventBus",
    "AttemptFailed",
    "RetryCancelled",
    "RetryClosed",
    "RetryOpened",
]
