"""Execution engine: retry template and interrupt handling."""

from stubborn.engine.interrupt import (
    CancellationSignal,
    Interrupt,
    InterruptListener,
    QueueSignal,
)
from stubborn.engine.template import RetryTemplate

__all__ = [
    "RetryTemplate",
    "CancellationSignal",
    "Interrupt",
    "InterruptListener",
    "QueueSignal",
]
