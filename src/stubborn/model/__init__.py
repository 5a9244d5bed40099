"""Data model: attempt state and execution outcome."""

from stubborn.model.outcome import Outcome
from stubborn.model.state import AttemptState, Lifecycle

__all__ = [
    "AttemptState",
    "Lifecycle",
    "Outcome",
]
