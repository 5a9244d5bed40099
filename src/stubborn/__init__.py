"""stubborn: a retry template with pluggable backoff policies and cooperative cancellation."""

from stubborn.config import PRESET_POLICIES, RetryConfig, build_policy
from stubborn.engine import Interrupt, QueueSignal, RetryTemplate
from stubborn.errors import ConfigurationError, StubbornError
from stubborn.model import AttemptState, Lifecycle, Outcome
from stubborn.policy import (
    BackoffPolicy,
    ExponentialBackoffRetryPolicy,
    FixedBackoffRetryPolicy,
    SimpleRetryPolicy,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "RetryTemplate",
    "Interrupt",
    "QueueSignal",
    "AttemptState",
    "Lifecycle",
    "Outcome",
    "BackoffPolicy",
    "SimpleRetryPolicy",
    "FixedBackoffRetryPolicy",
    "ExponentialBackoffRetryPolicy",
    "RetryConfig",
    "PRESET_POLICIES",
    "build_policy",
    "StubbornError",
    "ConfigurationError",
]
