"""Backoff policies: count-limited, fixed-interval and exponential."""

from stubborn.policy.base import DEFAULT_LIMIT_MS, DEFAULT_MULTIPLIER, BackoffPolicy
from stubborn.policy.exponential import ExponentialBackoffRetryPolicy
from stubborn.policy.fixed import FixedBackoffRetryPolicy
from stubborn.policy.simple import SimpleRetryPolicy

__all__ = [
    "BackoffPolicy",
    "DEFAULT_LIMIT_MS",
    "DEFAULT_MULTIPLIER",
    "SimpleRetryPolicy",
    "FixedBackoffRetryPolicy",
    "ExponentialBackoffRetryPolicy",
]
