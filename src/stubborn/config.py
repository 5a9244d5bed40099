"""Retry configuration: named presets and policy construction from plain values."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, Callable

from stubborn.errors import ConfigurationError
from stubborn.policy import (
    BackoffPolicy,
    ExponentialBackoffRetryPolicy,
    FixedBackoffRetryPolicy,
    SimpleRetryPolicy,
)

POLICY_KINDS = ("simple", "fixed", "exponential")


@dataclass(frozen=True)
class RetryConfig:
    """Flat description of a policy, as read from CLI options or attributes.

    Only the fields relevant to ``policy`` are used. ``multiplier`` and
    ``limit_ms`` left at 0 take the policy's own defaults.
    """

    policy: str = "simple"
    max_attempts: int = 3
    backoff_period_ms: float = 1000
    initial_interval_ms: float = 500
    multiplier: float = 0
    limit_ms: float = 0

    def __post_init__(self) -> None:
        if self.policy not in POLICY_KINDS:
            raise ConfigurationError(
                f"Unknown policy {self.policy!r}; expected one of {', '.join(POLICY_KINDS)}"
            )

    @classmethod
    def from_mapping(cls, attrs: Mapping[str, Any]) -> RetryConfig:
        """Build a config from string-ish values.

        Missing or unparsable numbers fall back to the field default; an
        unknown policy kind is an error.
        """
        values: dict[str, Any] = {}
        for f in fields(cls):
            raw = attrs.get(f.name)
            if raw is None or raw == "":
                continue
            if f.name == "policy":
                values["policy"] = str(raw).strip().lower()
                continue
            convert = int if f.name == "max_attempts" else float
            try:
                values[f.name] = convert(raw)
            except (ValueError, TypeError):
                continue
        return cls(**values)

    def build_policy(self) -> BackoffPolicy:
        """Construct the policy this config describes."""
        if self.policy == "fixed":
            return FixedBackoffRetryPolicy(
                backoff_period_ms=self.backoff_period_ms, limit_ms=self.limit_ms
            )
        if self.policy == "exponential":
            return ExponentialBackoffRetryPolicy(
                initial_interval_ms=self.initial_interval_ms,
                multiplier=self.multiplier,
                limit_ms=self.limit_ms,
            )
        return SimpleRetryPolicy(max_attempts=self.max_attempts)


# Preset policies. Factories, since policies are mutable dataclasses.
PRESET_POLICIES: dict[str, Callable[[], BackoffPolicy]] = {
    "none": lambda: SimpleRetryPolicy(max_attempts=1),
    "standard": lambda: SimpleRetryPolicy(max_attempts=5),
    "steady": lambda: FixedBackoffRetryPolicy(backoff_period_ms=1000, limit_ms=10000),
    "patient": lambda: ExponentialBackoffRetryPolicy(
        initial_interval_ms=2000, multiplier=3.0, limit_ms=60000
    ),
    "aggressive": lambda: ExponentialBackoffRetryPolicy(
        initial_interval_ms=500, multiplier=2.0
    ),
}


def build_policy(source: str | RetryConfig | Mapping[str, Any]) -> BackoffPolicy:
    """Build a policy from a preset name, a RetryConfig, or a mapping of attributes."""
    if isinstance(source, RetryConfig):
        return source.build_policy()
    if isinstance(source, str):
        try:
            factory = PRESET_POLICIES[source]
        except KeyError:
            raise ConfigurationError(
                f"Unknown preset {source!r}; expected one of {', '.join(PRESET_POLICIES)}"
            ) from None
        return factory()
    return RetryConfig.from_mapping(source).build_policy()
