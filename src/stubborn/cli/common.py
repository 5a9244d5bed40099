"""Helpers shared by the CLI commands: policy options, signal wiring, event output."""

from __future__ import annotations

import functools
import signal
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Callable

import click

from stubborn.config import POLICY_KINDS, PRESET_POLICIES, RetryConfig, build_policy
from stubborn.engine.interrupt import Interrupt
from stubborn.errors import ConfigurationError
from stubborn.events import types as events

_DEFAULTS = RetryConfig()

_POLICY_OPTIONS = [
    click.option(
        "--preset",
        type=click.Choice(sorted(PRESET_POLICIES)),
        default=None,
        help="Named policy; overrides the other policy options.",
    ),
    click.option(
        "--policy",
        "policy_kind",
        type=click.Choice(POLICY_KINDS),
        default=_DEFAULTS.policy,
        show_default=True,
        help="Backoff policy kind.",
    ),
    click.option(
        "--max-attempts",
        type=int,
        default=_DEFAULTS.max_attempts,
        show_default=True,
        help="Attempt limit (simple).",
    ),
    click.option(
        "--backoff-period-ms",
        type=float,
        default=_DEFAULTS.backoff_period_ms,
        show_default=True,
        help="Wait between attempts (fixed).",
    ),
    click.option(
        "--initial-interval-ms",
        type=float,
        default=_DEFAULTS.initial_interval_ms,
        show_default=True,
        help="First wait (exponential).",
    ),
    click.option(
        "--multiplier",
        type=float,
        default=_DEFAULTS.multiplier,
        help="Growth factor (exponential). 0 uses 2.0.",
    ),
    click.option(
        "--limit-ms",
        type=float,
        default=_DEFAULTS.limit_ms,
        help="Total wait ceiling (fixed) or per-wait cap (exponential). 0 uses 30000.",
    ),
]


def policy_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Add the policy options to a command and pass it a built ``policy`` instead."""

    @functools.wraps(fn)
    def wrapper(
        *args: Any,
        preset: str | None,
        policy_kind: str,
        max_attempts: int,
        backoff_period_ms: float,
        initial_interval_ms: float,
        multiplier: float,
        limit_ms: float,
        **kwargs: Any,
    ) -> Any:
        if preset:
            policy = build_policy(preset)
        else:
            try:
                config = RetryConfig(
                    policy=policy_kind,
                    max_attempts=max_attempts,
                    backoff_period_ms=backoff_period_ms,
                    initial_interval_ms=initial_interval_ms,
                    multiplier=multiplier,
                    limit_ms=limit_ms,
                )
            except ConfigurationError as exc:
                raise click.UsageError(str(exc)) from exc
            policy = config.build_policy()
        return fn(*args, policy=policy, **kwargs)

    for option in reversed(_POLICY_OPTIONS):
        wrapper = option(wrapper)
    return wrapper


@contextmanager
def interrupt_on_signals(interrupt: Interrupt) -> Iterator[Interrupt]:
    """Fire *interrupt* on SIGINT/SIGTERM for the duration of the block."""
    handled = (signal.SIGINT, signal.SIGTERM)
    previous = {sig: signal.getsignal(sig) for sig in handled}

    def _handler(signum: int, frame: Any) -> None:
        click.echo(f"Received {signal.Signals(signum).name}; stopping after this attempt", err=True)
        interrupt.fire()

    for sig in handled:
        signal.signal(sig, _handler)
    try:
        yield interrupt
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def echo_event(event: Any) -> None:
    """Print a one-line summary of a retry event to stderr."""
    if isinstance(event, events.AttemptFailed):
        click.echo(
            f"attempt {event.attempt} failed: {event.error} (waiting {event.delay:.3f}s)",
            err=True,
        )
    elif isinstance(event, events.RetryCancelled):
        click.echo(f"cancelled after {event.attempts} attempt(s)", err=True)
