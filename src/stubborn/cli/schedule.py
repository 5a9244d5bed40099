"""CLI command: stubborn schedule -- show the waits a policy would produce."""

from __future__ import annotations

import click

from stubborn.cli.common import policy_options
from stubborn.model.state import AttemptState
from stubborn.policy import BackoffPolicy


@click.command()
@policy_options
@click.option("--attempts", default=10, show_default=True, help="Attempts to simulate.")
def schedule(attempts: int, policy: BackoffPolicy) -> None:
    """Print the attempt/wait table for a policy without running anything.

    Every simulated attempt is treated as a failure.
    """
    click.echo(f"Policy: {policy!r}")
    state = AttemptState()
    total = 0.0
    for _ in range(attempts):
        if policy.should_stop(state):
            click.echo(f"stop before attempt {state.count + 1}")
            return
        state.count += 1
        delay = policy.delay(state)
        total += delay
        click.echo(f"attempt {state.count:>3}  wait {delay:9.3f}s  total {total:9.3f}s")
    click.echo(f"still retrying after {attempts} attempt(s)")
