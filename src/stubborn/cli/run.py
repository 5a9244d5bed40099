"""CLI command: stubborn run -- retry a shell command until it exits 0."""

from __future__ import annotations

import subprocess
import sys

import click

from stubborn.cli.common import echo_event, interrupt_on_signals, policy_options
from stubborn.engine.interrupt import Interrupt
from stubborn.engine.template import RetryTemplate
from stubborn.errors import CommandFailedError
from stubborn.events import types as events
from stubborn.events.bus import EventBus
from stubborn.model.outcome import Outcome
from stubborn.policy import BackoffPolicy

EXIT_CANCELLED = 130
EXIT_NOT_STARTED = 127


def run_command(command: tuple[str, ...]) -> int:
    """Run *command* once; raise CommandFailedError unless it exits 0."""
    try:
        completed = subprocess.run(list(command))
    except OSError as exc:
        raise CommandFailedError(
            f"could not start {command[0]!r}: {exc}", returncode=EXIT_NOT_STARTED, cause=exc
        ) from exc
    if completed.returncode != 0:
        raise CommandFailedError(
            f"{command[0]} exited with status {completed.returncode}",
            returncode=completed.returncode,
        )
    return completed.returncode


def exit_code_for(outcome: Outcome) -> int:
    """Map a finished run onto a process exit status."""
    if outcome.succeeded:
        return 0
    if outcome.cancelled:
        return EXIT_CANCELLED
    if isinstance(outcome.error, CommandFailedError):
        returncode = outcome.error.returncode
        # Killed by a signal: subprocess reports -signum, shells report 128 + signum
        return 128 - returncode if returncode < 0 else returncode
    return 1


@click.command(context_settings={"ignore_unknown_options": True})
@policy_options
@click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
def run(command: tuple[str, ...], policy: BackoffPolicy) -> None:
    """Run COMMAND, retrying under the policy until it exits 0.

    Put ``--`` before COMMAND when it has options of its own. SIGINT or
    SIGTERM stops the retries once the running attempt finishes.
    """
    bus = EventBus()
    bus.subscribe(echo_event, events.AttemptFailed, events.RetryCancelled)

    with interrupt_on_signals(Interrupt()) as interrupt:
        template: RetryTemplate[int] = RetryTemplate(
            policy, interrupt=interrupt, event_bus=bus
        )
        outcome = template.execute(lambda: run_command(command))

    if outcome.attempts == 0:
        click.echo("policy allowed no attempts", err=True)
    sys.exit(exit_code_for(outcome))
