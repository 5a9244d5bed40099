"""CLI command: stubborn probe -- retry an HTTP GET until it returns the expected status."""

from __future__ import annotations

import sys

import click
import httpx

from stubborn.cli.common import echo_event, interrupt_on_signals, policy_options
from stubborn.engine.interrupt import Interrupt
from stubborn.engine.template import RetryTemplate
from stubborn.errors import ProbeFailedError
from stubborn.events import types as events
from stubborn.events.bus import EventBus
from stubborn.policy import BackoffPolicy


def _make_client(timeout: float) -> httpx.Client:
    return httpx.Client(timeout=httpx.Timeout(timeout), follow_redirects=True)


def probe_once(client: httpx.Client, url: str, expect_status: int) -> httpx.Response:
    """GET *url* once.

    Raises ProbeFailedError on a transport error or when the status differs
    from *expect_status*.
    """
    try:
        response = client.get(url)
    except httpx.HTTPError as exc:
        raise ProbeFailedError(f"GET {url} failed: {exc}", cause=exc) from exc
    if response.status_code != expect_status:
        raise ProbeFailedError(
            f"GET {url} returned {response.status_code}, expected {expect_status}",
            status_code=response.status_code,
        )
    return response


@click.command()
@policy_options
@click.argument("url")
@click.option("--expect-status", default=200, show_default=True, help="Status that counts as up.")
@click.option("--timeout", default=10.0, show_default=True, help="Per-request timeout in seconds.")
def probe(url: str, expect_status: int, timeout: float, policy: BackoffPolicy) -> None:
    """Poll URL until it answers with the expected status."""
    bus = EventBus()
    bus.subscribe(echo_event, events.AttemptFailed, events.RetryCancelled)

    with _make_client(timeout) as client, interrupt_on_signals(Interrupt()) as interrupt:
        template: RetryTemplate[httpx.Response] = RetryTemplate(
            policy, interrupt=interrupt, event_bus=bus
        )
        outcome = template.execute(lambda: probe_once(client, url, expect_status))

    if outcome.succeeded:
        click.echo(f"{url} is up ({outcome.value.status_code}) after {outcome.attempts} attempt(s)")
        return
    click.echo(f"{url} did not come up: {outcome.error}", err=True)
    sys.exit(1)
