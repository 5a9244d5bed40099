"""stubborn CLI entry point: Click group with subcommands."""

import logging

import click

from stubborn import __version__


@click.group(context_settings={"auto_envvar_prefix": "STUBBORN"})
@click.version_option(version=__version__, prog_name="stubborn")
@click.option("-v", "--verbose", is_flag=True, help="Log every attempt.")
def cli(verbose: bool) -> None:
    """stubborn - retry commands and HTTP checks under a backoff policy."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from stubborn.cli.run import run  # noqa: E402
from stubborn.cli.probe import probe  # noqa: E402
from stubborn.cli.schedule import schedule  # noqa: E402

cli.add_command(run)
cli.add_command(probe)
cli.add_command(schedule)
