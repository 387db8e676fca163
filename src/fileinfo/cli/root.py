"""Top-level Click group wiring together all fileinfo commands."""

from __future__ import annotations

import logging
import sys

import click

from fileinfo import __version__

from .common import exit_on_broken_pipe

# Threshold for -vv to map to DEBUG
VERBOSE_DEBUG_THRESHOLD = 2

CLI_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(context_settings=CLI_CONTEXT_SETTINGS)
@click.option("-v", "--verbose", count=True, help="Increase verbosity (use -vv for debug)")
@click.option(
    "--log-level",
    type=click.Choice(["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"], case_sensitive=False),
    help="Set log level explicitly",
)
@click.version_option(__version__, "-V", "--version")
def cli(verbose: int, log_level: str | None) -> None:
    """Show file details and header metadata for images and CSV files."""
    if log_level:
        level = getattr(logging, log_level.upper())
    elif verbose >= VERBOSE_DEBUG_THRESHOLD:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, force=True)


# Import subcommands and register them
from .info import info  # noqa: E402
from .init import init  # noqa: E402
from .probe import csv, image  # noqa: E402
from .status import status  # noqa: E402
from .version import version  # noqa: E402

cli.add_command(info)
cli.add_command(status)
cli.add_command(image)
cli.add_command(csv)
cli.add_command(init)
cli.add_command(version)


def main(argv: list[str] | None = None) -> None:
    """Entry point that executes the Click group with the provided argv."""
    argv = list(sys.argv[1:] if argv is None else argv)
    try:
        cli.main(args=argv, prog_name="fileinfo")
    except BrokenPipeError:
        exit_on_broken_pipe()
