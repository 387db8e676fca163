"""CLI command printing a one-line status and its tooltip."""

from __future__ import annotations

from pathlib import Path

import click

from fileinfo.constants import EXIT_PATH
from fileinfo.errors import ERROR_MSG_CANNOT_ACCESS, PathAccessError
from fileinfo.file_stats import FileStats
from fileinfo.report import status_text, status_tooltip, unavailable_status

from .common import config_option, fail, load_config_or_exit, path_argument


@click.command()
@click.option("--no-tooltip", is_flag=True, help="Print only the status line")
@config_option
@path_argument
def status(*, no_tooltip: bool, config_path: Path | None, path: Path) -> None:
    """Print a compact status line for PATH."""
    config = load_config_or_exit(path=path, config_path=config_path)
    try:
        stats = FileStats.from_path(path)
    except PathAccessError:
        print(unavailable_status(path, config.name_max_length))
        fail(ERROR_MSG_CANNOT_ACCESS.format(path=path), EXIT_PATH)
    print(status_text(stats, config.name_max_length))
    if not no_tooltip:
        print(status_tooltip(stats, config.timestamp_format, config.name_max_length))
