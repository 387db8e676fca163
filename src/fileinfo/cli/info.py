"""CLI command printing the full details of one path."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from fileinfo.constants import EXIT_PATH, CopyTarget, OutputFormat
from fileinfo.errors import ClipboardUnavailableError, PathAccessError
from fileinfo.output import copy_to_clipboard
from fileinfo.report import build_report, report_lines, report_text, report_to_dict

from .common import config_option, emit_json, emit_table, fail, format_option, load_config_or_exit, path_argument


@click.command()
@format_option
@click.option(
    "--copy",
    type=click.Choice([c.value for c in CopyTarget], case_sensitive=False),
    default=CopyTarget.NONE.value,
    help="Also copy the details or the absolute path to the clipboard",
)
@config_option
@path_argument
def info(*, fmt: str, copy: str, config_path: Path | None, path: Path) -> None:
    """Show size, timestamps and image/CSV metadata for PATH."""
    config = load_config_or_exit(path=path, config_path=config_path)
    try:
        report = build_report(path, config)
    except PathAccessError as err:
        fail(str(err), EXIT_PATH)

    if OutputFormat(fmt) is OutputFormat.JSON:
        emit_json(report_to_dict(report))
    else:
        emit_table(report.stats.name, report_lines(report, config.timestamp_format))

    target = CopyTarget(copy)
    if target is CopyTarget.NONE:
        return
    try:
        if target is CopyTarget.DETAILS:
            copy_to_clipboard(report_text(report, config.timestamp_format))
            print("Details copied to clipboard", file=sys.stderr)
        else:
            copy_to_clipboard(str(path.resolve()))
            print("Path copied", file=sys.stderr)
    except ClipboardUnavailableError as err:
        print(err, file=sys.stderr)
