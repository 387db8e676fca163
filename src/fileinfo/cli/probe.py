"""CLI commands calling the image sniffer and CSV scanner directly."""

from __future__ import annotations

from pathlib import Path

import click

from fileinfo.constants import EXIT_PATH, OutputFormat
from fileinfo.csv_scan import scan
from fileinfo.errors import ERROR_MSG_UNREADABLE_CSV, ERROR_MSG_UNRECOGNIZED_IMAGE
from fileinfo.image_probe import sniff
from fileinfo.report import format_density

from .common import emit_json, emit_table, fail, format_option, path_argument


@click.command()
@format_option
@path_argument
def image(*, fmt: str, path: Path) -> None:
    """Read image header metadata from PATH regardless of its extension."""
    meta = sniff(path)
    if meta is None:
        fail(ERROR_MSG_UNRECOGNIZED_IMAGE.format(path=path), EXIT_PATH)
    if OutputFormat(fmt) is OutputFormat.JSON:
        emit_json(meta.to_dict())
        return
    lines = [
        f"Format: {meta.format.value}",
        f"Dimensions: {meta.width}×{meta.height}px",
        f"Channels: {meta.channels}",
    ]
    if meta.density is not None:
        lines.append(f"Resolution: {format_density(meta.density)}")
    emit_table(path.name, lines)


@click.command()
@format_option
@path_argument
def csv(*, fmt: str, path: Path) -> None:
    """Read row count, header and first row from the CSV file at PATH."""
    meta = scan(path)
    if meta is None:
        fail(ERROR_MSG_UNREADABLE_CSV.format(path=path), EXIT_PATH)
    if OutputFormat(fmt) is OutputFormat.JSON:
        emit_json(meta.to_dict())
        return
    lines = [
        f"Rows: {meta.row_count}",
        f"Columns: {meta.column_count}",
        f"Headers: {', '.join(meta.headers)}",
    ]
    if meta.first_row:
        lines.append(f"First Row: {', '.join(meta.first_row)}")
    emit_table(path.name, lines)
