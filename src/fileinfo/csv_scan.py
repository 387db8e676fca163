"""Structural CSV scanning: row count over the whole file, header from a prefix.

Fields are split on literal commas. Quoted fields containing commas or
newlines are not recognised, so downstream output stays predictable for
simple files.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

from .constants import CSV_CHUNK_SIZE, CSV_PREFIX_SIZE, NEWLINE
from .logging_utils import StructuredLogEvent, get_logger, log_event
from .models import CsvMetadata

logger = get_logger(__name__)

LINE_SPLIT = re.compile(r"\r?\n")
DELIMITER = ","


def split_fields(line: str) -> tuple[str, ...]:
    """Split ``line`` on commas and strip each field."""
    return tuple(field.strip() for field in line.split(DELIMITER))


def count_newlines(path: Path, chunk_size: int = CSV_CHUNK_SIZE) -> int:
    total = 0
    with path.open("rb") as f:
        while chunk := f.read(chunk_size):
            total += chunk.count(NEWLINE)
    return total


def ends_without_newline(path: Path) -> bool:
    """Return ``True`` when ``path`` is non-empty and its last byte is not ``\\n``."""
    with path.open("rb") as f:
        f.seek(0, os.SEEK_END)
        if f.tell() == 0:
            return False
        f.seek(-1, os.SEEK_END)
        last = f.read(1)
    return bool(last) and last[0] != NEWLINE


def read_head(path: Path, size: int = CSV_PREFIX_SIZE) -> str:
    with path.open("rb") as f:
        data = f.read(size)
    # utf-8-sig drops a leading byte order mark; a multi-byte character may be cut at the window edge
    return data.decode("utf-8-sig", errors="replace")


def parse_head(text: str) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Return ``(headers, first_row)`` parsed from the start of a CSV file."""
    if not text:
        return (), ()
    lines = LINE_SPLIT.split(text)
    headers = split_fields(lines[0])
    first_row: tuple[str, ...] = ()
    if len(lines) > 1 and lines[1].strip():
        first_row = split_fields(lines[1])
    return headers, first_row


def scan(path: str | os.PathLike[str]) -> CsvMetadata | None:
    """Return structural metadata for the CSV file at ``path``.

    ``None`` is returned only when the file cannot be read; an empty file
    yields zero rows and no headers.
    """
    target = Path(path)
    try:
        rows = count_newlines(target)
        head = read_head(target)
        if not head:
            return CsvMetadata.empty()
        if ends_without_newline(target):
            rows += 1
    except (OSError, ValueError) as err:
        log_event(
            logger,
            StructuredLogEvent(
                name="csv.read_failed",
                message="could not read CSV file",
                context={"path": target, "error": err},
            ),
        )
        return None

    headers, first_row = parse_head(head)
    meta = CsvMetadata(row_count=rows, column_count=len(headers), headers=headers, first_row=first_row)
    log_event(
        logger,
        StructuredLogEvent(
            name="csv.scanned",
            message="CSV structure scanned",
            context={"path": target, "rows": meta.row_count, "columns": meta.column_count},
        ),
    )
    return meta
