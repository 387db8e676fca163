"""Assemble file details and route files to the image or CSV probes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .constants import PLACEHOLDER
from .csv_scan import scan
from .file_stats import DEFAULT_NAME_LIMIT, FileStats, count_children, format_size, truncate_name
from .image_probe import sniff

if TYPE_CHECKING:
    from collections.abc import Iterator
    from datetime import datetime
    from pathlib import Path

    from .config import PresenterConfig
    from .models import CsvMetadata, Density, ImageMetadata


@dataclass(frozen=True, slots=True)
class FileReport:
    """Everything known about one path."""

    stats: FileStats
    children: tuple[int, int] | None = None
    image: ImageMetadata | None = None
    csv: CsvMetadata | None = None


def build_report(path: Path, config: PresenterConfig) -> FileReport:
    """Stat ``path`` and, for files with a known extension, read its header metadata.

    Raises :class:`~fileinfo.errors.PathAccessError` when ``path`` cannot be stat'ed.
    """
    stats = FileStats.from_path(path)
    if stats.is_dir:
        return FileReport(stats=stats, children=count_children(path))
    if not stats.is_file:
        return FileReport(stats=stats)
    ext = stats.extension
    if ext in config.image_extensions:
        return FileReport(stats=stats, image=sniff(path))
    if ext in config.csv_extensions:
        return FileReport(stats=stats, csv=scan(path))
    return FileReport(stats=stats)


def format_density(density: Density) -> str:
    units = density.units.value.upper()
    if density.x == density.y:
        return f"{density.x} {units}"
    return f"{density.x}x{density.y} {units}"


def _timestamp(value: datetime | None, fmt: str) -> str:
    return value.strftime(fmt) if value is not None else PLACEHOLDER


def _size_text(stats: FileStats) -> str:
    if not stats.is_file:
        return PLACEHOLDER
    return f"{format_size(stats.size)} ({stats.size} bytes)"


def _image_lines(meta: ImageMetadata) -> Iterator[str]:
    yield "Image Info:"
    yield f"  Format: {meta.format.value}"
    yield f"  Dimensions: {meta.width}×{meta.height}px"
    yield f"  Channels: {meta.channels}"
    if meta.density is not None:
        yield f"  Resolution: {format_density(meta.density)}"


def _csv_lines(meta: CsvMetadata) -> Iterator[str]:
    yield "CSV Info:"
    yield f"  Rows: {meta.row_count}"
    yield f"  Columns: {meta.column_count}"
    yield f"  Headers: {', '.join(meta.headers)}"
    if meta.first_row:
        yield f"  First Row: {', '.join(meta.first_row)}"


def report_lines(report: FileReport, timestamp_format: str) -> Iterator[str]:
    """Yield the plain-text detail lines for ``report``."""
    stats = report.stats
    yield f"Path: {stats.path}"
    yield f"Name: {stats.name}"
    yield f"Extension: {stats.extension or PLACEHOLDER}"
    yield f"Size: {_size_text(stats)}"
    if report.children is not None:
        files, dirs = report.children
        yield f"Direct children: {files} files, {dirs} folders"
    yield f"Created: {_timestamp(stats.created, timestamp_format)}"
    yield f"Modified: {_timestamp(stats.modified, timestamp_format)}"
    yield f"Accessed: {_timestamp(stats.accessed, timestamp_format)}"
    if report.image is not None:
        yield from _image_lines(report.image)
    elif report.csv is not None:
        yield from _csv_lines(report.csv)


def report_text(report: FileReport, timestamp_format: str) -> str:
    return "\n".join(report_lines(report, timestamp_format))


def status_text(stats: FileStats, limit: int) -> str:
    """Return the one-line status for ``stats``."""
    name = truncate_name(stats.name, limit)
    if stats.is_file:
        return f"📄 {name} ({format_size(stats.size)})"
    return f"📁 {name}"


def unavailable_status(path: Path, limit: int) -> str:
    return f"⚠️ {truncate_name(path.name or str(path), limit)}"


def status_tooltip(stats: FileStats, timestamp_format: str, limit: int = DEFAULT_NAME_LIMIT) -> str:
    """Return the hover text for the status line; the name is truncated like the status itself."""
    return "\n".join((
        f"Path: {stats.path}",
        f"Name: {truncate_name(stats.name, limit)}",
        f"Extension: {stats.suffix or PLACEHOLDER}",
        f"Size: {_size_text(stats)}",
        f"Created: {_timestamp(stats.created, timestamp_format)}",
        f"Modified: {_timestamp(stats.modified, timestamp_format)}",
        f"Accessed: {_timestamp(stats.accessed, timestamp_format)}",
    ))


def report_to_dict(report: FileReport) -> dict[str, Any]:
    """Build a JSON-friendly mapping for machine-readable output."""
    stats = report.stats
    data: dict[str, Any] = {
        "path": str(stats.path),
        "name": stats.name,
        "type": "file" if stats.is_file else "directory" if stats.is_dir else "other",
        "extension": stats.extension or None,
        "size_bytes": stats.size if stats.is_file else None,
        "created": stats.created.isoformat() if stats.created is not None else None,
        "modified": stats.modified.isoformat(),
        "accessed": stats.accessed.isoformat(),
    }
    if report.children is not None:
        files, dirs = report.children
        data["children"] = {"files": files, "dirs": dirs}
    if report.image is not None:
        data["image"] = report.image.to_dict()
    if report.csv is not None:
        data["csv"] = report.csv.to_dict()
    return data
