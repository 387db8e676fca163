"""Filesystem facts shown alongside header metadata."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .errors import ERROR_MSG_CANNOT_ACCESS, PathAccessError

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")
SIZE_STEP = 1024
SMALL_VALUE = 10
DEFAULT_NAME_LIMIT = 30
ELLIPSIS = "…"


def format_size(num_bytes: int) -> str:
    """Return a human-readable size such as ``"1.500 KB"`` or ``"512.0 B"``."""
    if num_bytes <= 0:
        return "0 B"
    index = 0
    while num_bytes >= SIZE_STEP ** (index + 1) and index < len(SIZE_UNITS) - 1:
        index += 1
    value = num_bytes / SIZE_STEP**index
    decimals = 3 if value < SMALL_VALUE and index > 0 else 1
    return f"{value:.{decimals}f} {SIZE_UNITS[index]}"


def truncate_name(name: str, limit: int = DEFAULT_NAME_LIMIT) -> str:
    if len(name) <= limit:
        return name
    return name[: limit - 1] + ELLIPSIS


def extension_of(name: str) -> str:
    """Return the lower-cased suffix of ``name`` including the dot, or ``""``."""
    return Path(name).suffix.lower()


def count_children(path: Path) -> tuple[int, int]:
    """Return ``(files, dirs)`` among the immediate children of ``path``."""
    files = dirs = 0
    try:
        with os.scandir(path) as entries:
            for entry in entries:
                if entry.is_file():
                    files += 1
                elif entry.is_dir():
                    dirs += 1
    except OSError:
        return 0, 0
    return files, dirs


@dataclass(frozen=True, slots=True)
class FileStats:
    """Snapshot of ``os.stat`` for one path."""

    path: Path
    name: str
    is_file: bool
    is_dir: bool
    size: int
    created: datetime | None
    modified: datetime
    accessed: datetime

    @classmethod
    def from_path(cls, path: Path) -> FileStats:
        try:
            st = path.stat()
        except OSError as err:
            raise PathAccessError(ERROR_MSG_CANNOT_ACCESS.format(path=path)) from err
        birth = getattr(st, "st_birthtime", None)
        return cls(
            path=path,
            name=path.name or str(path),
            is_file=path.is_file(),
            is_dir=path.is_dir(),
            size=st.st_size,
            created=datetime.fromtimestamp(birth) if birth is not None else None,
            modified=datetime.fromtimestamp(st.st_mtime),
            accessed=datetime.fromtimestamp(st.st_atime),
        )

    @property
    def extension(self) -> str:
        return extension_of(self.name) if self.is_file else ""

    @property
    def suffix(self) -> str:
        """Extension as written on disk, case preserved."""
        return Path(self.name).suffix if self.is_file else ""
