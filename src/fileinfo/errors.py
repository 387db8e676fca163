"""Custom exception classes and error messages."""

from __future__ import annotations

ERROR_MSG_CANNOT_ACCESS = "Cannot access: {path}"
ERROR_MSG_UNRECOGNIZED_IMAGE = "Unrecognized image format: {path}"
ERROR_MSG_UNREADABLE_CSV = "Cannot read CSV: {path}"


class ConfigLoadError(Exception):
    """Raised when a configuration file cannot be loaded."""


class PathAccessError(OSError):
    """Raised when the presenter cannot stat the requested path."""


class ClipboardUnavailableError(RuntimeError):
    """Raised when the system clipboard rejects every copy attempt."""


class TruncatedHeaderError(ValueError):
    """Raised when a header layout extends past the end of the byte window."""

    def __init__(self, layout: str, offset: int, available: int) -> None:
        super().__init__(f"{layout} at offset {offset} needs more than {available} available bytes")
        self.layout = layout
        self.offset = offset
        self.available = available
