"""Project-wide constants and enums."""

from __future__ import annotations

from enum import StrEnum


class ImageFormat(StrEnum):
    """Image formats recognised by their signature."""

    PNG = "PNG"
    JPEG = "JPEG"
    BMP = "BMP"
    GIF = "GIF"


class DensityUnit(StrEnum):
    """Units reported for pixel density."""

    DPI = "dpi"
    PPI = "ppi"


class OutputFormat(StrEnum):
    """Valid output formats for CLI commands."""

    HUMAN = "human"
    JSON = "json"


class CopyTarget(StrEnum):
    """What ``fileinfo info --copy`` puts on the clipboard."""

    NONE = "none"
    DETAILS = "details"
    PATH = "path"


# Bounded read windows
IMAGE_PREFIX_SIZE = 65536
IMAGE_MIN_BYTES = 12
CSV_PREFIX_SIZE = 4096
CSV_CHUNK_SIZE = 1 << 16

NEWLINE = 0x0A
PLACEHOLDER = "—"

CONFIG_IMAGE_EXTENSIONS = "image_extensions"
CONFIG_CSV_EXTENSIONS = "csv_extensions"
CONFIG_NAME_MAX_LENGTH = "name_max_length"
CONFIG_TIMESTAMP_FORMAT = "timestamp_format"

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_CONFIG = 3
EXIT_PATH = 4
