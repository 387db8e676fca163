"""Header-level metadata for images and CSV files."""

import contextlib
from importlib.metadata import PackageNotFoundError, version

from .csv_scan import scan
from .image_probe import sniff
from .models import CsvMetadata, Density, ImageMetadata

__version__ = "0.0.0"
with contextlib.suppress(PackageNotFoundError):
    if __package__ is not None:
        __version__ = version(__package__)

__all__ = ["CsvMetadata", "Density", "ImageMetadata", "__version__", "scan", "sniff"]
