"""Value objects returned by the image sniffer and the CSV scanner."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .constants import DensityUnit, ImageFormat


@dataclass(frozen=True, slots=True)
class Density:
    """Physical pixel density along both axes."""

    x: int
    y: int
    units: DensityUnit

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "units": self.units.value}


@dataclass(frozen=True, slots=True)
class ImageMetadata:
    """Structural metadata read from an image header.

    ``width`` and ``height`` are taken from the header as-is. ``channels`` is a
    best-effort estimate and falls back to 3 when the header is not explicit.
    ``density`` is ``None`` when the format or its unit code does not provide one.
    """

    format: ImageFormat
    width: int
    height: int
    channels: int
    density: Density | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "format": self.format.value,
            "width": self.width,
            "height": self.height,
            "channels": self.channels,
        }
        if self.density is not None:
            data["density"] = self.density.to_dict()
        return data


@dataclass(frozen=True, slots=True)
class CsvMetadata:
    """Structural summary of a CSV file.

    ``row_count`` covers the whole file; ``headers`` and ``first_row`` come from
    the bounded prefix only.
    """

    row_count: int
    column_count: int
    headers: tuple[str, ...] = ()
    first_row: tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> CsvMetadata:
        return cls(row_count=0, column_count=0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "row_count": self.row_count,
            "column_count": self.column_count,
            "headers": list(self.headers),
            "first_row": list(self.first_row),
        }
