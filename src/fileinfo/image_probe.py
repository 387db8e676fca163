"""Image header sniffing (format detection, dimensions, channels, density).

Only a bounded prefix of the file is read; nothing is decoded beyond the
header structures described in :mod:`fileinfo.layouts`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

from .constants import IMAGE_MIN_BYTES, IMAGE_PREFIX_SIZE, DensityUnit, ImageFormat
from .errors import TruncatedHeaderError
from .layouts import (
    BMP_INFO_HEADER,
    BMP_INFO_OFFSET,
    BMP_MAGIC,
    BMP_RESOLUTION,
    BMP_RESOLUTION_OFFSET,
    GIF_SCREEN_DESCRIPTOR,
    GIF_SCREEN_OFFSET,
    GIF_SIGNATURES,
    JFIF_APP0,
    JFIF_APP0_MARKER,
    JFIF_APP0_OFFSET,
    JFIF_IDENTIFIER,
    JFIF_MIN_LENGTH,
    JPEG_MAGIC,
    JPEG_MARKER_PREFIX,
    JPEG_SCAN_START,
    JPEG_SEGMENT_LENGTH,
    JPEG_SOF,
    PNG_CHUNK_CRC_SIZE,
    PNG_CHUNK_HEADER,
    PNG_COLOR_TYPE_OFFSET,
    PNG_IHDR_DIMENSIONS,
    PNG_IHDR_OFFSET,
    PNG_MAGIC,
    PNG_PHYS,
    PNG_SIGNATURE_SIZE,
    ByteWindow,
)
from .logging_utils import StructuredLogEvent, get_logger, log_event
from .models import Density, ImageMetadata

if TYPE_CHECKING:
    import os
    from collections.abc import Iterator

logger = get_logger(__name__)

METERS_PER_INCH = 0.0254
CM_PER_INCH = 2.54
DEFAULT_CHANNELS = 3

PNG_CHANNELS_BY_COLOR_TYPE = {0: 1, 2: 3, 3: 1, 4: 2, 6: 4}
PNG_PHYS_TYPE = b"pHYs"
PNG_PHYS_UNIT_METER = 1

JFIF_UNITS_DPI = 1
JFIF_UNITS_DPCM = 2
# C4 (DHT), C8 (JPG extension) and CC (DAC) share the range but carry no frame header
JPEG_SOF_RANGE = range(0xC0, 0xD0)
JPEG_NON_SOF_MARKERS = frozenset({0xC4, 0xC8, 0xCC})


def round_half_up(value: float) -> int:
    """Round a non-negative measurement to the nearest integer, halves upward."""
    return math.floor(value + 0.5)


def per_meter_to_ppi(x: int, y: int) -> Density:
    return Density(round_half_up(x * METERS_PER_INCH), round_half_up(y * METERS_PER_INCH), DensityUnit.PPI)


# --------------------------------------------------------------------------- #
# Traversal                                                                   #
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class PngChunk:
    offset: int
    length: int
    type: bytes

    @property
    def data_offset(self) -> int:
        return self.offset + PNG_CHUNK_HEADER.size

    @property
    def next_offset(self) -> int:
        return self.data_offset + self.length + PNG_CHUNK_CRC_SIZE


@dataclass(frozen=True, slots=True)
class JpegMarker:
    offset: int
    marker: int

    @property
    def is_start_of_frame(self) -> bool:
        return self.marker in JPEG_SOF_RANGE and self.marker not in JPEG_NON_SOF_MARKERS


def iter_png_chunks(window: ByteWindow, start: int = PNG_SIGNATURE_SIZE) -> Iterator[PngChunk]:
    """Yield chunk headers from ``start`` until fewer than 8 bytes remain."""
    offset = start
    while window.remaining(offset) >= PNG_CHUNK_HEADER.size:
        length, chunk_type = window.read(PNG_CHUNK_HEADER, offset)
        chunk = PngChunk(offset=offset, length=int(length), type=bytes(chunk_type))
        yield chunk
        offset = chunk.next_offset


def iter_jpeg_markers(window: ByteWindow, start: int = JPEG_SCAN_START) -> Iterator[JpegMarker]:
    """Yield markers from ``start``, skipping stray bytes, fill bytes and segment bodies.

    The walk ends when the buffer runs out or a segment length cannot be read.
    """
    offset = start
    end = len(window)
    while offset + 1 < end:
        if window.byte(offset) != JPEG_MARKER_PREFIX:
            offset += 1
            continue
        marker = window.byte(offset + 1)
        if marker == JPEG_MARKER_PREFIX:
            offset += 1
            continue
        yield JpegMarker(offset=offset, marker=marker)
        try:
            (length,) = window.read(JPEG_SEGMENT_LENGTH, offset + 2)
        except TruncatedHeaderError:
            return
        offset += 2 + int(length)


# --------------------------------------------------------------------------- #
# Parsers                                                                     #
# --------------------------------------------------------------------------- #


@runtime_checkable
class HeaderParser(Protocol):
    """Strategy for recognising and parsing one image format."""

    format: ClassVar[ImageFormat]

    def matches(self, window: ByteWindow) -> bool: ...

    def parse(self, window: ByteWindow) -> ImageMetadata | None: ...


class PngParser:
    format: ClassVar[ImageFormat] = ImageFormat.PNG
    min_size: ClassVar[int] = PNG_IHDR_OFFSET + PNG_IHDR_DIMENSIONS.size

    def matches(self, window: ByteWindow) -> bool:
        return window.startswith(PNG_MAGIC) and len(window) >= self.min_size

    def parse(self, window: ByteWindow) -> ImageMetadata:
        width, height = window.read(PNG_IHDR_DIMENSIONS, PNG_IHDR_OFFSET)
        try:
            color_type = window.byte(PNG_COLOR_TYPE_OFFSET)
        except TruncatedHeaderError:
            color_type = None
        channels = PNG_CHANNELS_BY_COLOR_TYPE.get(color_type, DEFAULT_CHANNELS)
        return ImageMetadata(
            format=self.format,
            width=int(width),
            height=int(height),
            channels=channels,
            density=self._density(window),
        )

    @staticmethod
    def _density(window: ByteWindow) -> Density | None:
        try:
            for chunk in iter_png_chunks(window):
                if chunk.type != PNG_PHYS_TYPE or chunk.length < PNG_PHYS.size:
                    continue
                ppu_x, ppu_y, unit = window.read(PNG_PHYS, chunk.data_offset)
                if unit == PNG_PHYS_UNIT_METER:
                    return per_meter_to_ppi(int(ppu_x), int(ppu_y))
                return None
        except TruncatedHeaderError:
            return None
        return None


class JpegParser:
    format: ClassVar[ImageFormat] = ImageFormat.JPEG

    def matches(self, window: ByteWindow) -> bool:
        return window.startswith(JPEG_MAGIC)

    def parse(self, window: ByteWindow) -> ImageMetadata | None:
        density = self._jfif_density(window)
        for marker in iter_jpeg_markers(window):
            if not marker.is_start_of_frame:
                continue
            _precision, height, width, components = window.read(JPEG_SOF, marker.offset + 4)
            return ImageMetadata(
                format=self.format,
                width=int(width),
                height=int(height),
                channels=int(components) or DEFAULT_CHANNELS,
                density=density,
            )
        return None

    @staticmethod
    def _jfif_density(window: ByteWindow) -> Density | None:
        try:
            marker, length, identifier, units, x, y = window.read(JFIF_APP0, JFIF_APP0_OFFSET)
        except TruncatedHeaderError:
            return None
        if marker != JFIF_APP0_MARKER or identifier != JFIF_IDENTIFIER or int(length) < JFIF_MIN_LENGTH:
            return None
        if units == JFIF_UNITS_DPI:
            return Density(int(x), int(y), DensityUnit.DPI)
        if units == JFIF_UNITS_DPCM:
            return Density(round_half_up(int(x) * CM_PER_INCH), round_half_up(int(y) * CM_PER_INCH), DensityUnit.DPI)
        return None


class BmpParser:
    format: ClassVar[ImageFormat] = ImageFormat.BMP
    min_size: ClassVar[int] = BMP_INFO_OFFSET + BMP_INFO_HEADER.size

    def matches(self, window: ByteWindow) -> bool:
        return window.startswith(BMP_MAGIC) and len(window) >= self.min_size

    def parse(self, window: ByteWindow) -> ImageMetadata:
        width, height, _planes, bpp = window.read(BMP_INFO_HEADER, BMP_INFO_OFFSET)
        return ImageMetadata(
            format=self.format,
            width=int(width),
            # negative height marks a top-down bitmap
            height=abs(int(height)),
            channels=max(1, int(bpp) // 8),
            density=self._density(window),
        )

    @staticmethod
    def _density(window: ByteWindow) -> Density | None:
        if not window.fits(BMP_RESOLUTION, BMP_RESOLUTION_OFFSET):
            return None
        x, y = window.read(BMP_RESOLUTION, BMP_RESOLUTION_OFFSET)
        if int(x) > 0 and int(y) > 0:
            return per_meter_to_ppi(int(x), int(y))
        return None


class GifParser:
    format: ClassVar[ImageFormat] = ImageFormat.GIF
    min_size: ClassVar[int] = GIF_SCREEN_OFFSET + GIF_SCREEN_DESCRIPTOR.size

    def matches(self, window: ByteWindow) -> bool:
        return window.startswith(GIF_SIGNATURES) and len(window) >= self.min_size

    def parse(self, window: ByteWindow) -> ImageMetadata:
        width, height = window.read(GIF_SCREEN_DESCRIPTOR, GIF_SCREEN_OFFSET)
        # palette-based; channels are reported as a single index plane
        return ImageMetadata(format=self.format, width=int(width), height=int(height), channels=1)


PARSERS: tuple[HeaderParser, ...] = (PngParser(), JpegParser(), BmpParser(), GifParser())


# --------------------------------------------------------------------------- #
# Entry point                                                                 #
# --------------------------------------------------------------------------- #


def read_prefix(path: Path, size: int = IMAGE_PREFIX_SIZE) -> bytes:
    with path.open("rb") as f:
        return f.read(size)


def sniff_bytes(data: bytes) -> ImageMetadata | None:
    """Identify and parse an image header from an in-memory prefix."""
    window = ByteWindow(data)
    if len(window) < IMAGE_MIN_BYTES:
        log_event(
            logger,
            StructuredLogEvent(
                name="image.too_short",
                message="too few bytes to identify an image",
                context={"size": len(window)},
            ),
        )
        return None
    for parser in PARSERS:
        if not parser.matches(window):
            continue
        try:
            return parser.parse(window)
        except TruncatedHeaderError as err:
            log_event(
                logger,
                StructuredLogEvent(
                    name="image.truncated",
                    message="image header is truncated",
                    context={"format": parser.format, "layout": err.layout, "offset": err.offset},
                ),
            )
            return None
    log_event(logger, StructuredLogEvent(name="image.unrecognized", message="no image signature matched"))
    return None


def sniff(path: str | os.PathLike[str]) -> ImageMetadata | None:
    """Return image metadata for ``path``, or ``None``.

    ``None`` covers both an unreadable file and an unrecognised format; the
    ``image.*`` debug events tell the two apart.
    """
    target = Path(path)
    try:
        data = read_prefix(target)
    except (OSError, ValueError) as err:
        log_event(
            logger,
            StructuredLogEvent(
                name="image.read_failed",
                message="could not read image prefix",
                context={"path": target, "error": err},
            ),
        )
        return None
    meta = sniff_bytes(data)
    if meta is not None:
        log_event(
            logger,
            StructuredLogEvent(
                name="image.sniffed",
                message="image header parsed",
                context={"path": target, "format": meta.format, "width": meta.width, "height": meta.height},
            ),
        )
    return meta
