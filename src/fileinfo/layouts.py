"""Named binary header layouts and a bounds-checked view over a byte prefix.

Each :class:`Layout` describes one fixed-size header structure together with
the offset arithmetic it implies. :class:`ByteWindow` is the only place that
slices raw bytes; everything else asks it for a layout at an offset and gets a
:class:`~fileinfo.errors.TruncatedHeaderError` when the prefix is too short.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from .errors import TruncatedHeaderError


@dataclass(frozen=True, slots=True)
class Layout:
    """A named ``struct`` layout."""

    name: str
    fmt: str
    _struct: struct.Struct = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_struct", struct.Struct(self.fmt))

    @property
    def size(self) -> int:
        return self._struct.size

    def unpack(self, data: bytes, offset: int) -> tuple[int | bytes, ...]:
        return self._struct.unpack_from(data, offset)


# ---- PNG ----
PNG_MAGIC = b"\x89PNG"
PNG_SIGNATURE_SIZE = 8
# width, height: fixed offset inside the IHDR chunk that always comes first
PNG_IHDR_DIMENSIONS = Layout("png.ihdr", ">II")
PNG_IHDR_OFFSET = 16
PNG_COLOR_TYPE_OFFSET = 25
# length, type
PNG_CHUNK_HEADER = Layout("png.chunk", ">I4s")
PNG_CHUNK_CRC_SIZE = 4
# pixels per unit X, pixels per unit Y, unit specifier
PNG_PHYS = Layout("png.phys", ">IIB")

# ---- JPEG ----
JPEG_MAGIC = b"\xff\xd8"
JPEG_MARKER_PREFIX = 0xFF
JPEG_SCAN_START = 2
# segment length (includes the two length bytes, excludes the marker)
JPEG_SEGMENT_LENGTH = Layout("jpeg.segment", ">H")
# marker, length, identifier, (version major/minor, first pad byte), units, x density, y density
JFIF_APP0 = Layout("jpeg.app0", ">HH4s3xBHH")
JFIF_APP0_OFFSET = 2
JFIF_APP0_MARKER = 0xFFE0
JFIF_IDENTIFIER = b"JFIF"
JFIF_MIN_LENGTH = 14
# precision, height, width, component count
JPEG_SOF = Layout("jpeg.sof", ">BHHB")

# ---- BMP ----
BMP_MAGIC = b"BM"
# BITMAPINFOHEADER from width to bit count: width, height, planes, bits per pixel
BMP_INFO_HEADER = Layout("bmp.info", "<iiHH")
BMP_INFO_OFFSET = 18
# XPelsPerMeter, YPelsPerMeter
BMP_RESOLUTION = Layout("bmp.resolution", "<ii")
BMP_RESOLUTION_OFFSET = 38

# ---- GIF ----
GIF_SIGNATURES = (b"GIF87a", b"GIF89a")
# logical screen width, height
GIF_SCREEN_DESCRIPTOR = Layout("gif.screen", "<HH")
GIF_SCREEN_OFFSET = 6


class ByteWindow:
    """Read-only, bounds-checked view over the bytes read from a file."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"ByteWindow({len(self._data)} bytes)"

    def startswith(self, prefix: bytes | tuple[bytes, ...]) -> bool:
        return self._data.startswith(prefix)

    def end_of(self, layout: Layout, offset: int) -> int:
        """Return the offset just past ``layout`` placed at ``offset``."""
        return offset + layout.size

    def fits(self, layout: Layout, offset: int) -> bool:
        return 0 <= offset and self.end_of(layout, offset) <= len(self._data)

    def read(self, layout: Layout, offset: int) -> tuple[int | bytes, ...]:
        """Unpack ``layout`` at ``offset`` or raise :class:`TruncatedHeaderError`."""
        if not self.fits(layout, offset):
            raise TruncatedHeaderError(layout.name, offset, len(self._data))
        return layout.unpack(self._data, offset)

    def byte(self, offset: int) -> int:
        if not 0 <= offset < len(self._data):
            raise TruncatedHeaderError("byte", offset, len(self._data))
        return self._data[offset]

    def remaining(self, offset: int) -> int:
        return max(len(self._data) - offset, 0)
