"""ESC/Bematech command backend.

Bematech printers in ESC/Bema mode print alignment, ``ESC !`` print modes
and ``GS v 0`` raster bitmaps with the same byte layout as ESC/POS, but
number the code tables differently, use ``ESC E``/``ESC F`` for emphasis,
restrict line spacing to 18-255 and only cut fully. QR codes are only
available in ESC/POS mode.
"""

import logging
from typing import Optional

from thermalprint.backends.base import CutKind, ProtocolBackend
from thermalprint.errors import UnsupportedCommand
from thermalprint.layout.resolver import Alignment, CharacterSize

logger = logging.getLogger(__name__)


class EscBematechBackend(ProtocolBackend):
    """Encodes printer primitives as ESC/Bema bytes."""

    ESC = b'\x1b'
    GS = b'\x1d'
    LF = b'\x0a'

    # ESC t n - CP860 in the Bematech table numbering
    CODE_TABLE = 0x04

    # ESC ! n bits
    MODE_EMPHASIZED = 0x08
    MODE_DOUBLE_HEIGHT = 0x10
    MODE_DOUBLE_WIDTH = 0x20

    # ESC 3 n accepts 18 <= n <= 255 (n/144 inch)
    MIN_LINE_SPACING = 18
    MAX_LINE_SPACING = 255

    @property
    def name(self) -> str:
        return "ESC/Bematech"

    @property
    def max_character_size(self) -> CharacterSize:
        return CharacterSize(2, 2)

    def init(self) -> bytes:
        return self.ESC + b'@' + self.ESC + b't' + bytes([self.CODE_TABLE])

    def align(self, alignment: Alignment) -> bytes:
        if alignment is Alignment.CENTER:
            n = 1
        elif alignment is Alignment.RIGHT:
            n = 2
        else:
            n = 0
        return self.ESC + b'a' + bytes([n])

    def character_size(self, width: int, height: int, bold: bool = False) -> bytes:
        mode = (
            (self.MODE_EMPHASIZED if bold else 0)
            | (self.MODE_DOUBLE_HEIGHT if height >= 2 else 0)
            | (self.MODE_DOUBLE_WIDTH if width >= 2 else 0)
        )
        return self.ESC + b'!' + bytes([mode])

    def emphasis(self, enabled: bool) -> bytes:
        # ESC E on, ESC F off
        return self.ESC + (b'E' if enabled else b'F')

    def line_spacing(self, dots: Optional[int] = None) -> bytes:
        if dots is None:
            return self.ESC + b'2'
        return self.ESC + b'3' + bytes([min(self.MAX_LINE_SPACING, max(self.MIN_LINE_SPACING, int(dots)))])

    def cut(self, kind: CutKind = CutKind.FULL, feed_lines: int = 0) -> bytes:
        if kind is CutKind.PARTIAL:
            logger.debug("Partial cut not available in ESC/Bema, using full cut")
        return self.feed_lines(feed_lines) + self.ESC + b'i'

    def barcode_2d(self, data: str, size: int = 6) -> bytes:
        raise UnsupportedCommand(
            self.name,
            "QR code",
            "Switch the printer to ESC/POS mode to print QR codes",
        )

    def raster_image(self, bitmap: bytes, width: int, height: int) -> bytes:
        """GS v 0 0 xL xH yL yH data."""
        row_bytes = (width + 7) // 8
        expected = row_bytes * height
        if len(bitmap) != expected:
            raise ValueError(f"Bitmap is {len(bitmap)} bytes, expected {expected} for {width}x{height}")
        header = self.GS + b'v0\x00' + row_bytes.to_bytes(2, "little") + height.to_bytes(2, "little")
        return header + bytes(bitmap)

    def line_feed(self, lines: int = 1) -> bytes:
        return self.LF * max(0, lines)

    def feed_lines(self, lines: int) -> bytes:
        # ESC d selects double height in ESC/Bema, so feed with plain line feeds
        return self.line_feed(lines)
