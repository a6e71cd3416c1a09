"""ESC/POS command backend.

Standard ESC/POS, using ``ESC !`` for character sizing (max 2x2) since it
is understood by far more printers than ``GS !``.
"""

import logging
from typing import Optional

from thermalprint.backends.base import CutKind, ProtocolBackend
from thermalprint.encoding.barcode import frame_qr
from thermalprint.layout.resolver import Alignment, CharacterSize

logger = logging.getLogger(__name__)


class EscPosBackend(ProtocolBackend):
    """Encodes printer primitives as ESC/POS bytes."""

    # ESC/POS command constants
    ESC = b'\x1b'
    GS = b'\x1d'
    LF = b'\x0a'

    # ESC t n - character code table
    CODE_TABLE = 0x03  # CP860 (Portuguese)

    # ESC ! n bits
    MODE_EMPHASIZED = 0x08
    MODE_DOUBLE_HEIGHT = 0x10
    MODE_DOUBLE_WIDTH = 0x20

    MIN_LINE_SPACING = 0
    MAX_LINE_SPACING = 255

    @property
    def name(self) -> str:
        return "ESC/POS"

    @property
    def max_character_size(self) -> CharacterSize:
        return CharacterSize(2, 2)

    def init(self) -> bytes:
        """ESC @ followed by the code table selection."""
        return self.ESC + b'@' + self.ESC + b't' + bytes([self.CODE_TABLE])

    def align(self, alignment: Alignment) -> bytes:
        align_byte = {
            Alignment.LEFT: b'\x00',
            Alignment.CENTER: b'\x01',
            Alignment.RIGHT: b'\x02',
        }
        return self.ESC + b'a' + align_byte.get(alignment, b'\x00')

    def character_size(self, width: int, height: int, bold: bool = False) -> bytes:
        n = 0
        if height >= 2:
            n |= self.MODE_DOUBLE_HEIGHT
        if width >= 2:
            n |= self.MODE_DOUBLE_WIDTH
        if bold:
            n |= self.MODE_EMPHASIZED
        return self.ESC + b'!' + bytes([n])

    def emphasis(self, enabled: bool) -> bytes:
        return self.ESC + b'E' + (b'\x01' if enabled else b'\x00')

    def line_spacing(self, dots: Optional[int] = None) -> bytes:
        if dots is None:
            # ESC 2 - default spacing (1/6 inch)
            return self.ESC + b'2'
        dots = max(self.MIN_LINE_SPACING, min(self.MAX_LINE_SPACING, int(dots)))
        return self.ESC + b'3' + bytes([dots])

    def cut(self, kind: CutKind = CutKind.FULL, feed_lines: int = 0) -> bytes:
        commands = [self.feed_lines(feed_lines)]
        commands.append(self.ESC + (b'i' if kind is CutKind.FULL else b'm'))
        return b''.join(commands)

    def barcode_2d(self, data: str, size: int = 6) -> bytes:
        return frame_qr(data, size)

    def raster_image(self, bitmap: bytes, width: int, height: int) -> bytes:
        """GS v 0 m xL xH yL yH data, with m = 0 (normal density)."""
        bytes_per_line = (width + 7) // 8
        if len(bitmap) != bytes_per_line * height:
            raise ValueError(
                f"Bitmap is {len(bitmap)} bytes, expected {bytes_per_line * height} "
                f"for {width}x{height}"
            )
        commands = [
            self.GS + b'v0',
            b'\x00',
            bytes([bytes_per_line & 0xFF, (bytes_per_line >> 8) & 0xFF]),
            bytes([height & 0xFF, (height >> 8) & 0xFF]),
            bytes(bitmap),
        ]
        return b''.join(commands)

    def line_feed(self, lines: int = 1) -> bytes:
        return self.LF * max(0, lines)

    def feed_lines(self, lines: int) -> bytes:
        # ESC d n - print and feed n lines
        if lines <= 0:
            return b''
        return self.ESC + b'd' + bytes([min(lines, 255)])
