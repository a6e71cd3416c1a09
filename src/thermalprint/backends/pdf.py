"""Vector (PDF) backend.

Drawing operations are recorded while the tree is walked and replayed onto a
reportlab canvas once the page height is known. Coordinates are kept top-down
(y grows towards the bottom of the receipt) until replay.
"""

import logging
from dataclasses import dataclass
from io import BytesIO
from typing import List, Optional, Sequence

import numpy as np
from PIL import Image
from reportlab.graphics import renderPDF
from reportlab.graphics.barcode.qr import QrCodeWidget
from reportlab.graphics.shapes import Drawing
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from thermalprint.backends.base import CutKind, ProtocolBackend
from thermalprint.layout.box import Placement
from thermalprint.layout.resolver import Alignment, CharacterSize
from thermalprint.rendering.context import GenerationContext

logger = logging.getLogger(__name__)

REGULAR_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"

DEFAULT_FONT_SIZE = 10.0
DEFAULT_LINE_HEIGHT = 1.2

TRAILING_MARGIN = 5.0  # points below the lowest drawn element
DIVIDER_ADVANCE = 4.0
DIVIDER_WIDTH = 1.0

# One printer dot at 203 dpi
DOT_TO_PT = 72 / 203
# Typical module count of a small QR symbol
QR_MODULES = 25


@dataclass(frozen=True)
class TextOp:
    text: str
    x: float
    y: float  # baseline
    font: str
    size: float
    anchor: Alignment = Alignment.LEFT


@dataclass(frozen=True)
class LineOp:
    x1: float
    x2: float
    y: float
    dashed: bool = False


@dataclass(frozen=True, eq=False)
class ImageOp:
    image: Image.Image
    x: float
    y: float  # top edge
    width: float
    height: float


@dataclass(frozen=True)
class QrOp:
    data: str
    x: float
    y: float  # top edge
    side: float


def font_for(bold: bool) -> str:
    return BOLD_FONT if bold else REGULAR_FONT


def measure_text(text: str, bold: bool, point_size: float) -> float:
    """Rendered width of ``text`` in points."""
    return pdfmetrics.stringWidth(text, font_for(bold), point_size)


class PdfBackend(ProtocolBackend):
    """Records drawing operations for a single receipt page.

    The backend is bound to the conversion's GenerationContext: it reads the
    content box and moves the vertical cursor stored there.

    Args:
        context: Generation state of the conversion
        font_size: Default font size in points
        line_height: Line height as a multiple of the font size
    """

    def __init__(
        self,
        context: GenerationContext,
        font_size: float = DEFAULT_FONT_SIZE,
        line_height: float = DEFAULT_LINE_HEIGHT,
    ):
        self.context = context
        self.font_size = font_size
        self.line_height = line_height

    @property
    def name(self) -> str:
        return "PDF"

    @property
    def max_character_size(self) -> CharacterSize:
        return CharacterSize(2, 2)

    # --- Capability set -------------------------------------------------

    def init(self) -> List:
        self.context.cursor_y = 0.0
        self.context.max_y = 0.0
        return []

    def align(self, alignment: Alignment) -> List:
        # Alignment is carried by each drawing operation
        return []

    def character_size(self, width: int, height: int, bold: bool = False) -> List:
        return []

    def emphasis(self, enabled: bool) -> List:
        return []

    def line_spacing(self, dots: Optional[int] = None) -> List:
        return []

    def cut(self, kind: CutKind = CutKind.FULL, feed_lines: int = 0) -> List:
        # The page ends where the content ends
        return []

    def barcode_2d(self, data: str, size: int = 6) -> List:
        ctx = self.context
        side = min(ctx.content_width, max(1, size) * QR_MODULES * DOT_TO_PT)
        op = QrOp(data, self._block_x(side, ctx.align), ctx.cursor_y, side)
        ctx.advance(side)
        return [op]

    def raster_image(self, bitmap: bytes, width: int, height: int) -> List:
        bytes_per_line = (width + 7) // 8
        packed = np.frombuffer(bytes(bitmap), dtype=np.uint8).reshape(height, bytes_per_line)
        black = np.unpackbits(packed, axis=1)[:, :width].astype(bool)
        img = Image.fromarray(np.where(black, 0, 255).astype(np.uint8))
        return self.image(img, min(self.context.content_width, width * DOT_TO_PT), self.context.align)

    def line_feed(self, lines: int = 1) -> List:
        self.context.advance(max(0, lines) * self.line_advance(self.font_size))
        return []

    def feed_lines(self, lines: int) -> List:
        return self.line_feed(lines)

    # --- Vector drawing -------------------------------------------------

    def line_advance(self, point_size: float) -> float:
        return point_size * self.line_height

    def measure(self, text: str, bold: bool, point_size: float) -> float:
        return measure_text(text, bold, point_size)

    def wrap(self, text: str, bold: bool, point_size: float, width: float) -> List[str]:
        """Split text on newlines, then on font metrics to fit ``width``."""
        lines: List[str] = []
        for raw in text.split("\n"):
            lines.extend(simpleSplit(raw, font_for(bold), point_size, width) or [""])
        return lines

    def text_line(
        self,
        text: str,
        align: Alignment,
        bold: bool,
        point_size: float,
        padding_left: float = 0.0,
        padding_right: float = 0.0,
    ) -> List:
        """Draw one line of text in the content box and move below it."""
        ctx = self.context
        left = ctx.content_left + padding_left
        right = ctx.content_right - padding_right
        if align is Alignment.CENTER:
            x = (left + right) / 2
        elif align is Alignment.RIGHT:
            x = right
        else:
            x = left
        ops = []
        if text:
            ops.append(TextOp(text, x, ctx.cursor_y + point_size, font_for(bold), point_size, align))
        ctx.advance(self.line_advance(point_size))
        return ops

    def placements(self, placements: Sequence[Placement]) -> List:
        """Draw a row of placed cells on one line."""
        ctx = self.context
        if not placements:
            return []
        tallest = max(p.point_size for p in placements)
        baseline = ctx.cursor_y + tallest
        ops = [
            TextOp(p.text, ctx.content_left + p.x, baseline, font_for(p.bold), p.point_size, p.anchor)
            for p in placements
            if p.text
        ]
        ctx.advance(self.line_advance(tallest))
        return ops

    def divider(self, dashed: bool) -> List:
        ctx = self.context
        y = ctx.cursor_y + DIVIDER_ADVANCE / 2
        ctx.advance(DIVIDER_ADVANCE)
        return [LineOp(ctx.content_left, ctx.content_right, y, dashed)]

    def space(self, points: float) -> List:
        if points > 0:
            self.context.advance(points)
        return []

    def image(self, img: Image.Image, width: float, align: Optional[Alignment]) -> List:
        """Draw a bitmap ``width`` points wide, keeping its aspect ratio."""
        ctx = self.context
        if img.width == 0 or img.height == 0 or width <= 0:
            return []
        height = width * img.height / img.width
        op = ImageOp(img, self._block_x(width, align), ctx.cursor_y, width, height)
        ctx.advance(height)
        return [op]

    def _block_x(self, width: float, align: Optional[Alignment]) -> float:
        ctx = self.context
        if align is Alignment.CENTER:
            return ctx.content_left + (ctx.content_width - width) / 2
        if align is Alignment.RIGHT:
            return ctx.content_right - width
        return ctx.content_left

    # --- Output ---------------------------------------------------------

    def render(self, ops: Sequence, page_height: Optional[float] = None) -> bytes:
        """Replay recorded operations onto a single PDF page.

        Args:
            ops: Drawing operations in emission order
            page_height: Fixed height in points, or None to fit the content

        Returns:
            PDF document bytes
        """
        ctx = self.context
        height = page_height or (ctx.max_y + TRAILING_MARGIN)
        out = BytesIO()
        pdf = canvas.Canvas(out, pagesize=(ctx.page_width, height), invariant=1, pageCompression=0)
        pdf.setLineWidth(DIVIDER_WIDTH)

        for op in ops:
            if isinstance(op, TextOp):
                pdf.setFont(op.font, op.size)
                y = height - op.y
                if op.anchor is Alignment.CENTER:
                    pdf.drawCentredString(op.x, y, op.text)
                elif op.anchor is Alignment.RIGHT:
                    pdf.drawRightString(op.x, y, op.text)
                else:
                    pdf.drawString(op.x, y, op.text)
            elif isinstance(op, LineOp):
                if op.dashed:
                    pdf.setDash(2, 2)
                else:
                    pdf.setDash()
                pdf.line(op.x1, height - op.y, op.x2, height - op.y)
                pdf.setDash()
            elif isinstance(op, ImageOp):
                pdf.drawImage(
                    ImageReader(op.image), op.x, height - op.y - op.height,
                    width=op.width, height=op.height,
                )
            elif isinstance(op, QrOp):
                self._draw_qr(pdf, op, height)

        pdf.showPage()
        pdf.save()
        logger.debug(f"Rendered PDF page {ctx.page_width:.1f}x{height:.1f}pt with {len(ops)} operations")
        return out.getvalue()

    def _draw_qr(self, pdf: canvas.Canvas, op: QrOp, page_height: float) -> None:
        widget = QrCodeWidget(op.data, barLevel="M")
        x1, y1, x2, y2 = widget.getBounds()
        scale_x = op.side / (x2 - x1)
        scale_y = op.side / (y2 - y1)
        drawing = Drawing(op.side, op.side, transform=[scale_x, 0, 0, scale_y, 0, 0])
        drawing.add(widget)
        renderPDF.draw(drawing, pdf, op.x, page_height - op.y - op.side)
