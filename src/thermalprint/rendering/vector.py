"""Vector renderer: point geometry, PDF output."""

import logging
from typing import Any, List, Mapping, Optional

from thermalprint.encoding.raster import load_image
from thermalprint.errors import AssetError
from thermalprint.ir.nodes import PrintNode
from thermalprint.ir.styles import ViewStyle
from thermalprint.layout.box import RowCell, layout_vector_row
from thermalprint.layout.resolver import Alignment, BorderStyle, ResolvedStyle, px_to_pt
from thermalprint.rendering.traverser import Traverser

logger = logging.getLogger(__name__)

# Share of the page content width given to images whose View sets no width
UNCONSTRAINED_IMAGE_SHARE = 0.5


class VectorTraverser(Traverser):
    """Emits a print tree as drawing operations on a PdfBackend.

    Geometry is in points; ``context.page_width`` is the page width.
    """

    # Height requested by the conversion options
    point_height: Optional[float] = None
    # Read from the Page element
    page_height: Optional[float] = None
    wrap: Optional[bool] = None

    def begin_document(self) -> None:
        self.context.emit("init", self.backend.init())

    def begin_page(self, node: PrintNode) -> None:
        size = node.props.get("size")
        if isinstance(size, Mapping):
            width = size.get("width")
            height = size.get("height")
            if isinstance(width, (int, float)) and width > 0:
                self.context.page_width = float(width)
            if isinstance(height, (int, float)) and height > 0:
                self.page_height = float(height)
        wrap = node.props.get("wrap")
        if isinstance(wrap, bool):
            self.wrap = wrap

    def text(self, content: str, style: ResolvedStyle) -> None:
        backend = self.backend
        width = self.context.content_width - style.padding.left - style.padding.right
        for line in backend.wrap(content, style.bold, style.point_size, max(1.0, width)):
            self.context.emit("text", backend.text_line(
                line, style.align, style.bold, style.point_size,
                style.padding.left, style.padding.right,
            ))

    def row(self, cells: List[RowCell], justify: Optional[str], path: str) -> None:
        placements = layout_vector_row(
            cells, self.context.content_width, justify, self.resolver, self.backend.measure,
        )
        self.context.emit("row", self.backend.placements(placements))

    def divider(self, style: BorderStyle) -> None:
        self.context.emit("divider", self.backend.divider(style is BorderStyle.DASHED))

    def space(self, amount: float) -> None:
        self.context.emit("space", self.backend.space(amount))

    def empty_view(self, style: ViewStyle) -> None:
        # Empty views reserve their explicit height
        self.space(px_to_pt(style.height))

    def image(self, source: Any, align: Alignment, path: str) -> None:
        ctx = self.context
        try:
            img = load_image(source)
        except AssetError as e:
            ctx.warn(path, f"skipping image: {e}")
            return
        width = ctx.content_width
        if self.image_frame.width is None:
            width *= UNCONSTRAINED_IMAGE_SHARE
        ctx.emit("image", self.backend.image(img, width, align))

    def qr_code(self, data: str, size: int, align: Alignment, path: str) -> None:
        self.context.align = align
        self.context.emit("barcode_2d", self.backend.barcode_2d(data, size))

    def final_height(self) -> Optional[float]:
        """Fixed page height, or None when the page fits its content.

        An explicit Page height wins, then ``wrap=True`` (dynamic), then the
        height from the options. Content below a fixed height is clipped.
        """
        if self.page_height is not None:
            height = self.page_height
        elif self.wrap:
            return None
        else:
            height = self.point_height
        if height is not None and self.context.max_y > height:
            logger.warning(f"Content ({self.context.max_y:.1f}pt) overflows fixed page height {height:.1f}pt")
        return height
