"""Depth-first tree walk shared by the thermal and vector renderers.

Every container is emitted in box order:

    margin-top, border-top, padding-top,
    [inset] children [/inset],
    padding-bottom, border-bottom, margin-bottom

Subclasses supply the target-specific primitives (text, rows, dividers,
vertical space and images).
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from thermalprint.ir.nodes import ComponentMapping, NodeType, PrintNode, child_path, iter_text, normalize_type
from thermalprint.ir.styles import TextStyle, ViewStyle
from thermalprint.layout.box import RowCell
from thermalprint.layout.resolver import (
    Alignment,
    BorderStyle,
    ResolvedStyle,
    StyleResolver,
    alignment_fallback,
)
from thermalprint.rendering.context import GenerationContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageFrame:
    """Width and alignment the nearest enclosing View gives its images."""

    width: Optional[float] = None
    align: Optional[Alignment] = None


class Traverser(ABC):
    """Walks a print tree and drives a backend.

    Args:
        backend: Protocol backend receiving the primitives
        context: Generation state of this conversion
        resolver: Style resolver for the target's units
        mapping: Custom component names -> standard element types
    """

    def __init__(
        self,
        backend: Any,
        context: GenerationContext,
        resolver: StyleResolver,
        mapping: Optional[ComponentMapping] = None,
    ):
        self.backend = backend
        self.context = context
        self.resolver = resolver
        self.mapping = mapping
        # Content box of the current Page as (left, right)
        self.page_box: Optional[Tuple[float, float]] = None
        self.image_frame = ImageFrame()

    def run(self, root: PrintNode) -> None:
        """Emit the whole tree.

        A bare Page or View root is treated as if wrapped in a Document.
        """
        if self.kind_of(root) is not NodeType.DOCUMENT:
            self.begin_document()
        self.visit(root, root.type, None)

    def kind_of(self, node: PrintNode) -> Optional[NodeType]:
        return normalize_type(node.type, self.mapping)

    def visit(self, node: PrintNode, path: str, fallback: Optional[Alignment]) -> None:
        kind = self.kind_of(node)
        if kind is NodeType.DOCUMENT:
            self.visit_document(node, path)
        elif kind is NodeType.PAGE:
            self.visit_page(node, path)
        elif kind is NodeType.VIEW:
            self.visit_view(node, path, fallback)
        elif kind in (NodeType.TEXT, NodeType.TEXT_RUN):
            self.visit_text(node, path, fallback)
        elif kind is NodeType.IMAGE:
            self.visit_image(node, path, fallback)
        else:
            # Unknown element: transparent container
            self.visit_children(node, path, fallback)

    def visit_children(self, node: PrintNode, path: str, fallback: Optional[Alignment]) -> None:
        for i, child in enumerate(node.children):
            self.visit(child, child_path(path, child.type, i), fallback)

    # --- Containers -----------------------------------------------------

    def visit_document(self, node: PrintNode, path: str) -> None:
        self.begin_document()
        for i, child in enumerate(node.children):
            if self.kind_of(child) is NodeType.PAGE:
                self.visit_page(child, child_path(path, child.type, i))
            else:
                logger.debug(f"Ignoring non-page child {child.type!r} of {path}")

    def visit_page(self, node: PrintNode, path: str) -> None:
        self.begin_page(node)
        view_style = ViewStyle.from_mapping(node.style)
        resolved = self.resolver.resolve_view(view_style, self.context.content_width)

        def body() -> None:
            ctx = self.context
            self.page_box = (ctx.content_left, ctx.content_right)
            self.image_frame = ImageFrame()
            self.visit_children(node, path, None)

        self.box(resolved, body)

    def visit_view(self, node: PrintNode, path: str, fallback: Optional[Alignment]) -> None:
        view_style = ViewStyle.from_mapping(node.style)
        resolved = self.resolver.resolve_view(view_style, self.context.content_width)
        own_align = alignment_fallback(view_style.align_items)
        inherited = own_align or fallback

        def body() -> None:
            if not node.children:
                self.empty_view(view_style)
            elif view_style.is_row and len(node.children) > 1:
                self.row(self.row_cells(node), view_style.justify_content, path)
            else:
                outer = self.image_frame
                self.image_frame = ImageFrame(resolved.width, own_align)
                try:
                    self.visit_children(node, path, inherited)
                finally:
                    self.image_frame = outer

        self.box(resolved, body)

    def box(self, style: ResolvedStyle, body) -> None:
        """Emit a container's spacing and borders around ``body``."""
        ctx = self.context
        with ctx.narrowed_to(style.width):
            self.space(style.margin.top)
            with ctx.inset(style.margin.left, style.margin.right):
                if style.border_top is not None:
                    self.divider(style.border_top)
                self.space(style.padding.top)

                with ctx.inset(style.padding.left, style.padding.right):
                    body()

                self.space(style.padding.bottom)
                if style.border_bottom is not None:
                    self.divider(style.border_bottom)
            self.space(style.margin.bottom)

    # --- Rows -----------------------------------------------------------

    def row_cells(self, node: PrintNode) -> List[RowCell]:
        """Flatten each child of a row into its text and first text style."""
        cells = []
        for child in node.children:
            first = self._first_text(child)
            text_style = TextStyle.from_mapping(first.style if first is not None else None)
            child_style = child.style or {}
            if self.kind_of(child) is NodeType.VIEW:
                view_style = ViewStyle.from_mapping(child_style)
                fallback = (
                    alignment_fallback(view_style.align_items)
                    or _justify_fallback(view_style.justify_content)
                )
            else:
                fallback = None
            resolved = self.resolver.resolve_text(text_style, fallback)
            cells.append(RowCell(
                text="".join(iter_text(child, self.mapping)).replace("\n", " "),
                align=resolved.align,
                bold=resolved.bold,
                width=child_style.get("width"),
                point_size=resolved.point_size,
            ))
        return cells

    def _first_text(self, node: PrintNode) -> Optional[PrintNode]:
        if self.kind_of(node) is NodeType.TEXT:
            return node
        for child in node.children:
            found = self._first_text(child)
            if found is not None:
                return found
        return None

    # --- Leaves ---------------------------------------------------------

    def visit_text(self, node: PrintNode, path: str, fallback: Optional[Alignment]) -> None:
        style = self.resolver.resolve_text(TextStyle.from_mapping(node.style), fallback)
        self.text("".join(iter_text(node, self.mapping)), style)

    def visit_image(self, node: PrintNode, path: str, fallback: Optional[Alignment]) -> None:
        """Emit an Image node inside the box of its nearest enclosing View.

        Only that View's width and alignItems apply; the image's own
        textAlign, then its justifyContent/alignItems, take precedence.
        Constraints of further ancestors are ignored.
        """
        align = self.image_alignment(node)
        with self.image_box():
            qr_data = node.props.get("qrData")
            if qr_data is not None:
                self.qr_code(str(qr_data), _qr_size(node.props.get("qrSize")), align, path)
            elif node.source is None:
                self.context.warn(path, "image has no source")
            else:
                self.image(node.source, align, path)

    def image_alignment(self, node: PrintNode) -> Alignment:
        text_style = TextStyle.from_mapping(node.style)
        if text_style.text_align in ("left", "center", "right"):
            return Alignment(text_style.text_align)
        view_style = ViewStyle.from_mapping(node.style)
        own = alignment_fallback(view_style.align_items) or _justify_fallback(view_style.justify_content)
        return own or self.image_frame.align or Alignment.LEFT

    def image_box(self):
        """Content box of the current Page, narrowed to the frame width."""
        ctx = self.context
        left, right = self.page_box if self.page_box is not None else (0.0, ctx.page_width)
        width = right - left
        if self.image_frame.width is not None:
            width = min(width, self.image_frame.width)
        return ctx.frame(left, width)

    # --- Target primitives ----------------------------------------------

    @abstractmethod
    def begin_document(self) -> None:
        ...

    def begin_page(self, node: PrintNode) -> None:
        pass

    @abstractmethod
    def text(self, content: str, style: ResolvedStyle) -> None:
        ...

    @abstractmethod
    def row(self, cells: List[RowCell], justify: Optional[str], path: str) -> None:
        ...

    @abstractmethod
    def divider(self, style: BorderStyle) -> None:
        ...

    @abstractmethod
    def space(self, amount: float) -> None:
        ...

    def empty_view(self, style: ViewStyle) -> None:
        pass

    @abstractmethod
    def image(self, source: Any, align: Alignment, path: str) -> None:
        ...

    @abstractmethod
    def qr_code(self, data: str, size: int, align: Alignment, path: str) -> None:
        ...


def _justify_fallback(justify: Optional[str]) -> Optional[Alignment]:
    if justify == "center":
        return Alignment.CENTER
    if justify == "flex-end":
        return Alignment.RIGHT
    return None


def _qr_size(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 6
