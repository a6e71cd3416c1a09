"""Thermal renderer: character-cell geometry, command byte output."""

import logging
from typing import Any, List, Optional

from thermalprint.backends.base import ProtocolBackend
from thermalprint.encoding.cp860 import encode_cp860
from thermalprint.encoding.raster import rasterize
from thermalprint.errors import AssetError, UnsupportedCommand
from thermalprint.layout.box import RowCell, layout_thermal_row, wrap_text
from thermalprint.layout.resolver import (
    NORMAL_SIZE,
    Alignment,
    BorderStyle,
    CharacterSize,
    ResolvedStyle,
    StyleResolver,
    divider_text,
)
from thermalprint.rendering.context import GenerationContext
from thermalprint.rendering.traverser import Traverser

logger = logging.getLogger(__name__)


class ThermalTraverser(Traverser):
    """Emits a print tree as thermal printer commands.

    Geometry is measured in characters of the 1x1 font; ``context.page_width``
    is the paper width in characters.

    Args:
        backend: Thermal protocol backend
        context: Generation state (byte buffer)
        resolver: Thermal style resolver
        mapping: Custom component names
        line_spacing: Line spacing in dots set after init, if any
        dots_per_char: Printer dots per 1x1 character cell
    """

    def __init__(
        self,
        backend: ProtocolBackend,
        context: GenerationContext,
        resolver: StyleResolver,
        mapping=None,
        line_spacing: Optional[int] = None,
        dots_per_char: int = 12,
    ):
        super().__init__(backend, context, resolver, mapping)
        self.line_spacing = line_spacing
        self.dots_per_char = dots_per_char

    # --- Registers ------------------------------------------------------

    def set_registers(self, align: Alignment, size: CharacterSize, bold: Optional[bool]) -> None:
        """Emit alignment, size and bold, each only when it changes.

        ``bold=None`` leaves the bold register alone.
        """
        ctx = self.context
        if ctx.align != align:
            ctx.emit("align", self.backend.align(align))
            ctx.align = align
        if ctx.size != size:
            # ESC ! also rewrites the emphasis bit
            bit = bold if bold is not None else bool(ctx.bold)
            ctx.emit("character_size", self.backend.character_size(size.width, size.height, bit))
            ctx.size = size
        if bold is not None and ctx.bold != bold:
            ctx.emit("emphasis", self.backend.emphasis(bold))
            ctx.bold = bold

    def write_line(self, line: str) -> None:
        ctx = self.context
        if line:
            ctx.emit("text", encode_cp860(line))
        ctx.emit("line_feed", self.backend.line_feed(1))

    # --- Primitives -----------------------------------------------------

    def begin_document(self) -> None:
        ctx = self.context
        ctx.emit("init", self.backend.init())
        ctx.reset_registers()
        if self.line_spacing is not None:
            ctx.emit("line_spacing", self.backend.line_spacing(self.line_spacing))

    def text(self, content: str, style: ResolvedStyle) -> None:
        if not content:
            self.write_line("")
            return
        columns = max(1, int(self.context.content_width) // style.size.width)
        self.set_registers(style.align, style.size, style.bold)
        for line in wrap_text(content, columns):
            self.write_line(line)

    def row(self, cells: List[RowCell], justify: Optional[str], path: str) -> None:
        ctx = self.context
        segments = layout_thermal_row(cells, int(ctx.content_width), justify, self.resolver)
        self.set_registers(Alignment.LEFT, NORMAL_SIZE, None)
        for segment in segments:
            if segment.text.strip():
                self.set_registers(Alignment.LEFT, NORMAL_SIZE, segment.bold)
            if segment.text:
                ctx.emit("text", encode_cp860(segment.text))
        ctx.emit("line_feed", self.backend.line_feed(1))

    def divider(self, style: BorderStyle) -> None:
        self.set_registers(Alignment.LEFT, NORMAL_SIZE, None)
        self.write_line(divider_text(style, int(self.context.content_width)))

    def space(self, amount: float) -> None:
        lines = int(amount)
        if lines > 0:
            self.context.emit("line_feed", self.backend.line_feed(lines))

    def image(self, source: Any, align: Alignment, path: str) -> None:
        ctx = self.context
        dots = int(ctx.content_width) * self.dots_per_char
        try:
            raster = rasterize(source, dots)
        except AssetError as e:
            ctx.warn(path, f"skipping image: {e}")
            return
        self.set_registers(align, ctx.size or NORMAL_SIZE, None)
        ctx.emit("raster_image", self.backend.raster_image(raster.data, raster.width, raster.height))

    def qr_code(self, data: str, size: int, align: Alignment, path: str) -> None:
        ctx = self.context
        try:
            segment = self.backend.barcode_2d(data, size)
        except UnsupportedCommand as e:
            ctx.warn(path, str(e))
            return
        except ValueError as e:
            ctx.warn(path, f"skipping QR code: {e}")
            return
        self.set_registers(align, ctx.size or NORMAL_SIZE, None)
        ctx.emit("barcode_2d", segment)
