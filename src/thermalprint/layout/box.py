"""Box-model geometry for rows and wrapped text.

Thermal geometry is in character cells of a 1x1 font; vector geometry is in
points relative to the left edge of the content box.
"""

import logging
import textwrap
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from thermalprint.ir.styles import Width
from thermalprint.layout.resolver import Alignment, StyleResolver

logger = logging.getLogger(__name__)

# (text, bold, point size) -> rendered width in points
Measure = Callable[[str, bool, float], float]


class Justify:
    """justifyContent values with a layout effect."""

    START = "flex-start"
    CENTER = "center"
    SPACE_BETWEEN = "space-between"


@dataclass(frozen=True)
class RowCell:
    """Flattened content of one row child."""

    text: str
    align: Alignment = Alignment.LEFT
    bold: bool = False
    width: Width = None
    point_size: float = 10.0

    @property
    def has_width(self) -> bool:
        return self.width is not None and self.width != ""


@dataclass(frozen=True)
class Segment:
    """A run of a thermal row line printed with one bold state."""

    text: str
    bold: bool = False


@dataclass(frozen=True)
class Placement:
    """A vector row cell anchored at ``x``."""

    text: str
    x: float
    anchor: Alignment
    bold: bool
    point_size: float


def uses_space_between(justify: Optional[str], cells: Sequence[RowCell]) -> bool:
    """space-between only holds for exactly two cells without widths."""
    return (
        justify == Justify.SPACE_BETWEEN
        and len(cells) == 2
        and not any(cell.has_width for cell in cells)
    )


def fit_to_width(text: str, width: int, align: Alignment) -> str:
    """Truncate or pad ``text`` to exactly ``width`` cells."""
    width = max(0, width)
    clipped = text[:width]
    padding = width - len(clipped)
    if padding == 0:
        return clipped
    if align is Alignment.RIGHT:
        return " " * padding + clipped
    if align is Alignment.CENTER:
        left = padding // 2
        return " " * left + clipped + " " * (padding - left)
    return clipped + " " * padding


def wrap_text(text: str, columns: int) -> List[str]:
    """Split on newlines, then word-wrap each line to ``columns`` cells.

    Words longer than a line are broken; blank source lines stay blank.
    """
    lines: List[str] = []
    for raw in text.splitlines() or [""]:
        lines.extend(textwrap.wrap(raw, max(1, columns), break_on_hyphens=False) or [""])
    return lines


def layout_thermal_row(
    cells: Sequence[RowCell],
    paper_width: int,
    justify: Optional[str],
    resolver: StyleResolver,
) -> List[Segment]:
    """Lay out a row as one printable line.

    Returns:
        Segments whose concatenated text is the printed line
    """
    if not cells:
        return []

    if uses_space_between(justify, cells):
        left, right = cells
        used = len(left.text) + len(right.text)
        if used < paper_width:
            return [
                Segment(left.text, left.bold),
                Segment(" " * (paper_width - used)),
                Segment(right.text, right.bold),
            ]
        logger.debug(f"space-between row does not fit ({used} >= {paper_width}), using columns")

    elif justify == Justify.CENTER:
        total = sum(len(cell.text) for cell in cells)
        lead = max(0, (paper_width - total) // 2)
        segments = [Segment(" " * lead)] if lead else []
        budget = paper_width - lead
        for cell in cells:
            if budget <= 0:
                break
            piece = cell.text[:budget]
            budget -= len(piece)
            segments.append(Segment(piece, cell.bold))
        return segments

    widths = resolver.resolve_widths([cell.width for cell in cells], paper_width)
    return [
        Segment(fit_to_width(cell.text, int(width), cell.align), cell.bold)
        for cell, width in zip(cells, widths)
    ]


def clip_to_width(text: str, width: float, bold: bool, point_size: float, measure: Measure) -> str:
    """Drop trailing characters until the text fits ``width`` points."""
    clipped = text
    while clipped and measure(clipped, bold, point_size) > width:
        clipped = clipped[:-1]
    return clipped


def layout_vector_row(
    cells: Sequence[RowCell],
    content_width: float,
    justify: Optional[str],
    resolver: StyleResolver,
    measure: Measure,
) -> List[Placement]:
    """Place row cells in points relative to the content box."""
    if not cells:
        return []

    if uses_space_between(justify, cells):
        left, right = cells
        used = sum(measure(c.text, c.bold, c.point_size) for c in cells)
        if used < content_width:
            return [
                Placement(left.text, 0.0, Alignment.LEFT, left.bold, left.point_size),
                Placement(right.text, content_width, Alignment.RIGHT, right.bold, right.point_size),
            ]

    elif justify == Justify.CENTER:
        widths = [measure(c.text, c.bold, c.point_size) for c in cells]
        x = max(0.0, (content_width - sum(widths)) / 2)
        placements = []
        for cell, width in zip(cells, widths):
            placements.append(Placement(cell.text, x, Alignment.LEFT, cell.bold, cell.point_size))
            x += width
        return placements

    widths = resolver.resolve_widths([cell.width for cell in cells], content_width)
    placements = []
    x = 0.0
    for cell, width in zip(cells, widths):
        clipped = clip_to_width(cell.text, width, cell.bold, cell.point_size, measure)
        if cell.align is Alignment.RIGHT:
            anchor_x = x + width
        elif cell.align is Alignment.CENTER:
            anchor_x = x + width / 2
        else:
            anchor_x = x
        placements.append(Placement(clipped, anchor_x, cell.align, cell.bold, cell.point_size))
        x += width
    return placements
