"""Style resolution.

Turns the raw style of a node plus what it inherits from its ancestors into
a ResolvedStyle expressed in target units: character cells and line feeds
for thermal printers, points for the vector page.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence

from thermalprint.ir.styles import TextStyle, ViewStyle, Width, parse_length

logger = logging.getLogger(__name__)

# Pixels per printed line feed
PX_PER_LINE = 20

# CSS pixel to PDF point
PX_TO_PT = 0.75

# The one font family that implies bold
BOLD_FONT_FAMILY = "Helvetica-Bold"

DASH_GLYPH = "-"
RULE_GLYPH = "─"  # box drawings light horizontal (CP860 0xC4)


class Alignment(Enum):
    """Text alignment options."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class BorderStyle(Enum):
    """Divider styles."""

    SOLID = "solid"
    DASHED = "dashed"


class Target(Enum):
    """Unit system of a conversion."""

    THERMAL = "thermal"
    VECTOR = "vector"


class CharacterSize(NamedTuple):
    """Character multipliers (width x height)."""

    width: int = 1
    height: int = 1


NORMAL_SIZE = CharacterSize(1, 1)


@dataclass(frozen=True)
class Edges:
    """Per-edge spacing in target units."""

    top: float = 0
    right: float = 0
    bottom: float = 0
    left: float = 0


@dataclass(frozen=True)
class ResolvedStyle:
    """Effective style of one node for one conversion pass."""

    align: Alignment = Alignment.LEFT
    bold: bool = False
    size: CharacterSize = NORMAL_SIZE
    point_size: float = 10.0
    width: Optional[float] = None
    margin: Edges = field(default_factory=Edges)
    padding: Edges = field(default_factory=Edges)
    border_top: Optional[BorderStyle] = None
    border_bottom: Optional[BorderStyle] = None


def classify_font_size(px: Optional[float]) -> CharacterSize:
    """Map a pixel font size to thermal multipliers.

    <13 -> 1x1, 13-18 -> 1x2, 19-24 -> 2x1, >=25 -> 2x2.
    """
    if px is None or math.isnan(px):
        return NORMAL_SIZE
    if px < 13:
        return CharacterSize(1, 1)
    if px < 19:
        return CharacterSize(1, 2)
    if px < 25:
        return CharacterSize(2, 1)
    return CharacterSize(2, 2)


def clamp_size(size: CharacterSize, ceiling: CharacterSize) -> CharacterSize:
    """Limit multipliers to what a backend can print."""
    return CharacterSize(
        max(1, min(size.width, ceiling.width)),
        max(1, min(size.height, ceiling.height)),
    )


def is_bold(style: TextStyle) -> bool:
    """Check whether a text style asks for bold output."""
    weight = style.font_weight
    if weight == "bold":
        return True
    if isinstance(weight, (int, float)) and not isinstance(weight, bool):
        if weight >= 700:
            return True
    elif isinstance(weight, str):
        try:
            if float(weight) >= 700:
                return True
        except ValueError:
            pass
    return style.font_family == BOLD_FONT_FAMILY


def alignment_fallback(align_items: Optional[str]) -> Optional[Alignment]:
    """Alignment implied by a container's alignItems."""
    if align_items == "center":
        return Alignment.CENTER
    if align_items == "flex-end":
        return Alignment.RIGHT
    return None


def resolve_alignment(text_align: Optional[str], fallback: Optional[Alignment] = None) -> Alignment:
    """Explicit textAlign, then the inherited fallback, then left."""
    if text_align in ("left", "center", "right"):
        return Alignment(text_align)
    return fallback or Alignment.LEFT


def px_to_lines(px: Optional[float]) -> int:
    """Convert a pixel spacing to whole line feeds (rounded down)."""
    if not px or px <= 0:
        return 0
    return int(px // PX_PER_LINE)


def px_to_pt(px: Optional[float]) -> float:
    if not px or px <= 0:
        return 0.0
    return px * PX_TO_PT


def border_style(value: Optional[str]) -> Optional[BorderStyle]:
    """Classify a CSS border shorthand. Only "dashed" is distinguished."""
    if not value:
        return None
    return BorderStyle.DASHED if "dashed" in value else BorderStyle.SOLID


def divider_text(style: BorderStyle, width: int) -> str:
    """A divider line of exactly ``width`` glyphs."""
    glyph = DASH_GLYPH if style is BorderStyle.DASHED else RULE_GLYPH
    return glyph * max(0, width)


def parse_percentage(width: Width) -> Optional[float]:
    """``"25%"`` -> 0.25, anything else -> None."""
    if isinstance(width, str) and width.strip().endswith("%"):
        try:
            return float(width.strip()[:-1]) / 100
        except ValueError:
            return None
    return None


class StyleResolver:
    """Resolves raw node styles for one target.

    Args:
        target: Unit system (thermal cells or vector points)
        max_size: Backend multiplier ceiling
        default_point_size: Vector font size used when none is given
    """

    def __init__(
        self,
        target: Target = Target.THERMAL,
        max_size: CharacterSize = CharacterSize(2, 2),
        default_point_size: float = 10.0,
    ):
        self.target = target
        self.max_size = max_size
        self.default_point_size = default_point_size

    def resolve_text(self, style: TextStyle, fallback: Optional[Alignment] = None) -> ResolvedStyle:
        """Resolve a Text/TextRun style against the inherited alignment."""
        if self.target is Target.VECTOR:
            padding = Edges(left=px_to_pt(style.padding_left), right=px_to_pt(style.padding_right))
        else:
            padding = Edges()
        return ResolvedStyle(
            align=resolve_alignment(style.text_align, fallback),
            bold=is_bold(style),
            size=clamp_size(classify_font_size(style.font_size), self.max_size),
            point_size=self.point_size(style.font_size),
            padding=padding,
        )

    def resolve_view(self, style: ViewStyle, parent_width: float) -> ResolvedStyle:
        """Resolve a container style; width is resolved against the parent."""
        return ResolvedStyle(
            align=alignment_fallback(style.align_items) or Alignment.LEFT,
            width=self.resolve_width(style.width, parent_width),
            margin=self._edges(style.margin_top, style.margin_right, style.margin_bottom, style.margin_left),
            padding=self._edges(style.padding_top, style.padding_right, style.padding_bottom, style.padding_left),
            border_top=border_style(style.border_top),
            border_bottom=border_style(style.border_bottom),
        )

    def point_size(self, font_size: Optional[float]) -> float:
        if font_size is None or font_size <= 0:
            return self.default_point_size
        return font_size * PX_TO_PT

    def resolve_width(self, width: Width, parent_width: float) -> Optional[float]:
        """Resolve an explicit width, or None when absent/unparsable.

        Percentages are relative to the parent content width. Bare numbers
        are characters (thermal) or pixels (vector).
        """
        if width is None or width == "":
            return None
        percent = parse_percentage(width)
        if percent is not None:
            value = percent * parent_width
            if self.target is Target.THERMAL:
                value = float(round(value))
        else:
            number = parse_length(width)
            if number is None:
                logger.debug(f"Ignoring unsupported width {width!r}")
                return None
            value = float(int(number)) if self.target is Target.THERMAL else number * PX_TO_PT
        return max(0.0, min(value, parent_width))

    def resolve_widths(self, widths: Sequence[Width], total: float) -> List[float]:
        """Split a row's width among its cells.

        Cells with an explicit width claim it first; the remainder is
        divided equally among the others. In thermal mode the split is in
        whole characters and leftover columns go to the earliest cells.
        Explicit widths never add up to more than ``total``.
        """
        resolved = [self.resolve_width(w, total) for w in widths]
        remaining = max(0.0, total)
        for i, w in enumerate(resolved):
            if w is not None:
                resolved[i] = min(w, remaining)
                remaining -= resolved[i]
        open_cells = [i for i, w in enumerate(resolved) if w is None]

        result = [w or 0.0 for w in resolved]
        if not open_cells:
            return result

        if self.target is Target.THERMAL:
            share, extra = divmod(int(remaining), len(open_cells))
            for n, i in enumerate(open_cells):
                result[i] = float(share + (1 if n < extra else 0))
        else:
            for i in open_cells:
                result[i] = remaining / len(open_cells)
        return result

    def _edges(self, top, right, bottom, left) -> Edges:
        if self.target is Target.THERMAL:
            # Left/right spacing has no thermal equivalent
            return Edges(top=px_to_lines(top), bottom=px_to_lines(bottom))
        return Edges(px_to_pt(top), px_to_pt(right), px_to_pt(bottom), px_to_pt(left))
