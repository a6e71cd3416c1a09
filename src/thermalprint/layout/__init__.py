"""Style resolution and box-model layout."""

from thermalprint.layout.box import (
    Justify,
    Placement,
    RowCell,
    Segment,
    fit_to_width,
    layout_thermal_row,
    layout_vector_row,
    wrap_text,
)
from thermalprint.layout.resolver import (
    Alignment,
    BorderStyle,
    CharacterSize,
    Edges,
    ResolvedStyle,
    StyleResolver,
    Target,
    classify_font_size,
    divider_text,
    is_bold,
    px_to_lines,
    resolve_alignment,
)

__all__ = [
    # Resolver
    "Alignment",
    "BorderStyle",
    "CharacterSize",
    "Edges",
    "ResolvedStyle",
    "StyleResolver",
    "Target",
    "classify_font_size",
    "divider_text",
    "is_bold",
    "px_to_lines",
    "resolve_alignment",
    # Box model
    "Justify",
    "Placement",
    "RowCell",
    "Segment",
    "fit_to_width",
    "layout_thermal_row",
    "layout_vector_row",
    "wrap_text",
]
