"""Raw style extraction.

Styles arrive as loose mappings (camelCase keys, numbers or strings such as
``"12px"``). These helpers pull out the fields the layout engine
understands and ignore the rest.
"""

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

_LENGTH_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*(px|pt)?\s*$")

Width = Union[int, float, str, None]


def parse_length(value: Any) -> Optional[float]:
    """Parse a length in pixels.

    Accepts numbers and strings like ``"12"``, ``"12px"``. Point strings
    (``"9pt"``) are converted back to pixels. Anything else is None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        match = _LENGTH_RE.match(value)
        if match:
            number = float(match.group(1))
            if match.group(2) == "pt":
                return number / 0.75
            return number
    return None


@dataclass(frozen=True)
class TextStyle:
    """Text-related style fields."""

    font_size: Optional[float] = None
    font_weight: Union[str, int, float, None] = None
    font_family: Optional[str] = None
    text_align: Optional[str] = None
    padding_left: Optional[float] = None
    padding_right: Optional[float] = None

    @classmethod
    def from_mapping(cls, style: Optional[Mapping[str, Any]]) -> "TextStyle":
        if not style:
            return cls()
        padding = parse_length(style.get("padding"))
        return cls(
            font_size=parse_length(style.get("fontSize")),
            font_weight=style.get("fontWeight"),
            font_family=style.get("fontFamily"),
            text_align=style.get("textAlign"),
            padding_left=_edge(style, "paddingLeft", padding),
            padding_right=_edge(style, "paddingRight", padding),
        )


@dataclass(frozen=True)
class ViewStyle:
    """Layout-related style fields of a container."""

    flex_direction: str = "column"
    justify_content: Optional[str] = None
    align_items: Optional[str] = None
    padding_top: Optional[float] = None
    padding_bottom: Optional[float] = None
    padding_left: Optional[float] = None
    padding_right: Optional[float] = None
    margin_top: Optional[float] = None
    margin_bottom: Optional[float] = None
    margin_left: Optional[float] = None
    margin_right: Optional[float] = None
    border_top: Optional[str] = None
    border_bottom: Optional[str] = None
    width: Width = None
    height: Optional[float] = None

    @property
    def is_row(self) -> bool:
        return self.flex_direction == "row"

    @property
    def has_width(self) -> bool:
        return self.width is not None and self.width != ""

    @classmethod
    def from_mapping(cls, style: Optional[Mapping[str, Any]]) -> "ViewStyle":
        if not style:
            return cls()
        padding = parse_length(style.get("padding"))
        margin = parse_length(style.get("margin"))
        direction = style.get("flexDirection")
        return cls(
            flex_direction="row" if direction == "row" else "column",
            justify_content=style.get("justifyContent"),
            align_items=style.get("alignItems"),
            padding_top=_edge(style, "paddingTop", padding),
            padding_bottom=_edge(style, "paddingBottom", padding),
            padding_left=_edge(style, "paddingLeft", padding),
            padding_right=_edge(style, "paddingRight", padding),
            margin_top=_edge(style, "marginTop", margin),
            margin_bottom=_edge(style, "marginBottom", margin),
            margin_left=_edge(style, "marginLeft", margin),
            margin_right=_edge(style, "marginRight", margin),
            border_top=_border(style.get("borderTop")),
            border_bottom=_border(style.get("borderBottom")),
            width=style.get("width"),
            height=parse_length(style.get("height")),
        )


def _edge(style: Mapping[str, Any], key: str, shorthand: Optional[float]) -> Optional[float]:
    # Explicit edge wins over the shorthand
    value = parse_length(style.get(key))
    return shorthand if value is None else value


def _border(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None
