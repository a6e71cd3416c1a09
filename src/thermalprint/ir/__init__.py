"""Print node tree and style extraction."""

from thermalprint.ir.nodes import (
    ComponentMapping,
    NodeType,
    PrintNode,
    document,
    image,
    normalize_type,
    page,
    qr_code,
    row,
    text,
    text_run,
    validate_tree,
    view,
)
from thermalprint.ir.styles import TextStyle, ViewStyle, parse_length

__all__ = [
    # Nodes
    "ComponentMapping",
    "NodeType",
    "PrintNode",
    "normalize_type",
    "validate_tree",
    # Builders
    "document",
    "page",
    "view",
    "row",
    "text",
    "text_run",
    "image",
    "qr_code",
    # Styles
    "TextStyle",
    "ViewStyle",
    "parse_length",
]
