"""Print node tree (the IR consumed by every backend).

A tree is built from immutable PrintNode values. Producers (UI adapters,
hand-written builders, JSON loaders) only have to deliver nodes whose
``type`` is one of the standard element names or a name covered by a
component mapping.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from thermalprint.errors import StructuralError

logger = logging.getLogger(__name__)


class NodeType(Enum):
    """Standard element types."""

    DOCUMENT = "document"
    PAGE = "page"
    VIEW = "view"
    TEXT = "text"
    TEXT_RUN = "textrun"
    IMAGE = "image"


# Alternative spellings accepted for standard types
_ALIASES: Dict[str, NodeType] = {
    "textnode": NodeType.TEXT_RUN,
    "text_run": NodeType.TEXT_RUN,
    "img": NodeType.IMAGE,
}

ComponentMapping = Mapping[str, Union[NodeType, str]]


@dataclass(frozen=True)
class PrintNode:
    """A single element of the print tree."""

    type: str
    props: Mapping[str, Any] = field(default_factory=dict)
    children: Tuple["PrintNode", ...] = ()
    style: Optional[Mapping[str, Any]] = None

    def __post_init__(self) -> None:
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))
        if isinstance(self.props, dict):
            object.__setattr__(self, "props", MappingProxyType(dict(self.props)))
        if isinstance(self.style, dict):
            object.__setattr__(self, "style", MappingProxyType(dict(self.style)))

    @property
    def content(self) -> str:
        """Literal text carried by this node (Text/TextRun)."""
        value = self.props.get("children")
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            return str(value)
        return ""

    @property
    def source(self) -> Any:
        """Image source reference, if any."""
        return self.props.get("source", self.props.get("src"))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PrintNode":
        """Build a tree from nested mappings.

        Accepts the shape produced by JSON serializers:
        ``{"type": ..., "props": {...}, "children": [...], "style": {...}}``.
        A string child becomes a TextRun.

        Raises:
            StructuralError: If a mapping is malformed or references itself.
        """
        return _node_from_mapping(data, "", 0, set())


def _node_from_mapping(data: Any, parent_path: str, index: int, active: set) -> PrintNode:
    if isinstance(data, PrintNode):
        return data
    if isinstance(data, (str, int, float)) and not isinstance(data, bool):
        return PrintNode("TextRun", {"children": str(data)})
    if not isinstance(data, Mapping):
        raise StructuralError(
            f"expected a node mapping, got {type(data).__name__}",
            f"{parent_path}[{index}]" if parent_path else "<root>",
        )

    node_type = data.get("type")
    if not isinstance(node_type, str) or not node_type:
        raise StructuralError("node has no type", f"{parent_path}[{index}]" if parent_path else "<root>")
    here = child_path(parent_path, node_type, index)

    if id(data) in active:
        raise StructuralError("cycle detected", here)
    active.add(id(data))
    try:
        children = [
            _node_from_mapping(child, here, i, active)
            for i, child in enumerate(data.get("children") or [])
        ]
    finally:
        active.discard(id(data))

    props = data.get("props") or {}
    style = data.get("style")
    if not isinstance(props, Mapping):
        raise StructuralError("props must be a mapping", here)
    if style is not None and not isinstance(style, Mapping):
        raise StructuralError("style must be a mapping", here)
    return PrintNode(node_type, dict(props), tuple(children), dict(style) if style else None)


def normalize_type(type_name: str, mapping: Optional[ComponentMapping] = None) -> Optional[NodeType]:
    """Resolve a node type name to a standard element type.

    Args:
        type_name: Raw ``type`` of a node
        mapping: Optional custom component names -> standard types

    Returns:
        The standard type, or None for unknown (transparent) elements
    """
    if mapping:
        target = mapping.get(type_name)
        if target is not None:
            if isinstance(target, NodeType):
                return target
            type_name = target

    key = type_name.lower()
    try:
        return NodeType(key)
    except ValueError:
        return _ALIASES.get(key)


def validate_tree(root: Any) -> None:
    """Check the structural invariants of a tree.

    The tree must consist of PrintNode values with a non-empty string type,
    mapping props/style, and no node may be its own ancestor.

    Raises:
        StructuralError: Naming the path of the first offending node
    """
    stack: List[Tuple[Any, str, int]] = [(root, "", 0)]
    on_path: List[int] = []

    while stack:
        node, parent_path, index = stack.pop()
        if node is None:
            # Marker: leaving a node
            on_path.pop()
            continue

        if not isinstance(node, PrintNode):
            where = f"{parent_path}[{index}]" if parent_path else "<root>"
            raise StructuralError(f"expected PrintNode, got {type(node).__name__}", where)
        if not isinstance(node.type, str) or not node.type:
            raise StructuralError("node has no type", f"{parent_path}[{index}]" if parent_path else "<root>")

        path = child_path(parent_path, node.type, index)
        if id(node) in on_path:
            raise StructuralError("cycle detected", path)
        if not isinstance(node.props, Mapping):
            raise StructuralError("props must be a mapping", path)
        if node.style is not None and not isinstance(node.style, Mapping):
            raise StructuralError("style must be a mapping", path)

        on_path.append(id(node))
        stack.append((None, "", 0))
        for i in range(len(node.children) - 1, -1, -1):
            stack.append((node.children[i], path, i))


def child_path(parent_path: str, node_type: str, index: int) -> str:
    if not parent_path:
        return node_type
    return f"{parent_path}/{node_type}[{index}]"


def iter_text(node: PrintNode, mapping: Optional[ComponentMapping] = None) -> Iterator[str]:
    """Yield the literal text of a node and its Text/TextRun descendants."""
    kind = normalize_type(node.type, mapping)
    if kind in (NodeType.TEXT, NodeType.TEXT_RUN):
        content = node.content
        if content:
            yield content
    for child in node.children:
        yield from iter_text(child, mapping)


def find_first(node: PrintNode, kind: NodeType, mapping: Optional[ComponentMapping] = None) -> Optional[PrintNode]:
    """Depth-first search for the first node of a given type."""
    if normalize_type(node.type, mapping) == kind:
        return node
    for child in node.children:
        found = find_first(child, kind, mapping)
        if found is not None:
            return found
    return None


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def document(*pages: PrintNode, **props: Any) -> PrintNode:
    """Build a Document node."""
    return PrintNode("Document", props, pages)


def page(
    *children: PrintNode,
    style: Optional[Mapping[str, Any]] = None,
    size: Optional[Mapping[str, float]] = None,
    wrap: Optional[bool] = None,
) -> PrintNode:
    """Build a Page node.

    Args:
        children: Page content
        style: Raw view style (padding, margin)
        size: Vector page size in points, e.g. ``{"width": 205}``
        wrap: Dynamic page height when no explicit height is given
    """
    props: Dict[str, Any] = {}
    if size is not None:
        props["size"] = dict(size)
    if wrap is not None:
        props["wrap"] = wrap
    return PrintNode("Page", props, children, style)


def view(*children: PrintNode, style: Optional[Mapping[str, Any]] = None) -> PrintNode:
    """Build a View node."""
    return PrintNode("View", {}, children, style)


def text(content: Union[str, int, float] = "", *runs: PrintNode,
         style: Optional[Mapping[str, Any]] = None) -> PrintNode:
    """Build a Text node with optional nested runs."""
    props = {"children": str(content)} if content != "" else {}
    return PrintNode("Text", props, runs, style)


def text_run(content: str) -> PrintNode:
    """Build a TextRun node."""
    return PrintNode("TextRun", {"children": content})


def image(source: Any, style: Optional[Mapping[str, Any]] = None) -> PrintNode:
    """Build an Image node from an in-memory bitmap or encoded image bytes."""
    return PrintNode("Image", {"source": source}, (), style)


def qr_code(data: str, size: int = 6, style: Optional[Mapping[str, Any]] = None) -> PrintNode:
    """Build an Image node rendered as a native two-dimensional barcode."""
    return PrintNode("Image", {"qrData": data, "qrSize": size}, (), style)


def row(*children: PrintNode, style: Optional[Mapping[str, Any]] = None) -> PrintNode:
    """Build a View laid out as a row."""
    merged = {"flexDirection": "row"}
    merged.update(style or {})
    return view(*children, style=merged)

