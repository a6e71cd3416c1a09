"""Conversion entry points.

Compiles a print tree into thermal printer command bytes (ESC/POS,
ESC/Bematech) or into a single-page PDF.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple, Union

from thermalprint.backends import CutKind, PdfBackend, create_thermal_backend
from thermalprint.ir.nodes import PrintNode, validate_tree
from thermalprint.layout.resolver import StyleResolver, Target
from thermalprint.rendering.buffer import ByteBuffer, DrawingBuffer
from thermalprint.rendering.context import Diagnostic, GenerationContext
from thermalprint.rendering.thermal import ThermalTraverser
from thermalprint.rendering.vector import VectorTraverser
from thermalprint.settings import ConversionOptions

logger = logging.getLogger(__name__)

Tree = Union[PrintNode, Mapping[str, Any]]


@dataclass(frozen=True)
class ConversionResult:
    """Output of a conversion.

    Attributes:
        data: Command bytes or PDF document bytes
        backend: Name of the protocol that produced ``data``
        diagnostics: Elements that were skipped or degraded
    """

    data: bytes
    backend: str
    diagnostics: Tuple[Diagnostic, ...] = ()

    @property
    def degraded(self) -> bool:
        return bool(self.diagnostics)


def convert(tree: Tree, options: Optional[ConversionOptions] = None) -> ConversionResult:
    """Compile a print tree.

    Args:
        tree: Root node, or the equivalent nested mappings
        options: Conversion options (library settings when omitted)

    Returns:
        The output bytes plus any diagnostics

    Raises:
        StructuralError: If the tree is malformed (nothing is emitted)
        ConfigurationError: If the options cannot be used
    """
    if options is None:
        options = ConversionOptions.from_settings()
    root = tree if isinstance(tree, PrintNode) else PrintNode.from_dict(tree)
    validate_tree(root)

    logger.info(f"Converting {root.type} tree with {options.backend} backend")
    if options.is_thermal:
        result = _convert_thermal(root, options)
    else:
        result = _convert_vector(root, options)

    if result.diagnostics:
        logger.info(f"Conversion finished with {len(result.diagnostics)} diagnostic(s), {len(result.data)} bytes")
    else:
        logger.info(f"Conversion finished, {len(result.data)} bytes")
    return result


def _convert_thermal(root: PrintNode, options: ConversionOptions) -> ConversionResult:
    backend = create_thermal_backend(options.backend)
    buffer = ByteBuffer()
    context = GenerationContext(page_width=options.paper_width, buffer=buffer, debug=options.debug)
    resolver = StyleResolver(Target.THERMAL, backend.max_character_size)

    ThermalTraverser(
        backend,
        context,
        resolver,
        options.component_mapping,
        line_spacing=options.line_spacing,
        dots_per_char=options.dots_per_char,
    ).run(root)

    if options.cut != "none":
        context.emit("cut", backend.cut(CutKind(options.cut), options.feed_before_cut))

    return ConversionResult(buffer.getvalue(), backend.name, tuple(context.diagnostics))


def _convert_vector(root: PrintNode, options: ConversionOptions) -> ConversionResult:
    buffer = DrawingBuffer()
    context = GenerationContext(page_width=options.point_width, buffer=buffer, debug=options.debug)
    backend = PdfBackend(context)
    resolver = StyleResolver(Target.VECTOR, backend.max_character_size, backend.font_size)

    traverser = VectorTraverser(backend, context, resolver, options.component_mapping)
    traverser.point_height = options.point_height
    traverser.run(root)

    data = backend.render(buffer.ops, traverser.final_height())
    return ConversionResult(data, backend.name, tuple(context.diagnostics))


def to_escpos(tree: Tree, **options: Any) -> bytes:
    """Compile a tree to thermal printer bytes (ESC/POS unless ``backend`` says otherwise)."""
    options.setdefault("backend", "escpos")
    return convert(tree, ConversionOptions.from_settings(**options)).data


def to_pdf(tree: Tree, **options: Any) -> bytes:
    """Compile a tree to PDF bytes."""
    options["backend"] = "pdf"
    return convert(tree, ConversionOptions.from_settings(**options)).data
