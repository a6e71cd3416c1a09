"""Tree traversal and output assembly."""

from thermalprint.rendering.buffer import ByteBuffer, DrawingBuffer
from thermalprint.rendering.context import Diagnostic, GenerationContext

__all__ = ["ByteBuffer", "DrawingBuffer", "Diagnostic", "GenerationContext"]
