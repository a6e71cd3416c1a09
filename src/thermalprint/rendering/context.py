"""Per-conversion generation state."""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Tuple, Union

from thermalprint.layout.resolver import Alignment, CharacterSize
from thermalprint.rendering.buffer import ByteBuffer, DrawingBuffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal problem met while converting."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass
class GenerationContext:
    """Mutable state owned by a single conversion.

    Registers mirror the printer's current alignment, bold and size state.
    None means unknown: the printer was just reset, so the next text must
    set the register explicitly.

    Horizontal geometry is a stack of (left, right) insets in target units
    (characters or points) applied to the full page width.
    """

    page_width: float
    buffer: Union[ByteBuffer, DrawingBuffer]
    debug: bool = False
    align: Optional[Alignment] = None
    bold: Optional[bool] = None
    size: Optional[CharacterSize] = None
    cursor_y: float = 0.0
    max_y: float = 0.0
    insets: List[Tuple[float, float]] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def content_left(self) -> float:
        return sum(left for left, _ in self.insets)

    @property
    def content_right(self) -> float:
        return self.page_width - sum(right for _, right in self.insets)

    @property
    def content_width(self) -> float:
        return max(0.0, self.content_right - self.content_left)

    @contextmanager
    def inset(self, left: float = 0.0, right: float = 0.0) -> Iterator[None]:
        """Narrow the content box for the duration of a subtree."""
        self.insets.append((max(0.0, left), max(0.0, right)))
        try:
            yield
        finally:
            self.insets.pop()

    @contextmanager
    def narrowed_to(self, width: Optional[float]) -> Iterator[None]:
        """Limit the content width to ``width``, anchored at the left edge."""
        if width is None or width >= self.content_width:
            yield
            return
        with self.inset(right=self.content_width - width):
            yield

    @contextmanager
    def frame(self, left: float, width: float) -> Iterator[None]:
        """Replace the content box with ``width`` units starting at ``left``."""
        outer = self.insets
        self.insets = [(max(0.0, left), max(0.0, self.page_width - left - width))]
        try:
            yield
        finally:
            self.insets = outer

    def reset_registers(self) -> None:
        """Forget register state (after a printer reset)."""
        self.align = None
        self.bold = None
        self.size = None

    def advance(self, amount: float) -> None:
        """Move the vertical cursor down."""
        self.cursor_y += amount
        self.max_y = max(self.max_y, self.cursor_y)

    def emit(self, command: str, segment: Any) -> None:
        """Append a backend segment to the output buffer."""
        if self.debug:
            logger.debug(f"{command}: {_describe(segment)}")
        self.buffer.append(segment)

    def warn(self, path: str, message: str) -> None:
        """Record a degraded-success diagnostic."""
        diagnostic = Diagnostic(path, message)
        self.diagnostics.append(diagnostic)
        logger.warning(str(diagnostic))


def _describe(segment: Any) -> str:
    if isinstance(segment, (bytes, bytearray)):
        return segment[:32].hex(" ") + (" ..." if len(segment) > 32 else "")
    return repr(segment)
