"""
Abstract base class for protocol backends.

A backend turns the small set of printer primitives used by the traversal
engine into its own native segments: command bytes for thermal printers,
drawing operations for the vector page.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

from thermalprint.layout.resolver import Alignment, CharacterSize


class CutKind(Enum):
    """Paper cut options."""

    FULL = "full"
    PARTIAL = "partial"


class ProtocolBackend(ABC):
    """Capability set every output protocol implements."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human readable protocol name."""
        ...

    @property
    @abstractmethod
    def max_character_size(self) -> CharacterSize:
        """Largest width/height multipliers the protocol can print."""
        ...

    @abstractmethod
    def init(self) -> Any:
        """Reset the device to a known state and select the code page."""
        ...

    @abstractmethod
    def align(self, alignment: Alignment) -> Any:
        """Set the alignment register."""
        ...

    @abstractmethod
    def character_size(self, width: int, height: int, bold: bool = False) -> Any:
        """Set the character size register (and the matching bold bit)."""
        ...

    @abstractmethod
    def emphasis(self, enabled: bool) -> Any:
        """Set the bold register."""
        ...

    @abstractmethod
    def line_spacing(self, dots: Optional[int] = None) -> Any:
        """
        Set the line spacing.

        Args:
            dots: Spacing in dots, or None for the device default
        """
        ...

    @abstractmethod
    def cut(self, kind: CutKind = CutKind.FULL, feed_lines: int = 0) -> Any:
        """Feed ``feed_lines`` lines, then cut the paper."""
        ...

    @abstractmethod
    def barcode_2d(self, data: str, size: int = 6) -> Any:
        """
        Print a QR code.

        Raises:
            UnsupportedCommand: If the protocol has no QR encoding
        """
        ...

    @abstractmethod
    def raster_image(self, bitmap: bytes, width: int, height: int) -> Any:
        """
        Print a packed 1-bit bitmap.

        Args:
            bitmap: Row-major packed rows, MSB first, black = 1
            width: Width in dots
            height: Height in dots
        """
        ...

    @abstractmethod
    def line_feed(self, lines: int = 1) -> Any:
        """Terminate the current line ``lines`` times."""
        ...

    @abstractmethod
    def feed_lines(self, lines: int) -> Any:
        """Advance the paper by ``lines`` lines."""
        ...
