"""Output buffers.

Backends return native segments; a buffer collects them in emission order.
Thermal segments are bytes, vector segments are lists of drawing operations.
"""

from typing import Any, Iterable, List


class ByteBuffer:
    """Growable command byte buffer."""

    def __init__(self):
        self._data = bytearray()

    def append(self, segment: bytes) -> None:
        self._data += segment

    def getvalue(self) -> bytes:
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)


class DrawingBuffer:
    """Ordered list of vector drawing operations."""

    def __init__(self):
        self.ops: List[Any] = []

    def append(self, segment: Iterable[Any]) -> None:
        self.ops.extend(segment)

    def __len__(self) -> int:
        return len(self.ops)
