"""Shared fixtures."""

from io import BytesIO

import pytest
from PIL import Image


def _png(img: Image.Image) -> bytes:
    out = BytesIO()
    img.save(out, format="PNG")
    return out.getvalue()


@pytest.fixture
def black_png() -> bytes:
    """A 10x10 solid black PNG."""
    return _png(Image.new("L", (10, 10), 0))


@pytest.fixture
def wide_png() -> bytes:
    """A 40x20 image, left half black, right half white."""
    img = Image.new("L", (40, 20), 255)
    img.paste(0, (0, 0, 20, 20))
    return _png(img)
