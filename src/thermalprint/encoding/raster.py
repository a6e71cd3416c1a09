"""Monochrome raster images for thermal printers.

Images are decoded with Pillow, scaled, dithered to 1 bit and packed
row-major, 8 pixels per byte, most significant bit first, black = 1.
"""

import base64
import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Any

import numpy as np
from PIL import Image, UnidentifiedImageError

from thermalprint.errors import AssetError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RasterImage:
    """Packed 1-bit bitmap."""

    data: bytes
    width: int  # pixels
    height: int  # pixels

    @property
    def bytes_per_row(self) -> int:
        return (self.width + 7) // 8


def load_image(source: Any) -> Image.Image:
    """Decode an image source to a Pillow image.

    Accepts Pillow images, encoded image bytes, ``data:`` URIs and numpy
    arrays.

    Raises:
        AssetError: If the source cannot be decoded
    """
    if isinstance(source, Image.Image):
        return source

    if isinstance(source, np.ndarray):
        try:
            return Image.fromarray(source)
        except (TypeError, ValueError) as e:
            raise AssetError(f"unsupported array image: {e}") from e

    if isinstance(source, str) and source.startswith("data:"):
        _, _, payload = source.partition(",")
        try:
            source = base64.b64decode(payload, validate=False)
        except ValueError as e:
            raise AssetError(f"invalid data URI: {e}") from e

    if isinstance(source, (bytes, bytearray, memoryview)):
        try:
            img = Image.open(BytesIO(bytes(source)))
            img.load()
            return img
        except (UnidentifiedImageError, OSError) as e:
            raise AssetError(f"cannot decode image: {e}") from e

    raise AssetError(f"unsupported image source {type(source).__name__}")


def to_monochrome(img: Image.Image, width: int, dither: bool = True) -> Image.Image:
    """Scale to ``width`` pixels (keeping aspect ratio) and reduce to 1 bit."""
    width = max(1, int(width))
    aspect = img.height / img.width if img.width else 1.0
    height = max(1, int(round(width * aspect)))

    if img.mode in ("RGBA", "LA", "P"):
        # Flatten transparency onto white paper
        rgba = img.convert("RGBA")
        background = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
        img = Image.alpha_composite(background, rgba)

    resample = Image.Resampling.LANCZOS if dither else Image.Resampling.NEAREST
    img = img.convert("L").resize((width, height), resample)
    if dither:
        return img.convert("1", dither=Image.Dither.FLOYDSTEINBERG)
    return img.convert("1", dither=Image.Dither.NONE)


def pack_bitmap(img: Image.Image) -> RasterImage:
    """Pack a 1-bit image into printer raster rows."""
    if img.mode != "1":
        img = img.convert("1")
    # Mode "1" arrays are True for white
    black = ~np.asarray(img, dtype=bool)
    data = np.packbits(black, axis=1).tobytes()
    return RasterImage(data=data, width=img.width, height=img.height)


def rasterize(source: Any, width: int, dither: bool = True) -> RasterImage:
    """Decode, scale and pack an image source for a thermal printer.

    Args:
        source: Image source (see load_image)
        width: Target width in printer dots
        dither: Apply Floyd-Steinberg dithering

    Raises:
        AssetError: If the source cannot be decoded
    """
    img = load_image(source)
    if img.width == 0 or img.height == 0:
        raise AssetError("image has no pixels")
    raster = pack_bitmap(to_monochrome(img, width, dither))
    logger.debug(f"Rasterized image to {raster.width}x{raster.height} dots")
    return raster
