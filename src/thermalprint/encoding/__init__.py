"""Byte-level encoders shared by the thermal backends."""

from thermalprint.encoding.barcode import frame_qr
from thermalprint.encoding.cp860 import encode_cp860, is_cp860_supported
from thermalprint.encoding.raster import RasterImage, load_image, pack_bitmap, rasterize

__all__ = [
    "encode_cp860",
    "is_cp860_supported",
    "frame_qr",
    "RasterImage",
    "load_image",
    "pack_bitmap",
    "rasterize",
]
