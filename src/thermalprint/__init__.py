"""thermalprint - compile print trees to thermal printer commands or PDF."""

from thermalprint.converter import ConversionResult, convert, to_escpos, to_pdf
from thermalprint.errors import (
    AssetError,
    ConfigurationError,
    StructuralError,
    ThermalPrintError,
    UnsupportedCommand,
)
from thermalprint.ir import PrintNode, document, image, page, qr_code, row, text, text_run, view
from thermalprint.settings import ConversionOptions, Settings, get_settings

__version__ = "0.1.0"

__all__ = [
    # Conversion
    "convert",
    "to_escpos",
    "to_pdf",
    "ConversionResult",
    "ConversionOptions",
    "Settings",
    "get_settings",
    # Tree
    "PrintNode",
    "document",
    "page",
    "view",
    "row",
    "text",
    "text_run",
    "image",
    "qr_code",
    # Errors
    "ThermalPrintError",
    "ConfigurationError",
    "StructuralError",
    "AssetError",
    "UnsupportedCommand",
]
