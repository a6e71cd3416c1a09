"""Exception types raised by thermalprint conversions."""

from typing import Optional


class ThermalPrintError(Exception):
    """Base class for all conversion errors."""


class ConfigurationError(ThermalPrintError):
    """Conversion options could not be turned into a working pipeline."""


class StructuralError(ThermalPrintError):
    """The IR tree is malformed.

    Raised before anything is emitted, so a failed conversion never
    returns a partial buffer.
    """

    def __init__(self, message: str, path: str = ""):
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class AssetError(ThermalPrintError):
    """An image attached to a node could not be decoded."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class UnsupportedCommand(ThermalPrintError):
    """A backend has no encoding for a requested primitive.

    The traversal engine skips the element and records a diagnostic; the
    conversion itself still succeeds.
    """

    def __init__(self, backend: str, command: str, hint: str = ""):
        self.backend = backend
        self.command = command
        self.hint = hint
        message = f"{command} is not supported by {backend}"
        super().__init__(f"{message}. {hint}" if hint else message)
