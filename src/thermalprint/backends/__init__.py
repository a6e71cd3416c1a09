"""Protocol backends."""

from typing import Dict, Type

from thermalprint.backends.base import CutKind, ProtocolBackend
from thermalprint.backends.escbema import EscBematechBackend
from thermalprint.backends.escpos import EscPosBackend
from thermalprint.backends.pdf import PdfBackend
from thermalprint.errors import ConfigurationError

THERMAL_BACKENDS: Dict[str, Type[ProtocolBackend]] = {
    "escpos": EscPosBackend,
    "escbematech": EscBematechBackend,
}


def create_thermal_backend(name: str) -> ProtocolBackend:
    """Instantiate a thermal backend by its option name.

    Raises:
        ConfigurationError: If no such backend exists
    """
    try:
        return THERMAL_BACKENDS[name]()
    except KeyError:
        raise ConfigurationError(
            f"Unknown thermal backend {name!r} (expected one of {sorted(THERMAL_BACKENDS)})"
        ) from None


__all__ = [
    "CutKind",
    "ProtocolBackend",
    "EscPosBackend",
    "EscBematechBackend",
    "PdfBackend",
    "THERMAL_BACKENDS",
    "create_thermal_backend",
]
