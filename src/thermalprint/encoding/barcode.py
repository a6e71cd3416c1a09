"""Two-dimensional barcode framing.

The printer's onboard generator renders the symbol; we only wrap the
payload in the ESC/POS ``GS ( k`` function sequence.
"""

GS = b'\x1d'

QR_MODEL_2 = 0x32
QR_ERROR_LEVEL_M = 0x31

MIN_MODULE_SIZE = 1
MAX_MODULE_SIZE = 16


def _qr_function(fn: int, payload: bytes) -> bytes:
    # GS ( k pL pH cn=49 fn [payload]
    length = len(payload) + 2
    return GS + b'(k' + bytes([length & 0xFF, (length >> 8) & 0xFF, 0x31, fn]) + payload


def frame_qr(data: str, size: int = 6) -> bytes:
    """Build the ESC/POS command sequence printing ``data`` as a QR code.

    Args:
        data: Payload, encoded as UTF-8
        size: Module size in dots (clamped to 1-16)

    Returns:
        Model select, module size, error level, store and print functions
    """
    size = max(MIN_MODULE_SIZE, min(MAX_MODULE_SIZE, int(size)))
    payload = data.encode("utf-8")
    if len(payload) + 3 > 0xFFFF:
        raise ValueError(f"QR payload too large ({len(payload)} bytes)")

    return b''.join([
        _qr_function(0x41, bytes([QR_MODEL_2, 0x00])),   # select model 2
        _qr_function(0x43, bytes([size])),               # module size
        _qr_function(0x45, bytes([QR_ERROR_LEVEL_M])),   # error correction M
        _qr_function(0x50, b'\x30' + payload),           # store data
        _qr_function(0x51, b'\x30'),                     # print
    ])
