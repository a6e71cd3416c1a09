"""CP860 (Portuguese) text encoding for thermal printers.

ASCII passes through untouched, characters of the code page map to their
single byte, everything else prints as ``?``.
"""

CODEPAGE = "cp860"
FALLBACK_BYTE = 0x3F  # '?'

# Printers render 0xFF as a blank glyph of varying width
_SUBSTITUTIONS = str.maketrans({"\u00a0": " "})


def encode_cp860(text: str) -> bytes:
    """Encode text to CP860 bytes.

    Never fails: unmapped characters become ``?``.
    """
    return text.translate(_SUBSTITUTIONS).encode(CODEPAGE, errors="replace")


def is_cp860_supported(char: str) -> bool:
    """Check whether a single character has its own CP860 byte."""
    if len(char) != 1:
        return False
    try:
        char.encode(CODEPAGE)
    except UnicodeEncodeError:
        return False
    return True
