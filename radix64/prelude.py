"""
Ready-made engines.

    STANDARD              standard alphabet, padded, canonical padding required
    STANDARD_NO_PAD       standard alphabet, unpadded, padding rejected
    STANDARD_INDIFFERENT  standard alphabet, unpadded, any padding accepted
    URL_SAFE              URL-safe alphabet, padded, canonical padding required
    URL_SAFE_NO_PAD       URL-safe alphabet, unpadded, padding rejected
    URL_SAFE_INDIFFERENT  URL-safe alphabet, unpadded, any padding accepted

All of them reject nonzero trailing bits. Derive a lenient variant with
``STANDARD.with_config(decode_allow_trailing_bits=True)``.
"""

from . import alphabet
from .config import NO_PAD, PAD, DecodePaddingMode
from .engine import Engine

__all__ = [
    "STANDARD",
    "STANDARD_NO_PAD",
    "STANDARD_INDIFFERENT",
    "URL_SAFE",
    "URL_SAFE_NO_PAD",
    "URL_SAFE_INDIFFERENT",
]

_INDIFFERENT = NO_PAD.override(decode_padding_mode=DecodePaddingMode.INDIFFERENT)

STANDARD = Engine(alphabet.STANDARD, PAD, name="STANDARD")
STANDARD_NO_PAD = Engine(alphabet.STANDARD, NO_PAD, name="STANDARD_NO_PAD")
STANDARD_INDIFFERENT = Engine(alphabet.STANDARD, _INDIFFERENT, name="STANDARD_INDIFFERENT")

URL_SAFE = Engine(alphabet.URL_SAFE, PAD, name="URL_SAFE")
URL_SAFE_NO_PAD = Engine(alphabet.URL_SAFE, NO_PAD, name="URL_SAFE_NO_PAD")
URL_SAFE_INDIFFERENT = Engine(alphabet.URL_SAFE, _INDIFFERENT, name="URL_SAFE_INDIFFERENT")
