"""
Module-level one-liners.

These mirror the Engine methods with the engine as a trailing argument,
defaulting to ``STANDARD``::

    >>> import radix64
    >>> radix64.encode(b"fo")
    'Zm8='
    >>> radix64.decode("Zm8", radix64.STANDARD_NO_PAD)
    b'fo'
"""

from __future__ import annotations

from typing import Any

from .engine import Engine, decoded_len_estimate, encoded_len
from .prelude import STANDARD

__all__ = [
    "encode",
    "decode",
    "encode_into",
    "decode_into",
    "encoded_len",
    "decoded_len_estimate",
]


def encode(data: Any, engine: Engine = STANDARD) -> str:
    """
    Encode bytes with ``engine``.

    Args:
        data: Bytes-like object, or str (encoded as UTF-8 first).
        engine: Engine to use. Default is STANDARD.

    Example:
        >>> encode(b"f")
        'Zg=='
    """
    return engine.encode(data)


def decode(symbols: Any, engine: Engine = STANDARD) -> bytes:
    """
    Decode symbols with ``engine``.

    Raises:
        DecodeError: See ``Engine.decode`` for the subclasses.

    Example:
        >>> decode("Zm9vYmFy")
        b'foobar'
    """
    return engine.decode(symbols)


def encode_into(data: Any, out: Any, engine: Engine = STANDARD) -> int:
    """Encode into ``out``; return the number of bytes written."""
    return engine.encode_into(data, out)


def decode_into(symbols: Any, out: Any, engine: Engine = STANDARD) -> int:
    """Decode into ``out``; return the number of bytes written."""
    return engine.decode_into(symbols, out)
