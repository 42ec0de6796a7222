"""
Lookup tables derived from an Alphabet.

Decode table: 256 entries, byte value -> 6-bit value or INVALID.
Encode pair table: 4096 entries, 12-bit value -> the two symbols for it.

Tables are plain ``bytes``/``tuple`` objects, built once per alphabet and
never mutated, so concurrent readers need no locking. The build cache is
the only shared mutable state and is guarded by a lock.
"""

from __future__ import annotations

import threading
from typing import NamedTuple

from .alphabet import Alphabet

__all__ = ["INVALID", "Tables", "build_decode_table", "build_encode_pairs", "tables_for"]

# Outside 0..63; no printable ASCII symbol can collide with it
INVALID = 0xFF


class Tables(NamedTuple):
    """Tables for one alphabet."""

    decode: bytes
    """256 entries, for use with ``bytes.translate``."""

    encode_pairs: tuple[bytes, ...]
    """4096 two-byte entries indexed by a 12-bit value."""


def build_decode_table(alphabet: Alphabet) -> bytes:
    """Map every byte value to its 6-bit value, or INVALID if not a symbol."""
    table = bytearray([INVALID]) * 256
    for value, symbol in enumerate(alphabet.as_bytes()):
        table[symbol] = value
    return bytes(table)


def build_encode_pairs(alphabet: Alphabet) -> tuple[bytes, ...]:
    """Two-symbol entries for each 12-bit value (high 6 bits first)."""
    symbols = alphabet.as_bytes()
    return tuple(bytes((hi, lo)) for hi in symbols for lo in symbols)


_cache: dict[Alphabet, Tables] = {}
_cache_lock = threading.Lock()


def tables_for(alphabet: Alphabet) -> Tables:
    """Return the tables for ``alphabet``, building them on first use."""
    tables = _cache.get(alphabet)
    if tables is not None:
        return tables
    with _cache_lock:
        tables = _cache.get(alphabet)
        if tables is None:
            tables = Tables(build_decode_table(alphabet), build_encode_pairs(alphabet))
            _cache[alphabet] = tables
    return tables
