"""
Alphabets: the 64 symbols an engine encodes into.

An Alphabet is an ordered string of 64 distinct printable ASCII symbols
(index = 6-bit value) plus an optional pad symbol. It is plain data: the
lookup tables derived from it live in the Engine.

Example:
    >>> from radix64.alphabet import Alphabet
    >>> Alphabet.STANDARD.symbols[:4]
    'ABCD'
    >>> shell_safe = Alphabet(Alphabet.URL_SAFE.symbols, pad=None, name="shell")
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import ClassVar

from .exceptions import AlphabetError

__all__ = [
    "Alphabet",
    "ALPHABET_SIZE",
    "DEFAULT_PAD",
    "STANDARD",
    "URL_SAFE",
    "CRYPT",
    "BCRYPT",
    "IMAP_MUTF7",
    "BIN_HEX",
]

ALPHABET_SIZE = 64
DEFAULT_PAD = "="

# Printable ASCII, space included
_PRINTABLE_MIN = 0x20
_PRINTABLE_MAX = 0x7E


def _check_symbol(symbol: str, index: int | None, what: str) -> None:
    if (
        not isinstance(symbol, str)
        or len(symbol) != 1
        or not _PRINTABLE_MIN <= ord(symbol) <= _PRINTABLE_MAX
    ):
        raise AlphabetError(
            f"{what} {symbol!r} is not a single printable ASCII character",
            code="ALPHABET_UNPRINTABLE_SYMBOL",
            details={"index": index, "symbol": symbol},
        )


@dataclass(frozen=True, slots=True)
class Alphabet:
    """
    Ordered set of 64 symbols plus an optional pad symbol.

    Parameters
    ----------
    symbols : str
        Exactly 64 distinct printable ASCII characters. ``symbols[i]``
        encodes the 6-bit value ``i``.
    pad : str | None
        Pad symbol, or None for an alphabet that can never carry padding.
        Must not be one of ``symbols``.
    name : str
        Label used in reprs and log records. Not part of equality.

    Raises
    ------
    AlphabetError
        If any of the rules above is broken.
    """

    symbols: str
    pad: str | None = DEFAULT_PAD
    name: str = field(default="custom", compare=False)

    # Named alphabets, attached after the class body
    STANDARD: ClassVar[Alphabet]
    URL_SAFE: ClassVar[Alphabet]
    CRYPT: ClassVar[Alphabet]
    BCRYPT: ClassVar[Alphabet]
    IMAP_MUTF7: ClassVar[Alphabet]
    BIN_HEX: ClassVar[Alphabet]

    def __post_init__(self) -> None:
        if not isinstance(self.symbols, str):
            raise AlphabetError(
                f"symbols must be str, got {type(self.symbols).__name__}",
                code="ALPHABET_INVALID_LENGTH",
                details={"type": type(self.symbols).__name__},
            )
        if len(self.symbols) != ALPHABET_SIZE:
            raise AlphabetError(
                f"alphabet must have exactly {ALPHABET_SIZE} symbols, got {len(self.symbols)}",
                code="ALPHABET_INVALID_LENGTH",
                details={"length": len(self.symbols)},
            )

        seen: dict[str, int] = {}
        for index, symbol in enumerate(self.symbols):
            _check_symbol(symbol, index, "symbol")
            if symbol in seen:
                raise AlphabetError(
                    f"symbol {symbol!r} appears at index {seen[symbol]} and {index}",
                    code="ALPHABET_DUPLICATED_SYMBOL",
                    details={"index": index, "symbol": symbol, "first_index": seen[symbol]},
                )
            seen[symbol] = index

        if self.pad is not None:
            _check_symbol(self.pad, None, "pad symbol")
            if self.pad in seen:
                raise AlphabetError(
                    f"pad symbol {self.pad!r} is also the symbol for value {seen[self.pad]}",
                    code="ALPHABET_RESERVED_SYMBOL",
                    details={"index": seen[self.pad], "symbol": self.pad},
                )

    @property
    def has_pad(self) -> bool:
        """True if this alphabet defines a pad symbol."""
        return self.pad is not None

    @property
    def pad_byte(self) -> int | None:
        """The pad symbol as a byte value, or None."""
        return ord(self.pad) if self.pad is not None else None

    def as_bytes(self) -> bytes:
        """The 64 symbols as ASCII bytes."""
        return self.symbols.encode("ascii")

    def with_pad(self, pad: str = DEFAULT_PAD) -> Alphabet:
        """Return a copy of this alphabet using ``pad`` as its pad symbol."""
        return replace(self, pad=pad)

    def without_pad(self) -> Alphabet:
        """Return a copy of this alphabet with no pad symbol."""
        return replace(self, pad=None)

    def __repr__(self) -> str:
        return f"Alphabet(name={self.name!r}, pad={self.pad!r})"


# =============================================================================
# Named Alphabets
# =============================================================================

_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_LOWER = "abcdefghijklmnopqrstuvwxyz"
_DIGITS = "0123456789"

# RFC 4648 section 4
STANDARD = Alphabet(_UPPER + _LOWER + _DIGITS + "+/", name="standard")

# RFC 4648 section 5
URL_SAFE = Alphabet(_UPPER + _LOWER + _DIGITS + "-_", name="url_safe")

# crypt(3)
CRYPT = Alphabet("./" + _DIGITS + _UPPER + _LOWER, pad=None, name="crypt")

BCRYPT = Alphabet("./" + _UPPER + _LOWER + _DIGITS, pad=None, name="bcrypt")

# RFC 3501 modified UTF-7
IMAP_MUTF7 = Alphabet(_UPPER + _LOWER + _DIGITS + "+,", pad=None, name="imap_mutf7")

# BinHex-style
BIN_HEX = Alphabet(
    "!\"#$%&'()*+,-0123456789@ABCDEFGHIJKLMNPQRSTUVXYZ[`abcdehijklmpqr",
    pad=None,
    name="bin_hex",
)

Alphabet.STANDARD = STANDARD
Alphabet.URL_SAFE = URL_SAFE
Alphabet.CRYPT = CRYPT
Alphabet.BCRYPT = BCRYPT
Alphabet.IMAP_MUTF7 = IMAP_MUTF7
Alphabet.BIN_HEX = BIN_HEX
