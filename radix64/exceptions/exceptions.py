"""
radix64 exceptions.

This module defines the exception hierarchy for radix64:

    Radix64Error (base)
    ├── ValidationError - Invalid parameter value
    │   └── AlphabetError - Alphabet cannot be constructed
    ├── DecodeError - Malformed symbol input
    │   ├── InvalidByteError - Byte outside the alphabet at an offset
    │   ├── InvalidLengthError - Symbol count can never be valid
    │   ├── InvalidLastSymbolError - Nonzero unused bits in the final symbol
    │   └── InvalidPaddingError - Padding inconsistent with the engine
    ├── OutputTooSmallError - Caller-provided buffer lacks capacity
    └── StateError - Invalid object state (finished stream)

Usage:
    try:
        radix64.decode("Zm9v!mFy")
    except radix64.InvalidByteError as e:
        print(f"Bad symbol {chr(e.byte)!r} at offset {e.offset}")
    except radix64.DecodeError as e:
        print(f"Malformed input: {e}")
    except radix64.Radix64Error as e:
        # Catch any radix64 error with structured details
        print(f"Error {e.code}: {e}")
        print(f"Details: {e.details}")

See Also
--------
    Radix64Error : Base exception for all radix64 errors.
"""

from typing import Any

__all__ = [
    # Base
    "Radix64Error",
    # Validation
    "ValidationError",
    "AlphabetError",
    # Decode
    "DecodeError",
    "InvalidByteError",
    "InvalidLengthError",
    "InvalidLastSymbolError",
    "InvalidPaddingError",
    # Output
    "OutputTooSmallError",
    # State
    "StateError",
]


def _describe_byte(byte: int) -> str:
    if 0x20 <= byte < 0x7F:
        return repr(chr(byte))
    return f"0x{byte:02x}"


class Radix64Error(Exception):
    """
    Base exception for all radix64 errors.

    All radix64-specific exceptions inherit from this class, enabling:
    - Catch-all handling: ``except radix64.Radix64Error``
    - Stable string-based error codes for programmatic handling
    - Structured details for debugging and logging

    Attributes
    ----------
    message : str
        Human-readable error description.
    code : str
        Stable, string-based error code (e.g., "DECODE_INVALID_BYTE").
        Use this for programmatic error handling.
    details : dict[str, Any]
        Structured context (e.g., {"offset": 4, "byte": 33}).

    Example
    -------
    >>> try:
    ...     radix64.decode("!g==")
    ... except radix64.Radix64Error as e:
    ...     print(f"Error code: {e.code}")
    ...     print(f"Details: {e.details}")
    Error code: DECODE_INVALID_BYTE
    Details: {'offset': 0, 'byte': 33}
    """

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.details = details or {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, code={self.code!r})"


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(Radix64Error, ValueError):
    """
    Invalid parameter value.

    Raised when a function receives an argument of the correct type
    but an inappropriate value (e.g., a negative length, or an engine
    that must emit padding built on an alphabet with no pad symbol).

    This exception inherits from both Radix64Error and ValueError, so both work::

        except radix64.Radix64Error:   # catches all radix64 errors
        except ValueError:             # catches validation errors (Pythonic)

    Example:
        >>> radix64.encoded_len(-1)
        ValidationError: length must be non-negative, got -1
    """

    def __init__(
        self,
        message: str,
        code: str = "INVALID_ARGUMENT",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


class AlphabetError(ValidationError):
    """
    Alphabet cannot be constructed from the given symbols.

    The ``code`` tells which rule was broken:

    - ``ALPHABET_INVALID_LENGTH``: not exactly 64 symbols
    - ``ALPHABET_UNPRINTABLE_SYMBOL``: a symbol outside printable ASCII
    - ``ALPHABET_DUPLICATED_SYMBOL``: the same symbol appears twice
    - ``ALPHABET_RESERVED_SYMBOL``: the pad symbol is also a data symbol

    ``details`` carries ``index`` and ``symbol`` where one symbol is at fault.
    """

    def __init__(
        self,
        message: str,
        code: str = "ALPHABET_INVALID",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


# =============================================================================
# Decode Errors
# =============================================================================


class DecodeError(Radix64Error, ValueError):
    """
    Base error for malformed symbol input.

    Decoding never attempts recovery: the first fault found ends the call.
    Subclasses that point at a symbol carry its byte ``offset`` in the input;
    for ``str`` input this is the offset in its UTF-8 encoding.
    """

    def __init__(
        self,
        message: str,
        code: str = "DECODE_FAILED",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)

    def shifted(self, delta: int) -> "DecodeError":
        """Return the same error with its offset moved by ``delta``.

        Errors without an offset are returned unchanged.
        """
        return self

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.details == other.details

    def __hash__(self) -> int:
        return hash((type(self), tuple(sorted(self.details.items()))))


class InvalidByteError(DecodeError):
    """
    A byte outside the alphabet was found.

    Also raised for a pad symbol that is not part of the trailing pad run,
    since padding is only meaningful at the very end of input.

    Attributes
    ----------
    offset : int
        Byte offset of the offending symbol.
    byte : int
        The offending byte value.

    Example
    -------
    >>> radix64.decode("!g==")
    InvalidByteError: Invalid symbol '!' at offset 0
    """

    def __init__(self, offset: int, byte: int, code: str = "DECODE_INVALID_BYTE"):
        self.offset = offset
        self.byte = byte
        super().__init__(
            f"Invalid symbol {_describe_byte(byte)} at offset {offset}",
            code,
            {"offset": offset, "byte": byte},
        )

    def shifted(self, delta: int) -> "InvalidByteError":
        return type(self)(self.offset + delta, self.byte)

    def __repr__(self) -> str:
        return f"InvalidByteError(offset={self.offset}, byte={self.byte!r})"


class InvalidLengthError(DecodeError):
    """
    The symbol count cannot correspond to any valid encoding.

    A final group of exactly one symbol carries only 6 bits, which is not a
    whole byte, so ``len(symbols) % 4 == 1`` is never valid.

    Attributes
    ----------
    length : int
        Number of data symbols (pad symbols excluded).
    """

    def __init__(self, length: int, code: str = "DECODE_INVALID_LENGTH"):
        self.length = length
        super().__init__(
            f"Invalid input length {length}: a final group of one symbol cannot encode a byte",
            code,
            {"length": length},
        )

    def __repr__(self) -> str:
        return f"InvalidLengthError(length={self.length})"


class InvalidLastSymbolError(DecodeError):
    """
    The final symbol has nonzero unused bits.

    In a 2-symbol tail only the top 2 bits of the last symbol's 6 are used;
    in a 3-symbol tail, the top 4. Encoders always leave the rest zero, so a
    nonzero remainder means the input is not the canonical encoding of its
    bytes. Raised only when the engine's ``decode_allow_trailing_bits`` is off.

    Attributes
    ----------
    offset : int
        Byte offset of the final data symbol.
    byte : int
        The final data symbol's byte value.
    """

    def __init__(self, offset: int, byte: int, code: str = "DECODE_INVALID_LAST_SYMBOL"):
        self.offset = offset
        self.byte = byte
        super().__init__(
            f"Invalid last symbol {_describe_byte(byte)} at offset {offset}: "
            "unused trailing bits are not zero",
            code,
            {"offset": offset, "byte": byte},
        )

    def shifted(self, delta: int) -> "InvalidLastSymbolError":
        return type(self)(self.offset + delta, self.byte)

    def __repr__(self) -> str:
        return f"InvalidLastSymbolError(offset={self.offset}, byte={self.byte!r})"


class InvalidPaddingError(DecodeError):
    """
    Padding is present, absent, or shaped inconsistently with the engine.

    Examples: pad symbols after a complete group (``"Zm9vYmFy="``), more than
    two pad symbols, missing padding under ``REQUIRE_CANONICAL``, any padding
    under ``REQUIRE_NONE``.

    ``details`` carries ``reason`` (a short machine-friendly string) and
    ``pad_count``.
    """

    def __init__(
        self,
        reason: str = "invalid padding",
        pad_count: int = 0,
        code: str = "DECODE_INVALID_PADDING",
    ):
        self.reason = reason
        self.pad_count = pad_count
        super().__init__(
            f"Invalid padding: {reason}",
            code,
            {"reason": reason, "pad_count": pad_count},
        )

    def __repr__(self) -> str:
        return f"InvalidPaddingError(reason={self.reason!r}, pad_count={self.pad_count})"


# =============================================================================
# Output Errors
# =============================================================================


class OutputTooSmallError(Radix64Error, ValueError):
    """
    Caller-provided output buffer is too small.

    Raised by ``encode_into`` / ``decode_into`` before anything is written,
    so the buffer is left untouched.

    Attributes
    ----------
    required : int
        Bytes the operation needs.
    available : int
        Bytes the buffer provides.
    """

    def __init__(
        self,
        required: int,
        available: int,
        code: str = "OUTPUT_TOO_SMALL",
    ):
        self.required = required
        self.available = available
        super().__init__(
            f"Output buffer too small: need {required} bytes, have {available}",
            code,
            {"required": required, "available": available},
        )


# =============================================================================
# State Errors
# =============================================================================


class StateError(Radix64Error, RuntimeError):
    """
    Invalid object state error.

    Raised when an operation is attempted on an object in an invalid state:
    - Writing to an EncoderWriter after finish()/close()
    - Reading from a closed DecoderReader
    """

    def __init__(
        self,
        message: str,
        code: str = "STATE_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)
