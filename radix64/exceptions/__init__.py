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
"""

from .exceptions import (
    AlphabetError,
    DecodeError,
    InvalidByteError,
    InvalidLastSymbolError,
    InvalidLengthError,
    InvalidPaddingError,
    OutputTooSmallError,
    Radix64Error,
    StateError,
    ValidationError,
)

# =============================================================================
# Public API - See radix64/__init__.py for documentation mapping guidelines
# =============================================================================
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
