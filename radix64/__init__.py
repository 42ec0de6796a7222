"""
radix64 - Configurable base64 encoding and decoding.

radix64 turns arbitrary bytes into 64 printable symbols and back, with the
alphabet, padding and canonicality rules chosen per Engine. Malformed input
is rejected with an exception that names the exact offending offset.

Quick Start
-----------

One-liners use the RFC 4648 standard engine:

    >>> import radix64
    >>> radix64.encode(b"foobar")
    'Zm9vYmFy'
    >>> radix64.decode("Zm8=")
    b'fo'

Pick another ready-made engine:

    >>> radix64.URL_SAFE_NO_PAD.encode(b"\\xfb\\xff")
    '-_8'
    >>> radix64.decode("Zg", radix64.STANDARD_NO_PAD)
    b'f'

Pinpointed errors:

    >>> try:
    ...     radix64.decode("Zm9v!mFy")
    ... except radix64.InvalidByteError as e:
    ...     print(e.offset, chr(e.byte))
    4 !


Custom Engines
--------------

An Engine is an Alphabet plus an EngineConfig. Both are immutable values:

    >>> from radix64 import Alphabet, DecodePaddingMode, Engine, EngineConfig
    >>>
    >>> lenient = Engine(
    ...     Alphabet.STANDARD,
    ...     EngineConfig(
    ...         decode_padding_mode=DecodePaddingMode.INDIFFERENT,
    ...         decode_allow_trailing_bits=True,
    ...     ),
    ... )
    >>> lenient.decode("Zh=")
    b'f'

Engines hold no per-call state: build them once and share them freely
between threads.


Fixed-Capacity Output
---------------------

    >>> buf = bytearray(radix64.decoded_len_estimate(8))
    >>> radix64.decode_into("Zm9vYmFy", buf)
    6


Streaming
---------

    >>> import io
    >>> from radix64.stream import EncoderWriter
    >>> sink = io.BytesIO()
    >>> with EncoderWriter(radix64.STANDARD, sink) as writer:
    ...     _ = writer.write(b"fo")
    >>> sink.getvalue()
    b'Zm8='
"""

from radix64._logging import setup_logging
from radix64._version import __version__ as __version__

# Engines
from radix64.alphabet import Alphabet
from radix64.api import (
    decode,
    decode_into,
    decoded_len_estimate,
    encode,
    encode_into,
    encoded_len,
)
from radix64.config import NO_PAD as NO_PAD
from radix64.config import PAD as PAD
from radix64.config import DecodePaddingMode, EngineConfig
from radix64.engine import Engine

# Exceptions (all via radix64.exceptions)
from radix64.exceptions import (
    AlphabetError as AlphabetError,
)
from radix64.exceptions import (
    DecodeError,
    InvalidByteError,
    InvalidLastSymbolError,
    InvalidLengthError,
    InvalidPaddingError,
    OutputTooSmallError,
    Radix64Error,
)
from radix64.exceptions import (
    StateError as StateError,
)
from radix64.exceptions import (
    ValidationError as ValidationError,
)
from radix64.prelude import (
    STANDARD,
    STANDARD_INDIFFERENT,
    STANDARD_NO_PAD,
    URL_SAFE,
    URL_SAFE_INDIFFERENT,
    URL_SAFE_NO_PAD,
)

# Streaming
from radix64.stream import DecoderReader, EncoderWriter

# =============================================================================
# Public API
# =============================================================================
#
# Comments group related exports into sections. Other symbols stay
# importable from their submodules (e.g., from radix64.alphabet import CRYPT).
#
__all__ = [
    # Codec
    "encode",
    "decode",
    "encode_into",
    "decode_into",
    "encoded_len",
    "decoded_len_estimate",
    # Engines
    "Engine",
    "EngineConfig",
    "DecodePaddingMode",
    "Alphabet",
    "STANDARD",
    "STANDARD_NO_PAD",
    "STANDARD_INDIFFERENT",
    "URL_SAFE",
    "URL_SAFE_NO_PAD",
    "URL_SAFE_INDIFFERENT",
    # Streaming
    "EncoderWriter",
    "DecoderReader",
    # Logging
    "setup_logging",
    # Exceptions
    "Radix64Error",
    "DecodeError",
    "InvalidByteError",
    "InvalidLengthError",
    "InvalidLastSymbolError",
    "InvalidPaddingError",
    "OutputTooSmallError",
]
