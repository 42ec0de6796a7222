"""
Engine - alphabet plus padding policy, and the encode/decode loops.

An Engine is built once (usually as a module constant, see
``radix64.prelude``) and reused for the life of the process. It holds no
per-call state, so one instance can serve any number of threads.

Encoding
--------
Input is consumed 6 bytes at a time: the 48-bit big-endian value is split
into four 12-bit fields, each looked up in the pair table to emit two
symbols. The last 0-5 bytes go through a group-at-a-time tail that also
appends padding.

Decoding
--------
Length and padding are validated before any symbol is looked up. The data
symbols are then translated through the decode table in one pass. The fast
loop packs 8 morsels into a 48-bit accumulator per iteration and stops at
the first block holding an INVALID entry; the slow loop resumes at that
block, 4 symbols at a time, and reports the exact offset of the first bad
symbol. Error offsets therefore never depend on the block size.
"""

from __future__ import annotations

from typing import Any

from ._logging import scoped_logger
from ._tables import INVALID, tables_for
from .alphabet import STANDARD as STANDARD_ALPHABET
from .alphabet import Alphabet
from .config import PAD, DecodePaddingMode, EngineConfig
from .exceptions import (
    DecodeError,
    InvalidByteError,
    InvalidLastSymbolError,
    InvalidLengthError,
    InvalidPaddingError,
    OutputTooSmallError,
    ValidationError,
)

__all__ = ["Engine", "encoded_len", "decoded_len_estimate"]

_engine_log = scoped_logger("engine")
_decode_log = scoped_logger("decode")

# Input bytes per fast encode iteration (48 bits -> 8 symbols)
_ENCODE_BLOCK = 6
# Symbols per fast decode iteration (8 morsels -> 6 bytes)
_DECODE_BLOCK = 8

# Bytes produced by a final group of 0..3 data symbols
_TAIL_BYTES = (0, 0, 1, 2)


# =============================================================================
# Length Helpers
# =============================================================================


def _check_length(n: int) -> None:
    if not isinstance(n, int) or isinstance(n, bool):
        raise ValidationError(
            f"length must be int, got {type(n).__name__}",
            details={"param": "n", "type": type(n).__name__},
        )
    if n < 0:
        raise ValidationError(
            f"length must be non-negative, got {n}",
            details={"param": "n", "value": n},
        )


def encoded_len(n: int, padding: bool = True) -> int:
    """
    Number of symbols that encoding ``n`` bytes produces.

    Args:
        n: Input length in bytes.
        padding: Whether the final group is padded to 4 symbols.

    Example:
        >>> encoded_len(4)
        8
        >>> encoded_len(4, padding=False)
        6
    """
    _check_length(n)
    groups, rem = divmod(n, 3)
    if rem == 0:
        return groups * 4
    return groups * 4 + (4 if padding else rem + 1)


def decoded_len_estimate(n: int) -> int:
    """
    Upper bound on the bytes ``n`` symbols can decode to.

    Exact for unpadded input whose length is a multiple of 4; otherwise it
    may overshoot by up to 2 bytes. Use it to size ``decode_into`` buffers.
    """
    _check_length(n)
    return (n + 3) // 4 * 3


# =============================================================================
# Buffer Helpers
# =============================================================================


def _as_input(data: Any) -> bytes:
    """Coerce bytes-like or str input to bytes (str as UTF-8)."""
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        return data.encode("utf-8")
    try:
        return memoryview(data).tobytes()
    except TypeError:
        raise TypeError(
            f"expected a bytes-like object or str, got {type(data).__name__}"
        ) from None


def _as_output(out: Any) -> memoryview:
    """Return a writable, flat byte view of ``out``."""
    try:
        view = memoryview(out)
    except TypeError:
        raise TypeError(
            f"output must be a writable bytes-like object, got {type(out).__name__}"
        ) from None
    if view.readonly:
        raise TypeError(f"output buffer of type {type(out).__name__} is read-only")
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view


# =============================================================================
# Engine
# =============================================================================


class Engine:
    """
    An Alphabet and an EngineConfig, plus the tables derived from them.

    Parameters
    ----------
    alphabet : Alphabet
        The 64 symbols (and pad symbol) to use. Default is the RFC 4648
        standard alphabet.
    config : EngineConfig
        Padding and canonicality policy. Default is ``PAD``.
    name : str, optional
        Label for reprs and log records. Defaults to the alphabet name and
        a summary of the config.

    Raises
    ------
    ValidationError
        If the config needs a pad symbol the alphabet does not have.

    Examples
    --------
    >>> from radix64 import Engine, EngineConfig, Alphabet
    >>> engine = Engine(Alphabet.URL_SAFE, EngineConfig(encode_padding=False))
    >>> engine.encode(b"\\xfb\\xff")
    '-_8'
    """

    __slots__ = ("_alphabet", "_config", "_name", "_decode_table", "_pairs", "_symbols", "_pad")

    def __init__(
        self,
        alphabet: Alphabet = STANDARD_ALPHABET,
        config: EngineConfig = PAD,
        *,
        name: str | None = None,
    ) -> None:
        if not isinstance(alphabet, Alphabet):
            raise TypeError(f"alphabet must be Alphabet, got {type(alphabet).__name__}")
        if not isinstance(config, EngineConfig):
            raise TypeError(f"config must be EngineConfig, got {type(config).__name__}")

        if alphabet.pad is None:
            if config.encode_padding:
                raise ValidationError(
                    f"alphabet {alphabet.name!r} has no pad symbol but encode_padding is on",
                    details={"alphabet": alphabet.name, "param": "encode_padding"},
                )
            if config.decode_padding_mode.requires_pad_symbol:
                raise ValidationError(
                    f"alphabet {alphabet.name!r} has no pad symbol but decode_padding_mode "
                    f"is {config.decode_padding_mode.value}",
                    details={
                        "alphabet": alphabet.name,
                        "param": "decode_padding_mode",
                        "value": config.decode_padding_mode.value,
                    },
                )

        tables = tables_for(alphabet)
        self._alphabet = alphabet
        self._config = config
        self._name = name or f"{alphabet.name}:{config.describe()}"
        self._decode_table = tables.decode
        self._pairs = tables.encode_pairs
        self._symbols = alphabet.as_bytes()
        self._pad = alphabet.pad_byte

        _engine_log.debug("Built engine", extra={"engine": self._name})

    @classmethod
    def from_symbols(
        cls,
        symbols: str,
        pad: str | None = "=",
        *,
        name: str = "custom",
        **config: Any,
    ) -> Engine:
        """
        Build an engine from a 64-character symbol string.

        Keyword arguments other than ``name`` are EngineConfig fields.

        Example:
            >>> engine = Engine.from_symbols(
            ...     Alphabet.CRYPT.symbols, pad=None,
            ...     encode_padding=False, decode_padding_mode="require_none",
            ... )
        """
        return cls(Alphabet(symbols, pad=pad, name=name), EngineConfig().override(**config))

    def with_config(self, **changes: Any) -> Engine:
        """Return an engine on the same alphabet with config fields replaced."""
        return Engine(self._alphabet, self._config.override(**changes))

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def alphabet(self) -> Alphabet:
        """The engine's alphabet."""
        return self._alphabet

    @property
    def config(self) -> EngineConfig:
        """The engine's padding and canonicality policy."""
        return self._config

    @property
    def name(self) -> str:
        """Label used in reprs and logs."""
        return self._name

    @property
    def decode_table(self) -> bytes:
        """The 256-entry decode table (6-bit value or INVALID per byte)."""
        return self._decode_table

    def encoded_len(self, n: int) -> int:
        """Number of symbols ``encode`` produces for ``n`` bytes."""
        return encoded_len(n, self._config.encode_padding)

    # =========================================================================
    # Encoding
    # =========================================================================

    def encode(self, data: Any) -> str:
        """
        Encode bytes into symbols.

        Args:
            data: Bytes-like object, or str (encoded as UTF-8 first).

        Returns:
            The encoded symbols. Never raises for valid input types.

        Example:
            >>> STANDARD.encode(b"foobar")
            'Zm9vYmFy'
        """
        raw = _as_input(data)
        out = bytearray(encoded_len(len(raw), self._config.encode_padding))
        self._encode_to(raw, memoryview(out))
        return out.decode("ascii")

    def encode_into(self, data: Any, out: Any) -> int:
        """
        Encode into a caller-provided buffer.

        Args:
            data: Bytes-like object, or str (encoded as UTF-8 first).
            out: Writable buffer (bytearray, memoryview, array, NumPy uint8 array).

        Returns:
            Number of symbol bytes written at the start of ``out``.

        Raises:
            OutputTooSmallError: If ``out`` cannot hold the result. Nothing
                is written in that case.
        """
        raw = _as_input(data)
        view = _as_output(out)
        required = encoded_len(len(raw), self._config.encode_padding)
        if len(view) < required:
            raise OutputTooSmallError(required, len(view))
        return self._encode_to(raw, view)

    def _encode_to(self, data: bytes, out: memoryview) -> int:
        pairs = self._pairs
        from_bytes = int.from_bytes
        n = len(data)
        fast_end = n - n % _ENCODE_BLOCK
        o = 0

        for i in range(0, fast_end, _ENCODE_BLOCK):
            x = from_bytes(data[i : i + 6], "big")
            out[o : o + 8] = (
                pairs[x >> 36]
                + pairs[(x >> 24) & 0xFFF]
                + pairs[(x >> 12) & 0xFFF]
                + pairs[x & 0xFFF]
            )
            o += 8

        i = fast_end
        rem = n - fast_end
        if rem >= 3:
            x = from_bytes(data[i : i + 3], "big")
            out[o : o + 4] = pairs[x >> 12] + pairs[x & 0xFFF]
            o += 4
            i += 3
            rem -= 3

        if rem == 0:
            return o

        if rem == 1:
            # 8 bits zero-extended to 12
            out[o : o + 2] = pairs[data[i] << 4]
            o += 2
        else:
            # 16 bits zero-extended to 18
            x = from_bytes(data[i : i + 2], "big") << 2
            out[o : o + 2] = pairs[x >> 6]
            out[o + 2] = self._symbols[x & 0x3F]
            o += 3

        if self._config.encode_padding:
            pad_count = 3 - rem
            out[o : o + pad_count] = bytes((self._pad,)) * pad_count
            o += pad_count
        return o

    # =========================================================================
    # Decoding
    # =========================================================================

    def decode(self, symbols: Any) -> bytes:
        """
        Decode symbols into bytes.

        Args:
            symbols: str or bytes-like object. Offsets in errors are byte
                offsets (for str, offsets into its UTF-8 encoding).

        Returns:
            The decoded bytes.

        Raises:
            InvalidByteError: A byte outside the alphabet, or a pad symbol
                before the trailing pad run.
            InvalidLengthError: A final group of exactly one symbol.
            InvalidLastSymbolError: Nonzero unused bits in the final symbol
                (only when ``decode_allow_trailing_bits`` is off).
            InvalidPaddingError: Padding not allowed by the engine's mode.

        Example:
            >>> STANDARD.decode("Zm8=")
            b'fo'
        """
        raw = _as_input(symbols)
        try:
            data_len = self._check_structure(raw)
            out = bytearray(_decoded_len(data_len))
            self._decode_to(raw, data_len, memoryview(out))
        except DecodeError as e:
            self._log_failure(e, len(raw))
            raise
        return bytes(out)

    def decode_into(self, symbols: Any, out: Any) -> int:
        """
        Decode into a caller-provided buffer.

        Args:
            symbols: str or bytes-like object.
            out: Writable buffer (bytearray, memoryview, array, NumPy uint8 array).

        Returns:
            Number of bytes written at the start of ``out``.

        Raises:
            DecodeError: As for ``decode``. Bytes already written to ``out``
                before the fault was found are left in place.
            OutputTooSmallError: If ``out`` cannot hold the result. Raised
                after validating length and padding, before anything is
                written.
        """
        raw = _as_input(symbols)
        view = _as_output(out)
        try:
            data_len = self._check_structure(raw)
            required = _decoded_len(data_len)
            if len(view) < required:
                raise OutputTooSmallError(required, len(view))
            return self._decode_to(raw, data_len, view)
        except DecodeError as e:
            self._log_failure(e, len(raw))
            raise

    def _check_structure(self, data: bytes) -> int:
        """Validate length and padding; return the number of data symbols."""
        n = len(data)
        pad_count = 0
        if self._pad is not None and n:
            pad_count = n - len(data.rstrip(bytes((self._pad,))))
        data_len = n - pad_count
        tail = data_len % 4
        mode = self._config.decode_padding_mode

        if pad_count == 0:
            if tail == 1:
                raise InvalidLengthError(data_len)
            if tail and mode is DecodePaddingMode.REQUIRE_CANONICAL:
                raise InvalidPaddingError("missing padding", 0)
            return data_len

        if mode is DecodePaddingMode.REQUIRE_NONE:
            raise InvalidPaddingError("padding not allowed", pad_count)
        if data_len == 0:
            raise InvalidPaddingError("input contains only padding", pad_count)
        if tail == 0:
            raise InvalidPaddingError("padding after a complete group", pad_count)
        if tail == 1:
            raise InvalidPaddingError("padding after a single symbol", pad_count)
        if tail + pad_count > 4:
            raise InvalidPaddingError("too many pad symbols", pad_count)
        if tail + pad_count < 4 and mode is not DecodePaddingMode.INDIFFERENT:
            raise InvalidPaddingError("incomplete padding", pad_count)
        return data_len

    def _decode_to(self, data: bytes, data_len: int, out: memoryview) -> int:
        morsels = data[:data_len].translate(self._decode_table)
        full = data_len - data_len % 4
        fast_end = full - full % _DECODE_BLOCK
        i = 0
        o = 0

        # Fast path: bail to the slow path at the first block with a bad symbol
        while i < fast_end:
            block = morsels[i : i + 8]
            if INVALID in block:
                break
            a, b, c, d, e, f, g, h = block
            acc = (
                a << 42 | b << 36 | c << 30 | d << 24 | e << 18 | f << 12 | g << 6 | h
            )
            out[o : o + 6] = acc.to_bytes(6, "big")
            i += 8
            o += 6

        # Slow path: one group at a time, exact error offsets
        while i < full:
            group = morsels[i : i + 4]
            if INVALID in group:
                bad = i + group.index(INVALID)
                raise InvalidByteError(bad, data[bad])
            a, b, c, d = group
            out[o : o + 3] = (a << 18 | b << 12 | c << 6 | d).to_bytes(3, "big")
            i += 4
            o += 3

        tail = data_len - full
        if not tail:
            return o

        group = morsels[full:data_len]
        if INVALID in group:
            bad = full + group.index(INVALID)
            raise InvalidByteError(bad, data[bad])

        last = data_len - 1
        if tail == 2:
            a, b = group
            if b & 0x0F and not self._config.decode_allow_trailing_bits:
                raise InvalidLastSymbolError(last, data[last])
            out[o] = (a << 2) | (b >> 4)
            return o + 1

        a, b, c = group
        if c & 0x03 and not self._config.decode_allow_trailing_bits:
            raise InvalidLastSymbolError(last, data[last])
        out[o : o + 2] = ((a << 12 | b << 6 | c) >> 2).to_bytes(2, "big")
        return o + 2

    def _log_failure(self, error: DecodeError, input_len: int) -> None:
        _decode_log.debug(
            "Decode failed: %s",
            error,
            extra={"engine": self._name, "code": error.code, "input_len": input_len},
        )

    # =========================================================================
    # Dunder
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Engine):
            return NotImplemented
        return self._alphabet == other._alphabet and self._config == other._config

    def __hash__(self) -> int:
        return hash((self._alphabet, self._config))

    def __repr__(self) -> str:
        return f"Engine({self._name!r})"


def _decoded_len(data_len: int) -> int:
    """Exact output length for ``data_len`` validated data symbols."""
    return data_len // 4 * 3 + _TAIL_BYTES[data_len % 4]
