"""
Chunked streaming on top of an Engine.

EncoderWriter takes bytes through ``write()`` and pushes symbols to a sink;
DecoderReader pulls symbols from a source and hands out bytes through
``read()``. Both work one chunk at a time through ``Engine.encode_into`` /
``Engine.decode_into`` and carry the partial group between chunks.

Example:
    >>> import io
    >>> from radix64 import STANDARD
    >>> from radix64.stream import DecoderReader, EncoderWriter
    >>> sink = io.BytesIO()
    >>> with EncoderWriter(STANDARD, sink) as writer:
    ...     _ = writer.write(b"foo")
    ...     _ = writer.write(b"ba")
    >>> sink.getvalue()
    b'Zm9vYmE='
    >>> DecoderReader(STANDARD, io.BytesIO(b"Zm9vYmE=")).read()
    b'fooba'

The default chunk size comes from the module ``config`` singleton:

    >>> from radix64.stream import config
    >>> config.chunk_size = 12 * 1024
"""

from __future__ import annotations

from typing import Any, Protocol

from ._logging import scoped_logger
from .config import NO_PAD
from .engine import Engine, decoded_len_estimate, encoded_len
from .exceptions import DecodeError, StateError, ValidationError

__all__ = ["EncoderWriter", "DecoderReader", "config"]

_log = scoped_logger("stream")

# Whole encode groups (3 bytes) and whole decode groups (4 symbols)
_CHUNK_MULTIPLE = 12


class _Sink(Protocol):
    def write(self, data: bytes, /) -> Any: ...


class _Source(Protocol):
    def read(self, size: int = -1, /) -> bytes | str: ...


class _StreamConfig:
    """
    Singleton configuration for streaming adapters.

    This is a singleton - import and modify `config` directly:

        from radix64.stream import config
        config.chunk_size = 64 * 1024

    Attributes
    ----------
        chunk_size: Default number of input bytes (EncoderWriter) or
            symbols (DecoderReader) handed to the engine per call. Rounded
            down to a multiple of 12 so every chunk holds whole groups.
    """

    __slots__ = ("_chunk_size",)

    def __init__(self) -> None:
        self._chunk_size = 3072

    @property
    def chunk_size(self) -> int:
        """Default chunk size for new adapters."""
        return self._chunk_size

    @chunk_size.setter
    def chunk_size(self, value: int) -> None:
        self._chunk_size = _validate_chunk_size(value)

    def __repr__(self) -> str:
        return f"StreamConfig(chunk_size={self._chunk_size})"


def _validate_chunk_size(value: Any) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(
            f"chunk_size must be int, got {type(value).__name__}",
            code="INVALID_ARGUMENT",
            details={"param": "chunk_size", "type": type(value).__name__},
        )
    if value < _CHUNK_MULTIPLE:
        raise ValidationError(
            f"chunk_size must be at least {_CHUNK_MULTIPLE}, got {value}",
            code="INVALID_ARGUMENT",
            details={"param": "chunk_size", "value": value},
        )
    return value - value % _CHUNK_MULTIPLE


# Module-level singleton
config = _StreamConfig()


def _resolve_chunk_size(chunk_size: int | None) -> int:
    if chunk_size is None:
        return config.chunk_size
    return _validate_chunk_size(chunk_size)


def _as_chunk(data: Any) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


# =============================================================================
# Encoding
# =============================================================================


class EncoderWriter:
    """
    Encode a byte stream chunk by chunk into a sink.

    Up to 2 bytes that do not fill a group are held back between
    ``write()`` calls; ``finish()`` encodes them with the engine's padding
    rules. The sink is not closed.

    Parameters
    ----------
    engine : Engine
        Engine to encode with.
    sink : object with ``write(bytes)``
        Receives the encoded symbols as ASCII bytes.
    chunk_size : int, optional
        Input bytes per ``encode_into`` call. Defaults to ``config.chunk_size``.
    """

    def __init__(self, engine: Engine, sink: _Sink, chunk_size: int | None = None):
        self._engine = engine
        self._sink = sink
        self._chunk_size = _resolve_chunk_size(chunk_size)
        self._out = bytearray(encoded_len(self._chunk_size))
        self._pending = bytearray()
        self._finished = False
        self._bytes_in = 0
        self._symbols_out = 0

    @property
    def finished(self) -> bool:
        """True once ``finish()`` or ``close()`` has run."""
        return self._finished

    def write(self, data: Any) -> int:
        """
        Buffer and encode ``data``; return the number of bytes accepted.

        Raises:
            StateError: If the writer is already finished.
        """
        if self._finished:
            raise StateError(
                "EncoderWriter is finished",
                details={"engine": self._engine.name},
            )
        chunk = _as_chunk(data)
        self._pending += chunk
        self._bytes_in += len(chunk)

        usable = len(self._pending) - len(self._pending) % 3
        for start in range(0, usable, self._chunk_size):
            end = min(start + self._chunk_size, usable)
            self._emit(self._pending[start:end])
        del self._pending[:usable]
        return len(chunk)

    def _emit(self, chunk: bytearray) -> None:
        n = self._engine.encode_into(chunk, self._out)
        self._sink.write(bytes(self._out[:n]))
        self._symbols_out += n

    def finish(self) -> _Sink:
        """
        Encode the held-back tail (with padding, if the engine pads).

        Safe to call more than once. Returns the sink.
        """
        if self._finished:
            return self._sink
        if self._pending:
            self._emit(self._pending)
            self._pending.clear()
        self._finished = True
        _log.debug(
            "Finished encoding stream",
            extra={
                "engine": self._engine.name,
                "bytes_in": self._bytes_in,
                "symbols_out": self._symbols_out,
            },
        )
        return self._sink

    def close(self) -> None:
        """Finish the stream. The sink is left open."""
        self.finish()

    def __enter__(self) -> EncoderWriter:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if exc_type is None:
            self.finish()
        else:
            # Don't emit a tail for a stream that failed midway
            self._finished = True


# =============================================================================
# Decoding
# =============================================================================


class DecoderReader:
    """
    Decode symbols pulled from a source, chunk by chunk.

    Complete groups are decoded as soon as at least one more symbol follows
    them, so padding can only ever appear in what is left at end of input.
    That remainder is decoded under the engine's full padding and
    trailing-bit rules. Error offsets count from the start of the stream.

    For valid input the output equals ``engine.decode(whole_input)``. For
    invalid input a DecodeError is always raised, but an InvalidByteError
    before the final group can surface before a length or padding error
    that one-shot decoding would have reported first.

    Parameters
    ----------
    engine : Engine
        Engine to decode with.
    source : object with ``read(size)``
        Returns symbol chunks as bytes or str, and an empty chunk at end.
    chunk_size : int, optional
        Symbols requested per ``read``. Defaults to ``config.chunk_size``.
    """

    def __init__(self, engine: Engine, source: _Source, chunk_size: int | None = None):
        self._engine = engine
        # Pad symbols cannot appear before the final group
        self._body = Engine(engine.alphabet.without_pad(), NO_PAD, name=f"{engine.name}:body")
        self._source = source
        self._chunk_size = _resolve_chunk_size(chunk_size)
        self._out = bytearray(decoded_len_estimate(self._chunk_size))
        self._pending = bytearray()
        self._decoded = bytearray()
        self._consumed = 0
        self._eof = False
        self._closed = False

    def read(self, size: int = -1) -> bytes:
        """
        Return up to ``size`` decoded bytes (all remaining if negative).

        An empty result means the stream is exhausted.

        Raises:
            DecodeError: The input is malformed.
            StateError: The reader is closed.
        """
        if self._closed:
            raise StateError("DecoderReader is closed", details={"engine": self._engine.name})
        if size is None or size < 0:
            while not self._eof:
                self._fill()
            size = len(self._decoded)
        while len(self._decoded) < size and not self._eof:
            self._fill()
        result = bytes(self._decoded[:size])
        del self._decoded[:size]
        return result

    def _fill(self) -> None:
        chunk = self._source.read(self._chunk_size)
        if not chunk:
            self._finish()
            return
        self._pending += _as_chunk(chunk)

        # Keep at least one symbol back so the final group is never decoded here
        ready = (len(self._pending) - 1) // 4 * 4
        for start in range(0, ready, self._chunk_size):
            end = min(start + self._chunk_size, ready)
            try:
                n = self._body.decode_into(self._pending[start:end], self._out)
            except DecodeError as e:
                raise e.shifted(self._consumed + start) from None
            self._decoded += self._out[:n]
        del self._pending[:ready]
        self._consumed += ready

    def _finish(self) -> None:
        self._eof = True
        try:
            self._decoded += self._engine.decode(self._pending)
        except DecodeError as e:
            raise e.shifted(self._consumed) from None
        self._consumed += len(self._pending)
        self._pending.clear()
        _log.debug(
            "Finished decoding stream",
            extra={"engine": self._engine.name, "symbols_in": self._consumed},
        )

    def close(self) -> None:
        """Stop reading. The source is left open."""
        self._closed = True

    def __enter__(self) -> DecoderReader:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
