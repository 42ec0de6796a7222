"""
DecoderReader tests.

For valid input, streaming decode must equal one-shot decoding of the whole
input for any read size and chunk size. Error offsets count from the start
of the stream.
"""

import io

import pytest

from radix64 import (
    STANDARD,
    STANDARD_NO_PAD,
    DecodeError,
    InvalidByteError,
    InvalidLastSymbolError,
    InvalidLengthError,
    InvalidPaddingError,
    StateError,
)
from radix64.stream import DecoderReader
from tests.fixtures import BOUNDARY_LENGTHS, payload


class TrickleSource:
    """Source that returns at most ``step`` symbols per read."""

    def __init__(self, data, step):
        self._data = data
        self._step = step
        self._pos = 0

    def read(self, size=-1):
        n = self._step if size < 0 else min(size, self._step)
        chunk = self._data[self._pos : self._pos + n]
        self._pos += len(chunk)
        return chunk


class TestDecoderReader:
    """Tests for basic reads."""

    def test_read_all(self):
        """read() with no size returns everything."""
        reader = DecoderReader(STANDARD, io.BytesIO(b"Zm9vYmE="))
        assert reader.read() == b"fooba"
        assert reader.read() == b""

    def test_read_in_pieces(self):
        """Sized reads hand out the bytes in order."""
        reader = DecoderReader(STANDARD, io.BytesIO(b"Zm9vYmFy"))
        assert reader.read(2) == b"fo"
        assert reader.read(3) == b"oba"
        assert reader.read(10) == b"r"
        assert reader.read(1) == b""

    def test_empty_stream(self):
        """An empty source decodes to nothing."""
        assert DecoderReader(STANDARD, io.BytesIO(b"")).read() == b""

    def test_str_source(self):
        """Sources returning str are accepted."""
        reader = DecoderReader(STANDARD, io.StringIO("Zm9vYmFy"))
        assert reader.read() == b"foobar"

    def test_read_zero(self):
        """read(0) returns nothing without consuming."""
        reader = DecoderReader(STANDARD, io.BytesIO(b"Zm9v"))
        assert reader.read(0) == b""
        assert reader.read() == b"foo"

    def test_context_manager_closes(self):
        """Reading after the with block raises StateError."""
        source = io.BytesIO(b"Zm9v")
        with DecoderReader(STANDARD, source) as reader:
            assert reader.read(1) == b"f"
        with pytest.raises(StateError):
            reader.read()
        assert not source.closed


class TestChunking:
    """Output is independent of how input arrives."""

    @pytest.mark.parametrize("n", BOUNDARY_LENGTHS)
    @pytest.mark.parametrize("step", [1, 3, 4, 5, 13])
    def test_trickled_input(self, any_engine, n, step):
        """Symbols arriving a few at a time decode like one-shot."""
        data = payload(n)
        symbols = any_engine.encode(data).encode("ascii")
        reader = DecoderReader(any_engine, TrickleSource(symbols, step), chunk_size=12)
        assert reader.read() == data

    @pytest.mark.parametrize("read_size", [1, 2, 7, 64])
    def test_sized_reads(self, read_size):
        """Concatenated sized reads equal the decoded payload."""
        data = payload(500)
        source = io.BytesIO(STANDARD.encode(data).encode())
        reader = DecoderReader(STANDARD, source, chunk_size=24)
        parts = []
        while True:
            part = reader.read(read_size)
            if not part:
                break
            assert len(part) <= read_size
            parts.append(part)
        assert b"".join(parts) == data

    def test_large_source_read(self):
        """A source returning more than requested is still handled."""

        class GreedySource:
            def __init__(self, data):
                self._data = data

            def read(self, size=-1):
                data, self._data = self._data, b""
                return data

        data = payload(1000)
        source = GreedySource(STANDARD.encode(data).encode())
        reader = DecoderReader(STANDARD, source, chunk_size=12)
        assert reader.read() == data


class TestErrors:
    """Errors carry offsets from the start of the stream."""

    @pytest.mark.parametrize("position", [0, 5, 11, 12, 30, 95])
    def test_invalid_byte_offset(self, position):
        """The offset is absolute, not relative to the chunk."""
        symbols = bytearray(STANDARD.encode(payload(90)).encode())
        symbols[position] = ord("*")
        reader = DecoderReader(STANDARD, io.BytesIO(bytes(symbols)), chunk_size=12)
        with pytest.raises(InvalidByteError) as exc_info:
            reader.read()
        assert exc_info.value.offset == position
        assert exc_info.value.byte == ord("*")

    def test_invalid_last_symbol_offset(self):
        """Trailing-bit errors in the final group are shifted too."""
        source = TrickleSource(b"Zm9vZm9vZh", 3)
        reader = DecoderReader(STANDARD_NO_PAD, source, chunk_size=12)
        with pytest.raises(InvalidLastSymbolError) as exc_info:
            reader.read()
        assert exc_info.value.offset == 9

    def test_invalid_length(self):
        """A single-symbol final group is a length error."""
        reader = DecoderReader(STANDARD_NO_PAD, io.BytesIO(b"Zm9vY"))
        with pytest.raises(InvalidLengthError):
            reader.read()

    def test_missing_padding(self):
        """Canonical engines still require padding at the end of the stream."""
        reader = DecoderReader(STANDARD, io.BytesIO(b"Zm9vZg"))
        with pytest.raises(InvalidPaddingError):
            reader.read()

    def test_padding_mid_stream(self):
        """A pad symbol before the end is an invalid byte at its stream offset."""
        reader = DecoderReader(STANDARD, io.BytesIO(b"Zg==Zm9v"), chunk_size=12)
        with pytest.raises(InvalidByteError) as exc_info:
            reader.read()
        assert exc_info.value.offset == 2
        assert exc_info.value.byte == ord("=")

    def test_matches_one_shot_error(self):
        """For a single bad symbol the stream and one-shot errors are equal."""
        symbols = b"Zm9vYmFy" * 5 + b"Zm#v"
        with pytest.raises(DecodeError) as one_shot:
            STANDARD.decode(symbols)
        reader = DecoderReader(STANDARD, io.BytesIO(symbols), chunk_size=12)
        with pytest.raises(DecodeError) as streamed:
            reader.read()
        assert streamed.value == one_shot.value
