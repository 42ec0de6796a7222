"""
Fixed-capacity encoding tests.

Tests for Engine.encode_into() with caller-provided buffers.
"""

import array

import pytest

from radix64 import STANDARD, STANDARD_NO_PAD, OutputTooSmallError


class TestEncodeInto:
    """Tests for encode_into()."""

    def test_exact_buffer(self):
        """A buffer of exactly encoded_len bytes is filled completely."""
        out = bytearray(8)
        assert STANDARD.encode_into(b"foobar", out) == 8
        assert out == b"Zm9vYmFy"

    def test_larger_buffer(self):
        """Only the first n bytes are written."""
        out = bytearray(b"#" * 10)
        n = STANDARD.encode_into(b"f", out)
        assert n == 4
        assert out == b"Zg==######"

    def test_unpadded(self):
        """Unpadded engines write fewer bytes."""
        out = bytearray(4)
        assert STANDARD_NO_PAD.encode_into(b"f", out) == 2
        assert out[:2] == b"Zg"

    def test_empty_input(self):
        """Empty input writes nothing, even into an empty buffer."""
        assert STANDARD.encode_into(b"", bytearray()) == 0

    def test_too_small(self):
        """A short buffer raises before anything is written."""
        out = bytearray(b"#" * 7)
        with pytest.raises(OutputTooSmallError) as exc_info:
            STANDARD.encode_into(b"foobar", out)
        assert exc_info.value.required == 8
        assert exc_info.value.available == 7
        assert out == b"#" * 7

    def test_too_small_unpadded(self):
        """Unpadded engines need only the unpadded length."""
        out = bytearray(2)
        assert STANDARD_NO_PAD.encode_into(b"f", out) == 2
        with pytest.raises(OutputTooSmallError):
            STANDARD.encode_into(b"f", out)

    def test_memoryview_slice(self):
        """A slice of a larger buffer can be the target."""
        backing = bytearray(12)
        n = STANDARD.encode_into(b"foo", memoryview(backing)[4:])
        assert n == 4
        assert backing[4:8] == b"Zm9v"
        assert backing[:4] == bytes(4)

    def test_typed_array(self):
        """Non-byte arrays are written as raw bytes."""
        out = array.array("H", [0] * 4)
        n = STANDARD.encode_into(b"foobar", out)
        assert n == 8
        assert out.tobytes() == b"Zm9vYmFy"

    def test_readonly_buffer(self):
        """bytes is not writable."""
        with pytest.raises(TypeError):
            STANDARD.encode_into(b"f", bytes(4))

    def test_not_a_buffer(self):
        """Objects without the buffer protocol are rejected."""
        with pytest.raises(TypeError):
            STANDARD.encode_into(b"f", [0, 0, 0, 0])

    def test_numpy_array(self):
        """NumPy uint8 arrays work as output buffers."""
        np = pytest.importorskip("numpy")
        out = np.zeros(8, dtype=np.uint8)
        assert STANDARD.encode_into(b"foobar", out) == 8
        assert out.tobytes() == b"Zm9vYmFy"
