"""
Module-level API tests.

Tests for the radix64 one-liners and the public namespace.
"""

import pytest

import radix64


class TestOneLiners:
    """Tests for radix64.encode / decode / encode_into / decode_into."""

    def test_encode_defaults_to_standard(self):
        """encode() pads with the standard alphabet by default."""
        assert radix64.encode(b"fo") == "Zm8="

    def test_decode_defaults_to_standard(self):
        """decode() requires canonical padding by default."""
        assert radix64.decode("Zm8=") == b"fo"
        with pytest.raises(radix64.InvalidPaddingError):
            radix64.decode("Zm8")

    def test_engine_argument(self):
        """A trailing engine argument selects the engine."""
        assert radix64.encode(b"\xfb\xff", radix64.URL_SAFE_NO_PAD) == "-_8"
        assert radix64.decode("-_8", radix64.URL_SAFE_NO_PAD) == b"\xfb\xff"

    def test_engine_keyword(self):
        """The engine can be passed by keyword."""
        assert radix64.decode("Zm8", engine=radix64.STANDARD_INDIFFERENT) == b"fo"

    def test_encode_into(self):
        """encode_into() writes into the buffer and returns the count."""
        out = bytearray(8)
        assert radix64.encode_into(b"foob", out) == 8
        assert out == b"Zm9vYg=="

    def test_decode_into(self):
        """decode_into() writes into the buffer and returns the count."""
        buf = bytearray(radix64.decoded_len_estimate(8))
        assert radix64.decode_into("Zm9vYmFy", buf) == 6
        assert buf == b"foobar"

    def test_decode_into_engine(self):
        """decode_into() accepts an engine too."""
        buf = bytearray(2)
        assert radix64.decode_into("Zm8", buf, radix64.STANDARD_NO_PAD) == 2

    def test_lengths(self):
        """The length helpers are exported."""
        assert radix64.encoded_len(4) == 8
        assert radix64.encoded_len(4, padding=False) == 6
        assert radix64.decoded_len_estimate(4) == 3


class TestPrelude:
    """Tests for the ready-made engines."""

    @pytest.mark.parametrize(
        "name",
        [
            "STANDARD",
            "STANDARD_NO_PAD",
            "STANDARD_INDIFFERENT",
            "URL_SAFE",
            "URL_SAFE_NO_PAD",
            "URL_SAFE_INDIFFERENT",
        ],
    )
    def test_engine_named_after_constant(self, name):
        """Each ready-made engine is named after its constant."""
        engine = getattr(radix64, name)
        assert isinstance(engine, radix64.Engine)
        assert engine.name == name

    def test_indifferent_engines_do_not_pad(self):
        """The INDIFFERENT engines emit no padding but accept any."""
        assert radix64.STANDARD_INDIFFERENT.encode(b"f") == "Zg"
        for symbols in ("Zg", "Zg=", "Zg=="):
            assert radix64.STANDARD_INDIFFERENT.decode(symbols) == b"f"
            assert radix64.URL_SAFE_INDIFFERENT.decode(symbols) == b"f"

    def test_prelude_engines_are_strict_on_bits(self):
        """No ready-made engine accepts nonzero trailing bits."""
        for name in ("STANDARD", "STANDARD_NO_PAD", "STANDARD_INDIFFERENT"):
            assert getattr(radix64, name).config.decode_allow_trailing_bits is False


class TestNamespace:
    """Tests for what the package exports."""

    def test_all_names_exist(self):
        """Every name in __all__ is importable."""
        for name in radix64.__all__:
            assert hasattr(radix64, name), name

    def test_version(self):
        """__version__ is a dotted string."""
        assert radix64.__version__.count(".") >= 1

    def test_exception_hierarchy_exported(self):
        """Decode errors share the exported base classes."""
        assert issubclass(radix64.InvalidByteError, radix64.DecodeError)
        assert issubclass(radix64.DecodeError, radix64.Radix64Error)
        assert issubclass(radix64.OutputTooSmallError, radix64.Radix64Error)
