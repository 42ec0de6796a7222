"""
Parity with the standard library base64 module.

For valid input the RFC 4648 engines must agree with ``base64``. Where the
stdlib is lenient (non-canonical trailing bits, ``validate=False``) only the
direction that both accept is compared.
"""

import base64
import binascii

import pytest

from radix64 import (
    STANDARD,
    STANDARD_NO_PAD,
    URL_SAFE,
    URL_SAFE_NO_PAD,
    DecodeError,
)
from tests.fixtures import BOUNDARY_LENGTHS, payload


class TestEncodeParity:
    """Encoding matches base64.b64encode / urlsafe_b64encode."""

    @pytest.mark.parametrize("n", BOUNDARY_LENGTHS)
    def test_standard(self, n):
        """STANDARD matches b64encode."""
        data = payload(n, seed=3)
        assert STANDARD.encode(data) == base64.b64encode(data).decode("ascii")

    @pytest.mark.parametrize("n", BOUNDARY_LENGTHS)
    def test_url_safe(self, n):
        """URL_SAFE matches urlsafe_b64encode."""
        data = payload(n, seed=4)
        assert URL_SAFE.encode(data) == base64.urlsafe_b64encode(data).decode("ascii")

    @pytest.mark.parametrize("n", BOUNDARY_LENGTHS)
    def test_unpadded(self, n):
        """Unpadded engines match the stdlib output with '=' stripped."""
        data = payload(n, seed=5)
        assert STANDARD_NO_PAD.encode(data) == base64.b64encode(data).decode().rstrip("=")
        assert URL_SAFE_NO_PAD.encode(data) == (
            base64.urlsafe_b64encode(data).decode().rstrip("=")
        )


class TestDecodeParity:
    """Decoding matches base64.b64decode on canonical input."""

    @pytest.mark.parametrize("n", BOUNDARY_LENGTHS)
    def test_standard(self, n):
        """STANDARD decodes what b64encode produced."""
        data = payload(n, seed=6)
        symbols = base64.b64encode(data)
        assert STANDARD.decode(symbols) == base64.b64decode(symbols, validate=True) == data

    @pytest.mark.parametrize(
        "symbols", [b"Zm9v!mFy", b"Z===", b"Zm9vY", b"Zg=", b"Zg==Zg=="]
    )
    def test_both_reject(self, symbols):
        """Input the strict stdlib decoder rejects is rejected here too."""
        with pytest.raises(binascii.Error):
            base64.b64decode(symbols, validate=True)
        with pytest.raises(DecodeError):
            STANDARD.decode(symbols)

    def test_stricter_on_trailing_bits(self):
        """Non-canonical trailing bits are accepted by the stdlib but not here."""
        assert base64.b64decode(b"Zh==", validate=True) == b"f"
        with pytest.raises(DecodeError):
            STANDARD.decode(b"Zh==")
        assert STANDARD.with_config(decode_allow_trailing_bits=True).decode(b"Zh==") == b"f"
