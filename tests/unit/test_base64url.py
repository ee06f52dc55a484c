"""
Unit tests for the base64url codec.
"""

import base64

import pytest

from webhook_verifier import base64url
from webhook_verifier.errors import DecodeError


pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "raw",
    [b"", b"A", b"OK", b"hi!", b"hello world", b"\x00\xff\x10", bytes(range(256))],
)
def test_decode_reverses_encode(raw):
    """Test that decode(encode(b)) == b, including inputs that need padding."""
    # Act
    encoded = base64url.encode(raw)

    # Assert
    assert "=" not in encoded
    assert base64url.decode(encoded) == raw


def test_decode_translates_url_safe_alphabet():
    """Test that '-' and '_' decode like '+' and '/'."""
    # Arrange
    raw = b"\xfb\xff\xbf"
    assert base64.b64encode(raw) == b"+/+/"

    # Act / Assert
    assert base64url.decode("-_-_") == raw


def test_decode_accepts_standard_padded_input():
    """Test that already padded standard base64 decodes unchanged."""
    assert base64url.decode("aGk=") == b"hi"


@pytest.mark.parametrize("text", ["a", "abcde", "ab$d", "ab d", "ab=c", "héllo"])
def test_decode_rejects_invalid_input(text):
    """Test that bad characters and impossible lengths raise DecodeError."""
    with pytest.raises(DecodeError):
        base64url.decode(text)


def test_decode_error_is_value_error():
    """Test that DecodeError can be caught as a ValueError."""
    assert issubclass(DecodeError, ValueError)
