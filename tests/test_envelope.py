"""Tests for envelope framing."""

import pytest
from dingtalk_callback.envelope import (
    Envelope,
    encode_envelope,
    decode_envelope,
    new_envelope,
)
from dingtalk_callback.types import FramingError


class TestEncodeEnvelope:
    """Test envelope layout."""

    def test_layout(self) -> None:
        """Random prefix, big-endian length, message, then app id."""
        envelope = Envelope(random=b"R" * 16, message=b"hello", app_id=b"suite1")
        encoded = encode_envelope(envelope)

        assert encoded[:16] == b"R" * 16
        assert encoded[16:20] == b"\x00\x00\x00\x05"
        assert encoded[20:25] == b"hello"
        assert encoded[25:] == b"suite1"

    def test_length_field_big_endian(self) -> None:
        """Length above 255 spans multiple bytes, most significant first."""
        envelope = Envelope(random=bytes(16), message=b"a" * 300, app_id=b"")
        encoded = encode_envelope(envelope)
        assert encoded[16:20] == b"\x00\x00\x01\x2c"

    def test_random_prefix_size_enforced(self) -> None:
        """A prefix other than 16 bytes is rejected."""
        with pytest.raises(FramingError):
            encode_envelope(Envelope(random=bytes(15), message=b"", app_id=b""))

    def test_new_envelope_uses_fresh_random(self) -> None:
        """Generated prefixes are 16 bytes and differ between calls."""
        first = new_envelope(b"m", b"id")
        second = new_envelope(b"m", b"id")
        assert len(first.random) == 16
        assert first.random != second.random


class TestDecodeEnvelope:
    """Test envelope parsing."""

    def test_round_trip(self) -> None:
        """Decoding an encoded envelope returns its parts."""
        envelope = Envelope(random=b"R" * 16, message="你好".encode("utf-8"), app_id=b"suite1")
        assert decode_envelope(encode_envelope(envelope)) == envelope

    def test_empty_message_and_app_id(self) -> None:
        """A bare header decodes to empty message and app id."""
        decoded = decode_envelope(bytes(16) + b"\x00\x00\x00\x00")
        assert decoded.message == b""
        assert decoded.app_id == b""

    def test_too_short(self) -> None:
        """Fewer than 20 bytes is a framing error."""
        with pytest.raises(FramingError):
            decode_envelope(bytes(19))

    def test_length_exceeds_buffer(self) -> None:
        """A declared length past the end of the buffer is a framing error."""
        data = bytes(16) + b"\x00\x00\x00\x06" + b"hello"
        with pytest.raises(FramingError):
            decode_envelope(data)

    def test_length_exactly_fills_buffer(self) -> None:
        """A declared length equal to the remaining bytes leaves an empty app id."""
        data = bytes(16) + b"\x00\x00\x00\x05" + b"hello"
        decoded = decode_envelope(data)
        assert decoded.message == b"hello"
        assert decoded.app_id == b""
