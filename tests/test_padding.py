"""Tests for 32-byte block padding."""

import pytest
from dingtalk_callback.padding import pad, unpad


class TestPad:
    """Test padding length and content."""

    @pytest.mark.parametrize("length", [0, 1, 15, 16, 31, 32, 33, 63, 64, 100])
    def test_padded_length_is_block_multiple(self, length: int) -> None:
        """Padding always lands on a 32-byte boundary and adds 1..32 bytes."""
        data = bytes(length)
        padded = pad(data)

        assert len(padded) % 32 == 0
        assert 1 <= len(padded) - length <= 32

    def test_pad_bytes_carry_pad_length(self) -> None:
        """Each pad byte holds the number of pad bytes."""
        padded = pad(b"abc")
        assert padded[:3] == b"abc"
        assert padded[3:] == bytes([29] * 29)

    def test_block_multiple_gets_full_block(self) -> None:
        """An exact multiple of 32 still receives 32 bytes valued 32."""
        padded = pad(bytes(32))
        assert len(padded) == 64
        assert padded[32:] == bytes([32] * 32)

    def test_empty_input(self) -> None:
        """Empty input pads to one full block."""
        assert pad(b"") == bytes([32] * 32)


class TestUnpad:
    """Test padding removal."""

    @pytest.mark.parametrize("length", [0, 1, 31, 32, 33, 95])
    def test_unpad_reverses_pad(self, length: int) -> None:
        """unpad(pad(b)) == b."""
        data = bytes(range(length))
        assert unpad(pad(data)) == data

    @pytest.mark.parametrize("last_byte", [0, 33, 200, 255])
    def test_out_of_range_pad_is_left_in_place(self, last_byte: int) -> None:
        """Malformed padding is passed through unchanged (peer-compatible)."""
        data = bytes(63) + bytes([last_byte])
        result = unpad(data)

        assert result == data
        assert len(result) == 64

    def test_pad_bytes_not_checked(self) -> None:
        """Only the final byte is consulted, matching peers in the field."""
        data = b"x" * 30 + b"\x01\x02"
        assert unpad(data) == b"x" * 30

    def test_empty_input(self) -> None:
        """Empty input is returned as is."""
        assert unpad(b"") == b""
