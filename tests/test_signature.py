"""Tests for signature module."""

import itertools

import pytest
from dingtalk_callback.signature import (
    compute_signature,
    verify_signature,
    SIGNATURE_HEX_SIZE,
)
from .test_vectors import (
    ABC_SIGNATURE,
    NONCE,
    SUCCESS_CIPHERTEXT,
    SUCCESS_SIGNATURE,
    TIMESTAMP,
    TOKEN,
)


class TestComputeSignature:
    """Tests for signature computation."""

    def test_known_answer(self):
        """Test against an independently computed SHA-1 digest."""
        result = compute_signature([TIMESTAMP, NONCE, SUCCESS_CIPHERTEXT], TOKEN)
        assert result == SUCCESS_SIGNATURE

    def test_token_only_sorted_in(self):
        """Test the token joins the sorted list like any other value."""
        assert compute_signature(["abc"], TOKEN) == ABC_SIGNATURE

    def test_format(self):
        """Test signature is 40 lowercase hex chars."""
        result = compute_signature(["a", "b"], TOKEN)
        assert len(result) == SIGNATURE_HEX_SIZE
        assert all(c in "0123456789abcdef" for c in result)

    @pytest.mark.parametrize("order", list(itertools.permutations(["a", "b", "c"])))
    def test_order_independent(self, order):
        """Test every argument order gives the same signature."""
        assert compute_signature(list(order), TOKEN) == compute_signature(["a", "b", "c"], TOKEN)

    def test_different_token_different_signature(self):
        """Test the token changes the digest."""
        assert compute_signature(["a"], "one") != compute_signature(["a"], "two")

    def test_sensitive_to_exact_string(self):
        """Test values are signed in their exact string form."""
        assert compute_signature(["1000"], TOKEN) != compute_signature(["01000"], TOKEN)


class TestVerifySignature:
    """Tests for signature verification."""

    def test_valid(self):
        """Test a matching signature verifies."""
        assert verify_signature(SUCCESS_SIGNATURE, [NONCE, TIMESTAMP, SUCCESS_CIPHERTEXT], TOKEN)

    def test_wrong_signature(self):
        """Test a different signature fails."""
        assert not verify_signature("0" * 40, [TIMESTAMP, NONCE, SUCCESS_CIPHERTEXT], TOKEN)

    def test_uppercase_does_not_match(self):
        """Test comparison is exact, not case-insensitive."""
        assert not verify_signature(SUCCESS_SIGNATURE.upper(), [TIMESTAMP, NONCE, SUCCESS_CIPHERTEXT], TOKEN)

    def test_non_string_signature(self):
        """Test a missing signature fails instead of raising."""
        assert not verify_signature(None, [TIMESTAMP, NONCE, SUCCESS_CIPHERTEXT], TOKEN)
