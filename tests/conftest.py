"""Shared fixtures for callback tests."""

import base64

import pytest
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from dingtalk_callback.crypto import DingTalkCrypto
from dingtalk_callback.storage import InMemoryTicketStore

from .test_vectors import ENCODING_AES_KEY, SUITE_ID, TOKEN


@pytest.fixture
def crypto():
    """Cipher for the test suite."""
    return DingTalkCrypto.from_config(TOKEN, ENCODING_AES_KEY, SUITE_ID)


@pytest.fixture
def ticket_store():
    """Empty in-memory ticket store."""
    return InMemoryTicketStore()


@pytest.fixture
def make_request(crypto):
    """Build signed callback parameters for a plaintext message."""

    def _make(text: str, timestamp: str = "1700000000000", nonce: str = "abcdefgh"):
        encrypt = crypto.encrypt(text)
        return {
            "signature": crypto.signature(timestamp, nonce, encrypt),
            "timestamp": timestamp,
            "nonce": nonce,
            "encrypt": encrypt,
        }

    return _make


@pytest.fixture
def encrypt_raw(crypto):
    """Encrypt an already padded buffer with the suite key, bypassing framing."""

    def _encrypt(plaintext: bytes) -> str:
        encryptor = Cipher(algorithms.AES(crypto.secret.key), modes.CBC(crypto.secret.iv)).encryptor()
        return base64.b64encode(encryptor.update(plaintext) + encryptor.finalize()).decode("ascii")

    return _encrypt
