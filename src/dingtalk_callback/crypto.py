"""Encryption and decryption for DingTalk callback payloads."""

import base64
import binascii
from dataclasses import dataclass
from typing import Optional, Union

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .envelope import Envelope, encode_envelope, decode_envelope, new_envelope
from .padding import pad, unpad
from .secret import SharedSecret
from .signature import compute_signature, verify_signature
from .types import AES_BLOCK_SIZE, DecryptionError


@dataclass
class DecryptedMessage:
    """Decrypted callback payload."""
    message: str
    app_id: str


def _to_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


class DingTalkCrypto:
    """
    AES-256-CBC envelope cipher and signer for one suite.

    The instance holds only immutable secret material, so it can be shared
    between threads.

    Example usage:
        ```python
        crypto = DingTalkCrypto.from_config(token, encoding_aes_key, suite_id)

        ciphertext = crypto.encrypt("success")
        signature = crypto.signature(timestamp, nonce, ciphertext)

        result = crypto.decrypt(ciphertext)
        print(result.message, result.app_id)
        ```
    """

    def __init__(self, secret: SharedSecret) -> None:
        """
        Initialize the cipher.

        Args:
            secret: Shared secret material for the suite.
        """
        self.secret = secret

    @classmethod
    def from_config(cls, token: str, encoding_aes_key: str, app_id: str) -> "DingTalkCrypto":
        """Creates a cipher from console-format configuration values."""
        return cls(SharedSecret.from_encoding_aes_key(token, encoding_aes_key, app_id))

    @property
    def app_id(self) -> str:
        """The configured suite or corp id."""
        return self.secret.app_id

    def _cipher(self) -> Cipher:
        return Cipher(algorithms.AES(self.secret.key), modes.CBC(self.secret.iv))

    def encrypt(
        self,
        plaintext: Union[str, bytes],
        app_id: Optional[Union[str, bytes]] = None,
        random: Optional[bytes] = None,
    ) -> str:
        """
        Encrypt a message into a base64 ciphertext.

        Args:
            plaintext: Message text or bytes
            app_id: Identifier appended to the envelope (default: configured app id)
            random: Fixed 16-byte prefix, for reproducible output in tests

        Returns:
            Base64-encoded ciphertext
        """
        if app_id is None:
            app_id = self.secret.app_id

        envelope = new_envelope(_to_bytes(plaintext), _to_bytes(app_id), random)
        padded = pad(encode_envelope(envelope))

        # Padding is applied manually above; CBC here adds none of its own
        encryptor = self._cipher().encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()

        return base64.b64encode(ciphertext).decode("ascii")

    def decrypt_envelope(self, ciphertext: str) -> Envelope:
        """
        Decrypt a base64 ciphertext into its raw envelope.

        Raises:
            DecryptionError: If the input is not base64 or not whole cipher blocks
            FramingError: If the decrypted envelope is malformed
        """
        try:
            data = base64.b64decode(ciphertext)
        except (binascii.Error, ValueError, TypeError) as e:
            raise DecryptionError(f"Ciphertext is not valid base64: {e}") from e

        if not data or len(data) % AES_BLOCK_SIZE != 0:
            raise DecryptionError(
                f"Ciphertext length {len(data)} is not a positive multiple of {AES_BLOCK_SIZE}"
            )

        decryptor = self._cipher().decryptor()
        padded = decryptor.update(data) + decryptor.finalize()

        return decode_envelope(unpad(padded))

    def decrypt(self, ciphertext: str) -> DecryptedMessage:
        """
        Decrypt a base64 ciphertext.

        Args:
            ciphertext: Base64-encoded ciphertext

        Returns:
            DecryptedMessage with the message text and the sender's app id

        Raises:
            DecryptionError: If the input is not base64 or not whole cipher blocks
            FramingError: If the decrypted envelope is malformed
        """
        envelope = self.decrypt_envelope(ciphertext)
        return DecryptedMessage(
            message=envelope.message.decode("utf-8", errors="replace"),
            app_id=envelope.app_id.decode("utf-8", errors="replace"),
        )

    def signature(self, *parts: str) -> str:
        """
        Sign values together with the shared token.

        Args:
            parts: Values to sign, in any order

        Returns:
            Lowercase hex SHA-1 signature
        """
        return compute_signature(parts, self.secret.token)

    def verify(self, signature: str, *parts: str) -> bool:
        """Check a signature over the given values."""
        return verify_signature(signature, parts, self.secret.token)
