"""Shared secret material for a registered suite."""

import base64
import binascii
from dataclasses import dataclass, field

from .types import AES_KEY_SIZE, IV_SIZE, ConfigError


def decode_aes_key(encoding_aes_key: str) -> bytes:
    """
    Decode the 43-character ``EncodingAESKey`` from the developer console.

    The console value omits the trailing base64 pad byte, which is restored
    before decoding.

    Args:
        encoding_aes_key: Key material as shown in the console

    Returns:
        The 32-byte AES key

    Raises:
        ConfigError: If the value is not base64 or does not decode to 32 bytes
    """
    # Normalize to standard padding so odd-length values still decode
    data = encoding_aes_key.strip().rstrip("=")
    data += "=" * (-len(data) % 4)

    try:
        key = base64.b64decode(data)
    except (binascii.Error, ValueError) as e:
        raise ConfigError(f"encodingAESKey invalid: {e}") from e

    if len(key) != AES_KEY_SIZE:
        raise ConfigError(
            f"encodingAESKey invalid: decodes to {len(key)} bytes (expected {AES_KEY_SIZE})"
        )

    return key


def derive_iv(key: bytes) -> bytes:
    """
    Derive the CBC initialization vector from the AES key.

    The platform uses the first 16 bytes of the key as a fixed IV. This is
    weak, but any other IV makes our ciphertext unreadable to DingTalk.
    """
    if len(key) != AES_KEY_SIZE:
        raise ConfigError(f"AES key must be {AES_KEY_SIZE} bytes, got {len(key)}")
    return key[:IV_SIZE]


@dataclass(frozen=True)
class SharedSecret:
    """Per-deployment secret material shared with DingTalk."""
    token: str
    key: bytes  # 32 bytes
    app_id: str
    iv: bytes = field(init=False, repr=False)  # first 16 bytes of key

    def __post_init__(self) -> None:
        object.__setattr__(self, "iv", derive_iv(self.key))

    def __repr__(self) -> str:
        return f"SharedSecret(app_id={self.app_id!r})"

    @classmethod
    def from_encoding_aes_key(
        cls,
        token: str,
        encoding_aes_key: str,
        app_id: str,
    ) -> "SharedSecret":
        """Creates the secret from console-format key material."""
        return cls(token=token, key=decode_aes_key(encoding_aes_key), app_id=app_id)
