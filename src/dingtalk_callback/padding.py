"""Block padding used inside the callback envelope.

DingTalk pads to a 32-byte block (not the cipher's 16-byte block) and every
pad byte carries the pad length, so ``1..32`` bytes are always appended.
"""

from cryptography.hazmat.primitives import padding

from .types import PAD_BLOCK_SIZE


def pad(data: bytes) -> bytes:
    """
    Pad data to a multiple of 32 bytes.

    A length that is already a multiple of 32 receives a full block of 32
    bytes valued 32.

    Args:
        data: Bytes to pad

    Returns:
        Padded bytes
    """
    padder = padding.PKCS7(PAD_BLOCK_SIZE * 8).padder()
    return padder.update(data) + padder.finalize()


def unpad(data: bytes) -> bytes:
    """
    Strip padding added by :func:`pad`.

    Unlike a PKCS#7 unpadder this never fails: when the final byte is outside
    ``1..32`` the buffer is returned unchanged, and the other pad bytes are not
    checked. Peers in the field accept such buffers silently, so this is kept
    for wire compatibility even though it lets malformed padding through.
    Whether a stricter check breaks any real sender is still an open question.

    Args:
        data: Padded bytes

    Returns:
        Bytes with padding removed
    """
    if not data:
        return data

    amount = data[-1]
    if amount < 1 or amount > PAD_BLOCK_SIZE:
        amount = 0

    return data[: len(data) - amount]
