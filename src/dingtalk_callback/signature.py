"""
Request signatures for DingTalk callbacks.

DingTalk signs each callback with SHA-1 over the timestamp, nonce, ciphertext
and the shared token. The tokens are sorted before joining, so the digest does
not depend on argument order.
"""

import hashlib
import hmac
from typing import Iterable


SIGNATURE_HEX_SIZE = 40


def compute_signature(parts: Iterable[str], token: str) -> str:
    """
    Compute the callback signature.

    Args:
        parts: Signed values (timestamp, nonce, ciphertext)
        token: Shared verification token

    Returns:
        Lowercase hex SHA-1 digest (40 chars)
    """
    values = [str(part) for part in parts]
    values.append(token)
    # Sort by UTF-8 byte value, which matches code point order for str
    values.sort()
    return hashlib.sha1("".join(values).encode("utf-8")).hexdigest()


def verify_signature(signature: str, parts: Iterable[str], token: str) -> bool:
    """
    Check a supplied signature against the expected one.

    Args:
        signature: Signature from the request query string
        parts: Signed values (timestamp, nonce, ciphertext)
        token: Shared verification token

    Returns:
        True if the signature matches exactly
    """
    if not isinstance(signature, str):
        return False
    expected = compute_signature(parts, token)
    return hmac.compare_digest(signature.encode("utf-8"), expected.encode("utf-8"))
