"""Envelope encoding and decoding for DingTalk callback payloads."""

import os
import struct
from dataclasses import dataclass
from typing import Optional

from .types import (
    RANDOM_PREFIX_SIZE,
    LENGTH_FIELD_SIZE,
    ENVELOPE_HEADER_SIZE,
    FramingError,
)


@dataclass
class Envelope:
    """Plaintext callback envelope (before padding)."""
    random: bytes  # 16 bytes
    message: bytes  # variable
    app_id: bytes  # variable, runs to the end of the buffer


def encode_envelope(envelope: Envelope) -> bytes:
    """
    Encode an envelope to bytes.

    Format (20-byte header + message + app id):
        [0-15]    random prefix (16 bytes)
        [16-19]   message length (uint32, big-endian)
        [20+]     message (length bytes)
        [...]     app id (remainder)

    Args:
        envelope: Envelope to encode

    Returns:
        Encoded bytes

    Raises:
        FramingError: If the random prefix is not 16 bytes
    """
    if len(envelope.random) != RANDOM_PREFIX_SIZE:
        raise FramingError(
            f"Random prefix must be {RANDOM_PREFIX_SIZE} bytes, got {len(envelope.random)}"
        )

    return (
        envelope.random
        + struct.pack(">I", len(envelope.message))
        + envelope.message
        + envelope.app_id
    )


def decode_envelope(data: bytes) -> Envelope:
    """
    Decode bytes into an envelope.

    Args:
        data: Unpadded envelope bytes

    Returns:
        Decoded Envelope

    Raises:
        FramingError: If data is too short or the length field overruns it
    """
    if len(data) < ENVELOPE_HEADER_SIZE:
        raise FramingError(
            f"Data too short: {len(data)} bytes (minimum {ENVELOPE_HEADER_SIZE})"
        )

    random = data[:RANDOM_PREFIX_SIZE]
    (length,) = struct.unpack(">I", data[RANDOM_PREFIX_SIZE : RANDOM_PREFIX_SIZE + LENGTH_FIELD_SIZE])

    remaining = len(data) - ENVELOPE_HEADER_SIZE
    if length > remaining:
        raise FramingError(
            f"Declared message length {length} exceeds remaining {remaining} bytes"
        )

    offset = ENVELOPE_HEADER_SIZE
    message = data[offset : offset + length]
    app_id = data[offset + length :]

    return Envelope(random=random, message=message, app_id=app_id)


def new_envelope(message: bytes, app_id: bytes, random: Optional[bytes] = None) -> Envelope:
    """Creates an envelope with a fresh random prefix unless one is given."""
    if random is None:
        random = os.urandom(RANDOM_PREFIX_SIZE)
    return Envelope(random=random, message=message, app_id=app_id)
