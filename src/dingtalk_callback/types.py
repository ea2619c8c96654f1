"""Type definitions for DingTalk callback handling."""

# Envelope constants
RANDOM_PREFIX_SIZE = 16
LENGTH_FIELD_SIZE = 4
ENVELOPE_HEADER_SIZE = RANDOM_PREFIX_SIZE + LENGTH_FIELD_SIZE

# Cipher constants
AES_KEY_SIZE = 32
IV_SIZE = 16
AES_BLOCK_SIZE = 16
PAD_BLOCK_SIZE = 32

# Callback constants
DEFAULT_SUITE_ID = "suite4xxxxxxxxxxxxxxx"
DEFAULT_TICKET_EXPIRES_IN = 1000 * 60 * 20  # milliseconds
SUCCESS_REPLY = "success"

# Event types with a dedicated dispatch path
EVENT_CHECK_CREATE_SUITE_URL = "check_create_suite_url"
EVENT_CHECK_UPDATE_SUITE_URL = "check_update_suite_url"
EVENT_SUITE_TICKET = "suite_ticket"
CHALLENGE_EVENTS = frozenset({EVENT_CHECK_CREATE_SUITE_URL, EVENT_CHECK_UPDATE_SUITE_URL})


# Exception types
class DingTalkCallbackError(Exception):
    """Base exception for callback errors."""
    pass


class ConfigError(DingTalkCallbackError):
    """Invalid configuration or key material."""
    pass


class AuthenticationError(DingTalkCallbackError):
    """Request signature did not match."""

    status_code = 401

    def __init__(self, message: str = "Invalid signature") -> None:
        super().__init__(message)


class DecryptionError(DingTalkCallbackError):
    """Ciphertext could not be decoded or deciphered."""
    pass


class FramingError(DingTalkCallbackError):
    """Decrypted buffer does not hold a well-formed envelope."""
    pass


class MessageFormatError(DingTalkCallbackError):
    """Decrypted message is not a JSON callback object."""
    pass
