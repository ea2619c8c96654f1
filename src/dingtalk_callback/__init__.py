"""
dingtalk_callback - DingTalk suite callback handling

Python implementation of the DingTalk callback envelope: AES-256-CBC
encryption with 32-byte block padding, SHA-1 request signatures, and a
dispatcher for URL checks, suite tickets and application events.
"""

from .padding import pad, unpad
from .secret import SharedSecret, decode_aes_key, derive_iv
from .envelope import Envelope, encode_envelope, decode_envelope
from .signature import compute_signature, verify_signature
from .crypto import DingTalkCrypto, DecryptedMessage
from .models import (
    CallbackMessage,
    ChallengeMessage,
    SuiteTicketMessage,
    EventMessage,
    CallbackRequest,
    CallbackResponse,
    parse_callback_message,
)
from .storage import (
    TicketCacheEntry,
    TicketStore,
    InMemoryTicketStore,
    CallableTicketStore,
)
from .dispatcher import (
    CallbackDispatcher,
    CallbackResult,
    Reply,
)
from .config import CallbackConfig
from .types import (
    DEFAULT_SUITE_ID,
    DEFAULT_TICKET_EXPIRES_IN,
    SUCCESS_REPLY,
    DingTalkCallbackError,
    ConfigError,
    AuthenticationError,
    DecryptionError,
    FramingError,
    MessageFormatError,
)

__version__ = "0.1.0"

__all__ = [
    # Padding
    "pad",
    "unpad",
    # Secret
    "SharedSecret",
    "decode_aes_key",
    "derive_iv",
    # Envelope
    "Envelope",
    "encode_envelope",
    "decode_envelope",
    # Signature
    "compute_signature",
    "verify_signature",
    # Crypto
    "DingTalkCrypto",
    "DecryptedMessage",
    # Models
    "CallbackMessage",
    "ChallengeMessage",
    "SuiteTicketMessage",
    "EventMessage",
    "CallbackRequest",
    "CallbackResponse",
    "parse_callback_message",
    # Storage
    "TicketCacheEntry",
    "TicketStore",
    "InMemoryTicketStore",
    "CallableTicketStore",
    # Dispatcher
    "CallbackDispatcher",
    "CallbackResult",
    "Reply",
    # Config
    "CallbackConfig",
    # Errors
    "DingTalkCallbackError",
    "ConfigError",
    "AuthenticationError",
    "DecryptionError",
    "FramingError",
    "MessageFormatError",
    # Constants
    "DEFAULT_SUITE_ID",
    "DEFAULT_TICKET_EXPIRES_IN",
    "SUCCESS_REPLY",
]
