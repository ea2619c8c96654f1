"""
Callback dispatcher for DingTalk suite events.

The dispatcher verifies the request signature, decrypts the payload and picks
one of three paths:

- URL check events are answered with the encrypted ``Random`` value.
- Suite ticket events are saved to the ticket store and acknowledged.
- Everything else goes to the application handler together with a ``reply``
  capability that produces the encrypted ``"success"`` acknowledgement.

It works on plain values and never touches a web framework; see
``dingtalk_callback.adapters`` for host bindings.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .crypto import DingTalkCrypto
from .models import (
    CallbackMessage,
    CallbackRequest,
    CallbackResponse,
    ChallengeMessage,
    EventMessage,
    SuiteTicketMessage,
    parse_callback_message,
)
from .storage import TicketCacheEntry, TicketStore
from .types import (
    DEFAULT_TICKET_EXPIRES_IN,
    SUCCESS_REPLY,
    AuthenticationError,
)

logger = logging.getLogger(__name__)


class Reply:
    """
    Produces the signed ``"success"`` acknowledgement for one request.

    Calling it more than once returns the first response.
    """

    def __init__(self, dispatcher: "CallbackDispatcher", timestamp: str, nonce: str) -> None:
        self._dispatcher = dispatcher
        self._timestamp = timestamp
        self._nonce = nonce
        self.response: Optional[CallbackResponse] = None

    @property
    def replied(self) -> bool:
        """Whether the acknowledgement has been produced."""
        return self.response is not None

    def __call__(self, text: str = SUCCESS_REPLY) -> CallbackResponse:
        if self.response is None:
            self.response = self._dispatcher.build_response(self._timestamp, self._nonce, text)
        return self.response


Handler = Callable[[CallbackMessage, Reply], Any]


@dataclass
class CallbackResult:
    """Outcome of dispatching one callback."""
    message: CallbackMessage
    reply: Reply
    handler_result: Any = None
    ticket: Optional[TicketCacheEntry] = None
    ticket_save_result: Any = None

    @property
    def response(self) -> Optional[CallbackResponse]:
        """The signed response, once one has been produced."""
        return self.reply.response

    @property
    def replied(self) -> bool:
        """Whether a response is ready to send."""
        return self.reply.replied


class CallbackDispatcher:
    """
    Verifies, decrypts and routes DingTalk callbacks.

    Example usage:
        ```python
        def on_event(message, reply):
            if message.event_type == "org_suite_auth":
                store_auth(message.raw)
            reply()

        dispatcher = CallbackDispatcher(crypto, on_event, ticket_store=store)
        result = dispatcher.handle(signature, timestamp, nonce, encrypt)
        if result.replied:
            return result.response.to_dict()
        ```
    """

    def __init__(
        self,
        crypto: DingTalkCrypto,
        handler: Optional[Handler] = None,
        ticket_store: Optional[TicketStore] = None,
        ticket_expires_in: int = DEFAULT_TICKET_EXPIRES_IN,
    ) -> None:
        """
        Initialize the dispatcher.

        Args:
            crypto: Cipher for the suite.
            handler: Application callback for events without a built-in path.
            ticket_store: Where suite tickets are saved. Without one, suite
                ticket events go to the handler like any other event.
            ticket_expires_in: Ticket lifetime in milliseconds.
        """
        self.crypto = crypto
        self.handler = handler
        self.ticket_store = ticket_store
        self.ticket_expires_in = ticket_expires_in

    def build_response(self, timestamp: str, nonce: str, text: str) -> CallbackResponse:
        """Encrypt and sign a reply, echoing the request timestamp and nonce."""
        encrypt = self.crypto.encrypt(text)
        return CallbackResponse(
            msg_signature=self.crypto.signature(timestamp, nonce, encrypt),
            encrypt=encrypt,
            timestamp=timestamp,
            nonce=nonce,
        )

    def verify(self, signature: Optional[str], timestamp: Optional[str], nonce: Optional[str], encrypt: Optional[str]) -> None:
        """
        Check the request signature.

        Raises:
            AuthenticationError: If any signed value is missing or the signature differs
        """
        if signature is None or timestamp is None or nonce is None or encrypt is None:
            logger.warning("Rejected callback with missing signature parameters")
            raise AuthenticationError()

        if not self.crypto.verify(signature, timestamp, nonce, encrypt):
            logger.warning("Rejected callback with invalid signature (timestamp=%s)", timestamp)
            raise AuthenticationError()

    def decrypt_message(self, encrypt: str) -> CallbackMessage:
        """
        Decrypt and parse a verified payload.

        Raises:
            DecryptionError, FramingError, MessageFormatError: On a corrupt payload
        """
        decrypted = self.crypto.decrypt(encrypt)
        if decrypted.app_id != self.crypto.app_id:
            logger.warning(
                "Callback envelope app id %r differs from configured %r",
                decrypted.app_id,
                self.crypto.app_id,
            )
        return parse_callback_message(decrypted.message)

    def handle(
        self,
        signature: Optional[str],
        timestamp: Optional[str],
        nonce: Optional[str],
        encrypt: Optional[str],
    ) -> CallbackResult:
        """
        Process one callback.

        Args:
            signature: ``signature`` query parameter
            timestamp: ``timestamp`` query parameter (epoch milliseconds)
            nonce: ``nonce`` query parameter
            encrypt: ``encrypt`` field of the JSON body

        Returns:
            CallbackResult; ``response`` is set unless the handler has not replied yet

        Raises:
            AuthenticationError: If the signature does not match (nothing is decrypted)
            DecryptionError, FramingError, MessageFormatError: On a corrupt payload
        """
        self.verify(signature, timestamp, nonce, encrypt)
        message = self.decrypt_message(encrypt)
        reply = Reply(self, timestamp, nonce)
        result = CallbackResult(message=message, reply=reply)

        if isinstance(message, ChallengeMessage):
            logger.debug("Answering %s challenge", message.event_type)
            reply(message.random)
        elif isinstance(message, SuiteTicketMessage) and self.ticket_store is not None:
            result.ticket = TicketCacheEntry(
                value=message.suite_ticket,
                expires_at=message.expires_at(self.ticket_expires_in),
            )
            logger.debug("Saving suite ticket expiring at %d", result.ticket.expires_at)
            result.ticket_save_result = self.ticket_store.save(result.ticket)
            reply()
        elif isinstance(message, (SuiteTicketMessage, EventMessage)):
            logger.debug("Dispatching %s event to handler", message.event_type)
            if self.handler is not None:
                result.handler_result = self.handler(message, reply)
        else:
            raise TypeError(f"Unhandled callback message type: {type(message).__name__}")

        return result

    def handle_request(self, request: CallbackRequest) -> CallbackResult:
        """Process a callback given as a CallbackRequest."""
        return self.handle(request.signature, request.timestamp, request.nonce, request.encrypt)
