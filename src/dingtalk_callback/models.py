"""Models for DingTalk callback messages and responses."""

import json
import re
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .types import (
    CHALLENGE_EVENTS,
    EVENT_SUITE_TICKET,
    MessageFormatError,
)

# Leading integer, as JavaScript parseInt reads it
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class ChallengeMessage:
    """URL registration check; must be answered with its ``Random`` value."""
    event_type: str
    random: str
    raw: dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass
class SuiteTicketMessage:
    """Periodic suite ticket push."""
    event_type: str
    suite_ticket: str
    timestamp: str  # milliseconds since epoch, as sent
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    def expires_at(self, expires_in: int) -> int:
        """
        Returns the ticket expiry in epoch milliseconds.

        Only the leading integer of ``TimeStamp`` is used, so ``"1000.5"``
        counts as 1000.

        Raises:
            MessageFormatError: If ``TimeStamp`` does not start with an integer
        """
        match = _LEADING_INT.match(str(self.timestamp))
        if match is None:
            raise MessageFormatError(f"Invalid suite ticket TimeStamp: {self.timestamp!r}")
        return int(match.group(1)) + expires_in


@dataclass
class EventMessage:
    """Any other callback event, left for the application to handle."""
    event_type: str
    raw: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        """Returns a field of the decrypted message."""
        return self.raw.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.raw[key]


CallbackMessage = Union[ChallengeMessage, SuiteTicketMessage, EventMessage]


def parse_callback_message(text: str) -> CallbackMessage:
    """
    Parse decrypted callback JSON into a typed message.

    Args:
        text: Decrypted message text

    Returns:
        ChallengeMessage, SuiteTicketMessage or EventMessage

    Raises:
        MessageFormatError: If the text is not a JSON object with an ``EventType``,
            or a challenge or suite ticket event lacks its required fields
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise MessageFormatError(f"Callback message is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise MessageFormatError(f"Callback message must be a JSON object, got {type(payload).__name__}")

    event_type = payload.get("EventType")
    if not isinstance(event_type, str):
        raise MessageFormatError("Callback message has no EventType")

    if event_type in CHALLENGE_EVENTS:
        return ChallengeMessage(
            event_type=event_type,
            random=_require_str(payload, "Random", event_type),
            raw=payload,
        )

    if event_type == EVENT_SUITE_TICKET:
        return SuiteTicketMessage(
            event_type=event_type,
            suite_ticket=_require_str(payload, "SuiteTicket", event_type),
            timestamp=_require_timestamp(payload, event_type),
            raw=payload,
        )

    return EventMessage(event_type=event_type, raw=payload)


def _require_str(payload: dict[str, Any], key: str, event_type: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        raise MessageFormatError(f"{event_type} message has no {key} string")
    return value


def _require_timestamp(payload: dict[str, Any], event_type: str) -> str:
    value = payload.get("TimeStamp")
    # Accept a bare JSON number as well as the usual string
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str) or _LEADING_INT.match(value) is None:
        raise MessageFormatError(f"{event_type} message has no valid TimeStamp: {value!r}")
    return value


@dataclass
class CallbackResponse:
    """Signed, encrypted acknowledgement returned to DingTalk."""
    msg_signature: str
    encrypt: str
    timestamp: str
    nonce: str

    def to_dict(self) -> dict[str, str]:
        """Returns the JSON body expected by DingTalk."""
        return {
            "msg_signature": self.msg_signature,
            "encrypt": self.encrypt,
            "timeStamp": self.timestamp,
            "nonce": self.nonce,
        }


@dataclass
class CallbackRequest:
    """Transport-agnostic inbound callback."""
    signature: Optional[str]
    timestamp: Optional[str]
    nonce: Optional[str]
    encrypt: Optional[str]

    @classmethod
    def from_parts(cls, query: Any, body: Any) -> "CallbackRequest":
        """Creates a request from a query mapping and a decoded JSON body."""
        body = body if isinstance(body, dict) else {}
        return cls(
            signature=query.get("signature"),
            timestamp=query.get("timestamp"),
            nonce=query.get("nonce"),
            encrypt=body.get("encrypt"),
        )
