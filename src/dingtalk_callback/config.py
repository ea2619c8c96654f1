"""Configuration for DingTalk suite callbacks."""

import os
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .crypto import DingTalkCrypto
from .dispatcher import CallbackDispatcher, Handler
from .storage import CallableTicketStore, TicketCacheEntry, TicketStore
from .types import DEFAULT_SUITE_ID, DEFAULT_TICKET_EXPIRES_IN, ConfigError


@dataclass
class CallbackConfig:
    """Callback settings from the DingTalk developer console."""

    token: str
    """Verification token used for signatures."""

    encoding_aes_key: str
    """43-character EncodingAESKey."""

    suite_id: str = DEFAULT_SUITE_ID
    """Suite key (or corp id) appended to every envelope."""

    ticket_expires_in: int = DEFAULT_TICKET_EXPIRES_IN
    """Suite ticket lifetime in milliseconds."""

    save_ticket: Optional[Callable[[TicketCacheEntry], Any]] = None
    """Called with each new suite ticket (optional)."""

    def __post_init__(self) -> None:
        if not self.suite_id:
            self.suite_id = DEFAULT_SUITE_ID
        if not self.ticket_expires_in:
            self.ticket_expires_in = DEFAULT_TICKET_EXPIRES_IN

    @classmethod
    def from_env(cls, prefix: str = "DINGTALK_", environ: Optional[dict] = None) -> "CallbackConfig":
        """
        Creates configuration from environment variables.

        Reads ``{prefix}TOKEN``, ``{prefix}ENCODING_AES_KEY``,
        ``{prefix}SUITE_ID`` and ``{prefix}TICKET_EXPIRES_IN``.

        Raises:
            ConfigError: If a required variable is missing or malformed
        """
        env = os.environ if environ is None else environ

        token = env.get(f"{prefix}TOKEN")
        if not token:
            raise ConfigError(f"{prefix}TOKEN is not set")

        encoding_aes_key = env.get(f"{prefix}ENCODING_AES_KEY")
        if not encoding_aes_key:
            raise ConfigError(f"{prefix}ENCODING_AES_KEY is not set")

        expires_raw = env.get(f"{prefix}TICKET_EXPIRES_IN")
        ticket_expires_in = DEFAULT_TICKET_EXPIRES_IN
        if expires_raw:
            try:
                ticket_expires_in = int(expires_raw)
            except ValueError as e:
                raise ConfigError(f"{prefix}TICKET_EXPIRES_IN must be an integer, got {expires_raw!r}") from e

        return cls(
            token=token,
            encoding_aes_key=encoding_aes_key,
            suite_id=env.get(f"{prefix}SUITE_ID") or DEFAULT_SUITE_ID,
            ticket_expires_in=ticket_expires_in,
        )

    def with_save_ticket(self, save_ticket: Callable[[TicketCacheEntry], Any]) -> "CallbackConfig":
        """Sets the ticket save function."""
        self.save_ticket = save_ticket
        return self

    def create_crypto(self) -> DingTalkCrypto:
        """
        Creates the envelope cipher.

        Raises:
            ConfigError: If the key material does not decode to 32 bytes
        """
        return DingTalkCrypto.from_config(self.token, self.encoding_aes_key, self.suite_id)

    def create_dispatcher(
        self,
        handler: Optional[Handler] = None,
        ticket_store: Optional[TicketStore] = None,
    ) -> CallbackDispatcher:
        """
        Creates a dispatcher for this configuration.

        An explicit ``ticket_store`` takes precedence over ``save_ticket``.
        """
        if ticket_store is None and self.save_ticket is not None:
            ticket_store = CallableTicketStore(self.save_ticket)

        return CallbackDispatcher(
            self.create_crypto(),
            handler,
            ticket_store=ticket_store,
            ticket_expires_in=self.ticket_expires_in,
        )
