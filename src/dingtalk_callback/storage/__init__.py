"""Suite ticket storage module."""

from .ticket_store import (
    TicketCacheEntry,
    TicketStore,
    InMemoryTicketStore,
    CallableTicketStore,
    now_ms,
)

__all__ = [
    "TicketCacheEntry",
    "TicketStore",
    "InMemoryTicketStore",
    "CallableTicketStore",
    "now_ms",
]
