"""Suite ticket storage interface and implementations."""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional


def now_ms() -> int:
    """Returns the current time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass
class TicketCacheEntry:
    """Cached suite ticket with its expiry (epoch milliseconds)."""
    value: str
    expires_at: int

    def is_expired(self, now: Optional[int] = None) -> bool:
        """Whether the ticket has expired at ``now`` (default: current time)."""
        if now is None:
            now = now_ms()
        return self.expires_at <= now

    def to_dict(self) -> dict[str, Any]:
        """Returns a JSON-serializable form."""
        return {"value": self.value, "expiresAt": self.expires_at}


class TicketStore(ABC):
    """Interface for persisting the latest suite ticket."""

    @abstractmethod
    def save(self, entry: TicketCacheEntry) -> None:
        """Store the latest ticket, replacing any previous one."""
        ...

    @abstractmethod
    def load(self) -> Optional[TicketCacheEntry]:
        """Load the stored ticket, if any."""
        ...

    def latest(self, now: Optional[int] = None) -> Optional[TicketCacheEntry]:
        """Load the stored ticket if it has not expired."""
        entry = self.load()
        if entry is None or entry.is_expired(now):
            return None
        return entry


class InMemoryTicketStore(TicketStore):
    """
    In-memory implementation of TicketStore.

    Tickets are lost when the process exits; multi-process deployments need a
    shared store with atomic replace semantics.
    """

    def __init__(self) -> None:
        self._entry: Optional[TicketCacheEntry] = None

    def save(self, entry: TicketCacheEntry) -> None:
        """Store the latest ticket."""
        self._entry = entry

    def load(self) -> Optional[TicketCacheEntry]:
        """Load the stored ticket."""
        return self._entry

    def clear(self) -> None:
        """Forget the stored ticket."""
        self._entry = None


class CallableTicketStore(TicketStore):
    """Adapts plain ``save``/``load`` functions to the TicketStore interface."""

    def __init__(
        self,
        save_ticket: Callable[[TicketCacheEntry], Any],
        load_ticket: Optional[Callable[[], Optional[TicketCacheEntry]]] = None,
    ) -> None:
        self._save_ticket = save_ticket
        self._load_ticket = load_ticket

    def save(self, entry: TicketCacheEntry) -> Any:
        """Pass the ticket to the save function, returning what it returns."""
        return self._save_ticket(entry)

    def load(self) -> Optional[TicketCacheEntry]:
        """Load through the load function, if one was given."""
        if self._load_ticket is None:
            return None
        return self._load_ticket()
