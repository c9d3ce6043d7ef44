"""Abstract store for orders.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (Supabase, JSON file,
in-memory) live elsewhere.  Every method is a coroutine because the
real backend is a remote service.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from stall.domain.model.order import NewOrder, Order


@dataclass(frozen=True)
class ChangeEvent:
    """One row-level change reported by the store."""

    event_type: str  # INSERT | UPDATE | DELETE
    record: dict[str, Any] = field(default_factory=dict)


ChangeCallback = Callable[[ChangeEvent], Awaitable[None]]


class OrderStore(ABC):

    @abstractmethod
    async def fetch_all(self) -> list[Order]:
        """Return every open order, oldest first."""

    @abstractmethod
    async def insert_many(self, orders: list[NewOrder]) -> None:
        """Insert a batch of new orders in one call."""

    @abstractmethod
    async def delete(self, order_id: int) -> None:
        """Delete one order by identifier."""

    @abstractmethod
    async def subscribe(self, callback: ChangeCallback) -> None:
        """Deliver every subsequent row-level change to *callback*."""

    @abstractmethod
    async def unsubscribe(self) -> None:
        """Stop delivering change notifications."""

    @abstractmethod
    async def close(self) -> None:
        """Release connections; the store is not used afterwards."""
