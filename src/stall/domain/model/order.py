"""Order records, durable and staged.

An ``Order`` mirrors one row of the store's ``orders`` table.  A
``StagedOrder`` has the same shape but lives only on this client until
it is confirmed or cleared.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from stall.domain.exceptions import ValidationError
from stall.domain.model.menu import TICKET_COUNT, ItemKind
from stall.domain.model.value_objects import Money

DEFAULT_STATUS = "pending"


def _check_ticket(ticket_number: int) -> None:
    if not isinstance(ticket_number, int) or not 1 <= ticket_number <= TICKET_COUNT:
        raise ValidationError(
            f"Ticket number must be between 1 and {TICKET_COUNT}, got {ticket_number!r}"
        )


@dataclass
class Order:
    """An open order as held by the store."""

    id: int
    item: ItemKind
    price: Money
    ticket_number: int
    status: str = DEFAULT_STATUS
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def label(self) -> str:
        return f"{self.item.value} #{self.ticket_number}"


@dataclass(frozen=True)
class NewOrder:
    """Insert payload; the store fills in id, status and created_at."""

    item: ItemKind
    price: Money
    ticket_number: int

    def __post_init__(self) -> None:
        _check_ticket(self.ticket_number)


@dataclass(frozen=True)
class StagedOrder:
    """A client-local order waiting for confirmation."""

    local_id: int
    item: ItemKind
    price: Money
    ticket_number: int

    def __post_init__(self) -> None:
        _check_ticket(self.ticket_number)

    @property
    def label(self) -> str:
        return f"{self.item.value} #{self.ticket_number}"

    def to_new_order(self) -> NewOrder:
        return NewOrder(item=self.item, price=self.price, ticket_number=self.ticket_number)
