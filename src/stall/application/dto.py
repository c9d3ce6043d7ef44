"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StagedOrderDTO:
    """Output: a staged order as shown in the order-entry panel."""

    local_id: int
    item: str
    ticket_number: int
    price: str  # formatted, e.g. "¥350"


@dataclass(frozen=True)
class OrderDTO:
    """Output: an open order as shown in the kitchen panel."""

    id: int
    item: str
    ticket_number: int
    price: str
    status: str
    created_at: str


@dataclass(frozen=True)
class BoardDTO:
    """Output: everything one screen of the board needs."""

    staged: list[StagedOrderDTO]
    staged_total: str
    orders: list[OrderDTO]
    open_count: int
    available_tickets: dict[str, list[int]]
