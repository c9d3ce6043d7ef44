"""TicketPool: the free ticket numbers per item kind.

The pool is derived state.  It is rebuilt from the authoritative set of
open orders after every fetch and only mutated in between by local
staging (``allocate``) and clearing (``release``).
"""

from __future__ import annotations

import bisect
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from stall.domain.exceptions import TicketsExhaustedError, ValidationError
from stall.domain.model.menu import TICKET_COUNT, ItemKind


class Ticketed(Protocol):
    item: ItemKind
    ticket_number: int


@dataclass
class TicketPool:
    """Free ticket numbers per kind, each list kept ascending.

    Invariants:
    - every number lies in ``1..size``
    - a number appears at most once per kind
    """

    size: int = TICKET_COUNT
    _free: dict[ItemKind, list[int]] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        for kind in ItemKind:
            self._free.setdefault(kind, list(range(1, self.size + 1)))

    # --- Factory --------------------------------------------------------------

    @classmethod
    def from_orders(
        cls,
        orders: Iterable[Ticketed],
        staged: Iterable[Ticketed] = (),
        size: int = TICKET_COUNT,
    ) -> TicketPool:
        """Compute the pool as ``1..size`` minus every ticket in use."""
        used: dict[ItemKind, set[int]] = {kind: set() for kind in ItemKind}
        for holder in list(orders) + list(staged):
            used[holder.item].add(holder.ticket_number)

        return cls(
            size=size,
            _free={
                kind: [n for n in range(1, size + 1) if n not in used[kind]]
                for kind in ItemKind
            },
        )

    # --- Queries --------------------------------------------------------------

    def available(self, kind: ItemKind) -> list[int]:
        return list(self._free[kind])

    def peek(self, kind: ItemKind) -> int | None:
        free = self._free[kind]
        return free[0] if free else None

    # --- Mutations ------------------------------------------------------------

    def allocate(self, kind: ItemKind) -> int:
        """Take the smallest free number for *kind*.

        Raises TicketsExhaustedError (pool untouched) when none is left.
        """
        free = self._free[kind]
        if not free:
            raise TicketsExhaustedError(kind)
        return free.pop(0)

    def release(self, kind: ItemKind, number: int) -> None:
        """Put *number* back, keeping the list sorted and duplicate-free."""
        if not 1 <= number <= self.size:
            raise ValidationError(
                f"Ticket number must be between 1 and {self.size}, got {number}"
            )
        free = self._free[kind]
        pos = bisect.bisect_left(free, number)
        if pos < len(free) and free[pos] == number:
            return
        free.insert(pos, number)
