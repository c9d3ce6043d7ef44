"""The client-local view of the board.

Holds the last fetched order list, the staged (unconfirmed) orders and
the ticket pool derived from both.  Handlers share one instance.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable
from dataclasses import dataclass, field

from stall.domain.model.order import Order, StagedOrder
from stall.domain.model.ticket_pool import TicketPool
from stall.domain.model.value_objects import Money


@dataclass
class BoardState:

    orders: list[Order] = field(default_factory=list)
    staged: list[StagedOrder] = field(default_factory=list)
    pool: TicketPool = field(default_factory=TicketPool)
    _local_ids: itertools.count = field(
        default_factory=lambda: itertools.count(1), repr=False, compare=False
    )

    def replace_orders(self, orders: Iterable[Order]) -> None:
        """Swap in a freshly fetched order list and rebuild the pool.

        Tickets still held by staged orders stay out of the pool so a
        refresh mid-staging cannot hand the same number out twice.
        """
        self.orders = list(orders)
        self.pool = TicketPool.from_orders(self.orders, staged=self.staged)

    def next_local_id(self) -> int:
        return next(self._local_ids)

    def find_order(self, order_id: int) -> Order | None:
        for order in self.orders:
            if order.id == order_id:
                return order
        return None

    @property
    def staged_total(self) -> Money:
        total = Money.zero()
        for staged in self.staged:
            total = total + staged.price
        return total

    @property
    def open_count(self) -> int:
        return len(self.orders)
