"""Application service: Stage Order use case.

Staging is purely local and optimistic: it takes a ticket out of the
local pool and parks the order until the batch is confirmed.
"""

from __future__ import annotations

import logging

from stall.application.board_state import BoardState
from stall.application.dto import StagedOrderDTO
from stall.domain.model.menu import ItemKind, price_of
from stall.domain.model.order import StagedOrder

logger = logging.getLogger(__name__)


class StageOrderHandler:

    def __init__(self, state: BoardState) -> None:
        self._state = state

    def handle(self, kind: ItemKind | str) -> StagedOrderDTO:
        """Stage one order for *kind*.

        Raises TicketsExhaustedError when the kind has no free ticket;
        nothing is staged and the pool is left as it was.
        """
        if not isinstance(kind, ItemKind):
            kind = ItemKind.parse(kind)

        ticket = self._state.pool.allocate(kind)
        staged = StagedOrder(
            local_id=self._state.next_local_id(),
            item=kind,
            price=price_of(kind),
            ticket_number=ticket,
        )
        self._state.staged.append(staged)
        logger.debug("Staged %s", staged.label)

        return StagedOrderDTO(
            local_id=staged.local_id,
            item=staged.item.value,
            ticket_number=staged.ticket_number,
            price=str(staged.price),
        )
