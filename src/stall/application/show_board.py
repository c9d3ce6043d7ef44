"""Application service: Show Board use case (query)."""

from __future__ import annotations

from datetime import timezone

from stall.application.board_state import BoardState
from stall.application.dto import BoardDTO, OrderDTO, StagedOrderDTO
from stall.domain.model.menu import ItemKind
from stall.domain.model.order import Order


class ShowBoardHandler:

    def __init__(self, state: BoardState) -> None:
        self._state = state

    def handle(self) -> BoardDTO:
        state = self._state
        return BoardDTO(
            staged=[
                StagedOrderDTO(
                    local_id=s.local_id,
                    item=s.item.value,
                    ticket_number=s.ticket_number,
                    price=str(s.price),
                )
                for s in state.staged
            ],
            staged_total=str(state.staged_total),
            orders=[self._to_dto(o) for o in state.orders],
            open_count=state.open_count,
            available_tickets={
                kind.value: state.pool.available(kind) for kind in ItemKind
            },
        )

    @staticmethod
    def _to_dto(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,
            item=order.item.value,
            ticket_number=order.ticket_number,
            price=str(order.price),
            status=order.status,
            created_at=order.created_at.astimezone(timezone.utc).strftime(
                "%Y-%m-%d %H:%M UTC"
            ),
        )
