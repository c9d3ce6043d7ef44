"""Application service: Clear Staged use case."""

from __future__ import annotations

from stall.application.board_state import BoardState
from stall.domain.model.ticket_pool import TicketPool


class ClearStagedHandler:

    def __init__(self, state: BoardState) -> None:
        self._state = state

    def handle(self) -> int:
        """Drop every staged order and recompute the pool.

        The pool is rebuilt from the last fetched orders rather than by
        handing staged tickets back one by one: a refresh may have shown
        another client holding one of them.  The store is never touched.
        Returns how many orders were dropped.
        """
        count = len(self._state.staged)
        self._state.staged = []
        self._state.pool = TicketPool.from_orders(self._state.orders)
        return count
