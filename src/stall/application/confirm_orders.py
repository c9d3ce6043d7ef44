"""Application service: Confirm Orders use case.

Writes the staged batch to the store, then throws away every bit of
optimistic local state by refetching the authoritative order list.
"""

from __future__ import annotations

import logging

from stall.application.board_state import BoardState
from stall.application.refresh_board import RefreshBoardHandler
from stall.domain.exceptions import StoreError
from stall.domain.repository.order_store import OrderStore

logger = logging.getLogger(__name__)


class ConfirmOrdersHandler:

    def __init__(self, store: OrderStore, state: BoardState) -> None:
        self._store = store
        self._state = state

    async def handle(self) -> int:
        """Confirm all staged orders.  Returns how many were written.

        An empty staged list is a no-op.  If the insert fails the error
        is logged, the staged list is kept and 0 is returned.
        """
        staged = list(self._state.staged)
        if not staged:
            return 0

        try:
            await self._store.insert_many([s.to_new_order() for s in staged])
        except StoreError:
            logger.exception("Failed to confirm %d staged orders", len(staged))
            return 0

        self._state.staged = []
        logger.info(
            "Confirmed %d orders: %s", len(staged), ", ".join(s.label for s in staged)
        )

        await RefreshBoardHandler(self._store, self._state).handle()
        return len(staged)
