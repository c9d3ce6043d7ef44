"""Application service: Serve Order use case.

Serving hands the item over and removes the order from the store.  The
ticket goes back to the pool through the refetch, not locally.
"""

from __future__ import annotations

import logging

from stall.application.board_state import BoardState
from stall.application.refresh_board import RefreshBoardHandler
from stall.domain.exceptions import EntityNotFoundError, StoreError
from stall.domain.repository.order_store import OrderStore

logger = logging.getLogger(__name__)


class ServeOrderHandler:

    def __init__(self, store: OrderStore, state: BoardState) -> None:
        self._store = store
        self._state = state

    async def handle(self, order_id: int) -> bool:
        """Remove *order_id*.  Returns False if the store delete failed."""
        order = self._state.find_order(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        try:
            await self._store.delete(order_id)
        except StoreError:
            logger.exception("Failed to serve order #%s", order_id)
            return False

        logger.info("Served order #%s (%s)", order_id, order.label)
        await RefreshBoardHandler(self._store, self._state).handle()
        return True
