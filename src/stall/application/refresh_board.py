"""Application service: Refresh Board use case.

The single path through which local state is rebuilt: fetch the full
order list and recompute everything derived from it.  Confirm, serve
and change notifications all end here.
"""

from __future__ import annotations

import logging

from stall.application.board_state import BoardState
from stall.domain.exceptions import StoreError
from stall.domain.repository.order_store import OrderStore

logger = logging.getLogger(__name__)


class RefreshBoardHandler:

    def __init__(self, store: OrderStore, state: BoardState) -> None:
        self._store = store
        self._state = state

    async def handle(self) -> bool:
        """Refetch and recompute.  Returns False if the fetch failed.

        On failure the previous view is kept as is.
        """
        try:
            orders = await self._store.fetch_all()
        except StoreError:
            logger.exception("Failed to fetch orders")
            return False

        self._state.replace_orders(orders)
        logger.debug("Board refreshed: %d open orders", len(orders))
        return True
