"""Application service: Watch Orders use case.

Keeps this viewer in step with every other one: any change the store
reports, whatever its type or origin, triggers a full refresh.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from stall.application.board_state import BoardState
from stall.application.refresh_board import RefreshBoardHandler
from stall.domain.exceptions import StoreError
from stall.domain.repository.order_store import ChangeEvent, OrderStore

logger = logging.getLogger(__name__)


class WatchOrdersHandler:

    def __init__(
        self,
        store: OrderStore,
        state: BoardState,
        on_refresh: Callable[[], None] | None = None,
    ) -> None:
        self._store = store
        self._refresh = RefreshBoardHandler(store, state)
        self._on_refresh = on_refresh
        self.active = False

    async def start(self) -> bool:
        """Subscribe to change notifications.  Returns False on failure."""
        try:
            await self._store.subscribe(self._on_change)
        except StoreError:
            logger.exception("Failed to subscribe to order changes")
            return False
        self.active = True
        return True

    async def stop(self) -> None:
        if not self.active:
            return
        try:
            await self._store.unsubscribe()
        except StoreError:
            logger.exception("Failed to unsubscribe from order changes")
        self.active = False

    async def _on_change(self, event: ChangeEvent) -> None:
        logger.debug("Order change received: %s", event.event_type)
        if await self._refresh.handle() and self._on_refresh is not None:
            self._on_refresh()
