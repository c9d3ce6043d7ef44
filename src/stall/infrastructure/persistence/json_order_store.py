"""JSON-file-backed implementation of OrderStore.

Used when no remote store is configured.  Change notifications only
reach subscribers in this process.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from stall.domain.exceptions import StoreError
from stall.domain.model.order import DEFAULT_STATUS, NewOrder, Order
from stall.domain.repository.order_store import ChangeCallback, ChangeEvent, OrderStore
from stall.infrastructure.persistence.order_rows import new_order_to_row, rows_to_orders

logger = logging.getLogger(__name__)


class JsonOrderStore(OrderStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._callbacks: list[ChangeCallback] = []
        self._ensure_file()

    # --- OrderStore interface -------------------------------------------------

    async def fetch_all(self) -> list[Order]:
        return rows_to_orders(self._load_raw())

    async def insert_many(self, orders: list[NewOrder]) -> None:
        rows = self._load_raw()
        next_id = max((r["id"] for r in rows), default=0) + 1
        created_at = datetime.now(timezone.utc).isoformat()

        inserted: list[dict] = []
        for offset, order in enumerate(orders):
            raw = new_order_to_row(order)
            raw.update(
                id=next_id + offset, status=DEFAULT_STATUS, created_at=created_at
            )
            inserted.append(raw)

        self._persist_raw(rows + inserted)
        for raw in inserted:
            await self._notify(ChangeEvent("INSERT", raw))

    async def delete(self, order_id: int) -> None:
        rows = self._load_raw()
        kept = [r for r in rows if r["id"] != order_id]
        if len(kept) == len(rows):
            return
        self._persist_raw(kept)
        await self._notify(ChangeEvent("DELETE", {"id": order_id}))

    async def subscribe(self, callback: ChangeCallback) -> None:
        self._callbacks.append(callback)

    async def unsubscribe(self) -> None:
        self._callbacks.clear()

    async def close(self) -> None:
        self._callbacks.clear()

    # --- Notifications --------------------------------------------------------

    async def _notify(self, event: ChangeEvent) -> None:
        for callback in list(self._callbacks):
            await callback(event)

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StoreError(f"Cannot read {self._file_path}: {exc}") from exc

    def _persist_raw(self, rows: list[dict]) -> None:
        try:
            self._file_path.write_text(
                json.dumps(rows, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise StoreError(f"Cannot write {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
            logger.info("Created empty order file at %s", self._file_path)
