"""Supabase-backed implementation of OrderStore.

Reads and writes go through PostgREST; change notifications arrive over
a Realtime ``postgres_changes`` channel covering every event on the
orders table.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx
from postgrest.exceptions import APIError
from supabase import AsyncClient, acreate_client

from stall.domain.exceptions import StoreError
from stall.domain.model.order import NewOrder, Order
from stall.domain.repository.order_store import ChangeCallback, ChangeEvent, OrderStore
from stall.infrastructure.persistence.order_rows import new_order_to_row, rows_to_orders

logger = logging.getLogger(__name__)

_REMOTE_ERRORS = (APIError, httpx.HTTPError, OSError, asyncio.TimeoutError)


class SupabaseOrderStore(OrderStore):

    def __init__(self, url: str, key: str, table: str = "orders") -> None:
        self._url = url
        self._key = key
        self._table = table
        self._client: AsyncClient | None = None
        self._channel = None
        self._pending: set[asyncio.Task] = set()

    # --- OrderStore interface -------------------------------------------------

    async def fetch_all(self) -> list[Order]:
        client = await self._get_client()
        try:
            response = await (
                client.table(self._table).select("*").order("created_at").execute()
            )
        except _REMOTE_ERRORS as exc:
            raise StoreError(f"select on {self._table} failed: {exc}") from exc
        return rows_to_orders(response.data or [])

    async def insert_many(self, orders: list[NewOrder]) -> None:
        if not orders:
            return
        client = await self._get_client()
        rows = [new_order_to_row(o) for o in orders]
        try:
            await client.table(self._table).insert(rows).execute()
        except _REMOTE_ERRORS as exc:
            raise StoreError(f"insert into {self._table} failed: {exc}") from exc

    async def delete(self, order_id: int) -> None:
        client = await self._get_client()
        try:
            await client.table(self._table).delete().eq("id", order_id).execute()
        except _REMOTE_ERRORS as exc:
            raise StoreError(f"delete from {self._table} failed: {exc}") from exc

    async def subscribe(self, callback: ChangeCallback) -> None:
        client = await self._get_client()

        def on_payload(payload: dict[str, Any]) -> None:
            task = asyncio.ensure_future(callback(self._to_event(payload)))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

        try:
            channel = client.channel(f"{self._table}-changes")
            channel.on_postgres_changes(
                "*", schema="public", table=self._table, callback=on_payload
            )
            await channel.subscribe()
        except _REMOTE_ERRORS as exc:
            raise StoreError(f"subscribe to {self._table} failed: {exc}") from exc

        self._channel = channel
        logger.info("Subscribed to changes on %s", self._table)

    async def unsubscribe(self) -> None:
        if self._client is None or self._channel is None:
            return
        try:
            await self._client.remove_channel(self._channel)
        except _REMOTE_ERRORS as exc:
            raise StoreError(f"unsubscribe from {self._table} failed: {exc}") from exc
        finally:
            self._channel = None

    async def close(self) -> None:
        """Drop every realtime channel, closing the socket, and the HTTP session."""
        client, self._client, self._channel = self._client, None, None
        if client is None:
            return
        try:
            await client.remove_all_channels()
            await client.postgrest.aclose()
        except _REMOTE_ERRORS as exc:
            raise StoreError(f"closing connection to {self._url} failed: {exc}") from exc

    # --- Helpers --------------------------------------------------------------

    async def _get_client(self) -> AsyncClient:
        if self._client is None:
            try:
                self._client = await acreate_client(self._url, self._key)
            except _REMOTE_ERRORS as exc:
                raise StoreError(f"cannot connect to {self._url}: {exc}") from exc
        return self._client

    @staticmethod
    def _to_event(payload: dict[str, Any]) -> ChangeEvent:
        data = payload.get("data", payload)
        event_type = data.get("type") or data.get("eventType") or "UNKNOWN"
        record = data.get("record") or data.get("old_record") or {}
        return ChangeEvent(str(event_type).upper(), dict(record))
