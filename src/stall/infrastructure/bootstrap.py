"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from stall.domain.repository.order_store import OrderStore
from stall.infrastructure.config import Settings, check_settings
from stall.infrastructure.persistence.json_order_store import JsonOrderStore
from stall.infrastructure.persistence.supabase_order_store import SupabaseOrderStore


def order_store(settings: Settings) -> OrderStore:
    if check_settings(settings):
        return SupabaseOrderStore(
            url=settings.supabase_url,  # type: ignore[arg-type]
            key=settings.supabase_anon_key,  # type: ignore[arg-type]
            table=settings.orders_table,
        )
    return JsonOrderStore(settings.data_dir / "orders.json")
