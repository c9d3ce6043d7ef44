"""Mapping between domain orders and flat ``orders`` table rows.

Both store adapters read and write the same record shape:
``id, item, price, ticket_number, status, created_at``.
"""

from __future__ import annotations

from datetime import datetime

from stall.domain.exceptions import DomainException, StoreError
from stall.domain.model.menu import ItemKind
from stall.domain.model.order import DEFAULT_STATUS, NewOrder, Order
from stall.domain.model.value_objects import Money


def new_order_to_row(order: NewOrder) -> dict:
    return {
        "item": order.item.value,
        "price": int(order.price.amount),
        "ticket_number": order.ticket_number,
    }


def rows_to_orders(rows: list[dict]) -> list[Order]:
    """Map fetched rows, oldest first.

    A row this board cannot read (unknown item, missing column, bad
    price) fails the whole fetch as a StoreError.
    """
    try:
        orders = [row_to_order(raw) for raw in rows]
        return sorted(orders, key=lambda o: (o.created_at, o.id))
    except (KeyError, ValueError, TypeError, AttributeError, DomainException) as exc:
        raise StoreError(f"Unreadable order row: {exc!r}") from exc


def row_to_order(raw: dict) -> Order:
    return Order(
        id=raw["id"],
        item=ItemKind(raw["item"]),
        price=Money.of(raw["price"]),
        ticket_number=raw["ticket_number"],
        status=raw.get("status") or DEFAULT_STATUS,
        created_at=_parse_timestamp(raw["created_at"]),
    )


def _parse_timestamp(value: str) -> datetime:
    # PostgREST may emit a trailing "Z" and up to six fractional digits
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)
