"""One-shot CLI commands for orders and tickets."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

import click

from stall.application.board_state import BoardState
from stall.application.confirm_orders import ConfirmOrdersHandler
from stall.application.refresh_board import RefreshBoardHandler
from stall.application.serve_order import ServeOrderHandler
from stall.application.show_board import ShowBoardHandler
from stall.application.stage_order import StageOrderHandler
from stall.domain.exceptions import DomainException, StoreError
from stall.domain.model.menu import ItemKind
from stall.domain.repository.order_store import OrderStore
from stall.infrastructure.bootstrap import order_store
from stall.infrastructure.cli.display import display_orders, display_tickets

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _closing(store: OrderStore, work: Awaitable[T]) -> T:
    """Await *work*, then close the store whatever happened."""
    try:
        return await work
    finally:
        try:
            await store.close()
        except StoreError:
            logger.exception("Failed to close the order store")


async def _load(store: OrderStore) -> BoardState:
    state = BoardState()
    if not await RefreshBoardHandler(store, state).handle():
        raise click.ClickException("Could not load orders (see log).")
    return state


@click.command("list")
@click.pass_obj
def order_list(settings) -> None:
    """List open orders, oldest first."""
    store = order_store(settings)
    state = asyncio.run(_closing(store, _load(store)))
    display_orders(ShowBoardHandler(state).handle().orders)


async def _place(store: OrderStore, kinds: list[str]) -> list[str]:
    state = await _load(store)
    stage = StageOrderHandler(state)
    labels = [f"{dto.item} #{dto.ticket_number}" for dto in map(stage.handle, kinds)]

    if await ConfirmOrdersHandler(store, state).handle() != len(labels):
        raise click.ClickException("Orders could not be saved (see log).")
    return labels


@click.command("place")
@click.option(
    "--item",
    "items",
    required=True,
    multiple=True,
    type=click.Choice([k.value for k in ItemKind], case_sensitive=False),
    help="Item to order; repeat for several.",
)
@click.pass_obj
def order_place(settings, items: tuple[str, ...]) -> None:
    """Stage the given items and confirm them as one batch."""
    try:
        store = order_store(settings)
        labels = asyncio.run(_closing(store, _place(store, list(items))))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    for label in labels:
        click.echo(f"Placed {label}")


async def _serve(store: OrderStore, order_id: int) -> bool:
    state = await _load(store)
    return await ServeOrderHandler(store, state).handle(order_id)


@click.command("serve")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to serve.")
@click.pass_obj
def order_serve(settings, order_id: int) -> None:
    """Hand over an order and remove it from the board."""
    try:
        store = order_store(settings)
        served = asyncio.run(_closing(store, _serve(store, order_id)))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not served:
        raise click.ClickException(f"Order #{order_id} could not be removed (see log).")
    click.echo(f"Order #{order_id} served.")


@click.command("tickets")
@click.pass_obj
def tickets(settings) -> None:
    """Show the free ticket numbers per item."""
    store = order_store(settings)
    state = asyncio.run(_closing(store, _load(store)))
    display_tickets(ShowBoardHandler(state).handle().available_tickets)
