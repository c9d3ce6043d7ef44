"""Interactive order board session.

Reads one command per line while change notifications from other
viewers keep refreshing the board in the background.
"""

from __future__ import annotations

import asyncio
import logging

import click

from stall.application.board_state import BoardState
from stall.application.clear_staged import ClearStagedHandler
from stall.application.confirm_orders import ConfirmOrdersHandler
from stall.application.refresh_board import RefreshBoardHandler
from stall.application.serve_order import ServeOrderHandler
from stall.application.show_board import ShowBoardHandler
from stall.application.stage_order import StageOrderHandler
from stall.application.watch_orders import WatchOrdersHandler
from stall.domain.exceptions import DomainException, StoreError
from stall.domain.model.menu import ItemKind
from stall.domain.repository.order_store import OrderStore
from stall.infrastructure.bootstrap import order_store
from stall.infrastructure.cli.display import display_board

_HELP = """Commands:
  apple | a          stage an apple order
  banana | b         stage a banana order
  confirm            save every staged order
  clear              drop every staged order
  serve ID           hand over order ID and remove it
  show               refresh and show the board
  quit               leave the board"""

_ALIASES = {"a": ItemKind.APPLE, "b": ItemKind.BANANA}

logger = logging.getLogger(__name__)


class BoardSession:
    """Routes typed commands to the use-case handlers."""

    def __init__(self, store: OrderStore) -> None:
        self.state = BoardState()
        self._store = store
        self.watch = WatchOrdersHandler(store, self.state, on_refresh=self._redraw)
        self._busy = False

    async def open(self) -> None:
        await RefreshBoardHandler(self._store, self.state).handle()
        await self.watch.start()

    async def close(self) -> None:
        await self.watch.stop()
        try:
            await self._store.close()
        except StoreError:
            logger.exception("Failed to close the order store")

    def _redraw(self) -> None:
        # Changes caused by our own command are reported by that command
        if not self._busy:
            click.echo()
            display_board(ShowBoardHandler(self.state).handle())

    async def dispatch(self, line: str) -> bool:
        """Run one command line.  Returns False when the session should end."""
        words = line.split()
        if not words:
            return True
        command, args = words[0].lower(), words[1:]

        if command in ("quit", "exit", "q"):
            return False

        self._busy = True
        try:
            await self._run(command, args)
        except DomainException as exc:
            click.secho(f"Error: {exc}", fg="red", err=True)
        finally:
            self._busy = False
        return True

    async def _run(self, command: str, args: list[str]) -> None:
        if command in _ALIASES or command in ("apple", "banana"):
            kind = _ALIASES.get(command) or ItemKind.parse(command)
            dto = StageOrderHandler(self.state).handle(kind)
            click.echo(f"Staged {dto.item} #{dto.ticket_number} {dto.price}")
        elif command == "confirm":
            count = await ConfirmOrdersHandler(self._store, self.state).handle()
            click.echo(f"Confirmed {count} orders.")
        elif command == "clear":
            count = ClearStagedHandler(self.state).handle()
            click.echo(f"Cleared {count} staged orders.")
        elif command == "serve":
            if len(args) != 1 or not args[0].isdigit():
                click.echo("Usage: serve ID")
                return
            if await ServeOrderHandler(self._store, self.state).handle(int(args[0])):
                click.echo(f"Order #{args[0]} served.")
        elif command in ("show", "refresh"):
            await RefreshBoardHandler(self._store, self.state).handle()
            display_board(ShowBoardHandler(self.state).handle())
        else:
            click.echo(_HELP)


async def _run_board(store: OrderStore) -> None:
    session = BoardSession(store)
    await session.open()
    try:
        display_board(ShowBoardHandler(session.state).handle())
        click.echo(_HELP)
        while True:
            try:
                line = await asyncio.to_thread(
                    click.prompt, "stall", default="", show_default=False
                )
            except click.Abort:
                break
            if not await session.dispatch(line):
                break
    finally:
        await session.close()


@click.command("board")
@click.pass_obj
def board(settings) -> None:
    """Run the interactive order board."""
    asyncio.run(_run_board(order_store(settings)))
