import click

from stall.infrastructure.cli.board_commands import board
from stall.infrastructure.cli.order_commands import (
    order_list,
    order_place,
    order_serve,
    tickets,
)
from stall.infrastructure.config import load_settings
from stall.infrastructure.log_setup import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Stall: apple & banana order board"""
    settings = load_settings()
    configure_logging(settings.log_level)
    ctx.obj = settings


@cli.group()
def orders() -> None:
    """Manage orders."""


# Register subcommands
cli.add_command(board)
cli.add_command(tickets)
orders.add_command(order_list)
orders.add_command(order_place)
orders.add_command(order_serve)
