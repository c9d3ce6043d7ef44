"""Shared terminal formatting for board, order and ticket output."""

from __future__ import annotations

import click

from stall.application.dto import BoardDTO, OrderDTO


def display_tickets(available: dict[str, list[int]]) -> None:
    for item, numbers in available.items():
        free = " ".join(str(n) for n in numbers) if numbers else "(none)"
        click.echo(f"  {item:<8} {len(numbers):>2} free: {free}")


def display_orders(orders: list[OrderDTO]) -> None:
    if not orders:
        click.echo("No open orders.")
        return

    click.echo(f"  {'ID':>5}  {'Item':<8} {'Ticket':>6} {'Price':>7}  {'Created':<20}")
    click.echo(f"  {'-'*52}")
    for o in orders:
        click.echo(
            f"  {o.id:>5}  {o.item:<8} {'#' + str(o.ticket_number):>6} {o.price:>7}  {o.created_at:<20}"
        )
    click.echo(f"  {'-'*52}")


def display_board(board: BoardDTO) -> None:
    click.echo("Order entry")
    if board.staged:
        for s in board.staged:
            click.echo(f"  {s.item:<8} #{s.ticket_number:<4} {s.price:>7}")
    else:
        click.echo("  (nothing staged)")
    click.echo(f"  {'Provisional total':<20} {board.staged_total:>7}")
    click.echo()

    click.echo("Kitchen")
    display_orders(board.orders)
    click.echo(f"  In preparation: {board.open_count}")
    click.echo()

    click.echo("Tickets")
    display_tickets(board.available_tickets)
