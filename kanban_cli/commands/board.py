"""
Board commands for the Kanban simulator CLI

Inspect the board and change it by hand: cards, workers, blocking, and
WIP limits. Every command that changes the board saves it afterwards.
"""

from __future__ import annotations

from enum import Enum

import typer

from kanban_engine.domain import COLUMN_KEYS, WorkerType
from kanban_engine.exceptions import DomainInvariantError

from ..ui.board_view import render_board
from ..ui.messages import console, show_error_message, show_success_message
from ..utils.session_helpers import open_session, save_or_fail

WipColumn = Enum("WipColumn", {key: key for key in COLUMN_KEYS}, type=str)


def status(ctx: typer.Context):
    """📋 Show the board: day, cards by column, workers and WIP limits."""
    session = open_session(ctx)
    console.print(render_board(session.board))


def add_card(
    ctx: typer.Context,
    count: int = typer.Option(1, "--count", "-n", min=1, help="Number of cards to add"),
):
    """🃏 Add new cards to the Options column."""
    session = open_session(ctx)
    added = [session.add_card() for _ in range(count)]
    save_or_fail(session)
    for card in added:
        show_success_message(
            f"Added card {card.id}",
            f"{card.content} (red {card.work_items.red.total}, "
            f"blue {card.work_items.blue.total}, green {card.work_items.green.total})",
        )


def add_worker(
    ctx: typer.Context,
    worker_type: WorkerType = typer.Argument(..., help="Worker specialization"),
):
    """👷 Hire a worker of the given color."""
    session = open_session(ctx)
    worker = session.add_worker(worker_type)
    save_or_fail(session)
    show_success_message(f"Added {worker.type.value} worker {worker.id}")


def remove_worker(
    ctx: typer.Context,
    worker_id: str = typer.Argument(..., help="Worker id, e.g. R1"),
):
    """🗑️ Remove a worker and unassign it from its card."""
    session = open_session(ctx)
    if not session.delete_worker(worker_id):
        show_error_message(f"Unknown worker: {worker_id}")
        raise typer.Exit(1)
    save_or_fail(session)
    show_success_message(f"Removed worker {worker_id}")


def move(
    ctx: typer.Context,
    card_id: str = typer.Argument(..., help="Card id, e.g. A"),
):
    """➡️ Click a card: Options → Red Active, Red Finished → Blue Active, Blue Finished → Green."""
    session = open_session(ctx)
    card = session.board.find_card(card_id)
    if card is None:
        show_error_message(f"Unknown card: {card_id}")
        raise typer.Exit(1)

    if session.move_card(card_id) is not None:
        # the rejection was already printed as a notification
        return

    moved = session.board.find_card(card_id)
    if moved.stage is card.stage:
        console.print(f"[dim]Card {card_id} cannot be moved from {card.stage.value} by hand[/dim]")
        return
    save_or_fail(session)
    show_success_message(f"Moved card {card_id} to {moved.stage.value}")


def assign(
    ctx: typer.Context,
    card_id: str = typer.Argument(..., help="Card id"),
    worker_id: str = typer.Argument(..., help="Worker id"),
):
    """🔧 Assign a worker to a card for the next day."""
    session = open_session(ctx)
    if not session.assign_worker(card_id, worker_id):
        show_error_message(
            f"Could not assign {worker_id} to {card_id}",
            "Check that both exist, the card has fewer than 3 workers, and the worker is not already on it",
        )
        raise typer.Exit(1)
    save_or_fail(session)
    show_success_message(f"Assigned {worker_id} to card {card_id}")


def block(
    ctx: typer.Context,
    card_id: str = typer.Argument(..., help="Card id"),
):
    """🚫 Toggle the blocked flag on a card."""
    session = open_session(ctx)
    card = session.toggle_block(card_id)
    if card is None:
        show_error_message(f"Unknown card: {card_id}")
        raise typer.Exit(1)
    save_or_fail(session)
    show_success_message(f"Card {card_id} is now {'blocked' if card.is_blocked else 'unblocked'}")


def wip(
    ctx: typer.Context,
    column: WipColumn = typer.Argument(..., help="Column key"),
    min_limit: int = typer.Option(0, "--min", min=0, help="Minimum WIP, 0 disables"),
    max_limit: int = typer.Option(0, "--max", min=0, help="Maximum WIP, 0 disables"),
):
    """🚦 Set the WIP limits of one column."""
    session = open_session(ctx)
    try:
        session.set_wip_limit(column.value, min_limit, max_limit)
    except DomainInvariantError as e:
        show_error_message(f"Invalid WIP limit for {column.value}", e.message)
        raise typer.Exit(1)
    save_or_fail(session)
    show_success_message(f"WIP limit for {column.value} set to min {min_limit}, max {max_limit}")


def reset(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """🧹 Discard the saved board and start from the configured defaults."""
    if not yes:
        typer.confirm("Discard the saved board?", abort=True)
    session = open_session(ctx)
    session.reset(clear_storage=True)
    save_or_fail(session)
    show_success_message("Board reset")
