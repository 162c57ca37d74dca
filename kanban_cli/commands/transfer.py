"""
Export/import commands for the Kanban simulator CLI
"""

from __future__ import annotations

from pathlib import Path

import typer

from kanban_engine.storage import ImportFailure

from ..ui.messages import console, show_error_message, show_success_message
from ..utils.session_helpers import open_session, save_or_fail


def export(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Destination JSON file"),
):
    """📤 Export the board as JSON."""
    session = open_session(ctx)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(session.export_json(), encoding="utf-8")
    show_success_message(f"Exported board to {path}")


def import_board(
    ctx: typer.Context,
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="JSON file to import"),
):
    """📥 Replace the board with an exported JSON file."""
    session = open_session(ctx)
    result = session.import_json(path.read_bytes())

    if isinstance(result, ImportFailure):
        show_error_message(f"{result.error.type.value}: {result.error.message}")
        for error in result.error.errors:
            location = ".".join(str(part) for part in error["loc"]) or "(root)"
            console.print(f"   [dim]{location}: {error['msg']}[/dim]")
        raise typer.Exit(1)

    save_or_fail(session)
    show_success_message(f"Imported board from {path}", f"day {session.current_day}, {len(session.cards)} cards")
