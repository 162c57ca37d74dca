#!/usr/bin/env python3
"""
Kanban Flow Simulator CLI

Rich-based CLI over the persisted board. Each invocation loads the saved
board, applies one command, and saves it again.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from .commands import board, simulate, transfer
from .ui.messages import console
from .utils.session_helpers import CLIState

# Main app
app = typer.Typer(
    name="kanban-sim",
    help="Kanban Flow Simulator - WIP-limited flow simulation with an autonomous policy",
    rich_markup_mode="rich",
    no_args_is_help=True,
    add_completion=False,
)


def version_callback(value: bool):
    if value:
        from _version import get_full_version
        console.print(get_full_version())
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to simulation config YAML"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
):
    """
    [bold blue]Kanban Flow Simulator[/bold blue]

    Simulates cards flowing through red, blue and green work stages under
    WIP limits, by hand or with the siloted-expert policy.

    [dim]Examples:[/dim]
        kanban-sim add-card --count 5       # Seed the Options column
        kanban-sim add-worker red           # Hire a red specialist
        kanban-sim simulate 20              # Let the policy run 20 days
        kanban-sim status                   # Show the board
    """
    ctx.obj = CLIState(config_path=config, verbose=verbose)


# Board commands
app.command("status")(board.status)
app.command("add-card")(board.add_card)
app.command("add-worker")(board.add_worker)
app.command("remove-worker")(board.remove_worker)
app.command("move")(board.move)
app.command("assign")(board.assign)
app.command("block")(board.block)
app.command("wip")(board.wip)
app.command("reset")(board.reset)

# Simulation commands
app.command("advance")(simulate.advance)
app.command("simulate")(simulate.simulate)

# Export/import
app.command("export")(transfer.export)
app.command("import")(transfer.import_board)


if __name__ == "__main__":
    app()
