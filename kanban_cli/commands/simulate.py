"""
Simulation commands for the Kanban simulator CLI

Manual day ticks and autonomous policy runs. Ctrl+C during a policy run
cancels it between days and keeps the days already completed.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import typer

from kanban_engine.exceptions import PolicyRunError

from ..ui.messages import console, show_error_message
from ..utils.session_helpers import CLIState, open_session, save_or_fail


def advance(
    ctx: typer.Context,
    days: int = typer.Option(1, "--days", "-d", min=1, help="Number of days to advance"),
):
    """⏭️ Advance the simulation by manual day ticks."""
    session = open_session(ctx)
    for _ in range(days):
        session.advance_day()
    save_or_fail(session)


async def _run_until_interrupted(session, days: int):
    task = asyncio.ensure_future(session.run_policy(days))
    try:
        return await asyncio.shield(task)
    except asyncio.CancelledError:
        session.cancel_policy()
        return await task


def simulate(
    ctx: typer.Context,
    days: Optional[int] = typer.Argument(
        None, help="Number of policy days to run (default: simulation.default_policy_days)"
    ),
):
    """🤖 Run the autonomous siloted-expert policy for DAYS days."""
    session = open_session(ctx)
    if days is None:
        days = ctx.ensure_object(CLIState).config.simulation.default_policy_days
    try:
        summary = asyncio.run(_run_until_interrupted(session, days))
    except PolicyRunError as e:
        show_error_message(e.message)
        raise typer.Exit(1)
    except KeyboardInterrupt:
        session.cancel_policy()
        save_or_fail(session)
        raise typer.Exit(130)

    save_or_fail(session)
    console.print(
        f"[bold]Days run:[/bold] {summary.days_completed}  "
        f"[bold]Cards completed:[/bold] {summary.cards_completed}  "
        f"[bold]Now at day:[/bold] {summary.last_day}"
    )
