"""Rich rendering of a Board."""

from __future__ import annotations

from rich.console import Group
from rich.panel import Panel
from rich.table import Table

from kanban_engine.domain import ALL_STAGES, COLUMN_TITLES, Board, Card, column_key

_STAGE_STYLES = {
    "options": "dim",
    "red-active": "red",
    "red-finished": "red",
    "blue-active": "blue",
    "blue-finished": "blue",
    "green": "green",
    "done": "bold",
}


def _progress(card: Card, color: str) -> str:
    progress = getattr(card.work_items, color)
    mark = "✓" if progress.is_complete else ""
    return f"{progress.completed}/{progress.total}{mark}"


def render_cards(board: Board) -> Table:
    table = Table(show_header=True, header_style="bold blue", expand=False)
    table.add_column("Card", justify="center")
    table.add_column("Stage")
    table.add_column("Content", overflow="fold")
    table.add_column("Age", justify="right")
    table.add_column("Red", justify="right")
    table.add_column("Blue", justify="right")
    table.add_column("Green", justify="right")
    table.add_column("Workers")

    for stage in ALL_STAGES:
        for card in board.get_cards_by_stage(stage):
            style = _STAGE_STYLES[stage.value]
            card_id = f"🚫 {card.id}" if card.is_blocked else card.id
            table.add_row(
                card_id,
                f"[{style}]{COLUMN_TITLES[stage]}[/{style}]",
                card.content,
                str(card.age),
                _progress(card, "red"),
                _progress(card, "blue"),
                _progress(card, "green"),
                ", ".join(card.worker_ids) or "-",
            )
    return table


def render_wip(board: Board) -> Table:
    counts = board.stage_counts()
    table = Table(show_header=True, header_style="bold blue")
    table.add_column("Column")
    table.add_column("Cards", justify="right")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")
    for stage in ALL_STAGES:
        limit = board.wip_limits.get(column_key(stage))
        table.add_row(
            f"{COLUMN_TITLES[stage]} ({column_key(stage)})",
            str(counts[stage]),
            str(limit.min) if limit.min else "-",
            str(limit.max) if limit.max else "-",
        )
    return table


def render_board(board: Board) -> Group:
    workers = ", ".join(f"{w.id} ({w.type.value})" for w in board.workers) or "none"
    header = Panel(
        f"[bold]Day {board.current_day}[/bold]   cards: {len(board.cards)}   workers: {workers}",
        title="Kanban Board",
        expand=False,
    )
    cards = render_cards(board) if board.cards else "[dim]No cards yet. Add one with 'add-card'.[/dim]"
    return Group(header, cards, render_wip(board))
