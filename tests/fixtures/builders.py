"""Card and board builders plus deterministic random sources."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple, Union

from kanban_engine.domain import (AssignedWorker, Board, Card, Stage, WipLimits, Worker,
                                  WorkerType, WorkItems, WorkProgress)

# Largest draw strictly below 1.0 that the uniform source could plausibly return
MAX_DRAW = 0.9999


def progress(total: int, completed: int = 0) -> WorkProgress:
    return WorkProgress(total=total, completed=completed)


def make_card(
    card_id: str = "A",
    stage: Union[Stage, str] = Stage.OPTIONS,
    red: Tuple[int, int] = (0, 0),
    blue: Tuple[int, int] = (0, 0),
    green: Tuple[int, int] = (0, 0),
    age: int = 0,
    start_day: int = 0,
    is_blocked: bool = False,
    completion_day: Optional[int] = None,
    workers: Iterable[Union[Worker, Tuple[str, str]]] = (),
    content: str = "Build search functionality",
) -> Card:
    """Card with ``(total, completed)`` work per color."""
    assigned = []
    for worker in workers:
        if isinstance(worker, Worker):
            assigned.append(AssignedWorker.from_worker(worker))
        else:
            assigned.append(AssignedWorker(id=worker[0], type=WorkerType(worker[1])))
    return Card(
        id=card_id,
        content=content,
        stage=Stage(stage),
        work_items=WorkItems(red=progress(*red), blue=progress(*blue), green=progress(*green)),
        start_day=start_day,
        age=age,
        is_blocked=is_blocked,
        completion_day=completion_day,
        assigned_workers=tuple(assigned),
    )


def make_worker(worker_id: str, worker_type: str) -> Worker:
    return Worker(id=worker_id, type=WorkerType(worker_type))


def make_board(
    cards: Sequence[Card] = (),
    workers: Sequence[Worker] = (),
    current_day: int = 0,
    wip: Optional[dict] = None,
) -> Board:
    """Board with optional WIP limits given as ``{column_key: {"min": .., "max": ..}}``."""
    limits = WipLimits.empty()
    for column, limit in (wip or {}).items():
        limits = limits.with_column_limit(column, limit)
    return Board(cards=tuple(cards), workers=tuple(workers), current_day=current_day, wip_limits=limits)


def constant_random(value: float):
    """Uniform source that always returns ``value``."""
    return lambda: value


class SequenceRandom:
    """Replays ``values`` in order, cycling; records how many draws were made."""

    def __init__(self, values: Sequence[float]):
        self.values = list(values)
        self.calls = 0

    def __call__(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value
