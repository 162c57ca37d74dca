"""Immutable card aggregate.

Every ``with_*`` helper returns a new Card through ``dataclasses.replace``,
which re-runs ``__post_init__`` so the age and worker-cap invariants are
checked on every transition.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Tuple

from ..exceptions import DomainInvariantError, ExecutionContext
from .card_id import CardId
from .stage import Stage
from .work_items import WorkItems
from .worker import AssignedWorker

MAX_ASSIGNED_WORKERS = 3


@dataclass(frozen=True)
class Card:
    id: CardId
    content: str
    stage: Stage
    work_items: WorkItems
    start_day: int
    age: int = 0
    is_blocked: bool = False
    completion_day: Optional[int] = None
    assigned_workers: Tuple[AssignedWorker, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.age < 0:
            raise DomainInvariantError(
                "Age cannot be negative", context=ExecutionContext(card_id=self.id)
            )
        workers = tuple(self.assigned_workers)
        if len(workers) > MAX_ASSIGNED_WORKERS:
            raise DomainInvariantError(
                "Cannot assign more than 3 workers to a card",
                context=ExecutionContext(card_id=self.id),
            )
        object.__setattr__(self, "assigned_workers", workers)
        object.__setattr__(self, "stage", Stage(self.stage))

    @property
    def worker_ids(self) -> Tuple[str, ...]:
        return tuple(w.id for w in self.assigned_workers)

    def has_worker(self, worker_id: str) -> bool:
        return worker_id in self.worker_ids

    def with_stage(self, stage: Stage) -> "Card":
        return replace(self, stage=stage)

    def with_age(self, age: int) -> "Card":
        return replace(self, age=age)

    def with_blocked(self, is_blocked: bool) -> "Card":
        return replace(self, is_blocked=is_blocked)

    def with_start_day(self, start_day: int) -> "Card":
        return replace(self, start_day=start_day)

    def with_completion_day(self, completion_day: int) -> "Card":
        if self.completion_day is not None and completion_day < self.completion_day:
            raise DomainInvariantError(
                "Completion day cannot move backwards",
                context=ExecutionContext(card_id=self.id, simulation_day=completion_day),
            )
        return replace(self, completion_day=completion_day)

    def with_work_items(self, work_items: WorkItems) -> "Card":
        return replace(self, work_items=work_items)

    def add_worker(self, worker: AssignedWorker) -> "Card":
        return replace(self, assigned_workers=self.assigned_workers + (worker,))

    def with_workers(self, workers: Iterable[AssignedWorker]) -> "Card":
        return replace(self, assigned_workers=tuple(workers))

    def remove_worker(self, worker_id: str) -> "Card":
        return replace(
            self,
            assigned_workers=tuple(w for w in self.assigned_workers if w.id != worker_id),
        )

    def clear_workers(self) -> "Card":
        if not self.assigned_workers:
            return self
        return replace(self, assigned_workers=())

    def aged(self) -> "Card":
        """One day older, unless parked in options or done."""
        if self.stage in (Stage.OPTIONS, Stage.DONE):
            return self
        return replace(self, age=self.age + 1)
