"""Board aggregate root: cards, workers, the simulated day and WIP limits.

A Board is the unit of persistence and of undo/redo. All mutators are
copy-on-write and return a new Board; advancing the day here only bumps the
counter, the simulation itself lives in ``kanban_engine.pipeline``.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Iterable, Optional, Tuple

from ..exceptions import DomainInvariantError, ExecutionContext
from .card import Card
from .stage import ALL_STAGES, Stage
from .wip import WipLimits
from .worker import Worker


def _check_day(current_day: int) -> None:
    if isinstance(current_day, bool) or not isinstance(current_day, int):
        raise DomainInvariantError("Current day must be an integer")
    if current_day < 0:
        raise DomainInvariantError(
            "Current day cannot be negative",
            context=ExecutionContext(simulation_day=current_day),
        )


@dataclass(frozen=True)
class Board:
    cards: Tuple[Card, ...] = field(default_factory=tuple)
    workers: Tuple[Worker, ...] = field(default_factory=tuple)
    current_day: int = 0
    wip_limits: WipLimits = field(default_factory=WipLimits)

    def __post_init__(self):
        _check_day(self.current_day)
        object.__setattr__(self, "cards", tuple(self.cards))
        object.__setattr__(self, "workers", tuple(self.workers))

    @classmethod
    def empty(cls, wip_limits: Optional[WipLimits] = None) -> "Board":
        return cls(wip_limits=wip_limits or WipLimits.empty())

    # ---- copy-on-write mutators ----
    def with_cards(self, cards: Iterable[Card]) -> "Board":
        return replace(self, cards=tuple(cards))

    def with_workers(self, workers: Iterable[Worker]) -> "Board":
        return replace(self, workers=tuple(workers))

    def with_current_day(self, current_day: int) -> "Board":
        return replace(self, current_day=current_day)

    def with_wip_limits(self, wip_limits: WipLimits) -> "Board":
        return replace(self, wip_limits=wip_limits)

    def add_card(self, card: Card) -> "Board":
        return replace(self, cards=self.cards + (card,))

    def remove_card(self, card_id: str) -> "Board":
        return replace(self, cards=tuple(c for c in self.cards if c.id != card_id))

    def update_card(self, card_id: str, updater: Callable[[Card], Card]) -> "Board":
        return replace(
            self, cards=tuple(updater(c) if c.id == card_id else c for c in self.cards)
        )

    def add_worker(self, worker: Worker) -> "Board":
        return replace(self, workers=self.workers + (worker,))

    def remove_worker(self, worker_id: str) -> "Board":
        return replace(self, workers=tuple(w for w in self.workers if w.id != worker_id))

    def advance_day(self) -> "Board":
        return replace(self, current_day=self.current_day + 1)

    # ---- queries ----
    def find_card(self, card_id: str) -> Optional[Card]:
        return next((c for c in self.cards if c.id == card_id), None)

    def find_worker(self, worker_id: str) -> Optional[Worker]:
        return next((w for w in self.workers if w.id == worker_id), None)

    def get_cards_by_stage(self, stage: Stage) -> Tuple[Card, ...]:
        stage = Stage(stage)
        return tuple(c for c in self.cards if c.stage == stage)

    def get_card_count_by_stage(self, stage: Stage) -> int:
        return len(self.get_cards_by_stage(stage))

    def stage_counts(self) -> Dict[Stage, int]:
        counts = Counter(c.stage for c in self.cards)
        return {stage: counts.get(stage, 0) for stage in ALL_STAGES}
