"""Stage-done predicate and WIP gating shared by every use case.

Gating rule for moving a card from ``source`` to ``target``:

1. max on the target column is checked first
2. min on the source column is checked only if (1) passes

Counts are "live": callers move cards through a ``StageCounts`` so that
earlier moves in the same pass are seen by later ones.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from ..domain.card import Card
from ..domain.stage import COLUMN_TITLES, Stage, column_key
from ..domain.wip import WipLimits
from ..domain.work_items import ALL_WORKER_TYPES, WorkerType

_REQUIRED_COLORS: Dict[Stage, Tuple[WorkerType, ...]] = {
    Stage.RED_ACTIVE: (WorkerType.RED,),
    Stage.RED_FINISHED: (WorkerType.RED,),
    Stage.BLUE_ACTIVE: (WorkerType.RED, WorkerType.BLUE),
    Stage.BLUE_FINISHED: (WorkerType.RED, WorkerType.BLUE),
    Stage.GREEN: (WorkerType.RED, WorkerType.BLUE, WorkerType.GREEN),
}


def is_stage_done(card: Card) -> bool:
    """True when the card has finished the work its current stage requires.

    Blocked cards are never stage-done.
    """
    if card.is_blocked:
        return False
    colors = _REQUIRED_COLORS.get(card.stage, ALL_WORKER_TYPES)
    return all(card.work_items.is_color_complete(color) for color in colors)


class StageCounts:
    """Per-stage occupancy that follows moves made during a pass."""

    def __init__(self, cards: Iterable[Card]):
        self._counts = Counter(card.stage for card in cards)

    def __getitem__(self, stage: Stage) -> int:
        return self._counts.get(Stage(stage), 0)

    def move(self, source: Stage, target: Stage) -> None:
        self._counts[Stage(source)] -= 1
        self._counts[Stage(target)] += 1


@dataclass(frozen=True)
class WipRejection:
    kind: str  # "max" or "min"
    stage: Stage
    limit: int
    message: str


def check_wip(
    wip_limits: WipLimits, source: Stage, target: Stage, counts: StageCounts
) -> Optional[WipRejection]:
    """Return the rejection for moving one card, or None when the move is allowed."""
    target_limit = wip_limits.get(column_key(target))
    if not target_limit.allows_move_in(counts[target]):
        return WipRejection(
            kind="max",
            stage=Stage(target),
            limit=target_limit.max,
            message=(
                f"Cannot move card to {COLUMN_TITLES[Stage(target)]}: "
                f"Max WIP limit of {target_limit.max} would be exceeded."
            ),
        )

    source_limit = wip_limits.get(column_key(source))
    if not source_limit.allows_move_out(counts[source]):
        return WipRejection(
            kind="min",
            stage=Stage(source),
            limit=source_limit.min,
            message=(
                f"Cannot move card out of {COLUMN_TITLES[Stage(source)]}: "
                f"Min WIP limit of {source_limit.min} would be violated."
            ),
        )

    return None
