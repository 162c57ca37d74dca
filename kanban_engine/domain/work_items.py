"""Per-color work progress carried by every card.

A color is complete when ``completed >= total``, which includes the vacuous
case of a color with no work at all.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from ..exceptions import DomainInvariantError


class WorkerType(str, Enum):
    """Work color, doubling as a worker's specialization."""

    RED = "red"
    BLUE = "blue"
    GREEN = "green"


ALL_WORKER_TYPES: tuple[WorkerType, ...] = (WorkerType.RED, WorkerType.BLUE, WorkerType.GREEN)


def is_valid_worker_type(value: object) -> bool:
    return isinstance(value, str) and value in {t.value for t in ALL_WORKER_TYPES}


@dataclass(frozen=True)
class WorkProgress:
    total: int = 0
    completed: int = 0

    def __post_init__(self):
        if self.total < 0 or self.completed < 0:
            raise DomainInvariantError("Work progress cannot be negative")
        if self.completed > self.total:
            raise DomainInvariantError("Completed work cannot exceed total work")

    @property
    def is_complete(self) -> bool:
        return self.completed >= self.total


@dataclass(frozen=True)
class WorkItems:
    red: WorkProgress = WorkProgress()
    blue: WorkProgress = WorkProgress()
    green: WorkProgress = WorkProgress()

    @classmethod
    def empty(cls) -> "WorkItems":
        return cls()

    def progress(self, color: WorkerType) -> WorkProgress:
        return getattr(self, WorkerType(color).value)

    def is_color_complete(self, color: WorkerType) -> bool:
        return self.progress(color).is_complete

    def is_all_complete(self) -> bool:
        return all(self.is_color_complete(color) for color in ALL_WORKER_TYPES)

    def apply_work(self, color: WorkerType, amount: int) -> "WorkItems":
        """Return new work items with ``amount`` added to one color.

        Negative amounts count as zero and the result is clamped to the
        color's total; the other colors are untouched.
        """
        color = WorkerType(color)
        progress = self.progress(color)
        completed = min(progress.total, progress.completed + max(0, amount))
        return replace(self, **{color.value: replace(progress, completed=completed)})
