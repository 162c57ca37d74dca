"""Workers, card assignments, and daily worker output."""

from __future__ import annotations

import math
import random as _random
from dataclasses import dataclass
from typing import Callable, NamedTuple

from ..exceptions import DomainInvariantError
from .work_items import WorkerType, is_valid_worker_type

RandomFn = Callable[[], float]


class OutputRange(NamedTuple):
    min: int
    max: int


SPECIALIZED_RANGE = OutputRange(3, 6)
NON_SPECIALIZED_RANGE = OutputRange(0, 3)


@dataclass(frozen=True)
class Worker:
    """A worker with a color specialization. Ids are trimmed and non-empty."""

    id: str
    type: WorkerType

    def __post_init__(self):
        worker_id = (self.id or "").strip()
        if not worker_id:
            raise DomainInvariantError("Worker id cannot be empty")
        if not is_valid_worker_type(self.type):
            raise DomainInvariantError(f"Invalid worker type: {getattr(self.type, 'value', self.type)}")
        object.__setattr__(self, "id", worker_id)
        object.__setattr__(self, "type", WorkerType(self.type))


@dataclass(frozen=True)
class AssignedWorker:
    """Denormalized copy of a worker held by a card for the current day."""

    id: str
    type: WorkerType

    @classmethod
    def from_worker(cls, worker: Worker) -> "AssignedWorker":
        return cls(id=worker.id, type=worker.type)


def is_specialized(worker_type: WorkerType, column_color: WorkerType) -> bool:
    return WorkerType(worker_type) == WorkerType(column_color)


def output_range(worker_type: WorkerType, column_color: WorkerType) -> OutputRange:
    if is_specialized(worker_type, column_color):
        return SPECIALIZED_RANGE
    return NON_SPECIALIZED_RANGE


def calculate_output(
    worker_type: WorkerType,
    column_color: WorkerType,
    random: RandomFn = _random.random,
) -> int:
    """Uniform integer draw from the worker's range, both ends inclusive."""
    low, high = output_range(worker_type, column_color)
    return math.floor(random() * (high - low + 1)) + low
