"""Persisted board format.

These pydantic models describe the exact JSON shape written to storage and
to exported files. Parsing into them is the only way external data becomes
a Board, so everything the domain would reject is rejected here first and
reported as a validation failure.
"""

from __future__ import annotations

from typing import Annotated, Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..domain.stage import COLUMN_KEYS
from ..domain.wip import WipLimits

NonNegativeInt = Annotated[int, Field(strict=True, ge=0)]
WorkerTypeName = Literal["red", "blue", "green"]
StageName = Literal[
    "options",
    "red-active",
    "red-finished",
    "blue-active",
    "blue-finished",
    "green",
    "done",
]


class WorkProgressState(BaseModel):
    total: NonNegativeInt
    completed: NonNegativeInt

    @model_validator(mode="after")
    def check_completed_within_total(self) -> "WorkProgressState":
        if self.completed > self.total:
            raise ValueError("completed must not exceed total")
        return self


class WorkItemsState(BaseModel):
    red: WorkProgressState
    blue: WorkProgressState
    green: WorkProgressState


class AssignedWorkerState(BaseModel):
    id: Annotated[str, Field(strict=True)]
    type: WorkerTypeName


class CardState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Annotated[str, Field(strict=True, pattern=r"^[A-Z]+$")]
    content: Annotated[str, Field(strict=True)]
    stage: StageName
    age: NonNegativeInt
    start_day: NonNegativeInt = Field(alias="startDay")
    is_blocked: Annotated[bool, Field(strict=True)] = Field(alias="isBlocked")
    completion_day: Optional[NonNegativeInt] = Field(default=None, alias="completionDay")
    work_items: WorkItemsState = Field(alias="workItems")
    assigned_workers: List[AssignedWorkerState] = Field(
        default_factory=list, alias="assignedWorkers", max_length=3
    )


class WorkerState(BaseModel):
    id: Annotated[str, Field(strict=True, min_length=1)]
    type: WorkerTypeName

    @field_validator("id")
    @classmethod
    def check_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Worker id cannot be empty")
        return value


class BoardState(BaseModel):
    """Top-level persisted board."""

    model_config = ConfigDict(populate_by_name=True)

    current_day: NonNegativeInt = Field(alias="currentDay")
    cards: List[CardState]
    workers: List[WorkerState]
    wip_limits: WipLimits = Field(alias="wipLimits")

    @field_validator("wip_limits", mode="before")
    @classmethod
    def require_every_column(cls, value: Any) -> Any:
        if isinstance(value, dict):
            missing = [key for key in COLUMN_KEYS if key not in value]
            if missing:
                raise ValueError(f"missing WIP columns: {', '.join(missing)}")
        return value
