"""WIP limit configuration and enforcement.

Each of the seven columns carries a ``{min, max}`` pair. ``0`` disables the
respective bound, so ``max == 0`` means "no ceiling" and ``min == 0`` means
"no floor".
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..exceptions import DomainInvariantError
from .stage import COLUMN_KEYS


class ColumnLimit(BaseModel):
    """Min/max WIP bound for a single column."""

    model_config = ConfigDict(frozen=True)

    min: int = Field(default=0, ge=0, strict=True)
    max: int = Field(default=0, ge=0, strict=True)

    @model_validator(mode="after")
    def check_min_not_above_max(self) -> "ColumnLimit":
        if self.max != 0 and self.min > self.max:
            raise ValueError("min must be less than or equal to max (when max is not 0)")
        return self

    def allows_move_in(self, current_count: int) -> bool:
        return self.max == 0 or current_count < self.max

    def allows_move_out(self, current_count: int) -> bool:
        return self.min == 0 or current_count > self.min


_FIELD_BY_KEY: Dict[str, str] = {
    "options": "options",
    "redActive": "red_active",
    "redFinished": "red_finished",
    "blueActive": "blue_active",
    "blueFinished": "blue_finished",
    "green": "green",
    "done": "done",
}


class WipLimits(BaseModel):
    """Validated WIP limits for all seven columns.

    Fields are snake_case in Python and camelCase (the column keys) on the
    wire; both spellings are accepted on input.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    options: ColumnLimit = Field(default_factory=ColumnLimit)
    red_active: ColumnLimit = Field(default_factory=ColumnLimit, alias="redActive")
    red_finished: ColumnLimit = Field(default_factory=ColumnLimit, alias="redFinished")
    blue_active: ColumnLimit = Field(default_factory=ColumnLimit, alias="blueActive")
    blue_finished: ColumnLimit = Field(default_factory=ColumnLimit, alias="blueFinished")
    green: ColumnLimit = Field(default_factory=ColumnLimit)
    done: ColumnLimit = Field(default_factory=ColumnLimit)

    @classmethod
    def empty(cls) -> "WipLimits":
        return cls()

    @classmethod
    def create(cls, limits: Any) -> "WipLimits":
        """Validate ``limits`` (mapping or WipLimits), raising on failure."""
        if isinstance(limits, WipLimits):
            return limits
        try:
            return cls.model_validate(limits)
        except ValidationError as e:
            raise DomainInvariantError(f"Invalid WIP limits: {e}") from e

    def get(self, column: str) -> ColumnLimit:
        if column not in _FIELD_BY_KEY:
            raise KeyError(f"Unknown WIP column: {column}")
        return getattr(self, _FIELD_BY_KEY[column])

    def with_column_limit(
        self, column: str, limit: Union[ColumnLimit, Mapping[str, Any]]
    ) -> "WipLimits":
        """Return new limits with one column replaced; only that column is re-validated."""
        if column not in _FIELD_BY_KEY:
            raise KeyError(f"Unknown WIP column: {column}")
        raw = limit.model_dump() if isinstance(limit, ColumnLimit) else dict(limit)
        try:
            validated = ColumnLimit.model_validate(raw)
        except ValidationError as e:
            raise DomainInvariantError(f"Invalid column limit: {e}") from e
        return self.model_copy(update={_FIELD_BY_KEY[column]: validated})

    def to_columns(self) -> Dict[str, Dict[str, int]]:
        return {key: self.get(key).model_dump() for key in COLUMN_KEYS}


def can_move_in(limits: WipLimits, column: str, current_count: int) -> bool:
    return limits.get(column).allows_move_in(current_count)


def can_move_out(limits: WipLimits, column: str, current_count: int) -> bool:
    return limits.get(column).allows_move_out(current_count)
