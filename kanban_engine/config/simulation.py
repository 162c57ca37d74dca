"""Simulation, history, storage, logging and board seed settings models."""

from __future__ import annotations

from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..domain.wip import WipLimits

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class SimulationSettings(BaseModel):
    """Core simulation parameters."""
    random_seed: Optional[int] = Field(default=None, description="Seed for the day RNG; unset uses the platform RNG")
    policy_type: Literal["siloted-expert"] = Field(default="siloted-expert")
    default_policy_days: int = Field(default=10, ge=1)


class HistorySettings(BaseModel):
    """Undo/redo depth."""
    max_depth: int = Field(default=50, ge=1)


class StorageSettings(BaseModel):
    """Where board state is kept and how often it is autosaved."""
    directory: Path = Field(default=Path(".kanban_state"))
    state_key: str = Field(default="kanban-vibe-state", min_length=1)
    autosave_key: str = Field(default="kanban-vibe-autosave", min_length=1)
    autosave_debounce_seconds: float = Field(default=1.0, ge=0)


class LoggingSettings(BaseModel):
    level: LogLevel = "INFO"
    log_dir: Optional[Path] = Field(default=None, description="Directory for rotating JSON logs; unset logs to console only")
    json_logs: bool = False

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, value):
        return value.upper() if isinstance(value, str) else value


class WorkerSeed(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    type: Literal["red", "blue", "green"]


class BoardDefaults(BaseModel):
    """Seed used for a brand-new board when nothing has been saved yet."""
    wip_limits: WipLimits = Field(default_factory=WipLimits)
    workers: List[WorkerSeed] = Field(default_factory=list)
