"""Configuration loading and SimulationConfig model."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import InvalidConfigurationError
from .simulation import (
    BoardDefaults,
    HistorySettings,
    LoggingSettings,
    SimulationSettings,
    StorageSettings,
)


class SimulationConfig(BaseModel):
    """Top-level config; unknown sections are kept rather than rejected."""

    model_config = ConfigDict(extra="allow")

    simulation: SimulationSettings = Field(default_factory=SimulationSettings)
    history: HistorySettings = Field(default_factory=HistorySettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    board: BoardDefaults = Field(default_factory=BoardDefaults)


def _lower_keys(d: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize dictionary keys to lowercase."""
    return {k.lower(): v for k, v in d.items()}


def _apply_env_overrides(cfg: Dict[str, Any], env: Dict[str, str], prefix: str) -> None:
    """Apply simple env overrides using DOUBLE-UNDERSCORE path syntax.

    Example: KANBAN_HISTORY__MAX_DEPTH=100 overrides history.max_depth
    """
    plen = len(prefix)
    for key, value in env.items():
        if not key.startswith(prefix) or "__" not in key[plen:]:
            continue
        path = key[plen:].lower().split("__")
        cur: Any = cfg
        for part in path[:-1]:
            if part not in cur or not isinstance(cur[part], dict):
                cur[part] = {}
            cur = cur[part]
        # Basic type coercion for ints/bools/floats
        leaf = path[-1]
        if value.lower() in {"true", "false"}:
            cur[leaf] = value.lower() == "true"
        else:
            try:
                if "." in value:
                    cur[leaf] = float(value)
                else:
                    cur[leaf] = int(value)
            except ValueError:
                cur[leaf] = value


def load_simulation_config(
    path: Optional[Path | str] = None,
    *,
    env_overrides: bool = True,
    env: Optional[Dict[str, str]] = None,
    env_prefix: str = "KANBAN_",
) -> SimulationConfig:
    """Load YAML config and return a typed `SimulationConfig`.

    - ``path=None`` starts from the built-in defaults
    - Optionally applies environment variable overrides
    - Validation failures are raised as InvalidConfigurationError
    """
    data: Dict[str, Any] = {}
    if path is not None:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Config file not found: {p}")

        with open(p, "r") as fh:
            raw = yaml.safe_load(fh) or {}
        if not isinstance(raw, dict):
            raise InvalidConfigurationError(
                "Configuration root must be a mapping", config_path=str(p)
            )

        # Normalize to lowercase keys at top level for resilience
        data = _lower_keys(raw)

    if env_overrides:
        _apply_env_overrides(data, env if env is not None else dict(os.environ), env_prefix)

    try:
        return SimulationConfig(**data)
    except ValidationError as e:
        raise InvalidConfigurationError(
            f"Invalid simulation configuration: {e}",
            config_path=str(path) if path is not None else None,
            original_exception=e,
        ) from e
