"""Configuration for the Kanban simulator.

Submodules:
    - paths: Project root, default config path and storage directory helpers
    - simulation: Settings models for each YAML section
    - loader: SimulationConfig and load_simulation_config
"""

from .loader import SimulationConfig, load_simulation_config
from .paths import get_default_config_path, get_project_root, resolve_storage_dir
from .simulation import (
    BoardDefaults,
    HistorySettings,
    LoggingSettings,
    SimulationSettings,
    StorageSettings,
    WorkerSeed,
)

__all__ = [
    "SimulationConfig",
    "load_simulation_config",
    "get_default_config_path",
    "get_project_root",
    "resolve_storage_dir",
    "BoardDefaults",
    "HistorySettings",
    "LoggingSettings",
    "SimulationSettings",
    "StorageSettings",
    "WorkerSeed",
]
