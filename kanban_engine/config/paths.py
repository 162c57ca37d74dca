"""Path utilities for configuration management."""

from __future__ import annotations

import os
from pathlib import Path


def get_project_root() -> Path:
    """Get project root directory.

    Returns:
        Path: Absolute path to project root
    """
    # This file lives at kanban_engine/config/paths.py
    return Path(__file__).resolve().parent.parent.parent


def get_default_config_path() -> Path:
    """Config file used when none is passed explicitly.

    ``KANBAN_CONFIG_PATH`` wins over the bundled ``config/simulation_config.yaml``.
    """
    override = os.getenv("KANBAN_CONFIG_PATH")
    if override:
        return Path(override)
    return get_project_root() / "config" / "simulation_config.yaml"


def resolve_storage_dir(directory: str | Path) -> Path:
    """Resolve a storage directory, creating it if needed."""
    path = Path(directory).expanduser()
    path.mkdir(parents=True, exist_ok=True)
    return path.resolve()
