"""
Session helper utilities for the Kanban simulator CLI

Every CLI invocation loads configuration, attaches logging, and opens one
file-backed KanbanSession; these helpers do that once per invocation and
cache the result on the typer context.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from kanban_engine.config import SimulationConfig, load_simulation_config
from kanban_engine.exceptions import ConfigurationError
from kanban_engine.logger import ProductionLogger
from kanban_engine.notifications import NotificationHub
from kanban_engine.session import KanbanSession

from ..ui.messages import show_error_message, show_notification


@dataclass
class CLIState:
    config_path: Optional[Path] = None
    verbose: bool = False
    config: Optional[SimulationConfig] = None
    session: Optional[KanbanSession] = None


def find_default_config() -> Optional[Path]:
    """Find the default simulation configuration file, if one exists."""
    default_paths = [
        Path("config/simulation_config.yaml"),
        Path("simulation_config.yaml"),
    ]
    for config_path in default_paths:
        if config_path.exists():
            return config_path
    return None


def load_config(config_path: Optional[Path]) -> SimulationConfig:
    path = config_path or find_default_config()
    try:
        return load_simulation_config(path)
    except FileNotFoundError as e:
        show_error_message(str(e))
        raise typer.Exit(1)
    except ConfigurationError as e:
        show_error_message("Invalid configuration", e.message)
        raise typer.Exit(1)


def open_session(ctx: typer.Context) -> KanbanSession:
    """Return the invocation's session, creating it on first use."""
    state = ctx.ensure_object(CLIState)
    if state.session is not None:
        return state.session

    config = load_config(state.config_path)
    run_logger = ProductionLogger(
        log_level="DEBUG" if state.verbose else config.logging.level,
        log_dir=config.logging.log_dir,
        json_console=config.logging.json_logs,
    )

    hub = NotificationHub()
    hub.subscribe(show_notification)
    session = KanbanSession.from_config(config, notifications=hub)

    ctx.call_on_close(run_logger.close)
    ctx.call_on_close(session.close)
    state.config = config
    state.session = session
    return session


def save_or_fail(session: KanbanSession) -> None:
    """Persist through the explicit save channel; exit 1 if the store is full."""
    if not session.save():
        raise typer.Exit(1)
