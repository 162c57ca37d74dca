"""
Kanban flow simulation engine.

Immutable domain model, day/policy pipeline, undo history, persistence and
the session facade that ties them together.
"""

from _version import __version__, get_full_version, get_version_dict

from .config import SimulationConfig, load_simulation_config
from .domain import (Board, Card, CardFactory, ColumnLimit, Stage, WipLimits, Worker,
                     WorkerType, WorkItems, WorkProgress)
from .exceptions import (ConfigurationError, DomainInvariantError, InvalidConfigurationError,
                         KanbanSimError, PolicyRunError, StorageError,
                         StorageQuotaExceededError)
from .history import HistoryManager
from .logger import JSONFormatter, ProductionLogger, get_logger
from .notifications import Notification, NotificationHub, NotificationLevel
from .pipeline import (CancellationToken, PolicyRunner, PolicyType, advance_day, assign_worker,
                       move_card, run_policy_day)
from .session import KanbanSession, PolicyRunSummary
from .storage import (AutosaveScheduler, FileKeyValueStore, MemoryKeyValueStore,
                      StateRepository, export_board, import_board)

__all__ = [
    # Version
    "__version__",
    "get_full_version",
    "get_version_dict",
    # Config
    "SimulationConfig",
    "load_simulation_config",
    # Domain
    "Board",
    "Card",
    "CardFactory",
    "ColumnLimit",
    "Stage",
    "WipLimits",
    "Worker",
    "WorkerType",
    "WorkItems",
    "WorkProgress",
    # Errors
    "KanbanSimError",
    "DomainInvariantError",
    "ConfigurationError",
    "InvalidConfigurationError",
    "StorageError",
    "StorageQuotaExceededError",
    "PolicyRunError",
    # Use cases
    "advance_day",
    "assign_worker",
    "move_card",
    "run_policy_day",
    "PolicyType",
    "PolicyRunner",
    "CancellationToken",
    # Session
    "KanbanSession",
    "PolicyRunSummary",
    "HistoryManager",
    "Notification",
    "NotificationHub",
    "NotificationLevel",
    # Storage
    "AutosaveScheduler",
    "FileKeyValueStore",
    "MemoryKeyValueStore",
    "StateRepository",
    "export_board",
    "import_board",
    # Logging
    "JSONFormatter",
    "ProductionLogger",
    "get_logger",
]
