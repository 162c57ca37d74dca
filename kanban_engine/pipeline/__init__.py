"""
Simulation use cases.

Pure functions taking a Board-derived slice and returning new cards (plus a
message or the new day). The session commits their results to the Board.
"""

from .assign_worker import assign_worker
from .day_executor import DayResult, advance_day, apply_worker_output, transition_ready_cards
from .move_card import MoveResult, move_card
from .policy import PolicyType, assign_workers_by_color, run_policy_day
from .policy_runner import CancellationToken, PolicyRunner, validate_days
from .transitions import StageCounts, WipRejection, check_wip, is_stage_done

__all__ = [
    "assign_worker",
    "DayResult",
    "advance_day",
    "apply_worker_output",
    "transition_ready_cards",
    "MoveResult",
    "move_card",
    "PolicyType",
    "assign_workers_by_color",
    "run_policy_day",
    "CancellationToken",
    "PolicyRunner",
    "validate_days",
    "StageCounts",
    "WipRejection",
    "check_wip",
    "is_stage_done",
]
