"""Immutable domain model: cards, workers, WIP limits and the board."""

from .board import Board
from .card import MAX_ASSIGNED_WORKERS, Card
from .card_factory import CardFactory
from .card_id import CardId, card_id_sort_key, is_valid_card_id, next_card_id, parse_card_id
from .stage import (ACTIVE_STAGES, ALL_STAGES, CLICK_EDGES, COLUMN_KEYS, COLUMN_TITLES,
                    DAY_EDGES, Stage, column_key, is_active_stage, parse_stage, stage_color)
from .wip import ColumnLimit, WipLimits, can_move_in, can_move_out
from .work_items import ALL_WORKER_TYPES, WorkerType, WorkItems, WorkProgress, is_valid_worker_type
from .worker import AssignedWorker, RandomFn, Worker, calculate_output, output_range

__all__ = [
    "Board",
    "Card",
    "MAX_ASSIGNED_WORKERS",
    "CardFactory",
    "CardId",
    "card_id_sort_key",
    "is_valid_card_id",
    "next_card_id",
    "parse_card_id",
    "Stage",
    "ALL_STAGES",
    "ACTIVE_STAGES",
    "CLICK_EDGES",
    "DAY_EDGES",
    "COLUMN_KEYS",
    "COLUMN_TITLES",
    "column_key",
    "is_active_stage",
    "parse_stage",
    "stage_color",
    "ColumnLimit",
    "WipLimits",
    "can_move_in",
    "can_move_out",
    "WorkerType",
    "ALL_WORKER_TYPES",
    "WorkItems",
    "WorkProgress",
    "is_valid_worker_type",
    "AssignedWorker",
    "RandomFn",
    "Worker",
    "calculate_output",
    "output_range",
]
