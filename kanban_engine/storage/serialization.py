"""Board <-> persisted dict conversion."""

from __future__ import annotations

from typing import Any, Dict

from ..domain.board import Board
from ..domain.card import Card
from ..domain.wip import WipLimits
from ..domain.work_items import WorkerType, WorkItems, WorkProgress
from ..domain.worker import AssignedWorker, Worker
from .schema import BoardState, CardState, WorkProgressState


def _progress_to_dict(progress: WorkProgress) -> Dict[str, int]:
    return {"total": progress.total, "completed": progress.completed}


def _card_to_dict(card: Card) -> Dict[str, Any]:
    return {
        "id": card.id,
        "content": card.content,
        "stage": card.stage.value,
        "age": card.age,
        "startDay": card.start_day,
        "isBlocked": card.is_blocked,
        "completionDay": card.completion_day,
        "workItems": {
            "red": _progress_to_dict(card.work_items.red),
            "blue": _progress_to_dict(card.work_items.blue),
            "green": _progress_to_dict(card.work_items.green),
        },
        "assignedWorkers": [
            {"id": worker.id, "type": WorkerType(worker.type).value}
            for worker in card.assigned_workers
        ],
    }


def serialize_board(board: Board) -> Dict[str, Any]:
    """Plain, JSON-ready dict in the persisted camelCase layout."""
    return {
        "currentDay": board.current_day,
        "cards": [_card_to_dict(card) for card in board.cards],
        "workers": [{"id": w.id, "type": w.type.value} for w in board.workers],
        "wipLimits": board.wip_limits.model_dump(by_alias=True),
    }


def _progress_from_state(state: WorkProgressState) -> WorkProgress:
    return WorkProgress(total=state.total, completed=state.completed)


def _card_from_state(state: CardState) -> Card:
    return Card(
        id=state.id,
        content=state.content,
        stage=state.stage,
        work_items=WorkItems(
            red=_progress_from_state(state.work_items.red),
            blue=_progress_from_state(state.work_items.blue),
            green=_progress_from_state(state.work_items.green),
        ),
        start_day=state.start_day,
        age=state.age,
        is_blocked=state.is_blocked,
        completion_day=state.completion_day,
        assigned_workers=tuple(
            AssignedWorker(id=w.id, type=WorkerType(w.type)) for w in state.assigned_workers
        ),
    )


def deserialize_board(state: BoardState) -> Board:
    """Rebuild a Board from an already validated BoardState."""
    return Board(
        cards=tuple(_card_from_state(card) for card in state.cards),
        workers=tuple(Worker(id=w.id, type=WorkerType(w.type)) for w in state.workers),
        current_day=state.current_day,
        wip_limits=WipLimits.create(state.wip_limits),
    )


def board_from_dict(data: Any) -> Board:
    """Validate raw decoded JSON and build a Board; raises pydantic.ValidationError."""
    return deserialize_board(BoardState.model_validate(data))
