"""
Bounded undo/redo history of Board snapshots.

The manager is itself immutable: ``push``, ``undo`` and ``redo`` return a new
manager. Undo and redo hand back the target snapshot and leave it to the
caller to apply it.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from .domain.board import Board

DEFAULT_MAX_DEPTH = 50


@dataclass(frozen=True)
class HistoryEntry:
    timestamp: float
    action: str
    state: Board


@dataclass(frozen=True)
class UndoRedoResult:
    manager: "HistoryManager"
    state: Board


@dataclass(frozen=True)
class HistoryManager:
    entries: Tuple[HistoryEntry, ...] = field(default_factory=tuple)
    current_index: int = -1
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self):
        if self.max_depth < 1:
            raise ValueError("History depth must be at least 1")

    def push(self, action: str, state: Board) -> "HistoryManager":
        """Append a snapshot, dropping the redo tail and the oldest overflow."""
        entry = HistoryEntry(timestamp=time.time(), action=action, state=state)
        entries = self.entries[: self.current_index + 1] + (entry,)
        if len(entries) > self.max_depth:
            entries = entries[len(entries) - self.max_depth:]
        return replace(self, entries=entries, current_index=len(entries) - 1)

    @property
    def can_undo(self) -> bool:
        return self.current_index > 0

    @property
    def can_redo(self) -> bool:
        return self.current_index < len(self.entries) - 1

    def undo(self) -> Optional[UndoRedoResult]:
        if not self.can_undo:
            return None
        index = self.current_index - 1
        return UndoRedoResult(
            manager=replace(self, current_index=index), state=self.entries[index].state
        )

    def redo(self) -> Optional[UndoRedoResult]:
        if not self.can_redo:
            return None
        index = self.current_index + 1
        return UndoRedoResult(
            manager=replace(self, current_index=index), state=self.entries[index].state
        )

    @property
    def current_state(self) -> Optional[Board]:
        if self.current_index < 0 or not self.entries:
            return None
        return self.entries[self.current_index].state

    @property
    def current_action(self) -> Optional[str]:
        if self.current_index < 0 or not self.entries:
            return None
        return self.entries[self.current_index].action
