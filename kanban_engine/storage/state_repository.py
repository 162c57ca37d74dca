"""
State repository: save and load whole Boards through a KeyValueStore.

Two slots are kept. The primary slot holds explicit saves and the autosave
slot holds the debounced background snapshot. Loading falls back to the
autosave slot only when the primary slot has never been written.

Loading never raises for bad data: a missing key, malformed JSON, or a
document that fails schema validation all yield ``None`` and a log entry.
Saving drops the write (with a warning) when the store is full and lets
every other failure propagate.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from pydantic import ValidationError

from ..domain.board import Board
from ..exceptions import DomainInvariantError, StorageQuotaExceededError
from .serialization import board_from_dict, serialize_board
from .stores import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_STATE_KEY = "kanban-vibe-state"
DEFAULT_AUTOSAVE_KEY = "kanban-vibe-autosave"


class StateRepository:
    def __init__(
        self,
        store: KeyValueStore,
        state_key: str = DEFAULT_STATE_KEY,
        autosave_key: str = DEFAULT_AUTOSAVE_KEY,
    ):
        self.store = store
        self.state_key = state_key
        self.autosave_key = autosave_key

    def save_board(self, board: Board) -> bool:
        """Write to the primary slot. Returns False if the store was full."""
        return self._write(self.state_key, board)

    def save_autosave(self, board: Board) -> bool:
        return self._write(self.autosave_key, board)

    def _write(self, key: str, board: Board) -> bool:
        payload = json.dumps(serialize_board(board))
        try:
            self.store.set_item(key, payload)
        except StorageQuotaExceededError:
            logger.warning("Storage quota exceeded, board state for %s was not saved", key)
            return False
        logger.debug("Saved board state under %s (day %d)", key, board.current_day)
        return True

    def load_board(self) -> Optional[Board]:
        raw = self.store.get_item(self.state_key)
        key = self.state_key
        if raw is None:
            raw = self.store.get_item(self.autosave_key)
            key = self.autosave_key
        if raw is None:
            logger.debug("No saved board state found")
            return None
        return self._parse(key, raw)

    def _parse(self, key: str, raw: str) -> Optional[Board]:
        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as e:
            logger.error("Saved board state under %s is not valid JSON: %s", key, e)
            return None

        try:
            board = board_from_dict(data)
        except ValidationError as e:
            logger.error(
                "Saved board state under %s failed validation with %d error(s): %s",
                key, e.error_count(), e.errors(include_url=False),
            )
            return None
        except DomainInvariantError as e:
            logger.error("Saved board state under %s is inconsistent: %s", key, e.message)
            return None

        logger.info("Loaded board state from %s (day %d, %d cards)", key, board.current_day, len(board.cards))
        return board

    def clear_board(self) -> None:
        self.store.remove_item(self.state_key)
        self.store.remove_item(self.autosave_key)
        logger.info("Cleared saved board state")
