"""Board persistence: key-value stores, the state repository, JSON export and autosave."""

from .autosave import AutosaveScheduler
from .json_export import (BoardImportError, ImportErrorType, ImportFailure, ImportResult,
                          ImportSuccess, export_board, import_board, import_board_text)
from .schema import BoardState
from .serialization import board_from_dict, deserialize_board, serialize_board
from .state_repository import DEFAULT_AUTOSAVE_KEY, DEFAULT_STATE_KEY, StateRepository
from .stores import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore

__all__ = [
    "AutosaveScheduler",
    "BoardImportError",
    "ImportErrorType",
    "ImportFailure",
    "ImportResult",
    "ImportSuccess",
    "export_board",
    "import_board",
    "import_board_text",
    "BoardState",
    "board_from_dict",
    "deserialize_board",
    "serialize_board",
    "DEFAULT_AUTOSAVE_KEY",
    "DEFAULT_STATE_KEY",
    "StateRepository",
    "FileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
]
