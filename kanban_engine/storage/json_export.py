"""
JSON export/import of a Board.

Exports are pretty-printed (two-space indent) in the same camelCase layout
used by the state repository. Imports never raise for bad input; they
return an ``ImportFailure`` whose error distinguishes undecodable JSON from
a document that decodes but does not describe a valid board.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import IO, Any, Dict, Optional, Tuple, Union

from pydantic import ValidationError

from ..domain.board import Board
from .serialization import board_from_dict, serialize_board

logger = logging.getLogger(__name__)


class ImportErrorType(str, Enum):
    INVALID_JSON = "INVALID_JSON"
    VALIDATION_FAILED = "VALIDATION_FAILED"


@dataclass(frozen=True)
class BoardImportError:
    type: ImportErrorType
    message: str
    errors: Tuple[Dict[str, Any], ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ImportSuccess:
    value: Board
    success: bool = True


@dataclass(frozen=True)
class ImportFailure:
    error: BoardImportError
    success: bool = False


ImportResult = Union[ImportSuccess, ImportFailure]


def export_board(board: Board, fp: Optional[IO[str]] = None) -> str:
    """Return the board as indented JSON, also writing it to ``fp`` if given."""
    content = json.dumps(serialize_board(board), indent=2)
    if fp is not None:
        fp.write(content)
    return content


def import_board_text(text: Union[str, bytes]) -> ImportResult:
    try:
        if isinstance(text, bytes):
            text = text.decode("utf-8")
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        # UnicodeDecodeError and JSONDecodeError are both ValueErrors; very deep
        # nesting makes the decoder raise RecursionError instead
        logger.info("Board import rejected: invalid JSON (%s)", e)
        return ImportFailure(
            BoardImportError(ImportErrorType.INVALID_JSON, f"Invalid JSON: {e}")
        )

    try:
        board = board_from_dict(data)
    except ValidationError as e:
        errors = tuple(
            {"loc": err["loc"], "msg": err["msg"], "type": err["type"]} for err in e.errors()
        )
        logger.info("Board import rejected: %d validation error(s)", len(errors))
        return ImportFailure(
            BoardImportError(
                ImportErrorType.VALIDATION_FAILED,
                f"Board data failed validation with {len(errors)} error(s)",
                errors,
            )
        )

    return ImportSuccess(board)


def import_board(fp: IO) -> ImportResult:
    """Read a whole file-like object and parse it as an exported board."""
    return import_board_text(fp.read())
