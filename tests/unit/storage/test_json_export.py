import io
import json

import pytest

from kanban_engine.domain import Stage
from kanban_engine.storage import (ImportErrorType, ImportFailure, ImportSuccess, export_board,
                                   import_board, import_board_text)
from tests.fixtures import make_board, make_card, make_worker


@pytest.fixture
def board():
    return make_board(
        [make_card("A", stage=Stage.RED_ACTIVE, red=(5, 2), workers=[("R1", "red")])],
        workers=[make_worker("R1", "red")],
        current_day=2,
    )


def test_export_is_two_space_indented(board):
    text = export_board(board)
    assert text.startswith('{\n  "currentDay": 2,')
    assert json.loads(text)["cards"][0]["id"] == "A"


def test_export_writes_to_file_object(board):
    buffer = io.StringIO()
    text = export_board(board, buffer)
    assert buffer.getvalue() == text


def test_import_exported_board(board):
    result = import_board_text(export_board(board))
    assert isinstance(result, ImportSuccess)
    assert result.success
    assert result.value == board


def test_import_accepts_bytes_and_file_objects(board):
    raw = export_board(board).encode("utf-8")
    assert import_board_text(raw).value == board
    assert import_board(io.BytesIO(raw)).value == board


@pytest.mark.parametrize("text", ["", "{", "not json", b"\xff\xfe"])
def test_undecodable_input(text):
    result = import_board_text(text)
    assert isinstance(result, ImportFailure)
    assert not result.success
    assert result.error.type is ImportErrorType.INVALID_JSON
    assert result.error.errors == ()


def test_valid_json_invalid_board(board):
    data = json.loads(export_board(board))
    data["cards"][0]["stage"] = "testing"
    del data["workers"]

    result = import_board_text(json.dumps(data))
    assert result.error.type is ImportErrorType.VALIDATION_FAILED
    locations = [error["loc"] for error in result.error.errors]
    assert ("workers",) in locations
    assert ("cards", 0, "stage") in locations
    assert "2 error(s)" in result.error.message


def test_deeply_nested_input_is_invalid_json():
    result = import_board_text("[" * 100_000 + "]" * 100_000)
    assert isinstance(result, ImportFailure)
    assert result.error.type is ImportErrorType.INVALID_JSON
