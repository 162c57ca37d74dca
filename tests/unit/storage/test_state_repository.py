import json
import logging

import pytest

from kanban_engine.exceptions import StorageQuotaExceededError
from kanban_engine.storage import (DEFAULT_AUTOSAVE_KEY, DEFAULT_STATE_KEY, MemoryKeyValueStore,
                                   StateRepository, serialize_board)
from tests.fixtures import make_board, make_card


class TestSaveAndLoad:
    def test_round_trip_through_primary_key(self, repository, memory_store):
        board = make_board([make_card("A")], current_day=3)
        assert repository.save_board(board)

        assert memory_store.keys() == [DEFAULT_STATE_KEY]
        assert repository.load_board() == board

    def test_nothing_saved(self, repository):
        assert repository.load_board() is None

    def test_autosave_used_when_primary_missing(self, repository):
        board = make_board(current_day=7)
        repository.save_autosave(board)
        assert repository.load_board() == board

    def test_primary_wins_over_autosave(self, repository):
        repository.save_board(make_board(current_day=1))
        repository.save_autosave(make_board(current_day=9))
        assert repository.load_board().current_day == 1

    def test_corrupt_primary_does_not_fall_back(self, repository, memory_store, caplog):
        memory_store.set_item(DEFAULT_STATE_KEY, "{oops")
        repository.save_autosave(make_board(current_day=9))

        with caplog.at_level(logging.ERROR, logger="kanban_engine"):
            assert repository.load_board() is None
        assert "not valid JSON" in caplog.text

    def test_deeply_nested_primary_returns_none(self, repository, memory_store, caplog):
        memory_store.set_item(DEFAULT_STATE_KEY, "[" * 100_000 + "]" * 100_000)

        with caplog.at_level(logging.ERROR, logger="kanban_engine"):
            assert repository.load_board() is None
        assert "not valid JSON" in caplog.text

    def test_schema_failure_returns_none(self, repository, memory_store, caplog):
        data = serialize_board(make_board())
        data["currentDay"] = -4
        memory_store.set_item(DEFAULT_STATE_KEY, json.dumps(data))

        with caplog.at_level(logging.ERROR, logger="kanban_engine"):
            assert repository.load_board() is None
        assert "failed validation" in caplog.text

    def test_custom_keys(self, memory_store):
        repository = StateRepository(memory_store, state_key="main", autosave_key="draft")
        repository.save_board(make_board())
        repository.save_autosave(make_board())
        assert sorted(memory_store.keys()) == ["draft", "main"]


class TestFailures:
    def test_quota_exceeded_returns_false(self, caplog):
        repository = StateRepository(MemoryKeyValueStore(quota_bytes=16))

        with caplog.at_level(logging.WARNING, logger="kanban_engine"):
            assert repository.save_board(make_board([make_card("A")])) is False
        assert "quota exceeded" in caplog.text
        assert repository.load_board() is None

    def test_other_store_errors_propagate(self):
        class BrokenStore(MemoryKeyValueStore):
            def get_item(self, key):
                raise PermissionError("denied")

        with pytest.raises(PermissionError):
            StateRepository(BrokenStore()).load_board()

    def test_memory_quota_raises_from_store(self):
        store = MemoryKeyValueStore(quota_bytes=4)
        with pytest.raises(StorageQuotaExceededError) as exc_info:
            store.set_item("k", "too long")
        assert exc_info.value.context.storage_key == "k"


def test_clear_board_removes_both_keys(repository, memory_store):
    repository.save_board(make_board())
    repository.save_autosave(make_board())
    repository.clear_board()

    assert memory_store.keys() == []
    assert repository.load_board() is None
    assert DEFAULT_AUTOSAVE_KEY == "kanban-vibe-autosave"
