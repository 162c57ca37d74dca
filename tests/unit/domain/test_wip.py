import pytest

from kanban_engine.domain import ColumnLimit, WipLimits, can_move_in, can_move_out
from kanban_engine.exceptions import DomainInvariantError


class TestColumnLimit:
    def test_zero_disables_both_bounds(self):
        limit = ColumnLimit()
        assert limit.allows_move_in(1000)
        assert limit.allows_move_out(0)

    def test_max_is_exclusive_for_move_in(self):
        limit = ColumnLimit(min=0, max=2)
        assert limit.allows_move_in(1)
        assert not limit.allows_move_in(2)

    def test_min_is_exclusive_for_move_out(self):
        limit = ColumnLimit(min=2, max=0)
        assert limit.allows_move_out(3)
        assert not limit.allows_move_out(2)

    def test_min_above_max_is_rejected(self):
        with pytest.raises(ValueError):
            ColumnLimit(min=3, max=2)

    def test_min_above_disabled_max_is_allowed(self):
        assert ColumnLimit(min=3, max=0).min == 3


class TestWipLimits:
    def test_create_accepts_camel_case_columns(self):
        limits = WipLimits.create({"redActive": {"min": 1, "max": 4}})
        assert limits.get("redActive") == ColumnLimit(min=1, max=4)
        assert limits.get("options") == ColumnLimit()

    @pytest.mark.parametrize(
        "raw",
        [
            {"options": {"min": -1, "max": 0}},
            {"options": {"min": 1.5, "max": 0}},
            {"options": {"min": 3, "max": 1}},
            {"purple": {"min": 0, "max": 0}},
        ],
    )
    def test_create_rejects_invalid_limits(self, raw):
        with pytest.raises(DomainInvariantError, match="Invalid WIP limits"):
            WipLimits.create(raw)

    def test_with_column_limit_replaces_one_column(self):
        limits = WipLimits.empty().with_column_limit("green", {"min": 1, "max": 2})
        assert limits.green == ColumnLimit(min=1, max=2)
        assert limits.done == ColumnLimit()

    def test_with_column_limit_validates(self):
        with pytest.raises(DomainInvariantError, match="Invalid column limit"):
            WipLimits.empty().with_column_limit("green", {"min": 5, "max": 2})

    def test_unknown_column_raises_key_error(self):
        with pytest.raises(KeyError):
            WipLimits.empty().get("red-active")

    def test_module_helpers(self):
        limits = WipLimits.create({"blueActive": {"min": 1, "max": 2}})
        assert can_move_in(limits, "blueActive", 1)
        assert not can_move_in(limits, "blueActive", 2)
        assert not can_move_out(limits, "blueActive", 1)

    def test_to_columns_lists_all_seven(self):
        columns = WipLimits.empty().to_columns()
        assert list(columns) == [
            "options", "redActive", "redFinished", "blueActive", "blueFinished", "green", "done",
        ]
