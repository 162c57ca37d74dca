import pytest

from kanban_engine.domain import WorkerType, WorkItems, WorkProgress
from kanban_engine.exceptions import DomainInvariantError


class TestWorkProgress:
    def test_zero_total_is_vacuously_complete(self):
        assert WorkProgress(total=0, completed=0).is_complete

    def test_partial_progress_is_not_complete(self):
        assert not WorkProgress(total=5, completed=4).is_complete

    @pytest.mark.parametrize("total, completed", [(-1, 0), (3, -1), (3, 4)])
    def test_invalid_progress_is_rejected(self, total, completed):
        with pytest.raises(DomainInvariantError):
            WorkProgress(total=total, completed=completed)


class TestApplyWork:
    def test_adds_to_one_color_only(self):
        items = WorkItems(red=WorkProgress(8, 0), blue=WorkProgress(4, 1))
        updated = items.apply_work(WorkerType.RED, 3)

        assert updated.red == WorkProgress(8, 3)
        assert updated.blue == WorkProgress(4, 1)
        assert updated.green == WorkProgress(0, 0)

    def test_clamps_to_total(self):
        items = WorkItems(red=WorkProgress(8, 6))
        assert items.apply_work("red", 6).red.completed == 8

    def test_negative_amount_counts_as_zero(self):
        items = WorkItems(blue=WorkProgress(5, 2))
        assert items.apply_work(WorkerType.BLUE, -3).blue.completed == 2

    def test_completed_is_monotonic(self):
        items = WorkItems(green=WorkProgress(7, 0))
        seen = []
        for amount in (2, 0, -1, 4, 5):
            items = items.apply_work(WorkerType.GREEN, amount)
            seen.append(items.green.completed)
        assert seen == sorted(seen)
        assert seen[-1] == 7

    def test_original_is_unchanged(self):
        items = WorkItems(red=WorkProgress(3, 0))
        items.apply_work(WorkerType.RED, 2)
        assert items.red.completed == 0

    def test_is_all_complete(self):
        assert WorkItems.empty().is_all_complete()
        assert not WorkItems(green=WorkProgress(1, 0)).is_all_complete()
