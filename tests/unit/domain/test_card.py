import pytest

from kanban_engine.domain import AssignedWorker, Stage, WorkerType
from kanban_engine.exceptions import DomainInvariantError
from tests.fixtures import make_card


class TestCardInvariants:
    def test_negative_age_is_rejected(self):
        with pytest.raises(DomainInvariantError, match="Age cannot be negative"):
            make_card(age=-1)

    def test_more_than_three_workers_is_rejected(self):
        workers = [(f"R{i}", "red") for i in range(1, 5)]
        with pytest.raises(DomainInvariantError, match="Cannot assign more than 3 workers to a card"):
            make_card(workers=workers)

    def test_invariant_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            make_card(age=-5)

    def test_adding_a_fourth_worker_is_rejected(self):
        card = make_card(workers=[("R1", "red"), ("R2", "red"), ("R3", "red")])
        with pytest.raises(DomainInvariantError):
            card.add_worker(AssignedWorker(id="B1", type=WorkerType.BLUE))

    def test_stage_string_is_coerced(self):
        assert make_card(stage="red-active").stage is Stage.RED_ACTIVE


class TestCardTransitions:
    def test_with_helpers_return_new_cards(self):
        card = make_card()
        moved = card.with_stage(Stage.RED_ACTIVE).with_age(2).with_blocked(True)

        assert card.stage is Stage.OPTIONS
        assert card.age == 0
        assert moved.stage is Stage.RED_ACTIVE
        assert moved.age == 2
        assert moved.is_blocked

    def test_remove_and_clear_workers(self):
        card = make_card(workers=[("R1", "red"), ("B1", "blue")])
        assert card.remove_worker("R1").worker_ids == ("B1",)
        assert card.clear_workers().assigned_workers == ()

    def test_completion_day_cannot_move_backwards(self):
        card = make_card(stage=Stage.DONE, completion_day=5)
        assert card.with_completion_day(7).completion_day == 7
        with pytest.raises(DomainInvariantError):
            card.with_completion_day(4)

    @pytest.mark.parametrize("stage", [Stage.OPTIONS, Stage.DONE])
    def test_options_and_done_do_not_age(self, stage):
        assert make_card(stage=stage, age=3).aged().age == 3

    @pytest.mark.parametrize(
        "stage",
        [Stage.RED_ACTIVE, Stage.RED_FINISHED, Stage.BLUE_ACTIVE, Stage.BLUE_FINISHED, Stage.GREEN],
    )
    def test_in_flight_cards_age(self, stage):
        assert make_card(stage=stage, age=3).aged().age == 4
