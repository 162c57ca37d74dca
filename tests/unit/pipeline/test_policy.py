from kanban_engine.domain import Stage
from kanban_engine.pipeline import PolicyType, assign_workers_by_color, run_policy_day
from kanban_engine.pipeline.policy import (move_finished_to_next_activity,
                                           move_options_to_red_active)
from tests.fixtures import MAX_DRAW, constant_random, make_board, make_card, make_worker


class TestMoveOptions:
    def test_pulls_lowest_ids_first_until_max(self):
        board = make_board(
            [make_card("AA"), make_card("B"), make_card("A")],
            wip={"redActive": {"min": 0, "max": 2}},
        )
        cards = move_options_to_red_active(list(board.cards), 4, board.wip_limits)
        stages = {card.id: card.stage for card in cards}

        assert stages == {"AA": Stage.OPTIONS, "B": Stage.RED_ACTIVE, "A": Stage.RED_ACTIVE}
        assert all(card.start_day == 4 for card in cards if card.stage is Stage.RED_ACTIVE)

    def test_respects_min_on_options(self):
        board = make_board(
            [make_card("A"), make_card("B"), make_card("C")],
            wip={"options": {"min": 1, "max": 0}},
        )
        cards = move_options_to_red_active(list(board.cards), 0, board.wip_limits)
        assert [card.stage for card in cards] == [Stage.RED_ACTIVE, Stage.RED_ACTIVE, Stage.OPTIONS]


class TestMoveFinished:
    def test_moves_stage_done_cards_oldest_first(self):
        board = make_board(
            [
                make_card("A", stage=Stage.RED_FINISHED, age=1),
                make_card("B", stage=Stage.RED_FINISHED, age=5),
            ],
            wip={"blueActive": {"min": 0, "max": 1}},
        )
        cards = move_finished_to_next_activity(list(board.cards), board.wip_limits)
        assert [card.stage for card in cards] == [Stage.RED_FINISHED, Stage.BLUE_ACTIVE]

    def test_source_min_is_rechecked_per_card(self):
        board = make_board(
            [
                make_card("A", stage=Stage.RED_FINISHED, age=2),
                make_card("B", stage=Stage.RED_FINISHED, age=6),
            ],
            wip={"redFinished": {"min": 1, "max": 0}},
        )
        cards = move_finished_to_next_activity(list(board.cards), board.wip_limits)
        assert [card.stage for card in cards] == [Stage.RED_FINISHED, Stage.BLUE_ACTIVE]

    def test_skips_cards_that_are_not_done(self):
        board = make_board(
            [
                make_card("A", stage=Stage.BLUE_FINISHED, blue=(4, 2), age=9),
                make_card("B", stage=Stage.BLUE_FINISHED, age=1),
            ]
        )
        cards = move_finished_to_next_activity(list(board.cards), board.wip_limits)
        assert [card.stage for card in cards] == [Stage.BLUE_FINISHED, Stage.GREEN]


class TestAssignByColor:
    def test_workers_go_to_their_own_color(self):
        cards = [
            make_card("A", stage=Stage.RED_ACTIVE),
            make_card("B", stage=Stage.BLUE_ACTIVE),
            make_card("C", stage=Stage.GREEN),
        ]
        workers = [make_worker("G1", "green"), make_worker("R1", "red"), make_worker("B1", "blue")]
        result = assign_workers_by_color(cards, workers)
        assert [card.worker_ids for card in result] == [("R1",), ("B1",), ("G1",)]

    def test_one_per_card_then_round_robin_oldest_first(self):
        cards = [
            make_card("A", stage=Stage.RED_ACTIVE, age=1),
            make_card("B", stage=Stage.RED_ACTIVE, age=3),
        ]
        workers = [make_worker(f"R{i}", "red") for i in range(1, 4)]
        result = assign_workers_by_color(cards, workers)
        assert result[1].worker_ids == ("R1", "R3")
        assert result[0].worker_ids == ("R2",)

    def test_never_more_than_three_per_card(self):
        cards = [make_card("A", stage=Stage.GREEN)]
        workers = [make_worker(f"G{i}", "green") for i in range(1, 6)]
        assert len(assign_workers_by_color(cards, workers)[0].assigned_workers) == 3

    def test_existing_assignments_are_reset(self):
        cards = [make_card("A", stage=Stage.OPTIONS, workers=[("R1", "red")])]
        assert assign_workers_by_color(cards, [make_worker("R1", "red")])[0].assigned_workers == ()


class TestRunPolicyDay:
    def test_full_day(self):
        board = make_board(
            [make_card("A", red=(6, 0))],
            workers=[make_worker("R1", "red")],
            current_day=2,
        )
        result = run_policy_day(
            board.cards, board.workers, board.current_day, board.wip_limits,
            constant_random(MAX_DRAW), PolicyType.SILOTED_EXPERT,
        )
        card = result.cards[0]

        assert result.new_day == 3
        assert card.start_day == 2
        assert card.work_items.red.completed == 6
        assert card.stage is Stage.RED_FINISHED
        assert card.assigned_workers == ()

    def test_accepts_policy_name(self):
        board = make_board([make_card("A")])
        result = run_policy_day(
            board.cards, board.workers, 0, board.wip_limits, constant_random(0.0), "siloted-expert"
        )
        assert result.cards[0].stage is Stage.RED_FINISHED
