import copy

import pytest
from pydantic import ValidationError

from kanban_engine.domain import Stage
from kanban_engine.storage import board_from_dict, serialize_board
from tests.fixtures import make_board, make_card, make_worker


@pytest.fixture
def board():
    return make_board(
        [
            make_card("A", stage=Stage.DONE, red=(3, 3), blue=(2, 2), green=(1, 1),
                      age=4, start_day=1, completion_day=5),
            make_card("B", stage=Stage.BLUE_ACTIVE, red=(2, 2), blue=(6, 1),
                      is_blocked=True, workers=[("B1", "blue")]),
        ],
        workers=[make_worker("R1", "red"), make_worker("B1", "blue")],
        current_day=5,
        wip={"blueActive": {"min": 1, "max": 2}},
    )


@pytest.fixture
def data(board):
    return serialize_board(board)


class TestSerializeBoard:
    def test_camel_case_layout(self, data):
        assert set(data) == {"currentDay", "cards", "workers", "wipLimits"}
        card = data["cards"][1]
        assert card["stage"] == "blue-active"
        assert card["isBlocked"] is True
        assert card["completionDay"] is None
        assert card["workItems"]["blue"] == {"total": 6, "completed": 1}
        assert card["assignedWorkers"] == [{"id": "B1", "type": "blue"}]
        assert data["workers"] == [{"id": "R1", "type": "red"}, {"id": "B1", "type": "blue"}]

    def test_every_wip_column_is_written(self, data):
        assert list(data["wipLimits"]) == [
            "options", "redActive", "redFinished", "blueActive", "blueFinished", "green", "done",
        ]
        assert data["wipLimits"]["blueActive"] == {"min": 1, "max": 2}

    def test_board_from_dict_rebuilds_equal_board(self, board, data):
        assert board_from_dict(data) == board


class TestSchemaRejections:
    def _broken(self, data, mutate):
        broken = copy.deepcopy(data)
        mutate(broken)
        return broken

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda d: d.pop("currentDay"),
            lambda d: d.update(currentDay=-1),
            lambda d: d.update(currentDay="5"),
            lambda d: d["cards"][0].update(stage="review"),
            lambda d: d["cards"][0].update(id="a1"),
            lambda d: d["cards"][0].update(age=-2),
            lambda d: d["cards"][0].update(isBlocked="no"),
            lambda d: d["cards"][0]["workItems"]["red"].update(completed=4),
            lambda d: d["cards"][1].update(assignedWorkers=[{"id": str(i), "type": "red"} for i in range(4)]),
            lambda d: d["workers"][0].update(type="purple"),
            lambda d: d["workers"][0].update(id="   "),
            lambda d: d["wipLimits"].pop("done"),
            lambda d: d["wipLimits"]["green"].update(min=3, max=1),
        ],
        ids=[
            "missing-day", "negative-day", "string-day", "unknown-stage", "bad-card-id",
            "negative-age", "non-bool-blocked", "overcompleted", "too-many-workers",
            "unknown-worker-type", "blank-worker-id", "missing-wip-column", "min-above-max",
        ],
    )
    def test_invalid_documents_raise(self, data, mutate):
        with pytest.raises(ValidationError):
            board_from_dict(self._broken(data, mutate))

    def test_non_object_root(self):
        with pytest.raises(ValidationError):
            board_from_dict([1, 2, 3])
