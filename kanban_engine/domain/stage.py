"""Pipeline stages, their WIP column keys, and the legal forward edges.

Stage order:
    options -> red-active -> red-finished -> blue-active -> blue-finished
    -> green -> done
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple

from .work_items import WorkerType


class Stage(str, Enum):
    OPTIONS = "options"
    RED_ACTIVE = "red-active"
    RED_FINISHED = "red-finished"
    BLUE_ACTIVE = "blue-active"
    BLUE_FINISHED = "blue-finished"
    GREEN = "green"
    DONE = "done"


ALL_STAGES: Tuple[Stage, ...] = tuple(Stage)

# WIP columns are keyed in camelCase, matching the persisted board format
COLUMN_KEYS: Tuple[str, ...] = (
    "options",
    "redActive",
    "redFinished",
    "blueActive",
    "blueFinished",
    "green",
    "done",
)

STAGE_COLUMN_KEYS: Dict[Stage, str] = dict(zip(ALL_STAGES, COLUMN_KEYS))

COLUMN_TITLES: Dict[Stage, str] = {
    Stage.OPTIONS: "Options",
    Stage.RED_ACTIVE: "Red Active",
    Stage.RED_FINISHED: "Red Finished",
    Stage.BLUE_ACTIVE: "Blue Active",
    Stage.BLUE_FINISHED: "Blue Finished",
    Stage.GREEN: "Green Activities",
    Stage.DONE: "Done",
}

ACTIVE_STAGES = frozenset({Stage.RED_ACTIVE, Stage.BLUE_ACTIVE, Stage.GREEN})

STAGE_COLORS: Dict[Stage, WorkerType] = {
    Stage.RED_ACTIVE: WorkerType.RED,
    Stage.RED_FINISHED: WorkerType.RED,
    Stage.BLUE_ACTIVE: WorkerType.BLUE,
    Stage.BLUE_FINISHED: WorkerType.BLUE,
    Stage.GREEN: WorkerType.GREEN,
}

# Edges a user may trigger by clicking a card
CLICK_EDGES: Dict[Stage, Stage] = {
    Stage.OPTIONS: Stage.RED_ACTIVE,
    Stage.RED_FINISHED: Stage.BLUE_ACTIVE,
    Stage.BLUE_FINISHED: Stage.GREEN,
}

# Edges taken automatically at the end of a day once a card is stage-done
DAY_EDGES: Dict[Stage, Stage] = {
    Stage.RED_ACTIVE: Stage.RED_FINISHED,
    Stage.RED_FINISHED: Stage.BLUE_ACTIVE,
    Stage.BLUE_ACTIVE: Stage.BLUE_FINISHED,
    Stage.BLUE_FINISHED: Stage.GREEN,
    Stage.GREEN: Stage.DONE,
}


def parse_stage(value: object) -> Optional[Stage]:
    try:
        return Stage(value)
    except ValueError:
        return None


def column_key(stage: Stage) -> str:
    return STAGE_COLUMN_KEYS[Stage(stage)]


def stage_color(stage: Stage) -> Optional[WorkerType]:
    """Color worked in a stage; None for options and done."""
    return STAGE_COLORS.get(Stage(stage))


def is_active_stage(stage: Stage) -> bool:
    return Stage(stage) in ACTIVE_STAGES


def active_stage_for(color: WorkerType) -> Stage:
    return {
        WorkerType.RED: Stage.RED_ACTIVE,
        WorkerType.BLUE: Stage.BLUE_ACTIVE,
        WorkerType.GREEN: Stage.GREEN,
    }[WorkerType(color)]
