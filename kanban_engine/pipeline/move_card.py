"""Click-to-advance: the only three stage edges a user may trigger."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from ..domain.card import Card
from ..domain.stage import CLICK_EDGES, Stage
from ..domain.wip import WipLimits
from .transitions import StageCounts, check_wip

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveResult:
    cards: Tuple[Card, ...]
    alert_message: Optional[str] = None


def move_card(
    card_id: str,
    cards: Iterable[Card],
    current_day: int,
    wip_limits: WipLimits,
) -> MoveResult:
    """Advance a clicked card along its click edge if WIP limits allow.

    Unknown ids and cards in non-clickable stages return the cards unchanged
    with no message. A WIP rejection returns the cards unchanged together
    with an advisory message. ``options -> red-active`` also resets the
    card's start day to ``current_day``.
    """
    cards = tuple(cards)
    clicked = next((card for card in cards if card.id == card_id), None)
    if clicked is None or clicked.stage not in CLICK_EDGES:
        return MoveResult(cards=cards)

    target = CLICK_EDGES[clicked.stage]
    rejection = check_wip(wip_limits, clicked.stage, target, StageCounts(cards))
    if rejection is not None:
        logger.info("WIP rejection for card %s: %s", card_id, rejection.message)
        return MoveResult(cards=cards, alert_message=rejection.message)

    moved = clicked.with_stage(target)
    if clicked.stage is Stage.OPTIONS:
        moved = moved.with_start_day(current_day)

    return MoveResult(cards=tuple(moved if card.id == card_id else card for card in cards))
