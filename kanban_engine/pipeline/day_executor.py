#!/usr/bin/env python3
"""
Day Executor Module

Runs a single simulated day over a set of cards. The day is applied in a
fixed order so results are reproducible under an injected random source:

1. Increment the day
2. Age every card outside ``options`` and ``done``
3. Apply worker output to cards in an active stage (red-active, blue-active, green)
4. Move every stage-done, unblocked card along its day edge, WIP-gated
5. Clear all worker assignments

Both the manual "next day" button and the autonomous policy finish their day
through ``advance_day``.
"""

from __future__ import annotations

import logging
import random as _random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from ..domain.card import Card
from ..domain.stage import DAY_EDGES, Stage, is_active_stage, stage_color
from ..domain.wip import WipLimits
from ..domain.worker import RandomFn, calculate_output
from .transitions import StageCounts, check_wip, is_stage_done

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayResult:
    cards: Tuple[Card, ...]
    new_day: int


def apply_worker_output(card: Card, random: RandomFn) -> Card:
    """Add each assigned worker's output to the color of the card's stage.

    Draws happen in assignment order, one per worker.
    """
    if not card.assigned_workers or not is_active_stage(card.stage):
        return card

    color = stage_color(card.stage)
    produced = sum(
        calculate_output(worker.type, color, random) for worker in card.assigned_workers
    )
    return card.with_work_items(card.work_items.apply_work(color, produced))


def transition_ready_cards(
    cards: Sequence[Card], new_day: int, wip_limits: WipLimits
) -> Tuple[Card, ...]:
    """Advance stage-done cards one edge, in card order, with live WIP counts."""
    counts = StageCounts(cards)
    result: List[Card] = []

    for card in cards:
        target = DAY_EDGES.get(card.stage)
        if target is None or not is_stage_done(card):
            result.append(card)
            continue

        if check_wip(wip_limits, card.stage, target, counts) is not None:
            result.append(card)
            continue

        moved = card.with_stage(target)
        if target is Stage.DONE:
            moved = moved.with_completion_day(max(new_day, card.completion_day or 0))
        counts.move(card.stage, target)
        result.append(moved)

    return tuple(result)


def advance_day(
    cards: Iterable[Card],
    current_day: int,
    wip_limits: WipLimits,
    random: Optional[RandomFn] = None,
) -> DayResult:
    """Run one manual tick and return the new cards and day."""
    rng = random or _random.random
    new_day = current_day + 1

    aged = [card.aged() for card in cards]
    worked = [apply_worker_output(card, rng) for card in aged]
    transitioned = transition_ready_cards(worked, new_day, wip_limits)
    final = tuple(card.clear_workers() for card in transitioned)

    logger.debug(
        "Advanced to day %d: %d cards, %d done",
        new_day,
        len(final),
        sum(1 for card in final if card.stage is Stage.DONE),
    )
    return DayResult(cards=final, new_day=new_day)
