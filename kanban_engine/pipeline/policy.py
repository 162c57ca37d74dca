#!/usr/bin/env python3
"""
Autonomous Policy Module

A policy day is the scripted sequence an expert team would follow before
letting the day run:

1. Pull options into red-active, lowest card id first, until WIP stops it
2. Push red-finished -> blue-active, then blue-finished -> green, oldest
   card first, moving only cards that are stage-done
3. Reassign every worker to active cards of its own color (siloted experts),
   oldest card first, one per card and then round-robin up to three
4. Finish the day exactly like a manual tick (``advance_day``)

Every move in steps 1 and 2 is WIP-gated with live counts, checking max on
the target column before min on the source column.
"""

from __future__ import annotations

import logging
import random as _random
from collections import deque
from enum import Enum
from typing import Iterable, List, Optional

from ..domain.card import MAX_ASSIGNED_WORKERS, Card
from ..domain.card_id import card_id_sort_key
from ..domain.stage import Stage, active_stage_for
from ..domain.wip import WipLimits
from ..domain.work_items import ALL_WORKER_TYPES
from ..domain.worker import AssignedWorker, RandomFn, Worker
from .day_executor import DayResult, advance_day
from .transitions import StageCounts, check_wip, is_stage_done

logger = logging.getLogger(__name__)


class PolicyType(str, Enum):
    SILOTED_EXPERT = "siloted-expert"


def _oldest_first(cards: List[Card], stage: Stage) -> List[int]:
    indexes = [i for i, card in enumerate(cards) if card.stage is stage]
    return sorted(indexes, key=lambda i: -cards[i].age)


def move_options_to_red_active(
    cards: List[Card], current_day: int, wip_limits: WipLimits
) -> List[Card]:
    cards = list(cards)
    counts = StageCounts(cards)
    indexes = sorted(
        (i for i, card in enumerate(cards) if card.stage is Stage.OPTIONS),
        key=lambda i: card_id_sort_key(cards[i].id),
    )

    for i in indexes:
        if check_wip(wip_limits, Stage.OPTIONS, Stage.RED_ACTIVE, counts) is not None:
            break
        cards[i] = cards[i].with_stage(Stage.RED_ACTIVE).with_start_day(current_day)
        counts.move(Stage.OPTIONS, Stage.RED_ACTIVE)

    return cards


def move_finished_to_next_activity(cards: List[Card], wip_limits: WipLimits) -> List[Card]:
    cards = list(cards)
    for source, target in (
        (Stage.RED_FINISHED, Stage.BLUE_ACTIVE),
        (Stage.BLUE_FINISHED, Stage.GREEN),
    ):
        counts = StageCounts(cards)
        for i in _oldest_first(cards, source):
            if check_wip(wip_limits, source, target, counts) is not None:
                break
            if not is_stage_done(cards[i]):
                continue
            cards[i] = cards[i].with_stage(target)
            counts.move(source, target)
    return cards


def _distribute(cards: List[Card], targets: List[int], workers: List[Worker]) -> None:
    queue = deque(workers)

    for i in targets:
        if not queue:
            return
        cards[i] = cards[i].add_worker(AssignedWorker.from_worker(queue.popleft()))

    while queue:
        open_targets = [i for i in targets if len(cards[i].assigned_workers) < MAX_ASSIGNED_WORKERS]
        if not open_targets:
            break
        for i in open_targets:
            if not queue:
                break
            cards[i] = cards[i].add_worker(AssignedWorker.from_worker(queue.popleft()))


def assign_workers_by_color(cards: List[Card], workers: Iterable[Worker]) -> List[Card]:
    """Reset all assignments, then place each worker on a card of its own color."""
    cards = [card.clear_workers() for card in cards]
    workers = list(workers)

    for color in ALL_WORKER_TYPES:
        pool = [worker for worker in workers if worker.type is color]
        targets = [
            i for i in _oldest_first(cards, active_stage_for(color))
            if len(cards[i].assigned_workers) < MAX_ASSIGNED_WORKERS
        ]
        if pool and targets:
            _distribute(cards, targets, pool)

    return cards


def run_policy_day(
    cards: Iterable[Card],
    workers: Iterable[Worker],
    current_day: int,
    wip_limits: WipLimits,
    random: Optional[RandomFn] = None,
    policy_type: PolicyType = PolicyType.SILOTED_EXPERT,
) -> DayResult:
    """Run one autonomous policy day and return the new cards and day."""
    policy_type = PolicyType(policy_type)

    staged = move_options_to_red_active(list(cards), current_day, wip_limits)
    staged = move_finished_to_next_activity(staged, wip_limits)
    staged = assign_workers_by_color(staged, workers)

    result = advance_day(staged, current_day, wip_limits, random or _random.random)
    logger.debug("Policy %s finished day %d", policy_type.value, result.new_day)
    return result
