"""Construction of new cards entering the pipeline in ``options``."""

from __future__ import annotations

import math
import random as _random
from typing import Iterable, Optional

from .card import Card
from .card_id import CardId, card_id_sort_key, next_card_id
from .stage import Stage
from .work_items import WorkItems, WorkProgress
from .worker import RandomFn

ACTIONS = (
    "Create",
    "Implement",
    "Design",
    "Develop",
    "Test",
    "Refactor",
    "Optimize",
    "Fix",
    "Update",
    "Add",
)

SUBJECTS = (
    "user interface",
    "authentication",
    "database",
    "API",
    "dashboard",
    "reporting",
    "search functionality",
    "payment system",
    "notification system",
    "user profile",
    "settings page",
    "analytics",
    "integration",
    "documentation",
    "error handling",
    "performance",
    "security",
    "accessibility",
    "mobile view",
)

WORK_ITEMS_MIN = 1
WORK_ITEMS_MAX = 8


def _random_int(low: int, high: int, random: RandomFn) -> int:
    return math.floor(random() * (high - low + 1)) + low


def _pick(options: tuple, random: RandomFn) -> str:
    return options[math.floor(random() * len(options))]


def generate_content(random: RandomFn) -> str:
    action = _pick(ACTIONS, random)
    subject = _pick(SUBJECTS, random)
    return f"{action} {subject}"


def generate_work_items(random: RandomFn) -> WorkItems:
    # red, blue, green are drawn in that order
    red, blue, green = (
        WorkProgress(total=_random_int(WORK_ITEMS_MIN, WORK_ITEMS_MAX, random))
        for _ in range(3)
    )
    return WorkItems(red=red, blue=blue, green=green)


class CardFactory:
    """Builds fresh cards and allocates the next sequential id."""

    @staticmethod
    def create(
        card_id: CardId,
        current_day: int,
        random: Optional[RandomFn] = None,
    ) -> Card:
        """New card in options, age 0, no workers, random content and work.

        ``random`` is drawn twice for the content (action, subject) and then
        once per color for the work totals.
        """
        rng = random or _random.random
        content = generate_content(rng)
        work_items = generate_work_items(rng)
        return Card(
            id=card_id,
            content=content,
            stage=Stage.OPTIONS,
            work_items=work_items,
            start_day=current_day,
        )

    @staticmethod
    def next_id(cards: Iterable[Card]) -> CardId:
        ids = [card.id for card in cards]
        if not ids:
            return CardId("A")
        return next_card_id(max(ids, key=card_id_sort_key))
