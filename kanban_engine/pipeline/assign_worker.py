"""Manual worker assignment (last writer wins)."""

from __future__ import annotations

from typing import Iterable, Tuple

from ..domain.card import MAX_ASSIGNED_WORKERS, Card
from ..domain.worker import AssignedWorker, Worker


def assign_worker(
    card_id: str,
    worker_id: str,
    cards: Iterable[Card],
    workers: Iterable[Worker],
) -> Tuple[Card, ...]:
    """Move a worker onto ``card_id``, taking it off whichever card held it.

    Unknown worker or card: cards come back unchanged. A card that already
    has three workers does not take the worker, which is then left
    unassigned rather than swapped in.
    """
    cards = tuple(cards)
    worker = next((w for w in workers if w.id == worker_id), None)
    if worker is None or not any(card.id == card_id for card in cards):
        return cards

    updated = []
    for card in cards:
        if card.has_worker(worker_id):
            updated.append(card if card.id == card_id else card.remove_worker(worker_id))
        elif card.id == card_id and len(card.assigned_workers) < MAX_ASSIGNED_WORKERS:
            updated.append(card.add_worker(AssignedWorker.from_worker(worker)))
        else:
            updated.append(card)
    return tuple(updated)
