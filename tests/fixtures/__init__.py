"""
Shared Test Fixtures for the Kanban simulator

- builders.py: card, worker and board builders and deterministic random sources
- storage.py: in-memory store, repository, notification and session fixtures
"""

from .builders import (
    MAX_DRAW,
    SequenceRandom,
    constant_random,
    make_board,
    make_card,
    make_worker,
    progress,
)
from .storage import (
    FakeTimer,
    RecordingHub,
    fake_timer,
    memory_store,
    notifications,
    repository,
    session,
)

__all__ = [
    # Builders
    "MAX_DRAW",
    "SequenceRandom",
    "constant_random",
    "make_board",
    "make_card",
    "make_worker",
    "progress",
    # Storage fixtures
    "FakeTimer",
    "RecordingHub",
    "fake_timer",
    "memory_store",
    "notifications",
    "repository",
    "session",
]
