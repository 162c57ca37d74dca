"""Storage and session fixtures backed by in-memory stores."""

from __future__ import annotations

import pytest

from kanban_engine.notifications import NotificationHub
from kanban_engine.session import KanbanSession
from kanban_engine.storage import MemoryKeyValueStore, StateRepository

from .builders import constant_random


class RecordingHub(NotificationHub):
    """NotificationHub that also keeps every published notification."""

    def __init__(self):
        super().__init__()
        self.published = []
        self.subscribe(self.published.append)

    @property
    def messages(self):
        return [n.message for n in self.published]


@pytest.fixture
def memory_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def repository(memory_store) -> StateRepository:
    return StateRepository(memory_store)


@pytest.fixture
def notifications() -> RecordingHub:
    return RecordingHub()


@pytest.fixture
def session(repository, notifications) -> KanbanSession:
    """Memory-backed session with a mid-range constant RNG and no autosave."""
    return KanbanSession(
        repository=repository,
        random=constant_random(0.5),
        notifications=notifications,
    )


class FakeTimer:
    """Stand-in for threading.Timer that only fires when told to."""

    created = []

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.started = False
        self.cancelled = False
        self.daemon = False
        FakeTimer.created.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled:
            self.function()


@pytest.fixture
def fake_timer():
    FakeTimer.created = []
    yield FakeTimer
    FakeTimer.created = []
