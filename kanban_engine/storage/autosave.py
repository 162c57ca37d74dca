"""Debounced background autosave."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from ..domain.board import Board
from .state_repository import StateRepository

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 1.0


class AutosaveScheduler:
    """Coalesces bursts of changes into one autosave write.

    Each ``schedule`` call replaces the pending board and restarts the
    timer, so only the latest board of a burst is written, ``debounce_seconds``
    after the last change.
    """

    def __init__(
        self,
        repository: StateRepository,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ):
        self.repository = repository
        self.debounce_seconds = debounce_seconds
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        # held across the store write so only one snapshot is written at a time
        self._write_lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._pending: Optional[Board] = None
        self._generation = 0
        self._written_generation = 0

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def schedule(self, board: Board) -> None:
        with self._lock:
            self._pending = board
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
            self._timer = self._timer_factory(self.debounce_seconds, self._on_timer)
            self._timer.daemon = True
            self._timer.start()

    def flush(self) -> bool:
        """Write the pending board now.

        Returns False if nothing was pending, or if a newer snapshot was
        already written by a concurrent flush.
        """
        with self._lock:
            board, self._pending = self._pending, None
            generation = self._generation
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        if board is None:
            return False

        with self._write_lock:
            if generation <= self._written_generation:
                logger.debug("Skipping stale autosave snapshot %d", generation)
                return False
            self.repository.save_autosave(board)
            self._written_generation = generation
        return True

    def cancel(self) -> None:
        with self._lock:
            self._pending = None
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _on_timer(self) -> None:
        try:
            self.flush()
        except Exception:
            logger.exception("Autosave failed")
