#!/usr/bin/env python3
"""
Policy Runner Module

Drives the autonomous policy one simulated day per scheduling tick as a
cooperative, cancellable loop. The cancellation token is checked before the
tick yields, after it resumes, and again before the computed day is
committed, so a cancel always lands between days and the board is never
left with a half-applied day.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Callable, Generic, Optional, TypeVar

from ..exceptions import ExecutionContext, PolicyRunError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CancellationToken:
    """Thread-safe, one-way cancellation flag."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


def validate_days(days: int) -> None:
    """Raise PolicyRunError unless ``days`` is a positive integer."""
    if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
        raise PolicyRunError(
            f"Invalid days parameter: {days}. Must be a positive integer.",
            context=ExecutionContext(metadata={"days": days}),
        )


class PolicyRunner(Generic[T]):
    """Runs ``step`` once per tick and hands each result to ``commit``.

    Args:
        step: Computes one day from the current committed state
        commit: Applies a computed day; only called for days that were not cancelled
        on_day: Optional progress callback receiving the 1-based day index
    """

    def __init__(
        self,
        step: Callable[[], T],
        commit: Callable[[T], None],
        on_day: Optional[Callable[[int], None]] = None,
    ):
        self._step = step
        self._commit = commit
        self._on_day = on_day

    async def run(self, days: int, token: CancellationToken) -> int:
        """Run up to ``days`` days; return how many were committed."""
        validate_days(days)
        committed = 0

        for day_index in range(1, days + 1):
            if token.cancelled:
                break

            await asyncio.sleep(0)

            if token.cancelled:
                break

            outcome = self._step()

            if token.cancelled:
                logger.info("Policy run cancelled before committing day %d of %d", day_index, days)
                break

            self._commit(outcome)
            committed += 1
            if self._on_day:
                self._on_day(day_index)

        return committed
