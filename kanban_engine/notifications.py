#!/usr/bin/env python3
"""
Notifications Module

Advisory event channel between the session and whatever presents it (the
CLI, a UI, a test). The session publishes WIP rejections, day confirmations,
card completions and policy lifecycle events here; subscribers decide how
to show them.

Subscriber failures are isolated: a callback that raises is logged and the
remaining subscribers still run, so a broken presenter can never interrupt
a simulation command.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class NotificationLevel(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


# Seconds a presenter should keep the message visible
DEFAULT_DURATIONS = {
    NotificationLevel.INFO: 3.0,
    NotificationLevel.SUCCESS: 3.0,
    NotificationLevel.WARNING: 5.0,
    NotificationLevel.ERROR: 5.0,
}


@dataclass(frozen=True)
class Notification:
    level: NotificationLevel
    message: str
    duration: float


Subscriber = Callable[[Notification], None]


class NotificationHub:
    """Fan-out of notifications to subscribers in subscription order.

    Example:
        >>> hub = NotificationHub()
        >>> unsubscribe = hub.subscribe(lambda n: print(n.message))
        >>> hub.info("Day 1")
        Day 1
        >>> unsubscribe()
    """

    def __init__(self):
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` and return a function that removes it again."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def publish(
        self,
        level: NotificationLevel,
        message: str,
        duration: Optional[float] = None,
    ) -> Notification:
        level = NotificationLevel(level)
        notification = Notification(
            level=level,
            message=message,
            duration=DEFAULT_DURATIONS[level] if duration is None else duration,
        )
        for callback in list(self._subscribers):
            try:
                callback(notification)
            except Exception:
                # Error isolation: one failing subscriber must not block the rest
                logger.exception("Notification subscriber %r failed", callback)
        return notification

    def info(self, message: str, duration: Optional[float] = None) -> Notification:
        return self.publish(NotificationLevel.INFO, message, duration)

    def success(self, message: str, duration: Optional[float] = None) -> Notification:
        return self.publish(NotificationLevel.SUCCESS, message, duration)

    def warning(self, message: str, duration: Optional[float] = None) -> Notification:
        return self.publish(NotificationLevel.WARNING, message, duration)

    def error(self, message: str, duration: Optional[float] = None) -> Notification:
        return self.publish(NotificationLevel.ERROR, message, duration)
