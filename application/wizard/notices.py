"""
Per-controller notice channel.

Controllers report validation problems, rejected actions and save outcomes
as notices. Whoever drives a controller (the HTTP layer, a test) subscribes
to its channel or reads the retained history; nothing is global.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Deque, List

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_SIZE = 50


class NoticeLevel(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    level: NoticeLevel
    title: str
    message: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


Subscriber = Callable[[Notice], None]


class NoticeChannel:
    """
    Publish/subscribe channel with a bounded history.

    Usage:
        >>> channel = NoticeChannel()
        >>> unsubscribe = channel.subscribe(print)
        >>> channel.warning("Step incomplete", "Workout name is required.")
        >>> channel.history[-1].level
        <NoticeLevel.WARNING: 'warning'>
    """

    def __init__(self, history_size: int = DEFAULT_HISTORY_SIZE) -> None:
        self._subscribers: List[Subscriber] = []
        self._history: Deque[Notice] = deque(maxlen=history_size)

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register a subscriber; returns a callable that unregisters it."""
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def publish(self, notice: Notice) -> Notice:
        self._history.append(notice)
        for subscriber in list(self._subscribers):
            try:
                subscriber(notice)
            except Exception as e:
                logger.warning(f"Notice subscriber failed: {e}")
        return notice

    def info(self, title: str, message: str = "") -> Notice:
        return self.publish(Notice(NoticeLevel.INFO, title, message))

    def success(self, title: str, message: str = "") -> Notice:
        return self.publish(Notice(NoticeLevel.SUCCESS, title, message))

    def warning(self, title: str, message: str = "") -> Notice:
        return self.publish(Notice(NoticeLevel.WARNING, title, message))

    def error(self, title: str, message: str = "") -> Notice:
        return self.publish(Notice(NoticeLevel.ERROR, title, message))

    @property
    def history(self) -> List[Notice]:
        return list(self._history)

    def drain(self) -> List[Notice]:
        """Return and forget every retained notice."""
        notices = list(self._history)
        self._history.clear()
        return notices
