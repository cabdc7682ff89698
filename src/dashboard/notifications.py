"""Transient, dismissible user notifications (the dashboard's toasts).

Controllers and view services push here instead of raising into the view
layer. The UI drains or renders ``notifications`` and calls ``dismiss``.
"""

import itertools
from dataclasses import dataclass
from enum import StrEnum

from dashboard.logging import get_logger

logger = get_logger(__name__)


class Level(StrEnum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    id: int
    level: Level
    message: str


class Notifier:
    """Ordered list of visible notifications, shared by all views of a dashboard."""

    def __init__(self, max_visible: int = 5) -> None:
        self.max_visible = max_visible
        self._ids = itertools.count(1)
        self._items: list[Notification] = []

    @property
    def notifications(self) -> tuple[Notification, ...]:
        return tuple(self._items)

    def push(self, level: Level, message: str) -> Notification:
        notification = Notification(id=next(self._ids), level=level, message=message)
        self._items.append(notification)
        # Oldest notifications fall off first
        del self._items[: -self.max_visible]
        logger.info("notification", level=level.value, message=message)
        return notification

    def success(self, message: str) -> Notification:
        return self.push(Level.SUCCESS, message)

    def info(self, message: str) -> Notification:
        return self.push(Level.INFO, message)

    def warning(self, message: str) -> Notification:
        return self.push(Level.WARNING, message)

    def error(self, message: str) -> Notification:
        return self.push(Level.ERROR, message)

    def dismiss(self, notification_id: int) -> None:
        self._items = [item for item in self._items if item.id != notification_id]

    def clear(self) -> None:
        self._items.clear()
