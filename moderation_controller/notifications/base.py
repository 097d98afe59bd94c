from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Deque, Literal, Protocol, runtime_checkable

import structlog

logger = structlog.get_logger(__name__)

NotificationLevel = Literal["success", "failure"]


@runtime_checkable
class Notifier(Protocol):
    """Fire-and-forget user feedback channel."""

    def notify_success(self, message: str) -> None:
        ...

    def notify_failure(self, message: str) -> None:
        ...


@dataclass(slots=True)
class Notification:
    level: NotificationLevel
    message: str
    created_at: datetime


class LoggingNotifier:
    def notify_success(self, message: str) -> None:
        logger.info("notify_success", message=message)

    def notify_failure(self, message: str) -> None:
        logger.warning("notify_failure", message=message)


class CollectingNotifier:
    """Buffer notifications for a UI to drain and show as toasts.

    Oldest entries are dropped once ``buffer_size`` is reached.
    """

    def __init__(self, buffer_size: int = 20) -> None:
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self._pending: Deque[Notification] = deque(maxlen=buffer_size)

    def notify_success(self, message: str) -> None:
        self._push("success", message)

    def notify_failure(self, message: str) -> None:
        self._push("failure", message)

    def _push(self, level: NotificationLevel, message: str) -> None:
        self._pending.append(
            Notification(level=level, message=message, created_at=datetime.now(timezone.utc))
        )
        logger.debug("notification_buffered", kind=level, pending=len(self._pending))

    @property
    def buffer_size(self) -> int:
        return self._pending.maxlen or 0

    @property
    def pending(self) -> list[Notification]:
        return list(self._pending)

    def drain(self) -> list[Notification]:
        drained = list(self._pending)
        self._pending.clear()
        return drained


__all__ = ["CollectingNotifier", "LoggingNotifier", "Notification", "NotificationLevel", "Notifier"]
