from __future__ import annotations

import itertools
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Deque, Iterable, Mapping, Optional
from uuid import uuid4

import structlog

from ..models import Appeal, ControllerState, FilterRule, QueueItem, StatisticsSnapshot

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class OperationStatus:
    operation_id: str
    name: str
    started_seq: int
    started_at: datetime
    finished_seq: Optional[int] = None
    finished_at: Optional[datetime] = None
    error: Optional[str] = None

    @property
    def in_flight(self) -> bool:
        return self.finished_seq is None

    @property
    def succeeded(self) -> bool:
        return not self.in_flight and self.error is None


class StateStore:
    """In-memory moderation collections with whole-snapshot replacement only.

    Busy/error signals are tracked per operation. ``busy`` and ``last_error``
    are derived from those records rather than stored as shared flags.
    """

    def __init__(self, *, history_size: int = 50) -> None:
        if history_size <= 0:
            raise ValueError("history_size must be positive")
        self._queue: tuple[QueueItem, ...] = ()
        self._appeals: tuple[Appeal, ...] = ()
        self._filters: dict[str, FilterRule] = {}
        self._statistics: Optional[StatisticsSnapshot] = None

        self._seq = itertools.count(1)
        self._in_flight: dict[str, OperationStatus] = {}
        self._history: Deque[OperationStatus] = deque(maxlen=history_size)
        self._last_started_seq = 0
        self._latest_settled: Optional[OperationStatus] = None

    @property
    def queue(self) -> tuple[QueueItem, ...]:
        return self._queue

    @property
    def appeals(self) -> tuple[Appeal, ...]:
        return self._appeals

    @property
    def filters(self) -> dict[str, FilterRule]:
        return dict(self._filters)

    @property
    def statistics(self) -> Optional[StatisticsSnapshot]:
        return self._statistics

    def replace_queue(self, items: Iterable[QueueItem]) -> None:
        self._queue = tuple(items)
        logger.debug("store_queue_replaced", size=len(self._queue))

    def replace_appeals(self, appeals: Iterable[Appeal]) -> None:
        self._appeals = tuple(appeals)
        logger.debug("store_appeals_replaced", size=len(self._appeals))

    def replace_filters(self, filters: Mapping[str, FilterRule]) -> None:
        self._filters = dict(filters)
        logger.debug("store_filters_replaced", size=len(self._filters))

    def replace_statistics(self, statistics: Optional[StatisticsSnapshot]) -> None:
        self._statistics = statistics
        logger.debug("store_statistics_replaced", present=statistics is not None)

    def begin(self, name: str) -> OperationStatus:
        status = OperationStatus(
            operation_id=str(uuid4()),
            name=name,
            started_seq=next(self._seq),
            started_at=datetime.now(timezone.utc),
        )
        self._in_flight[status.operation_id] = status
        self._last_started_seq = status.started_seq
        return status

    def succeed(self, status: OperationStatus) -> None:
        self._settle(status, None)

    def fail(self, status: OperationStatus, message: str) -> None:
        self._settle(status, message)

    def _settle(self, status: OperationStatus, error: Optional[str]) -> None:
        if not status.in_flight:
            raise RuntimeError(f"Operation {status.operation_id} already settled.")
        status.error = error
        status.finished_seq = next(self._seq)
        status.finished_at = datetime.now(timezone.utc)
        self._in_flight.pop(status.operation_id, None)
        self._history.append(status)
        latest = self._latest_settled
        if latest is None or status.started_seq > latest.started_seq:
            self._latest_settled = status

    @property
    def busy(self) -> bool:
        return bool(self._in_flight)

    @property
    def last_error(self) -> Optional[str]:
        # Outcome of the most recently started call that has settled. An outer
        # call settling after a nested one does not hide the nested failure.
        settled = self._latest_settled
        if settled is None or settled.finished_seq is None:
            return None
        # A newer call started since this one settled; its error no longer applies.
        if settled.finished_seq < self._last_started_seq:
            return None
        return settled.error

    def in_flight(self) -> list[OperationStatus]:
        return sorted(self._in_flight.values(), key=lambda status: status.started_seq)

    def history(self) -> list[OperationStatus]:
        return list(self._history)

    def status(self, operation_id: str) -> Optional[OperationStatus]:
        if operation_id in self._in_flight:
            return self._in_flight[operation_id]
        for status in reversed(self._history):
            if status.operation_id == operation_id:
                return status
        return None

    def latest(self, name: str) -> Optional[OperationStatus]:
        candidates = [status for status in self._in_flight.values() if status.name == name]
        candidates.extend(status for status in self._history if status.name == name)
        if not candidates:
            return None
        return max(candidates, key=lambda status: status.started_seq)

    def snapshot(self) -> ControllerState:
        return ControllerState(
            queue=self._queue,
            appeals=self._appeals,
            filters=dict(self._filters),
            statistics=self._statistics,
            busy=self.busy,
            last_error=self.last_error,
        )


__all__ = ["OperationStatus", "StateStore"]
