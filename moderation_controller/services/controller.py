from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Iterable, Mapping, Optional, Sequence, Union

import structlog

from ..adapters.base import ModerationGateway
from ..adapters.http import HttpModerationGateway
from ..config import ControllerSettings
from ..errors import ModerationAPIError
from ..logging.events import setup_logging
from ..models import (
    ActionRequest,
    Appeal,
    BulkActionRequest,
    BulkActionResult,
    ControllerState,
    DateLike,
    FilterRule,
    ModerationAction,
    QueueItem,
    StatisticsSnapshot,
)
from ..notifications.base import CollectingNotifier, LoggingNotifier, Notifier
from ..query import Options, build_query, build_range
from ..state.store import OperationStatus, StateStore
from .refresh import RefreshAfterWrite

logger = structlog.get_logger(__name__)

FailureMessage = Union[str, Callable[[Exception], str]]

BULK_REASON_DEFAULT = "bulk_action"


def unwrap(body: Any) -> Any:
    """Return the ``data`` envelope of a response body, or None."""
    if isinstance(body, Mapping):
        return body.get("data")
    return None


def count_successes(data: Any) -> int:
    if not isinstance(data, (list, tuple)):
        return 0
    return sum(1 for entry in data if isinstance(entry, Mapping) and entry.get("success"))


def _records(data: Any, key: str) -> list[Mapping[str, Any]]:
    collection = data.get(key) if isinstance(data, Mapping) else None
    if collection is None:
        return []
    if not isinstance(collection, (list, tuple)):
        logger.warning("response_shape_unexpected", field=key, type=type(collection).__name__)
        return []
    records = [entry for entry in collection if isinstance(entry, Mapping)]
    if len(records) != len(collection):
        logger.warning("response_entries_skipped", field=key, skipped=len(collection) - len(records))
    return records


def _missing(value: Any) -> bool:
    return value is None or value == ""


def _describe(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


def _appeal_failure(exc: Exception) -> str:
    if isinstance(exc, ModerationAPIError) and exc.message:
        return exc.message
    return "Failed to submit appeal"


class ModerationController:
    """Client-side moderation state controller.

    Every operation resolves remote failures locally: the error is recorded on
    the operation's status, the notifier is told, and the caller gets None.
    Successful mutations re-fetch the collection they touched before returning.
    """

    def __init__(
        self,
        gateway: ModerationGateway,
        notifier: Optional[Notifier] = None,
        *,
        store: Optional[StateStore] = None,
        settings: Optional[ControllerSettings] = None,
        refresher: Optional[RefreshAfterWrite] = None,
    ) -> None:
        self._settings = settings or ControllerSettings()
        self._gateway = gateway
        self._notifier = notifier or LoggingNotifier()
        self._store = store or StateStore(history_size=self._settings.state.history_size)
        self._refresher = refresher or RefreshAfterWrite.for_controller(self)

    @classmethod
    def from_settings(
        cls,
        settings: ControllerSettings,
        *,
        notifier: Optional[Notifier] = None,
    ) -> "ModerationController":
        log_level = getattr(logging, settings.logging.level.upper(), logging.INFO)
        setup_logging(level=log_level, use_json=settings.logging.use_json)
        gateway = HttpModerationGateway.from_settings(settings.api)
        if notifier is None:
            notifier = CollectingNotifier(buffer_size=settings.notifications.buffer_size)
        return cls(gateway, notifier, settings=settings)

    async def __aenter__(self) -> "ModerationController":
        return self

    async def __aexit__(self, *_) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._gateway.close()

    @property
    def store(self) -> StateStore:
        return self._store

    @property
    def notifier(self) -> Notifier:
        return self._notifier

    @property
    def state(self) -> ControllerState:
        return self._store.snapshot()

    @property
    def queue(self) -> tuple[QueueItem, ...]:
        return self._store.queue

    @property
    def appeals(self) -> tuple[Appeal, ...]:
        return self._store.appeals

    @property
    def filters(self) -> dict[str, FilterRule]:
        return self._store.filters

    @property
    def statistics(self) -> Optional[StatisticsSnapshot]:
        return self._store.statistics

    @property
    def busy(self) -> bool:
        return self._store.busy

    @property
    def last_error(self) -> Optional[str]:
        return self._store.last_error

    def last_status(self, name: str) -> Optional[OperationStatus]:
        return self._store.latest(name)

    def record_rejection(self, name: str, error: str, message: str) -> OperationStatus:
        """Record a call refused before reaching the service as a failed operation."""
        status = self._store.begin(name)
        self._store.fail(status, error)
        logger.warning("operation_rejected", operation=name, operation_id=status.operation_id, error=error)
        self._notifier.notify_failure(message)
        return status

    @asynccontextmanager
    async def _operation(self, name: str, failure: FailureMessage, **context: Any) -> AsyncIterator[OperationStatus]:
        status = self._store.begin(name)
        logger.debug("operation_started", operation=name, operation_id=status.operation_id, **context)
        try:
            yield status
        except Exception as exc:  # pylint: disable=broad-except
            message = failure(exc) if callable(failure) else failure
            self._store.fail(status, _describe(exc))
            logger.error(
                "operation_failed",
                operation=name,
                operation_id=status.operation_id,
                error=_describe(exc),
                error_type=exc.__class__.__name__,
            )
            self._notifier.notify_failure(message)
        except BaseException:
            self._store.fail(status, "cancelled")
            raise
        else:
            self._store.succeed(status)
            logger.debug("operation_succeeded", operation=name, operation_id=status.operation_id)

    async def fetch_queue(self, options: Optional[Options] = None) -> Any:
        query = build_query(options)
        async with self._operation("fetch_queue", "Failed to fetch moderation queue", query=query):
            body = await self._gateway.get_queue(query)
            items = [QueueItem.from_payload(record) for record in _records(unwrap(body), "items")]
            self._store.replace_queue(items)
            logger.info("queue_fetched", size=len(items))
            return body
        return None

    async def analyze_content(self, content: Any) -> Any:
        if content is None:
            raise ValueError("content is required")
        async with self._operation("analyze_content", "Content analysis failed"):
            body = await self._gateway.analyze(content)
            return unwrap(body)
        return None

    async def take_action(
        self,
        item_id: str,
        action: Union[ModerationAction, str],
        reason: Optional[str] = None,
        notes: str = "",
    ) -> Any:
        if _missing(item_id):
            raise ValueError("item_id is required")
        if _missing(action):
            raise ValueError("action is required")
        request = ActionRequest(item_id=item_id, action=action, reason=reason, notes=notes)
        payload = request.to_payload()
        async with self._operation("take_action", "Failed to take action", item_id=item_id, action=payload["action"]):
            body = await self._gateway.take_action(item_id, payload)
            self._notifier.notify_success(f'Action "{payload["action"]}" completed')
            await self._refresher.after("take_action")
            return body
        return None

    async def bulk_action(
        self,
        item_ids: Sequence[str],
        action: Union[ModerationAction, str],
        reason: Optional[str] = None,
    ) -> Any:
        if not item_ids:
            raise ValueError("item_ids must not be empty")
        request = BulkActionRequest(item_ids=list(item_ids), action=action, reason=reason)
        payload = request.to_payload()
        async with self._operation("bulk_action", "Bulk action failed", size=len(request.item_ids), action=payload["action"]):
            body = await self._gateway.bulk_action(payload)
            result = BulkActionResult(total=len(request.item_ids), success_count=count_successes(unwrap(body)))
            logger.info("bulk_action_completed", successes=result.success_count, total=result.total)
            self._notifier.notify_success(f"Bulk action completed: {result.summary()} items")
            await self._refresher.after("bulk_action")
            return body
        return None

    async def fetch_appeals(self, options: Optional[Options] = None) -> Any:
        query = build_query(options, passthrough=True)
        async with self._operation("fetch_appeals", "Failed to fetch appeals", query=query):
            body = await self._gateway.get_appeals(query)
            appeals = [Appeal.from_payload(record) for record in _records(unwrap(body), "appeals")]
            self._store.replace_appeals(appeals)
            logger.info("appeals_fetched", size=len(appeals))
            return body
        return None

    async def submit_appeal(
        self,
        action_id: str,
        reason: Optional[str] = None,
        evidence: Optional[Iterable[Any]] = None,
    ) -> Any:
        if _missing(action_id):
            raise ValueError("action_id is required")
        payload = {"actionId": action_id, "reason": reason, "evidence": list(evidence or [])}
        async with self._operation("submit_appeal", _appeal_failure, action_id=action_id):
            body = await self._gateway.submit_appeal(payload)
            self._notifier.notify_success("Appeal submitted successfully")
            return body
        return None

    async def fetch_filters(self, options: Optional[Options] = None) -> Any:
        query = build_query(options, passthrough=True)
        async with self._operation("fetch_filters", "Failed to fetch filters", query=query):
            body = await self._gateway.get_filters(query)
            data = unwrap(body)
            if data is not None and not isinstance(data, Mapping):
                logger.warning("response_shape_unexpected", field="filters", type=type(data).__name__)
            self._store.replace_filters(data if isinstance(data, Mapping) else {})
            return body
        return None

    async def create_filter(self, filter_data: Mapping[str, Any]) -> Any:
        if not filter_data:
            raise ValueError("filter_data is required")
        async with self._operation("create_filter", "Failed to create filter"):
            body = await self._gateway.create_filter(filter_data)
            self._notifier.notify_success("Filter created successfully")
            await self._refresher.after("create_filter")
            return body
        return None

    async def fetch_statistics(
        self,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> Any:
        date_range = build_range(start_date, end_date)
        async with self._operation("fetch_statistics", "Failed to fetch statistics", **date_range):
            body = await self._gateway.get_statistics(date_range)
            data = unwrap(body)
            if data is not None and not isinstance(data, Mapping):
                logger.warning("response_shape_unexpected", field="statistics", type=type(data).__name__)
            self._store.replace_statistics(
                StatisticsSnapshot.from_payload(data) if isinstance(data, Mapping) else None
            )
            return body
        return None


__all__ = [
    "BULK_REASON_DEFAULT",
    "ModerationController",
    "count_successes",
    "unwrap",
]
