from __future__ import annotations

from typing import Any, Awaitable, Callable, Mapping

import structlog

logger = structlog.get_logger(__name__)

RefreshCallable = Callable[[], Awaitable[Any]]

# Mutating operation -> fetch that restores read-after-write consistency.
REFRESH_TARGETS: Mapping[str, str] = {
    "take_action": "fetch_queue",
    "bulk_action": "fetch_queue",
    "create_filter": "fetch_filters",
}


class RefreshAfterWrite:
    """Re-fetch the affected collection after a successful mutation.

    Refreshes always load the default view: no filters, first page. The
    mutation response is never patched into local state.
    """

    def __init__(self, targets: Mapping[str, RefreshCallable]) -> None:
        self._targets = dict(targets)

    @classmethod
    def for_controller(cls, controller: Any) -> "RefreshAfterWrite":
        return cls({operation: getattr(controller, target) for operation, target in REFRESH_TARGETS.items()})

    def covers(self, operation: str) -> bool:
        return operation in self._targets

    async def after(self, operation: str) -> None:
        target = self._targets.get(operation)
        if target is None:
            return
        logger.info(
            "refresh_after_write",
            operation=operation,
            target=REFRESH_TARGETS.get(operation, getattr(target, "__name__", "custom")),
        )
        await target()


__all__ = ["REFRESH_TARGETS", "RefreshAfterWrite", "RefreshCallable"]
