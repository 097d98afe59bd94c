from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping

from ..models import QueueItem
from ..services.controller import ModerationController
from .base import AsyncUnsupported, Unsupported

# attribute -> (upstream key, default)
FILTER_FIELDS = {
    "status": ("status", "all"),
    "content_type": ("contentType", "all"),
    "reason": ("reason", "all"),
    "sort_by": ("sortBy", "recent"),
}


@dataclass(slots=True, frozen=True)
class ReportFilters:
    status: Any = "all"
    content_type: Any = "all"
    reason: Any = "all"
    sort_by: Any = "recent"

    @classmethod
    def from_upstream(cls, filters: Mapping[str, Any]) -> "ReportFilters":
        values = {}
        for attr, (key, default) in FILTER_FIELDS.items():
            value = filters.get(key)
            values[attr] = default if value is None else value
        return cls(**values)

    def as_contract(self) -> dict[str, Any]:
        return {key: getattr(self, attr) for attr, (key, _) in FILTER_FIELDS.items()}


@dataclass(slots=True, frozen=True)
class Pagination:
    # Pagination is not implemented; there is never a next page.
    has_more: bool = False

    def as_contract(self) -> dict[str, Any]:
        return {"hasMore": self.has_more}


@dataclass(slots=True, frozen=True)
class ReportListView:
    reports: tuple[QueueItem, ...]
    loading: bool
    filters: ReportFilters
    pagination: Pagination
    load_more: AsyncUnsupported
    refresh: Callable[[], Awaitable[None]]
    apply_filters: Unsupported
    clear_filters: Unsupported

    def as_contract(self) -> dict[str, Any]:
        return {
            "reports": list(self.reports),
            "loading": self.loading,
            "filters": self.filters.as_contract(),
            "pagination": self.pagination.as_contract(),
            "loadMore": self.load_more,
            "refresh": self.refresh,
            "applyFilters": self.apply_filters,
            "clearFilters": self.clear_filters,
        }


def project_reports(controller: ModerationController) -> ReportListView:
    async def refresh() -> None:
        await controller.fetch_queue()

    return ReportListView(
        reports=controller.queue,
        loading=controller.busy,
        filters=ReportFilters.from_upstream(controller.filters),
        pagination=Pagination(),
        load_more=AsyncUnsupported("reports.load_more"),
        refresh=refresh,
        apply_filters=Unsupported("reports.apply_filters"),
        clear_filters=Unsupported("reports.clear_filters"),
    )


__all__ = ["FILTER_FIELDS", "Pagination", "ReportFilters", "ReportListView", "project_reports"]
