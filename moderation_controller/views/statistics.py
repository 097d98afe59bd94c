from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from ..services.controller import ModerationController

EMPTY_STATISTICS = {"total": 0, "pending": 0, "resolved": 0, "autoFlagged": 0}


@dataclass(slots=True, frozen=True)
class StatisticsView:
    statistics: dict[str, Any]
    refresh_stats: Callable[[], Awaitable[None]]

    def as_contract(self) -> dict[str, Any]:
        return {"statistics": self.statistics, "refreshStats": self.refresh_stats}


def project_statistics(controller: ModerationController) -> StatisticsView:
    async def refresh_stats() -> None:
        # No range: the service falls back to its default window.
        await controller.fetch_statistics()

    snapshot = controller.statistics
    return StatisticsView(
        statistics=snapshot.as_dict() if snapshot is not None else dict(EMPTY_STATISTICS),
        refresh_stats=refresh_stats,
    )


__all__ = ["EMPTY_STATISTICS", "StatisticsView", "project_statistics"]
