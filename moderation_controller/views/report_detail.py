from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..services.controller import ModerationController
from .base import AsyncUnsupported


@dataclass(slots=True, frozen=True)
class ReportDetailView:
    report: None
    loading: bool
    error: Optional[str]
    refresh: AsyncUnsupported

    def as_contract(self) -> dict[str, Any]:
        return {
            "report": self.report,
            "loading": self.loading,
            "error": self.error,
            "refresh": self.refresh,
        }


def project_report_detail(controller: ModerationController) -> ReportDetailView:
    # The service exposes no detail endpoint, so there is never a report to show.
    return ReportDetailView(
        report=None,
        loading=controller.busy,
        error=controller.last_error,
        refresh=AsyncUnsupported("report_detail.refresh"),
    )


__all__ = ["ReportDetailView", "project_report_detail"]
