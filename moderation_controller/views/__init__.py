from __future__ import annotations

from ..services.controller import ModerationController
from .actions import ActionsView, project_actions
from .report_detail import ReportDetailView, project_report_detail
from .reports import ReportListView, project_reports
from .statistics import EMPTY_STATISTICS, StatisticsView, project_statistics


class ModerationViews:
    """Consumer-facing projections over one shared controller.

    Each accessor re-projects current state, so views are cheap snapshots.
    """

    def __init__(self, controller: ModerationController) -> None:
        self._controller = controller

    def reports(self) -> ReportListView:
        return project_reports(self._controller)

    def report_detail(self) -> ReportDetailView:
        return project_report_detail(self._controller)

    def statistics(self) -> StatisticsView:
        return project_statistics(self._controller)

    def actions(self) -> ActionsView:
        return project_actions(self._controller)


__all__ = [
    "ActionsView",
    "EMPTY_STATISTICS",
    "ModerationViews",
    "ReportDetailView",
    "ReportListView",
    "StatisticsView",
    "project_actions",
    "project_report_detail",
    "project_reports",
    "project_statistics",
]
