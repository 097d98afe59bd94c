from __future__ import annotations

import pytest

from moderation_controller.errors import ModerationServerError
from moderation_controller.views import EMPTY_STATISTICS, ModerationViews
from moderation_controller.views.base import is_supported
from tests.factories import FakeGateway, envelope, make_controller, make_item


@pytest.mark.asyncio
async def test_report_listing_defaults_missing_filter_fields() -> None:
    gateway = FakeGateway(get_filters=envelope({"status": "pending"}))
    controller, _, _ = make_controller(gateway)
    await controller.fetch_filters()

    view = ModerationViews(controller).reports()

    assert view.filters.status == "pending"
    assert view.filters.content_type == "all"
    assert view.filters.reason == "all"
    assert view.filters.sort_by == "recent"
    assert view.pagination.has_more is False


@pytest.mark.asyncio
async def test_report_listing_filter_methods_are_no_ops() -> None:
    gateway = FakeGateway(
        get_queue=envelope({"items": [make_item("a")]}),
        get_filters=envelope({"status": "pending"}),
    )
    controller, _, _ = make_controller(gateway)
    await controller.fetch_queue()
    await controller.fetch_filters()
    views = ModerationViews(controller)
    before = views.reports()

    assert before.apply_filters({"status": "resolved"}) is None
    assert before.clear_filters() is None
    assert await before.load_more() is None
    after = views.reports()

    assert after.reports == before.reports
    assert after.filters == before.filters
    assert after.pagination.has_more is False
    assert not is_supported(before.apply_filters)
    assert not is_supported(before.load_more)
    assert gateway.count("get_queue") == 1


@pytest.mark.asyncio
async def test_report_listing_refresh_fetches_queue() -> None:
    gateway = FakeGateway(get_queue=envelope({"items": [make_item("a"), make_item("b")]}))
    controller, _, _ = make_controller(gateway)
    view = ModerationViews(controller).reports()
    assert view.reports == ()
    assert is_supported(view.refresh)

    await view.refresh()

    assert gateway.args_for("get_queue") == [({},)]
    assert [item.item_id for item in ModerationViews(controller).reports().reports] == ["a", "b"]


def test_report_listing_contract_uses_consumer_field_names() -> None:
    controller, _, _ = make_controller()

    contract = ModerationViews(controller).reports().as_contract()

    assert set(contract) == {
        "reports",
        "loading",
        "filters",
        "pagination",
        "loadMore",
        "refresh",
        "applyFilters",
        "clearFilters",
    }
    assert contract["filters"] == {
        "status": "all",
        "contentType": "all",
        "reason": "all",
        "sortBy": "recent",
    }
    assert contract["pagination"] == {"hasMore": False}
    assert contract["reports"] == []
    assert contract["loading"] is False


def test_statistics_view_defaults_to_zeroed_shape() -> None:
    controller, _, _ = make_controller()

    view = ModerationViews(controller).statistics()

    assert view.statistics == {"total": 0, "pending": 0, "resolved": 0, "autoFlagged": 0}
    view.statistics["total"] = 99
    assert EMPTY_STATISTICS["total"] == 0


@pytest.mark.asyncio
async def test_statistics_view_refresh_uses_default_range() -> None:
    gateway = FakeGateway(get_statistics=envelope({"total": 7, "pending": 2, "resolved": 5, "auto_flagged": 1}))
    controller, _, _ = make_controller(gateway)
    views = ModerationViews(controller)

    await views.statistics().refresh_stats()

    assert gateway.args_for("get_statistics") == [({"startDate": None, "endDate": None},)]
    contract = views.statistics().as_contract()
    assert contract["statistics"] == {"total": 7, "pending": 2, "resolved": 5, "autoFlagged": 1}
    assert set(contract) == {"statistics", "refreshStats"}


@pytest.mark.asyncio
async def test_report_detail_never_has_a_report() -> None:
    controller, gateway, _ = make_controller()
    gateway.failures["get_queue"] = ModerationServerError(500, "down")
    await controller.fetch_queue()

    view = ModerationViews(controller).report_detail()

    assert view.report is None
    assert view.loading is False
    assert view.error == "API error: 500 down"
    assert await view.refresh() is None
    assert not is_supported(view.refresh)
    assert gateway.count("get_queue") == 1
    assert set(view.as_contract()) == {"report", "loading", "error", "refresh"}


@pytest.mark.asyncio
async def test_actions_view_uses_fixed_bulk_reason() -> None:
    gateway = FakeGateway(bulk_action=envelope([{"success": True}]))
    controller, _, notifier = make_controller(gateway)
    view = ModerationViews(controller).actions()
    assert view.is_processing is False

    assert await view.perform_bulk_action(["a"], "approve") is None

    assert gateway.args_for("bulk_action") == [
        ({"itemIds": ["a"], "action": "approve", "reason": "bulk_action"},)
    ]
    assert gateway.count("get_queue") == 1
    assert [n.message for n in notifier.drain()] == ["Bulk action completed: 1/1 items"]
    assert set(view.as_contract()) == {"performBulkAction", "isProcessing"}


@pytest.mark.asyncio
async def test_actions_view_records_an_empty_selection_as_a_failure() -> None:
    controller, gateway, notifier = make_controller()
    view = ModerationViews(controller).actions()

    assert await view.perform_bulk_action([], "approve") is None

    assert gateway.calls == []
    assert controller.busy is False
    assert controller.last_error == "No items selected"
    assert controller.last_status("bulk_action").error == "No items selected"
    assert [(n.level, n.message) for n in notifier.drain()] == [("failure", "Bulk action failed")]


@pytest.mark.asyncio
async def test_report_detail_shows_a_failed_refresh_after_a_mutation() -> None:
    controller, gateway, _ = make_controller()
    gateway.failures["get_queue"] = ModerationServerError(500, "down")

    await controller.take_action("a", "approve", "ok")

    assert controller.last_status("take_action").succeeded
    assert ModerationViews(controller).report_detail().error == "API error: 500 down"


@pytest.mark.asyncio
async def test_loading_flags_follow_in_flight_operations() -> None:
    seen: dict[str, bool] = {}

    class ObservingGateway(FakeGateway):
        async def get_queue(self, query):
            views = ModerationViews(controller)
            seen["reports"] = views.reports().loading
            seen["detail"] = views.report_detail().loading
            seen["actions"] = views.actions().is_processing
            return await super().get_queue(query)

    controller, _, _ = make_controller(ObservingGateway())
    await controller.fetch_queue()

    assert seen == {"reports": True, "detail": True, "actions": True}
    assert ModerationViews(controller).actions().is_processing is False
