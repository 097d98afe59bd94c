from __future__ import annotations

import pytest

from moderation_controller.services.refresh import REFRESH_TARGETS, RefreshAfterWrite
from tests.factories import make_controller


@pytest.mark.asyncio
async def test_refresher_runs_mapped_target_only() -> None:
    calls: list[str] = []

    async def refetch() -> None:
        calls.append("fetch_queue")

    refresher = RefreshAfterWrite({"take_action": refetch})

    await refresher.after("take_action")
    await refresher.after("submit_appeal")

    assert calls == ["fetch_queue"]
    assert refresher.covers("take_action")
    assert not refresher.covers("submit_appeal")


@pytest.mark.asyncio
async def test_refresher_for_controller_binds_default_fetches() -> None:
    controller, gateway, _ = make_controller()
    refresher = RefreshAfterWrite.for_controller(controller)

    for operation in REFRESH_TARGETS:
        await refresher.after(operation)

    assert gateway.count("get_queue") == 2
    assert gateway.count("get_filters") == 1
    assert [args for args in gateway.args_for("get_queue")] == [({},), ({},)]
