from __future__ import annotations

from typing import Any, Mapping, Optional

from moderation_controller.adapters.base import ModerationGateway
from moderation_controller.notifications.base import CollectingNotifier
from moderation_controller.services.controller import ModerationController


def make_item(
    item_id: str = "item-1",
    *,
    category: str = "spam",
    priority: str = "high",
    status: str = "pending",
    content_id: str = "post-1",
) -> dict[str, Any]:
    return {
        "id": item_id,
        "contentId": content_id,
        "category": category,
        "priority": priority,
        "status": status,
    }


def make_appeal(
    appeal_id: str = "appeal-1",
    *,
    action_id: str = "action-1",
    reason: str = "not spam",
    evidence: Optional[list[str]] = None,
    status: str = "pending",
) -> dict[str, Any]:
    return {
        "_id": appeal_id,
        "actionId": action_id,
        "reason": reason,
        "evidence": evidence or [],
        "status": status,
    }


def envelope(data: Any) -> dict[str, Any]:
    return {"success": True, "data": data}


class FakeGateway(ModerationGateway):
    """In-memory moderation service.

    ``responses`` maps a gateway method name to the body it returns; ``failures``
    maps a method name to the exception it raises instead.
    """

    def __init__(self, **responses: Any) -> None:
        self.responses: dict[str, Any] = {
            "get_queue": envelope({"items": []}),
            "analyze": envelope({"flagged": False}),
            "take_action": envelope({"status": "resolved"}),
            "bulk_action": envelope([]),
            "get_appeals": envelope({"appeals": []}),
            "submit_appeal": envelope({"status": "pending"}),
            "get_filters": envelope({}),
            "create_filter": envelope({"name": "new"}),
            "get_statistics": envelope({"total": 0}),
        }
        self.responses.update(responses)
        self.failures: dict[str, Exception] = {}
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.closed = False

    def count(self, name: str) -> int:
        return sum(1 for call, _ in self.calls if call == name)

    def args_for(self, name: str) -> list[tuple[Any, ...]]:
        return [args for call, args in self.calls if call == name]

    async def _respond(self, name: str, *args: Any) -> Any:
        self.calls.append((name, args))
        if name in self.failures:
            raise self.failures[name]
        return self.responses.get(name)

    async def get_queue(self, query: Mapping[str, str]) -> Any:
        return await self._respond("get_queue", dict(query))

    async def analyze(self, content: Any) -> Any:
        return await self._respond("analyze", content)

    async def take_action(self, item_id: str, payload: Mapping[str, Any]) -> Any:
        return await self._respond("take_action", item_id, dict(payload))

    async def bulk_action(self, payload: Mapping[str, Any]) -> Any:
        return await self._respond("bulk_action", dict(payload))

    async def get_appeals(self, query: Mapping[str, str]) -> Any:
        return await self._respond("get_appeals", dict(query))

    async def submit_appeal(self, payload: Mapping[str, Any]) -> Any:
        return await self._respond("submit_appeal", dict(payload))

    async def get_filters(self, query: Mapping[str, str]) -> Any:
        return await self._respond("get_filters", dict(query))

    async def create_filter(self, filter_data: Mapping[str, Any]) -> Any:
        return await self._respond("create_filter", dict(filter_data))

    async def get_statistics(self, date_range: Mapping[str, Optional[str]]) -> Any:
        return await self._respond("get_statistics", dict(date_range))

    async def close(self) -> None:
        self.closed = True


def make_controller(
    gateway: Optional[FakeGateway] = None,
) -> tuple[ModerationController, FakeGateway, CollectingNotifier]:
    gateway = gateway or FakeGateway()
    notifier = CollectingNotifier(buffer_size=50)
    return ModerationController(gateway, notifier), gateway, notifier
