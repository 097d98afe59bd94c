from __future__ import annotations

import abc
from typing import Any, Mapping, Optional


class ModerationGateway(abc.ABC):
    """Remote moderation service surface.

    Every method returns the decoded response body, which the service wraps in a
    ``{"data": ...}`` envelope.
    """

    @abc.abstractmethod
    async def get_queue(self, query: Mapping[str, str]) -> Any:
        ...

    @abc.abstractmethod
    async def analyze(self, content: Any) -> Any:
        ...

    @abc.abstractmethod
    async def take_action(self, item_id: str, payload: Mapping[str, Any]) -> Any:
        ...

    @abc.abstractmethod
    async def bulk_action(self, payload: Mapping[str, Any]) -> Any:
        ...

    @abc.abstractmethod
    async def get_appeals(self, query: Mapping[str, str]) -> Any:
        ...

    @abc.abstractmethod
    async def submit_appeal(self, payload: Mapping[str, Any]) -> Any:
        ...

    @abc.abstractmethod
    async def get_filters(self, query: Mapping[str, str]) -> Any:
        ...

    @abc.abstractmethod
    async def create_filter(self, filter_data: Mapping[str, Any]) -> Any:
        ...

    @abc.abstractmethod
    async def get_statistics(self, date_range: Mapping[str, Optional[str]]) -> Any:
        ...

    async def close(self) -> None:
        return None
