from __future__ import annotations

from typing import Any, Mapping, Optional
from urllib.parse import quote

import httpx
import structlog
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..config import ApiSettings
from ..errors import error_for_status
from .base import ModerationGateway

logger = structlog.get_logger(__name__)


class HttpModerationGateway(ModerationGateway):
    def __init__(
        self,
        base_url: str,
        *,
        token: Optional[str] = None,
        timeout: float = 15.0,
        read_retry_attempts: int = 1,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = client or httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout,
            headers=headers,
        )
        self._owns_client = client is None
        self._read_retry_attempts = max(1, read_retry_attempts)

    @classmethod
    def from_settings(cls, settings: ApiSettings, *, client: Optional[httpx.AsyncClient] = None) -> "HttpModerationGateway":
        return cls(
            settings.base_url,
            token=settings.token,
            timeout=settings.timeout_seconds,
            read_retry_attempts=settings.read_retry_attempts,
            client=client,
        )

    async def _get(self, path: str, params: Mapping[str, Any]) -> Any:
        # Drop null range bounds; httpx would send them as empty strings.
        query = {key: value for key, value in params.items() if value is not None}
        retry = AsyncRetrying(
            wait=wait_exponential(multiplier=0.5, min=0.5, max=5.0),
            stop=stop_after_attempt(self._read_retry_attempts),
            retry=retry_if_exception_type((httpx.TimeoutException, httpx.ReadError)),
            reraise=True,
        )
        async for attempt in retry:
            with attempt:
                logger.debug(
                    "moderation_api_request",
                    method="GET",
                    path=path,
                    attempt=attempt.retry_state.attempt_number,
                )
                response = await self._client.get(path, params=query)
                return self._decode(path, response)

    async def _post(self, path: str, payload: Any) -> Any:
        logger.debug("moderation_api_request", method="POST", path=path)
        response = await self._client.post(path, json=payload)
        return self._decode(path, response)

    def _decode(self, path: str, response: httpx.Response) -> Any:
        try:
            body = response.json() if response.content else None
        except ValueError:
            body = None
        logger.debug("moderation_api_response", path=path, status=response.status_code)
        if response.status_code >= 400:
            raise error_for_status(response.status_code, body)
        return body

    async def get_queue(self, query: Mapping[str, str]) -> Any:
        return await self._get("/moderation/queue", query)

    async def analyze(self, content: Any) -> Any:
        return await self._post("/moderation/analyze", {"content": content})

    async def take_action(self, item_id: str, payload: Mapping[str, Any]) -> Any:
        return await self._post(f"/moderation/queue/{quote(str(item_id), safe='')}/action", dict(payload))

    async def bulk_action(self, payload: Mapping[str, Any]) -> Any:
        return await self._post("/moderation/queue/bulk-action", dict(payload))

    async def get_appeals(self, query: Mapping[str, str]) -> Any:
        return await self._get("/moderation/appeals", query)

    async def submit_appeal(self, payload: Mapping[str, Any]) -> Any:
        return await self._post("/moderation/appeals", dict(payload))

    async def get_filters(self, query: Mapping[str, str]) -> Any:
        return await self._get("/moderation/filters", query)

    async def create_filter(self, filter_data: Mapping[str, Any]) -> Any:
        return await self._post("/moderation/filters", dict(filter_data))

    async def get_statistics(self, date_range: Mapping[str, Optional[str]]) -> Any:
        return await self._get("/moderation/statistics", date_range)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
