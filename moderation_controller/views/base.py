from __future__ import annotations

from typing import Any

import structlog

logger = structlog.get_logger(__name__)


class _Sentinel:
    supported = False

    def __init__(self, capability: str) -> None:
        self.capability = capability

    def _log(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        logger.debug(
            "capability_unsupported",
            capability=self.capability,
            args=len(args) + len(kwargs),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.capability!r})"


class Unsupported(_Sentinel):
    """Synchronous no-op standing in for a capability the backend lacks."""

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        self._log(args, kwargs)
        return None


class AsyncUnsupported(_Sentinel):
    """Awaitable no-op standing in for a capability the backend lacks."""

    async def __call__(self, *args: Any, **kwargs: Any) -> None:
        self._log(args, kwargs)
        return None


def is_supported(capability: Any) -> bool:
    return getattr(capability, "supported", True)


__all__ = ["AsyncUnsupported", "Unsupported", "is_supported"]
