from __future__ import annotations

from dataclasses import fields, is_dataclass
from datetime import date
from enum import Enum
from typing import Any, Mapping, Optional, Union

import structlog

from .models import AppealOptions, DateLike, FilterOptions, QueueOptions, StatisticsRange

logger = structlog.get_logger(__name__)

Options = Union[QueueOptions, AppealOptions, FilterOptions, StatisticsRange, Mapping[str, Any]]

QUERY_KEYS = (
    "status",
    "page",
    "limit",
    "category",
    "priority",
    "active",
    "startDate",
    "endDate",
)


def _wire_key(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _render(value: Any) -> Optional[str]:
    """Stringify a query value, or return None when it counts as absent."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (int, float)) and value == 0:
        return None
    text = str(value)
    return text or None


def _items(options: Options) -> list[tuple[str, Any]]:
    if is_dataclass(options) and not isinstance(options, type):
        return [(_wire_key(f.name), getattr(options, f.name)) for f in fields(options)]
    return [(_wire_key(str(key)), value) for key, value in options.items()]


def build_query(options: Optional[Options] = None, *, passthrough: bool = False) -> dict[str, str]:
    """Normalize an options structure into query parameters.

    Absent fields (None, empty strings, zero) are omitted entirely. Keys outside
    ``QUERY_KEYS`` are dropped unless ``passthrough`` is set, in which case they
    are rendered like any other value.
    """
    if options is None:
        return {}
    query: dict[str, str] = {}
    for key, value in _items(options):
        if key not in QUERY_KEYS and not passthrough:
            logger.debug("query_key_dropped", key=key)
            continue
        rendered = _render(value)
        if rendered is not None:
            query[key] = rendered
    return query


def build_range(
    start_date: Optional[DateLike] = None,
    end_date: Optional[DateLike] = None,
) -> dict[str, Optional[str]]:
    # Both keys are always sent; the service picks its default range for nulls.
    return {
        "startDate": _render(start_date),
        "endDate": _render(end_date),
    }


__all__ = ["Options", "QUERY_KEYS", "build_query", "build_range"]
