from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Union

DateLike = Union[date, str]

# Filter rules are backend-defined; values pass through untouched.
FilterRule = Any


class ModerationAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"
    ESCALATE = "escalate"
    REMOVE = "remove"
    WARN = "warn"
    IGNORE = "ignore"


class QueueStatus(str, Enum):
    PENDING = "pending"
    IN_REVIEW = "in_review"
    RESOLVED = "resolved"
    ESCALATED = "escalated"


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _count(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


@dataclass(slots=True)
class QueueItem:
    item_id: Optional[str]
    content_ref: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    raw: dict = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "QueueItem":
        return cls(
            item_id=_text(payload.get("id", payload.get("_id"))),
            content_ref=_text(payload.get("contentId", payload.get("content"))),
            category=_text(payload.get("category")),
            priority=_text(payload.get("priority")),
            status=_text(payload.get("status")),
            raw=dict(payload),
        )


@dataclass(slots=True)
class Appeal:
    appeal_id: Optional[str]
    action_id: Optional[str] = None
    reason: Optional[str] = None
    evidence: list = field(default_factory=list)
    status: Optional[str] = None
    raw: dict = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Appeal":
        evidence = payload.get("evidence")
        return cls(
            appeal_id=_text(payload.get("id", payload.get("_id"))),
            action_id=_text(payload.get("actionId", payload.get("action"))),
            reason=_text(payload.get("reason")),
            evidence=list(evidence) if isinstance(evidence, (list, tuple)) else [],
            status=_text(payload.get("status")),
            raw=dict(payload),
        )


_STAT_KEYS = {
    "total": "total",
    "pending": "pending",
    "resolved": "resolved",
    "autoFlagged": "auto_flagged",
    "auto_flagged": "auto_flagged",
}


@dataclass(slots=True)
class StatisticsSnapshot:
    total: int = 0
    pending: int = 0
    resolved: int = 0
    auto_flagged: int = 0
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "StatisticsSnapshot":
        counters: dict[str, int] = {}
        extra: dict[str, Any] = {}
        for key, value in payload.items():
            attr = _STAT_KEYS.get(key)
            if attr is None:
                extra[key] = value
            else:
                counters[attr] = _count(value)
        return cls(**counters, extra=extra)

    def as_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "total": self.total,
            "pending": self.pending,
            "resolved": self.resolved,
            "autoFlagged": self.auto_flagged,
        }


@dataclass(slots=True)
class ActionRequest:
    item_id: str
    action: Union[ModerationAction, str]
    reason: Optional[str] = None
    notes: str = ""

    def to_payload(self) -> dict[str, Any]:
        return {"action": _text(self.action), "reason": self.reason, "notes": self.notes}


@dataclass(slots=True)
class BulkActionRequest:
    item_ids: Sequence[str]
    action: Union[ModerationAction, str]
    reason: Optional[str] = None

    def to_payload(self) -> dict[str, Any]:
        return {"itemIds": list(self.item_ids), "action": _text(self.action), "reason": self.reason}


@dataclass(slots=True)
class BulkActionResult:
    total: int
    success_count: int

    def summary(self) -> str:
        return f"{self.success_count}/{self.total}"


@dataclass(slots=True)
class QueueOptions:
    status: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None
    category: Optional[str] = None
    priority: Optional[str] = None
    start_date: Optional[DateLike] = None
    end_date: Optional[DateLike] = None


@dataclass(slots=True)
class AppealOptions:
    status: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None


@dataclass(slots=True)
class FilterOptions:
    active: Optional[bool] = None
    category: Optional[str] = None


@dataclass(slots=True)
class StatisticsRange:
    start_date: Optional[DateLike] = None
    end_date: Optional[DateLike] = None


@dataclass(slots=True, frozen=True)
class ControllerState:
    queue: tuple[QueueItem, ...]
    appeals: tuple[Appeal, ...]
    filters: Mapping[str, FilterRule]
    statistics: Optional[StatisticsSnapshot]
    busy: bool
    last_error: Optional[str]


__all__ = [
    "ActionRequest",
    "Appeal",
    "AppealOptions",
    "BulkActionRequest",
    "BulkActionResult",
    "ControllerState",
    "DateLike",
    "FilterOptions",
    "FilterRule",
    "ModerationAction",
    "QueueItem",
    "QueueOptions",
    "QueueStatus",
    "StatisticsRange",
    "StatisticsSnapshot",
]
