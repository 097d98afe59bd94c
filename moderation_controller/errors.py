from __future__ import annotations

from typing import Any, Optional


class ModerationAPIError(Exception):
    """Remote moderation service answered with a non-2xx status."""

    def __init__(self, status_code: int, message: Optional[str] = None, *, body: Any = None) -> None:
        self.status_code = status_code
        self.message = message
        self.body = body
        super().__init__(f"API error: {status_code} {message or ''}".rstrip())


class ModerationRequestError(ModerationAPIError):
    pass


class ModerationServerError(ModerationAPIError):
    pass


def error_for_status(status_code: int, body: Any) -> ModerationAPIError:
    message = None
    if isinstance(body, dict):
        candidate = body.get("message") or body.get("error")
        if isinstance(candidate, str) and candidate:
            message = candidate
    if status_code >= 500:
        return ModerationServerError(status_code, message, body=body)
    return ModerationRequestError(status_code, message, body=body)


__all__ = [
    "ModerationAPIError",
    "ModerationRequestError",
    "ModerationServerError",
    "error_for_status",
]
