from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
TIMESTAMP_COLOR = "\033[90m"
EVENT_COLOR = "\033[96m"
KEY_COLOR = "\033[94m"
NUMBER_COLOR = "\033[93m"
STRING_COLOR = "\033[92m"


def _paint(value: Any) -> str:
    if value is None:
        return f"{DIM}None{RESET}"
    if isinstance(value, (bool, int, float)):
        return f"{NUMBER_COLOR}{value}{RESET}"
    if isinstance(value, str):
        return f"{STRING_COLOR}{value}{RESET}"
    return str(value)


class ConsoleRenderer:
    """Human-readable structlog renderer; falls back to JSON off a TTY."""

    def __init__(self, colored: bool = True) -> None:
        self.colored = colored and sys.stdout.isatty()
        self._json = structlog.processors.JSONRenderer()

    def __call__(self, logger: Any, name: str, event_dict: dict) -> str:
        if not self.colored:
            return self._json(logger, name, event_dict)

        timestamp = event_dict.pop("timestamp", "")
        level = event_dict.pop("level", "info").upper()
        event = event_dict.pop("event", "")

        parts = []
        if timestamp:
            parts.append(f"{TIMESTAMP_COLOR}[{timestamp}]{RESET}")
        parts.append(f"{LEVEL_COLORS.get(level, LEVEL_COLORS['INFO'])}{BOLD}{level:8}{RESET}")
        parts.append(f"{EVENT_COLOR}{event}{RESET}")
        if event_dict:
            pairs = (f"{KEY_COLOR}{key}{RESET}={_paint(value)}" for key, value in event_dict.items())
            parts.append(f"{DIM}|{RESET} " + f" {DIM}|{RESET} ".join(pairs))
        return " ".join(parts)


def setup_logging(level: int = logging.INFO, use_json: bool = False) -> None:
    """
    Configure structlog and stdlib logging for the controller.

    Args:
        level: Logging level (default: INFO)
        use_json: If True, always render JSON lines (default: False)
    """
    renderer = structlog.processors.JSONRenderer() if use_json else ConsoleRenderer(colored=True)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S", utc=False),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)-8s %(name)s %(message)s",
        datefmt="%H:%M:%S",
        force=True,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
