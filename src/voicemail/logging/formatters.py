"""
Console record formatting and JSON serialization.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import orjson
from structlog.typing import EventDict

# =============================================================================
# JSON
# =============================================================================


def orjson_dumps(v: Any, *, default: Any = str) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(v, default=default, option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC).decode()


# =============================================================================
# Console Formatter (Aligned Columns)
# =============================================================================

COLORS = {
    "reset": "\033[0m",
    "dim": "\033[2m",
    "timestamp": "\033[90m",
    "logger": "\033[35m",
    "key": "\033[34m",
}


def colorize(text: str, color: str) -> str:
    """Apply ANSI color to text."""
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


class ConsoleFormatter:
    """Renders a record as one aligned line: time | level | name/component | msg key=value..."""

    _RESET = "\x1b[0m"
    _LEVEL_COLORS = {
        "TRACE": "\x1b[2;36m",
        "DEBUG": "\x1b[36m",
        "INFO": "\x1b[32m",
        "WARN": "\x1b[33m",
        "ERROR": "\x1b[31m",
        "FATAL": "\x1b[1;31m",
    }

    EXCLUDED_KEYS = {"level", "msg", "event", "name", "component", "timestamp", "hostname", "pid"}
    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
    TIMESTAMP_WIDTH = 19
    LEVEL_WIDTH = 8
    LOGGER_WIDTH = 32
    SEPARATOR = " | "

    @staticmethod
    def _fit_right(text: str, width: int) -> str:
        if width <= 0:
            return text
        if len(text) > width:
            if width <= 3:
                text = text[-width:]
            else:
                text = "..." + text[-(width - 3) :]
        return f"{text:>{width}}"

    @classmethod
    def _format_timestamp(cls, raw_timestamp: str | None) -> str:
        if raw_timestamp:
            try:
                dt = datetime.fromisoformat(raw_timestamp.replace("Z", "+00:00"))
                if dt.tzinfo is None:
                    dt = dt.replace(tzinfo=timezone.utc)
                return dt.astimezone().strftime(cls.TIMESTAMP_FORMAT)
            except (ValueError, TypeError):
                pass
        return datetime.now().strftime(cls.TIMESTAMP_FORMAT)

    @classmethod
    def _colorize_level(cls, text: str, level_upper: str, use_color: bool) -> str:
        color = cls._LEVEL_COLORS.get(level_upper)
        if not use_color or not color:
            return text
        return f"{color}{text}{cls._RESET}"

    @staticmethod
    def _maybe_color(text: str, color: str, use_color: bool) -> str:
        if not use_color:
            return text
        return colorize(text, color)

    @staticmethod
    def _render_value(value: Any) -> str:
        if isinstance(value, (dict, list, tuple)):
            return orjson_dumps(value)
        return str(value)

    @classmethod
    def format(cls, event_dict: EventDict, *, use_color: bool = True) -> str:
        """Format an event dict into an aligned string."""
        level_upper = str(event_dict.get("level", "info")).upper()
        message_text = str(event_dict.get("msg", event_dict.get("event", "")))

        display_logger = str(event_dict.get("name", "root"))
        component = event_dict.get("component")
        if component:
            display_logger = f"{display_logger}/{component}"

        extras = []
        for k, v in event_dict.items():
            if k in cls.EXCLUDED_KEYS:
                continue
            key_colored = cls._maybe_color(k, "key", use_color)
            value_colored = cls._maybe_color(cls._render_value(v), "dim", use_color)
            extras.append(f"{key_colored}={value_colored}")

        if extras:
            message_text = f"{message_text} " + " ".join(extras)

        level_text = cls._colorize_level(cls._fit_right(level_upper, cls.LEVEL_WIDTH), level_upper, use_color)
        timestamp = cls._format_timestamp(event_dict.get("timestamp"))

        return cls.SEPARATOR.join(
            [
                cls._maybe_color(cls._fit_right(timestamp, cls.TIMESTAMP_WIDTH), "timestamp", use_color),
                level_text,
                cls._maybe_color(cls._fit_right(display_logger, cls.LOGGER_WIDTH), "logger", use_color),
                message_text,
            ]
        )
