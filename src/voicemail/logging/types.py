"""
Level, stream and serializer-input types for voicemail logging.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Mapping, Protocol, TextIO

# =============================================================================
# Levels
# =============================================================================


class LogLevel(str, Enum):
    """Severity levels, least to most severe."""

    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"

    @classmethod
    def _missing_(cls, value: object) -> LogLevel | None:
        if not isinstance(value, str):
            return None
        name = value.strip().lower()
        name = _LEVEL_ALIASES.get(name, name)
        for member in cls:
            if member.value == name:
                return member
        return None

    @property
    def number(self) -> int:
        return LEVEL_NUMBERS[self]


_LEVEL_ALIASES = {"warning": "warn", "critical": "fatal", "exception": "error"}

LEVEL_NUMBERS: dict[LogLevel, int] = {
    LogLevel.TRACE: 5,
    LogLevel.DEBUG: 10,
    LogLevel.INFO: 20,
    LogLevel.WARN: 30,
    LogLevel.ERROR: 40,
    LogLevel.FATAL: 50,
}


def level_number(method_name: str) -> int:
    """Numeric severity for a logger method name (``warning``, ``exception``, ...)."""
    return LogLevel(method_name).number


# =============================================================================
# Streams
# =============================================================================


@dataclass(frozen=True)
class StreamDescriptor:
    """A log output at a minimum level: a console stream or a file path."""

    level: LogLevel
    stream: TextIO | None = None
    path: Path | None = None

    def __post_init__(self) -> None:
        if (self.stream is None) == (self.path is None):
            raise ValueError("StreamDescriptor needs exactly one of stream or path")

    @property
    def is_console(self) -> bool:
        return self.stream is not None


Serializer = Callable[[Any], Mapping[str, Any]]

# =============================================================================
# Serializer input contracts
# =============================================================================


class Identified(Protocol):
    id: Any


class Query(Protocol):
    text: str
    values: Any


class Channel(Protocol):
    id: str
    name: str


class Playback(Protocol):
    media_uri: str
    target_uri: str


class Recording(Protocol):
    name: str
    target_uri: str


class Message(Protocol):
    id: Any
    mailbox: Identified
    folder: Identified
    date: datetime
    read: bool
    caller_id: str
    duration: Any
    recording: Any


class Context(Protocol):
    id: Any
    domain: str


class KeyValueConfig(Protocol):
    """A context or mailbox configuration entry."""

    id: Any
    key: str
    value: Any


class Folder(Protocol):
    id: Any
    name: str
    dtmf: Any


class Mailbox(Protocol):
    id: Any
    mailbox_number: str
    mailbox_name: str
