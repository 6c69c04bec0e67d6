"""
Log sink abstractions and concrete implementations.

Sinks render an event dict and hand the line to a `structlog.PrintLogger`,
which holds one lock per output file so concurrent callers never interleave
partial lines.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Literal, TextIO

import structlog
from structlog.typing import EventDict

from .formatters import ConsoleFormatter, orjson_dumps
from .types import StreamDescriptor

LogFormat = Literal["console", "json"]

# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks."""

    @abstractmethod
    def emit(self, event_dict: EventDict) -> None:
        """Emit a log event to the sink."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""
        ...


class StdioSink(BaseSink):
    """Console sink.

    Args:
        stream: ``sys.stdout`` or ``sys.stderr``
        fmt: "json" (same layout as file records) or "console" (aligned, colored on a tty)
    """

    def __init__(self, stream: TextIO, fmt: LogFormat = "json"):
        self._stream = stream
        self._fmt = fmt
        self._printer = structlog.PrintLogger(file=stream)

    def emit(self, event_dict: EventDict) -> None:
        if self._fmt == "json":
            output = orjson_dumps(event_dict)
        else:
            use_color = bool(getattr(self._stream, "isatty", lambda: False)())
            output = ConsoleFormatter.format(event_dict, use_color=use_color)
        self._printer.msg(output)

    def close(self) -> None:
        pass


class FileSink(BaseSink):
    """Appends one JSON record per line. The parent directory must already exist."""

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._file = open(self._path, "a", encoding="utf-8")
        self._printer = structlog.PrintLogger(file=self._file)

    @property
    def path(self) -> Path:
        return self._path

    def emit(self, event_dict: EventDict) -> None:
        self._printer.msg(orjson_dumps(event_dict))

    def close(self) -> None:
        self._file.close()


def sink_for(descriptor: StreamDescriptor, console_format: LogFormat = "json") -> BaseSink:
    """Build the sink that writes to a stream descriptor's destination."""
    if descriptor.stream is not None:
        return StdioSink(descriptor.stream, fmt=console_format)
    return FileSink(descriptor.path)
