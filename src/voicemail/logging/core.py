"""
Logger construction for voicemail components.

`create` prepares the log directories, assembles the stream descriptors and
returns a `VoicemailLogger` bound to a component name. The logger is a
structlog bound logger wrapping a `StreamLogger`, which fans a processed
record out to every stream whose level the record meets.
"""

from __future__ import annotations

import os
import socket
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping, Sequence

import structlog
from structlog.processors import CallsiteParameter
from structlog.typing import EventDict, Processor

from .paths import ensure_directory_exists
from .serializers import VOICEMAIL_SERIALIZERS, apply_serializers
from .sinks import BaseSink, LogFormat, sink_for
from .types import LogLevel, Serializer, StreamDescriptor, level_number

if TYPE_CHECKING:
    from voicemail.config import Settings
    from voicemail.config.logging import LoggingSettings

# =============================================================================
# Wrapped Logger
# =============================================================================


class StreamLogger:
    """Routes rendered-ready event dicts to the configured streams."""

    def __init__(
        self,
        name: str,
        src: bool,
        streams: Sequence[StreamDescriptor],
        serializers: Mapping[str, Serializer],
        console_format: LogFormat = "json",
    ):
        self.name = name
        self.src = src
        self.streams = tuple(streams)
        self.serializers = serializers
        self.min_level = min((s.level.number for s in self.streams), default=LogLevel.INFO.number)

        sinks_by_path: dict[Path, BaseSink] = {}
        self._routes: list[tuple[int, BaseSink]] = []
        # Sinks opened before a failing one are closed on the way out.
        with ExitStack() as opened:
            for descriptor in self.streams:
                if descriptor.path is not None:
                    sink = sinks_by_path.get(descriptor.path)
                    if sink is None:
                        sink = sinks_by_path[descriptor.path] = sink_for(descriptor)
                        opened.callback(sink.close)
                else:
                    sink = sink_for(descriptor, console_format)
                self._routes.append((descriptor.level.number, sink))
            opened.pop_all()

    def msg(self, event_dict: EventDict) -> None:
        severity = LogLevel(event_dict["level"]).number
        for threshold, sink in self._routes:
            if severity >= threshold:
                sink.emit(event_dict)

    log = trace = debug = info = warn = warning = msg
    fatal = critical = error = exception = msg

    def close(self) -> None:
        for sink in {id(sink): sink for _, sink in self._routes}.values():
            sink.close()


# =============================================================================
# Processors
# =============================================================================


def add_log_level(logger: StreamLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add the canonical level name (``warning`` -> ``warn``, ``exception`` -> ``error``)."""
    event_dict["level"] = LogLevel(method_name).value
    return event_dict


def serialize_fields(logger: StreamLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Run the logger's serializers over matching fields."""
    return apply_serializers(event_dict, logger.serializers)


def rename_event_key(logger: StreamLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' to 'msg', leaving a ``message`` field free for the message serializer."""
    event_dict["msg"] = event_dict.pop("event", "")
    return event_dict


def to_stream_logger(logger: StreamLogger, method_name: str, event_dict: EventDict) -> tuple[tuple[EventDict], dict]:
    """Final processor: pass the event dict through to `StreamLogger.msg` untouched."""
    return (event_dict,), {}


def build_processors(src: bool) -> list[Processor]:
    processors: list[Processor] = [
        add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
    ]
    if src:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                {CallsiteParameter.FILENAME, CallsiteParameter.FUNC_NAME, CallsiteParameter.LINENO},
                additional_ignores=["voicemail.logging"],
            )
        )
    processors += [
        serialize_fields,
        structlog.processors.StackInfoRenderer(additional_ignores=["voicemail.logging"]),
        structlog.processors.format_exc_info,
        rename_event_key,
        to_stream_logger,
    ]
    return processors


# =============================================================================
# Bound Logger
# =============================================================================


class VoicemailLogger(structlog.BoundLoggerBase):
    """
    Bound logger handed to voicemail components.

    ``bind``/``child`` return a new logger sharing the streams and serializers;
    the parent's context is never modified.
    """

    _logger: StreamLogger

    @property
    def name(self) -> str:
        return self._logger.name

    @property
    def src(self) -> bool:
        return self._logger.src

    @property
    def streams(self) -> tuple[StreamDescriptor, ...]:
        return self._logger.streams

    @property
    def serializers(self) -> Mapping[str, Serializer]:
        return self._logger.serializers

    @property
    def component(self) -> str | None:
        return self._context.get("component")

    def child(self, **fields: Any) -> VoicemailLogger:
        return self.bind(**fields)

    def is_enabled_for(self, level: LogLevel | str) -> bool:
        return LogLevel(level).number >= self._logger.min_level

    def _log(self, method_name: str, event: str | None, args: tuple[Any, ...], kw: dict[str, Any]) -> None:
        if level_number(method_name) < self._logger.min_level:
            return None
        if args:
            event = event % args
        return self._proxy_to_logger(method_name, event, **kw)

    def trace(self, event: str | None = None, *args: Any, **kw: Any) -> None:
        return self._log("trace", event, args, kw)

    def debug(self, event: str | None = None, *args: Any, **kw: Any) -> None:
        return self._log("debug", event, args, kw)

    def info(self, event: str | None = None, *args: Any, **kw: Any) -> None:
        return self._log("info", event, args, kw)

    def warn(self, event: str | None = None, *args: Any, **kw: Any) -> None:
        return self._log("warn", event, args, kw)

    warning = warn

    def error(self, event: str | None = None, *args: Any, **kw: Any) -> None:
        return self._log("error", event, args, kw)

    def exception(self, event: str | None = None, *args: Any, **kw: Any) -> None:
        kw.setdefault("exc_info", True)
        return self._log("exception", event, args, kw)

    def fatal(self, event: str | None = None, *args: Any, **kw: Any) -> None:
        return self._log("fatal", event, args, kw)

    critical = fatal

    def log(self, level: LogLevel | str, event: str | None = None, *args: Any, **kw: Any) -> None:
        return self._log(LogLevel(level).value, event, args, kw)

    def close(self) -> None:
        """Close the file streams. Shared with every logger derived from the same base."""
        self._logger.close()


# =============================================================================
# Configuration Logic
# =============================================================================


def describe_destination(descriptor: StreamDescriptor) -> str:
    if descriptor.path is not None:
        return str(descriptor.path)
    if descriptor.stream is sys.stderr:
        return "stderr"
    return "stdout"


def build_streams(config: LoggingSettings) -> list[StreamDescriptor]:
    """Stream descriptors for a logging config; files always, consoles unless disabled."""
    normal, error = config.normal, config.error
    streams: list[StreamDescriptor] = []

    if normal.stdout is not False:
        streams.append(StreamDescriptor(level=normal.level, stream=sys.stdout))
    streams.append(StreamDescriptor(level=normal.level, path=Path(normal.path).resolve()))

    if error.stderr is not False:
        streams.append(StreamDescriptor(level=error.level, stream=sys.stderr))
    streams.append(StreamDescriptor(level=error.level, path=Path(error.path).resolve()))

    return streams


def create_logger(
    *,
    name: str,
    src: bool,
    streams: Sequence[StreamDescriptor],
    serializers: Mapping[str, Serializer] = VOICEMAIL_SERIALIZERS,
    console_format: LogFormat = "json",
) -> VoicemailLogger:
    """Build a base logger; every record carries ``name``, ``hostname`` and ``pid``."""
    stream_logger = StreamLogger(name, src, streams, serializers, console_format)
    context = {"name": name, "hostname": socket.gethostname(), "pid": os.getpid()}
    return VoicemailLogger(stream_logger, build_processors(src), context)


def create(config: Settings, component: str) -> VoicemailLogger:
    """
    Return a logger for a voicemail component.

    Args:
        config: Application settings with a logging section.
        component: Name bound as ``component`` on every record.

    Raises:
        OSError: if a log directory cannot be created or a log file opened.
    """
    logging_config = config.logging
    ensure_directory_exists(logging_config.normal.path)
    ensure_directory_exists(logging_config.error.path)

    base = create_logger(
        name=config.application_name,
        src=logging_config.src,
        streams=build_streams(logging_config),
        serializers=VOICEMAIL_SERIALIZERS,
        console_format=logging_config.console_format,
    )
    log = base.bind(component=component)
    log.debug(
        "logger_created",
        streams=[
            {"level": s.level.value, "destination": describe_destination(s)}
            for s in base.streams
        ],
    )
    return log
