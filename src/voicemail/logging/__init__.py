"""
Structured logging for voicemail components.

Provides per-component loggers with:
- stdout / stderr console streams (json or aligned console format)
- JSON-lines file streams for normal and error output
- Serializers for voicemail domain objects (messages, mailboxes, folders, ...)

Library: structlog + orjson.
"""

from .core import VoicemailLogger, build_streams, create, create_logger
from .paths import ensure_directory_exists
from .serializers import VOICEMAIL_SERIALIZERS
from .types import LogLevel, StreamDescriptor

__all__ = [
    "create",
    "create_logger",
    "build_streams",
    "ensure_directory_exists",
    "VoicemailLogger",
    "VOICEMAIL_SERIALIZERS",
    "LogLevel",
    "StreamDescriptor",
]
