"""
Serializers that flatten voicemail domain objects into loggable structures.

Each serializer is keyed by the record field it applies to. Logging
``log.info("playing", playback=playback)`` replaces the ``playback`` field with
``serialize_playback(playback)`` before the record is rendered.

Serializers do not validate their input: an object missing an attribute raises
at the log call site.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Mapping

from structlog.tracebacks import ExceptionDictTransformer

from .types import (
    Channel,
    Context,
    Folder,
    Identified,
    KeyValueConfig,
    Mailbox,
    Message,
    Playback,
    Query,
    Recording,
    Serializer,
)

_exception_transformer = ExceptionDictTransformer(show_locals=False)


def serialize_error(err: Any) -> Any:
    """Standard error shape: message, class name, code and structured stack.

    Anything that is not an exception (``None``, a plain string, ...) is
    logged unchanged.
    """
    if not isinstance(err, BaseException):
        return err
    return {
        "message": str(err),
        "name": type(err).__name__,
        "code": getattr(err, "code", getattr(err, "errno", None)),
        "stack": _exception_transformer((type(err), err, err.__traceback__)),
    }


def serialize_query(query: Query) -> dict[str, Any]:
    return {"query": {"text": query.text, "values": query.values}}


def serialize_channel(channel: Channel) -> dict[str, Any]:
    return {"channel": {"id": channel.id, "name": channel.name}}


def serialize_playback(playback: Playback) -> dict[str, Any]:
    return {"playback": {"media": playback.media_uri, "target": playback.target_uri}}


def serialize_recording(recording: Recording) -> dict[str, Any]:
    return {"recording": {"name": recording.name, "target": recording.target_uri}}


def serialize_message(message: Message) -> dict[str, Any]:
    return {
        "message": {
            "id": message.id,
            "mailboxId": message.mailbox.id,
            "folderId": message.folder.id,
            "date": message.date.isoformat(),
            "read": message.read,
            "callerId": message.caller_id,
            "duration": message.duration,
            "recording": message.recording,
        }
    }


def serialize_context(context: Context) -> dict[str, Any]:
    return {"context": {"id": context.id, "domain": context.domain}}


def serialize_context_config(config: KeyValueConfig) -> dict[str, Any]:
    return {"contextConfig": {"id": config.id, "key": config.key, "value": config.value}}


def serialize_mailbox_config(config: KeyValueConfig) -> dict[str, Any]:
    return {"mailboxConfig": {"id": config.id, "key": config.key, "value": config.value}}


def serialize_folder(folder: Folder) -> dict[str, Any]:
    return {"folder": {"id": folder.id, "name": folder.name, "dtmf": folder.dtmf}}


def serialize_mailbox(mailbox: Mailbox) -> dict[str, Any]:
    return {
        "mailbox": {
            "id": mailbox.id,
            "mailboxNumber": mailbox.mailbox_number,
            "mailboxName": mailbox.mailbox_name,
        }
    }


def serialize_ids(items: Iterable[Identified]) -> dict[str, list[Any]]:
    """Collapse a sequence of entities to their ids, keeping order."""
    return {"ids": [item.id for item in items]}


def serialize_folder_names(folders: Iterable[Folder]) -> dict[str, list[str]]:
    return {"names": [folder.name for folder in folders]}


VOICEMAIL_SERIALIZERS: Mapping[str, Serializer] = MappingProxyType(
    {
        "err": serialize_error,
        "query": serialize_query,
        "channel": serialize_channel,
        "playback": serialize_playback,
        "recording": serialize_recording,
        "message": serialize_message,
        "context": serialize_context,
        "contextConfig": serialize_context_config,
        "contextConfigs": serialize_ids,
        "mailboxConfig": serialize_mailbox_config,
        "mailboxConfigs": serialize_ids,
        "folder": serialize_folder,
        "folders": serialize_folder_names,
        "mailbox": serialize_mailbox,
        "messages": serialize_ids,
    }
)


def apply_serializers(event_dict: dict[str, Any], serializers: Mapping[str, Serializer]) -> dict[str, Any]:
    """Replace every field that has a serializer with the serializer's output."""
    for key, serializer in serializers.items():
        if key in event_dict:
            event_dict[key] = serializer(event_dict[key])
    return event_dict
