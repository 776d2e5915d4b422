"""
Event construction.

One pure builder per event kind. Every event starts with the common fields
(IDE, eventType, timestamp); the timestamp is whole epoch seconds encoded as
a string so every reader sees the same type.

Required string fields must be present and non-empty, otherwise the builder
raises InvalidArgument. Offsets and lengths are taken as-is.
"""

import time
from typing import Any, Mapping, Optional

from errors import InvalidArgument
from models.event import (
    CHANGE_ORIGIN,
    ENTITY_ADDRESS,
    EVENT_TYPE,
    IDE,
    LAUNCH_ATTRIBUTES,
    LAUNCH_TIMESTAMP,
    LENGTH,
    OFFSET,
    TEST_RESULT,
    TEXT,
    TIMESTAMP,
    Event,
    EventType,
)

FILE_EVENTS = {EventType.file_open, EventType.file_close, EventType.file_save}
LAUNCH_EVENTS = {EventType.debug_launch, EventType.normal_launch}


def _timestamp() -> str:
    return str(int(time.time()))


def _require(**fields: Optional[str]) -> None:
    for name, value in fields.items():
        if value is None:
            raise InvalidArgument(f"{name} cannot be null")
        if not isinstance(value, str):
            raise InvalidArgument(f"{name} must be a string, got {type(value).__name__}")
        if value == "":
            raise InvalidArgument(f"{name} cannot be empty")


def _common(event_type: EventType, ide: Optional[str]) -> Event:
    return {
        IDE: ide,
        EVENT_TYPE: event_type.value,
        TIMESTAMP: _timestamp(),
    }


def build_marker(ide: Optional[str] = None) -> Event:
    return _common(EventType.file_init, ide)


def build_text_change(
    text: Optional[str],
    offset: int,
    length: int,
    source_file: Optional[str],
    change_origin: Optional[str],
    *,
    ide: Optional[str] = None,
) -> Event:
    """Text inserted at `offset`, replacing `length` characters of `source_file`.

    `text` may be empty (a pure deletion) but not null.
    """
    if text is None:
        raise InvalidArgument("text cannot be null")
    _require(source_file=source_file, change_origin=change_origin)

    event = _common(EventType.text_change, ide)
    event[TEXT] = text
    event[OFFSET] = offset
    event[LENGTH] = length
    event[ENTITY_ADDRESS] = source_file
    event[CHANGE_ORIGIN] = change_origin
    return event


def build_file_event(kind: EventType, path: Optional[str], *, ide: Optional[str] = None) -> Event:
    if kind not in FILE_EVENTS:
        raise InvalidArgument(f"{kind!r} is not a file event")
    _require(path=path)

    event = _common(kind, ide)
    event[ENTITY_ADDRESS] = path
    return event


def build_test_run(
    test_address: Optional[str],
    test_result: Optional[str],
    *,
    ide: Optional[str] = None,
) -> Event:
    _require(test_address=test_address, test_result=test_result)

    event = _common(EventType.test_run, ide)
    event[ENTITY_ADDRESS] = test_address
    event[TEST_RESULT] = test_result
    return event


def build_snapshot(path: Optional[str], *, ide: Optional[str] = None) -> Event:
    _require(path=path)

    event = _common(EventType.snapshot, ide)
    event[ENTITY_ADDRESS] = path
    return event


def build_launch(
    kind: EventType,
    launch_time: Optional[str],
    entry_point: Optional[str],
    attributes: Optional[Mapping[str, Any]],
    *,
    ide: Optional[str] = None,
) -> Event:
    if kind not in LAUNCH_EVENTS:
        raise InvalidArgument(f"{kind!r} is not a launch event")
    _require(launch_time=launch_time, entry_point=entry_point)
    if attributes is not None and not isinstance(attributes, Mapping):
        raise InvalidArgument(f"launch attributes must be a mapping, got {type(attributes).__name__}")

    event = _common(kind, ide)
    event[ENTITY_ADDRESS] = entry_point
    event[LAUNCH_ATTRIBUTES] = dict(attributes) if attributes is not None else None
    event[LAUNCH_TIMESTAMP] = launch_time
    return event


def build_launch_end(launch_time: Optional[str], *, ide: Optional[str] = None) -> Event:
    _require(launch_time=launch_time)

    event = _common(EventType.launch_end, ide)
    event[LAUNCH_TIMESTAMP] = launch_time
    return event
