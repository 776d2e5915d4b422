"""
Record framing for the event log.

Each event is written as an RFC 7464 JSON text sequence element:

    <RS>{"IDE":"eclipse","eventType":"FileInit","timestamp":"1767268800"}<LF>

RS is U+001E. The JSON encoder escapes every control character below U+0020,
so neither RS nor LF can occur inside a payload and the scanner can recover
frame boundaries from the raw text alone, even when the file is the
concatenation of several writer lifetimes.

Framing and decoding are separate steps: scan() only finds frames, decode()
parses one payload. A payload with a corrupt JSON body still comes out of
scan() intact.
"""

import json
from typing import Any, Mapping

from errors import FrameDecodeError, InvalidArgument

RECORD_START = "\x1e"
RECORD_END = "\n"


def encode(event: Mapping[str, Any]) -> str:
    """Serialize an event to compact JSON. Raises InvalidArgument on unencodable values."""
    try:
        return json.dumps(
            dict(event),
            ensure_ascii=True,
            allow_nan=False,
            separators=(",", ":"),
        )
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"Event cannot be encoded as JSON: {e}") from e


def frame(event: Mapping[str, Any]) -> str:
    return f"{RECORD_START}{encode(event)}{RECORD_END}"


def scan(raw: str) -> list[str]:
    """Return every complete frame payload in file order.

    Text outside RS..LF pairs and a frame without its closing LF (a write
    cut short by a crash) are not frames and are left out.
    """
    payloads = []
    for chunk in raw.split(RECORD_START)[1:]:
        payload, sep, _ = chunk.partition(RECORD_END)
        if not sep:
            continue
        payloads.append(payload)
    return payloads


def decode(payload: str) -> dict[str, Any]:
    try:
        obj = json.loads(payload)
    except ValueError as e:
        raise FrameDecodeError(f"Frame is not valid JSON: {e}") from e
    if not isinstance(obj, dict):
        raise FrameDecodeError(f"Frame is not a JSON object: {type(obj).__name__}")
    return obj
