"""
Tests for the RS/LF record framing: frame(), scan(), decode().
"""

import json

import pytest

from errors import FrameDecodeError, InvalidArgument
from persistence import framing
from persistence.framing import RECORD_END, RECORD_START


class TestFrame:
    def test_frame_wraps_compact_json(self):
        text = framing.frame({"eventType": "fileOpen", "entityAddress": "/ws/A.java"})
        assert text.startswith(RECORD_START)
        assert text.endswith(RECORD_END)
        assert json.loads(text[1:-1]) == {"eventType": "fileOpen", "entityAddress": "/ws/A.java"}

    def test_frame_preserves_field_order(self):
        text = framing.frame({"IDE": "eclipse", "eventType": "snapshot", "timestamp": "1"})
        assert text == '\x1e{"IDE":"eclipse","eventType":"snapshot","timestamp":"1"}\n'

    def test_delimiters_never_appear_inside_payload(self):
        text = framing.frame({"text": "line one\nline two\x1e\r\tend", "x": "ünïcode"})
        payload = text[1:-1]
        assert RECORD_START not in payload
        assert RECORD_END not in payload
        assert framing.decode(payload)["text"] == "line one\nline two\x1e\r\tend"

    def test_unencodable_value_is_invalid_argument(self):
        with pytest.raises(InvalidArgument):
            framing.frame({"when": object()})

    def test_nan_is_invalid_argument(self):
        with pytest.raises(InvalidArgument):
            framing.frame({"offset": float("nan")})


class TestScan:
    def test_scan_returns_payloads_in_order(self):
        raw = framing.frame({"n": 1}) + framing.frame({"n": 2}) + framing.frame({"n": 3})
        assert [framing.decode(p)["n"] for p in framing.scan(raw)] == [1, 2, 3]

    def test_scan_empty_text(self):
        assert framing.scan("") == []

    def test_trailing_partial_frame_is_not_yielded(self):
        raw = framing.frame({"n": 1}) + framing.frame({"n": 2})[:-5]
        payloads = framing.scan(raw)
        assert len(payloads) == 1
        assert framing.decode(payloads[0]) == {"n": 1}

    def test_frame_missing_only_its_terminator_is_not_yielded(self):
        raw = framing.frame({"n": 1}) + framing.frame({"n": 2})[:-1]
        assert len(framing.scan(raw)) == 1

    def test_torn_frame_between_writer_lifetimes_is_skipped(self):
        torn = framing.frame({"text": "lost in a crash"})[:12]
        raw = framing.frame({"n": 1}) + torn + framing.frame({"n": 2})
        assert [framing.decode(p)["n"] for p in framing.scan(raw)] == [1, 2]

    def test_text_outside_frames_is_ignored(self):
        raw = "garbage" + framing.frame({"n": 1}) + "more garbage"
        assert framing.scan(raw) == ['{"n":1}']

    def test_corrupt_body_still_comes_out_of_scan(self):
        raw = f"{RECORD_START}{{not json{RECORD_END}" + framing.frame({"n": 2})
        payloads = framing.scan(raw)
        assert payloads[0] == "{not json"
        assert framing.decode(payloads[1]) == {"n": 2}


class TestDecode:
    def test_decode_object(self):
        assert framing.decode('{"eventType":"FileInit"}') == {"eventType": "FileInit"}

    def test_decode_malformed(self):
        with pytest.raises(FrameDecodeError):
            framing.decode('{"eventType":')

    def test_decode_non_object(self):
        with pytest.raises(FrameDecodeError):
            framing.decode("[1, 2]")
