"""Tests for lightpad event stream frame decoding."""

from __future__ import annotations

import json

import pytest

from plumraw.protocol.constants import LightpadEventType
from plumraw.protocol.messages import (
    ConfigChange,
    DimmerChange,
    EventDecodeError,
    LightpadEvent,
    MalformedEvent,
    MotionSignal,
    PowerChange,
    UnknownEvent,
    parse_frame,
    trim_frame,
)


class TestTagRouting:
    """Known type tags decode into their variants."""

    def test_dimmer_change(self) -> None:
        event = parse_frame('{"type":"dimmerchange","Level":77}')
        assert event == DimmerChange(level=77)
        assert event.event_type == LightpadEventType.DIMMER_CHANGE
        assert event.error is None

    def test_power(self) -> None:
        event = parse_frame('{"type":"power","Watts":42}')
        assert event == PowerChange(watts=42)
        assert event.event_type == LightpadEventType.POWER

    def test_pir_signal(self) -> None:
        event = parse_frame('{"type":"pirSignal","Signal":5}')
        assert event == MotionSignal(signal=5)
        assert event.event_type == LightpadEventType.PIR_SIGNAL

    def test_unknown_tag_keeps_frame(self) -> None:
        event = parse_frame('{"type":"glowchange"}')
        assert isinstance(event, UnknownEvent)
        assert event.message == '{"type":"glowchange"}'
        assert event.kind == "glowchange"
        assert event.error is None

    def test_missing_tag_is_unknown(self) -> None:
        event = parse_frame('{"Level":3}')
        assert event == UnknownEvent(message='{"Level":3}', kind="")

    def test_tag_is_case_sensitive(self) -> None:
        event = parse_frame('{"type":"DimmerChange","Level":1}')
        assert isinstance(event, UnknownEvent)

    def test_field_names_match_case_insensitively(self) -> None:
        assert parse_frame('{"type":"dimmerchange","level":12}') == DimmerChange(level=12)
        assert parse_frame('{"Type":"power","WATTS":9}') == PowerChange(watts=9)

    def test_missing_field_defaults_to_zero(self) -> None:
        assert parse_frame('{"type":"power"}') == PowerChange(watts=0)

    def test_extra_fields_ignored(self) -> None:
        frame = json.dumps({"type": "dimmerchange", "Level": 255, "llid": "abc"})
        assert parse_frame(frame) == DimmerChange(level=255)


class TestFrameTrimming:
    def test_trailing_period_stripped(self) -> None:
        assert parse_frame('{"type":"power","Watts":10}.') == parse_frame('{"type":"power","Watts":10}')

    def test_whitespace_and_newline_stripped(self) -> None:
        assert parse_frame('  {"type":"power","Watts":10}.\r\n') == PowerChange(watts=10)

    def test_only_one_period_stripped(self) -> None:
        assert trim_frame("abc..") == "abc."

    def test_period_inside_whitespace(self) -> None:
        assert trim_frame(" {} . ") == "{} "


class TestMalformedFrames:
    """Bad frames come back as exactly one MalformedEvent."""

    def test_not_json(self) -> None:
        event = parse_frame("not json")
        assert isinstance(event, MalformedEvent)
        assert event.message == "not json"
        assert isinstance(event.error, ValueError)

    def test_empty_frame(self) -> None:
        event = parse_frame("\n")
        assert isinstance(event, MalformedEvent)
        assert event.message == ""

    def test_json_array(self) -> None:
        event = parse_frame("[1, 2]")
        assert isinstance(event, MalformedEvent)
        assert isinstance(event.error, EventDecodeError)

    def test_non_string_tag(self) -> None:
        event = parse_frame('{"type": 5}')
        assert isinstance(event, MalformedEvent)
        assert isinstance(event.error, EventDecodeError)

    def test_null_frame_is_unknown(self) -> None:
        assert parse_frame("null") == UnknownEvent(message="null", kind="")

    @pytest.mark.parametrize(
        "frame",
        [
            '{"type":"dimmerchange","Level":"high"}',
            '{"type":"power","Watts":4.5}',
            '{"type":"pirSignal","Signal":true}',
            '{"type":"pirSignal","Signal":[1]}',
        ],
    )
    def test_known_tag_with_bad_body(self, frame: str) -> None:
        event = parse_frame(frame)
        assert isinstance(event, MalformedEvent)
        assert not isinstance(event, UnknownEvent)
        assert isinstance(event.error, EventDecodeError)
        assert event.message == frame


class TestTotality:
    def test_one_event_per_frame_in_order(self, sample_frames: list[bytes]) -> None:
        events = [parse_frame(frame.decode()) for frame in sample_frames]

        assert len(events) == len(sample_frames)
        assert events[0] == DimmerChange(level=77)
        assert events[1] == PowerChange(watts=42)
        assert isinstance(events[2], MalformedEvent)
        assert events[3] == MotionSignal(signal=5)
        assert isinstance(events[4], UnknownEvent)
        assert all(isinstance(event, LightpadEvent) for event in events)


class TestEventTypes:
    def test_config_change_marker(self) -> None:
        event = ConfigChange()
        assert event.event_type == LightpadEventType.CONFIG_CHANGE
        assert event.error is None
        assert event == ConfigChange()

    def test_events_are_frozen(self) -> None:
        event = DimmerChange(level=1)
        with pytest.raises(AttributeError):
            event.level = 2  # type: ignore[misc]

    def test_malformed_event_requires_error(self) -> None:
        with pytest.raises(TypeError):
            MalformedEvent(message="x")  # type: ignore[call-arg]

    def test_malformed_event_carries_error(self) -> None:
        err = EventDecodeError("bad")
        event = MalformedEvent(message="x", error=err)
        assert event.error is err
        assert event.event_type == LightpadEventType.UNDEF
