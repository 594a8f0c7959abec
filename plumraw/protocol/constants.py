"""Lightpad wire protocol constants."""

from __future__ import annotations

from enum import IntEnum, StrEnum

# Announcement datagram: "PLUM 8888 <lightpad id> <port>"
ANNOUNCEMENT_PREFIX = "PLUM 8888"
ANNOUNCEMENT_SEPARATOR = " "
ANNOUNCEMENT_TOKENS = 4

# Event stream framing
FRAME_SEPARATOR = b"\n"
FRAME_TERMINATOR = "."
ENVELOPE_TYPE_FIELD = "type"


class EventTag(StrEnum):
    """Values of the ``type`` field a lightpad sends on its event stream."""

    DIMMER_CHANGE = "dimmerchange"
    POWER = "power"
    PIR_SIGNAL = "pirSignal"


class LightpadEventType(IntEnum):
    """Kinds of event emitted by an event subscriber."""

    UNDEF = 0
    DIMMER_CHANGE = 1
    POWER = 2
    PIR_SIGNAL = 3
    CONFIG_CHANGE = 4
