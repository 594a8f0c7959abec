"""Lightpad event stream protocol."""

from .connection import EventSubscriber
from .constants import EventTag, LightpadEventType
from .messages import (
    ConfigChange,
    DimmerChange,
    EventDecodeError,
    LightpadEvent,
    MalformedEvent,
    MotionSignal,
    PowerChange,
    UnknownEvent,
    parse_frame,
)

__all__ = [
    "ConfigChange",
    "DimmerChange",
    "EventDecodeError",
    "EventSubscriber",
    "EventTag",
    "LightpadEvent",
    "LightpadEventType",
    "MalformedEvent",
    "MotionSignal",
    "PowerChange",
    "UnknownEvent",
    "parse_frame",
]
