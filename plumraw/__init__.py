"""Client runtime for Plum lightpad discovery and event streams."""

from .channel import Channel, ChannelClosed
from .config import ListenerConfig, SubscriberConfig
from .const import VERSION
from .discovery import AnnouncementListener, LightpadAnnouncement, parse_announcement
from .protocol import (
    ConfigChange,
    DimmerChange,
    EventDecodeError,
    EventSubscriber,
    LightpadEvent,
    LightpadEventType,
    MalformedEvent,
    MotionSignal,
    PowerChange,
    UnknownEvent,
    parse_frame,
)

__version__ = VERSION

__all__ = [
    "AnnouncementListener",
    "Channel",
    "ChannelClosed",
    "ConfigChange",
    "DimmerChange",
    "EventDecodeError",
    "EventSubscriber",
    "LightpadAnnouncement",
    "LightpadEvent",
    "LightpadEventType",
    "ListenerConfig",
    "MalformedEvent",
    "MotionSignal",
    "PowerChange",
    "SubscriberConfig",
    "UnknownEvent",
    "parse_announcement",
    "parse_frame",
]
