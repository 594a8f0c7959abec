"""Lightpad discovery on the local network."""

from .udp_listener import AnnouncementListener, LightpadAnnouncement, parse_announcement

__all__ = [
    "AnnouncementListener",
    "LightpadAnnouncement",
    "parse_announcement",
]
