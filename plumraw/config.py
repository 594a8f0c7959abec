"""Per-call configuration for the announcement listener and event subscriber."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import voluptuous as vol

from .const import (
    CONF_CONNECT_TIMEOUT,
    CONF_HOST,
    CONF_INBOX_SIZE,
    CONF_PORT,
    CONF_QUEUE_SIZE,
    CONF_READ_LIMIT,
    CONF_READ_TIMEOUT,
    CONF_RECEIVE_TIMEOUT,
    DEFAULT_ANNOUNCE_PORT,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_INBOX_SIZE,
    DEFAULT_LISTEN_HOST,
    DEFAULT_QUEUE_SIZE,
    DEFAULT_READ_LIMIT,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_RECEIVE_TIMEOUT,
    DEFAULT_STREAM_PORT,
)

PORT = vol.All(vol.Coerce(int), vol.Range(min=0, max=65535))
TIMEOUT = vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False))
SIZE = vol.All(vol.Coerce(int), vol.Range(min=1))

LISTENER_SCHEMA = vol.Schema({
    vol.Optional(CONF_HOST, default=DEFAULT_LISTEN_HOST): str,
    vol.Optional(CONF_PORT, default=DEFAULT_ANNOUNCE_PORT): PORT,
    vol.Optional(CONF_RECEIVE_TIMEOUT, default=DEFAULT_RECEIVE_TIMEOUT): TIMEOUT,
    vol.Optional(CONF_INBOX_SIZE, default=DEFAULT_INBOX_SIZE): SIZE,
})

SUBSCRIBER_SCHEMA = vol.Schema({
    vol.Optional(CONF_PORT, default=DEFAULT_STREAM_PORT): PORT,
    vol.Optional(CONF_CONNECT_TIMEOUT, default=DEFAULT_CONNECT_TIMEOUT): TIMEOUT,
    vol.Optional(CONF_READ_TIMEOUT, default=DEFAULT_READ_TIMEOUT): TIMEOUT,
    vol.Optional(CONF_QUEUE_SIZE, default=DEFAULT_QUEUE_SIZE): SIZE,
    vol.Optional(CONF_READ_LIMIT, default=DEFAULT_READ_LIMIT): SIZE,
})


@dataclass(frozen=True)
class ListenerConfig:
    """Settings for an AnnouncementListener."""

    host: str = DEFAULT_LISTEN_HOST
    port: int = DEFAULT_ANNOUNCE_PORT
    receive_timeout: float = DEFAULT_RECEIVE_TIMEOUT
    inbox_size: int = DEFAULT_INBOX_SIZE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ListenerConfig:
        """Validate a mapping and build a config. Raises vol.Invalid."""
        return cls(**LISTENER_SCHEMA(dict(data)))


@dataclass(frozen=True)
class SubscriberConfig:
    """Settings for an EventSubscriber."""

    port: int = DEFAULT_STREAM_PORT
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    read_timeout: float = DEFAULT_READ_TIMEOUT
    queue_size: int = DEFAULT_QUEUE_SIZE
    read_limit: int = DEFAULT_READ_LIMIT

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SubscriberConfig:
        """Validate a mapping and build a config. Raises vol.Invalid."""
        return cls(**SUBSCRIBER_SCHEMA(dict(data)))
