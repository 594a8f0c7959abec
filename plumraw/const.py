"""Constants for the plumraw lightpad client."""

from __future__ import annotations

VERSION = "0.3.0"

# Announcement listener defaults
DEFAULT_LISTEN_HOST = "0.0.0.0"
DEFAULT_ANNOUNCE_PORT = 43770
DEFAULT_RECEIVE_TIMEOUT = 1.0  # seconds between cancel checks
DEFAULT_INBOX_SIZE = 16  # datagrams held while the consumer is slow
ANNOUNCEMENT_CHANNEL_SIZE = 1

# Event subscriber defaults
DEFAULT_STREAM_PORT = 2708
DEFAULT_CONNECT_TIMEOUT = 5.0  # seconds
DEFAULT_READ_TIMEOUT = 1.0  # seconds between cancel checks
DEFAULT_QUEUE_SIZE = 5
DEFAULT_READ_LIMIT = 64 * 1024  # longest accepted frame, bytes

# Config keys
CONF_HOST = "host"
CONF_PORT = "port"
CONF_RECEIVE_TIMEOUT = "receive_timeout"
CONF_INBOX_SIZE = "inbox_size"
CONF_CONNECT_TIMEOUT = "connect_timeout"
CONF_READ_TIMEOUT = "read_timeout"
CONF_QUEUE_SIZE = "queue_size"
CONF_READ_LIMIT = "read_limit"
