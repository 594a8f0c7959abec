"""UDP broadcast listener for lightpad announcements."""

from __future__ import annotations

import asyncio
import ipaddress
import logging
import re
from dataclasses import dataclass

from ..channel import Channel
from ..config import ListenerConfig
from ..const import ANNOUNCEMENT_CHANNEL_SIZE, DEFAULT_STREAM_PORT
from ..protocol.constants import (
    ANNOUNCEMENT_PREFIX,
    ANNOUNCEMENT_SEPARATOR,
    ANNOUNCEMENT_TOKENS,
)

_LOGGER = logging.getLogger(__name__)

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address

# Same grammar as a signed decimal integer, ASCII digits only
PORT_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class LightpadAnnouncement:
    """A lightpad heartbeat: who it is and where its command API listens."""

    lightpad_id: str
    ip: IPAddress
    port: int

    @property
    def stream_address(self) -> tuple[str, int]:
        """Address of the lightpad's event stream."""
        return str(self.ip), DEFAULT_STREAM_PORT


def parse_announcement(data: bytes, addr: tuple) -> LightpadAnnouncement | None:
    """Decode one announcement datagram. Returns None if it isn't one."""
    msg = data.decode("utf-8", errors="ignore")
    if not msg.startswith(ANNOUNCEMENT_PREFIX):
        return None

    bits = msg.split(ANNOUNCEMENT_SEPARATOR)
    if len(bits) != ANNOUNCEMENT_TOKENS:
        _LOGGER.debug(
            "Ignoring announcement from %s with %d tokens: %r",
            addr[0], len(bits), msg,
        )
        return None

    if not PORT_PATTERN.fullmatch(bits[3]):
        _LOGGER.debug("Couldn't parse port from lightpad announcement: %r", bits[3])
        return None
    port = int(bits[3])

    try:
        ip = ipaddress.ip_address(addr[0])
    except ValueError:
        _LOGGER.debug("Announcement from unparseable address %r", addr[0])
        return None

    return LightpadAnnouncement(lightpad_id=bits[2], ip=ip, port=port)


class AnnouncementListener:
    """Listens for lightpad heartbeat broadcasts and emits announcements."""

    def __init__(self, config: ListenerConfig | None = None) -> None:
        self._config = config or ListenerConfig()
        self._transport: asyncio.DatagramTransport | None = None
        self._task: asyncio.Task | None = None

    @property
    def config(self) -> ListenerConfig:
        return self._config

    @property
    def is_listening(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def local_address(self) -> tuple | None:
        """The bound (host, port), or None when not listening."""
        if self._transport is None:
            return None
        return self._transport.get_extra_info("sockname")

    async def listen(self, cancel: asyncio.Event) -> Channel[LightpadAnnouncement]:
        """Bind the announcement port and start receiving in the background.

        Returns the channel announcements are sent down. Setting ``cancel``
        stops the listener and closes the socket. Raises OSError if the port
        can't be bound.
        """
        if self.is_listening:
            raise RuntimeError("Listener is already running")

        loop = asyncio.get_running_loop()
        inbox: asyncio.Queue = asyncio.Queue(maxsize=self._config.inbox_size)

        _LOGGER.debug(
            "About to listen for lightpad heartbeats on %s:%s",
            self._config.host, self._config.port,
        )
        transport, _ = await loop.create_datagram_endpoint(
            lambda: _AnnouncementProtocol(inbox),
            local_addr=(self._config.host, self._config.port),
            allow_broadcast=True,
        )
        self._transport = transport

        channel: Channel[LightpadAnnouncement] = Channel(ANNOUNCEMENT_CHANNEL_SIZE)
        self._task = asyncio.ensure_future(self._receive_loop(transport, inbox, channel, cancel))
        return channel

    async def wait_closed(self) -> None:
        """Wait for the receive loop to finish."""
        if self._task is not None:
            await asyncio.shield(self._task)

    async def _receive_loop(
        self,
        transport: asyncio.DatagramTransport,
        inbox: asyncio.Queue,
        channel: Channel[LightpadAnnouncement],
        cancel: asyncio.Event,
    ) -> None:
        """Background task that pulls datagrams until cancelled."""
        error: Exception | None = None
        try:
            while not cancel.is_set():
                try:
                    item = await asyncio.wait_for(inbox.get(), timeout=self._config.receive_timeout)
                except asyncio.TimeoutError:
                    continue

                if isinstance(item, Exception):
                    _LOGGER.debug("Announcement listener stopping on receive error: %s", item)
                    error = item
                    break

                data, addr = item
                _LOGGER.debug("Received %r from %s", data, addr)
                announcement = parse_announcement(data, addr)
                if announcement is None:
                    continue

                if not await channel.send(announcement, cancel):
                    break
        finally:
            transport.close()
            self._transport = None
            channel.close(error)
            _LOGGER.debug("Stopped listening for lightpad heartbeats")


class _AnnouncementProtocol(asyncio.DatagramProtocol):
    """Internal DatagramProtocol feeding the listener's inbox."""

    def __init__(self, inbox: asyncio.Queue) -> None:
        self._inbox = inbox

    def datagram_received(self, data: bytes, addr: tuple) -> None:
        try:
            self._inbox.put_nowait((data, addr))
        except asyncio.QueueFull:
            _LOGGER.debug("Dropping datagram from %s, consumer is behind", addr[0])

    def error_received(self, exc: Exception) -> None:
        self._fail(exc)

    def connection_lost(self, exc: Exception | None) -> None:
        if exc is not None:
            self._fail(exc)

    def _fail(self, exc: Exception) -> None:
        # the loop must see the error even when datagrams are piled up
        if self._inbox.full():
            self._inbox.get_nowait()
        self._inbox.put_nowait(exc)
