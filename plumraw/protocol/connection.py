"""Async TCP event stream subscription for a single lightpad."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ..channel import Channel
from ..config import SubscriberConfig
from .constants import FRAME_SEPARATOR
from .messages import EventDecodeError, LightpadEvent, MalformedEvent, parse_frame

if TYPE_CHECKING:
    from ..discovery.udp_listener import LightpadAnnouncement

_LOGGER = logging.getLogger(__name__)


class EventSubscriber:
    """Streams state changes from one lightpad.

    Each call to :meth:`subscribe` opens its own connection and read task;
    the connection is closed when the cancel event is set, the lightpad
    closes the stream, or the socket fails.
    """

    def __init__(
        self,
        config: SubscriberConfig | None = None,
        lightpad_id: str | None = None,
    ) -> None:
        self._config = config or SubscriberConfig()
        self._lightpad_id = lightpad_id
        self._read_task: asyncio.Task | None = None

    @property
    def config(self) -> SubscriberConfig:
        return self._config

    @property
    def lightpad_id(self) -> str | None:
        return self._lightpad_id

    @property
    def is_subscribed(self) -> bool:
        return self._read_task is not None and not self._read_task.done()

    async def subscribe(
        self,
        host: str,
        cancel: asyncio.Event,
        *,
        port: int | None = None,
    ) -> Channel[LightpadEvent]:
        """Connect to the lightpad's event stream and start reading it.

        Returns the channel events are sent down. Raises ConnectionError if
        the connection can't be made.
        """
        if self.is_subscribed:
            raise RuntimeError("Subscriber is already running")

        port = self._config.port if port is None else port
        _LOGGER.debug("Connecting to lightpad %s at %s:%s", self._lightpad_id, host, port)

        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port, limit=self._config.read_limit),
                timeout=self._config.connect_timeout,
            )
        except (asyncio.TimeoutError, OSError) as err:
            _LOGGER.debug("Failed to connect to lightpad %s: %s", self._lightpad_id, err)
            raise ConnectionError(f"Failed to connect to {host}:{port}: {err}") from err

        _LOGGER.info("Subscribed to lightpad %s at %s:%s", self._lightpad_id, host, port)

        channel: Channel[LightpadEvent] = Channel(self._config.queue_size)
        self._read_task = asyncio.ensure_future(self._read_loop(reader, writer, channel, cancel))
        return channel

    async def subscribe_announcement(
        self,
        announcement: LightpadAnnouncement,
        cancel: asyncio.Event,
    ) -> Channel[LightpadEvent]:
        """Subscribe to the lightpad that sent ``announcement``."""
        if self._lightpad_id is None:
            self._lightpad_id = announcement.lightpad_id
        return await self.subscribe(str(announcement.ip), cancel)

    async def wait_closed(self) -> None:
        """Wait for the read loop to finish."""
        if self._read_task is not None:
            await asyncio.shield(self._read_task)

    async def _read_loop(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        channel: Channel[LightpadEvent],
        cancel: asyncio.Event,
    ) -> None:
        """Background task that reads one frame per line until cancelled.

        A line longer than ``read_limit`` is drained up to its newline, across
        as many reads as it takes, and reported as a single MalformedEvent.
        """
        error: Exception | None = None
        overlong = False
        try:
            while not cancel.is_set():
                eof = False
                try:
                    line = await asyncio.wait_for(
                        reader.readuntil(FRAME_SEPARATOR),
                        timeout=self._config.read_timeout,
                    )
                except asyncio.TimeoutError:
                    continue
                except asyncio.IncompleteReadError as err:
                    line, eof = err.partial, True
                except asyncio.LimitOverrunError as err:
                    # drop the buffered part and keep going until the newline
                    await reader.read(err.consumed)
                    overlong = True
                    continue

                if overlong:
                    overlong = False
                    event: LightpadEvent = MalformedEvent(
                        message="",
                        error=EventDecodeError(f"frame longer than {self._config.read_limit} bytes"),
                    )
                elif line:
                    event = parse_frame(line.decode("utf-8", errors="replace"))
                else:
                    _LOGGER.debug("Lightpad %s closed the event stream", self._lightpad_id)
                    break

                if not await channel.send(event, cancel):
                    break
                if eof:
                    _LOGGER.debug("Lightpad %s closed the event stream", self._lightpad_id)
                    break
            else:
                _LOGGER.debug("Subscription to lightpad %s cancelled", self._lightpad_id)
        except OSError as err:
            _LOGGER.debug("Event stream from lightpad %s failed: %s", self._lightpad_id, err)
            error = err
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except OSError:
                pass
            channel.close(error)
            _LOGGER.info("Unsubscribed from lightpad %s", self._lightpad_id)
