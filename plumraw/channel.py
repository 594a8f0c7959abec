"""Bounded hand-off between a listener task and its consumer."""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Generic, TypeVar

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

# Marks the end of the stream inside the queue
_CLOSED = object()


class ChannelClosed(Exception):
    """Raised by Channel.receive once the channel is closed and drained."""

    def __init__(self, error: BaseException | None = None) -> None:
        super().__init__("channel closed" if error is None else f"channel closed: {error}")
        self.error = error


class Channel(Generic[T]):
    """Single-producer queue of values with an explicit end of stream.

    The producer closes the channel when its loop exits, optionally with the
    exception that ended it. Values already queued stay receivable; after
    them every receiver gets ChannelClosed and async iteration stops.
    """

    def __init__(self, maxsize: int) -> None:
        if maxsize < 1:
            raise ValueError("Channel size must be at least 1")
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self._closed = False
        self._sentinel_queued = False
        self._error: BaseException | None = None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def error(self) -> BaseException | None:
        """The exception that ended the producer, if any."""
        return self._error

    @property
    def maxsize(self) -> int:
        return self._queue.maxsize

    def qsize(self) -> int:
        """Number of values waiting, not counting the end-of-stream marker."""
        return self._queue.qsize() - (1 if self._sentinel_queued else 0)

    async def send(self, item: T, cancel: asyncio.Event) -> bool:
        """Queue a value, waiting for room unless cancel fires first.

        Returns False when the value was not delivered because cancel is set.
        """
        if self._closed:
            raise RuntimeError("send on closed channel")
        if cancel.is_set():
            return False
        if not self._queue.full():
            self._queue.put_nowait(item)
            return True

        put = asyncio.ensure_future(self._queue.put(item))
        stop = asyncio.ensure_future(cancel.wait())
        try:
            await asyncio.wait({put, stop}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            stop.cancel()
            if not put.done():
                put.cancel()
        return put.done() and not put.cancelled()

    def close(self, error: BaseException | None = None) -> None:
        """End the stream. Idempotent; the first error wins."""
        if self._closed:
            return
        self._closed = True
        self._error = error
        self._queue_sentinel()

    async def receive(self) -> T:
        """Return the next value. Raises ChannelClosed at end of stream."""
        item = await self._queue.get()
        if item is _CLOSED:
            # leave the marker for any other receiver
            self._queue.put_nowait(_CLOSED)
            raise ChannelClosed(self._error)
        if self._closed and not self._sentinel_queued:
            self._queue_sentinel()
        return item

    def __aiter__(self) -> AsyncIterator[T]:
        return self._iter()

    async def _iter(self) -> AsyncIterator[T]:
        while True:
            try:
                item = await self.receive()
            except ChannelClosed:
                return
            yield item

    def _queue_sentinel(self) -> None:
        try:
            self._queue.put_nowait(_CLOSED)
        except asyncio.QueueFull:
            # queued once a receiver frees a slot
            _LOGGER.debug("Channel full at close, deferring end-of-stream marker")
            return
        self._sentinel_queued = True
