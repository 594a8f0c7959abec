"""Lightpad event stream messages and their two-phase decoding."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar

from .constants import ENVELOPE_TYPE_FIELD, FRAME_TERMINATOR, EventTag, LightpadEventType

_LOGGER = logging.getLogger(__name__)


class EventDecodeError(ValueError):
    """A frame was valid JSON but did not have the expected shape."""


class LightpadEvent:
    """Base class for everything emitted on a lightpad's event stream."""

    event_type: ClassVar[LightpadEventType] = LightpadEventType.UNDEF
    error: Exception | None = None


@dataclass(frozen=True)
class DimmerChange(LightpadEvent):
    """The load level changed (0-255)."""

    event_type = LightpadEventType.DIMMER_CHANGE
    level: int


@dataclass(frozen=True)
class PowerChange(LightpadEvent):
    """The load's power draw changed."""

    event_type = LightpadEventType.POWER
    watts: int


@dataclass(frozen=True)
class MotionSignal(LightpadEvent):
    """The motion sensor reported a reading."""

    event_type = LightpadEventType.PIR_SIGNAL
    signal: int


@dataclass(frozen=True)
class ConfigChange(LightpadEvent):
    """The lightpad's configuration changed."""

    event_type = LightpadEventType.CONFIG_CHANGE


@dataclass(frozen=True)
class UnknownEvent(LightpadEvent):
    """A well-formed frame with a type tag we don't know.

    ``message`` is the frame text as received (after trimming) so callers can
    handle notifications from newer firmware themselves.
    """

    message: str
    kind: str = ""


@dataclass(frozen=True)
class MalformedEvent(LightpadEvent):
    """A frame that could not be decoded."""

    message: str
    # required, never the base class None
    error: Exception = field()


# tag -> (event class, payload field)
_VARIANTS: dict[str, tuple[type[LightpadEvent], str]] = {
    EventTag.DIMMER_CHANGE: (DimmerChange, "level"),
    EventTag.POWER: (PowerChange, "watts"),
    EventTag.PIR_SIGNAL: (MotionSignal, "signal"),
}


def trim_frame(frame: str) -> str:
    """Strip whitespace and one trailing period from a raw frame."""
    return frame.strip().removesuffix(FRAME_TERMINATOR)


def parse_frame(frame: str) -> LightpadEvent:
    """Decode one frame of the event stream into exactly one event.

    The envelope is read first for its type tag, then the body is decoded
    for the matching variant. Failures never raise; they come back as a
    MalformedEvent.
    """
    message = trim_frame(frame)

    try:
        envelope = json.loads(message)
    except ValueError as err:
        _LOGGER.debug("Malformed frame %r: %s", message, err)
        return MalformedEvent(message=message, error=err)

    if envelope is None:
        envelope = {}
    if not isinstance(envelope, dict):
        err = EventDecodeError(f"expected a JSON object, got {type(envelope).__name__}")
        _LOGGER.debug("Malformed frame %r: %s", message, err)
        return MalformedEvent(message=message, error=err)

    kind = _lookup(envelope, ENVELOPE_TYPE_FIELD)
    if kind is None:
        kind = ""
    elif not isinstance(kind, str):
        err = EventDecodeError(f"type tag must be a string, got {type(kind).__name__}")
        _LOGGER.debug("Malformed frame %r: %s", message, err)
        return MalformedEvent(message=message, error=err)

    variant = _VARIANTS.get(kind)
    if variant is None:
        return UnknownEvent(message=message, kind=kind)

    event_cls, field_name = variant
    try:
        value = _int_field(envelope, field_name)
    except EventDecodeError as err:
        _LOGGER.debug("Bad %s body %r: %s", kind, message, err)
        return MalformedEvent(message=message, error=err)
    return event_cls(**{field_name: value})


def _lookup(payload: dict[str, Any], name: str) -> Any:
    """Get a field by name, falling back to a case-insensitive match.

    Lightpads send ``type`` in lower case but capitalise body fields
    (``Level``, ``Watts``, ``Signal``).
    """
    if name in payload:
        return payload[name]
    folded = name.casefold()
    for key, value in payload.items():
        if key.casefold() == folded:
            return value
    return None


def _int_field(payload: dict[str, Any], name: str) -> int:
    value = _lookup(payload, name)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise EventDecodeError(f"{name} must be an integer, got {value!r}")
    return value
