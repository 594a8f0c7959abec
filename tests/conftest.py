"""Shared test fixtures for plumraw tests."""

from __future__ import annotations

import asyncio

import pytest


@pytest.fixture
def lightpad_id() -> str:
    """The ID a test lightpad announces."""
    return "8429176c-bf88-4aee-be07-b6a9064cf1ab"


@pytest.fixture
def announcement_payload(lightpad_id: str) -> bytes:
    """A heartbeat broadcast as sent by a lightpad."""
    return f"PLUM 8888 {lightpad_id} 8443".encode()


@pytest.fixture
def cancel() -> asyncio.Event:
    """Cancel signal handed to listeners."""
    return asyncio.Event()


@pytest.fixture
def sample_frames() -> list[bytes]:
    """Frames as they arrive on a lightpad's event stream."""
    return [
        b'{"type":"dimmerchange","Level":77}\n',
        b'{"type":"power","Watts":42}.\n',
        b"not json\n",
        b'{"type":"pirSignal","Signal":5}\n',
        b'{"type":"glowchange"}\n',
    ]
