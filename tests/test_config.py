"""Tests for listener and subscriber configuration."""

from __future__ import annotations

import pytest
import voluptuous as vol

from plumraw.config import ListenerConfig, SubscriberConfig
from plumraw.const import CONF_HOST, CONF_PORT, CONF_QUEUE_SIZE, CONF_READ_TIMEOUT


class TestListenerConfig:
    def test_defaults(self) -> None:
        config = ListenerConfig.from_dict({})
        assert config == ListenerConfig()
        assert config.host == "0.0.0.0"
        assert config.port == 43770
        assert config.receive_timeout == 1.0

    def test_coerces_values(self) -> None:
        config = ListenerConfig.from_dict({CONF_HOST: "127.0.0.1", CONF_PORT: "4000"})
        assert config.host == "127.0.0.1"
        assert config.port == 4000

    @pytest.mark.parametrize("port", [-1, 70000, "abc"])
    def test_bad_port(self, port) -> None:
        with pytest.raises(vol.Invalid):
            ListenerConfig.from_dict({CONF_PORT: port})

    def test_unknown_key(self) -> None:
        with pytest.raises(vol.Invalid):
            ListenerConfig.from_dict({"bogus": 1})


class TestSubscriberConfig:
    def test_defaults(self) -> None:
        config = SubscriberConfig.from_dict({})
        assert config.port == 2708
        assert config.connect_timeout == 5.0
        assert config.read_timeout == 1.0
        assert config.queue_size == 5

    def test_read_timeout_must_be_positive(self) -> None:
        with pytest.raises(vol.Invalid):
            SubscriberConfig.from_dict({CONF_READ_TIMEOUT: 0})

    def test_queue_size_must_be_positive(self) -> None:
        with pytest.raises(vol.Invalid):
            SubscriberConfig.from_dict({CONF_QUEUE_SIZE: 0})

    def test_frozen(self) -> None:
        config = SubscriberConfig()
        with pytest.raises(AttributeError):
            config.port = 1  # type: ignore[misc]
