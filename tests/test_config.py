"""Tests for device configuration validation."""

from __future__ import annotations

from datetime import timedelta

import pytest
import voluptuous as vol

from dreame_vacuum.config import DEVICE_SCHEMA, DeviceConfig

TOKEN = "0123456789ABCDEF0123456789abcdef"


def test_defaults_applied() -> None:
    """Optional settings fall back to their defaults."""

    config = DeviceConfig.from_dict({"host": "192.168.1.20", "token": TOKEN})

    assert config.host == "192.168.1.20"
    assert config.token == TOKEN.lower()
    assert config.model == "dreame.vacuum.generic"
    assert config.monitor_interval == timedelta(seconds=60)
    assert config.refresh_delay == timedelta(milliseconds=1000)


def test_units_are_converted() -> None:
    """Intervals are seconds and refresh delays are milliseconds."""

    config = DeviceConfig.from_dict(
        {
            "host": "vacuum.local",
            "token": TOKEN,
            "model": "dreame.vacuum.p2008",
            "monitor_interval": 30,
            "refresh_delay": "250",
        }
    )

    assert config.model == "dreame.vacuum.p2008"
    assert config.monitor_interval == timedelta(seconds=30)
    assert config.refresh_delay == timedelta(milliseconds=250)


@pytest.mark.parametrize(
    "payload",
    [
        {"token": TOKEN},
        {"host": "vacuum.local"},
        {"host": "vacuum.local", "token": "short"},
        {"host": "", "token": TOKEN},
        {"host": "vacuum.local", "token": TOKEN, "monitor_interval": 0},
        {"host": "vacuum.local", "token": TOKEN, "refresh_delay": -1},
        {"host": "vacuum.local", "token": TOKEN, "unexpected": True},
    ],
)
def test_invalid_settings(payload: dict) -> None:
    """Invalid settings are rejected by the schema."""

    with pytest.raises(vol.Invalid):
        DEVICE_SCHEMA(payload)
