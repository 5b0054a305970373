"""Connection and timing settings for a vacuum."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

import voluptuous as vol

from .const import DEFAULT_MODEL, DEFAULT_MONITOR_INTERVAL, DEFAULT_REFRESH_DELAY

CONF_HOST = "host"
CONF_TOKEN = "token"
CONF_MODEL = "model"
CONF_MONITOR_INTERVAL = "monitor_interval"
CONF_REFRESH_DELAY = "refresh_delay"

DEVICE_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_HOST): vol.All(str, vol.Length(min=1)),
        vol.Required(CONF_TOKEN): vol.All(
            str, vol.Match(r"^[0-9a-fA-F]{32}$", msg="token must be 32 hex characters")
        ),
        vol.Optional(CONF_MODEL, default=DEFAULT_MODEL): str,
        vol.Optional(
            CONF_MONITOR_INTERVAL,
            default=int(DEFAULT_MONITOR_INTERVAL.total_seconds()),
        ): vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False)),
        vol.Optional(
            CONF_REFRESH_DELAY,
            default=int(DEFAULT_REFRESH_DELAY.total_seconds() * 1000),
        ): vol.All(vol.Coerce(float), vol.Range(min=0)),
    }
)


@dataclass(frozen=True, slots=True)
class DeviceConfig:
    """Validated settings for one vacuum."""

    host: str
    token: str
    model: str = DEFAULT_MODEL
    monitor_interval: timedelta = DEFAULT_MONITOR_INTERVAL
    refresh_delay: timedelta = DEFAULT_REFRESH_DELAY

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> DeviceConfig:
        """Validate ``payload`` and build the config.

        ``monitor_interval`` is given in seconds and ``refresh_delay`` in
        milliseconds.
        """

        data = DEVICE_SCHEMA(payload)
        return cls(
            host=data[CONF_HOST],
            token=data[CONF_TOKEN].lower(),
            model=data[CONF_MODEL],
            monitor_interval=timedelta(seconds=data[CONF_MONITOR_INTERVAL]),
            refresh_delay=timedelta(milliseconds=data[CONF_REFRESH_DELAY]),
        )
