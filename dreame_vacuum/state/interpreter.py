"""Derive charging, cleaning and fault notifications from property changes."""

from __future__ import annotations

import logging
from typing import Any

from .cache import PropertyCache

_LOGGER = logging.getLogger(__name__)

CLEANING_STATES = frozenset(
    {"cleaning", "spot-cleaning", "zone-cleaning", "room-cleaning"}
)
PAUSED_STATE = "paused"
ERROR_STATE = "error"

# States that raise a fixed fault instead of the decoded error property.
SYNTHETIC_ERRORS: dict[str, dict[str, str]] = {
    "charging-error": {
        "code": "charging-error",
        "message": "Error during charging",
    },
    "charger-offline": {
        "code": "charger-offline",
        "message": "Charger is offline",
    },
}


class VacuumListener:
    """Receiver of derived appliance notifications.

    Integrations subclass this and override the hooks they care about.
    """

    def on_charging_changed(self, charging: bool) -> None:  # pragma: no cover - hook
        """Handle a charging flag update."""

    def on_cleaning_changed(self, cleaning: bool) -> None:  # pragma: no cover - hook
        """Handle a cleaning flag update."""

    def on_fan_speed_changed(self, fan_speed: Any) -> None:  # pragma: no cover - hook
        """Handle a fan speed update."""

    def on_error(self, error: Any) -> None:  # pragma: no cover - hook
        """Handle a reported fault."""


class StateInterpreter:
    """React to property changes and notify a :class:`VacuumListener`."""

    def __init__(
        self, *, cache: PropertyCache, listener: VacuumListener | None = None
    ) -> None:
        """Bind the cache read for derived values and the listener to notify."""

        self._cache = cache
        self._listener = listener or VacuumListener()

    @property
    def listener(self) -> VacuumListener:
        """Return the listener receiving notifications."""

        return self._listener

    @listener.setter
    def listener(self, listener: VacuumListener) -> None:
        self._listener = listener

    @property
    def current_state(self) -> str | None:
        """Return the working state, or None before the first fetch."""

        return self._cache.get("state")

    @property
    def charging(self) -> bool:
        """Return True when the charging status reports charging.

        Only the 2/2 status counts; a working state of charging alone does not.
        """

        return self._cache.raw("status") == "charging"

    def property_updated(self, key: str, value: Any, old_value: Any) -> None:
        """Entry point called by the fetcher whenever a property changes."""

        _LOGGER.debug("Property %s changed from %s to %s", key, old_value, value)
        self._listener.on_charging_changed(self.charging)
        if key == "state":
            self._enter_state(value)
        elif key == "fanSpeed":
            self._listener.on_fan_speed_changed(value)

    def _enter_state(self, state: Any) -> None:
        if state in CLEANING_STATES:
            self._listener.on_cleaning_changed(True)
        elif state == PAUSED_STATE:
            return
        elif state == ERROR_STATE:
            self._listener.on_error(self._cache.get("error"))
        elif state in SYNTHETIC_ERRORS:
            self._listener.on_error(dict(SYNTHETIC_ERRORS[state]))
        else:
            self._listener.on_cleaning_changed(False)
