"""Last-known property values keyed by property name."""

from __future__ import annotations

from typing import Any

_CHARGING = "charging"


class PropertyCache:
    """Plain shared store of decoded property values.

    Writes only come from the fetch path and the last write wins.
    """

    def __init__(self) -> None:
        """Create an empty cache."""

        self._values: dict[str, Any] = {}

    def set(self, name: str, value: Any) -> tuple[bool, Any]:
        """Store ``value`` and return ``(changed, previous_value)``."""

        previous = self._values.get(name)
        changed = name not in self._values or previous != value
        self._values[name] = value
        return changed, previous

    def raw(self, name: str) -> Any:
        """Return the stored value for ``name`` without read rules."""

        return self._values.get(name)

    def get(self, name: str) -> Any:
        """Return the value for ``name`` as integrations should see it.

        ``state`` reads as charging whenever the charging status says so, and
        ``sensorDirtyTime`` is not reported by this model.
        """

        if name == "state" and self._values.get("status") == _CHARGING:
            return _CHARGING
        if name == "sensorDirtyTime":
            return 0
        return self._values.get(name)

    def snapshot(self) -> dict[str, Any]:
        """Return a copy of the stored values."""

        return dict(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values
