"""Decode tables translating raw device codes into readable values."""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum
from typing import Any

from .const import SECONDS_PER_HOUR

CodeTable = tuple[tuple[int, Any], ...]


class FanSpeed(IntEnum):
    """Suction power levels accepted by property 18/6."""

    SILENT = 0
    STANDARD = 1
    STRONG = 2
    TURBO = 3


# Property 3/2, the working state of the robot.
VACUUM_STATES: CodeTable = (
    (1, "cleaning"),
    (2, "waiting"),
    (3, "paused"),
    (4, "error"),
    (5, "returning"),
    (6, "charging"),
)

# Property 2/2, the charging state reported by the battery service.
CHARGING_STATES: CodeTable = (
    (1, "charging"),
    (2, "not charging"),
    (4, "charging"),
    (5, "returning"),
)

# Property 3/1. Codes 21-29 repeat the faults of 1-9.
ERROR_CODES: CodeTable = (
    (0, "no error"),
    (1, "drop"),
    (2, "cliff"),
    (3, "bumper"),
    (4, "gesture"),
    (5, "bumper_repeat"),
    (6, "drop_repeat"),
    (7, "optical_flow"),
    (8, "no box"),
    (9, "no tankbox"),
    (10, "waterbox empty"),
    (11, "box full"),
    (12, "brush"),
    (13, "side brush"),
    (14, "fan"),
    (15, "left wheel motor"),
    (16, "right wheel motor"),
    (17, "turn suffocate"),
    (18, "forward suffocate"),
    (19, "charger get"),
    (20, "battery low"),
    (21, "drop"),
    (22, "cliff"),
    (23, "bumper"),
    (24, "gesture"),
    (25, "bumper_repeat"),
    (26, "drop_repeat"),
    (27, "optical_flow"),
    (28, "no box"),
    (29, "no tankbox"),
)

_VACUUM_STATE_LOOKUP = dict(VACUUM_STATES)
_CHARGING_STATE_LOOKUP = dict(CHARGING_STATES)
_ERROR_LOOKUP = dict(ERROR_CODES)

def _unknown(code: Any) -> str:
    return f"unknown-{code}"


def decode_vacuum_state(code: Any) -> str:
    """Return the working state label for ``code``."""

    return _VACUUM_STATE_LOOKUP.get(code, _unknown(code))


def decode_charging_state(code: Any) -> str:
    """Return the charging state label for ``code``."""

    return _CHARGING_STATE_LOOKUP.get(code, _unknown(code))


def decode_error(code: Any) -> str | dict[str, Any]:
    """Return the fault label for ``code``.

    Unmapped codes are kept as a fault object carrying the original number so
    that consumers can still tell unknown faults apart.
    """

    label = _ERROR_LOOKUP.get(code)
    if label is None:
        return {"code": code, "message": f"Unknown error {code}"}
    return label


def hours_to_seconds(hours: Any) -> Any:
    """Convert consumable work time from hours to seconds."""

    if hours is None:
        return None
    return hours * SECONDS_PER_HOUR


MAPPERS: dict[str, Callable[[Any], Any]] = {
    "vacuum_state": decode_vacuum_state,
    "charging_state": decode_charging_state,
    "error": decode_error,
    "hours": hours_to_seconds,
}
