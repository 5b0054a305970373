"""Decode per-day cleaning records."""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from .const import AREA_UNITS_PER_SQUARE_METER, METHOD_GET_CLEAN_RECORD
from .transport import MiioTransport

_LOGGER = logging.getLogger(__name__)

_MIN_RECORD_LENGTH = 6


@dataclass(frozen=True, slots=True)
class HistoryRecord:
    """One cleaning run."""

    start: dt.datetime
    end: dt.datetime
    duration: int
    area: float
    complete: bool

    @classmethod
    def from_raw(cls, row: Sequence[Any]) -> HistoryRecord:
        """Decode ``[start, end, duration, area_mm2, _, complete, ...]``."""

        return cls(
            start=dt.datetime.fromtimestamp(row[0], tz=dt.timezone.utc),
            end=dt.datetime.fromtimestamp(row[1], tz=dt.timezone.utc),
            duration=row[2],
            area=row[3] / AREA_UNITS_PER_SQUARE_METER,
            complete=row[5] == 1,
        )


@dataclass(frozen=True, slots=True)
class CleaningHistory:
    """Cleaning runs recorded for a single day."""

    day: Any
    history: list[HistoryRecord] = field(default_factory=list)


def day_record_id(day: dt.date | int) -> int:
    """Return the record id the device expects for ``day``.

    A plain date is taken as local midnight.
    """

    if isinstance(day, dt.datetime):
        return int(day.timestamp())
    if isinstance(day, dt.date):
        return int(dt.datetime.combine(day, dt.time.min).timestamp())
    return day


class HistoryDecoder:
    """Query and decode cleaning records; nothing is cached."""

    def __init__(self, *, transport: MiioTransport) -> None:
        """Bind the transport used for record queries."""

        self._transport = transport

    async def history_for_day(self, day: dt.date | int) -> CleaningHistory:
        """Return the cleaning runs for ``day``.

        ``day`` is a date, a datetime or a day id previously returned by the
        device.
        """

        result = await self._transport.call(
            METHOD_GET_CLEAN_RECORD, [day_record_id(day)]
        )
        records: list[HistoryRecord] = []
        for row in result or []:
            if not isinstance(row, Sequence) or len(row) < _MIN_RECORD_LENGTH:
                _LOGGER.warning("Skipping malformed cleaning record: %s", row)
                continue
            records.append(HistoryRecord.from_raw(row))
        return CleaningHistory(day=day, history=records)
