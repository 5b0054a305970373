"""Constants shared across the Dreame vacuum client."""

from __future__ import annotations

from datetime import timedelta

DEFAULT_MODEL = "dreame.vacuum.generic"

METHOD_ACTION = "action"
METHOD_SET_PROPERTIES = "set_properties"
METHOD_GET_PROPERTIES = "get_properties"
METHOD_GET_CLEAN_RECORD = "get_clean_record"
METHOD_INFO = "miIO.info"

# Some firmware answers an empty batch read with this literal.
NO_DATA_PLACEHOLDER = "undefined"

DEFAULT_MONITOR_INTERVAL = timedelta(seconds=60)
DEFAULT_REFRESH_DELAY = timedelta(milliseconds=1000)

AREA_UNITS_PER_SQUARE_METER = 1_000_000
SECONDS_PER_HOUR = 3600
