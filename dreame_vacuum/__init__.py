"""Client mapping Dreame robot vacuum properties and actions over miIO."""

from __future__ import annotations

from .actions import ActionInvoker, CallOptions
from .config import DEVICE_SCHEMA, DeviceConfig
from .device import DreameVacuum
from .exceptions import CallFailed, DreameVacuumError, UnknownPropertyError
from .fetcher import PropertyFetcher
from .history import CleaningHistory, HistoryDecoder, HistoryRecord
from .mappers import FanSpeed
from .property_catalog import (
    DeviceKey,
    PropertyDefinition,
    PropertyRegistry,
    default_registry,
)
from .result import check_result
from .state import PropertyCache, StateInterpreter, VacuumListener

__all__ = [
    "DEVICE_SCHEMA",
    "ActionInvoker",
    "CallFailed",
    "CallOptions",
    "CleaningHistory",
    "DeviceConfig",
    "DeviceKey",
    "DreameVacuum",
    "DreameVacuumError",
    "FanSpeed",
    "HistoryDecoder",
    "HistoryRecord",
    "PropertyCache",
    "PropertyDefinition",
    "PropertyFetcher",
    "PropertyRegistry",
    "StateInterpreter",
    "UnknownPropertyError",
    "VacuumListener",
    "check_result",
    "default_registry",
]
