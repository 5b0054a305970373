"""High level client for Dreame robot vacuums."""

from __future__ import annotations

import asyncio
import datetime as dt
import logging
from typing import Any

from .actions import ActionInvoker, CallOptions
from .config import DeviceConfig
from .const import METHOD_GET_PROPERTIES, METHOD_INFO
from .fetcher import PropertyFetcher
from .history import CleaningHistory, HistoryDecoder
from .mappers import FanSpeed
from .property_catalog import PropertyRegistry, default_registry
from .result import check_result
from .state import CLEANING_STATES, PropertyCache, StateInterpreter, VacuumListener
from .transport import MiioTransport


class DreameVacuum:
    """Own the property pipeline and expose vacuum commands."""

    def __init__(
        self,
        *,
        transport: MiioTransport,
        config: DeviceConfig,
        listener: VacuumListener | None = None,
        registry: PropertyRegistry | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Wire the registry, cache, fetcher, invoker and interpreter."""

        self._logger = logger or logging.getLogger(__name__)
        self._transport = transport
        self.config = config
        self.registry = registry or default_registry()
        self.cache = PropertyCache()
        self.interpreter = StateInterpreter(cache=self.cache, listener=listener)
        self.fetcher = PropertyFetcher(
            transport=transport,
            registry=self.registry,
            cache=self.cache,
            on_property_updated=self.interpreter.property_updated,
        )
        self.invoker = ActionInvoker(
            transport=transport, fetcher=self.fetcher, logger=self._logger
        )
        self.history = HistoryDecoder(transport=transport)
        self._loop = loop
        self._monitor_handle: asyncio.TimerHandle | None = None
        self._monitor_tasks: set[asyncio.Task[Any]] = set()

    @property
    def charging(self) -> bool:
        """Return True when the robot reads as charging."""

        return self.interpreter.charging

    @property
    def cleaning(self) -> bool:
        """Return True when the robot is in one of the cleaning states."""

        return self.interpreter.current_state in CLEANING_STATES

    def property(self, name: str) -> Any:
        """Return the last known value of ``name``."""

        return self.cache.get(name)

    async def load_properties(self) -> dict[str, Any]:
        """Read every registered property from the device."""

        return await self.fetcher.fetch_all()

    def _state_refresh(self) -> CallOptions:
        return CallOptions(refresh=("state",), refresh_delay=self.config.refresh_delay)

    async def activate_cleaning(self) -> Any:
        """Start a cleaning session."""

        result = await self.invoker.invoke_action(3, 1, options=self._state_refresh())
        return check_result(result)

    async def deactivate_cleaning(self) -> Any:
        """Stop the current cleaning session."""

        result = await self.invoker.invoke_action(3, 2, options=self._state_refresh())
        return check_result(result)

    async def pause(self) -> Any:
        """Pause the current cleaning session."""

        result = await self.invoker.invoke_action(18, 2, [], options=self._state_refresh())
        return check_result(result)

    async def activate_charging(self) -> Any:
        """Stop cleaning and return to the dock."""

        return await self.invoker.invoke_action(2, 1, options=self._state_refresh())

    async def change_fan_speed(self, speed: FanSpeed | int) -> Any:
        """Set the suction power."""

        result = await self.invoker.set_property(
            18, 6, int(speed), options=CallOptions(refresh=("fanSpeed",))
        )
        return check_result(result)

    async def set_water_box_mode(self, mode: int) -> Any:
        """Set the water flow used by the mop module."""

        result = await self.invoker.set_property(
            18, 20, mode, options=CallOptions(refresh=("waterBoxMode",))
        )
        return check_result(result)

    async def get_water_box_mode(self) -> Any:
        """Return the cached water box mode."""

        return self.property("waterBoxMode")

    async def find(self) -> Any:
        """Make the robot play its locating sound."""

        return await self.invoker.invoke_action(17, 1)

    async def get_device_info(self) -> Any:
        """Return the miIO info block (firmware, model, network)."""

        return await self._transport.call(METHOD_INFO)

    async def get_timer(self) -> Any:
        """Return the raw do-not-disturb timer property."""

        return await self._transport.call(
            METHOD_GET_PROPERTIES, [{"did": "timer", "siid": 18, "piid": 5}]
        )

    async def get_serial_number(self) -> Any:
        """Return the serial number reported by property 1/3."""

        result = await self._transport.call(
            METHOD_GET_PROPERTIES, [{"did": "serial-number", "siid": 1, "piid": 3}]
        )
        for entry in result or []:
            if isinstance(entry, dict) and entry.get("did") == "serial-number":
                return entry.get("value")
        return None

    async def history_for_day(self, day: dt.date | int) -> CleaningHistory:
        """Return the cleaning runs recorded for ``day``."""

        return await self.history.history_for_day(day)

    def start_monitoring(self) -> asyncio.TimerHandle:
        """Reload all properties every ``monitor_interval``."""

        loop = self._loop or asyncio.get_running_loop()
        interval = self.config.monitor_interval.total_seconds()

        def _wrapper() -> None:
            task = loop.create_task(self._monitor_once())
            self._monitor_tasks.add(task)
            task.add_done_callback(self._monitor_tasks.discard)
            self._monitor_handle = loop.call_later(interval, _wrapper)

        if self._monitor_handle is not None:
            self._monitor_handle.cancel()
        self._monitor_handle = loop.call_later(interval, _wrapper)
        return self._monitor_handle

    async def _monitor_once(self) -> None:
        try:
            await self.load_properties()
        except Exception as err:  # noqa: BLE001 - keep polling after transport errors
            self._logger.warning("Failed to load properties: %s", err)

    def stop_monitoring(self) -> None:
        """Cancel periodic property reloads."""

        if self._monitor_handle is not None:
            self._monitor_handle.cancel()
            self._monitor_handle = None
        for task in list(self._monitor_tasks):
            task.cancel()

    async def async_close(self) -> None:
        """Stop monitoring and drop pending refreshes."""

        self.stop_monitoring()
        self.invoker.cancel_refreshes()

