"""Build action and set-property payloads and schedule follow-up reads."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from .const import METHOD_ACTION, METHOD_SET_PROPERTIES
from .fetcher import PropertyFetcher
from .transport import MiioTransport


@dataclass(frozen=True, slots=True)
class CallOptions:
    """Properties to re-read once a call completes, and how long to wait."""

    refresh: tuple[str, ...] = ()
    refresh_delay: timedelta | None = None

    @classmethod
    def from_millis(cls, refresh: Sequence[str], delay_ms: float | None = None) -> CallOptions:
        """Build options with a delay expressed in milliseconds."""

        delay = timedelta(milliseconds=delay_ms) if delay_ms is not None else None
        return cls(refresh=tuple(refresh), refresh_delay=delay)


def action_payload(siid: int, aiid: int, params: Sequence[Any] | None = None) -> dict[str, Any]:
    """Return the ``action`` payload for ``siid``/``aiid``."""

    return {
        "did": f"call-{siid}-{aiid}",
        "siid": siid,
        "aiid": aiid,
        "in": list(params) if params is not None else [],
    }


def set_property_payload(siid: int, piid: int, value: Any) -> list[dict[str, Any]]:
    """Return the single-entry ``set_properties`` batch."""

    return [
        {
            "did": f"set-{siid}-{piid}",
            "siid": siid,
            "piid": piid,
            "value": value,
        }
    ]


class ActionInvoker:
    """Send actions and property writes, then refresh affected properties."""

    def __init__(
        self,
        *,
        transport: MiioTransport,
        fetcher: PropertyFetcher,
        logger: logging.Logger | None = None,
    ) -> None:
        """Bind the transport and the fetcher used for refreshes."""

        self._transport = transport
        self._fetcher = fetcher
        self._logger = logger or logging.getLogger(__name__)
        self._refresh_logger = self._logger.getChild("refresh")
        self._timers: set[asyncio.TimerHandle] = set()
        self._pending_tasks: set[asyncio.Task[Any]] = set()

    @property
    def pending_refreshes(self) -> int:
        """Return the number of scheduled or running refreshes."""

        return len(self._timers) + len(self._pending_tasks)

    async def invoke_action(
        self,
        siid: int,
        aiid: int,
        params: Sequence[Any] | None = None,
        options: CallOptions | None = None,
    ) -> Any:
        """Run action ``siid``/``aiid`` and return the raw result."""

        payload = action_payload(siid, aiid, params)
        return await self._call(METHOD_ACTION, payload, options)

    async def set_property(
        self,
        siid: int,
        piid: int,
        value: Any,
        options: CallOptions | None = None,
    ) -> Any:
        """Write ``value`` to property ``siid``/``piid`` and return the raw result."""

        payload = set_property_payload(siid, piid, value)
        return await self._call(METHOD_SET_PROPERTIES, payload, options)

    async def _call(self, method: str, payload: Any, options: CallOptions | None) -> Any:
        self._logger.debug("Calling %s with %s", method, payload)
        result = await self._transport.call(method, payload)
        if options is not None and options.refresh:
            self._schedule_refresh(options.refresh, options.refresh_delay)
        return result

    def _schedule_refresh(self, names: tuple[str, ...], delay: timedelta | None) -> None:
        loop = asyncio.get_running_loop()
        seconds = delay.total_seconds() if delay is not None else 0
        handle: asyncio.TimerHandle | None = None

        def _start() -> None:
            self._timers.discard(handle)
            task = loop.create_task(self._fetcher.fetch(names))
            self._pending_tasks.add(task)
            task.add_done_callback(self._refresh_done)

        handle = loop.call_later(seconds, _start)
        self._timers.add(handle)

    def _refresh_done(self, task: asyncio.Task[Any]) -> None:
        self._pending_tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self._refresh_logger.warning("Property refresh failed: %s", error)

    async def async_wait_refreshes(self) -> None:
        """Wait until every scheduled refresh has run."""

        loop = asyncio.get_running_loop()
        while self._timers or self._pending_tasks:
            if self._pending_tasks:
                await asyncio.gather(*list(self._pending_tasks), return_exceptions=True)
                continue
            due = min(handle.when() for handle in self._timers)
            await asyncio.sleep(max(0.0, due - loop.time()))

    def cancel_refreshes(self) -> None:
        """Cancel scheduled refreshes and any refresh still running."""

        for handle in list(self._timers):
            handle.cancel()
        self._timers.clear()
        for task in list(self._pending_tasks):
            task.cancel()
        self._pending_tasks.clear()
