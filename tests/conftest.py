"""Pytest configuration for the Dreame vacuum client tests."""

from __future__ import annotations

import asyncio
import inspect
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

root_path = Path(__file__).resolve().parent.parent
if str(root_path) not in sys.path:
    sys.path.insert(0, str(root_path))


class FakeTransport:
    """Record miIO calls and answer them from a responder or a queue."""

    def __init__(self, responder: Callable[[str, Any], Any] | None = None) -> None:
        """Initialise call storage."""

        self.calls: list[tuple[str, Any]] = []
        self.replies: list[Any] = []
        self.responder = responder

    async def call(self, method: str, params: Any = None) -> Any:
        """Record the call and return the next scripted reply."""

        self.calls.append((method, params))
        if self.responder is not None:
            reply = self.responder(method, params)
        elif self.replies:
            reply = self.replies.pop(0)
        else:
            reply = None
        if isinstance(reply, Exception):
            raise reply
        return reply

    def calls_for(self, method: str) -> list[Any]:
        """Return the params of every call made with ``method``."""

        return [params for name, params in self.calls if name == method]


class RecordingListener:
    """Capture every notification emitted by the state interpreter."""

    def __init__(self) -> None:
        """Initialise event storage."""

        self.events: list[tuple[str, Any]] = []

    def on_charging_changed(self, charging: bool) -> None:
        self.events.append(("charging", charging))

    def on_cleaning_changed(self, cleaning: bool) -> None:
        self.events.append(("cleaning", cleaning))

    def on_fan_speed_changed(self, fan_speed: Any) -> None:
        self.events.append(("fan_speed", fan_speed))

    def on_error(self, error: Any) -> None:
        self.events.append(("error", error))

    def of(self, kind: str) -> list[Any]:
        """Return the payloads recorded for ``kind``."""

        return [payload for name, payload in self.events if name == kind]


def _device_reply(
    values: dict[str, Any], registry: Any
) -> Callable[[str, Any], Any]:
    """Build a responder answering ``get_properties`` from ``values``."""

    def _respond(method: str, params: Any) -> Any:
        if method != "get_properties":
            return {"code": 0, "out": []}
        reply = []
        for entry in params:
            name = entry["did"]
            if name in values:
                definition = registry.get(name)
                reply.append(
                    {
                        "did": name,
                        "siid": definition.device_key.siid,
                        "piid": definition.device_key.piid,
                        "code": 0,
                        "value": values[name],
                    }
                )
        return reply

    return _respond


@pytest.fixture
def transport() -> FakeTransport:
    """Return a transport with no scripted replies."""

    return FakeTransport()


@pytest.fixture
def device_reply() -> Callable[..., Callable[[str, Any], Any]]:
    """Return the ``get_properties`` responder factory."""

    return _device_reply


@pytest.fixture
def listener() -> RecordingListener:
    """Return a listener recording notifications."""

    return RecordingListener()


def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Execute coroutine tests within a dedicated event loop."""

    test_function = pyfuncitem.obj
    if not asyncio.iscoroutinefunction(test_function):
        return None

    loop = asyncio.new_event_loop()
    try:
        asyncio.set_event_loop(loop)
        parameters = inspect.signature(test_function).parameters
        arguments = {
            name: value
            for name, value in pyfuncitem.funcargs.items()
            if name in parameters
        }
        loop.run_until_complete(test_function(**arguments))
    finally:
        asyncio.set_event_loop(None)
        loop.close()
    return True
