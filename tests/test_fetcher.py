"""Tests for batched property reads."""

from __future__ import annotations

from typing import Any

import pytest

from dreame_vacuum.exceptions import UnknownPropertyError
from dreame_vacuum.fetcher import PropertyFetcher
from dreame_vacuum.property_catalog import default_registry
from dreame_vacuum.state.cache import PropertyCache

RAW_VALUES: dict[str, Any] = {
    "status": 2,
    "state": 1,
    "error": 0,
    "batteryLevel": 87,
    "cleanTime": 42,
    "cleanArea": 31,
    "fanSpeed": 2,
    "mainBrushWorkTime": 120,
    "sideBrushWorkTime": 80,
    "filterWorkTime": 50,
    "lastCleanTime": 42,
    "waterBoxMode": 1,
    "waterBox": 0,
}


def _make(transport, changes: list[tuple[str, Any, Any]] | None = None):
    registry = default_registry()
    cache = PropertyCache()
    hook = None
    if changes is not None:
        hook = lambda key, new, old: changes.append((key, new, old))  # noqa: E731
    fetcher = PropertyFetcher(
        transport=transport, registry=registry, cache=cache, on_property_updated=hook
    )
    return registry, cache, fetcher


async def test_fetch_all_builds_single_batch(transport, device_reply) -> None:
    """One get_properties request carries every registered property."""

    registry, cache, fetcher = _make(transport)
    transport.responder = device_reply(RAW_VALUES, registry)

    await fetcher.fetch_all()

    [request] = transport.calls_for("get_properties")
    assert request == [definition.read_request() for definition in registry.all_definitions()]
    assert len(transport.calls) == 1


async def test_fetch_all_applies_mappers(transport, device_reply) -> None:
    """Cached values equal the mapper output, or the raw value without one."""

    registry, cache, fetcher = _make(transport)
    transport.responder = device_reply(RAW_VALUES, registry)

    updated = await fetcher.fetch_all()

    for definition in registry.all_definitions():
        expected = definition.decode(RAW_VALUES[definition.name])
        assert cache.raw(definition.name) == expected
        assert updated[definition.name] == expected
    assert cache.raw("state") == "cleaning"
    assert cache.raw("status") == "not charging"
    assert cache.raw("filterWorkTime") == 50 * 3600


@pytest.mark.parametrize("reply", [None, "undefined"])
async def test_no_data_leaves_cache_untouched(transport, reply) -> None:
    """Empty replies return nothing and do not reset cached values."""

    registry, cache, fetcher = _make(transport)
    cache.set("fanSpeed", 3)
    transport.replies = [reply]

    assert await fetcher.fetch_all() == {}
    assert cache.snapshot() == {"fanSpeed": 3}


@pytest.mark.parametrize("reply", [-1, {"code": -1, "message": "busy"}])
async def test_non_list_reply_is_ignored(transport, reply) -> None:
    """Error codes and mappings in place of the entry list are treated as no data."""

    changes: list[tuple[str, Any, Any]] = []
    registry, cache, fetcher = _make(transport, changes)
    cache.set("fanSpeed", 3)
    transport.replies = [reply]

    assert await fetcher.fetch_all() == {}
    assert cache.snapshot() == {"fanSpeed": 3}
    assert changes == []


async def test_omitted_properties_keep_previous_values(transport, device_reply) -> None:
    """Only properties present in the reply are written."""

    registry, cache, fetcher = _make(transport)
    cache.set("batteryLevel", 50)
    transport.responder = device_reply({"state": 3}, registry)

    updated = await fetcher.fetch_all()

    assert updated == {"state": "paused"}
    assert cache.raw("batteryLevel") == 50


async def test_skips_unknown_and_failed_entries(transport) -> None:
    """Entries with unknown ids, error codes or no value are ignored."""

    registry, cache, fetcher = _make(transport)
    transport.replies = [
        [
            {"did": "mystery", "siid": 99, "piid": 1, "code": 0, "value": 1},
            {"did": "waterBox", "siid": 18, "piid": 9, "code": -4001},
            {"did": "fanSpeed", "siid": 18, "piid": 6, "code": 0, "value": 1},
            "garbage",
        ]
    ]

    assert await fetcher.fetch_all() == {"fanSpeed": 1}
    assert "waterBox" not in cache
    assert "mystery" not in cache


async def test_change_hook_fires_only_on_changes(transport, device_reply) -> None:
    """The update hook receives the new and previous decoded values."""

    changes: list[tuple[str, Any, Any]] = []
    registry, cache, fetcher = _make(transport, changes)
    values = {"state": 1, "fanSpeed": 2}
    transport.responder = device_reply(values, registry)

    await fetcher.fetch_all()
    assert changes == [("state", "cleaning", None), ("fanSpeed", 2, None)]

    changes.clear()
    values["state"] = 3
    await fetcher.fetch_all()
    assert changes == [("state", "paused", "cleaning")]


async def test_fetch_subset(transport, device_reply) -> None:
    """Refresh reads only request the named properties."""

    registry, cache, fetcher = _make(transport)
    transport.responder = device_reply(RAW_VALUES, registry)

    assert await fetcher.fetch(["fanSpeed"]) == {"fanSpeed": 2}
    assert transport.calls == [
        ("get_properties", [{"did": "fanSpeed", "siid": 18, "piid": 6}])
    ]


async def test_fetch_unknown_name(transport) -> None:
    """Asking for an unregistered property fails before any call."""

    _, _, fetcher = _make(transport)
    with pytest.raises(UnknownPropertyError):
        await fetcher.fetch(["turbo"])
    assert transport.calls == []


async def test_last_write_wins(transport) -> None:
    """A later reply overwrites an earlier one."""

    _, cache, fetcher = _make(transport)
    transport.replies = [
        [{"did": "fanSpeed", "code": 0, "value": 1}],
        [{"did": "fanSpeed", "code": 0, "value": 3}],
    ]
    await fetcher.fetch(["fanSpeed"])
    await fetcher.fetch(["fanSpeed"])
    assert cache.raw("fanSpeed") == 3
