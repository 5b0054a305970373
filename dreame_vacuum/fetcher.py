"""Batched property reads decoded through the property registry."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from .const import METHOD_GET_PROPERTIES, NO_DATA_PLACEHOLDER
from .property_catalog import PropertyDefinition, PropertyRegistry
from .state.cache import PropertyCache
from .transport import MiioTransport

_LOGGER = logging.getLogger(__name__)

PropertyChangeHook = Callable[[str, Any, Any], None]


class PropertyFetcher:
    """Read properties in one round trip and store the decoded values."""

    def __init__(
        self,
        *,
        transport: MiioTransport,
        registry: PropertyRegistry,
        cache: PropertyCache,
        on_property_updated: PropertyChangeHook | None = None,
    ) -> None:
        """Bind the transport, registry and cache used for reads."""

        self._transport = transport
        self._registry = registry
        self._cache = cache
        self._on_property_updated = on_property_updated

    async def fetch_all(self) -> dict[str, Any]:
        """Read every registered property."""

        return await self._fetch(self._registry.all_definitions())

    async def fetch(self, names: Iterable[str]) -> dict[str, Any]:
        """Read only the properties in ``names``."""

        return await self._fetch(self._registry.definitions_for(names))

    async def _fetch(
        self, definitions: tuple[PropertyDefinition, ...]
    ) -> dict[str, Any]:
        if not definitions:
            return {}
        request = [definition.read_request() for definition in definitions]
        result = await self._transport.call(METHOD_GET_PROPERTIES, request)
        if result is None or result == NO_DATA_PLACEHOLDER:
            _LOGGER.debug("No property data returned for %s", request)
            return {}
        if not isinstance(result, Sequence) or isinstance(result, str | bytes):
            _LOGGER.debug("Unexpected property reply for %s: %s", request, result)
            return {}

        # Hooks run only after the whole batch is stored.
        updated: dict[str, Any] = {}
        changes: list[tuple[str, Any, Any]] = []
        for entry in result:
            applied = self._apply_entry(entry)
            if applied is None:
                continue
            name, value, changed, previous = applied
            updated[name] = value
            if changed:
                changes.append((name, value, previous))

        if self._on_property_updated is not None:
            for name, value, previous in changes:
                self._on_property_updated(name, value, previous)
        return updated

    def _apply_entry(self, entry: Any) -> tuple[str, Any, bool, Any] | None:
        if not isinstance(entry, Mapping):
            _LOGGER.debug("Skipping malformed property entry: %s", entry)
            return None
        definition = self._registry.get(entry.get("did"))
        if definition is None:
            _LOGGER.debug("Skipping unknown property entry: %s", entry)
            return None
        code = entry.get("code")
        if "value" not in entry or (code is not None and code != 0):
            _LOGGER.debug("Device did not return %s: %s", definition.name, entry)
            return None

        value = definition.decode(entry["value"])
        changed, previous = self._cache.set(definition.name, value)
        return definition.name, value, changed, previous
