"""Registry of properties mapping readable names to siid/piid addresses."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .exceptions import UnknownPropertyError
from .mappers import MAPPERS

_DEFAULT_DATA_PATH = Path(__file__).parent / "data" / "properties.json"

DecodeMapper = Callable[[Any], Any]


@dataclass(frozen=True, slots=True)
class DeviceKey:
    """Address of a property on the device."""

    siid: int
    piid: int


@dataclass(frozen=True, slots=True)
class PropertyDefinition:
    """Bind a property name to its device address and decoder."""

    name: str
    device_key: DeviceKey
    decode_mapper: DecodeMapper | None = None

    def decode(self, raw: Any) -> Any:
        """Return ``raw`` passed through the decoder when one is set."""

        if self.decode_mapper is None:
            return raw
        return self.decode_mapper(raw)

    def read_request(self) -> dict[str, Any]:
        """Return the batch read entry for this property."""

        return {
            "did": self.name,
            "siid": self.device_key.siid,
            "piid": self.device_key.piid,
        }


class PropertyEntry(BaseModel):
    """Catalog row describing one property."""

    name: str
    siid: int = Field(ge=0)
    piid: int = Field(ge=0)
    mapper: str | None = None

    @field_validator("mapper")
    @classmethod
    def known_mapper(cls, value: str | None) -> str | None:
        if value is not None and value not in MAPPERS:
            msg = f"Unknown mapper: {value}"
            raise ValueError(msg)
        return value


class PropertyCatalog(BaseModel):
    """Collection of catalog rows in registration order."""

    properties: list[PropertyEntry]

    def to_registry(self) -> PropertyRegistry:
        """Build a registry from the catalog rows."""

        registry = PropertyRegistry()
        for entry in self.properties:
            registry.register(
                entry.name,
                DeviceKey(siid=entry.siid, piid=entry.piid),
                MAPPERS[entry.mapper] if entry.mapper else None,
            )
        return registry


class PropertyRegistry:
    """Ordered table of property definitions keyed by name.

    Several names may share one device address, but each name is registered
    at most once.
    """

    def __init__(self) -> None:
        """Create an empty registry."""

        self._definitions: dict[str, PropertyDefinition] = {}

    def register(
        self,
        name: str,
        device_key: DeviceKey,
        decode_mapper: DecodeMapper | None = None,
    ) -> PropertyDefinition:
        """Add a definition for ``name``."""

        if name in self._definitions:
            msg = f"Property already registered: {name}"
            raise ValueError(msg)
        definition = PropertyDefinition(
            name=name, device_key=device_key, decode_mapper=decode_mapper
        )
        self._definitions[name] = definition
        return definition

    def all_definitions(self) -> tuple[PropertyDefinition, ...]:
        """Return every definition in registration order."""

        return tuple(self._definitions.values())

    def get(self, name: str) -> PropertyDefinition | None:
        """Return the definition for ``name`` if registered."""

        return self._definitions.get(name)

    def definitions_for(self, names: Iterable[str]) -> tuple[PropertyDefinition, ...]:
        """Return the definitions for ``names``, preserving their order."""

        definitions: list[PropertyDefinition] = []
        for name in names:
            definition = self._definitions.get(name)
            if definition is None:
                raise UnknownPropertyError(name)
            definitions.append(definition)
        return tuple(definitions)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __iter__(self) -> Iterator[PropertyDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)


def load_property_catalog(path: Path | None = None) -> PropertyCatalog:
    """Load the property catalog from JSON."""

    data_path = path or _DEFAULT_DATA_PATH
    with data_path.open("r", encoding="utf-8") as fp:
        payload = json.load(fp)
    return PropertyCatalog.model_validate(payload)


def default_registry() -> PropertyRegistry:
    """Return a registry holding the bundled vacuum properties."""

    return load_property_catalog().to_registry()
