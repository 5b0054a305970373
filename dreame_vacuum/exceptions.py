"""Exceptions raised by the Dreame vacuum client."""

from __future__ import annotations

from typing import Any


class DreameVacuumError(Exception):
    """Base error for the client."""


class CallFailed(DreameVacuumError):
    """Raised when a device call returns none of the known success shapes."""

    def __init__(self, result: Any) -> None:
        """Keep the raw result for callers that want to inspect it."""

        super().__init__("Could not complete call to device")
        self.result = result


class UnknownPropertyError(DreameVacuumError, KeyError):
    """Raised when a property name has no registered definition."""

    def __init__(self, name: str) -> None:
        """Store the missing property name."""

        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown property: {self.name}"
