"""Interface of the RPC transport used to talk to the device."""

from __future__ import annotations

from typing import Any, Protocol


class MiioTransport(Protocol):
    """Send one miIO request and return the parsed ``result`` field.

    Encryption, retries and timeouts belong to the transport. Failures are
    raised as whatever exception the transport uses.
    """

    async def call(self, method: str, params: Any = None) -> Any:
        """Invoke ``method`` with ``params`` on the device."""
