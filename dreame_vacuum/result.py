"""Classify raw call results as success or failure."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .exceptions import CallFailed

# Known acknowledgements:
#   0                                   legacy firmware
#   ["ok"] / ["OK"]                     newer firmware
#   {"did": "call-3-1", ..., "code": 0} action result
#   [{"did": "set-18-6", ..., "code": 0}] set_properties result


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)


def _code_ok(code: Any) -> bool:
    return code is None or (code == 0 and not isinstance(code, bool))


def is_success(result: Any) -> bool:
    """Return True when ``result`` matches a known success shape."""

    if isinstance(result, bool):
        return False
    if isinstance(result, int):
        return result == 0
    if isinstance(result, Mapping):
        return _code_ok(result.get("code"))
    if not _is_sequence(result) or not result:
        return False
    first = result[0]
    if isinstance(first, str) and first.lower() == "ok":
        return True
    if all(isinstance(item, Mapping) for item in result):
        return all(_code_ok(item.get("code")) for item in result)
    if len(result) >= 4:
        return _code_ok(result[3])
    return False


def check_result(result: Any) -> Any:
    """Return ``result`` unchanged or raise :class:`CallFailed`."""

    if not is_success(result):
        raise CallFailed(result)
    return result
