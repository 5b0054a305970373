"""Property cache and state interpretation for Dreame vacuums."""

from .cache import PropertyCache
from .interpreter import (
    CLEANING_STATES,
    SYNTHETIC_ERRORS,
    StateInterpreter,
    VacuumListener,
)

__all__ = [
    "CLEANING_STATES",
    "SYNTHETIC_ERRORS",
    "PropertyCache",
    "StateInterpreter",
    "VacuumListener",
]
