"""fsmkit: a small synchronous finite state machine engine."""
from __future__ import annotations

from .core.exceptions import ConfigError, FsmError, LockKeyError, StatesLockedError
from .core.state import (
    CounterIdGenerator,
    IdGenerator,
    States,
    StatesFactory,
    StatesMeta,
    StatesTransition,
    StatesTransitionHandler,
    UuidIdGenerator,
)

__version__ = "0.1.0"

__all__ = [
    "States",
    "StatesFactory",
    "StatesMeta",
    "StatesTransition",
    "StatesTransitionHandler",
    "IdGenerator",
    "CounterIdGenerator",
    "UuidIdGenerator",
    "FsmError",
    "StatesLockedError",
    "LockKeyError",
    "ConfigError",
    "__version__",
]
