from .engine import States, StatesFactory
from .ids import (
    IdGenerator,
    CounterIdGenerator,
    UuidIdGenerator,
    build_id_generator,
    default_id_generator,
    reset_default_id_generator,
)
from .meta import StatesMeta
from .transition import StatesTransition, StatesTransitionHandler


__all__ = [
    # Core state machine
    "States",
    "StatesFactory",
    "StatesMeta",
    "StatesTransition",
    "StatesTransitionHandler",
    # Identifier generators
    "IdGenerator",
    "CounterIdGenerator",
    "UuidIdGenerator",
    "build_id_generator",
    "default_id_generator",
    "reset_default_id_generator",
]
