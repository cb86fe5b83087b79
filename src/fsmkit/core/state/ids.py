"""Identifier generators for state machine engines.

Engines that are not given an explicit id draw one from a generator. The
process-wide default generator is configured from ``states.id`` in the YAML
config; :class:`~fsmkit.core.state.engine.StatesFactory` owns a private
generator so that disposing its engines never renumbers anyone else's.
"""
from __future__ import annotations

import itertools
import logging
import uuid
from typing import Iterator, Optional, Protocol

from ..exceptions import ConfigError

logger = logging.getLogger(__name__)


class IdGenerator(Protocol):
    """Protocol for objects that mint default engine ids."""

    def next_id(self) -> str:
        ...

    def reset(self) -> None:
        ...


class CounterIdGenerator:
    """Sequential ids: ``<prefix>_1``, ``<prefix>_2``, ..."""

    def __init__(self, prefix: str = "states") -> None:
        self.prefix = prefix
        self._counter: Iterator[int] = itertools.count(1)

    def next_id(self) -> str:
        return f"{self.prefix}_{next(self._counter)}"

    def reset(self) -> None:
        self._counter = itertools.count(1)


class UuidIdGenerator:
    """Random ids: ``<prefix>_<12 hex chars>``. Reset is a no-op."""

    def __init__(self, prefix: str = "states") -> None:
        self.prefix = prefix

    def next_id(self) -> str:
        return f"{self.prefix}_{uuid.uuid4().hex[:12]}"

    def reset(self) -> None:
        pass


_STRATEGIES = {
    "counter": CounterIdGenerator,
    "uuid": UuidIdGenerator,
}


def build_id_generator(strategy: str = "counter", prefix: str = "states") -> IdGenerator:
    """Build a generator for ``strategy`` (``counter`` or ``uuid``).

    Raises:
        ValueError: If the strategy is unknown.
    """
    try:
        cls = _STRATEGIES[strategy]
    except KeyError:
        known = ", ".join(sorted(_STRATEGIES))
        raise ValueError(f"Unknown id strategy: {strategy!r} (expected one of: {known})") from None
    return cls(prefix)


_default_generator: Optional[IdGenerator] = None


def default_id_generator() -> IdGenerator:
    """Return the process-wide generator, building it from config on first use.

    Config that cannot be loaded falls back to a plain ``states_<N>`` counter.
    """
    global _default_generator
    if _default_generator is None:
        # Lazy import to avoid circular dependencies
        from fsmkit.core.config.domains.states import StatesConfig

        try:
            cfg = StatesConfig()
            _default_generator = build_id_generator(cfg.id_strategy, cfg.id_prefix)
        except ConfigError as exc:
            logger.warning("Using default engine ids; configuration is invalid: %s", exc)
            _default_generator = CounterIdGenerator()
    return _default_generator


def reset_default_id_generator() -> None:
    """Test-only: drop the default generator so it is rebuilt from config."""
    global _default_generator
    _default_generator = None


__all__ = [
    "IdGenerator",
    "CounterIdGenerator",
    "UuidIdGenerator",
    "build_id_generator",
    "default_id_generator",
    "reset_default_id_generator",
]
