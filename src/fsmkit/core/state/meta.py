"""State tokens registered on a :class:`~fsmkit.core.state.engine.States` engine."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StatesMeta:
    """Immutable named state.

    Instances are created by the engine (``States.add`` / ``States.when``) and
    compare equal by name.
    """

    name: str

    def is_equal(self, name: str) -> bool:
        """Return True if this state is called ``name``."""
        return self.name == name

    def __str__(self) -> str:
        return self.name


__all__ = ["StatesMeta"]
