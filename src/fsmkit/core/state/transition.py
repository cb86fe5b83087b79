"""Directed edges between states.

A transition links two :class:`StatesMeta` endpoints, optionally under an
action name, and carries the ordered handlers that run when the edge is
traversed. Only the handler list is mutable.
"""
from __future__ import annotations

from typing import Callable, List, Optional

from .meta import StatesMeta

StatesTransitionHandler = Callable[["StatesTransition"], None]


class StatesTransition:
    """Edge ``at -> to`` reachable via ``action``."""

    __slots__ = ("_at", "_to", "_action", "_handlers")

    def __init__(
        self,
        at: Optional[StatesMeta],
        to: Optional[StatesMeta],
        action: Optional[str] = None,
        handler: Optional[StatesTransitionHandler] = None,
    ) -> None:
        self._at = at
        self._to = to
        self._action = action
        self._handlers: List[StatesTransitionHandler] = []
        self.append(handler)

    @property
    def at(self) -> Optional[StatesMeta]:
        """State to move from."""
        return self._at

    @property
    def from_(self) -> Optional[StatesMeta]:
        return self._at

    @property
    def to(self) -> Optional[StatesMeta]:
        """State to move to."""
        return self._to

    @property
    def action(self) -> Optional[str]:
        return self._action

    @property
    def handlers(self) -> List[StatesTransitionHandler]:
        """Handlers invoked, in order, when this transition is performed."""
        return self._handlers

    def append(self, handler: Optional[StatesTransitionHandler]) -> None:
        if handler is not None:
            self._handlers.append(handler)

    def dispose(self) -> None:
        self._handlers.clear()

    def __str__(self) -> str:
        at = self._at.name if self._at is not None else None
        to = self._to.name if self._to is not None else None
        return f"[{at}] -> [{to}] on: [{self._action}]"

    def __repr__(self) -> str:
        return f"StatesTransition({self})"


__all__ = ["StatesTransition", "StatesTransitionHandler"]
