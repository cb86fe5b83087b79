from __future__ import annotations

import itertools
import logging
from typing import Any, Dict, Iterator, List, Optional

from ..audit.logger import audit_enabled, audit_event
from ..exceptions import LockKeyError, StatesLockedError
from .ids import CounterIdGenerator, IdGenerator, default_id_generator
from .meta import StatesMeta
from .transition import StatesTransition, StatesTransitionHandler

logger = logging.getLogger(__name__)


def _audit(event: str, **fields: Any) -> None:
    if not audit_enabled():
        return
    try:
        audit_event(event, **fields)
    except Exception:
        pass


class States:
    """Finite state machine over named states and actions.

    States and transitions are registered with :meth:`add` and :meth:`when`
    while the machine is unlocked. :meth:`change` and :meth:`execute` move the
    current state along a registered transition, running its handlers and then
    notifying every subscriber. All calls are synchronous.
    """

    DISPOSE = "states_reserved_action_dispose"
    EXCEPTION__LOCK_KEY = "LOCK KEY MUST BE DEFINED"
    EXCEPTION__LOCKED = "STATES IS LOCKED"

    def __init__(self, id: Optional[str] = None, *, ids: Optional[IdGenerator] = None) -> None:
        self._ids: IdGenerator = ids if ids is not None else default_id_generator()
        # An explicit id leaves the generator's numbering untouched.
        self._id: str = id if id is not None else self._ids.next_id()
        # Resolve the audit switch now so transitions never read config.
        audit_enabled()
        self._lock_key: str = ""
        self._current: Optional[StatesMeta] = None
        self._metas: List[StatesMeta] = []
        self._transitions: List[StatesTransition] = []
        self._subscribers: Dict[str, StatesTransitionHandler] = {}
        self._subscription_seq: Iterator[int] = itertools.count()

    @property
    def id(self) -> str:
        return self._id

    @property
    def current(self) -> Optional[str]:
        """Name of the current state, or None when no state is registered."""
        return self._current.name if self._current is not None else None

    @property
    def is_locked(self) -> bool:
        return len(self._lock_key) > 0

    @property
    def all(self) -> List[StatesTransition]:
        """Snapshot of the registered transitions."""
        return list(self._transitions)

    @property
    def states(self) -> List[StatesMeta]:
        """Snapshot of the registered states."""
        return list(self._metas)

    def __repr__(self) -> str:
        return f"States(id={self._id!r}, current={self.current!r}, locked={self.is_locked})"

    def _find_meta(self, state: str) -> Optional[StatesMeta]:
        for meta in self._metas:
            if meta.is_equal(state):
                return meta
        return None

    def _find_transition_by_action(self, action: str) -> Optional[StatesTransition]:
        for transition in self._transitions:
            if transition.action == action:
                return transition
        return None

    def _ensure_unlocked(self, operation: str) -> None:
        if self.is_locked:
            raise StatesLockedError(
                self.EXCEPTION__LOCKED,
                context={"machine": self._id, "operation": operation},
            )

    def _perform(self, transition: StatesTransition, run: bool = True) -> None:
        if run:
            for handler in list(transition.handlers):
                handler(transition)
        self._current = transition.to
        logger.debug("%s: %s", self._id, transition)
        _audit(
            "states.transition",
            machine=self._id,
            at=transition.at.name if transition.at is not None else None,
            to=transition.to.name if transition.to is not None else None,
            action=transition.action,
        )
        for subscriber in list(self._subscribers.values()):
            subscriber(transition)

    def actions(self, at: Optional[str] = None) -> List[StatesTransition]:
        """Transitions leaving ``at`` (or the current state when omitted)."""
        base = self._current if at is None else self._find_meta(at)
        return [t for t in self._transitions if t.at == base]

    def metas(self, at: Optional[str] = None) -> List[StatesMeta]:
        """States reachable in one step from ``at`` (or the current state)."""
        base = self._current if at is None else self._find_meta(at)
        return [t.to for t in self._transitions if t.at == base and t.to is not None]

    def add(self, state: str) -> Optional[StatesMeta]:
        """Register a state.

        The first state registered on an empty machine becomes current.

        Returns:
            The new state, or None if a state with that name already exists.

        Raises:
            StatesLockedError: If the machine is locked.
        """
        self._ensure_unlocked("add")
        if self.has(state=state):
            return None
        meta = StatesMeta(state)
        self._metas.append(meta)
        logger.debug("%s: added state %r", self._id, state)
        if len(self._metas) == 1:
            self._current = meta
        return meta

    def when(
        self,
        at: str,
        to: str,
        action: Optional[str] = None,
        handler: Optional[StatesTransitionHandler] = None,
    ) -> "States":
        """Register a transition ``at -> to`` triggered by ``action``.

        Missing endpoint states are registered on the fly. A transition is
        skipped as a duplicate only when the same edge and action already
        carry ``handler``.

        Returns:
            This machine, for chaining.

        Raises:
            StatesLockedError: If the machine is locked.
        """
        self._ensure_unlocked("when")

        # Without a handler nothing counts as a duplicate.
        if handler is not None and any(
            t.at is not None
            and t.at.name == at
            and t.to is not None
            and t.to.name == to
            and t.action == action
            and handler in t.handlers
            for t in self._transitions
        ):
            return self

        meta_at = self._find_meta(at) or self.add(at)
        meta_to = self._find_meta(to) or self.add(to)

        self._transitions.append(StatesTransition(meta_at, meta_to, action, handler))
        logger.debug("%s: registered [%s] -> [%s] on: [%s]", self._id, at, to, action)
        return self

    def subscribe(self, handler: StatesTransitionHandler, single: bool = False) -> Optional[str]:
        """Call ``handler`` after every transition.

        Returns:
            Subscription key, or None when ``single`` is set and the handler
            is already subscribed.
        """
        if single and any(s == handler for s in self._subscribers.values()):
            return None
        key = f"_ssk{next(self._subscription_seq)}"
        self._subscribers[key] = handler
        return key

    def unsubscribe(self, key: str) -> bool:
        return self._subscribers.pop(key, None) is not None

    def change(self, state: str, run: bool = True) -> bool:
        """Move from the current state to ``state``.

        Args:
            state: Target state name.
            run: Whether to run the transition handlers.

        Returns:
            True if the machine moved, False if ``state`` is unknown or not
            reachable from the current state.
        """
        if not self.has(state=state):
            return False
        for transition in self._transitions:
            if (
                transition.at == self._current
                and transition.to is not None
                and transition.to.is_equal(state)
            ):
                self._perform(transition, run)
                return True
        return False

    def execute(self, action: str) -> bool:
        """Move the current state by performing ``action``.

        Returns:
            True if a transition for ``action`` leaves the current state and was
            performed, False otherwise.
        """
        for transition in self._transitions:
            if transition.at == self._current and transition.action == action:
                self._perform(transition)
                return True
        logger.debug("%s: action %r not available from %r", self._id, action, self.current)
        return False

    def on(self, action: str, handler: StatesTransitionHandler) -> bool:
        """Append ``handler`` to the first transition registered for ``action``."""
        transition = self._find_transition_by_action(action)
        if transition is None:
            return False
        transition.append(handler)
        return True

    def get(self, action: str) -> Optional[StatesTransition]:
        return self._find_transition_by_action(action)

    def has(self, action: Optional[str] = None, state: Optional[str] = None, conform: bool = True) -> bool:
        """Check whether an action and/or a state is registered.

        A missing ``action`` is satisfied when a ``state`` is given; a missing
        ``state`` mirrors the action clause. With ``conform`` both clauses must
        hold, otherwise either one.
        """
        if action is not None:
            action_exists = self._find_transition_by_action(action) is not None
        else:
            action_exists = state is not None

        if state is not None:
            state_exists = self._find_meta(state) is not None
        else:
            state_exists = action_exists

        if conform:
            return action_exists and state_exists
        return action_exists or state_exists

    def dispose(self) -> None:
        """Tear the machine down.

        Subscribers receive one final transition from the current state to
        itself under :attr:`DISPOSE`. Afterwards the machine holds no states,
        transitions or subscribers and can be rebuilt.
        """
        for transition in self._transitions:
            transition.dispose()
        terminal = StatesTransition(self._current, self._current, self.DISPOSE)
        subscribers = list(self._subscribers.values())
        for subscriber in subscribers:
            subscriber(terminal)
        self._subscribers.clear()
        self._transitions.clear()
        self._metas.clear()
        self._current = None
        self._ids.reset()
        logger.debug("%s: disposed (%d subscribers notified)", self._id, len(subscribers))
        _audit("states.dispose", machine=self._id, subscribers=len(subscribers))

    def lock(self, token: str) -> None:
        """Freeze the topology until :meth:`unlock` is called with ``token``.

        Raises:
            LockKeyError: If ``token`` is empty.
        """
        if not token:
            raise LockKeyError(self.EXCEPTION__LOCK_KEY, context={"machine": self._id})
        self._lock_key = token
        _audit("states.lock", machine=self._id)

    def unlock(self, token: str) -> None:
        if self.is_locked and self._lock_key == token:
            self._lock_key = ""
            _audit("states.unlock", machine=self._id)

    def reset(self) -> None:
        """Point the current state back at the first registered state."""
        self._current = self._metas[0] if self._metas else None


class StatesFactory:
    """Builds engines that share a private id generator.

    Disposing an engine resets its generator, so engines from one factory
    never renumber engines created elsewhere.
    """

    def __init__(self, ids: Optional[IdGenerator] = None, *, prefix: str = "states") -> None:
        self.ids: IdGenerator = ids if ids is not None else CounterIdGenerator(prefix)

    def create(self, id: Optional[str] = None) -> States:
        return States(id, ids=self.ids)


__all__ = ["States", "StatesFactory"]
