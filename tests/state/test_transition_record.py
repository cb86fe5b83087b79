import dataclasses

import pytest

from fsmkit.core.state.meta import StatesMeta
from fsmkit.core.state.transition import StatesTransition


def test_meta_equality_by_name():
    assert StatesMeta("idle") == StatesMeta("idle")
    assert StatesMeta("idle") != StatesMeta("done")
    assert StatesMeta("idle").is_equal("idle")
    assert not StatesMeta("idle").is_equal("done")
    assert str(StatesMeta("idle")) == "idle"


def test_meta_is_immutable():
    meta = StatesMeta("idle")
    with pytest.raises(dataclasses.FrozenInstanceError):
        meta.name = "other"  # type: ignore[misc]


def test_transition_exposes_endpoints():
    a, b = StatesMeta("a"), StatesMeta("b")
    t = StatesTransition(a, b, "go")
    assert t.at is a
    assert t.from_ is a
    assert t.to is b
    assert t.action == "go"
    assert str(t) == "[a] -> [b] on: [go]"
    assert repr(t) == "StatesTransition([a] -> [b] on: [go])"


def test_transition_without_action_renders_none():
    t = StatesTransition(StatesMeta("a"), StatesMeta("b"))
    assert t.action is None
    assert str(t) == "[a] -> [b] on: [None]"


def test_append_ignores_none_and_keeps_order():
    def first(t):
        pass

    def second(t):
        pass

    t = StatesTransition(StatesMeta("a"), StatesMeta("b"), "go", first)
    t.append(None)
    t.append(second)
    assert t.handlers == [first, second]


def test_dispose_clears_handlers():
    t = StatesTransition(StatesMeta("a"), StatesMeta("b"), "go", lambda t: None)
    t.dispose()
    assert t.handlers == []
