"""Tests for the process-wide global binding replay list."""

from __future__ import annotations

from buttonlock.config import load_config
from buttonlock.engine import Document, PatternEngine
from buttonlock.global_set import (
    BindingSpec,
    GlobalBindingSet,
    global_bindings,
    pop_global_binding,
    register_global_binding,
    unregister_global_binding,
)
from buttonlock.mode import ButtonLockMode
from buttonlock.registry import BindingRegistry


def _action(event: object) -> None:
    _ = event


S1 = BindingSpec.of(r"foo", _action)
S2 = BindingSpec.of(r"bar", _action, grouping=0)


def test_register_is_set_like_on_full_spec() -> None:
    gset = GlobalBindingSet()
    gset.register(S1)
    gset.register(BindingSpec.of(r"foo", _action))
    assert len(gset) == 1
    # same pattern with different options is a distinct spec
    gset.register(BindingSpec.of(r"foo", _action, face="x"))
    assert len(gset) == 2


def test_unregister_removes_first_exact_match() -> None:
    gset = GlobalBindingSet()
    gset.register(S1)
    gset.register(S2)
    assert gset.unregister(BindingSpec.of(r"bar", _action)) is None
    assert gset.unregister(BindingSpec.of(r"bar", _action, grouping=0)) == S2
    assert gset.snapshot() == (S1,)


def test_pop_removes_latest_by_default() -> None:
    gset = GlobalBindingSet()
    gset.register(S1)
    gset.register(S2)
    assert gset.pop() == 1
    assert gset.snapshot() == (S1,)


def test_pop_from_start_removes_earliest() -> None:
    gset = GlobalBindingSet()
    gset.register(S1)
    gset.register(S2)
    assert gset.pop(from_start=True) == 1
    assert gset.snapshot() == (S2,)


def test_pop_empty_returns_none() -> None:
    assert GlobalBindingSet().pop() is None


def test_replay_into_preserves_order() -> None:
    gset = GlobalBindingSet()
    gset.register(S2)
    gset.register(S1)
    registry = BindingRegistry(load_config(env={}))
    gset.replay_into(registry)
    assert registry.patterns() == ["bar", "foo"]


def test_changes_do_not_reach_active_registries() -> None:
    gset = GlobalBindingSet()
    gset.register(S1)
    mode = ButtonLockMode(
        PatternEngine(Document("foo bar")), config=load_config(env={}), global_set=gset
    )
    registry = mode.enable()
    gset.register(S2)
    gset.unregister(S1)
    assert registry.patterns() == ["foo"]
    assert mode.enable().patterns() == ["bar"]


def test_module_level_functions_share_one_set() -> None:
    register_global_binding(r"foo", _action)
    register_global_binding(r"foo", _action)
    register_global_binding(r"bar", _action, grouping=0)
    assert [s.pattern for s in global_bindings().snapshot()] == ["foo", "bar"]
    assert unregister_global_binding(r"foo", _action) == S1
    assert pop_global_binding() == 1
    assert pop_global_binding() is None
    assert len(global_bindings()) == 0
