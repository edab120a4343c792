"""Tests for delivering input events to button handlers."""

from __future__ import annotations

from buttonlock.config import load_config
from buttonlock.dispatch import dispatch_event, handler_at
from buttonlock.engine import Document, PatternEngine
from buttonlock.events import InputEvent
from buttonlock.global_set import GlobalBindingSet
from buttonlock.mode import ButtonLockMode
from buttonlock.registry import BindingRegistry


def _open(text: str) -> tuple[Document, BindingRegistry]:
    document = Document(text)
    engine = PatternEngine(document)
    engine.activate()
    mode = ButtonLockMode(engine, config=load_config(env={}), global_set=GlobalBindingSet())
    return document, mode.enable()


def test_click_invokes_handler_with_event() -> None:
    document, registry = _open("open http://x.io now")
    seen: list[InputEvent] = []
    registry.set(r"http://\S+", seen.append)
    assert dispatch_event(document, 8, "mouse-1") is True
    assert seen == [InputEvent("mouse-1", 8, document)]


def test_unbound_event_or_position_is_noop() -> None:
    document, registry = _open("open http://x.io now")
    seen: list[InputEvent] = []
    registry.set(r"http://\S+", seen.append)
    assert dispatch_event(document, 8, "mouse-3") is False
    assert dispatch_event(document, 0, "mouse-1") is False
    assert seen == []


def test_non_callable_handler_is_silent_noop() -> None:
    document, registry = _open("ping")
    registry.set(r"ping", "not-a-function")
    assert handler_at(document, 1, "mouse-1") == "not-a-function"
    assert dispatch_event(document, 1, "mouse-1") is False


def test_keyboard_chord_lookup_is_normalized() -> None:
    document, registry = _open("ping")
    seen: list[str] = []
    registry.set(r"ping", lambda event: seen.append(event.event), keyboard_binding="C-c C-o")
    assert dispatch_event(document, 0, "C-c   C-o") is True
    assert seen == ["C-c   C-o"]


def test_extended_binding_is_dispatched() -> None:
    document, registry = _open("ping")
    seen: list[str] = []
    binding = registry.set(r"ping", lambda event: None)
    assert binding is not None
    registry.extend(binding, lambda event: seen.append("extra"), "mouse-2")
    assert dispatch_event(document, 2, "mouse-2") is True
    assert seen == ["extra"]
