"""Deliver input events to the handler of the button under a position."""

from __future__ import annotations

from typing import Any

from .binding import KEYMAP
from .events import InputEvent, normalize_chord
from .extent import AnnotationStore

__all__ = ["handler_at", "dispatch_event"]


def handler_at(store: AnnotationStore, position: int, event: str) -> Any:
    """Return the handler bound to ``event`` at ``position`` or ``None``."""

    keymap = store.get_annotation(position, KEYMAP)
    if keymap is None:
        return None
    handler = keymap.lookup(event)
    if handler is None:
        handler = keymap.lookup(normalize_chord(event))
    return handler


def dispatch_event(store: AnnotationStore, position: int, event: str) -> bool:
    """Invoke the handler for ``event`` at ``position``.

    Returns ``True`` if a handler ran.  A missing or non-callable handler is a
    silent no-op.
    """

    handler = handler_at(store, position, event)
    if not callable(handler):
        return False
    handler(InputEvent(event, position, store))
    return True
