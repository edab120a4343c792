"""Input event identifiers and the event value handed to handlers.

Events are identified by plain strings in the Emacs-like notation used by
key and mouse bindings: ``mouse-1`` for a primary click, ``double-mouse-1``,
modifier prefixed clicks such as ``C-mouse-1`` and keyboard chords such as
``C-c C-o`` or ``RET``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, TypeAlias

__all__ = [
    "MOUSE_1",
    "MOUSE_2",
    "MOUSE_3",
    "MOUSE_EVENTS",
    "Handler",
    "InputEvent",
    "is_mouse_event",
    "normalize_chord",
]

MOUSE_1 = "mouse-1"
MOUSE_2 = "mouse-2"
MOUSE_3 = "mouse-3"

_BUTTONS = ("mouse-1", "mouse-2", "mouse-3", "mouse-4", "mouse-5")
_MODIFIERS = ("A", "C", "H", "M", "S", "s")

# Mouse events accepted as extra bindings on a button: plain, down, double
# and modifier-prefixed clicks plus the wheel.
MOUSE_EVENTS: frozenset[str] = frozenset(
    [*_BUTTONS]
    + [f"down-{b}" for b in _BUTTONS[:3]]
    + [f"double-{b}" for b in _BUTTONS[:3]]
    + [f"{m}-{b}" for m in _MODIFIERS for b in _BUTTONS[:3]]
    + ["wheel-up", "wheel-down"]
)

# A handler is anything invoked with the triggering InputEvent.  It is not
# validated: a value that is not callable makes the event a silent no-op.
Handler: TypeAlias = Callable[["InputEvent"], Any]

_WS_RX = re.compile(r"\s+")


def normalize_chord(chord: str) -> str:
    """Return ``chord`` with surrounding and repeated whitespace collapsed."""

    return _WS_RX.sub(" ", chord.strip())


def is_mouse_event(event: str) -> bool:
    """Return ``True`` if ``event`` names a supported mouse event."""

    return event in MOUSE_EVENTS


@dataclass(slots=True, frozen=True)
class InputEvent:
    """An input event delivered to a button handler."""

    event: str
    position: int
    document: object | None = None
