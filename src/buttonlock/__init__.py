"""Clickable text buttons driven by regular expressions.

``buttonlock`` keeps a per-document registry of pattern bindings, each mapping
input events (clicks, key chords) to handlers and carrying a render style.
The registry stays synchronized with a highlighting engine that writes the
button annotations onto matching text, and :func:`find_extent` recovers the
button span around any position.
"""

from .binding import (
    CLICKABLE,
    EventMap,
    FacePolicy,
    PatternBinding,
    RenderStyle,
)
from .dispatch import dispatch_event
from .events import InputEvent
from .extent import find_extent
from .global_set import (
    BindingSpec,
    GlobalBindingSet,
    clear_global_bindings,
    global_bindings,
    pop_global_binding,
    register_global_binding,
    unregister_global_binding,
)
from .mode import ButtonLockMode
from .registry import BindingRegistry
from .sync import HighlightRule, HighlightSync, RenderingEngine
from .utils.errors import NoSuchBindingError, UnknownEventError

__version__ = "0.1.0"

__all__ = [
    "CLICKABLE",
    "BindingRegistry",
    "BindingSpec",
    "ButtonLockMode",
    "EventMap",
    "FacePolicy",
    "GlobalBindingSet",
    "HighlightRule",
    "HighlightSync",
    "InputEvent",
    "NoSuchBindingError",
    "PatternBinding",
    "RenderStyle",
    "RenderingEngine",
    "UnknownEventError",
    "clear_global_bindings",
    "dispatch_event",
    "find_extent",
    "global_bindings",
    "pop_global_binding",
    "register_global_binding",
    "unregister_global_binding",
]
