"""Pattern bindings: the value describing one clickable pattern.

A :class:`PatternBinding` couples a regular expression with an
:class:`EventMap` (event identifier → handler) and a :class:`RenderStyle`.
From those it derives the annotation mapping the rendering engine writes onto
every match: the clickable marker, the keymap reference, faces, help text,
an optional extra boolean key and, unless the binding is rear‑sticky, the
``rear_nonsticky`` flag.

Bindings compare by identity.  The dataclass is frozen, but its keymap is a
mutable object shared by every holder of the binding so that extending a
binding is observable through all references to it.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .events import Handler, is_mouse_event, normalize_chord
from .utils.errors import UnknownEventError

__all__ = [
    "CLICKABLE",
    "KEYMAP",
    "FACE",
    "MOUSE_FACE",
    "HELP_ECHO",
    "KBD_HELP",
    "KBD_HELP_MULTILINE",
    "REAR_NONSTICKY",
    "BASE_MANAGED",
    "FacePolicy",
    "RenderStyle",
    "EventMap",
    "PatternBinding",
    "make_binding",
]

# ---------------------------------------------------------------------------
# Annotation keys
# ---------------------------------------------------------------------------

CLICKABLE = "button_lock"
KEYMAP = "keymap"
FACE = "face"
MOUSE_FACE = "mouse_face"
HELP_ECHO = "help_echo"
KBD_HELP = "kbd_help"
KBD_HELP_MULTILINE = "kbd_help_multiline"
REAR_NONSTICKY = "rear_nonsticky"

BASE_MANAGED: tuple[str, ...] = (
    CLICKABLE,
    KEYMAP,
    FACE,
    MOUSE_FACE,
    HELP_ECHO,
    KBD_HELP,
    KBD_HELP_MULTILINE,
)


class FacePolicy(Enum):
    """How a binding's face composes with faces already on the text."""

    NONE = "none"
    KEEP = "keep"
    PREPEND = "prepend"
    APPEND = "append"
    OVERRIDE = "override"


@dataclass(slots=True, frozen=True)
class RenderStyle:
    """Render configuration of a binding."""

    face: str | None = None
    mouse_face: str | None = None
    face_policy: FacePolicy = FacePolicy.APPEND
    help_echo: str | None = None
    kbd_help: str | None = None
    kbd_help_multiline: str | None = None
    additional_property: str | None = None
    rear_sticky: bool = False


class EventMap:
    """Mutable mapping of event identifiers to handlers.

    Handlers are stored as given; nothing checks that they are callable.
    """

    __slots__ = ("_bindings",)

    def __init__(self, bindings: Mapping[str, Handler] | None = None) -> None:
        self._bindings: dict[str, Handler] = dict(bindings or {})

    def bind(self, event: str, handler: Handler) -> None:
        """Map ``event`` to ``handler``, replacing any previous handler."""

        self._bindings[event] = handler

    def lookup(self, event: str) -> Handler | None:
        return self._bindings.get(event)

    def events(self) -> tuple[str, ...]:
        return tuple(self._bindings)

    def __contains__(self, event: object) -> bool:
        return event in self._bindings

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        return f"EventMap({sorted(self._bindings)!r})"


@dataclass(slots=True, frozen=True, eq=False)
class PatternBinding:
    """One pattern-to-action mapping with its render configuration."""

    pattern: str
    keymap: EventMap
    style: RenderStyle = field(default_factory=RenderStyle)
    grouping: int = 0

    @property
    def properties(self) -> dict[str, Any]:
        """Return the annotation mapping written onto each match."""

        style = self.style
        props: dict[str, Any] = {}
        if style.face is not None:
            props[FACE] = style.face
        props[KEYMAP] = self.keymap
        props[CLICKABLE] = True
        if style.mouse_face is not None:
            props[MOUSE_FACE] = style.mouse_face
        if style.help_echo is not None:
            props[HELP_ECHO] = style.help_echo
        if style.kbd_help is not None:
            props[KBD_HELP] = style.kbd_help
        if style.kbd_help_multiline is not None:
            props[KBD_HELP_MULTILINE] = style.kbd_help_multiline
        if style.additional_property:
            props[style.additional_property] = True
        if not style.rear_sticky:
            props[REAR_NONSTICKY] = True
        return props

    @property
    def managed_properties(self) -> tuple[str, ...]:
        """Annotation keys the engine must clear and reapply on re-render."""

        keys = list(BASE_MANAGED)
        if self.style.additional_property:
            keys.append(self.style.additional_property)
        if not self.style.rear_sticky:
            keys.append(REAR_NONSTICKY)
        return tuple(keys)

    @property
    def face_policy(self) -> FacePolicy:
        return self.style.face_policy

    def __repr__(self) -> str:
        return f"PatternBinding(pattern={self.pattern!r}, events={list(self.keymap)!r})"


def make_binding(
    pattern: str,
    action: Handler,
    *,
    mouse_binding: str,
    style: RenderStyle,
    grouping: int = 0,
    keyboard_binding: str | None = None,
    keyboard_action: Handler | None = None,
    events: Mapping[str, Handler] | None = None,
) -> PatternBinding:
    """Build a binding whose keymap maps ``mouse_binding`` to ``action``.

    ``keyboard_binding`` maps the normalised chord to ``keyboard_action`` (or
    ``action``).  ``events`` adds further mouse bindings; an event outside
    :data:`~buttonlock.events.MOUSE_EVENTS` raises
    :class:`UnknownEventError`.
    """

    keymap = EventMap({mouse_binding: action})
    if keyboard_binding:
        keymap.bind(
            normalize_chord(keyboard_binding),
            keyboard_action if keyboard_action is not None else action,
        )
    for event, handler in (events or {}).items():
        if not is_mouse_event(event):
            raise UnknownEventError(f"unknown mouse event: {event!r}")
        if handler is not None:
            keymap.bind(event, handler)
    return PatternBinding(pattern=pattern, keymap=keymap, style=style, grouping=grouping)
