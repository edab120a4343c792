"""Per-document registry of pattern bindings.

The registry is an ordered sequence of :class:`PatternBinding` objects keyed by
pattern: no two bindings in one registry share a pattern.  While a
:class:`~buttonlock.sync.HighlightSync` is attached (the document's button mode
is on) every mutation is pushed to the rendering engine before the call
returns:

``set``
    Builds a binding, replacing an existing binding for the same pattern in
    its slot unless ``no_replace`` is requested.
``remove``
    Deletes a binding by pattern or by identity.
``extend``
    Adds event mappings to a registered binding in place.
``clear_all``
    Drops every binding.

Sequence order carries no matching priority; the engine evaluates all rules
independently.  A replaced binding keeps its registry slot but its new rule is
appended to the engine's rule set.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING

from .binding import FacePolicy, PatternBinding, RenderStyle, make_binding
from .config import ButtonDefaults, ConfigModel, default_config
from .events import Handler, normalize_chord
from .utils.errors import NoSuchBindingError
from .utils.logging import get_logger

if TYPE_CHECKING:
    from .sync import HighlightSync

__all__ = ["BindingRegistry"]

logger = get_logger(__name__)

_UNSET: object = object()


class BindingRegistry:
    """Ordered, pattern-unique collection of bindings for one document."""

    def __init__(self, config: ConfigModel | None = None) -> None:
        cfg = config if config is not None else default_config()
        self.defaults: ButtonDefaults = cfg.buttons
        self._bindings: list[PatternBinding] = []
        self._sync: HighlightSync | None = None

    # ------------------------------------------------------------------
    # Collection protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[PatternBinding]:
        return iter(list(self._bindings))

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return self._index_of_pattern(item) is not None
        return self._index_of_binding(item) is not None

    def __repr__(self) -> str:
        return f"BindingRegistry(patterns={self.patterns()!r}, active={self.active})"

    def patterns(self) -> list[str]:
        return [b.pattern for b in self._bindings]

    def get(self, pattern: str) -> PatternBinding | None:
        """Return the binding registered for ``pattern``."""

        idx = self._index_of_pattern(pattern)
        return None if idx is None else self._bindings[idx]

    def _index_of_pattern(self, pattern: str) -> int | None:
        for idx, binding in enumerate(self._bindings):
            if binding.pattern == pattern:
                return idx
        return None

    def _index_of_binding(self, binding: object) -> int | None:
        for idx, candidate in enumerate(self._bindings):
            if candidate is binding:
                return idx
        return None

    # ------------------------------------------------------------------
    # Highlight sync attachment
    # ------------------------------------------------------------------

    @property
    def active(self) -> bool:
        """``True`` while a highlight sync is attached."""

        return self._sync is not None

    @property
    def sync(self) -> HighlightSync | None:
        return self._sync

    def attach(self, sync: HighlightSync) -> None:
        self._sync = sync

    def detach(self) -> None:
        self._sync = None

    def _refresh(self) -> None:
        if self._sync is None:
            return
        self._sync.maybe_unbuttonify()
        self._sync.request_render()

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set(
        self,
        pattern: str,
        action: Handler,
        *,
        face: str | None | object = _UNSET,
        mouse_face: str | None | object = _UNSET,
        face_policy: FacePolicy | str | None = None,
        help_echo: str | None = None,
        kbd_help: str | None = None,
        kbd_help_multiline: str | None = None,
        grouping: int | None = None,
        additional_property: str | None = None,
        rear_sticky: bool | None = None,
        mouse_binding: str | None = None,
        keyboard_binding: str | None = None,
        keyboard_action: Handler | None = None,
        events: Mapping[str, Handler] | None = None,
        no_replace: bool = False,
        remove: bool = False,
    ) -> PatternBinding | None:
        """Bind ``action`` to text matching ``pattern``.

        Omitted options fall back to the registry defaults.  Passing ``None``
        for ``face`` or ``mouse_face`` disables that face.

        If a binding for ``pattern`` exists it is returned unchanged when
        ``no_replace`` is set, otherwise it is replaced in its slot.  With
        ``remove`` the call only removes the existing binding and returns
        ``None``.  Returns the binding now active for ``pattern``.
        """

        idx = self._index_of_pattern(pattern)
        if idx is not None and no_replace:
            return self._bindings[idx]
        if remove:
            self.remove(pattern)
            return None

        defaults = self.defaults
        policy = face_policy if face_policy is not None else defaults.face_policy
        style = RenderStyle(
            face=defaults.face if face is _UNSET else face,  # type: ignore[arg-type]
            mouse_face=defaults.mouse_face if mouse_face is _UNSET else mouse_face,  # type: ignore[arg-type]
            face_policy=FacePolicy(policy),
            help_echo=help_echo,
            kbd_help=kbd_help,
            kbd_help_multiline=kbd_help_multiline,
            additional_property=additional_property,
            rear_sticky=defaults.rear_sticky if rear_sticky is None else rear_sticky,
        )
        binding = make_binding(
            pattern,
            action,
            mouse_binding=mouse_binding or defaults.mouse_binding,
            style=style,
            grouping=defaults.grouping if grouping is None else grouping,
            keyboard_binding=keyboard_binding,
            keyboard_action=keyboard_action,
            events=events,
        )

        if idx is not None:
            self.remove(self._bindings[idx])
            self._bindings.insert(idx, binding)
        else:
            self._bindings.append(binding)

        if self._sync is not None:
            self._sync.tell(binding)
            self._sync.request_render()
        logger.debug("set binding for %r (replaced=%s)", pattern, idx is not None)
        return binding

    def remove(self, target: str | PatternBinding) -> PatternBinding | None:
        """Remove the binding for ``target`` (a pattern or a binding).

        Returns the removed binding, or ``None`` when nothing matched.
        """

        if isinstance(target, str):
            idx = self._index_of_pattern(target)
        else:
            idx = self._index_of_binding(target)
        if idx is None:
            return None

        binding = self._bindings.pop(idx)
        if self._sync is not None:
            self._sync.forget(binding)
            self._refresh()
        logger.debug("removed binding for %r", binding.pattern)
        return binding

    unset = remove

    def extend(
        self,
        binding: PatternBinding,
        action: Handler,
        event: str,
        keyboard_event: str | None = None,
    ) -> PatternBinding:
        """Add ``event`` (and ``keyboard_event``) → ``action`` to ``binding``.

        The binding's keymap is mutated in place.  Raises
        :class:`NoSuchBindingError` when ``binding`` is not registered here.
        """

        if self._index_of_binding(binding) is None:
            raise NoSuchBindingError(f"no such binding: {binding!r}")

        if self._sync is not None:
            self._sync.forget(binding)
        binding.keymap.bind(event, action)
        if keyboard_event:
            binding.keymap.bind(normalize_chord(keyboard_event), action)
        if self._sync is not None:
            self._sync.tell(binding)
            self._sync.request_render()
        logger.debug("extended binding for %r with %r", binding.pattern, event)
        return binding

    def clear_all(self) -> int:
        """Remove every binding and return how many were removed."""

        count = len(self._bindings)
        if self._sync is not None:
            for binding in self._bindings:
                self._sync.forget(binding)
        self._bindings.clear()
        self._refresh()
        logger.debug("cleared %d bindings", count)
        return count
