"""Regex driven rendering engine writing annotations onto a :class:`Document`.

The engine keeps an ordered list of :class:`~buttonlock.sync.HighlightRule`
objects.  A render pass first clears every managed annotation key over the
region, then evaluates each rule against the whole text and writes its
properties onto the matched group, clipped to the region.

Every property except ``face`` is written unconditionally.  The face is
composed with whatever face the text already has according to the rule's
override policy:

``none``
    Leave the match alone if any character already has a face.
``keep``
    Only fill characters without a face.
``prepend`` / ``append``
    Merge into a face list, in front of or behind existing faces.
``override``
    Replace the existing face.

Patterns are compiled lazily, so a malformed pattern or an invalid group
index raises only when a render pass evaluates it.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from ..binding import FACE, FacePolicy
from ..sync import HighlightRule
from ..utils.logging import get_logger
from ..utils.textspan import clamp_span
from .document import Document, Edit

__all__ = ["PatternEngine", "UnfontifyFunc"]

logger = get_logger(__name__)

UnfontifyFunc = Callable[[int, int], None]


def _face_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _face_value(faces: list[Any]) -> Any:
    if not faces:
        return None
    if len(faces) == 1:
        return faces[0]
    return tuple(faces)


class PatternEngine:
    """In-memory implementation of the rendering engine protocol."""

    def __init__(
        self,
        document: Document,
        *,
        unfontify: UnfontifyFunc | None = None,
        render_on_edit: bool = True,
    ) -> None:
        self.document = document
        self.render_on_edit = render_on_edit
        self.render_count = 0
        self._unfontify = unfontify
        self._rules: list[HighlightRule] = []
        self._managed: set[str] = set()
        self._compiled: dict[str, re.Pattern[str]] = {}
        self._active = False

    def __repr__(self) -> str:
        return f"PatternEngine(rules={len(self._rules)}, active={self._active})"

    # ------------------------------------------------------------------
    # Activation
    # ------------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self._active

    def activate(self) -> None:
        """Start rendering the document and follow its edits."""

        if self._active:
            return
        self._active = True
        self.document.add_listener(self._on_edit)
        self.render()

    def deactivate(self) -> None:
        """Stop rendering and strip managed annotations."""

        if not self._active:
            return
        self.document.remove_listener(self._on_edit)
        self.default_unfontify()
        self._active = False

    def _on_edit(self, edit: Edit) -> None:
        _ = edit
        if self.render_on_edit:
            self.render()

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    @property
    def rules(self) -> tuple[HighlightRule, ...]:
        return tuple(self._rules)

    @property
    def managed_properties(self) -> frozenset[str]:
        return frozenset(self._managed)

    @property
    def unfontify_is_default(self) -> bool:
        return self._unfontify is None

    def register_rule(
        self,
        pattern: str,
        grouping: int,
        properties: Mapping[str, Any],
        override_policy: FacePolicy,
    ) -> HighlightRule:
        rule = HighlightRule(pattern, grouping, properties, override_policy)
        self._rules.append(rule)
        return rule

    def unregister_rule(self, rule: HighlightRule) -> bool:
        for idx, candidate in enumerate(self._rules):
            if candidate is rule:
                del self._rules[idx]
                return True
        return False

    def add_managed_properties(self, keys: Iterable[str]) -> None:
        self._managed.update(keys)

    def remove_managed_properties(self, keys: Iterable[str]) -> None:
        self._managed.difference_update(keys)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def request_rerender(self, start: int | None = None, end: int | None = None) -> None:
        if self._active:
            self.render(start, end)

    def default_unfontify(self, start: int | None = None, end: int | None = None) -> None:
        lo, hi = clamp_span(start, end, len(self.document))
        self.document.remove_annotations(lo, hi, self._managed)

    def render(self, start: int | None = None, end: int | None = None) -> None:
        """Clear and reapply every rule over ``[start, end)``."""

        lo, hi = clamp_span(start, end, len(self.document))
        if self._unfontify is not None:
            self._unfontify(lo, hi)
        else:
            self.default_unfontify(lo, hi)
        text = self.document.text
        for rule in self._rules:
            rx = self._compile(rule.pattern)
            for match in rx.finditer(text):
                m_start, m_end = match.span(rule.grouping)
                s, e = max(m_start, lo), min(m_end, hi)
                if m_start < 0 or s >= e:
                    continue
                self._apply(rule, s, e)
        self.render_count += 1
        logger.debug("rendered [%d, %d) with %d rules", lo, hi, len(self._rules))

    def _compile(self, pattern: str) -> re.Pattern[str]:
        rx = self._compiled.get(pattern)
        if rx is None:
            rx = re.compile(pattern)
            self._compiled[pattern] = rx
        return rx

    def _apply(self, rule: HighlightRule, start: int, end: int) -> None:
        doc = self.document
        others = {k: v for k, v in rule.properties.items() if k != FACE}
        if others:
            doc.put_annotations(start, end, others)
        face = rule.properties.get(FACE)
        if face is None:
            return

        policy = rule.override_policy
        if policy is FacePolicy.OVERRIDE:
            doc.put_annotation(start, end, FACE, face)
        elif policy is FacePolicy.NONE:
            if all(doc.get_annotation(pos, FACE) is None for pos in range(start, end)):
                doc.put_annotation(start, end, FACE, face)
        else:
            for pos in range(start, end):
                existing = doc.get_annotation(pos, FACE)
                if policy is FacePolicy.KEEP:
                    if existing is None:
                        doc.put_annotation(pos, pos + 1, FACE, face)
                    continue
                faces = _face_list(existing)
                if policy is FacePolicy.PREPEND:
                    faces.insert(0, face)
                else:
                    faces.append(face)
                doc.put_annotation(pos, pos + 1, FACE, _face_value(faces))
