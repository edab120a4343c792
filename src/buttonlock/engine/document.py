"""An editable text buffer with per-character annotations.

Each character position holds a small dictionary of annotation key/value
pairs.  Positions follow the half‑open span convention used throughout the
package.  Inserted text inherits the annotations of the preceding character
unless that character lists them as rear‑nonsticky, mirroring how typed text
extends (or does not extend) a styled run.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from ..binding import REAR_NONSTICKY
from ..utils.errors import SpanOutOfBoundsError
from ..utils.textspan import check_span

__all__ = ["Edit", "Document"]


@dataclass(slots=True, frozen=True)
class Edit:
    """Description of one buffer change.

    ``start`` is where the change happened, ``removed`` and ``inserted`` the
    number of characters deleted and added there.
    """

    start: int
    removed: int
    inserted: int

    @property
    def end(self) -> int:
        """End of the changed region in the new text."""

        return self.start + self.inserted


EditListener = Callable[[Edit], None]


class Document:
    """Mutable text with an annotation store."""

    def __init__(self, text: str = "", name: str | None = None) -> None:
        self.name = name
        self._text = text
        self._props: list[dict[str, Any]] = [{} for _ in text]
        self._listeners: list[EditListener] = []

    def __len__(self) -> int:
        return len(self._text)

    def __repr__(self) -> str:
        return f"Document(name={self.name!r}, length={len(self._text)})"

    @property
    def text(self) -> str:
        return self._text

    # ------------------------------------------------------------------
    # Annotations
    # ------------------------------------------------------------------

    def get_annotation(self, pos: int, key: str) -> Any:
        """Return the value of ``key`` at ``pos``; ``None`` outside the text."""

        if 0 <= pos < len(self._props):
            return self._props[pos].get(key)
        return None

    def annotations_at(self, pos: int) -> dict[str, Any]:
        if not 0 <= pos < len(self._props):
            raise SpanOutOfBoundsError(f"position {pos} outside document")
        return dict(self._props[pos])

    def put_annotations(self, start: int, end: int, props: Mapping[str, Any]) -> None:
        """Set every pair of ``props`` on ``[start, end)``."""

        check_span(start, end, len(self._text))
        for pos in range(start, end):
            self._props[pos].update(props)

    def put_annotation(self, start: int, end: int, key: str, value: Any) -> None:
        self.put_annotations(start, end, {key: value})

    def remove_annotations(self, start: int, end: int, keys: Iterable[str]) -> None:
        """Drop ``keys`` from every position of ``[start, end)``."""

        check_span(start, end, len(self._text))
        keys = tuple(keys)
        for pos in range(start, end):
            slot = self._props[pos]
            for key in keys:
                slot.pop(key, None)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def add_listener(self, listener: EditListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: EditListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _inherited(self, pos: int) -> dict[str, Any]:
        if pos == 0:
            return {}
        prev = self._props[pos - 1]
        nonsticky = prev.get(REAR_NONSTICKY)
        if nonsticky is True:
            return {}
        if nonsticky:
            return {k: v for k, v in prev.items() if k not in nonsticky}
        return dict(prev)

    def insert(self, pos: int, text: str, *, inherit: bool = True) -> Edit:
        """Insert ``text`` at ``pos`` and notify listeners."""

        check_span(pos, pos, len(self._text))
        template = self._inherited(pos) if inherit else {}
        self._text = self._text[:pos] + text + self._text[pos:]
        self._props[pos:pos] = [dict(template) for _ in text]
        return self._notify(Edit(pos, 0, len(text)))

    def delete(self, start: int, end: int) -> Edit:
        """Delete ``[start, end)`` and notify listeners."""

        check_span(start, end, len(self._text))
        self._text = self._text[:start] + self._text[end:]
        del self._props[start:end]
        return self._notify(Edit(start, end - start, 0))

    def replace(self, start: int, end: int, text: str) -> Edit:
        """Replace ``[start, end)`` with ``text`` as a single edit."""

        check_span(start, end, len(self._text))
        template = self._inherited(start)
        self._text = self._text[:start] + text + self._text[end:]
        self._props[start:end] = [dict(template) for _ in text]
        return self._notify(Edit(start, end - start, len(text)))

    def _notify(self, edit: Edit) -> Edit:
        for listener in list(self._listeners):
            listener(edit)
        return edit
