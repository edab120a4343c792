"""Resolve the contiguous run of text carrying an annotation.

The rendering engine writes one contiguous range per pattern match, so the
extent of a button around a position is found with a linear scan outwards
from that position.  Extents follow the half‑open convention ``[start, end)``.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Protocol, runtime_checkable

from .binding import CLICKABLE

__all__ = ["AnnotationStore", "find_extent", "iter_extents", "extent_text"]


@runtime_checkable
class AnnotationStore(Protocol):
    """Read access to per-position annotations of a document."""

    def get_annotation(self, pos: int, key: str) -> Any:
        """Return the value of ``key`` at ``pos`` or ``None``."""

        ...

    def __len__(self) -> int:
        ...


def _carries(store: AnnotationStore, pos: int, key: str) -> bool:
    value = store.get_annotation(pos, key)
    return value is not None and value is not False


def find_extent(
    store: AnnotationStore, point: int, key: str = CLICKABLE
) -> tuple[int, int] | None:
    """Return the maximal ``[start, end)`` run around ``point`` holding ``key``.

    Returns ``None`` when ``point`` lies outside the document or carries no
    value for ``key``.
    """

    size = len(store)
    if point < 0 or point >= size:
        return None
    if not _carries(store, point, key):
        return None

    start = point
    while start > 0 and _carries(store, start - 1, key):
        start -= 1

    end = point + 1
    while end < size and _carries(store, end, key):
        end += 1

    return start, end


def iter_extents(store: AnnotationStore, key: str = CLICKABLE) -> Iterator[tuple[int, int]]:
    """Yield every maximal run carrying ``key``, left to right."""

    pos = 0
    size = len(store)
    while pos < size:
        extent = find_extent(store, pos, key)
        if extent is None:
            pos += 1
            continue
        yield extent
        pos = extent[1]


def extent_text(document: Any, point: int, key: str = CLICKABLE) -> str | None:
    """Return the text of the extent around ``point`` or ``None``."""

    extent = find_extent(document, point, key)
    if extent is None:
        return None
    start, end = extent
    return str(document.text[start:end])
