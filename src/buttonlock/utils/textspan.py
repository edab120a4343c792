"""Utility functions for working with text spans.

The helpers in this module are pure and framework agnostic.  Spans are
represented as half‑open intervals ``[start, end)`` where ``start`` is inclusive
and ``end`` is exclusive.  Boundary touching spans therefore do not overlap.
"""

from __future__ import annotations

from bisect import bisect_right

from buttonlock.utils.errors import SpanOutOfBoundsError


def build_line_starts(text: str) -> tuple[int, ...]:
    """Return the starting character index for each line in ``text``."""

    starts = [0]
    for idx, char in enumerate(text):
        if char == "\n":
            starts.append(idx + 1)
    return tuple(starts)


def char_to_line_col(index: int, line_starts: tuple[int, ...]) -> tuple[int, int]:
    """Convert a character index to ``(line, col)`` using ``line_starts``.

    Line and column numbers are zero‑based.
    """

    if index < 0:
        raise ValueError("index must be non‑negative")
    line = bisect_right(line_starts, index) - 1
    if line < 0:
        line = 0
    col = index - line_starts[line]
    return line, col


def check_span(start: int, end: int, length: int) -> None:
    """Raise :class:`SpanOutOfBoundsError` unless ``0 <= start <= end <= length``."""

    if start < 0 or end < start or end > length:
        raise SpanOutOfBoundsError(f"invalid span [{start}, {end}) for length {length}")


def clamp_span(start: int | None, end: int | None, length: int) -> tuple[int, int]:
    """Return ``(start, end)`` with ``None`` replaced by the text bounds.

    Coordinates are clamped into ``[0, length]`` and ``end`` never precedes
    ``start``.
    """

    lo = 0 if start is None else max(0, min(start, length))
    hi = length if end is None else max(0, min(end, length))
    return lo, max(lo, hi)
