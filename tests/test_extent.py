"""Tests for extent resolution over an annotation store."""

from __future__ import annotations

from buttonlock.binding import CLICKABLE
from buttonlock.engine import Document
from buttonlock.extent import AnnotationStore, extent_text, find_extent, iter_extents

K = "k"


def _doc(length: int = 30) -> Document:
    return Document("x" * length)


def test_document_satisfies_store_protocol() -> None:
    assert isinstance(_doc(), AnnotationStore)


def test_run_in_middle() -> None:
    doc = _doc()
    doc.put_annotation(10, 15, K, True)
    assert find_extent(doc, 12, K) == (10, 15)
    assert find_extent(doc, 10, K) == (10, 15)
    assert find_extent(doc, 14, K) == (10, 15)
    assert find_extent(doc, 9, K) is None
    assert find_extent(doc, 15, K) is None


def test_run_at_document_boundaries() -> None:
    doc = _doc(10)
    doc.put_annotation(0, 3, K, True)
    doc.put_annotation(7, 10, K, True)
    assert find_extent(doc, 1, K) == (0, 3)
    assert find_extent(doc, 9, K) == (7, 10)


def test_point_outside_document() -> None:
    doc = _doc(5)
    doc.put_annotation(0, 5, K, True)
    assert find_extent(doc, -1, K) is None
    assert find_extent(doc, 5, K) is None
    assert find_extent(Document(""), 0, K) is None


def test_default_key_is_clickable_marker() -> None:
    doc = _doc()
    doc.put_annotation(3, 6, CLICKABLE, True)
    doc.put_annotation(3, 20, K, True)
    assert find_extent(doc, 4) == (3, 6)


def test_false_value_does_not_count() -> None:
    doc = _doc()
    doc.put_annotation(3, 6, K, True)
    doc.put_annotation(6, 8, K, False)
    assert find_extent(doc, 4, K) == (3, 6)
    assert find_extent(doc, 7, K) is None


def test_iter_extents_and_text() -> None:
    doc = Document("ab cd ef")
    doc.put_annotation(0, 2, K, True)
    doc.put_annotation(6, 8, K, True)
    assert list(iter_extents(doc, K)) == [(0, 2), (6, 8)]
    assert extent_text(doc, 7, K) == "ef"
    assert extent_text(doc, 3, K) is None
