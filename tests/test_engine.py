"""Tests for the reference document and pattern engine."""

from __future__ import annotations

import re

import pytest

from buttonlock.binding import CLICKABLE, FACE, REAR_NONSTICKY, FacePolicy
from buttonlock.engine import Document, Edit, PatternEngine
from buttonlock.extent import find_extent
from buttonlock.utils.errors import SpanOutOfBoundsError


def _engine(text: str) -> tuple[Document, PatternEngine]:
    document = Document(text)
    engine = PatternEngine(document)
    engine.add_managed_properties([FACE, CLICKABLE, REAR_NONSTICKY])
    engine.activate()
    return document, engine


def test_document_edits_notify_listeners() -> None:
    document = Document("abc")
    seen: list[Edit] = []
    document.add_listener(seen.append)
    document.insert(1, "XY")
    document.delete(0, 1)
    document.replace(0, 2, "z")
    assert document.text == "zbc"
    assert seen == [Edit(1, 0, 2), Edit(0, 1, 0), Edit(0, 2, 1)]
    assert seen[0].end == 3


def test_document_rejects_out_of_bounds() -> None:
    document = Document("abc")
    with pytest.raises(SpanOutOfBoundsError):
        document.insert(4, "x")
    with pytest.raises(SpanOutOfBoundsError):
        document.delete(2, 5)
    with pytest.raises(SpanOutOfBoundsError):
        document.annotations_at(3)
    assert document.get_annotation(3, "k") is None


def test_insert_inherits_unless_rear_nonsticky() -> None:
    document = Document("ab")
    document.put_annotations(0, 2, {"k": 1})
    document.insert(2, "c")
    assert document.get_annotation(2, "k") == 1

    document.put_annotations(0, 3, {REAR_NONSTICKY: True})
    document.insert(3, "d")
    assert document.get_annotation(3, "k") is None

    document.put_annotations(0, 4, {"k": 2, "j": 3, REAR_NONSTICKY: ("k",)})
    document.insert(4, "e")
    assert document.get_annotation(4, "k") is None
    assert document.get_annotation(4, "j") == 3

    document.insert(0, "_", inherit=True)
    assert document.annotations_at(0) == {}


def test_render_follows_edits() -> None:
    document, engine = _engine("id 12 end")
    engine.register_rule(r"\d+", 0, {CLICKABLE: True}, FacePolicy.APPEND)
    engine.render()
    assert find_extent(document, 3) == (3, 5)
    document.insert(5, "34")
    assert find_extent(document, 3) == (3, 7)
    document.delete(3, 7)
    assert find_extent(document, 3) is None


def test_render_on_edit_can_be_disabled() -> None:
    document = Document("x 1")
    engine = PatternEngine(document, render_on_edit=False)
    engine.add_managed_properties([CLICKABLE])
    engine.register_rule(r"\d", 0, {CLICKABLE: True}, FacePolicy.APPEND)
    engine.activate()
    count = engine.render_count
    document.insert(0, "y")
    assert engine.render_count == count


def test_deactivate_strips_managed_annotations() -> None:
    document, engine = _engine("a 1")
    engine.register_rule(r"\d", 0, {CLICKABLE: True}, FacePolicy.APPEND)
    engine.render()
    engine.deactivate()
    assert not engine.is_active
    assert document.get_annotation(2, CLICKABLE) is None
    document.insert(0, "z")
    assert engine.render_count == 2


@pytest.mark.parametrize(
    ("policy", "expected"),
    [
        (FacePolicy.NONE, "base"),
        (FacePolicy.KEEP, "base"),
        (FacePolicy.OVERRIDE, "btn"),
        (FacePolicy.PREPEND, ("btn", "base")),
        (FacePolicy.APPEND, ("base", "btn")),
    ],
)
def test_face_policies(policy: FacePolicy, expected: object) -> None:
    document, engine = _engine("word")
    engine.register_rule("word", 0, {FACE: "base"}, FacePolicy.OVERRIDE)
    engine.register_rule("word", 0, {FACE: "btn", CLICKABLE: True}, policy)
    engine.render()
    assert document.get_annotation(0, FACE) == expected
    # non-face properties are always applied
    assert document.get_annotation(0, CLICKABLE) is True


def test_keep_fills_only_unfaced_characters() -> None:
    document, engine = _engine("abcd")
    engine.register_rule("ab", 0, {FACE: "base"}, FacePolicy.OVERRIDE)
    engine.register_rule("abcd", 0, {FACE: "btn"}, FacePolicy.KEEP)
    engine.render()
    faces = [document.get_annotation(i, FACE) for i in range(4)]
    assert faces == ["base", "base", "btn", "btn"]


def test_none_policy_applies_when_text_is_unfaced() -> None:
    document, engine = _engine("abcd")
    engine.register_rule("cd", 0, {FACE: "btn"}, FacePolicy.NONE)
    engine.render()
    assert document.get_annotation(2, FACE) == "btn"


def test_unregister_rule_uses_identity() -> None:
    _, engine = _engine("x")
    first = engine.register_rule("x", 0, {}, FacePolicy.APPEND)
    second = engine.register_rule("x", 0, {}, FacePolicy.APPEND)
    assert engine.unregister_rule(second) is True
    assert engine.rules == (first,)
    assert engine.unregister_rule(second) is False


def test_malformed_pattern_fails_lazily() -> None:
    _, engine = _engine("text")
    engine.register_rule("(unclosed", 0, {CLICKABLE: True}, FacePolicy.APPEND)
    with pytest.raises(re.error):
        engine.render()


def test_invalid_group_fails_lazily() -> None:
    _, engine = _engine("text")
    engine.register_rule("te(x)t", 2, {CLICKABLE: True}, FacePolicy.APPEND)
    with pytest.raises(IndexError):
        engine.render()


def test_unmatched_optional_group_is_skipped() -> None:
    document, engine = _engine("ab")
    engine.register_rule("a(z)?", 1, {CLICKABLE: True}, FacePolicy.APPEND)
    engine.render()
    assert document.get_annotation(0, CLICKABLE) is None
