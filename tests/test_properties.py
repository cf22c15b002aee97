"""Document-level guarantees checked across a corpus of JSON values.

- Conversion round trip: canonical -> editable -> canonical is the identity.
- Order: object member order survives conversion and every edit.
- Immutability: no operation modifies its input.
- Idempotence: retyping to the current type changes nothing.
- Counting: insert adds exactly one member, remove drops the subtree, and
  removing the member just inserted restores the original document.
"""

from __future__ import annotations

import copy
from typing import Any

import pytest

from json_member_editor import (
    JsonType,
    PathMutationEngine,
    classify,
    count_members,
    iter_members,
    to_canonical,
    to_editable,
)
from json_member_editor.engine.resolve import resolve_container
from json_member_editor.session import SessionDocument

CORPUS: list[Any] = [
    None,
    True,
    0,
    -3.25,
    "",
    "text",
    [],
    {},
    [1, "a", None, False, [2.5], {"k": "v"}],
    {"z": 1, "y": {"x": [], "w": {}}, "a": [[], [[]]]},
    {"user": {"id": 7, "name": "Ann", "roles": ["admin", "dev"]}, "ok": True},
    {"": "empty key", "0": "digit key", "é": "unicode"},
    # default keys for new members collide at both levels
    {"a": {"q": 1}, "field2": {"field1": {"k": 1}}},
]

OBJECTS: list[dict[str, Any]] = [v for v in CORPUS if isinstance(v, dict)]


@pytest.mark.parametrize("value", CORPUS)
def test_round_trip_is_identity(value: Any, assert_round_trip: Any) -> None:
    assert_round_trip(value)


@pytest.mark.parametrize("value", OBJECTS)
def test_object_order_preserved(value: dict[str, Any]) -> None:
    result = to_canonical(to_editable(value), classify(value))
    assert isinstance(result, dict)
    assert list(result) == list(value)


def _container_paths(document: Any) -> list[tuple[str, ...]]:
    return [path for path, member in iter_members(document) if member.is_container]


def _member_paths(document: Any) -> list[tuple[str, ...]]:
    return [path for path, _ in iter_members(document)]


@pytest.mark.parametrize("value", OBJECTS)
class TestEveryPath:
    """Run each operation against every member of the document."""

    def test_insert_adds_one_member(self, value: dict[str, Any]) -> None:
        engine = PathMutationEngine()
        document = to_editable(value)
        for path in [(), *_container_paths(document)]:
            updated = engine.insert_member(document, path)
            assert count_members(updated) == count_members(document) + 1

    def test_remove_undoes_insert(self, value: dict[str, Any]) -> None:
        engine = PathMutationEngine()
        document = to_editable(value)
        for path in [(), *_container_paths(document)]:
            container, container_type = resolve_container(document, path)
            key = engine.default_key(container, container_type, unique=True)
            inserted = engine.insert_member(document, path, key=key)
            restored = engine.remove_member(inserted, (*path, key))
            assert count_members(restored) == count_members(document)
            assert restored == document

    def test_editor_removes_what_it_inserted(self, value: dict[str, Any]) -> None:
        slot = SessionDocument(value)
        for path in [(), *_container_paths(slot.document)]:
            before = slot.document
            slot.editor(path).insert_member().remove()
            assert count_members(slot.document) == count_members(before)
            assert slot.document == before

    def test_remove_drops_subtree(self, value: dict[str, Any]) -> None:
        engine = PathMutationEngine()
        document = to_editable(value)
        for path, member in iter_members(document):
            updated = engine.remove_member(document, path)
            dropped = 1 + count_members(member.value)
            assert count_members(updated) == count_members(document) - dropped

    def test_change_to_same_type_is_noop(self, value: dict[str, Any]) -> None:
        engine = PathMutationEngine()
        document = to_editable(value)
        for path, member in iter_members(document):
            assert engine.change_type(document, path, member.type) == document

    def test_operations_never_modify_input(self, value: dict[str, Any]) -> None:
        engine = PathMutationEngine()
        document = to_editable(value)
        snapshot = copy.deepcopy(document)
        for path in _member_paths(document):
            engine.set_key(document, path, "renamed")
            engine.remove_member(document, path)
            engine.change_type(document, path, JsonType.NULL)
        for path in [(), *_container_paths(document)]:
            engine.insert_member(document, path)
        assert document == snapshot

    def test_sibling_order_survives_edits(self, value: dict[str, Any]) -> None:
        engine = PathMutationEngine()
        document = to_editable(value)
        keys = [m.key for m in document]  # type: ignore[union-attr]
        for key in keys:
            updated = engine.change_type(document, [key], JsonType.STRING)
            assert [m.key for m in updated] == keys  # type: ignore[union-attr]
