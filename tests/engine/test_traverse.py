"""Tests for the read-only traversal helpers."""

from __future__ import annotations

from json_member_editor.convert.builder import to_editable
from json_member_editor.convert.canonical import to_canonical
from json_member_editor.engine.mutator import PathMutationEngine
from json_member_editor.engine.traverse import (
    count_members,
    iter_members,
    relabel_indices,
)
from json_member_editor.model.types import JsonType


class TestCountMembers:
    def test_scalar_document(self) -> None:
        assert count_members(to_editable(3)) == 0

    def test_empty_container(self) -> None:
        assert count_members(to_editable({})) == 0

    def test_counts_every_depth(self) -> None:
        doc = to_editable({"a": 1, "b": {"c": [1, 2]}, "d": []})
        # a, b, c, c/0, c/1, d
        assert count_members(doc) == 6


class TestIterMembers:
    def test_preorder_paths(self) -> None:
        doc = to_editable({"a": {"b": 1, "c": [True]}, "d": None})
        paths = [path for path, _ in iter_members(doc)]
        assert paths == [
            ("a",),
            ("a", "b"),
            ("a", "c"),
            ("a", "c", "0"),
            ("d",),
        ]

    def test_yields_members(self) -> None:
        doc = to_editable({"x": "y"})
        [(path, member)] = list(iter_members(doc))
        assert path == ("x",)
        assert member.value == "y"
        assert member.type is JsonType.STRING

    def test_scalar_document_yields_nothing(self) -> None:
        assert list(iter_members(to_editable("text"))) == []

    def test_prefix(self) -> None:
        doc = to_editable({"k": 1})
        assert [p for p, _ in iter_members(doc, ("root",))] == [("root", "k")]


class TestRelabelIndices:
    def test_closes_gaps_after_removal(self) -> None:
        engine = PathMutationEngine()
        doc = to_editable({"items": ["a", "b", "c"]})
        doc = engine.remove_member(doc, ["items", "0"])
        relabelled = relabel_indices(doc)
        keys = [path for path, _ in iter_members(relabelled)]
        assert keys == [("items",), ("items", "0"), ("items", "1")]

    def test_array_root(self) -> None:
        engine = PathMutationEngine()
        doc = engine.remove_member(to_editable([1, 2, 3]), ["1"], JsonType.ARRAY)
        relabelled = relabel_indices(doc, JsonType.ARRAY)
        assert [p for p, _ in iter_members(relabelled)] == [("0",), ("1",)]

    def test_object_keys_untouched(self) -> None:
        doc = to_editable({"z": {"y": 1}, "a": 2})
        assert relabel_indices(doc) == doc

    def test_canonical_value_unchanged(self) -> None:
        doc = to_editable({"list": [{"n": 1}, [2, 3]]})
        relabelled = relabel_indices(doc)
        assert to_canonical(relabelled, JsonType.OBJECT) == to_canonical(
            doc, JsonType.OBJECT
        )

    def test_returns_copy(self) -> None:
        doc = to_editable([1])
        assert relabel_indices(doc, JsonType.ARRAY) is not doc

    def test_scalar_passthrough(self) -> None:
        assert relabel_indices(5, JsonType.NUMBER) == 5
