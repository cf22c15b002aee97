"""Tests for the functional public API.

All imports are from the top-level ``json_member_editor`` package.
"""

from __future__ import annotations

import pytest

from json_member_editor import (
    ChangeType,
    DuplicateKeyError,
    EditorConfig,
    JsonType,
    KeyConflictPolicy,
    StalePathError,
    apply,
    change_type,
    insert_member,
    remove_member,
    set_key,
    set_value,
    to_canonical,
    to_editable,
)


class TestFunctionalApi:
    def test_chained_edits(self) -> None:
        doc = to_editable({"a": 1, "b": "x"})
        doc = change_type(doc, ["a"], JsonType.STRING)
        doc = insert_member(doc)
        doc = remove_member(doc, ["b"])
        assert to_canonical(doc, JsonType.OBJECT) == {"a": "", "field2": ""}

    def test_set_value_and_key(self) -> None:
        doc = to_editable({"count": 1})
        doc = set_value(doc, ["count"], "3")
        doc = set_key(doc, ["count"], "total")
        assert to_canonical(doc, JsonType.OBJECT) == {"total": 3}

    def test_apply(self) -> None:
        doc = apply(to_editable({"a": 1}), ChangeType(["a"], JsonType.NULL))
        assert to_canonical(doc, JsonType.OBJECT) == {"a": None}

    def test_root_type_forwarded(self) -> None:
        doc = insert_member(to_editable([]), root_type=JsonType.ARRAY)
        assert to_canonical(doc, JsonType.ARRAY) == [""]

    def test_config_forwarded(self) -> None:
        config = EditorConfig(key_conflicts=KeyConflictPolicy.REJECT)
        with pytest.raises(DuplicateKeyError):
            set_key(to_editable({"a": 1, "b": 2}), ["b"], "a", config=config)

    def test_input_untouched(self) -> None:
        doc = to_editable({"a": {"b": 1}})
        snapshot = to_canonical(doc, JsonType.OBJECT)
        remove_member(doc, ["a", "b"])
        assert to_canonical(doc, JsonType.OBJECT) == snapshot

    def test_stale_path(self) -> None:
        with pytest.raises(StalePathError):
            remove_member(to_editable({}), ["gone"])

    def test_no_state_between_calls(self) -> None:
        first = insert_member(to_editable({}))
        second = insert_member(to_editable({}))
        assert first == second
