"""Tests for the JSON text codec."""

from __future__ import annotations

import json

import pytest

from json_member_editor.codec import dumps_canonical, loads_editable
from json_member_editor.convert.builder import to_editable
from json_member_editor.engine.mutator import PathMutationEngine
from json_member_editor.errors import DuplicateKeyError, MalformedValueError
from json_member_editor.model.nodes import Member
from json_member_editor.model.types import JsonType


class TestLoadsEditable:
    def test_object_member_order_follows_text(self) -> None:
        document, json_type = loads_editable('{"z": 1, "a": [true, null]}')
        assert json_type is JsonType.OBJECT
        assert isinstance(document, list)
        assert [m.key for m in document] == ["z", "a"]
        assert document[1].value == [
            Member("0", True, JsonType.BOOLEAN),
            Member("1", None, JsonType.NULL),
        ]

    def test_scalar_text(self) -> None:
        assert loads_editable('"hi"') == ("hi", JsonType.STRING)
        assert loads_editable("1.5") == (1.5, JsonType.NUMBER)

    def test_bytes_input(self) -> None:
        document, json_type = loads_editable(b"[]")
        assert document == []
        assert json_type is JsonType.ARRAY

    def test_invalid_text(self) -> None:
        with pytest.raises(MalformedValueError, match="invalid JSON text"):
            loads_editable("{'a': 1}")

    def test_invalid_text_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            loads_editable("")

    @pytest.mark.parametrize("text", ["NaN", "[Infinity]", '{"a": -Infinity}'])
    def test_non_finite_constants_rejected(self, text: str) -> None:
        with pytest.raises(MalformedValueError, match="non-finite"):
            loads_editable(text)

    def test_duplicate_keys_rejected(self) -> None:
        with pytest.raises(DuplicateKeyError) as exc_info:
            loads_editable('{"a": {"b": 1, "b": 2}}')
        assert exc_info.value.key == "b"


class TestDumpsCanonical:
    def test_member_order_written(self) -> None:
        text = dumps_canonical(to_editable({"b": 1, "a": 2}), JsonType.OBJECT)
        assert text == '{"b": 1, "a": 2}'

    def test_unicode_kept(self) -> None:
        assert dumps_canonical("héllo", JsonType.STRING) == '"héllo"'

    def test_indent(self) -> None:
        text = dumps_canonical(to_editable([1]), JsonType.ARRAY, indent=2)
        assert text == "[\n  1\n]"

    def test_duplicate_keys_rejected(self) -> None:
        engine = PathMutationEngine()
        document = engine.set_key(to_editable({"a": 1, "b": 2}), ["b"], "a")
        with pytest.raises(DuplicateKeyError):
            dumps_canonical(document, JsonType.OBJECT)

    def test_text_round_trip(self) -> None:
        text = '{"user": {"id": 7, "tags": ["x", "y"]}, "ok": false}'
        document, json_type = loads_editable(text)
        assert json.loads(dumps_canonical(document, json_type)) == json.loads(text)
