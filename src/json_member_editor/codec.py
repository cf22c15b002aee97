"""JSON text codec for editable documents.

``loads_editable`` parses JSON text straight into an editable document; the
member order of every object is the order its keys appear in the text.
``dumps_canonical`` converts an editable document to canonical JSON text for
transmission.
"""

from __future__ import annotations

import json
from typing import Any

from json_member_editor.convert.builder import to_editable
from json_member_editor.convert.canonical import to_canonical
from json_member_editor.errors import DuplicateKeyError, MalformedValueError
from json_member_editor.model.nodes import EditableNode
from json_member_editor.model.types import JsonType, classify

__all__ = ["dumps_canonical", "loads_editable"]


def _unique_pairs(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    obj: dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            # The hook cannot see where it is in the document.
            raise DuplicateKeyError((), key)
        obj[key] = value
    return obj


def _reject_constant(name: str) -> Any:
    raise MalformedValueError(f"non-finite number {name}")


def loads_editable(text: str | bytes) -> tuple[EditableNode, JsonType]:
    """Parse JSON text into an editable document and its root type.

    Raises:
        MalformedValueError: If ``text`` is not valid JSON, or uses the
            ``NaN``/``Infinity`` extensions.
        DuplicateKeyError:   If an object in ``text`` repeats a key.  The
            error's ``path`` is always ``()``.
    """
    try:
        value = json.loads(
            text, object_pairs_hook=_unique_pairs, parse_constant=_reject_constant
        )
    except json.JSONDecodeError as exc:
        raise MalformedValueError(
            f"invalid JSON text: {exc.msg} (line {exc.lineno} column {exc.colno})"
        ) from exc
    return to_editable(value), classify(value)


def dumps_canonical(
    node: EditableNode, json_type: JsonType, indent: int | None = None
) -> str:
    """Serialise an editable document as standard JSON text.

    Object members are written in member-list order, although receivers must
    not rely on it.

    Raises:
        DuplicateKeyError: If an object container holds duplicate keys.
    """
    return json.dumps(
        to_canonical(node, json_type),
        indent=indent,
        ensure_ascii=False,
        allow_nan=False,
    )
