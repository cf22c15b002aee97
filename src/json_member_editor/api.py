"""Public API functions for json-member-editor.

Thin functional wrappers over ``PathMutationEngine``: each mutation call
creates a fresh engine from ``config`` so that no state survives between
calls.  Every function returns a new document and leaves its input intact.
"""

from __future__ import annotations

from typing import Any

from json_member_editor.engine.config import EditorConfig
from json_member_editor.engine.mutator import PathMutationEngine
from json_member_editor.engine.operations import Operation
from json_member_editor.model.nodes import EditableNode, Path
from json_member_editor.model.types import JsonType

__all__ = [
    "apply",
    "change_type",
    "insert_member",
    "remove_member",
    "set_key",
    "set_value",
]


def apply(
    document: EditableNode,
    operation: Operation,
    root_type: JsonType = JsonType.OBJECT,
    config: EditorConfig | None = None,
) -> EditableNode:
    """Apply one operation record to ``document`` and return the new document.

    Args:
        document:  Editable document (never modified).
        operation: One of SetValue, SetKey, InsertMember, RemoveMember,
                   ChangeType.
        root_type: Whether a member-list root is an OBJECT or an ARRAY.
        config:    Editing policy.  Defaults to ``EditorConfig()`` when None.
    """
    return PathMutationEngine(config).apply(document, operation, root_type)


def set_value(
    document: EditableNode,
    path: Path,
    value: Any,
    root_type: JsonType = JsonType.OBJECT,
    config: EditorConfig | None = None,
) -> EditableNode:
    """Return ``document`` with the scalar at ``path`` replaced by ``value``."""
    return PathMutationEngine(config).set_value(document, path, value, root_type)


def set_key(
    document: EditableNode,
    path: Path,
    key: str,
    root_type: JsonType = JsonType.OBJECT,
    config: EditorConfig | None = None,
) -> EditableNode:
    """Return ``document`` with the member at ``path`` renamed to ``key``."""
    return PathMutationEngine(config).set_key(document, path, key, root_type)


def insert_member(
    document: EditableNode,
    path: Path = (),
    root_type: JsonType = JsonType.OBJECT,
    config: EditorConfig | None = None,
    key: str | None = None,
) -> EditableNode:
    """Return ``document`` with a new member appended at container ``path``.

    The member's key is ``key`` when given, else the configured default.
    """
    return PathMutationEngine(config).insert_member(document, path, root_type, key)


def remove_member(
    document: EditableNode,
    path: Path,
    root_type: JsonType = JsonType.OBJECT,
    config: EditorConfig | None = None,
) -> EditableNode:
    """Return ``document`` without the member at ``path``."""
    return PathMutationEngine(config).remove_member(document, path, root_type)


def change_type(
    document: EditableNode,
    path: Path,
    json_type: JsonType | str,
    root_type: JsonType = JsonType.OBJECT,
    config: EditorConfig | None = None,
) -> EditableNode:
    """Return ``document`` with the member at ``path`` retyped.  DESTRUCTIVE.

    The old value is discarded and replaced by the zero value of
    ``json_type``; retyping to the current type returns an equal copy.
    """
    return PathMutationEngine(config).change_type(document, path, json_type, root_type)
