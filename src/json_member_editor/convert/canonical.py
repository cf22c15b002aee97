"""Conversion of an editable document back to canonical JSON.

The caller supplies the top-level type, which decides whether a root member
list becomes a JSON object (``Member.key`` used as the mapping key) or a JSON
array (keys dropped, positional order kept).  Nested members carry their own
type.

Object containers with duplicate keys are rejected with
``DuplicateKeyError``: duplicates may exist transiently while editing, but
emitting them would silently drop data.
"""

from __future__ import annotations

from json_member_editor.errors import DuplicateKeyError, MemberTypeError
from json_member_editor.model.nodes import CanonicalValue, EditableNode, Member
from json_member_editor.model.types import JsonType, scalar_matches

__all__ = ["to_canonical"]


def to_canonical(node: EditableNode, json_type: JsonType) -> CanonicalValue:
    """Convert an editable document to a canonical JSON value.

    Args:
        node:      The editable document (member list or scalar).
        json_type: The JsonType of ``node``.

    Returns:
        A fresh ``dict`` / ``list`` / scalar sharing nothing mutable with
        ``node``.

    Raises:
        DuplicateKeyError: If an object container holds two members with the
            same key.
        MemberTypeError:   If ``node`` does not have the shape of
            ``json_type`` (e.g. a member list passed as NUMBER).
    """
    return _convert(node, JsonType(json_type), ())


def _convert(
    node: EditableNode, json_type: JsonType, path: tuple[str, ...]
) -> CanonicalValue:
    if json_type.is_container:
        if not isinstance(node, list):
            msg = f"{json_type} at {list(path)!r} must be a member list"
            raise MemberTypeError(msg)
        if json_type is JsonType.OBJECT:
            return _convert_object(node, path)
        return [_convert(m.value, m.type, (*path, m.key)) for m in node]

    if not scalar_matches(json_type, node):
        msg = f"{json_type} at {list(path)!r} cannot hold {node!r}"
        raise MemberTypeError(msg)
    return node


def _convert_object(members: list[Member], path: tuple[str, ...]) -> CanonicalValue:
    obj: dict[str, CanonicalValue] = {}
    for member in members:
        if member.key in obj:
            raise DuplicateKeyError(path, member.key)
        obj[member.key] = _convert(member.value, member.type, (*path, member.key))
    return obj
