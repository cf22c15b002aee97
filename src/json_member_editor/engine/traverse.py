"""Read-only traversal helpers for editable documents.

These back the tree view: ``iter_members`` yields one (path, member) pair per
node in display order, which is exactly what is needed to mount one editor
per member.
"""

from __future__ import annotations

from collections.abc import Iterator

from json_member_editor.model.nodes import EditableNode, Member
from json_member_editor.model.types import JsonType

__all__ = ["count_members", "iter_members", "relabel_indices"]


def count_members(document: EditableNode) -> int:
    """Return the number of members at every depth of ``document``.

    A scalar document has no members and counts 0.
    """
    if not isinstance(document, list):
        return 0
    return sum(1 + count_members(member.value) for member in document)


def iter_members(
    document: EditableNode, prefix: tuple[str, ...] = ()
) -> Iterator[tuple[tuple[str, ...], Member]]:
    """Yield ``(path, member)`` for every member, depth-first, pre-order.

    Sibling order is the member-list order.  With duplicate keys present, the
    yielded paths of later duplicates resolve to the first occurrence.
    """
    if not isinstance(document, list):
        return
    for member in document:
        path = (*prefix, member.key)
        yield path, member
        yield from iter_members(member.value, path)


def relabel_indices(
    document: EditableNode, root_type: JsonType = JsonType.OBJECT
) -> EditableNode:
    """Return a copy of ``document`` whose array containers are keyed "0".."n-1".

    Object keys are left alone.  Removing an array element leaves a gap in
    its siblings' keys; the document does not care, but a display usually
    wants contiguous indices.
    """
    if not isinstance(document, list):
        return document
    return [
        Member(
            key=str(index) if root_type is JsonType.ARRAY else member.key,
            value=relabel_indices(member.value, member.type),
            type=member.type,
        )
        for index, member in enumerate(document)
    ]
