"""Path resolution against an editable document.

A path is a sequence of keys.  Each segment selects the first member of the
current member list whose key equals the segment, then descends into its
value.  Paths are positional addresses, not identities: renaming a member
makes every path through its old key stale.

Two flavours are provided:
- ``find_member`` returns None on a miss, for callers that only want to ask.
- ``resolve_*`` raise StalePathError on a miss.  The mutation engine uses
  these: a path that does not resolve against the current document is a
  caller bug and must surface at the call site.
"""

from __future__ import annotations

from json_member_editor.errors import MemberTypeError, StalePathError
from json_member_editor.model.nodes import EditableNode, Member, Path
from json_member_editor.model.types import JsonType

__all__ = [
    "clone_document",
    "find_member",
    "normalize_path",
    "resolve_container",
    "resolve_member",
    "resolve_parent",
]


def normalize_path(path: Path) -> tuple[str, ...]:
    """Return ``path`` as a tuple of keys.

    Raises:
        TypeError: If ``path`` is a bare string (which would otherwise be
            walked character by character) or holds non-string segments.
    """
    if isinstance(path, str):
        msg = f"path must be a sequence of keys, not the string {path!r}"
        raise TypeError(msg)
    segments = tuple(path)
    for segment in segments:
        if not isinstance(segment, str):
            msg = f"path segments must be str, got {segment!r}"
            raise TypeError(msg)
    return segments


def _index_of(members: list[Member], key: str) -> int | None:
    for index, member in enumerate(members):
        if member.key == key:
            return index
    return None


def find_member(document: EditableNode, path: Path) -> Member | None:
    """Return the member at ``path`` or None when the path does not resolve.

    The empty path addresses the document root, which is not a member, so it
    also returns None.
    """
    current: EditableNode = document
    found: Member | None = None
    for segment in normalize_path(path):
        if not isinstance(current, list):
            return None
        index = _index_of(current, segment)
        if index is None:
            return None
        found = current[index]
        current = found.value
    return found


def _descend(
    document: EditableNode, segments: tuple[str, ...], full_path: tuple[str, ...]
) -> tuple[list[Member], Member | None]:
    """Walk ``segments`` and return the member list they lead to and its owner.

    The owner is None when ``segments`` is empty (the list is the root).
    """
    current: EditableNode = document
    owner: Member | None = None
    for segment in segments:
        if not isinstance(current, list):
            raise StalePathError(full_path, segment, "descends into a scalar")
        index = _index_of(current, segment)
        if index is None:
            raise StalePathError(full_path, segment, f"no member {segment!r}")
        owner = current[index]
        current = owner.value
    if not isinstance(current, list):
        raise StalePathError(full_path, None, "parent is not a container")
    return current, owner


def resolve_parent(
    document: EditableNode, path: Path, root_type: JsonType = JsonType.OBJECT
) -> tuple[list[Member], JsonType, int]:
    """Resolve the member at ``path`` through its parent container.

    Args:
        document:  The editable document.
        path:      Non-empty path of the member.
        root_type: Type of the document root (OBJECT or ARRAY), reported as
                   the container type for top-level members.

    Returns:
        ``(container, container_type, index)`` such that
        ``container[index]`` is the addressed member.  The container is the
        live list inside ``document``; mutating it mutates the document.

    Raises:
        StalePathError: If the path is empty or does not resolve.
    """
    segments = normalize_path(path)
    if not segments:
        raise StalePathError(segments, None, "the document root is not a member")
    container, owner = _descend(document, segments[:-1], segments)
    container_type = owner.type if owner is not None else root_type
    index = _index_of(container, segments[-1])
    if index is None:
        raise StalePathError(segments, segments[-1], f"no member {segments[-1]!r}")
    return container, container_type, index


def resolve_member(document: EditableNode, path: Path) -> Member:
    """Return the member at ``path``.

    Raises:
        StalePathError: If the path is empty or does not resolve.
    """
    segments = normalize_path(path)
    if not segments:
        raise StalePathError(segments, None, "the document root is not a member")
    container, _ = _descend(document, segments[:-1], segments)
    index = _index_of(container, segments[-1])
    if index is None:
        raise StalePathError(segments, segments[-1], f"no member {segments[-1]!r}")
    return container[index]


def resolve_container(
    document: EditableNode, path: Path, root_type: JsonType = JsonType.OBJECT
) -> tuple[list[Member], JsonType]:
    """Return the member list at ``path`` and its container type.

    The empty path addresses the document root, whose type is ``root_type``.

    Raises:
        StalePathError:  If the path does not resolve.
        MemberTypeError: If the path resolves to a scalar.
    """
    segments = normalize_path(path)
    if not segments:
        if not isinstance(document, list) or not root_type.is_container:
            msg = f"the document root ({root_type}) is not a container"
            raise MemberTypeError(msg)
        return document, root_type
    member = resolve_member(document, segments)
    if not member.is_container:
        msg = f"member at {list(segments)!r} is a {member.type}, not a container"
        raise MemberTypeError(msg)
    assert isinstance(member.value, list)
    return member.value, member.type


def clone_document(node: EditableNode) -> EditableNode:
    """Return a deep copy of an editable document.

    Every member and every member list is rebuilt, so in-place changes to the
    copy's lists can never reach the original.
    """
    if isinstance(node, list):
        return [
            Member(key=m.key, value=clone_document(m.value), type=m.type)
            for m in node
        ]
    return node
