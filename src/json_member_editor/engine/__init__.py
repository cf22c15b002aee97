"""engine subpackage: public API for path-addressed document mutation.

Import from this module (not from sub-modules directly) to stay on the
stable public interface.

Example::

    from json_member_editor.engine import InsertMember, PathMutationEngine

    engine = PathMutationEngine()
    new_doc = engine.apply(doc, InsertMember(path=[]))
"""

from __future__ import annotations

from json_member_editor.engine.config import EditorConfig, KeyConflictPolicy
from json_member_editor.engine.mutator import (
    PathMutationEngine,
    coerce_scalar,
    parse_number,
)
from json_member_editor.engine.operations import (
    ChangeType,
    InsertMember,
    Operation,
    RemoveMember,
    SetKey,
    SetValue,
)
from json_member_editor.engine.resolve import (
    clone_document,
    find_member,
    resolve_container,
    resolve_member,
    resolve_parent,
)
from json_member_editor.engine.traverse import (
    count_members,
    iter_members,
    relabel_indices,
)

__all__ = [
    "ChangeType",
    "EditorConfig",
    "InsertMember",
    "KeyConflictPolicy",
    "Operation",
    "PathMutationEngine",
    "RemoveMember",
    "SetKey",
    "SetValue",
    "clone_document",
    "coerce_scalar",
    "count_members",
    "find_member",
    "iter_members",
    "parse_number",
    "relabel_indices",
    "resolve_container",
    "resolve_member",
    "resolve_parent",
]
