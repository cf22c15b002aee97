"""JSON member editor - order-preserving, path-addressed JSON document editing."""

from __future__ import annotations

from json_member_editor.api import (
    apply,
    change_type,
    insert_member,
    remove_member,
    set_key,
    set_value,
)
from json_member_editor.codec import dumps_canonical, loads_editable
from json_member_editor.convert import EditableBuilder, to_canonical, to_editable
from json_member_editor.engine import (
    ChangeType,
    EditorConfig,
    InsertMember,
    KeyConflictPolicy,
    PathMutationEngine,
    RemoveMember,
    SetKey,
    SetValue,
    count_members,
    find_member,
    iter_members,
    relabel_indices,
)
from json_member_editor.errors import (
    DuplicateKeyError,
    EditorError,
    InvalidNumberError,
    InvalidUserIdError,
    MalformedValueError,
    MemberTypeError,
    StalePathError,
)
from json_member_editor.model import (
    JsonType,
    Member,
    classify,
    is_json_map,
    is_json_value,
)
from json_member_editor.registry import SessionRegistry
from json_member_editor.result import EntryUpdate
from json_member_editor.session import EditSession, MemberEditor, SessionDocument

__version__: str = "0.1.0"
__all__: list[str] = [
    "ChangeType",
    "DuplicateKeyError",
    "EditSession",
    "EditableBuilder",
    "EditorConfig",
    "EditorError",
    "EntryUpdate",
    "InsertMember",
    "InvalidNumberError",
    "InvalidUserIdError",
    "JsonType",
    "KeyConflictPolicy",
    "MalformedValueError",
    "Member",
    "MemberEditor",
    "MemberTypeError",
    "PathMutationEngine",
    "RemoveMember",
    "SessionDocument",
    "SessionRegistry",
    "SetKey",
    "SetValue",
    "StalePathError",
    "apply",
    "change_type",
    "classify",
    "count_members",
    "dumps_canonical",
    "find_member",
    "insert_member",
    "is_json_map",
    "is_json_value",
    "iter_members",
    "loads_editable",
    "relabel_indices",
    "remove_member",
    "set_key",
    "set_value",
    "to_canonical",
    "to_editable",
]
