"""Edit sessions: the mutable state behind one open entry form.

Three layers:

- ``SessionDocument`` owns exactly one editable document and its root type.
  Every edit replaces the document wholesale with the engine's output; the
  snapshot taken when the session opened is never mutated, so ``reset`` is
  just a fresh copy of it.
- ``MemberEditor`` is the handle a single field editor works through.  It
  stores a path, never a resolved member, and re-resolves against the
  current document on every call.
- ``EditSession`` groups what one entry form edits: the value document, the
  attributes document (always an object) and the associated user ids, and
  turns them into an ``EntryUpdate`` on submit.

Sessions are single-writer: each edit runs to completion and swaps the
document reference before the next one starts.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from json_member_editor.convert.builder import to_editable
from json_member_editor.convert.canonical import to_canonical
from json_member_editor.engine.config import EditorConfig
from json_member_editor.engine.mutator import PathMutationEngine
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
    normalize_path,
    resolve_container,
    resolve_member,
)
from json_member_editor.errors import InvalidUserIdError, MalformedValueError
from json_member_editor.model.nodes import CanonicalValue, EditableNode, Member, Path
from json_member_editor.model.types import JsonType, classify
from json_member_editor.result import EntryUpdate

logger = logging.getLogger(__name__)

__all__ = ["EditSession", "MemberEditor", "SessionDocument"]

# Seed values used when the whole entry value is retyped from the form header.
_ROOT_SEEDS: dict[JsonType, CanonicalValue] = {
    JsonType.OBJECT: {"field1": ""},
    JsonType.ARRAY: [""],
    JsonType.NUMBER: 0,
    JsonType.STRING: "",
    JsonType.BOOLEAN: False,
    JsonType.NULL: None,
}

DEFAULT_USER_ID = "0"


class SessionDocument:
    """One editable document held for the lifetime of an edit form.

    Created from a freshly fetched canonical value, replaced wholesale on
    every edit, converted back to canonical JSON only on demand.
    """

    def __init__(
        self, value: Any, engine: PathMutationEngine | None = None
    ) -> None:
        """Convert ``value`` and take the reset snapshot.

        Args:
            value:  Canonical JSON value as fetched from the datastore.
            engine: Mutation engine to apply edits with.  Defaults to a
                ``PathMutationEngine()`` with default config.

        Raises:
            MalformedValueError: If ``value`` is not JSON.  Nothing is built.
        """
        self._engine = engine if engine is not None else PathMutationEngine()
        self._original: EditableNode = to_editable(value)
        self._original_type: JsonType = classify(value)
        self._document: EditableNode = clone_document(self._original)
        self._root_type: JsonType = self._original_type

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def document(self) -> EditableNode:
        """The current editable document.  Treat it as read-only."""
        return self._document

    @property
    def root_type(self) -> JsonType:
        """The JsonType of the current document root."""
        return self._root_type

    @property
    def engine(self) -> PathMutationEngine:
        """The engine every edit of this document goes through."""
        return self._engine

    @property
    def is_dirty(self) -> bool:
        """True when the document differs from the snapshot, order included."""
        return (
            self._root_type is not self._original_type
            or self._document != self._original
        )

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def apply(self, operation: Operation) -> EditableNode:
        """Apply ``operation`` and make the result the current document.

        On error the current document is left exactly as it was.
        """
        self._document = self._engine.apply(self._document, operation, self._root_type)
        return self._document

    def replace(self, document: EditableNode, root_type: JsonType) -> None:
        """Swap in a whole new document, e.g. one computed by the caller."""
        self._document = document
        self._root_type = JsonType(root_type)

    def retype_root(self, json_type: JsonType | str) -> None:
        """Retype the document root, seeding it with a starter value.

        Object roots start as ``{"field1": ""}`` and array roots as ``[""]``
        so the form always has a field to edit; scalars start at their zero
        value.  A no-op when the root already has ``json_type``.  DESTRUCTIVE:
        the previous document is discarded.
        """
        new_type = JsonType(json_type)
        if new_type is self._root_type:
            return
        logger.debug("retype root %s -> %s", self._root_type, new_type)
        self.replace(to_editable(_ROOT_SEEDS[new_type]), new_type)

    def reset(self) -> None:
        """Discard all edits and return to the snapshot taken at open."""
        self.replace(clone_document(self._original), self._original_type)

    def editor(self, path: Path = ()) -> MemberEditor:
        """Return an editor handle for the member at ``path``."""
        return MemberEditor(self, normalize_path(path))

    def editors(self) -> list[MemberEditor]:
        """Return editor handles for the top-level members (empty for scalars)."""
        return self.editor().children()

    def to_canonical(self) -> CanonicalValue:
        """Convert the current document to canonical JSON.

        Raises:
            DuplicateKeyError: If an object container holds duplicate keys.
        """
        return to_canonical(self._document, self._root_type)


@dataclass(frozen=True, slots=True)
class MemberEditor:
    """Handle through which one field editor reads and edits its member.

    Only the path is stored.  Every read and every edit resolves the path
    against the session's *current* document, so an editor never acts on a
    stale sub-reference.  ``set_key`` returns a new handle because renaming
    a member invalidates every path through its old key.

    The empty path addresses the document root: it supports ``value`` and
    ``set_value`` for scalar roots, and ``insert_member``/``children`` for
    container roots.
    """

    slot: SessionDocument
    path: tuple[str, ...]

    @property
    def member(self) -> Member:
        """The member at this handle's path (StalePathError if it is gone)."""
        return resolve_member(self.slot.document, self.path)

    @property
    def value(self) -> EditableNode:
        """The current value at this handle's path."""
        if not self.path:
            return self.slot.document
        return self.member.value

    @property
    def json_type(self) -> JsonType:
        """The JsonType at this handle's path."""
        if not self.path:
            return self.slot.root_type
        return self.member.type

    def set_value(self, value: Any) -> None:
        """Replace this scalar's value (numeric text is parsed for numbers)."""
        self.slot.apply(SetValue(self.path, value))

    def set_key(self, key: str) -> MemberEditor:
        """Rename this member and return the handle for its new path."""
        self.slot.apply(SetKey(self.path, key))
        return MemberEditor(self.slot, (*self.path[:-1], key))

    def change_type(self, json_type: JsonType | str) -> None:
        """Retype this member.  DESTRUCTIVE: the old value is discarded."""
        if not self.path:
            self.slot.retype_root(json_type)
            return
        self.slot.apply(ChangeType(self.path, JsonType(json_type)))

    def insert_member(self) -> MemberEditor:
        """Append a default member to this container; return its handle.

        The new member gets the first default key no sibling uses yet, so
        the returned handle addresses it and not an older namesake.
        """
        container, container_type = resolve_container(
            self.slot.document, self.path, self.slot.root_type
        )
        key = self.slot.engine.default_key(container, container_type, unique=True)
        self.slot.apply(InsertMember(self.path, key))
        return MemberEditor(self.slot, (*self.path, key))

    def remove(self) -> None:
        """Remove this member from its parent container."""
        self.slot.apply(RemoveMember(self.path))

    def children(self) -> list[MemberEditor]:
        """Handles for the members of this container, in order."""
        node = self.value
        if not isinstance(node, list):
            return []
        return [MemberEditor(self.slot, (*self.path, m.key)) for m in node]


class EditSession:
    """State of one open entry form: value, attributes and user ids.

    Example::

        session = EditSession({"a": 1, "b": "x"}, attributes={}, users=["42"])
        session.change_type(["a"], JsonType.STRING)
        session.insert_member()
        session.remove_member(["b"])
        update = session.submit()
        # update.value == {"a": "", "field2": ""}
    """

    def __init__(
        self,
        value: Any,
        attributes: Any = None,
        users: Sequence[str] | None = None,
        config: EditorConfig | None = None,
    ) -> None:
        """Open a session on a fetched entry.

        Args:
            value:      The entry's value (any JSON).
            attributes: The entry's attributes.  None (an entry without
                        attributes) is treated as an empty object.
            users:      User ids associated with the entry.
            config:     Editing policy shared by both documents.

        Raises:
            MalformedValueError: If ``value`` is not JSON or ``attributes`` is
                not a JSON object.
        """
        engine = PathMutationEngine(config)
        if attributes is None:
            attributes = {}
        if classify(attributes) is not JsonType.OBJECT:
            raise MalformedValueError("attributes must be a JSON object")
        self._value = SessionDocument(value, engine)
        self._attributes = SessionDocument(attributes, engine)
        self._original_users: tuple[str, ...] = tuple(users or ())
        self._users: list[str] = list(self._original_users)
        logger.debug(
            "opened edit session (%s value, %d users)",
            self._value.root_type,
            len(self._users),
        )

    @classmethod
    def new_entry(cls, config: EditorConfig | None = None) -> EditSession:
        """Open a session for an entry that does not exist yet."""
        return cls({"field1": ""}, attributes={}, users=(), config=config)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def value(self) -> SessionDocument:
        """The entry value document."""
        return self._value

    @property
    def attributes(self) -> SessionDocument:
        """The entry attributes document (object root)."""
        return self._attributes

    @property
    def document(self) -> EditableNode:
        """The current editable value document."""
        return self._value.document

    @property
    def root_type(self) -> JsonType:
        """The JsonType of the entry value."""
        return self._value.root_type

    @property
    def users(self) -> tuple[str, ...]:
        """The current user ids."""
        return tuple(self._users)

    @property
    def is_dirty(self) -> bool:
        """True when value, attributes or users differ from the opened entry."""
        return (
            self._value.is_dirty
            or self._attributes.is_dirty
            or tuple(self._users) != self._original_users
        )

    # ------------------------------------------------------------------
    # Value editing
    # ------------------------------------------------------------------

    def apply(self, operation: Operation) -> EditableNode:
        """Apply ``operation`` to the value document."""
        return self._value.apply(operation)

    def set_value(self, path: Path, value: Any) -> EditableNode:
        return self.apply(SetValue(path, value))

    def set_key(self, path: Path, key: str) -> EditableNode:
        return self.apply(SetKey(path, key))

    def insert_member(self, path: Path = (), key: str | None = None) -> EditableNode:
        return self.apply(InsertMember(path, key))

    def remove_member(self, path: Path) -> EditableNode:
        return self.apply(RemoveMember(path))

    def change_type(self, path: Path, json_type: JsonType | str) -> EditableNode:
        """Retype the member at ``path``.  DESTRUCTIVE."""
        return self.apply(ChangeType(path, JsonType(json_type)))

    def change_root_type(self, json_type: JsonType | str) -> None:
        """Retype the whole entry value.  DESTRUCTIVE."""
        self._value.retype_root(json_type)

    def apply_attributes(self, operation: Operation) -> EditableNode:
        """Apply ``operation`` to the attributes document."""
        return self._attributes.apply(operation)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def add_user(self, user_id: str = DEFAULT_USER_ID) -> None:
        self._users.append(user_id)

    def set_user(self, index: int, user_id: str) -> None:
        self._users[index] = user_id

    def remove_user(self, index: int) -> None:
        del self._users[index]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Discard every edit: value, attributes and users."""
        self._value.reset()
        self._attributes.reset()
        self._users = list(self._original_users)
        logger.debug("edit session reset")

    def submit(self) -> EntryUpdate:
        """Convert the session into the canonical update payload.

        The session itself is left unchanged; submitting twice yields equal
        payloads.

        Raises:
            DuplicateKeyError:  An object container holds duplicate keys.
            InvalidUserIdError: A user id is not a decimal digit string.
        """
        for user_id in self._users:
            if not isinstance(user_id, str) or not user_id.isdecimal():
                msg = f"user id must be a decimal string, got {user_id!r}"
                raise InvalidUserIdError(msg)
        value = self._value.to_canonical()
        attributes = to_canonical(self._attributes.document, JsonType.OBJECT)
        assert isinstance(attributes, dict)
        logger.debug("submitting %s value", self._value.root_type)
        return EntryUpdate(value=value, attributes=attributes, users=list(self._users))
