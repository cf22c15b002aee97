"""PathMutationEngine: applies one structural edit to an editable document.

Every operation is a pure function ``(document, path, ...) -> document'``:

1. deep-copy the whole document (``clone_document``),
2. resolve the path inside the copy,
3. change the copy in place,
4. return the copy.

The input document is never touched, so a caller holding the previous
document can always cancel or reset by simply keeping it.  There is no
structural sharing; the cost is O(document size) per edit, which suits small
human-edited documents.

Path contract: a path that does not resolve raises StalePathError.  Callers
must re-resolve against the document returned by the previous edit and never
cache a path across a rename.

Type changes are destructive: ``change_type`` replaces the old subtree with
the zero value of the new type.  Callers wanting to preview or undo must keep
the previous document themselves.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Any

from json_member_editor.engine.config import EditorConfig, KeyConflictPolicy
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
    resolve_parent,
)
from json_member_editor.errors import (
    DuplicateKeyError,
    InvalidNumberError,
    MemberTypeError,
)
from json_member_editor.model.nodes import EditableNode, Member, Path
from json_member_editor.model.types import JsonType, tag_of, zero_value

logger = logging.getLogger(__name__)

__all__ = ["PathMutationEngine", "coerce_scalar", "parse_number"]

_BOOLEAN_TEXT = {"true": True, "false": False}


def parse_number(text: str) -> int | float:
    """Parse numeric text typed into a Number editor.

    Integral text yields an ``int``; anything else ``float()`` accepts yields
    a ``float``.  Surrounding whitespace is ignored.

    Raises:
        InvalidNumberError: For empty text, digit-group underscores, and text
            that does not parse to a finite number ("nan", "inf", "abc").
    """
    stripped = text.strip()
    if not stripped or "_" in stripped:
        msg = f"not a number: {text!r}"
        raise InvalidNumberError(msg)
    try:
        return int(stripped, 10)
    except ValueError:
        pass
    try:
        number = float(stripped)
    except ValueError:
        msg = f"not a number: {text!r}"
        raise InvalidNumberError(msg) from None
    if not math.isfinite(number):
        msg = f"not a finite number: {text!r}"
        raise InvalidNumberError(msg)
    return number


def coerce_scalar(json_type: JsonType, value: Any) -> Any:
    """Coerce an editor-supplied ``value`` to the scalar shape of ``json_type``.

    - NUMBER:  numbers pass through; text goes through ``parse_number``.
    - BOOLEAN: bools pass through; "true"/"false" text (any case) converts.
    - STRING:  only ``str``.
    - NULL:    only None.

    Raises:
        InvalidNumberError: Numeric text that does not parse.
        MemberTypeError:    Any other value that does not fit ``json_type``.
    """
    if json_type is JsonType.NUMBER:
        if isinstance(value, str):
            return parse_number(value)
        if tag_of(value) is JsonType.NUMBER:
            return value
    elif json_type is JsonType.BOOLEAN:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in _BOOLEAN_TEXT:
            return _BOOLEAN_TEXT[value.strip().lower()]
    elif json_type is JsonType.STRING:
        if isinstance(value, str):
            return value
    elif json_type is JsonType.NULL:
        if value is None:
            return None
    else:
        msg = f"cannot assign a scalar to a {json_type} member"
        raise MemberTypeError(msg)
    msg = f"{type(value).__name__} value {value!r} does not fit a {json_type} member"
    raise MemberTypeError(msg)


class PathMutationEngine:
    """Applies path-addressed edits to editable documents without mutating them.

    The engine holds only its configuration; it keeps no document state.

    ``root_type`` arguments say whether a member-list root is an OBJECT or an
    ARRAY.  The member list itself cannot tell, and the difference decides the
    default key of members inserted at the root and which duplicate-key rules
    apply to top-level members.

    Example::

        from json_member_editor.convert import to_editable
        from json_member_editor.engine import PathMutationEngine
        from json_member_editor.model import JsonType

        engine = PathMutationEngine()
        doc = to_editable({"a": 1, "b": "x"})
        doc = engine.change_type(doc, ["a"], JsonType.STRING)
        doc = engine.insert_member(doc, [])      # appends "field2"
        doc = engine.remove_member(doc, ["b"])
    """

    def __init__(self, config: EditorConfig | None = None) -> None:
        """Initialise the engine.

        Args:
            config: Editing policy.  Defaults to ``EditorConfig()``.
        """
        self._config: EditorConfig = config if config is not None else EditorConfig()

    @property
    def config(self) -> EditorConfig:
        """The editing policy this engine applies."""
        return self._config

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def apply(
        self,
        document: EditableNode,
        operation: Operation,
        root_type: JsonType = JsonType.OBJECT,
    ) -> EditableNode:
        """Apply one operation record and return the new document.

        Raises:
            TypeError: If ``operation`` is not one of the operation records.
        """
        if isinstance(operation, SetValue):
            return self.set_value(document, operation.path, operation.value, root_type)
        if isinstance(operation, SetKey):
            return self.set_key(document, operation.path, operation.key, root_type)
        if isinstance(operation, InsertMember):
            return self.insert_member(
                document, operation.path, root_type, key=operation.key
            )
        if isinstance(operation, RemoveMember):
            return self.remove_member(document, operation.path, root_type)
        if isinstance(operation, ChangeType):
            return self.change_type(
                document, operation.path, operation.json_type, root_type
            )
        raise TypeError(f"Unsupported operation: {type(operation)!r}")

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def set_value(
        self,
        document: EditableNode,
        path: Path,
        value: Any,
        root_type: JsonType = JsonType.OBJECT,
    ) -> EditableNode:
        """Replace the value of the scalar member at ``path``.

        The member's type never changes: the new value is coerced to it
        (numeric text is parsed for Number members).  The empty path on a
        scalar document replaces the root scalar, coerced to the root's
        current type.

        Raises:
            StalePathError:     The path does not resolve.
            MemberTypeError:    The target is a container, or the value does
                                not fit the member's type.
            InvalidNumberError: Unparseable text for a Number member.
        """
        segments = normalize_path(path)
        logger.debug("set_value at %s", list(segments))
        if not segments:
            root_tag = tag_of(document)
            if isinstance(document, list) or root_tag is None:
                msg = f"the document root ({root_type}) is not a scalar"
                raise MemberTypeError(msg)
            return coerce_scalar(root_tag, value)

        updated = clone_document(document)
        container, _, index = resolve_parent(updated, segments, root_type)
        member = container[index]
        if member.is_container:
            msg = f"member at {list(segments)!r} is a {member.type}, not a scalar"
            raise MemberTypeError(msg)
        container[index] = replace(member, value=coerce_scalar(member.type, value))
        return updated

    def set_key(
        self,
        document: EditableNode,
        path: Path,
        key: str,
        root_type: JsonType = JsonType.OBJECT,
    ) -> EditableNode:
        """Rename the member at ``path``.

        Under ``KeyConflictPolicy.DEFER`` a rename may collide with a sibling;
        the collision is only rejected when the document is converted to
        canonical JSON.  Under ``REJECT`` a collision inside an object
        container raises immediately.  Array containers never enforce unique
        keys.

        Raises:
            StalePathError:    The path is empty or does not resolve.
            MemberTypeError:   ``key`` is not a string.
            DuplicateKeyError: REJECT policy and a sibling already uses ``key``.
        """
        if not isinstance(key, str):
            msg = f"member key must be str, got {type(key).__name__}"
            raise MemberTypeError(msg)
        segments = normalize_path(path)
        logger.debug("set_key at %s -> %r", list(segments), key)

        updated = clone_document(document)
        container, container_type, index = resolve_parent(updated, segments, root_type)
        if (
            self._config.key_conflicts is KeyConflictPolicy.REJECT
            and container_type is JsonType.OBJECT
            and any(
                sibling.key == key
                for position, sibling in enumerate(container)
                if position != index
            )
        ):
            raise DuplicateKeyError(segments[:-1], key)
        container[index] = replace(container[index], key=key)
        return updated

    def insert_member(
        self,
        document: EditableNode,
        path: Path,
        root_type: JsonType = JsonType.OBJECT,
        key: str | None = None,
    ) -> EditableNode:
        """Append a new empty String member to the container at ``path``.

        Unless ``key`` is given, the new key is ``{key_prefix}{n}`` in object
        containers and ``{n}`` in array containers, where n is the
        container's current length.  Under REJECT policy n is bumped until
        the key is free, and an explicit ``key`` already used by a sibling in
        an object container is rejected.

        Raises:
            StalePathError:    The path does not resolve.
            MemberTypeError:   The path addresses a scalar, or ``key`` is not
                               a string.
            DuplicateKeyError: REJECT policy and ``key`` is already taken.
        """
        if key is not None and not isinstance(key, str):
            msg = f"member key must be str, got {type(key).__name__}"
            raise MemberTypeError(msg)
        segments = normalize_path(path)
        updated = clone_document(document)
        container, container_type = resolve_container(updated, segments, root_type)
        if key is None:
            key = self.default_key(container, container_type)
        elif (
            self._config.key_conflicts is KeyConflictPolicy.REJECT
            and container_type is JsonType.OBJECT
            and any(member.key == key for member in container)
        ):
            raise DuplicateKeyError(segments, key)
        logger.debug("insert_member at %s as %r", list(segments), key)
        container.append(Member(key=key, value="", type=JsonType.STRING))
        return updated

    def remove_member(
        self,
        document: EditableNode,
        path: Path,
        root_type: JsonType = JsonType.OBJECT,
    ) -> EditableNode:
        """Remove the member at ``path``; remaining siblings keep their order.

        With duplicate keys, the first occurrence is removed.  Array siblings
        are not re-keyed (see ``relabel_indices``).

        Raises:
            StalePathError: The path is empty or does not resolve.
        """
        segments = normalize_path(path)
        logger.debug("remove_member at %s", list(segments))
        updated = clone_document(document)
        container, _, index = resolve_parent(updated, segments, root_type)
        del container[index]
        return updated

    def change_type(
        self,
        document: EditableNode,
        path: Path,
        json_type: JsonType | str,
        root_type: JsonType = JsonType.OBJECT,
    ) -> EditableNode:
        """Retype the member at ``path``.  DESTRUCTIVE.

        The member's value is replaced by the zero value of ``json_type``
        (empty member list for OBJECT/ARRAY, 0, "", False, None).  Nothing of
        the old value is carried over.  Retyping to the member's current type
        is a no-op and returns an equal copy.

        Raises:
            StalePathError: The path is empty or does not resolve.
            ValueError:     ``json_type`` is not a JsonType value.
        """
        new_type = JsonType(json_type)
        segments = normalize_path(path)
        updated = clone_document(document)
        container, _, index = resolve_parent(updated, segments, root_type)
        member = container[index]
        if member.type is new_type:
            return updated
        logger.debug(
            "change_type at %s: %s -> %s (old value discarded)",
            list(segments),
            member.type,
            new_type,
        )
        container[index] = Member(
            key=member.key, value=zero_value(new_type), type=new_type
        )
        return updated

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def default_key(
        self,
        container: list[Member],
        container_type: JsonType,
        *,
        unique: bool = False,
    ) -> str:
        """Return the key ``insert_member`` would give a new member of ``container``.

        With ``unique=True`` (always under REJECT policy) n is bumped past
        every key already in use, so the key addresses the new member alone.
        """
        prefix = self._config.key_prefix if container_type is JsonType.OBJECT else ""
        n = len(container)
        if unique or self._config.key_conflicts is KeyConflictPolicy.REJECT:
            taken = {member.key for member in container}
            while f"{prefix}{n}" in taken:
                n += 1
        return f"{prefix}{n}"
