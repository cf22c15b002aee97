"""Member dataclass and the editable (order-preserving) document types.

An editable document is either a scalar or an ordered ``list[Member]``.  Both
JSON objects and JSON arrays are member lists: whether a list is an object or
an array is recorded on the owning member's ``type`` (or, for the document
root, by whoever holds the document).

``Member`` is frozen and validates itself on construction, so a member typed
NUMBER holding a member list (or any other mismatched pairing) cannot exist.
Use ``dataclasses.replace`` to derive a changed member; it re-runs the checks.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

from json_member_editor.errors import MemberTypeError
from json_member_editor.model.types import JsonType, scalar_matches

__all__ = ["CanonicalValue", "EditableNode", "Member", "Path", "Scalar"]

Scalar = str | int | float | bool | None

# Plain JSON as produced by json.loads: no defined object-member order.
CanonicalValue = Union[
    dict[str, "CanonicalValue"], list["CanonicalValue"], str, int, float, bool, None
]

EditableNode = Union[list["Member"], str, int, float, bool, None]

Path = Sequence[str]


@dataclass(frozen=True, slots=True)
class Member:
    """One (key, value, type) triple inside an editable member list.

    Attributes:
        key:   Object key, or the stringified index for array elements.
        value: A scalar for scalar types; an ordered ``list[Member]`` for
               OBJECT and ARRAY.
        type:  The JsonType tag.  Always consistent with ``value``.

    Raises:
        MemberTypeError: On construction when ``key`` is not a ``str`` or
            ``value`` does not have the shape ``type`` demands.
    """

    key: str
    value: EditableNode
    type: JsonType

    def __post_init__(self) -> None:
        if not isinstance(self.key, str):
            msg = f"member key must be str, got {type(self.key).__name__}"
            raise MemberTypeError(msg)
        if not isinstance(self.type, JsonType):
            msg = f"member type must be a JsonType, got {self.type!r}"
            raise MemberTypeError(msg)
        if self.type.is_container:
            if not isinstance(self.value, list) or not all(
                isinstance(child, Member) for child in self.value
            ):
                msg = f"{self.type} member {self.key!r} must hold a list of Member"
                raise MemberTypeError(msg)
        elif not scalar_matches(self.type, self.value):
            msg = (
                f"{self.type} member {self.key!r} cannot hold "
                f"{type(self.value).__name__} value {self.value!r}"
            )
            raise MemberTypeError(msg)

    @property
    def is_container(self) -> bool:
        """True when this member holds a member list (OBJECT or ARRAY)."""
        return self.type.is_container
