"""Operation records accepted by ``PathMutationEngine.apply``.

Each record names one structural edit and the path it targets.  Records are
immutable values; they carry no reference to any document.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from json_member_editor.model.nodes import Path
from json_member_editor.model.types import JsonType

__all__ = [
    "ChangeType",
    "InsertMember",
    "Operation",
    "RemoveMember",
    "SetKey",
    "SetValue",
]


@dataclass(frozen=True, slots=True)
class SetValue:
    """Replace the value of the scalar member at ``path``."""

    path: Path
    value: Any


@dataclass(frozen=True, slots=True)
class SetKey:
    """Rename the member at ``path``."""

    path: Path
    key: str


@dataclass(frozen=True, slots=True)
class InsertMember:
    """Append a default member to the container at ``path`` ([] is the root).

    ``key`` overrides the generated default key.
    """

    path: Path
    key: str | None = None


@dataclass(frozen=True, slots=True)
class RemoveMember:
    """Remove the member at ``path`` from its parent container."""

    path: Path


@dataclass(frozen=True, slots=True)
class ChangeType:
    """Retype the member at ``path``, discarding its old value."""

    path: Path
    json_type: JsonType


Operation = Union[SetValue, SetKey, InsertMember, RemoveMember, ChangeType]
