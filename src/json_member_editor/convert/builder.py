"""EditableBuilder: converts a canonical JSON value into an editable document.

Objects and arrays both become ordered ``list[Member]``:
- Object members keep the mapping's own iteration order (first-encounter
  order).  This is the one point where an unordered JSON object acquires a
  deterministic order; every later edit preserves it.
- Array members are keyed by their stringified index ("0", "1", ...).
- Scalars are returned unchanged.

The whole input is validated by ``classify`` before the first member is
built, so malformed input never yields a half-built document.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from json_member_editor.errors import MalformedValueError
from json_member_editor.model.nodes import EditableNode, Member
from json_member_editor.model.types import JsonType, classify, tag_of

logger = logging.getLogger(__name__)

__all__ = ["EditableBuilder", "to_editable"]


@dataclass
class EditableBuilder:
    """Converts any valid JSON value into an editable document.

    Example::

        builder = EditableBuilder()
        doc = builder.build({"b": 1, "a": [True]})
        # [Member(key="b", value=1, type=NUMBER),
        #  Member(key="a", value=[Member(key="0", value=True, type=BOOLEAN)],
        #         type=ARRAY)]
    """

    def build(self, value: Any) -> EditableNode:
        """Convert a canonical JSON value to its editable representation.

        Args:
            value: Any valid JSON value (Mapping, list/tuple, str, int, float,
                bool, None).  Tuples become array member lists and so
                convert back as ``list``.

        Returns:
            A ``list[Member]`` for objects and arrays, the value itself for
            scalars.

        Raises:
            MalformedValueError: If any part of ``value`` is not JSON, or it is
                nested too deeply to convert.
        """
        root_type = classify(value)
        logger.debug("building editable %s document", root_type)
        try:
            return self._build(value, root_type)
        except RecursionError:
            # _build uses several frames per nesting level, classify one
            raise MalformedValueError("nesting too deep") from None

    def _build(self, value: Any, json_type: JsonType) -> EditableNode:
        if json_type is JsonType.OBJECT:
            return self._build_object(value)
        if json_type is JsonType.ARRAY:
            return self._build_array(value)
        return value

    def _build_object(self, obj: Mapping[str, Any]) -> list[Member]:
        return [self._member(key, child) for key, child in obj.items()]

    def _build_array(self, arr: Sequence[Any]) -> list[Member]:
        return [self._member(str(index), child) for index, child in enumerate(arr)]

    def _member(self, key: str, value: Any) -> Member:
        # Already validated by classify() in build(); tag_of is enough here.
        json_type = tag_of(value)
        assert json_type is not None
        return Member(key=key, value=self._build(value, json_type), type=json_type)


# Module-level builder (stateless, safe to share)
_builder = EditableBuilder()


def to_editable(value: Any) -> EditableNode:
    """Convert a canonical JSON value into an editable document.

    Shorthand for ``EditableBuilder().build(value)``.
    """
    return _builder.build(value)
