"""JsonType StrEnum and classification of Python values into JSON type tags.

``classify`` is the single source of truth for what a JSON value is.  It is
total over the canonical JSON domain and rejects everything else with
``MalformedValueError`` instead of coercing it.

Dispatch order matters: ``bool`` MUST be checked before ``int`` because bool
is a subclass of int in Python (``isinstance(True, int)`` is True).
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from json_member_editor.errors import MalformedValueError

__all__ = [
    "JsonType",
    "classify",
    "is_json_map",
    "is_json_value",
    "scalar_matches",
    "tag_of",
    "zero_value",
]


class JsonType(StrEnum):
    """The closed set of JSON type tags.

    Values are the lowercase names used on the wire by editor front-ends:
    - OBJECT  -> "object"  : JSON object {}
    - ARRAY   -> "array"   : JSON array []
    - NUMBER  -> "number"  : int or finite float (never bool)
    - STRING  -> "string"  : str
    - BOOLEAN -> "boolean" : bool
    - NULL    -> "null"    : None
    """

    OBJECT = "object"
    ARRAY = "array"
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    NULL = "null"

    @property
    def is_container(self) -> bool:
        """True for OBJECT and ARRAY, whose editable value is a member list."""
        return self in (JsonType.OBJECT, JsonType.ARRAY)


def tag_of(value: Any) -> JsonType | None:
    """Return the tag of ``value`` without looking inside containers.

    Returns None for anything that is not a JSON value at the outer level
    (unsupported objects, non-finite floats).  Tuples tag as ARRAY; they are
    accepted on input only and always convert back as ``list``.
    """
    # CRITICAL: bool before int
    if isinstance(value, bool):
        return JsonType.BOOLEAN
    if value is None:
        return JsonType.NULL
    if isinstance(value, str):
        return JsonType.STRING
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return JsonType.NUMBER
    if isinstance(value, Mapping):
        return JsonType.OBJECT
    if isinstance(value, (list, tuple)):
        return JsonType.ARRAY
    return None


def classify(value: Any, location: str = "") -> JsonType:
    """Classify a canonical JSON value, validating it in full.

    Containers are walked recursively so that a mapping only classifies as
    OBJECT when every key is a ``str`` and every nested value is valid JSON.

    Args:
        value:    Any Python value.
        location: JSON-Pointer-like prefix used in error messages.

    Returns:
        The JsonType of the outer value.

    Raises:
        MalformedValueError: If the value (or anything nested in it) is not
            JSON: cyclic containers, non-``str`` keys, non-finite floats,
            unsupported objects, or nesting deeper than the interpreter's
            recursion limit allows.
    """
    try:
        return _classify(value, location, set())
    except RecursionError:
        raise MalformedValueError("nesting too deep", location) from None


def _classify(value: Any, location: str, active: set[int]) -> JsonType:
    tag = tag_of(value)
    if tag is None:
        if isinstance(value, float):
            raise MalformedValueError(f"non-finite number {value!r}", location)
        raise MalformedValueError(
            f"unsupported value of type {type(value).__name__}", location
        )
    if not tag.is_container:
        return tag

    # Only the containers on the current descent are tracked, so a shared
    # (non-cyclic) sub-structure referenced twice is still accepted.
    marker = id(value)
    if marker in active:
        raise MalformedValueError("cyclic reference", location)
    active.add(marker)
    try:
        if tag is JsonType.OBJECT:
            for key, child in value.items():
                if not isinstance(key, str):
                    raise MalformedValueError(
                        f"non-string object key {key!r}", location
                    )
                _classify(child, f"{location}/{key}", active)
        else:
            for index, child in enumerate(value):
                _classify(child, f"{location}/{index}", active)
    finally:
        active.discard(marker)
    return tag


def is_json_value(value: Any) -> bool:
    """Return True when ``value`` is a valid JSON value at every depth."""
    try:
        classify(value)
    except MalformedValueError:
        return False
    return True


def is_json_map(value: Any) -> bool:
    """Return True when ``value`` is a valid JSON object (not an array or scalar)."""
    return is_json_value(value) and tag_of(value) is JsonType.OBJECT


def zero_value(json_type: JsonType) -> Any:
    """Return the canonical zero value of a type in the editable representation.

    OBJECT and ARRAY get a fresh empty member list on every call.
    """
    if json_type.is_container:
        return []
    if json_type is JsonType.NUMBER:
        return 0
    if json_type is JsonType.STRING:
        return ""
    if json_type is JsonType.BOOLEAN:
        return False
    return None


def scalar_matches(json_type: JsonType, value: Any) -> bool:
    """Return True when a scalar ``value`` has the runtime shape of ``json_type``.

    Always False for container tags; member lists are checked by the caller.
    """
    if json_type.is_container:
        return False
    return tag_of(value) is json_type
