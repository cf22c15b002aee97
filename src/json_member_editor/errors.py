"""Exception hierarchy for json-member-editor.

Every error raised by the package derives from ``EditorError`` and from the
builtin exception that best describes it, so callers can catch either the
package-specific class or the idiomatic builtin (``ValueError``,
``LookupError``, ``TypeError``).

None of these errors leave partial state behind: conversion validates before
building, and the mutation engine only ever touches its private copy of the
document.
"""

from __future__ import annotations

__all__ = [
    "DuplicateKeyError",
    "EditorError",
    "InvalidNumberError",
    "InvalidUserIdError",
    "MalformedValueError",
    "MemberTypeError",
    "StalePathError",
]


class EditorError(Exception):
    """Base class for all json-member-editor errors."""


class MalformedValueError(EditorError, ValueError):
    """A value is not classifiable as JSON.

    Raised for cyclic structures, non-``str`` object keys, non-finite floats
    and unsupported Python objects.

    Attributes:
        location: JSON-Pointer-like location of the defect ("" is the root).
    """

    def __init__(self, message: str, location: str = "") -> None:
        super().__init__(f"{message} at {location or '<root>'}")
        self.location = location


class StalePathError(EditorError, LookupError):
    """A path does not resolve against the current document.

    This is a contract violation by the caller (a path captured before an
    edit, or a path that never existed), not a recoverable "not found".

    Attributes:
        path:    The full path that failed to resolve.
        segment: The first segment with no matching member, or None when the
                 path shape itself is wrong (e.g. descending into a scalar).
    """

    def __init__(
        self, path: tuple[str, ...], segment: str | None, reason: str
    ) -> None:
        super().__init__(f"stale path {list(path)!r}: {reason}")
        self.path = path
        self.segment = segment


class MemberTypeError(EditorError, TypeError):
    """A value does not fit the type tag it is paired with."""


class DuplicateKeyError(EditorError, ValueError):
    """Two members of the same object container share a key.

    Attributes:
        path: Path of the object container holding the duplicates.
        key:  The duplicated key.
    """

    def __init__(self, path: tuple[str, ...], key: str) -> None:
        super().__init__(f"duplicate key {key!r} in object at {list(path)!r}")
        self.path = path
        self.key = key


class InvalidNumberError(EditorError, ValueError):
    """Text supplied for a Number member does not parse as a finite number."""


class InvalidUserIdError(EditorError, ValueError):
    """A user id attached to an entry is not a decimal digit string."""
