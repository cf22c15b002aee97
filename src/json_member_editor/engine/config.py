"""EditorConfig and KeyConflictPolicy for the path mutation engine.

EditorConfig is a frozen (immutable) dataclass holding the editing policy.
KeyConflictPolicy selects what happens when two members of one object
container end up with the same key.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto


class KeyConflictPolicy(StrEnum):
    """How duplicate keys inside an object container are handled.

    - DEFER:  Duplicates may exist while editing.  Path resolution matches
              the first occurrence; ``to_canonical`` (and therefore submit)
              rejects the document with DuplicateKeyError.
    - REJECT: ``set_key`` raises DuplicateKeyError immediately and
              ``insert_member`` skips to the next free default key.
    """

    DEFER = auto()
    REJECT = auto()


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Immutable configuration for the path mutation engine.

    Attributes:
        key_prefix:    Prefix of the default key given to members inserted
                       into object containers (``field{n}``).  Must be a
                       non-empty string.
        key_conflicts: Duplicate-key policy.  Default DEFER.
    """

    key_prefix: str = "field"
    key_conflicts: KeyConflictPolicy = KeyConflictPolicy.DEFER

    def __post_init__(self) -> None:
        if not isinstance(self.key_prefix, str) or not self.key_prefix:
            msg = f"key_prefix must be a non-empty string, got {self.key_prefix!r}"
            raise ValueError(msg)
        if not isinstance(self.key_conflicts, KeyConflictPolicy):
            msg = (
                f"key_conflicts must be a KeyConflictPolicy, got {self.key_conflicts!r}"
            )
            raise ValueError(msg)
