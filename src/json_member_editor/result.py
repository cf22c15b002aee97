"""EntryUpdate dataclass: the payload produced when an edit session is submitted.

This module provides the result type returned by ``EditSession.submit()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from json_member_editor.model.nodes import CanonicalValue

__all__ = ["EntryUpdate"]


@dataclass(frozen=True, slots=True)
class EntryUpdate:
    """Canonical payload for one datastore entry update.

    Attributes:
        value:      The entry's value as canonical JSON.  Object key order is
                    not meaningful to the receiver.
        attributes: The entry's attributes (always a JSON object).
        users:      User ids associated with the entry, as decimal strings.
    """

    value: CanonicalValue
    attributes: dict[str, Any]
    users: list[str]

    def as_dict(self) -> dict[str, Any]:
        """Return the payload as a plain dict ready for ``json.dumps``."""
        return {
            "value": self.value,
            "attributes": self.attributes,
            "users": list(self.users),
        }
