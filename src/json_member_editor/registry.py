"""SessionRegistry: LRU-bounded store of open edit sessions keyed by entry id.

Each open entry form owns one ``EditSession``.  The registry keeps at most
``max_size`` of them; opening one more silently evicts the least-recently
used session, discarding its unsaved edits without persistence (the same
outcome as the form being closed).

Each ``SessionRegistry`` instance maintains its own ``LRUCache``; there is
no class-level shared state, so two registries never see each other's
sessions.

Example::

    registry = SessionRegistry(max_size=8)
    session = registry.open("player_42", {"coins": 10}, users=["42"])
    session.set_value(["coins"], "11")
    assert registry.get("player_42") is session
    registry.close("player_42")
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from cachetools import LRUCache

from json_member_editor.engine.config import EditorConfig
from json_member_editor.session import EditSession

logger = logging.getLogger(__name__)

__all__ = ["SessionRegistry"]


class _SessionCache(LRUCache):  # type: ignore[type-arg]
    """LRUCache that logs evictions of sessions with unsaved edits."""

    def popitem(self) -> tuple[str, EditSession]:
        entry_id, session = super().popitem()
        logger.debug(
            "evicted edit session %r (dirty=%s)", entry_id, session.is_dirty
        )
        return entry_id, session


class SessionRegistry:
    """LRU-bounded mapping of entry id -> open ``EditSession``.

    Args:
        max_size: Maximum number of sessions held open.  Defaults to 64.
            This is an infrastructure parameter, not part of
            ``EditorConfig`` (which governs editing behaviour only).
        config:   Editing policy given to every session this registry opens.
    """

    def __init__(self, max_size: int = 64, config: EditorConfig | None = None) -> None:
        self._config = config
        self._sessions: LRUCache[str, EditSession] = _SessionCache(maxsize=max_size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of sessions this registry can hold."""
        return int(self._sessions.maxsize)

    @property
    def curr_size(self) -> int:
        """The number of sessions currently open."""
        return int(self._sessions.currsize)

    # ------------------------------------------------------------------
    # Mapping surface
    # ------------------------------------------------------------------

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def open(
        self,
        entry_id: str,
        value: Any,
        attributes: Any = None,
        users: Sequence[str] | None = None,
    ) -> EditSession:
        """Open a fresh session for ``entry_id`` from freshly fetched data.

        An already-open session for the same entry is replaced: a form that
        re-mounts starts again from the fetched value.
        """
        session = EditSession(
            value, attributes=attributes, users=users, config=self._config
        )
        self._sessions[entry_id] = session
        logger.debug("opened session %r", entry_id)
        return session

    def open_new(self, entry_id: str) -> EditSession:
        """Open a session for an entry that is about to be created."""
        session = EditSession.new_entry(config=self._config)
        self._sessions[entry_id] = session
        logger.debug("opened new-entry session %r", entry_id)
        return session

    def get(self, entry_id: str) -> EditSession:
        """Return the open session for ``entry_id`` and mark it recently used.

        Raises:
            KeyError: If no session is open for ``entry_id`` (never opened,
                closed, or evicted).
        """
        return self._sessions[entry_id]

    def close(self, entry_id: str) -> EditSession | None:
        """Close and return the session for ``entry_id``; None if not open."""
        session = self._sessions.pop(entry_id, None)
        if session is not None:
            logger.debug("closed session %r (dirty=%s)", entry_id, session.is_dirty)
        return session
