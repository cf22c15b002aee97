"""Unit tests for SessionRegistry.

Tests cover:
- Opening, fetching and closing sessions by entry id
- Re-opening an entry replaces its session
- LRU eviction (silent eviction at max_size; least recently used goes first)
- Instance isolation (separate registries do not share sessions)
- Config propagation to every opened session
- Properties (max_size and curr_size return correct values)
"""

from __future__ import annotations

import pytest

from json_member_editor.engine.config import EditorConfig, KeyConflictPolicy
from json_member_editor.errors import DuplicateKeyError
from json_member_editor.registry import SessionRegistry
from json_member_editor.session import EditSession


class TestOpenGetClose:
    def test_open_returns_session(self) -> None:
        registry = SessionRegistry()
        session = registry.open("e1", {"a": 1}, attributes={"x": 1}, users=["5"])
        assert isinstance(session, EditSession)
        assert registry.get("e1") is session
        assert "e1" in registry
        assert len(registry) == 1
        assert session.users == ("5",)

    def test_get_missing_raises_key_error(self) -> None:
        with pytest.raises(KeyError):
            SessionRegistry().get("nope")

    def test_close_returns_session(self) -> None:
        registry = SessionRegistry()
        session = registry.open("e1", 1)
        assert registry.close("e1") is session
        assert "e1" not in registry

    def test_close_missing_returns_none(self) -> None:
        assert SessionRegistry().close("nope") is None

    def test_reopen_replaces_session(self) -> None:
        registry = SessionRegistry()
        first = registry.open("e1", {"a": 1})
        first.set_value(["a"], "2")
        second = registry.open("e1", {"a": 1})
        assert second is not first
        assert not second.is_dirty
        assert len(registry) == 1

    def test_open_new(self) -> None:
        registry = SessionRegistry()
        session = registry.open_new("draft")
        assert registry.get("draft") is session
        assert session.submit().value == {"field1": ""}


class TestLRUEviction:
    """Opening past max_size silently drops the least recently used session."""

    def test_eviction_does_not_raise(self) -> None:
        registry = SessionRegistry(max_size=2)
        registry.open("a", 1)
        registry.open("b", 2)
        registry.open("c", 3)
        assert registry.curr_size == 2
        assert "a" not in registry

    def test_get_marks_recently_used(self) -> None:
        registry = SessionRegistry(max_size=2)
        registry.open("a", 1)
        registry.open("b", 2)
        # touch "a" so "b" becomes LRU
        registry.get("a")
        registry.open("c", 3)
        assert "a" in registry
        assert "b" not in registry

    def test_evicted_dirty_session_is_discarded(self) -> None:
        registry = SessionRegistry(max_size=1)
        session = registry.open("a", {"k": 1})
        session.set_value(["k"], "2")
        registry.open("b", 2)
        with pytest.raises(KeyError):
            registry.get("a")


class TestInstanceIsolation:
    def test_separate_registries(self) -> None:
        first = SessionRegistry()
        second = SessionRegistry()
        first.open("x", 1)
        assert second.curr_size == 0
        assert "x" not in second


class TestConfigPropagation:
    def test_sessions_use_registry_config(self) -> None:
        config = EditorConfig(key_conflicts=KeyConflictPolicy.REJECT)
        registry = SessionRegistry(config=config)
        session = registry.open("e", {"a": 1, "b": 2})
        with pytest.raises(DuplicateKeyError):
            session.set_key(["b"], "a")

    def test_new_entry_uses_registry_config(self) -> None:
        registry = SessionRegistry(config=EditorConfig(key_prefix="col"))
        session = registry.open_new("e")
        session.insert_member()
        assert session.submit().value == {"field1": "", "col1": ""}


class TestProperties:
    def test_default_max_size(self) -> None:
        assert SessionRegistry().max_size == 64

    def test_custom_max_size(self) -> None:
        assert SessionRegistry(max_size=3).max_size == 3

    def test_curr_size(self) -> None:
        registry = SessionRegistry()
        assert registry.curr_size == 0
        registry.open("a", None)
        registry.open("b", None)
        assert registry.curr_size == 2
