"""Tests for the session registry."""

import pytest

from token_builder.core.errors import UnknownSession
from token_builder.store import SessionRegistry, StoreState


@pytest.fixture
def registry() -> SessionRegistry:
    return SessionRegistry(max_sessions=3)


class TestSessionRegistry:
    """Tests for per-session stores."""

    def test_create_and_get(self, registry):
        """Test that a created session resolves to its store."""
        session_id, store = registry.create()
        assert registry.get(session_id) is store
        assert store.state == StoreState.DEFAULT
        assert session_id in registry

    def test_sessions_are_isolated(self, registry):
        """Test that sessions do not share forms."""
        first_id, first = registry.create()
        _, second = registry.create()
        first.merge_top({"name": "First"})
        assert second.get().name == ""
        assert registry.get(first_id).get().name == "First"

    def test_unknown_session(self, registry):
        """Test lookup of a missing session."""
        with pytest.raises(UnknownSession):
            registry.get("missing")

    def test_discard(self, registry):
        """Test closing a session."""
        session_id, _ = registry.create()
        registry.discard(session_id)
        assert session_id not in registry
        with pytest.raises(UnknownSession):
            registry.discard(session_id)

    def test_evicts_least_recently_used(self, registry):
        """Test eviction when the registry is full."""
        first_id, _ = registry.create()
        second_id, _ = registry.create()
        third_id, _ = registry.create()
        registry.get(first_id)
        registry.create()
        assert len(registry) == 3
        assert first_id in registry
        assert second_id not in registry
        assert third_id in registry
