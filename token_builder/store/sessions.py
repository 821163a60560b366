"""Session registry: one ConfigurationStore per editing session.

Sessions never share a store. When the registry is full the least recently
used session is evicted.
"""

from __future__ import annotations

import logging
import threading
import uuid
from collections import OrderedDict

from ..core.config import get_settings
from ..core.errors import UnknownSession
from .store import ConfigurationStore

logger = logging.getLogger(__name__)

_default_registry: SessionRegistry | None = None


class SessionRegistry:
    """Maps session ids to their stores."""

    def __init__(self, max_sessions: int | None = None):
        self._max_sessions = max_sessions or get_settings().max_sessions
        self._stores: OrderedDict[str, ConfigurationStore] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._stores)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._stores

    def create(self) -> tuple[str, ConfigurationStore]:
        """Open a new session holding a default form."""
        session_id = uuid.uuid4().hex
        store = ConfigurationStore()
        with self._lock:
            self._stores[session_id] = store
            while len(self._stores) > self._max_sessions:
                evicted, _ = self._stores.popitem(last=False)
                logger.warning(f"Session limit {self._max_sessions} reached, evicted {evicted}")
        logger.info(f"Opened editing session {session_id}")
        return session_id, store

    def get(self, session_id: str) -> ConfigurationStore:
        """Store of a session. Raises UnknownSession."""
        with self._lock:
            try:
                self._stores.move_to_end(session_id)
                return self._stores[session_id]
            except KeyError:
                raise UnknownSession(session_id) from None

    def discard(self, session_id: str) -> None:
        """End a session and drop its form. Raises UnknownSession."""
        with self._lock:
            if self._stores.pop(session_id, None) is None:
                raise UnknownSession(session_id)
        logger.info(f"Closed editing session {session_id}")


def get_registry() -> SessionRegistry:
    """Get or create the process session registry."""
    global _default_registry
    if _default_registry is None:
        _default_registry = SessionRegistry()
    return _default_registry


def reset_registry() -> None:
    """Drop all sessions (useful for testing)."""
    global _default_registry
    _default_registry = None
