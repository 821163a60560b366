"""HTTP surface for the per-standard editors."""

from .router import router, get_session_registry

__all__ = [
    "router",
    "get_session_registry",
]
