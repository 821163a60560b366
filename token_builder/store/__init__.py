"""Configuration store and per-session registry."""

from .store import ConfigurationStore, StoreState
from .sessions import SessionRegistry, get_registry, reset_registry

__all__ = [
    "ConfigurationStore",
    "StoreState",
    "SessionRegistry",
    "get_registry",
    "reset_registry",
]
