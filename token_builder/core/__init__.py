"""Core infrastructure: configuration and error taxonomy."""

from .config import Settings, get_settings, reset_settings
from .errors import (
    TokenConfigError,
    UnknownStandard,
    UnknownBlock,
    InvalidArgument,
    UnknownTemplate,
    UnknownSession,
)

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "TokenConfigError",
    "UnknownStandard",
    "UnknownBlock",
    "InvalidArgument",
    "UnknownTemplate",
    "UnknownSession",
]
