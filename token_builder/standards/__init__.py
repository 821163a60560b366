"""
Token standard registry.

Describes the supported token standards and the on-chain functions and
configuration options each one requires or permits.
"""

from .registry import (
    TokenStandard,
    StandardDescriptor,
    TOKEN_STANDARDS,
    describe,
    list_standards,
    is_known_standard,
    supports_tranches,
)

__all__ = [
    "TokenStandard",
    "StandardDescriptor",
    "TOKEN_STANDARDS",
    "describe",
    "list_standards",
    "is_known_standard",
    "supports_tranches",
]
