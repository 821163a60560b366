"""Error taxonomy for the token configuration model.

Every error is a synchronous rejection: the operation that raised it has
not changed the form, and nothing is retried.
"""

from __future__ import annotations


class TokenConfigError(Exception):
    """Base class for rejected token configuration operations."""


class UnknownStandard(TokenConfigError):
    """Standard code is not present in the standard registry."""

    def __init__(self, standard: str):
        self.standard = standard
        super().__init__(f"Unknown token standard: {standard!r}")


class UnknownBlock(TokenConfigError):
    """Building block id is not in the catalog for its category."""

    def __init__(self, category: str, block_id: str):
        self.category = category
        self.block_id = block_id
        super().__init__(f"Unknown building block {block_id!r} in category {category!r}")


class InvalidArgument(TokenConfigError, ValueError):
    """Malformed argument: unknown category, negative numeric field, bad key."""


class UnknownTemplate(TokenConfigError):
    """Product template name is not in the template catalog."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown product template: {name!r}")


class UnknownSession(TokenConfigError):
    """Editing session id is not registered."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Unknown editing session: {session_id!r}")
