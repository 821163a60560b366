"""Export snapshots for policies and tokens."""

from .snapshot import PolicyStatus, PolicySnapshot, export_policy, export_token

__all__ = [
    "PolicyStatus",
    "PolicySnapshot",
    "export_policy",
    "export_token",
]
