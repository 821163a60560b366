"""
Read-only export snapshots.

Policies export a fixed projection of their fields; tokens export the full
form. Both serialize to indented JSON with stable keys. Writing the document
somewhere is up to the caller.
"""

from __future__ import annotations

import json
from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..forms.schemas import TokenForm

EXPORT_INDENT = 2


class PolicyStatus(str, Enum):
    """Lifecycle status of a compliance policy."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    DRAFT = "draft"
    PENDING = "pending"


class PolicySnapshot(BaseModel):
    """Exported projection of a compliance policy."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    status: PolicyStatus = PolicyStatus.DRAFT
    description: str = ""
    type: str = Field(default="custom", description="Policy type, e.g. transfer_limit")
    jurisdiction: str = "global"
    effective_date: date | None = Field(default=None, alias="effectiveDate")
    expiration_date: date | None = Field(default=None, alias="expirationDate")
    tags: tuple[str, ...] = ()


def _dumps(document: dict[str, Any]) -> str:
    return json.dumps(document, indent=EXPORT_INDENT, sort_keys=True)


def export_policy(policy: PolicySnapshot) -> str:
    """JSON document of a policy snapshot. Missing dates export as empty strings."""
    document = policy.model_dump(mode="json", by_alias=True)
    for key in ("effectiveDate", "expirationDate"):
        if document[key] is None:
            document[key] = ""
    return _dumps(document)


def export_token(form: TokenForm) -> str:
    """JSON document of the full token form."""
    return _dumps(form.to_document())
