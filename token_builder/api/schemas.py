"""Request and response models for the editor API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SessionResponse(BaseModel):
    """A session id with the current form."""

    session_id: str
    state: str
    form: dict[str, Any]


class BlockToggleRequest(BaseModel):
    """Enable or disable one building block."""

    enabled: bool


class TrancheCreate(BaseModel):
    """New tranche; the id is assigned by the store."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    value: float = 0
    interest_rate: float = Field(default=0, alias="interestRate")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        """Blank names fall back to the generated default."""
        if v is not None and not v.strip():
            return None
        return v


class TemplateRequest(BaseModel):
    """Product template to start from."""

    template: str = Field(..., description="Template name, e.g. 'Bond Token'")


class ConformanceRequest(BaseModel):
    """Function signatures exposed by a contract."""

    functions: list[str] = Field(default_factory=list)


class ConformanceResponse(BaseModel):
    standard: str
    missing_mandatory: list[str]
    is_conformant: bool


__all__ = [
    "SessionResponse",
    "BlockToggleRequest",
    "TrancheCreate",
    "TemplateRequest",
    "ConformanceRequest",
    "ConformanceResponse",
]
