"""
Pydantic models for the token form.

The form is frozen: every change produces a new instance, so a snapshot
handed to an editor can never be mutated behind the store's back.
Serialized keys use the editor wire names (totalSupply, interestRate,
nextValuationDate).
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from ..standards.registry import is_known_standard

MAX_DECIMALS = 18


class ValuationFrequency(str, Enum):
    """How often the asset is revalued."""
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    BIANNUALLY = "biannually"
    ANNUALLY = "annually"
    CUSTOM = "custom"


class ValuationMethod(str, Enum):
    """Valuation methodology."""
    DCF = "dcf"
    MARKET_COMPARABLES = "marketComparables"
    ASSET_BASED = "assetBased"
    CUSTOM = "custom"


class DividendFrequency(str, Enum):
    """Distribution schedule for dividend-paying tokens."""
    QUARTERLY = "quarterly"
    BIANNUALLY = "biannually"
    ANNUALLY = "annually"
    ON_EXIT = "onExit"
    CUSTOM = "custom"


class Tranche(BaseModel):
    """Named sub-allocation of a slot-based token."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(..., ge=1, description="Unique, monotonically assigned id")
    name: str
    value: float = 0
    interest_rate: float = Field(default=0, alias="interestRate")

    def to_metadata(self) -> dict[str, Any]:
        """Shape stored in the metadata bag."""
        return self.model_dump(by_alias=True)


class ValuationSchedule(BaseModel):
    """Periodic valuation settings for private-market tokens."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    frequency: ValuationFrequency = ValuationFrequency.QUARTERLY
    method: ValuationMethod = ValuationMethod.DCF
    next_valuation_date: date = Field(default_factory=date.today, alias="nextValuationDate")
    custom_frequency_days: int | None = Field(default=None, ge=1, alias="customFrequencyDays")

    def to_metadata(self) -> dict[str, Any]:
        """Shape stored in the metadata bag (ISO date, unset fields dropped)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TokenBlocks(BaseModel):
    """Enabled building block ids per category. Membership only."""

    model_config = ConfigDict(frozen=True)

    compliance: frozenset[str] = frozenset()
    features: frozenset[str] = frozenset()
    governance: frozenset[str] = frozenset()

    @field_serializer("compliance", "features", "governance", when_used="json")
    def serialize_ids(self, ids: frozenset[str]) -> list[str]:
        """Sorted for stable export output."""
        return sorted(ids)


class TokenForm(BaseModel):
    """The token under construction."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = ""
    symbol: str = ""
    decimals: int = Field(default=MAX_DECIMALS, ge=0, le=MAX_DECIMALS)
    standard: str = Field(default="ERC-20", description="Key into the standard registry")
    total_supply: int = Field(default=1_000_000, ge=0, alias="totalSupply")
    blocks: TokenBlocks = Field(default_factory=TokenBlocks)
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Standard-specific fields; keys of other standards are kept",
    )

    @field_validator("standard")
    @classmethod
    def validate_standard(cls, v: str) -> str:
        """Reject codes missing from the registry."""
        if not is_known_standard(v):
            raise ValueError(f"unknown token standard {v!r}")
        return v

    def to_document(self) -> dict[str, Any]:
        """JSON-compatible dict with wire key names."""
        return self.model_dump(mode="json", by_alias=True)


# Wire names accepted in top-level partial updates, mapped to field names
TOP_LEVEL_ALIASES: dict[str, str] = {
    "name": "name",
    "symbol": "symbol",
    "decimals": "decimals",
    "standard": "standard",
    "totalSupply": "total_supply",
    "total_supply": "total_supply",
    "blocks": "blocks",
    "metadata": "metadata",
}
