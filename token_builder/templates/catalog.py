"""
Product templates.

Starting points for common tokenized products. Applying a template builds a
fresh form: the template's standard and building blocks, the canonical
metadata defaults, and the template's own metadata on top.
"""

from __future__ import annotations

import copy
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..core.errors import UnknownTemplate
from ..forms.defaults import default_metadata
from ..forms.merge import validate_blocks
from ..forms.schemas import MAX_DECIMALS, TokenBlocks, TokenForm
from ..standards.registry import TokenStandard

DEFAULT_MATURITY_YEARS = 5
DEFAULT_TOTAL_SUPPLY = 1_000_000


class ProductCategory(BaseModel):
    """Group of financial products shown together."""

    model_config = ConfigDict(frozen=True)

    name: str
    products: tuple[str, ...]


class ProductTemplate(BaseModel):
    """Preset standard, blocks and metadata for one product."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    category: str = Field(..., description="Product name the template belongs to")
    standard: str
    default_blocks: TokenBlocks = Field(default_factory=TokenBlocks)
    token_name: str = ""
    symbol: str = ""
    total_supply: int | None = Field(default=None, ge=0)
    maturity_years: int = Field(default=DEFAULT_MATURITY_YEARS, ge=0)
    default_metadata: dict[str, Any] = Field(default_factory=dict)


def _blocks(
    compliance: tuple[str, ...] = (),
    features: tuple[str, ...] = (),
    governance: tuple[str, ...] = (),
) -> TokenBlocks:
    return validate_blocks(
        {"compliance": compliance, "features": features, "governance": governance}
    )


PRODUCT_CATEGORIES: tuple[ProductCategory, ...] = (
    ProductCategory(
        name="Traditional Assets",
        products=(
            "Structured Products",
            "Equity",
            "Commodities",
            "Funds, ETFs, ETPs",
            "Bonds",
            "Quantitative Investment Strategies",
        ),
    ),
    ProductCategory(
        name="Alternative Assets",
        products=(
            "Private Equity",
            "Private Debt",
            "Real Estate",
            "Energy",
            "Infrastructure",
            "Collectibles & all other assets",
        ),
    ),
    ProductCategory(name="Digital Assets", products=("Digital Tokenised Fund",)),
)


TOKEN_TEMPLATES: tuple[ProductTemplate, ...] = (
    ProductTemplate(
        name="Structured Product Token",
        description="Complex financial product with conditional returns and multiple tranches",
        category="Structured Products",
        standard=TokenStandard.ERC_3525.value,
        default_blocks=_blocks(
            ("kyc", "aml", "jurisdiction"), ("tranches", "transfer_restrictions"), ("issuer_control",)
        ),
        default_metadata={
            "tranches": [
                {"id": 1, "name": "Senior", "value": 700000, "interestRate": 3},
                {"id": 2, "name": "Mezzanine", "value": 200000, "interestRate": 5},
            ],
            "whitelistEnabled": True,
        },
    ),
    ProductTemplate(
        name="Equity Token",
        description="Standard equity token with voting rights and dividends",
        category="Equity",
        standard=TokenStandard.ERC_1400.value,
        default_blocks=_blocks(("kyc", "aml", "accredited"), ("voting", "dividends"), ("board_approval",)),
        default_metadata={"whitelistEnabled": True},
    ),
    ProductTemplate(
        name="Commodity Token",
        description="Token representing a commodity with physical backing",
        category="Commodities",
        standard=TokenStandard.ERC_20.value,
        default_blocks=_blocks(("kyc",), ("transfer_restrictions",), ("issuer_control",)),
        total_supply=1000,
    ),
    ProductTemplate(
        name="Quantitative Investment Strategy Token",
        description="Token for a yield-bearing quantitative investment strategy",
        category="Quantitative Investment Strategies",
        standard=TokenStandard.ERC_4626.value,
        default_blocks=_blocks(("whitelist",), ("yield_strategy", "deposit_limits"), ("issuer_control",)),
        total_supply=1_000_000,
        default_metadata={
            "underlyingAsset": "BTC",
            "yieldStrategy": "Algorithmic Trading",
            "managementFee": "2",
            "performanceFee": "20",
            "minimumInvestment": 10000,
        },
    ),
    ProductTemplate(
        name="Fund Token",
        description="Token representing shares in an investment fund",
        category="Funds, ETFs, ETPs",
        standard=TokenStandard.ERC_4626.value,
        default_blocks=_blocks(("kyc", "whitelist"), ("deposit_limits", "yield_strategy"), ("issuer_control",)),
        token_name="YieldFund2025",
        symbol="YF",
        default_metadata={"underlyingAsset": "ETH", "yieldStrategy": "Staking"},
    ),
    ProductTemplate(
        name="Bond Token",
        description="Fixed income security with regular coupon payments",
        category="Bonds",
        standard=TokenStandard.ERC_3525.value,
        default_blocks=_blocks(("kyc", "aml"), ("interest_rate", "redemption"), ("issuer_control",)),
        default_metadata={
            "tranches": [{"id": 1, "name": "Principal", "value": 1000000, "interestRate": 5}],
        },
    ),
    ProductTemplate(
        name="Private Equity Token",
        description=(
            "Token representing stakes in private companies with multiple share "
            "classes and governance"
        ),
        category="Private Equity",
        standard=TokenStandard.ERC_3643.value,
        default_blocks=_blocks(
            ("kyc", "aml", "whitelist", "lockup"), ("voting", "dividends", "tranches"), ("multi_sig",)
        ),
        symbol="PET",
        total_supply=10000,
        default_metadata={
            "ownerWallet": "issuer_address",
            "whitelistEnabled": True,
            "kycRequired": True,
            "lockupPeriod": 365,
            "tranches": [
                {"id": 1, "name": "Common", "value": 7000, "interestRate": 0},
                {"id": 2, "name": "Preferred", "value": 3000, "interestRate": 0},
            ],
            "valuationSchedule": {
                "frequency": "quarterly",
                "method": "dcf",
                "nextValuationDate": "2024-01-01",
            },
            "votingThreshold": 5,
            "dividendFrequency": "quarterly",
            "reinvestmentAllowed": True,
            "erc20ConversionRatio": 15,
        },
    ),
    ProductTemplate(
        name="Private Debt Token",
        description="Tokenized loan with interest-bearing tranches",
        category="Private Debt",
        standard=TokenStandard.ERC_3525.value,
        default_blocks=_blocks(("whitelist", "jurisdiction"), ("tranches", "interest_rate"), ("issuer_control",)),
        total_supply=1_000_000,
        maturity_years=3,
        default_metadata={
            "tranches": [{"id": 1, "name": "Loan", "value": 1000000, "interestRate": 5}],
            "whitelistEnabled": True,
            "jurisdictionRestrictions": ["US"],
            "erc20ConversionRatio": 8,
        },
    ),
    ProductTemplate(
        name="Real Estate Token",
        description="Token representing fractional ownership of real estate",
        category="Real Estate",
        standard=TokenStandard.ERC_1155.value,
        default_blocks=_blocks(("kyc", "aml"), ("fractional_shares", "transfer_restrictions"), ("issuer_control",)),
        default_metadata={"numberOfFractions": 100},
    ),
    ProductTemplate(
        name="Energy Token",
        description="Token representing energy units or credits",
        category="Energy",
        standard=TokenStandard.ERC_1155.value,
        default_blocks=_blocks(("whitelist",), ("transfer_restrictions",), ("issuer_control",)),
        total_supply=10000,
        default_metadata={"energyType": "Solar", "whitelistEnabled": True, "erc20ConversionRatio": 2},
    ),
    ProductTemplate(
        name="Infrastructure Token",
        description="Token representing investment in infrastructure projects",
        category="Infrastructure",
        standard=TokenStandard.ERC_3525.value,
        default_blocks=_blocks(("whitelist", "jurisdiction"), ("tranches", "revenue_sharing"), ("issuer_control",)),
        total_supply=5000,
        default_metadata={
            "tranches": [
                {"id": 1, "name": "Construction", "value": 3000, "interestRate": 0},
                {"id": 2, "name": "Operation", "value": 2000, "interestRate": 0},
            ],
            "whitelistEnabled": True,
            "erc20ConversionRatio": 12,
        },
    ),
    ProductTemplate(
        name="Collectible Token",
        description="Token representing unique or fractional collectibles",
        category="Collectibles & all other assets",
        standard=TokenStandard.ERC_721.value,
        default_blocks=_blocks(("whitelist",), ("fractional_shares", "transfer_restrictions"), ("issuer_control",)),
        default_metadata={
            "description": "A unique collectible item",
            "numberOfFractions": 100,
            "whitelistEnabled": True,
            "erc20ConversionRatio": 50,
        },
    ),
    ProductTemplate(
        name="Digital Tokenised Fund",
        description="Yield-bearing tokenized fund with structured shares",
        category="Digital Tokenised Fund",
        standard=TokenStandard.ERC_4626.value,
        default_blocks=_blocks(("kyc", "whitelist"), ("yield_strategy", "nav_calculation"), ("issuer_control",)),
        default_metadata={"underlyingAsset": "ETH", "yieldStrategy": "DeFi Pools"},
    ),
)

_BY_NAME: dict[str, ProductTemplate] = {t.name: t for t in TOKEN_TEMPLATES}


def list_templates() -> tuple[ProductTemplate, ...]:
    """All templates in catalog order."""
    return TOKEN_TEMPLATES


def get_template(name: str) -> ProductTemplate:
    """Look up a template by name. Raises UnknownTemplate."""
    try:
        return _BY_NAME[name]
    except KeyError:
        raise UnknownTemplate(name) from None


def templates_for_product(product: str) -> list[ProductTemplate]:
    """Templates whose category is the given product name."""
    return [t for t in TOKEN_TEMPLATES if t.category == product]


def _add_years(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        # 29 February in a non-leap target year
        return day.replace(year=day.year + years, day=28)


def apply_template(template: ProductTemplate, today: date | None = None) -> TokenForm:
    """
    Build a fresh form from a template.

    Slot-based ERC-3525 products get 0 decimals; everything else keeps 18.
    The issuance date is today and the maturity date is `maturity_years` later.
    """
    today = today or date.today()
    metadata = default_metadata(today)
    metadata.update(
        category=template.category,
        product=template.name,
        issuanceDate=today.isoformat(),
        maturityDate=_add_years(today, template.maturity_years).isoformat(),
    )
    metadata.update(copy.deepcopy(template.default_metadata))

    return TokenForm(
        name=template.token_name,
        symbol=template.symbol,
        decimals=0 if template.standard == TokenStandard.ERC_3525.value else MAX_DECIMALS,
        standard=template.standard,
        total_supply=template.total_supply if template.total_supply is not None else DEFAULT_TOTAL_SUPPLY,
        blocks=template.default_blocks,
        metadata=metadata,
    )
