"""
Token standard registry.

Static catalog of the supported token standards and, per standard, the
mandatory and optional on-chain functions and the configuration categories
it supports. Read-only; built once at import time.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..core.errors import UnknownStandard


class TokenStandard(str, Enum):
    """Supported token standards."""
    ERC_20 = "ERC-20"        # Fungible token
    ERC_721 = "ERC-721"      # Non-fungible token
    ERC_1155 = "ERC-1155"    # Multi token
    ERC_1400 = "ERC-1400"    # Security token with partitions
    ERC_3525 = "ERC-3525"    # Semi-fungible, slot based
    ERC_4626 = "ERC-4626"    # Tokenized vault
    ERC_3643 = "ERC-3643"    # Permissioned compliance token


class StandardDescriptor(BaseModel):
    """Functions and configuration categories of one token standard."""

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., description="Unique standard code, e.g. ERC-20")
    label: str
    description: str
    mandatory_functions: tuple[str, ...] = Field(
        default=(),
        description="Functions a conforming contract must expose",
    )
    optional_functions: tuple[str, ...] = Field(default=())
    config_options: tuple[str, ...] = Field(
        default=(),
        description="Logical configuration categories editors may offer",
    )


TOKEN_STANDARDS: tuple[StandardDescriptor, ...] = (
    StandardDescriptor(
        value=TokenStandard.ERC_20.value,
        label="ERC-20 (Fungible Token)",
        description=(
            "Standard for fungible tokens where each token is identical and "
            "interchangeable, ideal for currencies or commodities."
        ),
        mandatory_functions=(
            "totalSupply()",
            "balanceOf(address)",
            "transfer(address,uint256)",
            "transferFrom(address,address,uint256)",
            "approve(address,uint256)",
            "allowance(address,address)",
        ),
        optional_functions=("name()", "symbol()", "decimals()"),
        config_options=("Initial Supply", "Minting/Burning", "Pausable", "Access Control"),
    ),
    StandardDescriptor(
        value=TokenStandard.ERC_721.value,
        label="ERC-721 (Non-Fungible Token)",
        description=(
            "Standard for unique, non-interchangeable tokens, suitable for "
            "collectibles or real estate."
        ),
        mandatory_functions=(
            "balanceOf(address)",
            "ownerOf(uint256)",
            "safeTransferFrom(address,address,uint256)",
            "transferFrom(address,address,uint256)",
            "approve(address,uint256)",
            "getApproved(uint256)",
            "setApprovalForAll(address,bool)",
            "isApprovedForAll(address,address)",
        ),
        optional_functions=("name()", "symbol()", "tokenURI(uint256)"),
        config_options=("Base URI", "Minting", "Royalties", "Metadata Storage"),
    ),
    StandardDescriptor(
        value=TokenStandard.ERC_1155.value,
        label="ERC-1155 (Multi Token)",
        description=(
            "Versatile standard for managing multiple token types (fungible, "
            "semi-fungible, or non-fungible)."
        ),
        mandatory_functions=(
            "balanceOf(address,uint256)",
            "balanceOfBatch(address[],uint256[])",
            "setApprovalForAll(address,bool)",
            "isApprovedForAll(address,address)",
            "safeTransferFrom(address,address,uint256,uint256,bytes)",
            "safeBatchTransferFrom(address,address,uint256[],uint256[],bytes)",
        ),
        optional_functions=("uri(uint256)",),
        config_options=("URI", "Minting", "Batch Operations", "Supply Tracking"),
    ),
    StandardDescriptor(
        value=TokenStandard.ERC_1400.value,
        label="ERC-1400 (Security Token)",
        description="Standard for security tokens with transfer restrictions and compliance controls.",
        mandatory_functions=(
            "getDocument(bytes32)",
            "setDocument(bytes32,string,bytes32)",
            "isControllable()",
            "isIssuable()",
            "canTransferByPartition(bytes32,address,address,uint256,bytes)",
            "transferByPartition(bytes32,address,uint256,bytes)",
        ),
        optional_functions=(
            "controllers()",
            "authorizeOperator(address)",
            "revokeOperator(address)",
            "isOperator(address,address)",
        ),
        config_options=(
            "Partitions",
            "Transfer Restrictions",
            "Document Management",
            "Compliance Controls",
        ),
    ),
    StandardDescriptor(
        value=TokenStandard.ERC_3525.value,
        label="ERC-3525 (Semi-Fungible Token)",
        description=(
            "Standard for semi-fungible tokens with slot-based categorization, "
            "ideal for structured products."
        ),
        mandatory_functions=(
            "balanceOf(address)",
            "ownerOf(uint256)",
            "transferFrom(address,address,uint256)",
            "slotOf(uint256)",
            "valueDecimals()",
            "valueOf(uint256)",
            "transferValueFrom(uint256,uint256,uint256)",
        ),
        optional_functions=("name()", "symbol()", "slotURI(uint256)"),
        config_options=("Slots", "Values", "Decimals", "Tranches"),
    ),
    StandardDescriptor(
        value=TokenStandard.ERC_4626.value,
        label="ERC-4626 (Tokenized Vault)",
        description=(
            "Standard for yield-bearing vaults with asset management, suited "
            "for funds and ETFs."
        ),
        mandatory_functions=(
            "asset()",
            "totalAssets()",
            "convertToShares(uint256)",
            "convertToAssets(uint256)",
            "maxDeposit(address)",
            "previewDeposit(uint256)",
            "deposit(uint256,address)",
            "maxMint(address)",
            "previewMint(uint256)",
            "mint(uint256,address)",
            "maxWithdraw(address)",
            "previewWithdraw(uint256)",
            "withdraw(uint256,address,address)",
            "maxRedeem(address)",
            "previewRedeem(uint256)",
            "redeem(uint256,address,address)",
        ),
        optional_functions=(),
        config_options=(
            "Underlying Asset",
            "Yield Strategy",
            "Deposit/Withdrawal Limits",
            "Fee Structure",
        ),
    ),
    StandardDescriptor(
        value=TokenStandard.ERC_3643.value,
        label="ERC-3643 (Compliance Token)",
        description=(
            "Enhanced compliance standard for regulated assets like private "
            "equity, with advanced governance and valuation."
        ),
        mandatory_functions=(
            "balanceOf(address)",
            "transfer(address,uint256)",
            "transferFrom(address,address,uint256)",
            "approve(address,uint256)",
            "allowance(address,address)",
            "getDocument(bytes32)",
        ),
        optional_functions=(
            "name()",
            "symbol()",
            "decimals()",
            "setDocument(bytes32,string,bytes32)",
            "getController(address)",
        ),
        config_options=(
            "Valuation Schedule",
            "Voting Thresholds",
            "Dividend Frequency",
            "Lockup Period",
            "Tranches",
            "Multi-Signature",
        ),
    ),
)

_BY_VALUE: dict[str, StandardDescriptor] = {s.value: s for s in TOKEN_STANDARDS}


def describe(value: str) -> StandardDescriptor:
    """
    Look up a standard by its code.

    Args:
        value: Standard code such as "ERC-20"

    Returns:
        The immutable descriptor for that standard

    Raises:
        UnknownStandard: if the code is not registered
    """
    if isinstance(value, TokenStandard):
        value = value.value
    try:
        return _BY_VALUE[value]
    except (KeyError, TypeError):
        raise UnknownStandard(value) from None


def list_standards() -> tuple[StandardDescriptor, ...]:
    """All registered standards in catalog order."""
    return TOKEN_STANDARDS


def is_known_standard(value: str) -> bool:
    """Whether the code is a registered standard."""
    if isinstance(value, TokenStandard):
        value = value.value
    return isinstance(value, str) and value in _BY_VALUE


def supports_tranches(value: str) -> bool:
    """Whether the standard offers tranche configuration (slot-based standards)."""
    return "Tranches" in describe(value).config_options
