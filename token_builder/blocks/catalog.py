"""
Building block catalog.

Selectable compliance, feature and governance capabilities a token may
enable. Ids are unique within their category; the three categories are
disjoint.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from ..core.errors import InvalidArgument, UnknownBlock


class BlockCategory(str, Enum):
    """Building block categories."""
    COMPLIANCE = "compliance"
    FEATURES = "features"
    GOVERNANCE = "governance"


class BuildingBlock(BaseModel):
    """One selectable capability."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str


def _block(id: str, name: str, description: str) -> BuildingBlock:
    return BuildingBlock(id=id, name=name, description=description)


BUILDING_BLOCKS: dict[BlockCategory, tuple[BuildingBlock, ...]] = {
    BlockCategory.COMPLIANCE: (
        _block("kyc", "KYC", "Know Your Customer verification"),
        _block("aml", "AML", "Anti-Money Laundering checks"),
        _block("accredited", "Accredited Investors Only", "Restrict to accredited/qualified investors"),
        _block("jurisdiction", "Jurisdiction Restrictions", "Restrict based on investor jurisdiction"),
        _block("max_investors", "Maximum Investors", "Limit the total number of investors"),
        _block("whitelist", "Whitelist", "Restrict to pre-approved wallet addresses"),
        _block("lockup", "Lockup Period", "Enforce a period during which tokens cannot be transferred"),
    ),
    BlockCategory.FEATURES: (
        _block("voting", "Voting", "Enable governance voting rights"),
        _block("dividends", "Dividends", "Enable dividend/distribution payments"),
        _block("transfer_restrictions", "Transfer Restrictions", "Restrict token transfers based on rules"),
        _block("redemption", "Redemption Rights", "Allow token redemption under specific conditions"),
        _block("vesting", "Vesting Schedule", "Implement token vesting schedules"),
        _block("mintable", "Mintable", "Allow creation of new tokens"),
        _block("burnable", "Burnable", "Allow tokens to be destroyed"),
        _block("pausable", "Pausable", "Enable emergency stop functionality"),
        _block("tranches", "Tranches", "Support multiple token classes or slots"),
        _block("interest_rate", "Interest Rate", "Enable yield-bearing interest payments"),
        _block("fractional_shares", "Fractional Shares", "Allow fractional ownership of assets"),
        _block("deposit_limits", "Deposit Limits", "Set minimum and maximum deposit amounts"),
        _block("yield_strategy", "Yield Strategy", "Define strategy for generating yield"),
        _block("nav_calculation", "NAV Calculation", "Enable Net Asset Value calculation"),
        _block("revenue_sharing", "Revenue Sharing", "Distribute profits among token holders"),
    ),
    BlockCategory.GOVERNANCE: (
        _block("issuer_control", "Issuer Control", "Issuer maintains full control over token"),
        _block("board_approval", "Board Approval", "Require board approval for certain actions"),
        _block("dao", "DAO Governance", "Decentralized Autonomous Organization governance"),
        _block("multi_sig", "Multi-Signature", "Require multiple signatures for key actions"),
    ),
}

_IDS: dict[BlockCategory, frozenset[str]] = {
    category: frozenset(b.id for b in blocks) for category, blocks in BUILDING_BLOCKS.items()
}


def parse_category(value: str | BlockCategory) -> BlockCategory:
    """
    Resolve a category name.

    Raises:
        InvalidArgument: if the name is not one of compliance, features, governance
    """
    if isinstance(value, BlockCategory):
        return value
    try:
        return BlockCategory(value)
    except ValueError:
        raise InvalidArgument(
            f"Unknown building block category: {value!r} "
            f"(expected one of {[c.value for c in BlockCategory]})"
        ) from None


def list_by_category(category: str | BlockCategory) -> tuple[BuildingBlock, ...]:
    """Blocks of one category, in catalog order."""
    return BUILDING_BLOCKS[parse_category(category)]


def is_known_block(category: str | BlockCategory, block_id: str) -> bool:
    """Whether the id exists in the given category's catalog."""
    return block_id in _IDS[parse_category(category)]


def get_block(category: str | BlockCategory, block_id: str) -> BuildingBlock:
    """
    Look up a block by category and id.

    Raises:
        InvalidArgument: on an unknown category
        UnknownBlock: if the id is not in that category
    """
    resolved = parse_category(category)
    for block in BUILDING_BLOCKS[resolved]:
        if block.id == block_id:
            return block
    raise UnknownBlock(resolved.value, block_id)
