"""Tests for the building block catalog."""

import pytest

from token_builder.blocks import (
    BUILDING_BLOCKS,
    BlockCategory,
    get_block,
    is_known_block,
    list_by_category,
    parse_category,
)
from token_builder.core.errors import InvalidArgument, UnknownBlock


class TestListByCategory:
    """Tests for listing blocks per category."""

    def test_compliance_blocks(self):
        """Test compliance blocks in catalog order."""
        ids = [b.id for b in list_by_category("compliance")]
        assert ids == ["kyc", "aml", "accredited", "jurisdiction", "max_investors", "whitelist", "lockup"]

    def test_feature_blocks_include_mintable(self):
        """Test that features contain the minting blocks."""
        ids = [b.id for b in list_by_category(BlockCategory.FEATURES)]
        assert len(ids) == 15
        assert "mintable" in ids
        assert "burnable" in ids

    def test_governance_blocks(self):
        """Test governance blocks."""
        ids = [b.id for b in list_by_category("governance")]
        assert ids == ["issuer_control", "board_approval", "dao", "multi_sig"]

    def test_unknown_category(self):
        """Test that an unknown category is an invalid argument."""
        with pytest.raises(InvalidArgument):
            list_by_category("treasury")

    def test_categories_are_disjoint(self):
        """Test that no id appears in two categories."""
        seen = set()
        for blocks in BUILDING_BLOCKS.values():
            ids = {b.id for b in blocks}
            assert not ids & seen
            seen |= ids


class TestLookup:
    """Tests for single block lookup."""

    def test_get_block(self):
        """Test looking up a block by id."""
        block = get_block("governance", "multi_sig")
        assert block.name == "Multi-Signature"

    def test_get_block_wrong_category(self):
        """Test that an id from another category is unknown."""
        with pytest.raises(UnknownBlock) as exc_info:
            get_block("compliance", "mintable")
        assert exc_info.value.category == "compliance"
        assert exc_info.value.block_id == "mintable"

    def test_is_known_block(self):
        """Test membership checks."""
        assert is_known_block("features", "tranches")
        assert not is_known_block("features", "kyc")

    def test_parse_category_passthrough(self):
        """Test that enum members parse to themselves."""
        assert parse_category(BlockCategory.GOVERNANCE) is BlockCategory.GOVERNANCE
        assert parse_category("features") is BlockCategory.FEATURES
