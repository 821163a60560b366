"""Tests for token form merge operations."""

from datetime import date

import pytest

from token_builder.core.errors import InvalidArgument, UnknownBlock, UnknownStandard
from token_builder.forms import (
    TokenForm,
    Tranche,
    default_token_form,
    merge_metadata,
    merge_top,
    toggle_block,
)
from token_builder.standards import TokenStandard

TODAY = date(2026, 10, 17)


@pytest.fixture
def form() -> TokenForm:
    """Default form with a fixed valuation date."""
    return default_token_form(TODAY)


class TestDefaults:
    """Tests for the canonical default form."""

    def test_top_level_defaults(self, form):
        """Test base field defaults."""
        assert form.name == ""
        assert form.symbol == ""
        assert form.decimals == 18
        assert form.standard == "ERC-20"
        assert form.total_supply == 1_000_000
        assert form.blocks.compliance == frozenset()
        assert form.blocks.features == frozenset()
        assert form.blocks.governance == frozenset()

    def test_metadata_defaults(self, form):
        """Test the defaults table values."""
        metadata = form.metadata
        assert metadata["whitelistEnabled"] is True
        assert metadata["underlyingAsset"] == "ETH"
        assert metadata["yieldStrategy"] == "STAKING"
        assert metadata["minDeposit"] == "1000"
        assert metadata["maxDeposit"] == "1000000"
        assert metadata["managementFee"] == "2.0"
        assert metadata["performanceFee"] == "20.0"
        assert metadata["erc20ConversionRatio"] == 15
        assert metadata["votingThreshold"] == 5
        assert metadata["tranches"] == []
        assert metadata["lockupPeriod"] is None

    def test_valuation_schedule_uses_today(self, form):
        """Test that the next valuation date is the given day."""
        assert form.metadata["valuationSchedule"] == {
            "frequency": "quarterly",
            "method": "dcf",
            "nextValuationDate": "2026-10-17",
        }

    def test_defaults_are_fresh(self):
        """Test that two default forms do not share metadata."""
        first = default_token_form(TODAY)
        second = default_token_form(TODAY)
        first.metadata["tranches"].append({"id": 1})
        assert second.metadata["tranches"] == []


class TestMergeTop:
    """Tests for top-level merges."""

    def test_replaces_named_fields_only(self, form):
        """Test that unmentioned fields are preserved."""
        updated = merge_top(form, {"name": "Vault", "decimals": 6})
        assert updated.name == "Vault"
        assert updated.decimals == 6
        assert updated.symbol == form.symbol
        assert updated.metadata == form.metadata

    def test_does_not_mutate_input(self, form):
        """Test that merges return a new form."""
        merge_top(form, {"name": "Changed"})
        assert form.name == ""

    def test_accepts_wire_name(self, form):
        """Test that totalSupply maps to total_supply."""
        updated = merge_top(form, {"totalSupply": 42})
        assert updated.total_supply == 42

    def test_standard_change(self, form):
        """Test switching to another registered standard."""
        updated = merge_top(form, {"standard": "ERC-4626"})
        assert updated.standard == "ERC-4626"

    def test_standard_enum_member(self, form):
        """Test that enum members are stored as their codes."""
        updated = merge_top(form, {"standard": TokenStandard.ERC_721})
        assert updated.standard == "ERC-721"
        assert type(updated.standard) is str

    def test_unknown_standard_rejected(self, form):
        """Test that an unregistered standard is rejected."""
        with pytest.raises(UnknownStandard):
            merge_top(form, {"standard": "unknown-std"})

    def test_standard_switch_keeps_metadata(self, form):
        """Test that metadata of a previous standard is not purged."""
        form = merge_metadata(form, {"uri": "ipfs://x"})
        updated = merge_top(form, {"standard": "ERC-3525"})
        assert updated.metadata["uri"] == "ipfs://x"

    @pytest.mark.parametrize(
        "partial",
        [
            {"decimals": -1},
            {"decimals": 19},
            {"totalSupply": -5},
            {"name": ["not", "a", "string"]},
        ],
    )
    def test_invalid_values_rejected(self, form, partial):
        """Test numeric bounds and types."""
        with pytest.raises(InvalidArgument):
            merge_top(form, partial)

    def test_unknown_key_rejected(self, form):
        """Test that unknown top-level keys are rejected."""
        with pytest.raises(InvalidArgument):
            merge_top(form, {"colour": "blue"})

    def test_blocks_replacement_checked(self, form):
        """Test that replacing blocks validates ids against the catalog."""
        updated = merge_top(form, {"blocks": {"features": ["mintable"]}})
        assert updated.blocks.features == frozenset({"mintable"})
        assert updated.blocks.compliance == frozenset()

        with pytest.raises(UnknownBlock):
            merge_top(form, {"blocks": {"features": ["kyc"]}})

    def test_blocks_unknown_category(self, form):
        """Test that an unknown block category is an invalid argument."""
        with pytest.raises(InvalidArgument):
            merge_top(form, {"blocks": {"treasury": []}})

    def test_metadata_replacement(self, form):
        """Test that a top-level metadata key replaces the whole bag."""
        updated = merge_top(form, {"metadata": {"uri": "ipfs://y"}})
        assert updated.metadata == {"uri": "ipfs://y"}

    def test_metadata_replacement_checks_tranches(self, form):
        """Test that a replaced bag is held to the tranche rules."""
        with pytest.raises(InvalidArgument):
            merge_top(form, {"metadata": {"tranches": [{"name": "No id"}]}})

    @pytest.mark.parametrize("ids", [[["mintable"]], [1], [None]])
    def test_blocks_non_string_ids(self, form, ids):
        """Test that block ids must be strings."""
        with pytest.raises(InvalidArgument):
            merge_top(form, {"blocks": {"features": ids}})


class TestMergeMetadata:
    """Tests for metadata merges."""

    def test_non_destructive(self, form):
        """Test that unrelated keys survive successive merges."""
        form = merge_metadata(form, {"description": "d"})
        form = merge_metadata(form, {"uri": "ipfs://x"})
        assert form.metadata["description"] == "d"
        assert form.metadata["uri"] == "ipfs://x"

    def test_overwrites_present_keys(self, form):
        """Test that given keys overwrite."""
        updated = merge_metadata(form, {"underlyingAsset": "USDC"})
        assert updated.metadata["underlyingAsset"] == "USDC"
        assert updated.metadata["yieldStrategy"] == "STAKING"

    def test_input_is_copied(self, form):
        """Test that later changes to the caller's dict do not leak in."""
        restrictions = ["US"]
        updated = merge_metadata(form, {"jurisdictionRestrictions": restrictions})
        restrictions.append("EU")
        assert updated.metadata["jurisdictionRestrictions"] == ["US"]

    def test_non_string_keys_rejected(self, form):
        """Test that metadata keys must be strings."""
        with pytest.raises(InvalidArgument):
            merge_metadata(form, {1: "x"})

    def test_duplicate_tranche_ids_rejected(self, form):
        """Test that tranche ids stay unique."""
        tranches = [{"id": 1, "name": "A"}, {"id": 1, "name": "B"}]
        with pytest.raises(InvalidArgument):
            merge_metadata(form, {"tranches": tranches})

    def test_tranche_ids_compared_as_integers(self, form):
        """Test that "1" and 1 are the same tranche id."""
        tranches = [{"id": 1, "name": "A"}, {"id": "1", "name": "B"}]
        with pytest.raises(InvalidArgument):
            merge_metadata(form, {"tranches": tranches})

    def test_tranche_ids_normalized(self, form):
        """Test that stored tranches carry integer ids and wire names."""
        updated = merge_metadata(form, {"tranches": [{"id": "2", "name": "B", "interest_rate": 4}]})
        assert updated.metadata["tranches"] == [{"id": 2, "name": "B", "value": 0, "interestRate": 4}]

    def test_tranche_models_accepted(self, form):
        """Test that Tranche instances are stored as plain entries."""
        updated = merge_metadata(form, {"tranches": [Tranche(id=3, name="C", value=10)]})
        assert updated.metadata["tranches"][0]["id"] == 3
        assert isinstance(updated.metadata["tranches"][0], dict)

    @pytest.mark.parametrize(
        "entry",
        [
            {"name": "No id"},
            {"id": [1], "name": "List id"},
            {"id": 0, "name": "Zero"},
            {"id": 1},
            "Tranche 1",
        ],
    )
    def test_malformed_tranches_rejected(self, form, entry):
        """Test that each tranche entry must be well formed."""
        with pytest.raises(InvalidArgument):
            merge_metadata(form, {"tranches": [entry]})

    def test_tranches_must_be_list(self, form):
        """Test that the tranche collection is a list."""
        with pytest.raises(InvalidArgument):
            merge_metadata(form, {"tranches": {"id": 1}})

    def test_shape_not_validated(self, form):
        """Test that arbitrary keys are accepted for any standard."""
        updated = merge_metadata(form, {"valuationSchedule": "whenever"})
        assert updated.metadata["valuationSchedule"] == "whenever"


class TestToggleBlock:
    """Tests for building block toggles."""

    def test_enable_and_disable(self, form):
        """Test that on then off returns to the default."""
        enabled = toggle_block(form, "features", "mintable", True)
        assert "mintable" in enabled.blocks.features
        disabled = toggle_block(enabled, "features", "mintable", False)
        assert disabled.blocks.features == form.blocks.features

    def test_idempotent(self, form):
        """Test that repeated toggles depend only on the last value."""
        once = toggle_block(form, "compliance", "kyc", True)
        twice = toggle_block(once, "compliance", "kyc", True)
        assert once.blocks == twice.blocks

        removed = toggle_block(form, "compliance", "kyc", False)
        assert removed.blocks == form.blocks

    def test_other_categories_untouched(self, form):
        """Test that a toggle only touches its category."""
        form = toggle_block(form, "governance", "dao", True)
        updated = toggle_block(form, "features", "pausable", True)
        assert updated.blocks.governance == frozenset({"dao"})

    def test_unknown_block(self, form):
        """Test that ids outside the category's catalog are rejected."""
        with pytest.raises(UnknownBlock):
            toggle_block(form, "governance", "kyc", True)

    def test_unknown_category(self, form):
        """Test that an unknown category is an invalid argument."""
        with pytest.raises(InvalidArgument):
            toggle_block(form, "treasury", "kyc", True)

    def test_non_string_block_id(self, form):
        """Test that an unhashable block id is an invalid argument."""
        with pytest.raises(InvalidArgument):
            toggle_block(form, "features", ["mintable"], True)
