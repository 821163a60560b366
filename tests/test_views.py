"""Tests for typed per-standard views."""

from datetime import date

import pytest

from token_builder.core.errors import InvalidArgument
from token_builder.forms import (
    VIEW_MODELS,
    DividendFrequency,
    add_tranche,
    apply_view,
    default_token_form,
    merge_metadata,
    merge_top,
    parse_view,
    project_view,
    unused_metadata_keys,
    view_fields,
)
from token_builder.forms.views import ERC3643View, ERC4626View, ERC721View
from token_builder.standards import TokenStandard


@pytest.fixture
def form():
    return default_token_form(date(2026, 10, 17))


class TestProjectView:
    """Tests for projecting the metadata bag into a view."""

    def test_every_standard_has_a_view(self):
        """Test that each registered standard maps to a view model."""
        assert set(VIEW_MODELS) == {s.value for s in TokenStandard}

    def test_default_vault_view(self, form):
        """Test the ERC-4626 view of a default form."""
        form = merge_top(form, {"standard": "ERC-4626"})
        view = project_view(form)
        assert isinstance(view, ERC4626View)
        assert view.underlying_asset == "ETH"
        assert view.min_deposit == "1000"
        assert view.performance_fee == "20.0"

    def test_private_equity_view(self, form):
        """Test nested models in the ERC-3643 view."""
        form = merge_top(form, {"standard": "ERC-3643"})
        form, _ = add_tranche(form, "Common", 7000)
        view = project_view(form)
        assert isinstance(view, ERC3643View)
        assert view.voting_threshold == 5
        assert view.dividend_frequency == DividendFrequency.QUARTERLY
        assert view.valuation_schedule.next_valuation_date == date(2026, 10, 17)
        assert [t.name for t in view.tranches] == ["Common"]

    def test_view_ignores_other_standards(self, form):
        """Test that a view only carries its own fields."""
        form = merge_metadata(form, {"baseUri": "ipfs://base/"})
        form = merge_top(form, {"standard": "ERC-721"})
        view = project_view(form)
        assert isinstance(view, ERC721View)
        assert view.base_uri == "ipfs://base/"
        assert not hasattr(view, "underlying_asset")

    def test_malformed_metadata(self, form):
        """Test that metadata unfit for the view is reported."""
        form = merge_top(form, {"standard": "ERC-3643"})
        form = merge_metadata(form, {"lockupPeriod": "forever"})
        with pytest.raises(InvalidArgument):
            project_view(form)


class TestApplyView:
    """Tests for writing views back."""

    def test_round_trip_through_view(self, form):
        """Test that an edited view lands in metadata and other keys stay."""
        form = merge_metadata(form, {"uri": "ipfs://x"})
        form = merge_top(form, {"standard": "ERC-4626"})
        view = project_view(form).model_copy(update={"underlying_asset": "USDC"})
        updated = apply_view(form, view)
        assert updated.metadata["underlyingAsset"] == "USDC"
        assert updated.metadata["uri"] == "ipfs://x"

    def test_wrong_standard_rejected(self, form):
        """Test that a view cannot be applied to another standard's form."""
        with pytest.raises(InvalidArgument):
            apply_view(form, ERC4626View())

    def test_parse_view_discriminates(self):
        """Test that editor input selects the view by standard."""
        view = parse_view({"standard": "ERC-1155", "uri": "ipfs://u", "numberOfFractions": 100})
        assert view.standard == "ERC-1155"
        assert view.number_of_fractions == 100

    def test_parse_view_unknown_standard(self):
        """Test that input for an unknown standard is rejected."""
        with pytest.raises(InvalidArgument):
            parse_view({"standard": "ERC-9999"})


class TestUnusedKeys:
    """Tests for reporting metadata the current view ignores."""

    def test_view_fields_use_wire_names(self):
        """Test that field names are reported as metadata keys."""
        assert view_fields("ERC-721") == {"description", "baseUri"}

    def test_unused_keys_kept(self, form):
        """Test that keys of other standards are reported, not purged."""
        form = merge_metadata(form, {"uri": "ipfs://x"})
        form = merge_top(form, {"standard": "ERC-721"})
        unused = unused_metadata_keys(form)
        assert "uri" in unused
        assert "baseUri" not in unused
        assert form.metadata["uri"] == "ipfs://x"
