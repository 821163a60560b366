"""Tests for the conformance check."""

from datetime import date

import pytest

from token_builder.forms import check_conformance, default_token_form, merge_top
from token_builder.standards import describe


@pytest.fixture
def form():
    return default_token_form(date(2026, 10, 17))


class TestConformance:
    """Tests for mandatory function comparison."""

    def test_full_function_set_conforms(self, form):
        """Test that a contract with every mandatory function conforms."""
        functions = describe("ERC-20").mandatory_functions
        report = check_conformance(form, functions)
        assert report.is_conformant
        assert report.missing_mandatory == frozenset()
        assert report.standard == "ERC-20"

    def test_missing_functions_reported(self, form):
        """Test that absent mandatory functions are listed."""
        report = check_conformance(form, ["totalSupply()", "balanceOf(address)"])
        assert not report.is_conformant
        assert "approve(address,uint256)" in report.missing_mandatory
        assert "totalSupply()" not in report.missing_mandatory

    def test_whitespace_ignored(self, form):
        """Test that signatures match regardless of spacing."""
        report = check_conformance(form, ["approve(address, uint256)"])
        assert "approve(address,uint256)" not in report.missing_mandatory

    def test_optional_functions_not_required(self, form):
        """Test that optional functions never count as missing."""
        report = check_conformance(form, [])
        assert "name()" not in report.missing_mandatory

    def test_follows_current_standard(self, form):
        """Test that the check uses the form's standard."""
        form = merge_top(form, {"standard": "ERC-4626"})
        report = check_conformance(form, describe("ERC-20").mandatory_functions)
        assert report.standard == "ERC-4626"
        assert "asset()" in report.missing_mandatory
