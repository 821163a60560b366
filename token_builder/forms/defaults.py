"""Canonical default token form.

A fresh form (initial construction and every reset) carries the whole
metadata defaults table so that any per-standard editor finds its fields
populated. Values the editors leave undefined are stored as None.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from .schemas import TokenForm, ValuationSchedule


def default_metadata(today: date | None = None) -> dict[str, Any]:
    """Build the default metadata bag; `today` seeds the next valuation date."""
    today = today or date.today()
    return {
        "description": "",
        "category": "",
        "product": "",
        "issuanceDate": "",
        "maturityDate": "",
        "tranches": [],
        "whitelistEnabled": True,
        "jurisdictionRestrictions": [],
        "conversionRate": 0,
        # Funds and vaults
        "underlyingAsset": "ETH",
        "yieldStrategy": "STAKING",
        "minDeposit": "1000",
        "maxDeposit": "1000000",
        "redemptionNoticeDays": "30",
        "managementFee": "2.0",
        "navOracleEnabled": False,
        "erc20ConversionRate": "1.0",
        # Multi-class equity
        "ownerWallet": "",
        "kycRequired": False,
        "multiClassEnabled": False,
        "erc20Conversion": False,
        # Private equity
        "valuationSchedule": ValuationSchedule(next_valuation_date=today).to_metadata(),
        "lockupPeriod": None,
        "erc20ConversionRatio": 15,
        "dividendFrequency": "quarterly",
        "reinvestmentAllowed": False,
        "minimumInvestment": None,
        "votingThreshold": 5,
        # Bonds
        "issuerWallet": "",
        "callableAfter": None,
        "puttableAfter": None,
        "totalSupply": None,
        "peggedAsset": "",
        "numberOfFractions": None,
        # Security and semi-fungible tokens
        "securityType": "",
        "issuerName": "",
        "slotDescription": "",
        "valueUnit": "",
        "allowsValueTransfer": True,
        "redeemableValue": False,
        "expiration": False,
        # ERC-4626 function toggles
        "deposit": True,
        "withdraw": True,
        "convertToShares": True,
        "convertToAssets": True,
        "maxWithdraw": True,
        "totalAssets": "0",
        "performanceFee": "20.0",
    }


def default_token_form(today: date | None = None) -> TokenForm:
    """The form produced by initial construction and by reset."""
    return TokenForm(metadata=default_metadata(today))
