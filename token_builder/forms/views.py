"""
Typed per-standard views of the token form.

The metadata bag holds fields of every standard ever selected. Editors
should not read it directly: each standard has a view model carrying only
its own fields, discriminated by `standard`. `project_view` reads the bag
into the view for the form's current standard; `apply_view` writes an
edited view back through a metadata merge, leaving other keys in place.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from ..core.errors import InvalidArgument
from ..standards.registry import TokenStandard
from .merge import merge_metadata
from .schemas import DividendFrequency, TokenForm, Tranche, ValuationSchedule


class StandardViewBase(BaseModel):
    """Fields shared by every view; wire names are camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    description: str = ""


class ERC20View(StandardViewBase):
    standard: Literal["ERC-20"] = "ERC-20"
    whitelist_enabled: bool = True


class ERC721View(StandardViewBase):
    standard: Literal["ERC-721"] = "ERC-721"
    base_uri: str = ""


class ERC1155View(StandardViewBase):
    standard: Literal["ERC-1155"] = "ERC-1155"
    uri: str = ""
    number_of_fractions: int | None = Field(default=None, ge=1)


class ERC1400View(StandardViewBase):
    standard: Literal["ERC-1400"] = "ERC-1400"
    security_type: str = ""
    issuer_name: str = ""
    whitelist_enabled: bool = True
    kyc_required: bool = False
    jurisdiction_restrictions: list[str] = Field(default_factory=list)


class ERC3525View(StandardViewBase):
    """Slot-based token with dated tranches."""

    standard: Literal["ERC-3525"] = "ERC-3525"
    issuance_date: str = ""
    maturity_date: str = ""
    slot_description: str = ""
    value_unit: str = ""
    allows_value_transfer: bool = True
    tranches: list[Tranche] = Field(default_factory=list)


class ERC4626View(StandardViewBase):
    """Tokenized vault. Amounts and fees are kept as the strings editors enter."""

    standard: Literal["ERC-4626"] = "ERC-4626"
    underlying_asset: str = "ETH"
    yield_strategy: str = "STAKING"
    min_deposit: str = "1000"
    max_deposit: str = "1000000"
    management_fee: str = "2.0"
    performance_fee: str = "20.0"


class ERC3643View(StandardViewBase):
    """Permissioned token for private-market assets."""

    standard: Literal["ERC-3643"] = "ERC-3643"
    whitelist_enabled: bool = True
    kyc_required: bool = False
    lockup_period: int | None = Field(default=None, ge=0, description="Days")
    voting_threshold: float | None = Field(default=None, ge=0, le=100)
    dividend_frequency: DividendFrequency = DividendFrequency.QUARTERLY
    reinvestment_allowed: bool = False
    erc20_conversion_ratio: float | None = Field(default=None, ge=0)
    jurisdiction_restrictions: list[str] = Field(default_factory=list)
    valuation_schedule: ValuationSchedule | None = None
    tranches: list[Tranche] = Field(default_factory=list)


StandardView = Annotated[
    Union[
        ERC20View,
        ERC721View,
        ERC1155View,
        ERC1400View,
        ERC3525View,
        ERC4626View,
        ERC3643View,
    ],
    Field(discriminator="standard"),
]

VIEW_MODELS: dict[str, type[StandardViewBase]] = {
    TokenStandard.ERC_20.value: ERC20View,
    TokenStandard.ERC_721.value: ERC721View,
    TokenStandard.ERC_1155.value: ERC1155View,
    TokenStandard.ERC_1400.value: ERC1400View,
    TokenStandard.ERC_3525.value: ERC3525View,
    TokenStandard.ERC_4626.value: ERC4626View,
    TokenStandard.ERC_3643.value: ERC3643View,
}

_VIEW_ADAPTER: TypeAdapter[Any] = TypeAdapter(StandardView)


def view_fields(standard: str) -> frozenset[str]:
    """Metadata keys (wire names) read by the view of `standard`."""
    model = VIEW_MODELS[standard]
    return frozenset(
        info.alias or name
        for name, info in model.model_fields.items()
        if name != "standard"
    )


def parse_view(data: Any) -> StandardViewBase:
    """Validate editor input into the view selected by its `standard` key."""
    try:
        return _VIEW_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise InvalidArgument(f"invalid standard view: {e.error_count()} error(s)") from e


def project_view(form: TokenForm) -> StandardViewBase:
    """Read the form's metadata into the view of its current standard."""
    model = VIEW_MODELS[form.standard]
    try:
        return model.model_validate({**form.metadata, "standard": form.standard})
    except ValidationError as e:
        raise InvalidArgument(
            f"metadata does not fit the {form.standard} view: {e.error_count()} error(s)"
        ) from e


def apply_view(form: TokenForm, view: StandardViewBase) -> TokenForm:
    """
    Write a view back into the metadata bag.

    Raises:
        InvalidArgument: the view belongs to a different standard than the form
    """
    if view.standard != form.standard:
        raise InvalidArgument(
            f"{view.standard} view cannot be applied to a {form.standard} form"
        )
    payload = view.model_dump(mode="json", by_alias=True, exclude={"standard"})
    return merge_metadata(form, payload)


def unused_metadata_keys(form: TokenForm) -> frozenset[str]:
    """Metadata keys the current standard's view ignores. They are kept, not purged."""
    return frozenset(form.metadata) - view_fields(form.standard)
