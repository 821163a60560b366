"""Conformance of a contract's function set against the form's standard.

Not run automatically: changing the standard never triggers it.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from ..standards.registry import describe
from .schemas import TokenForm


def _normalize(signature: str) -> str:
    return "".join(signature.split())


class ConformanceReport(BaseModel):
    """Mandatory functions of the standard missing from a contract."""

    model_config = ConfigDict(frozen=True)

    standard: str
    missing_mandatory: frozenset[str] = Field(default_factory=frozenset)

    @property
    def is_conformant(self) -> bool:
        """A contract conforms when no mandatory function is missing."""
        return not self.missing_mandatory


def check_conformance(form: TokenForm, available_functions: Iterable[str]) -> ConformanceReport:
    """
    Compare a contract's function signatures with the standard's mandatory set.

    Signatures are compared ignoring whitespace, so "approve(address, uint256)"
    matches "approve(address,uint256)".
    """
    descriptor = describe(form.standard)
    available = {_normalize(f) for f in available_functions}
    missing = frozenset(
        f for f in descriptor.mandatory_functions if _normalize(f) not in available
    )
    return ConformanceReport(standard=descriptor.value, missing_mandatory=missing)
