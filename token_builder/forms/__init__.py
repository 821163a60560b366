"""
Token form model.

The form aggregate, its canonical defaults, the merge operations editors use
to change it, tranche editing, typed per-standard views and the conformance
check against the standard registry.
"""

from .schemas import (
    ValuationFrequency,
    ValuationMethod,
    DividendFrequency,
    Tranche,
    ValuationSchedule,
    TokenBlocks,
    TokenForm,
)
from .defaults import default_metadata, default_token_form
from .merge import merge_top, merge_metadata, toggle_block, validate_blocks
from .tranches import (
    get_tranches,
    next_tranche_id,
    add_tranche,
    update_tranche,
    remove_tranche,
)
from .views import (
    StandardView,
    VIEW_MODELS,
    view_fields,
    parse_view,
    project_view,
    apply_view,
    unused_metadata_keys,
)
from .conformance import ConformanceReport, check_conformance

__all__ = [
    # Models
    "ValuationFrequency",
    "ValuationMethod",
    "DividendFrequency",
    "Tranche",
    "ValuationSchedule",
    "TokenBlocks",
    "TokenForm",
    # Defaults
    "default_metadata",
    "default_token_form",
    # Merges
    "merge_top",
    "merge_metadata",
    "toggle_block",
    "validate_blocks",
    # Tranches
    "get_tranches",
    "next_tranche_id",
    "add_tranche",
    "update_tranche",
    "remove_tranche",
    # Views
    "StandardView",
    "VIEW_MODELS",
    "view_fields",
    "parse_view",
    "project_view",
    "apply_view",
    "unused_metadata_keys",
    # Conformance
    "ConformanceReport",
    "check_conformance",
]
