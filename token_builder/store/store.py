"""
Configuration store: owner of one editing session's token form.

The store holds the live form and is the only place it changes. Editors get
deep-copied snapshots from `get()` and send partial updates back; each
update is computed on the current form by a pure merge function and swapped
in as a whole object, so readers never see a partial merge. A rejected
update raises and leaves the form and state untouched.

Every tranche id that reaches the form, whichever update wrote it, raises
the session's high-water mark, so `add_tranche` never hands it out again.

States:
    DEFAULT: freshly constructed or reset
    EDITED: at least one update accepted since then
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from datetime import date
from enum import Enum
from typing import Any

from ..blocks.catalog import BlockCategory
from ..export.snapshot import export_token
from ..forms import conformance, merge, tranches, views
from ..forms.defaults import default_token_form
from ..forms.schemas import TokenForm, Tranche
from ..forms.views import StandardViewBase
from ..templates.catalog import ProductTemplate, apply_template, get_template

logger = logging.getLogger(__name__)

Listener = Callable[[TokenForm], None]


class StoreState(str, Enum):
    """Lifecycle state of the store."""
    DEFAULT = "default"
    EDITED = "edited"


class ConfigurationStore:
    """
    Holds one live TokenForm and applies editor updates to it.

    Usage:
        store = ConfigurationStore()
        store.merge_top({"standard": "ERC-4626"})
        store.merge_metadata({"underlyingAsset": "USDC"})
        form = store.get()
    """

    def __init__(self, today: Callable[[], date] | None = None):
        self._today = today or date.today
        self._lock = threading.Lock()
        self._listeners: list[Listener] = []
        self._form = default_token_form(self._today())
        self._state = StoreState.DEFAULT
        self._tranche_high_water = 0

    @property
    def state(self) -> StoreState:
        return self._state

    def get(self) -> TokenForm:
        """Snapshot of the current form. Safe to keep; never changes."""
        return self._form.model_copy(deep=True)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callback receiving a snapshot after every accepted change.

        Listeners run after the change is committed. A listener that raises
        is logged and skipped; the others still run and the caller still
        gets the updated form.

        Returns:
            A function that removes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # =========================================================================
    # Mutations
    # =========================================================================

    def _apply(self, operation: Callable[[TokenForm], TokenForm], state: StoreState) -> TokenForm:
        with self._lock:
            updated = operation(self._form)
            self._tranche_high_water = max(
                [t.id for t in tranches.get_tranches(updated)] + [self._tranche_high_water]
            )
            self._form = updated
            self._state = state
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(updated.model_copy(deep=True))
            except Exception:
                logger.exception(f"Store listener {listener!r} failed")
        return updated.model_copy(deep=True)

    def merge_top(self, partial: Mapping[str, Any]) -> TokenForm:
        """Replace the named top-level fields. See `forms.merge.merge_top`."""
        return self._apply(lambda form: merge.merge_top(form, partial), StoreState.EDITED)

    def merge_metadata(self, partial: Mapping[str, Any]) -> TokenForm:
        """Shallow-merge into metadata. See `forms.merge.merge_metadata`."""
        return self._apply(lambda form: merge.merge_metadata(form, partial), StoreState.EDITED)

    def toggle_block(self, category: str | BlockCategory, block_id: str, enabled: bool) -> TokenForm:
        """Enable or disable one building block."""
        return self._apply(
            lambda form: merge.toggle_block(form, category, block_id, enabled),
            StoreState.EDITED,
        )

    def add_tranche(
        self,
        name: str | None = None,
        value: float = 0,
        interest_rate: float = 0,
    ) -> Tranche:
        """Append a tranche. Ids are never reused within this store's session."""
        added: list[Tranche] = []

        def operation(form: TokenForm) -> TokenForm:
            updated, tranche = tranches.add_tranche(
                form, name, value, interest_rate, floor=self._tranche_high_water
            )
            added.append(tranche)
            return updated

        self._apply(operation, StoreState.EDITED)
        logger.info(f"Added tranche {added[0].id} ({added[0].name})")
        return added[0]

    def update_tranche(self, tranche_id: int, changes: Mapping[str, Any]) -> Tranche:
        """Replace fields of one tranche at its position."""
        updated_tranche: list[Tranche] = []

        def operation(form: TokenForm) -> TokenForm:
            updated, tranche = tranches.update_tranche(form, tranche_id, changes)
            updated_tranche.append(tranche)
            return updated

        self._apply(operation, StoreState.EDITED)
        return updated_tranche[0]

    def remove_tranche(self, tranche_id: int) -> TokenForm:
        """Drop one tranche; its id is not handed out again."""
        return self._apply(
            lambda form: tranches.remove_tranche(form, tranche_id),
            StoreState.EDITED,
        )

    def apply_view(self, view: StandardViewBase) -> TokenForm:
        """Write an edited per-standard view back into metadata."""
        return self._apply(lambda form: views.apply_view(form, view), StoreState.EDITED)

    def apply_template(self, template: ProductTemplate | str) -> TokenForm:
        """Replace the form with a fresh one built from a product template."""
        resolved = get_template(template) if isinstance(template, str) else template
        updated = self._apply(
            lambda form: apply_template(resolved, self._today()),
            StoreState.EDITED,
        )
        logger.info(f"Applied template {resolved.name!r} ({resolved.standard})")
        return updated

    def reset(self) -> TokenForm:
        """Discard all edits and return to the canonical default form."""

        def operation(form: TokenForm) -> TokenForm:
            self._tranche_high_water = 0
            return default_token_form(self._today())

        updated = self._apply(operation, StoreState.DEFAULT)
        logger.info("Token form reset to defaults")
        return updated

    # =========================================================================
    # Read-only projections
    # =========================================================================

    def view(self) -> StandardViewBase:
        """Typed view of the current standard's fields."""
        return views.project_view(self._form)

    def check_conformance(self, available_functions: Iterable[str]) -> conformance.ConformanceReport:
        """Mandatory functions of the current standard missing from a contract."""
        return conformance.check_conformance(self._form, available_functions)

    def export(self) -> str:
        """JSON document of the current form for an external exporter."""
        return export_token(self._form)
