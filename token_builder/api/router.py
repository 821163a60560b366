"""
FastAPI router for the per-standard editors.

Provides REST API for:
- Opening, reading and closing editing sessions
- Top-level and metadata merges, block toggles, tranche editing
- Typed per-standard views and product templates
- Registry, catalog and template listings
- Conformance checks and JSON export
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from ..blocks.catalog import list_by_category
from ..core.errors import (
    TokenConfigError,
    UnknownSession,
    UnknownStandard,
    UnknownTemplate,
)
from ..export.snapshot import PolicySnapshot, export_policy
from ..forms.views import parse_view
from ..standards.registry import describe, list_standards
from ..store.sessions import SessionRegistry, get_registry
from ..store.store import ConfigurationStore
from ..templates.catalog import PRODUCT_CATEGORIES, list_templates
from .schemas import (
    BlockToggleRequest,
    ConformanceRequest,
    ConformanceResponse,
    SessionResponse,
    TemplateRequest,
    TrancheCreate,
)

router = APIRouter(tags=["token-builder"])


def get_session_registry() -> SessionRegistry:
    """Dependency to get the session registry."""
    return get_registry()


def _http_error(e: TokenConfigError) -> HTTPException:
    if isinstance(e, (UnknownSession, UnknownTemplate)):
        return HTTPException(status_code=404, detail=str(e))
    return HTTPException(status_code=422, detail=str(e))


def _store(registry: SessionRegistry, session_id: str) -> ConfigurationStore:
    try:
        return registry.get(session_id)
    except UnknownSession as e:
        raise _http_error(e)


def _session(session_id: str, store: ConfigurationStore) -> SessionResponse:
    return SessionResponse(
        session_id=session_id,
        state=store.state.value,
        form=store.get().to_document(),
    )


# =============================================================================
# Catalog Endpoints
# =============================================================================


@router.get("/standards")
def get_standards() -> list[dict[str, Any]]:
    """List supported token standards."""
    return [s.model_dump() for s in list_standards()]


@router.get("/standards/{value}")
def get_standard(value: str) -> dict[str, Any]:
    """Describe one token standard."""
    try:
        return describe(value).model_dump()
    except UnknownStandard as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/blocks/{category}")
def get_blocks(category: str) -> list[dict[str, Any]]:
    """List building blocks of one category."""
    try:
        return [b.model_dump() for b in list_by_category(category)]
    except TokenConfigError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/templates")
def get_templates() -> dict[str, Any]:
    """List product categories and templates."""
    return {
        "categories": [c.model_dump() for c in PRODUCT_CATEGORIES],
        "templates": [t.model_dump(mode="json") for t in list_templates()],
    }


@router.post("/policies/export", response_class=PlainTextResponse)
def post_policy_export(policy: PolicySnapshot) -> str:
    """Export a policy snapshot as a JSON document."""
    return export_policy(policy)


# =============================================================================
# Session Endpoints
# =============================================================================


@router.post("/sessions", response_model=SessionResponse, status_code=201)
def create_session(
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    """Open an editing session with a default form."""
    session_id, store = registry.create()
    return _session(session_id, store)


@router.get("/sessions/{session_id}", response_model=SessionResponse)
def get_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    """Get the current form of a session."""
    return _session(session_id, _store(registry, session_id))


@router.delete("/sessions/{session_id}", status_code=204)
def delete_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> None:
    """Close a session and discard its form."""
    try:
        registry.discard(session_id)
    except UnknownSession as e:
        raise _http_error(e)


@router.patch("/sessions/{session_id}/form", response_model=SessionResponse)
def patch_form(
    session_id: str,
    partial: dict[str, Any],
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    """Replace top-level fields of the form."""
    store = _store(registry, session_id)
    try:
        store.merge_top(partial)
    except TokenConfigError as e:
        raise _http_error(e)
    return _session(session_id, store)


@router.patch("/sessions/{session_id}/form/metadata", response_model=SessionResponse)
def patch_metadata(
    session_id: str,
    partial: dict[str, Any],
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    """Shallow-merge fields into the form metadata."""
    store = _store(registry, session_id)
    try:
        store.merge_metadata(partial)
    except TokenConfigError as e:
        raise _http_error(e)
    return _session(session_id, store)


@router.put("/sessions/{session_id}/form/blocks/{category}/{block_id}", response_model=SessionResponse)
def put_block(
    session_id: str,
    category: str,
    block_id: str,
    request: BlockToggleRequest,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    """Enable or disable a building block."""
    store = _store(registry, session_id)
    try:
        store.toggle_block(category, block_id, request.enabled)
    except TokenConfigError as e:
        raise _http_error(e)
    return _session(session_id, store)


@router.post("/sessions/{session_id}/form/tranches", status_code=201)
def post_tranche(
    session_id: str,
    request: TrancheCreate,
    registry: SessionRegistry = Depends(get_session_registry),
) -> dict[str, Any]:
    """Append a tranche with the next id."""
    store = _store(registry, session_id)
    try:
        tranche = store.add_tranche(request.name, request.value, request.interest_rate)
    except TokenConfigError as e:
        raise _http_error(e)
    return tranche.to_metadata()


@router.patch("/sessions/{session_id}/form/tranches/{tranche_id}")
def patch_tranche(
    session_id: str,
    tranche_id: int,
    changes: dict[str, Any],
    registry: SessionRegistry = Depends(get_session_registry),
) -> dict[str, Any]:
    """Edit fields of one tranche."""
    store = _store(registry, session_id)
    try:
        tranche = store.update_tranche(tranche_id, changes)
    except TokenConfigError as e:
        raise _http_error(e)
    return tranche.to_metadata()


@router.delete("/sessions/{session_id}/form/tranches/{tranche_id}", response_model=SessionResponse)
def delete_tranche(
    session_id: str,
    tranche_id: int,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    """Remove one tranche."""
    store = _store(registry, session_id)
    try:
        store.remove_tranche(tranche_id)
    except TokenConfigError as e:
        raise _http_error(e)
    return _session(session_id, store)


@router.get("/sessions/{session_id}/form/view")
def get_view(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> dict[str, Any]:
    """Typed view of the current standard's fields."""
    store = _store(registry, session_id)
    try:
        return store.view().model_dump(mode="json", by_alias=True)
    except TokenConfigError as e:
        raise _http_error(e)


@router.put("/sessions/{session_id}/form/view", response_model=SessionResponse)
def put_view(
    session_id: str,
    data: dict[str, Any],
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    """Write an edited per-standard view back into the form."""
    store = _store(registry, session_id)
    try:
        store.apply_view(parse_view(data))
    except TokenConfigError as e:
        raise _http_error(e)
    return _session(session_id, store)


@router.post("/sessions/{session_id}/form/template", response_model=SessionResponse)
def post_template(
    session_id: str,
    request: TemplateRequest,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    """Start the form over from a product template."""
    store = _store(registry, session_id)
    try:
        store.apply_template(request.template)
    except TokenConfigError as e:
        raise _http_error(e)
    return _session(session_id, store)


@router.post("/sessions/{session_id}/form/reset", response_model=SessionResponse)
def post_reset(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    """Discard all edits."""
    store = _store(registry, session_id)
    store.reset()
    return _session(session_id, store)


@router.post("/sessions/{session_id}/form/conformance", response_model=ConformanceResponse)
def post_conformance(
    session_id: str,
    request: ConformanceRequest,
    registry: SessionRegistry = Depends(get_session_registry),
) -> ConformanceResponse:
    """Check a contract's functions against the form's standard."""
    report = _store(registry, session_id).check_conformance(request.functions)
    return ConformanceResponse(
        standard=report.standard,
        missing_mandatory=sorted(report.missing_mandatory),
        is_conformant=report.is_conformant,
    )


@router.get("/sessions/{session_id}/form/export", response_class=PlainTextResponse)
def get_export(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> str:
    """JSON document of the current form."""
    return _store(registry, session_id).export()
