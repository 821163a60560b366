"""
Merge operations on the token form.

Every operation is pure: it validates the partial update, then returns a
new TokenForm built from the old one. The input form is never modified, so
a rejected update leaves the caller holding its last valid form.

Three shapes exist:
- top-level merge: given keys replace whole top-level fields
- metadata merge: given keys are shallow-merged into the metadata bag
- block toggle: add or remove one id from one category's set
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from ..blocks.catalog import BlockCategory, is_known_block, parse_category
from ..core.errors import InvalidArgument, UnknownBlock, UnknownStandard
from ..standards.registry import TokenStandard, is_known_standard
from .schemas import TOP_LEVEL_ALIASES, TokenBlocks, TokenForm, Tranche

logger = logging.getLogger(__name__)


def _format_errors(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "form"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def _rebuild(form: TokenForm, changes: dict[str, Any]) -> TokenForm:
    """Validate a full replacement of the form with `changes` applied."""
    data = form.model_dump()
    data["metadata"] = copy.deepcopy(form.metadata)
    data["blocks"] = form.blocks
    data.update(changes)
    try:
        return TokenForm.model_validate(data)
    except ValidationError as e:
        raise InvalidArgument(_format_errors(e)) from e


def validate_blocks(value: TokenBlocks | Mapping[str, Iterable[str]]) -> TokenBlocks:
    """
    Build a TokenBlocks from a category -> ids mapping, checking the catalog.

    Categories left out are empty.

    Raises:
        InvalidArgument: unknown category or ids not given as a collection
        UnknownBlock: an id missing from its category's catalog
    """
    if isinstance(value, TokenBlocks):
        value = {c.value: getattr(value, c.value) for c in BlockCategory}
    if not isinstance(value, Mapping):
        raise InvalidArgument(f"blocks must be a mapping of category to ids, got {type(value).__name__}")

    resolved: dict[str, frozenset[str]] = {}
    for key, ids in value.items():
        category = parse_category(key)
        if isinstance(ids, (str, bytes)) or not isinstance(ids, Iterable):
            raise InvalidArgument(f"blocks.{category.value} must be a collection of ids")
        ids = list(ids)
        if not all(isinstance(block_id, str) for block_id in ids):
            raise InvalidArgument(f"blocks.{category.value} ids must be strings")
        members = frozenset(ids)
        for block_id in members:
            if not is_known_block(category, block_id):
                raise UnknownBlock(category.value, block_id)
        resolved[category.value] = members
    return TokenBlocks(**resolved)


def _check_tranche_ids(tranches: Any) -> list[dict[str, Any]]:
    """
    Validate the tranche list, the only metadata key with enforced shape.

    Entries are normalized through the Tranche model, so "1" and 1 are the
    same id and an entry without an id is rejected.
    """
    if not isinstance(tranches, list):
        raise InvalidArgument("metadata.tranches must be a list")
    entries: list[dict[str, Any]] = []
    seen: set[int] = set()
    for position, entry in enumerate(tranches):
        try:
            tranche = Tranche.model_validate(entry)
        except ValidationError as e:
            raise InvalidArgument(f"metadata.tranches[{position}]: {_format_errors(e)}") from e
        if tranche.id in seen:
            raise InvalidArgument(f"duplicate tranche id {tranche.id}")
        seen.add(tranche.id)
        entries.append(tranche.to_metadata())
    return entries


def merge_top(form: TokenForm, partial: Mapping[str, Any]) -> TokenForm:
    """
    Replace the top-level fields named in `partial`; keep the rest.

    Keys may be field names or wire names (totalSupply). `blocks` and
    `metadata` given here replace the whole sub-object.

    Raises:
        UnknownStandard: `standard` is not in the registry
        UnknownBlock: a replacement `blocks` holds an id missing from the catalog
        InvalidArgument: unknown key, negative number, decimals above 18, bad type
    """
    if not isinstance(partial, Mapping):
        raise InvalidArgument(f"update must be a mapping, got {type(partial).__name__}")

    changes: dict[str, Any] = {}
    for key, value in partial.items():
        field = TOP_LEVEL_ALIASES.get(key)
        if field is None:
            raise InvalidArgument(f"unknown top-level field {key!r}")
        changes[field] = value

    if "standard" in changes:
        standard = changes["standard"]
        if isinstance(standard, TokenStandard):
            standard = changes["standard"] = standard.value
        if not is_known_standard(standard):
            raise UnknownStandard(standard)

    if "blocks" in changes:
        changes["blocks"] = validate_blocks(changes["blocks"])

    if "metadata" in changes:
        metadata = changes["metadata"]
        if not isinstance(metadata, Mapping) or not all(isinstance(k, str) for k in metadata):
            raise InvalidArgument("metadata must be a mapping with string keys")
        metadata = copy.deepcopy(dict(metadata))
        if "tranches" in metadata:
            metadata["tranches"] = _check_tranche_ids(metadata["tranches"])
        changes["metadata"] = metadata

    updated = _rebuild(form, changes)
    logger.debug(f"Merged top-level fields {sorted(changes)}")
    return updated


def merge_metadata(form: TokenForm, partial: Mapping[str, Any]) -> TokenForm:
    """
    Shallow-merge `partial` into the metadata bag.

    Keys present overwrite, keys absent are preserved. Metadata shape is not
    checked against the standard's config options; only the tranche list is
    validated (well-formed entries, unique ids).

    Raises:
        InvalidArgument: non-mapping update, non-string keys, malformed or duplicate tranches
    """
    if not isinstance(partial, Mapping):
        raise InvalidArgument(f"metadata update must be a mapping, got {type(partial).__name__}")
    bad_keys = [k for k in partial if not isinstance(k, str)]
    if bad_keys:
        raise InvalidArgument(f"metadata keys must be strings: {bad_keys!r}")

    incoming = copy.deepcopy(dict(partial))
    if "tranches" in incoming:
        incoming["tranches"] = _check_tranche_ids(incoming["tranches"])

    metadata = copy.deepcopy(form.metadata)
    metadata.update(incoming)
    updated = form.model_copy(update={"metadata": metadata})
    logger.debug(f"Merged metadata keys {sorted(incoming)}")
    return updated


def toggle_block(
    form: TokenForm,
    category: str | BlockCategory,
    block_id: str,
    enabled: bool,
) -> TokenForm:
    """
    Add (`enabled`) or remove one block id. Both directions are idempotent.

    Raises:
        InvalidArgument: unknown category or non-string id
        UnknownBlock: id not in that category's catalog
    """
    resolved = parse_category(category)
    if not isinstance(block_id, str):
        raise InvalidArgument(f"block id must be a string, got {type(block_id).__name__}")
    if not is_known_block(resolved, block_id):
        raise UnknownBlock(resolved.value, block_id)

    current: frozenset[str] = getattr(form.blocks, resolved.value)
    members = current | {block_id} if enabled else current - {block_id}
    blocks = form.blocks.model_copy(update={resolved.value: members})
    logger.debug(f"Toggled block {resolved.value}/{block_id} -> {bool(enabled)}")
    return form.model_copy(update={"blocks": blocks})
