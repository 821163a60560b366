"""Tranche editing for slot-based standards.

Each operation edits the tranche list and writes the whole list back as a
metadata merge. New ids are one above the highest id seen, so ids grow
strictly within a session; callers that remove tranches pass the highest id
they ever issued as `floor` to keep a removed id from coming back.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from ..core.errors import InvalidArgument
from .merge import merge_metadata
from .schemas import TokenForm, Tranche

_FIELD_ALIASES = {"interest_rate": "interestRate"}


def _raw_tranches(form: TokenForm) -> list[dict[str, Any]]:
    raw = form.metadata.get("tranches") or []
    if not isinstance(raw, list):
        raise InvalidArgument("metadata.tranches must be a list")
    return copy.deepcopy(raw)


def _parse(entry: Any) -> Tranche:
    try:
        return Tranche.model_validate(entry)
    except ValidationError as e:
        raise InvalidArgument(f"malformed tranche {entry!r}: {e.error_count()} error(s)") from e


def _index_of(raw: list[dict[str, Any]], tranche_id: int) -> int:
    for index, entry in enumerate(raw):
        if isinstance(entry, Mapping) and entry.get("id") == tranche_id:
            return index
    raise InvalidArgument(f"no tranche with id {tranche_id!r}")


def get_tranches(form: TokenForm) -> list[Tranche]:
    """Tranches of the form, in order."""
    return [_parse(entry) for entry in _raw_tranches(form)]


def next_tranche_id(form: TokenForm, floor: int = 0) -> int:
    """One above the highest existing id (or `floor`, whichever is larger)."""
    ids = [t.id for t in get_tranches(form)]
    return max(ids + [floor]) + 1


def add_tranche(
    form: TokenForm,
    name: str | None = None,
    value: float = 0,
    interest_rate: float = 0,
    *,
    floor: int = 0,
) -> tuple[TokenForm, Tranche]:
    """
    Append a tranche with the next id.

    Args:
        form: Current form
        name: Display name (default: "Tranche <id>")
        value: Allocated value
        interest_rate: Interest rate in percent
        floor: Highest id already issued in this session

    Returns:
        The updated form and the new tranche
    """
    new_id = next_tranche_id(form, floor)
    try:
        tranche = Tranche(
            id=new_id,
            name=name if name is not None else f"Tranche {new_id}",
            value=value,
            interest_rate=interest_rate,
        )
    except ValidationError as e:
        raise InvalidArgument(f"invalid tranche: {e.error_count()} error(s)") from e

    raw = _raw_tranches(form)
    raw.append(tranche.to_metadata())
    return merge_metadata(form, {"tranches": raw}), tranche


def update_tranche(
    form: TokenForm,
    tranche_id: int,
    changes: Mapping[str, Any],
) -> tuple[TokenForm, Tranche]:
    """
    Replace fields of one tranche in place; other tranches are untouched.

    Raises:
        InvalidArgument: unknown id, an attempt to change the id, invalid values
    """
    raw = _raw_tranches(form)
    index = _index_of(raw, tranche_id)

    normalized = {_FIELD_ALIASES.get(k, k): v for k, v in changes.items()}
    if normalized.get("id", tranche_id) != tranche_id:
        raise InvalidArgument("tranche id cannot be changed")

    tranche = _parse({**raw[index], **normalized})
    raw[index] = tranche.to_metadata()
    return merge_metadata(form, {"tranches": raw}), tranche


def remove_tranche(form: TokenForm, tranche_id: int) -> TokenForm:
    """Drop one tranche. Raises InvalidArgument for an unknown id."""
    raw = _raw_tranches(form)
    del raw[_index_of(raw, tranche_id)]
    return merge_metadata(form, {"tranches": raw})
