"""Resolution of tag and terrain names to destination item ids."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from mapsync.contracts.canonical import CanonicalMap
from mapsync.contracts.exceptions import SyncError
from mapsync.contracts.item import RemoteEntry
from mapsync.slug import slugify

RefField = Literal["map_tags", "map_terrains"]


def resolve_references(
    records: Mapping[str, CanonicalMap],
    field: RefField,
    index: Mapping[str, RemoteEntry[Any]],
    *,
    dry_run: bool,
) -> dict[str, CanonicalMap]:
    """Replace vocabulary names in *field* with destination item ids.

    *index* is the destination vocabulary keyed by slug. In dry-run mode an
    unknown name (an item that would have been created) is kept as is.

    Raises:
        SyncError: On an unknown name outside dry-run mode.
    """
    resolved: dict[str, CanonicalMap] = {}
    for row_id, record in records.items():
        ids: list[str] = []
        for name in getattr(record, field):
            entry = index.get(slugify(name))
            if entry is None:
                if not dry_run:
                    raise SyncError(f"Missing {field} {name} for map {record.name}")
                ids.append(name)
                continue
            ids.append(entry.item.id)
        resolved[row_id] = record.model_copy(update={field: ids})
    return resolved
