"""Map sync pipeline engine.

One run walks the collections in a fixed order:

1. Build canonical records from the sources (fails before any remote call).
2. Discover the maps collection and the tag and terrain collections it references.
3. Upsert tags, then resolve tag names in the map records to item ids.
4. Upsert terrains, then resolve terrain names the same way.
5. Maps: add missing, remove obsolete, then update changed.
6. Publish changed terrains, tags and maps.
7. Remove tags and terrains no map refers to any more.

Tags and terrains are removed last so no map ever points at a deleted item.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from mapsync.contracts.canonical import CanonicalMap, VocabularyItem
from mapsync.contracts.item import Collection, CollectionItem, RemoteEntry
from mapsync.contracts.source import SourceData
from mapsync.contracts.sync import CollectionChanges, SyncResult
from mapsync.engine.equality import records_equal, vocabulary_equal
from mapsync.engine.progress import (
    PHASE_CLEANUP,
    PHASE_DISCOVER,
    PHASE_MAPS,
    PHASE_PUBLISH,
    PHASE_TAGS,
    PHASE_TERRAINS,
    NullSyncProgress,
    SyncProgress,
)
from mapsync.engine.reconciler import CollectionReconciler, ItemAdapter
from mapsync.engine.refs import resolve_references
from mapsync.gateway.gateway import CollectionGateway
from mapsync.images.hash_cache import ImageHashCache
from mapsync.sources.builder import build_canonical_records, terrain_vocabulary
from mapsync.webflow.fields import TAGS_FIELD, TERRAINS_FIELD, map_fields, map_from_item, tag_fields, tag_from_item

logger = logging.getLogger(__name__)


async def _vocabulary_fields(record: VocabularyItem, base: CollectionItem | None) -> dict[str, Any]:
    return tag_fields(record)


def _vocabulary_adapter(type_name: str) -> ItemAdapter[VocabularyItem]:
    return ItemAdapter(
        type_name=type_name,
        key=lambda record: record.slug,
        from_item=tag_from_item,
        to_fields=_vocabulary_fields,
        equals=vocabulary_equal,
        display_name=lambda record: record.name,
    )


class MapSyncEngine:
    """Synchronizes maps, tags and terrains into the destination collections.

    Args:
        gateway: Throttled destination access.
        cache: Image digest cache used for image comparison and reuse.
        collection_id: Id of the maps collection.
        dry_run: Compute and log every change without mutating anything.
        progress: Phase observer.
    """

    def __init__(
        self,
        gateway: CollectionGateway,
        cache: ImageHashCache,
        collection_id: str,
        *,
        dry_run: bool = False,
        progress: SyncProgress | None = None,
    ) -> None:
        self._gateway = gateway
        self._cache = cache
        self._collection_id = collection_id
        self._dry_run = dry_run
        self._progress: SyncProgress = progress or NullSyncProgress()

    def _map_adapter(self) -> ItemAdapter[CanonicalMap]:
        async def to_fields(record: CanonicalMap, base: CollectionItem | None) -> dict[str, Any]:
            return await map_fields(record, self._cache, base)

        async def equals(a: CanonicalMap, b: CanonicalMap) -> bool:
            return await records_equal(self._cache, a, b)

        return ItemAdapter(
            type_name="map",
            key=lambda record: record.row_id,
            from_item=map_from_item,
            to_fields=to_fields,
            equals=equals,
            display_name=lambda record: record.name,
        )

    def _reconciler(self, collection: Collection, adapter: ItemAdapter[Any], phase: str) -> CollectionReconciler[Any]:
        return CollectionReconciler(
            self._gateway,
            collection.id,
            adapter,
            dry_run=self._dry_run,
            progress=self._progress,
            phase=phase,
        )

    @contextmanager
    def _phase(self, phase: str, total: int | None = None) -> Iterator[None]:
        self._progress.phase_start(phase, total)
        try:
            yield
        except BaseException as exc:
            self._progress.phase_error(phase, exc)
            raise
        self._progress.phase_done(phase)

    async def _discover(self) -> tuple[Collection, Collection, Collection]:
        maps_collection = await self._gateway.get_collection(self._collection_id)
        tags_collection = await self._gateway.field_collection(maps_collection, TAGS_FIELD)
        terrains_collection = await self._gateway.field_collection(maps_collection, TERRAINS_FIELD)
        return maps_collection, tags_collection, terrains_collection

    async def sync(self, sources: SourceData) -> SyncResult:
        records, tags = build_canonical_records(sources.maps, sources.cdn_infos, sources.metadata)
        terrains = terrain_vocabulary()
        result = SyncResult(dry_run=self._dry_run)

        with self._phase(PHASE_DISCOVER):
            maps_collection, tags_collection, terrains_collection = await self._discover()
            map_reconciler = self._reconciler(maps_collection, self._map_adapter(), PHASE_MAPS)
            tag_reconciler = self._reconciler(tags_collection, _vocabulary_adapter("tag"), PHASE_TAGS)
            terrain_reconciler = self._reconciler(terrains_collection, _vocabulary_adapter("terrain"), PHASE_TERRAINS)
            map_index = map_reconciler.index(await self._gateway.list_all_items(maps_collection.id))
            tag_index = tag_reconciler.index(await self._gateway.list_all_items(tags_collection.id))
            terrain_index = terrain_reconciler.index(await self._gateway.list_all_items(terrains_collection.id))

        with self._phase(PHASE_TAGS, total=len(tags)):
            result.tags.added, result.tags.updated = await tag_reconciler.upsert(tags, tag_index)
            records = resolve_references(records, "map_tags", tag_index, dry_run=self._dry_run)

        with self._phase(PHASE_TERRAINS, total=len(terrains)):
            result.terrains.added, result.terrains.updated = await terrain_reconciler.upsert(terrains, terrain_index)
            records = resolve_references(records, "map_terrains", terrain_index, dry_run=self._dry_run)

        with self._phase(PHASE_MAPS, total=len(records)):
            await self._sync_maps(map_reconciler, records, map_index, result.maps)

        with self._phase(PHASE_PUBLISH):
            result.terrains.published = await terrain_reconciler.publish(terrain_index)
            result.tags.published = await tag_reconciler.publish(tag_index)
            result.maps.published = await map_reconciler.publish(map_index)

        with self._phase(PHASE_CLEANUP):
            result.tags.removed = await tag_reconciler.remove_obsolete(tags, tag_index)
            result.terrains.removed = await terrain_reconciler.remove_obsolete(terrains, terrain_index)

        return result

    async def _sync_maps(
        self,
        reconciler: CollectionReconciler[CanonicalMap],
        records: dict[str, CanonicalMap],
        index: dict[str, RemoteEntry[CanonicalMap]],
        changes: CollectionChanges,
    ) -> None:
        existing = {row_id: record for row_id, record in records.items() if row_id in index}
        changes.added = await reconciler.add_missing(records, index)
        changes.removed = await reconciler.remove_obsolete(records, index)
        changes.updated = await reconciler.update_changed(existing, index)

    async def dump(self) -> dict[str, dict[str, RemoteEntry[Any]]]:
        """Current destination state of the three collections, keyed like a sync run sees them."""
        maps_collection, tags_collection, terrains_collection = await self._discover()
        maps = self._reconciler(maps_collection, self._map_adapter(), PHASE_MAPS)
        tags = self._reconciler(tags_collection, _vocabulary_adapter("tag"), PHASE_TAGS)
        terrains = self._reconciler(terrains_collection, _vocabulary_adapter("terrain"), PHASE_TERRAINS)
        return {
            "maps": maps.index(await self._gateway.list_all_items(maps_collection.id)),
            "tags": tags.index(await self._gateway.list_all_items(tags_collection.id)),
            "terrains": terrains.index(await self._gateway.list_all_items(terrains_collection.id)),
        }
