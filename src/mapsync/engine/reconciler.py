"""Generic add/update/remove reconciliation of one keyed collection."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from mapsync.contracts.item import CollectionItem, RemoteEntry
from mapsync.engine.progress import NullSyncProgress, SyncProgress
from mapsync.gateway.gateway import CollectionGateway

logger = logging.getLogger(__name__)

R = TypeVar("R")


@dataclass(frozen=True)
class ItemAdapter(Generic[R]):
    """Capabilities the reconciler needs for one record type.

    Attributes:
        type_name: Label used in log lines (``map``, ``tag`` ...).
        key: Natural key of a record (row id or slug).
        from_item: Reads a destination item as a record.
        to_fields: Builds field data for a record, optionally informed by
            the destination item it replaces.
        equals: Decides whether a destination record already matches.
        display_name: Name used in log lines and results.
    """

    type_name: str
    key: Callable[[R], str]
    from_item: Callable[[CollectionItem], R]
    to_fields: Callable[[R, CollectionItem | None], Awaitable[dict[str, Any]]]
    equals: Callable[[R, R], Awaitable[bool]]
    display_name: Callable[[R], str]


class CollectionReconciler(Generic[R]):
    """Converges one destination collection towards a source record set.

    The destination index passed to each phase is kept current: created and
    updated items replace their entries and removed items are dropped, so
    later phases (publishing, reference resolution) see the new state. In
    dry-run mode every diff is computed and logged but nothing is mutated.
    """

    def __init__(
        self,
        gateway: CollectionGateway,
        collection_id: str,
        adapter: ItemAdapter[R],
        *,
        dry_run: bool = False,
        progress: SyncProgress | None = None,
        phase: str = "",
    ) -> None:
        self._gateway = gateway
        self._collection_id = collection_id
        self._adapter = adapter
        self._dry_run = dry_run
        self._progress = progress or NullSyncProgress()
        self._phase = phase

    def index(self, items: Iterable[CollectionItem]) -> dict[str, RemoteEntry[R]]:
        """Key destination items, renaming duplicate keys instead of dropping them."""
        entries: dict[str, RemoteEntry[R]] = {}
        duplicates = 0
        for item in items:
            record = self._adapter.from_item(item)
            key = self._adapter.key(record)
            if key in entries:
                fake_key = f"{key}-bad{duplicates}"
                duplicates += 1
                logger.warning("Duplicate %s key %s, indexing it as %s", self._adapter.type_name, key, fake_key)
                key = fake_key
            entries[key] = RemoteEntry(item=item, record=record)
        return entries

    async def add_missing(self, source: Mapping[str, R], dest: dict[str, RemoteEntry[R]]) -> list[str]:
        added: list[str] = []
        for key, record in source.items():
            if key in dest:
                continue
            name = self._adapter.display_name(record)
            logger.info("Adding %s %s", self._adapter.type_name, name)
            fields = await self._adapter.to_fields(record, None)
            if self._dry_run:
                logger.info("%s", fields)
            else:
                item = await self._gateway.create(self._collection_id, fields)
                dest[key] = RemoteEntry(item=item, record=self._adapter.from_item(item))
            added.append(name)
            self._progress.item_done(self._phase)
        return added

    async def update_changed(self, source: Mapping[str, R], dest: dict[str, RemoteEntry[R]]) -> list[str]:
        """Update destination items that differ from their source record.

        Equality is evaluated concurrently for all pairs; the resulting
        update calls still go out one at a time through the gateway.
        """
        pairs = [(key, record, dest[key]) for key, record in source.items() if key in dest]
        same = await asyncio.gather(*(self._adapter.equals(record, entry.record) for _, record, entry in pairs))

        updated: list[str] = []
        for (key, record, entry), is_same in zip(pairs, same, strict=True):
            if is_same:
                continue
            name = self._adapter.display_name(record)
            logger.info("Updating %s %s", self._adapter.type_name, name)
            fields = await self._adapter.to_fields(record, entry.item)
            if self._dry_run:
                logger.info("%s", entry.item.field_data)
                logger.info("%s", fields)
            else:
                item = await self._gateway.update(self._collection_id, entry.item.id, fields)
                dest[key] = RemoteEntry(item=item, record=self._adapter.from_item(item))
            updated.append(name)
            self._progress.item_done(self._phase)
        return updated

    async def upsert(self, source: Mapping[str, R], dest: dict[str, RemoteEntry[R]]) -> tuple[list[str], list[str]]:
        """Add missing and update changed items; returns ``(added, updated)`` names."""
        added = await self.add_missing(source, dest)
        updated = await self.update_changed(source, dest)
        return added, updated

    async def remove_obsolete(self, source: Mapping[str, R], dest: dict[str, RemoteEntry[R]]) -> list[str]:
        removed: list[str] = []
        for key, entry in list(dest.items()):
            if key in source:
                continue
            name = self._adapter.display_name(entry.record)
            logger.info("Removing %s %s", self._adapter.type_name, name)
            if not self._dry_run:
                await self._gateway.delete(self._collection_id, entry.item.id)
                del dest[key]
            removed.append(name)
        return removed

    async def publish(self, dest: Mapping[str, RemoteEntry[R]]) -> int:
        return await self._gateway.publish_changed(
            self._collection_id,
            (entry.item for entry in dest.values()),
            dry_run=self._dry_run,
        )
