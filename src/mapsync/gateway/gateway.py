"""Throttled access to destination collections."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from mapsync.contracts.exceptions import SyncError
from mapsync.contracts.item import Collection, CollectionItem
from mapsync.contracts.provider import CollectionProvider
from mapsync.gateway.throttle import Throttle

logger = logging.getLogger(__name__)


class CollectionGateway:
    """Funnels every provider call through one :class:`Throttle`.

    Args:
        provider: Raw destination access.
        throttle: Shared rate limiter.
        page_size: Items per listing page.
        publish_batch_size: Item ids per publish call.
    """

    def __init__(
        self,
        provider: CollectionProvider,
        throttle: Throttle,
        *,
        page_size: int = 100,
        publish_batch_size: int = 100,
    ) -> None:
        self._provider = provider
        self._throttle = throttle
        self._page_size = page_size
        self._publish_batch_size = publish_batch_size

    async def get_collection(self, collection_id: str) -> Collection:
        return await self._throttle.run(lambda: self._provider.get_collection(collection_id))

    async def field_collection(self, collection: Collection, field_slug: str) -> Collection:
        """Fetch the collection a reference field of *collection* points to."""
        return await self.get_collection(field_collection_id(collection, field_slug))

    async def list_all_items(self, collection_id: str) -> list[CollectionItem]:
        """List every item, page by page, until a page comes back empty."""
        items: list[CollectionItem] = []
        offset = 0
        while True:
            page = await self._throttle.run(
                lambda offset=offset: self._provider.list_items(collection_id, limit=self._page_size, offset=offset)
            )
            if not page:
                break
            items.extend(page)
            offset += self._page_size
        logger.debug("Listed %d items from collection %s", len(items), collection_id)
        return items

    async def create(self, collection_id: str, fields: dict[str, Any]) -> CollectionItem:
        return await self._throttle.run(lambda: self._provider.create_item(collection_id, fields))

    async def update(self, collection_id: str, item_id: str, fields: dict[str, Any]) -> CollectionItem:
        return await self._throttle.run(lambda: self._provider.update_item(collection_id, item_id, fields))

    async def delete(self, collection_id: str, item_id: str) -> None:
        await self._throttle.run(lambda: self._provider.delete_item(collection_id, item_id))

    async def publish_changed(self, collection_id: str, items: Iterable[CollectionItem], *, dry_run: bool) -> int:
        """Publish items never published or changed since their last publish.

        Returns:
            Number of items selected for publishing.
        """
        item_ids = [item.id for item in items if item.needs_publish()]
        logger.info("Publishing %d items", len(item_ids))
        if dry_run:
            return len(item_ids)
        for start in range(0, len(item_ids), self._publish_batch_size):
            batch = item_ids[start : start + self._publish_batch_size]
            await self._throttle.run(lambda batch=batch: self._provider.publish_items(collection_id, batch))
        return len(item_ids)


def field_collection_id(collection: Collection, field_slug: str) -> str:
    """Id of the collection referenced by the field *field_slug*.

    Raises:
        SyncError: Unless exactly one such field exists and names its collection.
    """
    fields = [field for field in collection.fields if field.slug == field_slug]
    if len(fields) != 1:
        raise SyncError(f"Expected one field with slug '{field_slug}' in {collection.slug}, got {len(fields)}")
    target = (fields[0].validations or {}).get("collectionId")
    if not target:
        raise SyncError(f"Field '{field_slug}' in {collection.slug} does not reference a collection")
    return str(target)
