"""Destination collection provider contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Any

from mapsync.contracts.item import Collection, CollectionItem


class CollectionProvider(ABC):
    """Raw access to the destination CMS collections.

    Implementations perform exactly one remote call per method and apply no
    throttling; callers route every call through a
    :class:`~mapsync.gateway.throttle.Throttle`.
    """

    @abstractmethod
    async def __aenter__(self) -> CollectionProvider: ...

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...

    @abstractmethod
    async def get_collection(self, collection_id: str) -> Collection: ...

    @abstractmethod
    async def list_items(self, collection_id: str, *, limit: int, offset: int) -> list[CollectionItem]: ...

    @abstractmethod
    async def create_item(self, collection_id: str, fields: dict[str, Any]) -> CollectionItem: ...

    @abstractmethod
    async def update_item(self, collection_id: str, item_id: str, fields: dict[str, Any]) -> CollectionItem: ...

    @abstractmethod
    async def delete_item(self, collection_id: str, item_id: str) -> None: ...

    @abstractmethod
    async def publish_items(self, collection_id: str, item_ids: list[str]) -> None: ...
