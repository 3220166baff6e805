"""SDK composition root for mapsync."""

from __future__ import annotations

from typing import Any

from mapsync.contracts.config import SyncConfig
from mapsync.contracts.item import RemoteEntry
from mapsync.contracts.provider import CollectionProvider
from mapsync.contracts.source import SourceData
from mapsync.contracts.sync import SyncResult
from mapsync.engine import MapSyncEngine
from mapsync.engine.progress import SyncProgress
from mapsync.gateway import CollectionGateway, Throttle
from mapsync.images import ImageHashCache
from mapsync.sources import load_sources
from mapsync.webflow import WebflowProvider


class MapSync:
    """mapsync SDK public API.

    Wires the Webflow provider, the shared throttle, the image hash cache and
    the engine from one :class:`SyncConfig`. A *provider* may be injected to
    target something other than the live API.
    """

    def __init__(
        self,
        *,
        config: SyncConfig,
        provider: CollectionProvider | None = None,
        progress: SyncProgress | None = None,
    ) -> None:
        self._config = config
        self._provider = provider
        self._progress = progress

    def load_sources(self) -> SourceData:
        return load_sources(
            self._config.map_list_path,
            self._config.cdn_maps_path,
            self._config.maps_metadata_path,
        )

    async def sync(self, sources: SourceData | None = None, *, dry_run: bool = False) -> SyncResult:
        """Run one sync; sources are read from the configured files unless given."""
        loaded = sources if sources is not None else self.load_sources()
        async with self._create_provider() as provider, self._create_cache() as cache:
            engine = MapSyncEngine(
                self._create_gateway(provider),
                cache,
                self._config.collection_id,
                dry_run=dry_run,
                progress=self._progress,
            )
            return await engine.sync(loaded)

    async def dump(self) -> dict[str, dict[str, RemoteEntry[Any]]]:
        async with self._create_provider() as provider, self._create_cache() as cache:
            engine = MapSyncEngine(self._create_gateway(provider), cache, self._config.collection_id)
            return await engine.dump()

    def _create_provider(self) -> CollectionProvider:
        if self._provider is not None:
            return self._provider
        return WebflowProvider(token=self._config.api_token, base_url=self._config.api_base_url)

    def _create_cache(self) -> ImageHashCache:
        return ImageHashCache(
            self._config.hash_cache_path,
            max_concurrent=self._config.hash_concurrency,
            flush_every=self._config.hash_flush_every,
        )

    def _create_gateway(self, provider: CollectionProvider) -> CollectionGateway:
        return CollectionGateway(
            provider,
            Throttle(self._config.throttle_interval),
            page_size=self._config.page_size,
            publish_batch_size=self._config.publish_batch_size,
        )
