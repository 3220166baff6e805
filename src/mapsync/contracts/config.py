"""Configuration contracts."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class SyncConfig(BaseModel):
    """Settings for one ``mapsync`` run.

    Attributes:
        collection_id: Webflow id of the maps collection.
        api_token: Webflow API access token.
        api_base_url: Root of the Webflow data API.
        cache_dir: Directory holding the image hash cache file.
        map_list_path: YAML map list (source of truth).
        cdn_maps_path: JSON CDN download infos.
        maps_metadata_path: JSON auxiliary metadata keyed by row id.
        throttle_interval: Minimum seconds between two destination calls.
        page_size: Items requested per listing page.
        publish_batch_size: Item ids per publish call.
        hash_concurrency: Maximum simultaneous image downloads.
        hash_flush_every: Newly computed digests between cache saves.
    """

    collection_id: str
    api_token: str = Field(repr=False)
    api_base_url: str = "https://api.webflow.com/v2"
    cache_dir: Path = Path(".maps-cache")
    map_list_path: Path = Path("map_list.yaml")
    cdn_maps_path: Path = Path("cdn_maps.json")
    maps_metadata_path: Path = Path("maps_metadata.json")
    throttle_interval: float = Field(default=0.6, ge=0.0)
    page_size: int = Field(default=100, ge=1, le=100)
    publish_batch_size: int = Field(default=100, ge=1, le=100)
    hash_concurrency: int = Field(default=20, ge=1)
    hash_flush_every: int = Field(default=30, ge=1)

    model_config = {"frozen": True}

    @property
    def hash_cache_path(self) -> Path:
        return self.cache_dir / "imageHashesCache.json"
