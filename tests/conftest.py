"""Shared test fixtures for mapsync tests."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
import pytest_asyncio
import yaml

from mapsync.contracts.source import MapCDNInfo, MapInfo, MapMetadata, SourceData
from mapsync.gateway import CollectionGateway, Throttle
from mapsync.images import ImageHashCache
from tests.fakes.data import cdn_entry, map_entry, metadata_entry, url_content
from tests.fakes.provider import FakeWebflowProvider


@pytest.fixture
def raw_map_list() -> dict[str, dict[str, Any]]:
    return {
        "row-1": map_entry(
            "Comet Catcher Redux v3.1",
            "Comet Catcher Redux",
            game_type=["1v1", "team"],
            terrain=["metal", "lava"],
            certified=True,
            shots=2,
        ),
        "row-2": map_entry("Red Comet 1.8", "Red Comet", game_type=["ffa"], terrain=["desert"], background=False),
    }


@pytest.fixture
def sources(raw_map_list: dict[str, dict[str, Any]]) -> SourceData:
    return SourceData(
        maps={row_id: MapInfo.model_validate(entry) for row_id, entry in raw_map_list.items()},
        cdn_infos={
            entry["springName"]: MapCDNInfo.model_validate(cdn_entry(entry["springName"]))
            for entry in raw_map_list.values()
        },
        metadata={
            row_id: MapMetadata.model_validate(metadata_entry(entry["springName"]))
            for row_id, entry in raw_map_list.items()
        },
    )


@pytest.fixture
def source_files(tmp_path: Path, raw_map_list: dict[str, dict[str, Any]]) -> tuple[Path, Path, Path]:
    """Write the sample sources to disk and return (map_list, cdn_maps, maps_metadata)."""
    map_list_path = tmp_path / "map_list.yaml"
    cdn_maps_path = tmp_path / "cdn_maps.json"
    metadata_path = tmp_path / "maps_metadata.json"
    map_list_path.write_text(yaml.safe_dump(raw_map_list), encoding="utf-8")
    cdn_maps_path.write_text(
        json.dumps([[cdn_entry(entry["springName"])] for entry in raw_map_list.values()]),
        encoding="utf-8",
    )
    metadata_path.write_text(
        json.dumps({row_id: metadata_entry(entry["springName"]) for row_id, entry in raw_map_list.items()}),
        encoding="utf-8",
    )
    return map_list_path, cdn_maps_path, metadata_path


@pytest.fixture
def image_handler() -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=url_content(request))

    return handler


@pytest_asyncio.fixture
async def image_cache(
    tmp_path: Path,
    image_handler: Callable[[httpx.Request], httpx.Response],
) -> AsyncIterator[ImageHashCache]:
    async with httpx.AsyncClient(transport=httpx.MockTransport(image_handler)) as client:
        async with ImageHashCache(tmp_path / "cache" / "imageHashesCache.json", client=client) as cache:
            yield cache


@pytest.fixture
def fake_provider() -> FakeWebflowProvider:
    return FakeWebflowProvider.with_map_collections()


@pytest.fixture
def gateway(fake_provider: FakeWebflowProvider) -> CollectionGateway:
    return CollectionGateway(fake_provider, Throttle(0.0), page_size=2, publish_batch_size=2)
