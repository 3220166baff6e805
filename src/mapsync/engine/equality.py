"""Equality checks deciding whether a destination item needs an update."""

from __future__ import annotations

import asyncio

from mapsync.contracts.canonical import CanonicalMap, VocabularyItem
from mapsync.images.hash_cache import ImageHashCache
from mapsync.images.resolver import same_image, same_images

_SCALAR_FIELDS = (
    "name",
    "row_id",
    "download_url",
    "width",
    "height",
    "map_size",
    "title",
    "description",
    "author",
    "wind_min",
    "wind_max",
    "tidal_strength",
    "team_count",
    "max_players",
)

_IMAGE_FIELDS = (
    "minimap_url",
    "minimap_thumb_url",
    "bg_image_url",
    "perspective_shot_url",
    "texture_map_url",
    "height_map_url",
    "metal_map_url",
)


async def records_equal(cache: ImageHashCache, a: CanonicalMap, b: CanonicalMap) -> bool:
    """True when *a* and *b* describe the same map.

    Images compare by content digest; tag and terrain references compare
    element by element, in order.
    """
    checks = await asyncio.gather(
        *(same_image(cache, getattr(a, name), getattr(b, name)) for name in _IMAGE_FIELDS),
        same_images(cache, a.more_images_urls, b.more_images_urls),
    )
    if not all(checks):
        return False
    return (
        all(getattr(a, name) == getattr(b, name) for name in _SCALAR_FIELDS)
        and a.map_tags == b.map_tags
        and a.map_terrains == b.map_terrains
    )


async def vocabulary_equal(a: VocabularyItem, b: VocabularyItem) -> bool:
    return a.name == b.name and a.slug == b.slug
