"""Conversion between canonical records and Webflow item field data.

Reading applies defaults for missing fields (``-1`` for numbers, ``""`` for
required strings, ``None`` for nullable values, ``[]`` for lists) so a
partially filled item compares unequal to its canonical record. Writing
reuses uploaded assets when the image bytes did not change.
"""

from __future__ import annotations

from typing import Any

from mapsync.contracts.canonical import CanonicalMap, VocabularyItem
from mapsync.contracts.item import CollectionItem, ImageRef
from mapsync.images.hash_cache import ImageHashCache
from mapsync.images.resolver import pick_image, pick_images
from mapsync.slug import slugify

TAGS_FIELD = "game-tags-ref-2"
TERRAINS_FIELD = "terrain-types"


def _image(field_data: dict[str, Any], slug: str) -> ImageRef | None:
    value = field_data.get(slug)
    if not isinstance(value, dict):
        return None
    return ImageRef.model_validate(value)


def _images(field_data: dict[str, Any], slug: str) -> list[ImageRef]:
    value = field_data.get(slug)
    if not isinstance(value, list):
        return []
    return [ImageRef.model_validate(entry) for entry in value]


def _image_url(field_data: dict[str, Any], slug: str) -> str | None:
    ref = _image(field_data, slug)
    return ref.url if ref is not None else None


def _number(field_data: dict[str, Any], slug: str) -> int:
    value = field_data.get(slug)
    return -1 if value is None else value


def map_from_item(item: CollectionItem) -> CanonicalMap:
    """Read a destination map item as a canonical record."""
    data = item.field_data
    return CanonicalMap(
        name=data.get("name", ""),
        row_id=data.get("rowyid") or "",
        minimap_url=_image_url(data, "minimap") or "",
        minimap_thumb_url=_image_url(data, "minimap-photo-thumb") or "",
        download_url=data.get("downloadurl") or "",
        width=_number(data, "width"),
        height=_number(data, "height"),
        map_size=_number(data, "mapsize"),
        title=data.get("title"),
        description=data.get("description"),
        author=data.get("author") or "",
        bg_image_url=_image_url(data, "bg-image"),
        perspective_shot_url=_image_url(data, "perspective-shot"),
        more_images_urls=[ref.url for ref in _images(data, "more-images")],
        wind_min=_number(data, "wind-min"),
        wind_max=_number(data, "wind-max"),
        tidal_strength=data.get("tidal-strength"),
        team_count=_number(data, "team-count"),
        max_players=_number(data, "max-players"),
        texture_map_url=_image_url(data, "mini-map") or "",
        height_map_url=_image_url(data, "height-map") or "",
        metal_map_url=_image_url(data, "metal-map") or "",
        map_tags=list(data.get(TAGS_FIELD) or []),
        map_terrains=list(data.get(TERRAINS_FIELD) or []),
    )


async def map_fields(
    record: CanonicalMap,
    cache: ImageHashCache,
    base: CollectionItem | None = None,
) -> dict[str, Any]:
    """Field data to create or update a map item.

    With *base* (the current destination item) image fields keep their
    existing ``fileId`` when the bytes are unchanged.
    """
    prior = base.field_data if base is not None else {}

    async def pick(url: str | None, slug: str) -> str | None:
        if not url:
            return None
        return await pick_image(cache, url, _image(prior, slug))

    return {
        "name": record.name,
        "slug": slugify(record.name),
        "rowyid": record.row_id,
        "minimap": await pick(record.minimap_url, "minimap"),
        "minimap-photo-thumb": await pick(record.minimap_thumb_url, "minimap-photo-thumb"),
        "downloadurl": record.download_url,
        "width": record.width,
        "height": record.height,
        "mapsize": record.map_size,
        "title": record.title,
        "description": record.description,
        "author": record.author,
        "bg-image": await pick(record.bg_image_url, "bg-image"),
        "perspective-shot": await pick(record.perspective_shot_url, "perspective-shot"),
        "more-images": await pick_images(cache, record.more_images_urls, _images(prior, "more-images")),
        "wind-min": record.wind_min,
        "wind-max": record.wind_max,
        "tidal-strength": record.tidal_strength,
        "team-count": record.team_count,
        "max-players": record.max_players,
        "mini-map": await pick(record.texture_map_url, "mini-map"),
        "height-map": await pick(record.height_map_url, "height-map"),
        "metal-map": await pick(record.metal_map_url, "metal-map"),
        TAGS_FIELD: list(record.map_tags),
        TERRAINS_FIELD: list(record.map_terrains),
    }


def tag_from_item(item: CollectionItem) -> VocabularyItem:
    """Read a tag or terrain item; both collections share the name and slug shape."""
    data = item.field_data
    return VocabularyItem(name=data.get("name", ""), slug=data.get("slug", ""))


def tag_fields(record: VocabularyItem) -> dict[str, Any]:
    return {"name": record.name, "slug": record.slug}
