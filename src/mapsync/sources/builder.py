"""Builds canonical map records and vocabularies from source data.

Image URLs point at the resizing image proxy. They are the join key of the
image hash cache, so their construction must stay byte-for-byte stable.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from urllib.parse import quote

from pydantic import ValidationError

from mapsync.contracts.canonical import CanonicalMap, VocabularyItem
from mapsync.contracts.exceptions import SourceDataError
from mapsync.contracts.source import MapCDNInfo, MapInfo, MapMetadata, StorageLocation
from mapsync.slug import slugify
from mapsync.sources.derived import derive_map_info
from mapsync.sources.schema import terrain_types

logger = logging.getLogger(__name__)

IMAGE_PROXY_BASE = "https://maps-metadata.beyondallreason.dev/i/"
UPLOADS_BUCKET = "rowy-1f075.appspot.com"

MINIMAP_FILTER = "fit-in/1024x1024/filters:format(webp):quality(85)"
THUMBNAIL_FILTER = "fit-in/640x640/filters:format(webp):quality(85)"
SHOT_FILTER = "fit-in/2250x/filters:format(webp):quality(85)"
TEXTURE_FILTER = "fit-in/1024x1024/filters:format(webp):quality(85)"
METAL_FILTER = "fit-in/1024x1024/filters:format(png)"

REQUIRED_EXTRACTED_FILES = ("height.png", "metal.png", "texture.jpg")

# Characters JavaScript's encodeURI leaves untouched on top of quote()'s defaults.
_URI_SAFE = ";,/?:@&=+$!*'()#"


def encode_uri(path: str) -> str:
    return quote(path, safe=_URI_SAFE)


def proxy_url(directive: str, bucket: str, path: str) -> str:
    return f"{IMAGE_PROXY_BASE}{directive}/{bucket}/{encode_uri(path)}"


def _upload_url(directive: str, ref: str) -> str:
    return proxy_url(directive, UPLOADS_BUCKET, ref)


def _extracted_url(directive: str, location: StorageLocation, filename: str) -> str:
    return proxy_url(directive, location.bucket, f"{location.path}/{filename}")


def build_canonical_map(
    row_id: str,
    info: MapInfo,
    cdn_info: MapCDNInfo | None,
    metadata: MapMetadata | None,
) -> CanonicalMap:
    """Build one canonical record.

    Raises:
        SourceDataError: If the CDN entry or metadata is missing, a required
            extracted file is absent, or any resulting field is empty.
    """
    if cdn_info is None:
        raise SourceDataError(f"Missing download url for {info.spring_name}")
    if metadata is None:
        raise SourceDataError(f"Missing metadata for map {info.spring_name} ({row_id})")
    missing = [name for name in REQUIRED_EXTRACTED_FILES if name not in metadata.extracted_files]
    if missing:
        raise SourceDataError(f"Map {info.spring_name} is missing extracted files: {', '.join(missing)}")

    derived = derive_map_info(info, metadata)
    photo_ref = info.photo[0].ref
    try:
        record = CanonicalMap(
            name=info.display_name,
            row_id=row_id,
            minimap_url=_upload_url(MINIMAP_FILTER, photo_ref),
            minimap_thumb_url=_upload_url(THUMBNAIL_FILTER, photo_ref),
            download_url=cdn_info.mirrors[0],
            width=derived.width,
            height=derived.height,
            map_size=derived.width * derived.height,
            title=info.title or None,
            description=info.description or None,
            author=info.author,
            bg_image_url=_upload_url(SHOT_FILTER, info.background_image[0].ref) if info.background_image else None,
            perspective_shot_url=(
                _upload_url(SHOT_FILTER, info.perspective_shot[0].ref) if info.perspective_shot else None
            ),
            more_images_urls=[_upload_url(SHOT_FILTER, shot.ref) for shot in info.in_game_shots],
            wind_min=derived.wind_min,
            wind_max=derived.wind_max,
            tidal_strength=derived.tidal_strength,
            team_count=info.team_count,
            max_players=info.player_count,
            texture_map_url=_extracted_url(TEXTURE_FILTER, metadata.location, "texture.jpg"),
            height_map_url=_extracted_url(TEXTURE_FILTER, metadata.location, "height.png"),
            metal_map_url=_extracted_url(METAL_FILTER, metadata.location, "metal.png"),
            map_tags=derived.tags,
            map_terrains=derived.terrain_ordered,
        )
    except ValidationError as exc:
        raise SourceDataError(f"Invalid value for map {info.spring_name}: {exc}") from exc

    empty = record.empty_fields()
    if empty:
        raise SourceDataError(f"Missing value for map {info.spring_name} key {empty[0]}")
    return record


def build_canonical_records(
    maps: Mapping[str, MapInfo],
    cdn_infos: Mapping[str, MapCDNInfo],
    metadata: Mapping[str, MapMetadata],
) -> tuple[dict[str, CanonicalMap], dict[str, VocabularyItem]]:
    """Build canonical records keyed by row id plus the tag vocabulary keyed by slug.

    Tag names are upper-cased for display. The first record to mention a
    slug defines the vocabulary entry.
    """
    records: dict[str, CanonicalMap] = {}
    tags: dict[str, VocabularyItem] = {}
    for row_id, info in maps.items():
        record = build_canonical_map(row_id, info, cdn_infos.get(info.spring_name), metadata.get(row_id))
        for tag in record.map_tags:
            slug = slugify(tag)
            if slug not in tags:
                tags[slug] = VocabularyItem(name=tag.upper(), slug=slug)
        records[row_id] = record
    logger.debug("Built %d canonical map records with %d tags", len(records), len(tags))
    return records, tags


def terrain_vocabulary() -> dict[str, VocabularyItem]:
    """Terrain vocabulary keyed by slug; name and slug are the terrain value."""
    return {terrain: VocabularyItem(name=terrain, slug=terrain) for terrain in terrain_types()}
