"""Source-of-truth loading and canonical record building."""

from mapsync.sources.builder import build_canonical_map, build_canonical_records, terrain_vocabulary
from mapsync.sources.derived import derive_map_info
from mapsync.sources.loader import load_cdn_infos, load_map_list, load_maps_metadata, load_sources
from mapsync.sources.schema import terrain_types

__all__ = [
    "build_canonical_map",
    "build_canonical_records",
    "derive_map_info",
    "load_cdn_infos",
    "load_map_list",
    "load_maps_metadata",
    "load_sources",
    "terrain_types",
    "terrain_vocabulary",
]
