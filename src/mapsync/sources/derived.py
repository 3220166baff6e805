"""Values derived from a map's list entry and its extracted metadata."""

from __future__ import annotations

from mapsync.contracts.source import DerivedMapInfo, MapInfo, MapMetadata
from mapsync.sources.schema import terrain_types

# Engine defaults applied when the map archive does not set wind.
DEFAULT_WIND_MIN = 5
DEFAULT_WIND_MAX = 25

CERTIFIED_TAG = "certified"


def derive_map_info(info: MapInfo, metadata: MapMetadata) -> DerivedMapInfo:
    tags = list(info.game_type)
    if info.certified:
        tags.append(CERTIFIED_TAG)

    order = {terrain: index for index, terrain in enumerate(terrain_types())}
    terrain_ordered = sorted(info.terrain, key=lambda terrain: order.get(terrain, len(order)))

    return DerivedMapInfo(
        width=metadata.map_width,
        height=metadata.map_height,
        wind_min=DEFAULT_WIND_MIN if metadata.wind_min is None else metadata.wind_min,
        wind_max=DEFAULT_WIND_MAX if metadata.wind_max is None else metadata.wind_max,
        tidal_strength=metadata.tidal_strength,
        tags=tags,
        terrain_ordered=terrain_ordered,
    )
