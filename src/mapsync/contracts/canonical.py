"""Canonical (internal) representation of the synced data.

The canonical records bridge the source map list and the Webflow collections:
both external shapes convert to and from these models, never to each other.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CanonicalMap(BaseModel):
    """Fully resolved description of one map as it should appear on the site.

    ``map_tags`` and ``map_terrains`` hold vocabulary names right after the
    build step and destination reference ids once resolved against the
    destination tag and terrain collections.
    """

    name: str
    row_id: str
    minimap_url: str
    minimap_thumb_url: str
    download_url: str
    width: int
    height: int
    map_size: int
    title: str | None
    description: str | None
    author: str
    bg_image_url: str | None
    perspective_shot_url: str | None
    more_images_urls: list[str] = Field(default_factory=list)
    wind_min: int
    wind_max: int
    tidal_strength: int | None
    team_count: int
    max_players: int
    texture_map_url: str
    height_map_url: str
    metal_map_url: str
    map_tags: list[str] = Field(default_factory=list)
    map_terrains: list[str] = Field(default_factory=list)

    def empty_fields(self) -> list[str]:
        """Names of fields holding an empty string."""
        return [name for name, value in self if value == ""]


class VocabularyItem(BaseModel):
    """A tag or terrain: display ``name`` plus ``slug`` natural key."""

    name: str
    slug: str


MapTag = VocabularyItem
MapTerrain = VocabularyItem
