"""Source-of-truth record contracts.

These mirror the upstream data files: the map list (keyed by row id), the CDN
download infos (keyed by spring name) and the auxiliary per-map metadata
(keyed by row id). Field aliases follow the upstream camelCase spelling.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class UploadedFile(BaseModel):
    ref: str
    download_url: str = Field(alias="downloadURL")
    name: str | None = None
    type: str | None = None
    last_modified_ts: int | None = Field(default=None, alias="lastModifiedTS")

    model_config = {"populate_by_name": True}


class MapInfo(BaseModel):
    spring_name: str = Field(alias="springName")
    display_name: str = Field(alias="displayName")
    author: str
    title: str | None = None
    description: str | None = None
    game_type: list[str] = Field(default_factory=list, alias="gameType")
    terrain: list[str] = Field(default_factory=list)
    player_count: int = Field(alias="playerCount")
    team_count: int = Field(alias="teamCount")
    certified: bool = False
    in_pool: bool = Field(default=False, alias="inPool")
    photo: list[UploadedFile] = Field(min_length=1, max_length=1)
    background_image: list[UploadedFile] = Field(default_factory=list, alias="backgroundImage")
    perspective_shot: list[UploadedFile] = Field(default_factory=list, alias="perspectiveShot")
    in_game_shots: list[UploadedFile] = Field(default_factory=list, alias="inGameShots")

    model_config = {"populate_by_name": True}


class MapCDNInfo(BaseModel):
    springname: str
    filename: str
    md5: str
    mirrors: list[str] = Field(min_length=1)


class StorageLocation(BaseModel):
    bucket: str
    path: str


class MapMetadata(BaseModel):
    """Auxiliary metadata extracted from the map archive."""

    location: StorageLocation
    extracted_files: list[str] = Field(default_factory=list, alias="extractedFiles")
    map_width: int = Field(alias="mapWidth")
    map_height: int = Field(alias="mapHeight")
    wind_min: int | None = Field(default=None, alias="windMin")
    wind_max: int | None = Field(default=None, alias="windMax")
    tidal_strength: int | None = Field(default=None, alias="tidalStrength")

    model_config = {"populate_by_name": True}


class DerivedMapInfo(BaseModel):
    width: int
    height: int
    wind_min: int
    wind_max: int
    tidal_strength: int | None = None
    tags: list[str] = Field(default_factory=list)
    terrain_ordered: list[str] = Field(default_factory=list)


class SourceData(BaseModel):
    """Everything read from the source side for one run."""

    maps: dict[str, MapInfo]
    cdn_infos: dict[str, MapCDNInfo]
    metadata: dict[str, MapMetadata]
