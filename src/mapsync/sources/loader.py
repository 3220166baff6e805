"""Readers for the source-of-truth data files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from mapsync.contracts.exceptions import SourceDataError
from mapsync.contracts.source import MapCDNInfo, MapInfo, MapMetadata, SourceData
from mapsync.sources.schema import CDN_MAPS_SCHEMA, MAP_LIST_SCHEMA, validate


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SourceDataError(f"failed reading {path}: {exc}") from exc


def _read_json(path: Path) -> Any:
    try:
        return json.loads(_read_text(path))
    except json.JSONDecodeError as exc:
        raise SourceDataError(f"invalid JSON in {path}: {exc}") from exc


def load_map_list(path: Path) -> dict[str, MapInfo]:
    """Load the YAML map list keyed by row id, validated against its schema."""
    try:
        raw: Any = yaml.safe_load(_read_text(path))
    except yaml.YAMLError as exc:
        raise SourceDataError(f"invalid YAML in {path}: {exc}") from exc
    validate(raw, MAP_LIST_SCHEMA, source=str(path))
    try:
        return {str(row_id): MapInfo.model_validate(entry) for row_id, entry in raw.items()}
    except ValidationError as exc:
        raise SourceDataError(f"invalid map list {path}: {exc}") from exc


def load_cdn_infos(path: Path) -> dict[str, MapCDNInfo]:
    """Load CDN download infos keyed by map spring name."""
    raw = _read_json(path)
    validate(raw, CDN_MAPS_SCHEMA, source=str(path))
    infos: dict[str, MapCDNInfo] = {}
    try:
        for entry in raw:
            info = MapCDNInfo.model_validate(entry[0])
            infos[info.springname] = info
    except ValidationError as exc:
        raise SourceDataError(f"invalid CDN infos {path}: {exc}") from exc
    return infos


def load_maps_metadata(path: Path) -> dict[str, MapMetadata]:
    """Load auxiliary per-map metadata keyed by row id."""
    raw = _read_json(path)
    if not isinstance(raw, dict):
        raise SourceDataError(f"maps metadata {path} must be an object keyed by row id")
    try:
        return {str(row_id): MapMetadata.model_validate(entry) for row_id, entry in raw.items()}
    except ValidationError as exc:
        raise SourceDataError(f"invalid maps metadata {path}: {exc}") from exc


def load_sources(map_list_path: Path, cdn_maps_path: Path, maps_metadata_path: Path) -> SourceData:
    return SourceData(
        maps=load_map_list(map_list_path),
        cdn_infos=load_cdn_infos(cdn_maps_path),
        metadata=load_maps_metadata(maps_metadata_path),
    )
