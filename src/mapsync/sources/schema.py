"""Access to the packaged source schemas."""

from __future__ import annotations

from functools import cache
from importlib.resources import files
from typing import Any

import yaml
from jsonschema import Draft202012Validator

from mapsync.contracts.exceptions import SourceDataError

MAP_LIST_SCHEMA = "map_list.yaml"
CDN_MAPS_SCHEMA = "cdn_maps.yaml"


@cache
def load_schema(name: str) -> dict[str, Any]:
    text = files("mapsync.schemas").joinpath(name).read_text(encoding="utf-8")
    schema: dict[str, Any] = yaml.safe_load(text)
    return schema


def validate(data: Any, schema_name: str, *, source: str) -> None:
    """Validate *data* against a packaged schema.

    Raises:
        SourceDataError: Listing every violation found in *source*.
    """
    validator = Draft202012Validator(load_schema(schema_name))
    errors = sorted(validator.iter_errors(data), key=lambda err: list(err.absolute_path))
    if not errors:
        return
    details = "\n".join(f"  - {'/'.join(str(p) for p in err.absolute_path) or '<root>'}: {err.message}" for err in errors)
    raise SourceDataError(f"{source} does not match {schema_name}:\n{details}")


def terrain_types() -> list[str]:
    """Terrain vocabulary in website display order."""
    return list(load_schema(MAP_LIST_SCHEMA)["$defs"]["terrainType"]["enum"])
