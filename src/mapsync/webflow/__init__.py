"""Webflow item conversion and API provider."""

from mapsync.webflow.fields import TAGS_FIELD, TERRAINS_FIELD, map_fields, map_from_item, tag_fields, tag_from_item
from mapsync.webflow.provider import WebflowProvider

__all__ = [
    "TAGS_FIELD",
    "TERRAINS_FIELD",
    "WebflowProvider",
    "map_fields",
    "map_from_item",
    "tag_fields",
    "tag_from_item",
]
