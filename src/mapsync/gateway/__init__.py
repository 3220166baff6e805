"""Rate-limited destination gateway."""

from mapsync.gateway.gateway import CollectionGateway, field_collection_id
from mapsync.gateway.throttle import Throttle

__all__ = ["CollectionGateway", "Throttle", "field_collection_id"]
