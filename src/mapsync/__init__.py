"""Public API surface for mapsync."""

__version__ = "1.0.0"

from mapsync.config import load_config
from mapsync.contracts.canonical import CanonicalMap, MapTag, MapTerrain, VocabularyItem
from mapsync.contracts.config import SyncConfig
from mapsync.contracts.exceptions import (
    AuthenticationError,
    ConfigError,
    MapSyncError,
    ProviderError,
    SourceDataError,
    SyncError,
)
from mapsync.contracts.provider import CollectionProvider
from mapsync.contracts.source import SourceData
from mapsync.contracts.sync import CollectionChanges, SyncResult
from mapsync.engine.progress import SyncProgress
from mapsync.sdk import MapSync
from mapsync.slug import slugify

__all__ = [
    "AuthenticationError",
    "CanonicalMap",
    "CollectionChanges",
    "CollectionProvider",
    "ConfigError",
    "MapSync",
    "MapSyncError",
    "MapTag",
    "MapTerrain",
    "ProviderError",
    "SourceData",
    "SourceDataError",
    "SyncConfig",
    "SyncError",
    "SyncProgress",
    "SyncResult",
    "VocabularyItem",
    "__version__",
    "load_config",
    "slugify",
]
