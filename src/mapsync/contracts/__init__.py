"""Public contracts for mapsync."""

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
from mapsync.contracts.item import Collection, CollectionField, CollectionItem, ImageRef, RemoteEntry
from mapsync.contracts.provider import CollectionProvider
from mapsync.contracts.source import (
    DerivedMapInfo,
    MapCDNInfo,
    MapInfo,
    MapMetadata,
    SourceData,
    StorageLocation,
    UploadedFile,
)
from mapsync.contracts.sync import CollectionChanges, SyncResult

__all__ = [
    "AuthenticationError",
    "CanonicalMap",
    "Collection",
    "CollectionChanges",
    "CollectionField",
    "CollectionItem",
    "CollectionProvider",
    "ConfigError",
    "DerivedMapInfo",
    "ImageRef",
    "MapCDNInfo",
    "MapInfo",
    "MapMetadata",
    "MapSyncError",
    "MapTag",
    "MapTerrain",
    "ProviderError",
    "RemoteEntry",
    "SourceData",
    "SourceDataError",
    "StorageLocation",
    "SyncConfig",
    "SyncError",
    "SyncResult",
    "UploadedFile",
    "VocabularyItem",
]
