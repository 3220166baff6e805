"""Reconciliation engine."""

from mapsync.engine.engine import MapSyncEngine
from mapsync.engine.equality import records_equal, vocabulary_equal
from mapsync.engine.progress import NullSyncProgress, SyncProgress
from mapsync.engine.reconciler import CollectionReconciler, ItemAdapter
from mapsync.engine.refs import resolve_references

__all__ = [
    "CollectionReconciler",
    "ItemAdapter",
    "MapSyncEngine",
    "NullSyncProgress",
    "SyncProgress",
    "records_equal",
    "resolve_references",
    "vocabulary_equal",
]
