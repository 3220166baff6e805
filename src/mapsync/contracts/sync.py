"""Sync result contracts."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CollectionChanges(BaseModel):
    added: list[str] = Field(default_factory=list)
    updated: list[str] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)
    published: int = 0

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.updated or self.removed)


class SyncResult(BaseModel):
    maps: CollectionChanges = Field(default_factory=CollectionChanges)
    tags: CollectionChanges = Field(default_factory=CollectionChanges)
    terrains: CollectionChanges = Field(default_factory=CollectionChanges)
    dry_run: bool = False

    @property
    def has_changes(self) -> bool:
        return self.maps.has_changes or self.tags.has_changes or self.terrains.has_changes
