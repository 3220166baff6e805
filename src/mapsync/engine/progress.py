"""Progress reporting protocol for the sync pipeline.

The engine emits phase lifecycle events; consumers (e.g. the CLI's Rich
progress display) implement ``SyncProgress`` to render feedback.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

PHASE_DISCOVER = "Discover"
PHASE_TAGS = "Tags"
PHASE_TERRAINS = "Terrains"
PHASE_MAPS = "Maps"
PHASE_PUBLISH = "Publish"
PHASE_CLEANUP = "Cleanup"


class SyncProgress(ABC):
    """Observer interface for sync pipeline progress events."""

    @abstractmethod
    def phase_start(self, phase: str, total: int | None = None) -> None:
        """A sync phase is starting. *total* is ``None`` for indeterminate phases."""
        ...  # pragma: no cover

    @abstractmethod
    def item_done(self, phase: str) -> None:
        """One item within *phase* has completed."""
        ...  # pragma: no cover

    @abstractmethod
    def phase_done(self, phase: str) -> None:
        ...  # pragma: no cover

    @abstractmethod
    def phase_error(self, phase: str, error: BaseException) -> None:
        """The *phase* was interrupted by *error*."""
        ...  # pragma: no cover


class NullSyncProgress(SyncProgress):
    """No-op implementation used when no progress display is requested."""

    def phase_start(self, phase: str, total: int | None = None) -> None:
        pass

    def item_done(self, phase: str) -> None:
        pass

    def phase_done(self, phase: str) -> None:
        pass

    def phase_error(self, phase: str, error: BaseException) -> None:
        pass
