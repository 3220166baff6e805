"""Exception hierarchy for mapsync.

All mapsync exceptions inherit from :class:`MapSyncError`, so callers can catch
any library error with a single ``except`` clause while still handling the
specific failure modes separately.
"""

from __future__ import annotations

from typing import Any


class MapSyncError(Exception):
    """Base exception for all mapsync errors."""


class ConfigError(MapSyncError):
    """Configuration loading or validation failure."""


class SourceDataError(MapSyncError):
    """Source-of-truth data is missing, unreadable or incomplete."""


class ProviderError(MapSyncError):
    """Destination API call failed.

    Attributes:
        status_code: HTTP status of the failed response, if any.
        body: Structured error body returned by the remote system, if any.
    """

    def __init__(self, message: str, *, status_code: int | None = None, body: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class AuthenticationError(ProviderError):
    """Destination rejected the access credential."""


class SyncError(MapSyncError):
    """Engine-level synchronization failure."""
