"""Tests for the mapsync exception hierarchy and item contracts."""

from __future__ import annotations

from datetime import datetime

import pytest

from mapsync.contracts.exceptions import (
    AuthenticationError,
    ConfigError,
    MapSyncError,
    ProviderError,
    SourceDataError,
    SyncError,
)
from mapsync.contracts.item import CollectionItem
from mapsync.contracts.sync import CollectionChanges, SyncResult


class TestExceptionHierarchy:
    """Tests for exception inheritance."""

    @pytest.mark.parametrize("error_type", [ConfigError, SourceDataError, ProviderError, AuthenticationError, SyncError])
    def test_all_exceptions_inherit_from_map_sync_error(self, error_type: type[Exception]) -> None:
        assert issubclass(error_type, MapSyncError)

    def test_authentication_error_is_a_provider_error(self) -> None:
        assert issubclass(AuthenticationError, ProviderError)

    def test_provider_error_carries_status_and_body(self) -> None:
        exc = ProviderError("failed", status_code=409, body={"code": "conflict"})

        assert str(exc) == "failed"
        assert exc.status_code == 409
        assert exc.body == {"code": "conflict"}

    def test_provider_error_defaults(self) -> None:
        exc = ProviderError("failed")

        assert exc.status_code is None
        assert exc.body is None


class TestPublishSelection:
    def test_never_published_item_needs_publish(self) -> None:
        assert CollectionItem(id="1", last_updated=datetime(2024, 1, 2)).needs_publish()

    def test_item_changed_since_publish_needs_publish(self) -> None:
        item = CollectionItem(id="1", last_published=datetime(2024, 1, 1), last_updated=datetime(2024, 1, 2))

        assert item.needs_publish()

    @pytest.mark.parametrize("published", [datetime(2024, 1, 2), datetime(2024, 1, 3)])
    def test_up_to_date_item_does_not_need_publish(self, published: datetime) -> None:
        item = CollectionItem(id="1", last_published=published, last_updated=datetime(2024, 1, 2))

        assert not item.needs_publish()

    def test_item_parses_webflow_aliases(self) -> None:
        item = CollectionItem.model_validate(
            {
                "id": "abc",
                "lastPublished": "2024-01-01T00:00:00Z",
                "lastUpdated": "2024-01-02T00:00:00Z",
                "fieldData": {"name": "Comet"},
            }
        )

        assert item.needs_publish()
        assert item.field_data == {"name": "Comet"}


class TestSyncResult:
    def test_empty_result_has_no_changes(self) -> None:
        assert not SyncResult().has_changes

    def test_publishing_alone_is_not_a_change(self) -> None:
        assert not SyncResult(maps=CollectionChanges(published=3)).has_changes

    def test_any_collection_change_counts(self) -> None:
        assert SyncResult(terrains=CollectionChanges(removed=["lava"])).has_changes
