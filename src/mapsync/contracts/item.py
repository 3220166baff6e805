"""Destination (Webflow) item contracts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

R = TypeVar("R")


class ImageRef(BaseModel):
    """Uploaded asset as returned in an image field."""

    file_id: str = Field(alias="fileId")
    url: str
    alt: str | None = None

    model_config = {"populate_by_name": True}


class CollectionItem(BaseModel):
    id: str
    is_draft: bool = Field(default=False, alias="isDraft")
    is_archived: bool = Field(default=False, alias="isArchived")
    last_published: datetime | None = Field(default=None, alias="lastPublished")
    last_updated: datetime | None = Field(default=None, alias="lastUpdated")
    created_on: datetime | None = Field(default=None, alias="createdOn")
    field_data: dict[str, Any] = Field(default_factory=dict, alias="fieldData")

    model_config = {"populate_by_name": True}

    def needs_publish(self) -> bool:
        """True when the item was never published or changed since."""
        if self.last_published is None:
            return True
        if self.last_updated is None:
            return False
        return self.last_published < self.last_updated


class CollectionField(BaseModel):
    id: str | None = None
    slug: str
    type: str | None = None
    validations: dict[str, Any] | None = None


class Collection(BaseModel):
    id: str
    slug: str = ""
    display_name: str = Field(default="", alias="displayName")
    fields: list[CollectionField] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


@dataclass
class RemoteEntry(Generic[R]):
    """A destination item together with its canonical reading."""

    item: CollectionItem
    record: R
