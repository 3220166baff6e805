"""Schema-driven export of the document database into the YAML map list.

The map list schema marks tables with ``collection: true``. Every property
of a table row that is itself a table is fetched from the matching
sub-collection of the row's document; all other properties are copied from
the document data. The document store is reached through the
:class:`DocumentCollection` interface only.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import yaml

from mapsync.contracts.exceptions import SourceDataError
from mapsync.sources.schema import MAP_LIST_SCHEMA, load_schema

logger = logging.getLogger(__name__)

ALL_ROWS = "all"
MAX_CONCURRENT_FETCHES = 20


class DocumentSnapshot(ABC):
    """One stored document."""

    @property
    @abstractmethod
    def id(self) -> str: ...

    @property
    @abstractmethod
    def data(self) -> dict[str, Any] | None:
        """Document fields, or ``None`` for a document without data."""
        ...  # pragma: no cover

    @abstractmethod
    def collection(self, name: str) -> DocumentCollection: ...


class DocumentCollection(ABC):
    @abstractmethod
    async def list_documents(self) -> list[DocumentSnapshot]: ...


def is_table_schema(schema: Any) -> bool:
    return isinstance(schema, dict) and schema.get("type") == "object" and schema.get("collection") is True


def table_properties(root_schema: dict[str, Any], schema: dict[str, Any]) -> dict[str, Any]:
    """Row properties of a table schema, following a local ``$ref``.

    Raises:
        SourceDataError: For references outside the root schema.
    """
    row_schema = schema.get("additionalProperties") or {}
    ref = row_schema.get("$ref")
    if ref is not None:
        if not ref.startswith("#/"):
            raise SourceDataError(f"Only local schema references are supported, got {ref}")
        row_schema = root_schema
        for segment in ref.split("/")[1:]:
            row_schema = row_schema[segment]
    properties: dict[str, Any] = row_schema.get("properties", {})
    return properties


class _Fetcher:
    def __init__(self, root_schema: dict[str, Any], max_concurrent: int) -> None:
        self._root_schema = root_schema
        self._semaphore = asyncio.Semaphore(max_concurrent)

    async def fetch(self, collection: DocumentCollection, schema: dict[str, Any]) -> dict[str, Any] | None:
        async with self._semaphore:
            documents = await collection.list_documents()
        if not documents:
            return None

        properties = table_properties(self._root_schema, schema)
        tables = {key: prop for key, prop in properties.items() if is_table_schema(prop)}
        rows: dict[str, Any] = {}
        pending: list[tuple[str, str, asyncio.Future[dict[str, Any] | None]]] = []
        for document in documents:
            entry = document.data
            if entry is None:
                continue
            rows[document.id] = {key: entry[key] for key in properties if key not in tables and key in entry}
            for key, table in tables.items():
                future = asyncio.ensure_future(self.fetch(document.collection(key), table))
                pending.append((document.id, key, future))

        results = await asyncio.gather(*(future for _, _, future in pending))
        for (row_id, key, _), value in zip(pending, results, strict=True):
            if value is not None:
                rows[row_id][key] = value
        return rows


async def fetch_documents(
    collection: DocumentCollection,
    schema: dict[str, Any] | None = None,
    *,
    max_concurrent: int = MAX_CONCURRENT_FETCHES,
) -> dict[str, Any] | None:
    """Fetch a table and its nested tables; ``None`` when the table is empty.

    Defaults to the packaged map list schema.
    """
    root_schema = schema if schema is not None else load_schema(MAP_LIST_SCHEMA)
    if not is_table_schema(root_schema):
        raise SourceDataError("Map schema is not a table schema")
    return await _Fetcher(root_schema, max_concurrent).fetch(collection, root_schema)


def write_map_list(path: Path, data: dict[str, Any]) -> None:
    path.write_text(
        yaml.safe_dump(data, sort_keys=True, width=120, allow_unicode=True, default_flow_style=False),
        encoding="utf-8",
    )


def update_map_list(path: Path, fetched: dict[str, Any] | None, row_id: str) -> None:
    """Write every fetched row (``row_id == "all"``) or merge a single one.

    Raises:
        SourceDataError: If the requested row was not fetched.
    """
    if row_id == ALL_ROWS:
        write_map_list(path, fetched or {})
        logger.info("Wrote %d rows to %s", len(fetched or {}), path)
        return

    if not fetched or row_id not in fetched:
        raise SourceDataError(f"Document {row_id} not found")
    try:
        current = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise SourceDataError(f"failed reading {path}: {exc}") from exc
    current[row_id] = fetched[row_id]
    write_map_list(path, current)
    logger.info("Updated row %s in %s", row_id, path)


async def export_map_list(collection: DocumentCollection, path: Path, row_id: str = ALL_ROWS) -> None:
    update_map_list(path, await fetch_documents(collection), row_id)
