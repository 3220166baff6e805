"""Document database export into the YAML map list."""

from mapsync.export.documents import (
    ALL_ROWS,
    DocumentCollection,
    DocumentSnapshot,
    export_map_list,
    fetch_documents,
    update_map_list,
    write_map_list,
)

__all__ = [
    "ALL_ROWS",
    "DocumentCollection",
    "DocumentSnapshot",
    "export_map_list",
    "fetch_documents",
    "update_map_list",
    "write_map_list",
]
