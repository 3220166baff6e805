"""Dump-data command."""

from __future__ import annotations

import argparse
from typing import Any

from rich.console import Console
from rich.pretty import Pretty

from mapsync.cli.common import configure_logging
from mapsync.contracts.item import RemoteEntry


def _plain(entries: dict[str, RemoteEntry[Any]]) -> dict[str, Any]:
    return {
        key: {"item": entry.item.model_dump(mode="json", by_alias=True), "record": entry.record.model_dump(mode="json")}
        for key, entry in entries.items()
    }


async def run_dump(args: argparse.Namespace, console: Console | None = None) -> None:
    import mapsync.cli as cli

    configure_logging(verbose=args.verbose)
    config = cli.load_config()
    collections = await cli.MapSync(config=config).dump()

    out = console or Console()
    for name, entries in collections.items():
        out.rule(f"{name} ({len(entries)})")
        out.print(Pretty(_plain(entries), expand_all=True))


__all__ = ["run_dump"]
