"""Sync command."""

from __future__ import annotations

import argparse

from mapsync.cli.common import configure_logging, format_comma_or_none
from mapsync.cli.progress.rich import RichSyncProgress
from mapsync.contracts.sync import CollectionChanges, SyncResult


def _format_changes(label: str, changes: CollectionChanges) -> list[str]:
    return [
        f"  {label}:",
        f"    Added:     {format_comma_or_none(changes.added)}",
        f"    Updated:   {format_comma_or_none(changes.updated)}",
        f"    Removed:   {format_comma_or_none(changes.removed)}",
        f"    Published: {changes.published}",
    ]


def format_sync_summary(result: SyncResult) -> str:
    mode = "dry-run" if result.dry_run else "apply"
    lines = ["", f"mapsync - sync complete ({mode})", ""]
    lines.extend(_format_changes("Tags", result.tags))
    lines.extend(_format_changes("Terrains", result.terrains))
    lines.extend(_format_changes("Maps", result.maps))
    if not result.has_changes:
        lines.append("")
        lines.append("  Status:    all items up to date")

    if result.dry_run:
        lines.append("")
        lines.append("  [dry-run] No changes were made")

    lines.append("")
    return "\n".join(lines)


async def run_sync(args: argparse.Namespace) -> SyncResult:
    import mapsync.cli as cli

    config = cli.load_config(
        map_list_path=args.map_list,
        cdn_maps_path=args.cdn_maps,
        maps_metadata_path=args.maps_metadata,
    )
    if not args.verbose:
        with RichSyncProgress() as progress:
            configure_logging(verbose=False, console=progress.console)
            result = await cli.MapSync(config=config, progress=progress).sync(dry_run=args.dry_run)
    else:
        configure_logging(verbose=True)
        result = await cli.MapSync(config=config).sync(dry_run=args.dry_run)

    print(format_sync_summary(result))
    return result


__all__ = ["format_sync_summary", "run_sync"]
