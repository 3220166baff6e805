"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version


def _package_version() -> str:
    try:
        return version("maps-webflow-sync")
    except PackageNotFoundError:
        return "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mapsync", description="Sync map metadata to the Webflow CMS.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    sync_parser = subparsers.add_parser("sync", help="Sync maps, tags and terrains to Webflow")
    sync_parser.add_argument(
        "--dry-run",
        "-d",
        action="store_true",
        help="Only compute and print the difference, don't sync",
    )
    sync_parser.add_argument("--map-list", default=None, help="Path to map_list.yaml")
    sync_parser.add_argument("--cdn-maps", default=None, help="Path to the CDN map infos JSON")
    sync_parser.add_argument("--maps-metadata", default=None, help="Path to the per-map metadata JSON")
    sync_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    dump_parser = subparsers.add_parser("dump-data", help="Dump Webflow collection data")
    dump_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


__all__ = ["build_parser"]
