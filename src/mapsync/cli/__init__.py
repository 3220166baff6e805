"""Command-line interface for mapsync."""

from __future__ import annotations

import asyncio as asyncio

from mapsync import MapSync as MapSync
from mapsync import load_config as load_config
from mapsync.cli.app import main as main
from mapsync.cli.commands import dump as dump_command
from mapsync.cli.commands import sync as sync_command
from mapsync.cli.parser import build_parser as build_parser

_format_summary = sync_command.format_sync_summary
_run_sync = sync_command.run_sync
_run_dump = dump_command.run_dump

__all__ = ["build_parser", "main"]
