"""Shared CLI helpers."""

from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler


def format_comma_or_none(values: list[str]) -> str:
    if not values:
        return "none"
    return ", ".join(values)


def configure_logging(*, verbose: bool, console: Console | None = None) -> None:
    """Debug logging to stderr with ``-v``; otherwise change lines through Rich."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr, force=True)
        return
    handler = RichHandler(console=console or Console(stderr=True), show_time=False, show_path=False)
    logging.basicConfig(level=logging.INFO, format="%(message)s", handlers=[handler], force=True)
    logging.getLogger("httpx").setLevel(logging.WARNING)
