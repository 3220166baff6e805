"""Slug derivation for vocabulary and map items."""

from __future__ import annotations

import re

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """Return the lowercase, hyphen-separated natural key for *name*.

    Runs of characters outside ``[a-z0-9]`` collapse to a single ``-`` and
    leading/trailing separators are stripped, so ``slugify`` is idempotent.
    """
    return _NON_ALNUM_RUN.sub("-", name.lower()).strip("-")
