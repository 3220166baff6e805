"""Config loading from the process environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from mapsync.contracts.config import SyncConfig
from mapsync.contracts.exceptions import ConfigError

COLLECTION_ID_ENV = "WEBFLOW_COLLECTION_ID"
API_TOKEN_ENV = "WEBFLOW_API_TOKEN"
CACHE_DIR_ENV = "MAPS_CACHE_DIR"


def _require_env(environ: Mapping[str, str], name: str) -> str:
    value = (environ.get(name) or "").strip()
    if not value:
        raise ConfigError(f"{name} is not set or empty")
    return value


def load_config(environ: Mapping[str, str] | None = None, **overrides: Any) -> SyncConfig:
    """Build a :class:`SyncConfig` from environment variables.

    ``overrides`` carry CLI-provided settings (data file paths etc.); ``None``
    values are ignored so argparse defaults do not mask model defaults.

    Raises:
        ConfigError: If a required variable is missing or a value is invalid.
    """
    env = os.environ if environ is None else environ
    payload: dict[str, Any] = {
        "collection_id": _require_env(env, COLLECTION_ID_ENV),
        "api_token": _require_env(env, API_TOKEN_ENV),
    }
    cache_dir = (env.get(CACHE_DIR_ENV) or "").strip()
    if cache_dir:
        payload["cache_dir"] = Path(cache_dir)
    payload.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return SyncConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc
