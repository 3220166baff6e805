"""Content-addressed cache from image URL to SHA-256 digest.

Knowing the digest of every image URL lets the sync compare freshly built
image URLs with assets already uploaded to Webflow without downloading both
on every run. The cache is persisted as a single JSON file::

    {"version": 1, "entries": [[url, digest], ...]}

A version mismatch discards the whole file. Persistence is best-effort: read
and write failures are logged and never abort the run.
"""

from __future__ import annotations

import asyncio
import hashlib
import json
import logging
from pathlib import Path
from types import TracebackType

import httpx

from mapsync.contracts.exceptions import SyncError

logger = logging.getLogger(__name__)

CACHE_VERSION = 1


class ImageHashCache:
    """Process-wide URL to digest memo backed by a JSON file.

    Use as an async context manager so the cache is flushed when the run ends::

        async with ImageHashCache(path) as cache:
            digest = await cache.get_digest(url)
    """

    def __init__(
        self,
        cache_path: Path,
        *,
        client: httpx.AsyncClient | None = None,
        max_concurrent: int = 20,
        flush_every: int = 30,
    ) -> None:
        self._cache_path = cache_path
        self._client = client
        self._owns_client = client is None
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._flush_every = flush_every
        self._new_digests = 0
        self._entries: dict[str, str] = {}
        self.load()

    async def __aenter__(self) -> ImageHashCache:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        self.save()
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, url: object) -> bool:
        return url in self._entries

    def load(self) -> None:
        try:
            payload = json.loads(self._cache_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.debug("No image hash cache at %s", self._cache_path)
            return
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Failed to read image hash cache %s: %s", self._cache_path, exc)
            return

        if not isinstance(payload, dict) or payload.get("version") != CACHE_VERSION:
            logger.info("Image hash cache %s has a different version, starting empty", self._cache_path)
            return
        try:
            self._entries = {str(url): str(digest) for url, digest in payload.get("entries", [])}
        except (TypeError, ValueError) as exc:
            logger.warning("Malformed image hash cache %s: %s", self._cache_path, exc)
            self._entries = {}

    def save(self) -> None:
        payload = {"version": CACHE_VERSION, "entries": [[url, digest] for url, digest in self._entries.items()]}
        try:
            self._cache_path.parent.mkdir(parents=True, exist_ok=True)
            self._cache_path.write_text(json.dumps(payload), encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to write image hash cache %s: %s", self._cache_path, exc)

    async def get_digest(self, url: str | None) -> str:
        """Return the hex digest of the bytes behind *url*.

        ``None`` and the empty string map to the empty digest.
        """
        if not url:
            return ""
        cached = self._entries.get(url)
        if cached is not None:
            return cached

        async with self._semaphore:
            digest = await self._download_digest(url)
        logger.debug("Hashed %s to %s", url, digest)
        self._entries[url] = digest

        self._new_digests += 1
        if self._new_digests >= self._flush_every:
            self.save()
            self._new_digests = 0
        return digest

    async def _download_digest(self, url: str) -> str:
        if self._client is None:
            self._client = httpx.AsyncClient(follow_redirects=True, timeout=httpx.Timeout(60.0))
        digest = hashlib.sha256()
        try:
            async with self._client.stream("GET", url) as response:
                response.raise_for_status()
                async for chunk in response.aiter_bytes():
                    digest.update(chunk)
        except httpx.HTTPError as exc:
            raise SyncError(f"failed to fetch image {url}: {exc}") from exc
        return digest.hexdigest()
