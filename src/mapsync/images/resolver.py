"""Digest-based image identity and asset reuse."""

from __future__ import annotations

import asyncio

from mapsync.contracts.item import ImageRef
from mapsync.images.hash_cache import ImageHashCache


async def same_image(cache: ImageHashCache, url1: str | None, url2: str | None) -> bool:
    """True when both URLs serve identical bytes (or are both empty)."""
    digest1, digest2 = await asyncio.gather(cache.get_digest(url1), cache.get_digest(url2))
    return digest1 == digest2


async def same_images(cache: ImageHashCache, urls1: list[str], urls2: list[str]) -> bool:
    """True when both lists hold the same multiset of images, in any order."""
    digests1, digests2 = await asyncio.gather(
        asyncio.gather(*(cache.get_digest(url) for url in urls1)),
        asyncio.gather(*(cache.get_digest(url) for url in urls2)),
    )
    if len(urls1) != len(urls2):
        return False
    return sorted(digests1) == sorted(digests2)


async def pick_image(cache: ImageHashCache, url: str, base: ImageRef | None = None) -> str:
    """Value to write into an image field.

    Returns the existing asset ``fileId`` when *base* already holds the same
    image, otherwise *url* so Webflow uploads it.
    """
    if base is not None and await same_image(cache, url, base.url):
        return base.file_id
    return url


async def pick_images(cache: ImageHashCache, urls: list[str], base: list[ImageRef] | None = None) -> list[str]:
    """List counterpart of :func:`pick_image` matched by digest, not position."""

    async def keyed_url(url: str) -> tuple[str, str]:
        return url, await cache.get_digest(url)

    async def keyed_ref(ref: ImageRef) -> tuple[str, str]:
        return await cache.get_digest(ref.url), ref.file_id

    desired, existing = await asyncio.gather(
        asyncio.gather(*(keyed_url(url) for url in urls)),
        asyncio.gather(*(keyed_ref(ref) for ref in base or [])),
    )
    file_id_by_digest = dict(existing)
    return [file_id_by_digest.get(digest) or url for url, digest in desired]
