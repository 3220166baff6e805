"""Image digest cache and asset reuse helpers."""

from mapsync.images.hash_cache import CACHE_VERSION, ImageHashCache
from mapsync.images.resolver import pick_image, pick_images, same_image, same_images

__all__ = ["CACHE_VERSION", "ImageHashCache", "pick_image", "pick_images", "same_image", "same_images"]
