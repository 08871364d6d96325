"""
Namespaced cache on top of Django's cache framework.

Each namespace ("rooms", "bookings", ...) has its own TTL. A namespace can
be dropped as a whole by bumping its version counter, which works the same
on LocMemCache, Redis and DummyCache.
"""

import logging
from functools import lru_cache
from typing import Any, Callable, Dict, Optional

from django.conf import settings
from django.core.cache import cache as default_cache

logger = logging.getLogger(__name__)

ROOMS_CACHE = "rooms"
BOOKINGS_CACHE = "bookings"
AMENITY_TYPES_CACHE = "amenityTypes"
SERVICE_TYPES_CACHE = "serviceTypes"
ROOM_AMENITIES_CACHE = "roomAmenities"
ROOM_SERVICES_CACHE = "roomServices"


class NamespacedCache:
    def __init__(
            self,
            backend,
            ttls: Optional[Dict[str, int]] = None,
            prefix: str = "booking-hotel",
            default_ttl: int = 60 * 60,
    ) -> None:
        self.backend = backend
        self.ttls = dict(ttls or {})
        self.prefix = prefix
        self.default_ttl = default_ttl

    def ttl(self, namespace: str) -> int:
        return self.ttls.get(namespace, self.default_ttl)

    def _version_key(self, namespace: str) -> str:
        return f"{self.prefix}:{namespace}:version"

    def _version(self, namespace: str) -> int:
        version_key = self._version_key(namespace)
        version = self.backend.get(version_key)
        if version is None:
            self.backend.add(version_key, 1, timeout=None)
            version = self.backend.get(version_key) or 1
        return version

    def _key(self, namespace: str, key) -> str:
        return f"{self.prefix}:{namespace}:v{self._version(namespace)}:{key}"

    def get(self, namespace: str, key, default=None):
        value = self.backend.get(self._key(namespace, key))
        if value is None:
            return default
        logger.debug("Cache hit - Cache: %s, Key: %s", namespace, key)
        return value

    def put(self, namespace: str, key, value) -> None:
        if value is None:
            return
        self.backend.set(self._key(namespace, key), value, timeout=self.ttl(namespace))

    def evict(self, namespace: str, key) -> None:
        self.backend.delete(self._key(namespace, key))
        logger.debug("Cache entry evicted - Cache: %s, Key: %s", namespace, key)

    def clear(self, namespace: str) -> None:
        version_key = self._version_key(namespace)
        try:
            self.backend.incr(version_key)
        except ValueError:
            self.backend.set(version_key, 2, timeout=None)
        logger.debug("Cache '%s' cleared", namespace)

    def get_or_set(self, namespace: str, key, factory: Callable[[], Any]):
        value = self.get(namespace, key)
        if value is None:
            value = factory()
            self.put(namespace, key, value)
        return value


@lru_cache(maxsize=1)
def get_cache() -> NamespacedCache:
    """Process-wide cache built from settings on first use."""
    namespaced = NamespacedCache(
        backend=default_cache,
        ttls=getattr(settings, "CACHE_TTLS", {}),
        prefix=getattr(settings, "CACHE_KEY_PREFIX", "booking-hotel"),
        default_ttl=getattr(settings, "CACHE_DEFAULT_TTL", 60 * 60),
    )
    logger.info(
        "Cache configured with %d namespaces", len(namespaced.ttls)
    )
    return namespaced
