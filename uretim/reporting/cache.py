"""In-memory report cache with structured namespaces.

Each namespace (``production``, ``daily``, ``total_produced``) owns its own
TTLCache keyed by tuples, so invalidating one kind of report is a single
namespace lookup instead of a scan over string keys.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from threading import Lock
from typing import Any, Optional

from cachetools import TTLCache

logger = logging.getLogger(__name__)

_MISSING = object()


class ReportCache:
    """Namespaced TTL cache for composed reports."""

    def __init__(self, max_size: int = 500, ttl_seconds: int = 600):
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self._namespaces: dict[str, TTLCache] = {}
        self._lock = Lock()
        self._hits = 0
        self._misses = 0

    def _namespace(self, namespace: str) -> TTLCache:
        cache = self._namespaces.get(namespace)
        if cache is None:
            cache = self._namespaces[namespace] = TTLCache(
                maxsize=self.max_size, ttl=self.ttl_seconds
            )
        return cache

    def get(self, namespace: str, key: Hashable) -> Optional[Any]:
        with self._lock:
            value = self._namespace(namespace).get(key, _MISSING)
            if value is _MISSING:
                self._misses += 1
                return None
            self._hits += 1
            logger.debug("Report cache hit %s:%s", namespace, key)
            return value

    def set(self, namespace: str, key: Hashable, value: Any) -> None:
        with self._lock:
            self._namespace(namespace)[key] = value

    def invalidate(self, namespace: str) -> int:
        """Drop every entry of one namespace; returns the number removed."""
        with self._lock:
            cache = self._namespaces.pop(namespace, None)
            count = len(cache) if cache is not None else 0
        if count:
            logger.info("Invalidated %d entries from report cache namespace %s", count, namespace)
        return count

    def clear(self) -> int:
        with self._lock:
            count = sum(len(cache) for cache in self._namespaces.values())
            self._namespaces.clear()
        logger.info("Cleared %d entries from report cache", count)
        return count

    def stats(self) -> dict:
        with self._lock:
            total = self._hits + self._misses
            return {
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": self._hits / total if total > 0 else 0.0,
                "max_size": self.max_size,
                "ttl_seconds": self.ttl_seconds,
                "namespaces": {name: len(cache) for name, cache in self._namespaces.items()},
            }
