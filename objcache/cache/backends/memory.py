"""
objcache - Memory Cache Backend

In-process cache with LRU eviction and TTL support.
Shared by all request-scoped engines in one process; not shared across processes.
"""

import asyncio
import copy
import logging
import time
from collections import OrderedDict
from typing import Any

from ..interface import CacheInterface

logger = logging.getLogger(__name__)


class MemoryCacheBackend(CacheInterface):
    """
    In-memory cache backend with LRU eviction.

    Features:
    - LRU eviction when max_size is reached
    - Per-key TTL support
    - asyncio lock around every mutation
    - Values are deep-copied on the way in and out, so callers never hold a
      reference into storage
    """

    backend = "memory"

    def __init__(self, max_size: int = 10000):
        """
        Initialize memory cache backend.

        Args:
            max_size: Maximum number of entries (LRU eviction when exceeded)
        """
        self.max_size = max_size

        # key -> (value, expiry_time)
        self._cache: OrderedDict[str, tuple[Any, float | None]] = OrderedDict()

        self._hits = 0
        self._misses = 0
        self._sets = 0
        self._deletes = 0
        self._evictions = 0

        self._lock = asyncio.Lock()

    def _is_expired(self, expiry: float | None) -> bool:
        """Check if entry is expired."""
        if expiry is None:
            return False
        return time.time() > expiry

    async def get(self, key: str) -> Any | None:
        """Retrieve value from cache."""
        if not key:
            logger.warning("Attempted to get cache value with empty key")
            return None

        async with self._lock:
            if key not in self._cache:
                self._misses += 1
                return None

            value, expiry = self._cache[key]

            if self._is_expired(expiry):
                del self._cache[key]
                self._misses += 1
                return None

            self._cache.move_to_end(key)
            self._hits += 1

        try:
            return copy.deepcopy(value)
        except Exception as e:
            logger.error(
                f"Failed to copy value for key '{key}' from memory cache: {e}",
                extra={"key": key, "error": str(e)},
                exc_info=True,
            )
            return None

    async def set(self, key: str, value: Any, ttl: int = 0) -> bool:
        """Store value in cache."""
        if not key:
            logger.warning("Attempted to set cache value with empty key")
            return False

        try:
            stored = copy.deepcopy(value)
        except Exception as e:
            logger.error(
                f"Failed to copy value for key '{key}' into memory cache: {e}",
                extra={"key": key, "value_type": type(value).__name__, "error": str(e)},
                exc_info=True,
            )
            return False

        expiry = time.time() + ttl if ttl and ttl > 0 else None

        async with self._lock:
            # Evict if at capacity and key is new
            if key not in self._cache and len(self._cache) >= self.max_size:
                evicted_key, _ = self._cache.popitem(last=False)
                self._evictions += 1
                logger.debug(f"Evicted key from memory cache: {evicted_key}")

            self._cache[key] = (stored, expiry)
            self._cache.move_to_end(key)
            self._sets += 1

        return True

    async def delete(self, key: str) -> bool:
        """Delete key from cache."""
        if not key:
            logger.warning("Attempted to delete cache value with empty key")
            return False

        async with self._lock:
            if key in self._cache:
                del self._cache[key]
                self._deletes += 1
                return True

            return False

    async def flush(self) -> bool:
        """Clear all entries from cache."""
        async with self._lock:
            size = len(self._cache)
            self._cache.clear()

        logger.info(f"Flushed {size} entries from memory cache")
        return True

    async def get_stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        async with self._lock:
            total_requests = self._hits + self._misses
            hit_rate = (self._hits / total_requests * 100) if total_requests > 0 else 0.0

            return {
                "backend": self.backend,
                "size": len(self._cache),
                "max_size": self.max_size,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 2),
                "sets": self._sets,
                "deletes": self._deletes,
                "evictions": self._evictions,
            }
