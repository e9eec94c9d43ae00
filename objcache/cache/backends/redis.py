"""
objcache - Redis Cache Backend

Asynchronous Redis cache implementation with:
- Pickle serialization for values (arbitrary Python objects round-trip)
- Per-key TTL support
- Prefix on every stored key so flush() only touches this cache's keys

Requires: redis>=5.0 with asyncio support

Example:
    cache = RedisCacheBackend(url="redis://localhost:6379/0", prefix="objcache")
    await cache.set("objcache_localhost_1_object_ab12", {"msg": "hello"}, ttl=60)
    val = await cache.get("objcache_localhost_1_object_ab12")
"""

from __future__ import annotations

import logging
import pickle
from typing import Any

from .. import serialization
from ..interface import CacheInterface

logger = logging.getLogger(__name__)

try:
    # redis-py asyncio client (v4+)
    from redis.asyncio import Redis
except ImportError as e:  # pragma: no cover
    raise ImportError(
        "Redis async client is required but not installed. "
        "Install with: pip install 'redis>=5.0.0' or add 'redis' to your dependencies."
    ) from e


class RedisCacheBackend(CacheInterface):
    """
    Redis cache backend with pickled values and TTL.

    Notes:
    - Keys are stored as "<prefix>:<key>".
    - TTL is applied via Redis EX seconds (0 -> no expiry).
    - flush() SCANs "<prefix>:*" and deletes in batches, so other data in the
      same Redis database is left alone.
    """

    backend = "redis"

    def __init__(
        self,
        url: str,
        prefix: str = "objcache",
        max_connections: int = 10,
        socket_timeout: int = 5,
    ) -> None:
        """
        Initialize Redis cache backend.

        Args:
            url: Connection URL, e.g., redis://localhost:6379/0 or rediss:// for TLS
            prefix: Prefix for all stored keys
            max_connections: Connection pool size
            socket_timeout: Socket timeout in seconds; bounds every round trip
        """
        if not url:
            raise ValueError("url is required")

        self.prefix = prefix.strip() or "objcache"
        self._hits = 0
        self._misses = 0
        self._sets = 0
        self._deletes = 0

        # Lazy connection; connects on first command
        self._client = Redis.from_url(
            url=url,
            decode_responses=False,
            max_connections=max_connections,
            socket_timeout=socket_timeout,
        )

    def _make_key(self, key: str) -> str:
        """Create prefixed key."""
        return f"{self.prefix}:{key}"

    # ------------ Core Interface ------------

    async def get(self, key: str) -> Any | None:
        """Retrieve a value by key."""
        try:
            data = await self._client.get(self._make_key(key))
            if data is None:
                self._misses += 1
                return None

            value = serialization.loads(data)
        except Exception as e:
            logger.error(
                f"Failed to get key '{key}' from Redis: {e}",
                extra={"key": key, "prefix": self.prefix, "error": str(e)},
                exc_info=True,
            )
            self._misses += 1
            return None

        self._hits += 1
        return value

    async def set(self, key: str, value: Any, ttl: int = 0) -> bool:
        """Store a value with optional TTL."""
        try:
            payload = serialization.dumps(value)
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            logger.error(
                f"Failed to serialize value for key '{key}': {e}",
                extra={"key": key, "value_type": type(value).__name__, "error": str(e)},
                exc_info=True,
            )
            return False

        try:
            ex = ttl if ttl and ttl > 0 else None
            res = await self._client.set(name=self._make_key(key), value=payload, ex=ex)
        except Exception as e:
            logger.error(
                f"Failed to set key '{key}' in Redis: {e}",
                extra={"key": key, "prefix": self.prefix, "ttl": ttl, "error": str(e)},
                exc_info=True,
            )
            return False

        success = bool(res)
        if success:
            self._sets += 1
        return success

    async def delete(self, key: str) -> bool:
        """Delete a single key."""
        try:
            deleted = await self._client.delete(self._make_key(key))
        except Exception as e:
            logger.error(
                f"Failed to delete key '{key}' from Redis: {e}",
                extra={"key": key, "prefix": self.prefix, "error": str(e)},
                exc_info=True,
            )
            return False

        if deleted:
            self._deletes += 1
        return bool(deleted)

    async def flush(self) -> bool:
        """Delete all keys under the prefix using SCAN + DEL batches."""
        try:
            pattern = f"{self.prefix}:*"
            cursor = 0
            total_deleted = 0

            while True:
                cursor, keys = await self._client.scan(cursor=cursor, match=pattern, count=1000)
                if keys:
                    total_deleted += await self._client.delete(*keys)
                if cursor == 0:
                    break
        except Exception as e:
            logger.error(
                f"Failed to flush Redis keys with prefix '{self.prefix}': {e}",
                extra={"prefix": self.prefix, "error": str(e)},
                exc_info=True,
            )
            return False

        self._deletes += total_deleted
        logger.info(f"Flushed {total_deleted} keys with prefix '{self.prefix}'")
        return True

    async def get_stats(self) -> dict[str, Any]:
        """Return cache statistics and basic Redis info."""
        total_requests = self._hits + self._misses
        stats: dict[str, Any] = {
            "backend": self.backend,
            "prefix": self.prefix,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round((self._hits / total_requests) * 100, 2) if total_requests else 0.0,
            "sets": self._sets,
            "deletes": self._deletes,
            "connected": False,
        }

        try:
            stats["connected"] = bool(await self._client.ping())
            info = await self._client.info(section="server")
            stats["redis_version"] = info.get("redis_version")
        except Exception as e:
            # INFO may be restricted; keep minimal stats
            logger.warning(f"Failed to get Redis INFO (restricted or unavailable): {e}", extra={"error": str(e)})

        return stats

    async def close(self) -> None:
        """Close the Redis client and release resources."""
        try:
            await self._client.aclose()
            logger.info(f"Closed Redis cache backend for prefix '{self.prefix}'")
        except Exception as e:
            logger.error(
                f"Error closing Redis client: {e}",
                extra={"prefix": self.prefix, "error": str(e)},
                exc_info=True,
            )
