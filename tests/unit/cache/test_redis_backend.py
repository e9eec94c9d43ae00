"""
objcache - Redis Cache Backend Tests

Requires Redis server running on localhost:6379 (or TEST_REDIS_URL env var).
"""

import asyncio
from collections.abc import AsyncGenerator

import pytest

from objcache.cache.backends.redis import RedisCacheBackend

# Check if Redis is available
try:
    import socket

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.settimeout(1)
    redis_available = sock.connect_ex(("localhost", 6379)) == 0
    sock.close()
except Exception:
    redis_available = False

pytestmark = pytest.mark.skipif(not redis_available, reason="Redis server not available")


class TestRedisCacheBackend:
    """Test suite for RedisCacheBackend."""

    @pytest.fixture
    async def cache(self, test_redis_url: str) -> AsyncGenerator[RedisCacheBackend, None]:
        cache = RedisCacheBackend(url=test_redis_url, prefix="objcache-test", max_connections=5, socket_timeout=2)
        await cache.flush()
        yield cache
        await cache.flush()
        await cache.close()

    async def test_requires_url(self) -> None:
        with pytest.raises(ValueError):
            RedisCacheBackend(url="")

    async def test_set_and_get(self, cache: RedisCacheBackend) -> None:
        assert await cache.set("key1", {"a": [1, 2]}) is True
        assert await cache.get("key1") == {"a": [1, 2]}

    async def test_get_missing(self, cache: RedisCacheBackend) -> None:
        assert await cache.get("missing") is None

    async def test_ttl(self, cache: RedisCacheBackend) -> None:
        await cache.set("short", "value", ttl=1)
        assert await cache.get("short") == "value"

        await asyncio.sleep(1.2)
        assert await cache.get("short") is None

    async def test_delete(self, cache: RedisCacheBackend) -> None:
        await cache.set("key", "value")
        assert await cache.delete("key") is True
        assert await cache.delete("key") is False

    async def test_flush_only_touches_prefix(self, cache: RedisCacheBackend, test_redis_url: str) -> None:
        other = RedisCacheBackend(url=test_redis_url, prefix="other-app")
        try:
            await other.set("keep", "me")
            await cache.set("drop", "me")

            assert await cache.flush() is True
            assert await cache.get("drop") is None
            assert await other.get("keep") == "me"
        finally:
            await other.flush()
            await other.close()

    async def test_stats(self, cache: RedisCacheBackend) -> None:
        stats = await cache.get_stats()
        assert stats["backend"] == "redis"
        assert stats["prefix"] == "objcache-test"
        assert stats["connected"] is True
