"""
objcache - Null Cache Backend

Backend for engine "none", and the stand-in used when the configured engine
cannot be constructed. Every read is a miss and every write reports False.
"""

import logging
from typing import Any

from ..interface import CacheInterface

logger = logging.getLogger(__name__)


class NullCacheBackend(CacheInterface):
    """Backend that stores nothing."""

    backend = "none"

    def __init__(self, reason: str | None = None):
        # Why this backend is in use, when it replaced a failed engine
        self.reason = reason

    async def get(self, key: str) -> Any | None:
        return None

    async def set(self, key: str, value: Any, ttl: int = 0) -> bool:
        return False

    async def delete(self, key: str) -> bool:
        return False

    async def flush(self) -> bool:
        return False

    async def get_stats(self) -> dict[str, Any]:
        stats: dict[str, Any] = {"backend": self.backend, "size": 0}
        if self.reason:
            stats["degraded_reason"] = self.reason
        return stats
