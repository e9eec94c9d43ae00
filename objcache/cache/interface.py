"""
objcache - Cache Interface

Defines the abstract interface that all persistent cache backends must implement.

Backends are shared by every request-scoped ObjectCache in the process, so
implementations must be safe under concurrent calls. Faults are never raised
to the caller: reads report absent (None), writes report False.
"""

from abc import ABC, abstractmethod
from typing import Any


class CacheInterface(ABC):
    """
    Abstract base class for persistent cache backends.

    All cache implementations must implement this interface to ensure
    consistent behavior across different backends (memory, file, Redis, none).
    """

    backend: str = "abstract"

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """
        Retrieve a value from the cache.

        Args:
            key: Cache key

        Returns:
            An independent copy of the cached value if found and not expired,
            None otherwise
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int = 0) -> bool:
        """
        Store a value in the cache.

        Args:
            key: Cache key
            value: Value to cache (must be picklable for out-of-process backends)
            ttl: Time-to-live in seconds (0 = no expiry)

        Returns:
            True if stored successfully, False otherwise
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete a key from the cache.

        Returns:
            True if key was deleted, False if key didn't exist or the call failed
        """
        pass

    @abstractmethod
    async def flush(self) -> bool:
        """
        Remove every entry from the store, for all tenants and groups.

        Returns:
            True if the store was flushed successfully
        """
        pass

    @abstractmethod
    async def get_stats(self) -> dict[str, Any]:
        """
        Get backend statistics.

        Returns:
            Dictionary with backend statistics (hits, misses, size, etc.)
        """
        pass

    async def close(self) -> None:
        """
        Close the backend and release resources.

        Should be called during graceful shutdown.
        """
        return None
