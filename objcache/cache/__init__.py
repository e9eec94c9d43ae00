"""
objcache - Cache Module

Persistent backend layer behind the object cache.

- factory.py: Single source of truth for backend creation
- interface.py: Abstract interface all backends implement
- backends/: memory, file, redis and null implementations

Usage:
    from objcache.cache import get_backend

    backend = get_backend()
    await backend.set("key", "value", ttl=3600)
    value = await backend.get("key")
"""

from .factory import (
    close_all_backends,
    create_backend,
    get_backend,
    list_backend_instances,
    reset_backend_factory,
)
from .interface import CacheInterface

__all__ = [
    "create_backend",
    "get_backend",
    "close_all_backends",
    "list_backend_instances",
    "reset_backend_factory",
    "CacheInterface",
]
