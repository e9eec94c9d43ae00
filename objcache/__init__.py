"""
objcache - Request-Scoped Object Cache

Per-request memoization in front of a pluggable persistent backend
(memory, file, Redis), with tenant-aware key derivation, group policy
and debug diagnostics.
"""

__version__ = "1.0.0"

from .object_cache import ObjectCache, ObjectCacheRuntime, RequestContext

__all__ = ["ObjectCache", "ObjectCacheRuntime", "RequestContext"]
