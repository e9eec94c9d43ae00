"""
objcache - Object Cache

Request-scoped object cache over a shared persistent backend.
"""

from .context import RequestContext, StaticTenantResolver, TenantResolver
from .diagnostics import CacheCounters, DebugRecord, DiagnosticsReporter
from .engine import ObjectCache
from .groups import GroupPolicy
from .keys import KeyDeriver, KeyFilters
from .runtime import ObjectCacheRuntime

__all__ = [
    "ObjectCache",
    "ObjectCacheRuntime",
    "RequestContext",
    "TenantResolver",
    "StaticTenantResolver",
    "GroupPolicy",
    "KeyDeriver",
    "KeyFilters",
    "DiagnosticsReporter",
    "DebugRecord",
    "CacheCounters",
]
