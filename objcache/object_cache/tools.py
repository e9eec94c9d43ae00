"""
objcache - Object Cache Tools

Tool functions exposed by the server. Each call is one request: it gets a
fresh ObjectCache over the process runtime, so the memo table never outlives
the call while the backend is shared by all calls.
"""

import logging
from typing import Any

from ..validation import (
    ObjectCacheDeleteInput,
    ObjectCacheFlushInput,
    ObjectCacheGetInput,
    ObjectCacheSetInput,
    ObjectCacheStatusInput,
    validate_input,
)
from .context import RequestContext
from .engine import ObjectCache
from .runtime import ObjectCacheRuntime

logger = logging.getLogger(__name__)

_runtime: ObjectCacheRuntime | None = None


def get_runtime() -> ObjectCacheRuntime:
    """Process runtime, built from the global configuration on first use."""
    global _runtime

    if _runtime is None:
        _runtime = ObjectCacheRuntime()
        logger.info(
            f"Object cache runtime created (engine: {_runtime.engine_name})",
            extra={"engine": _runtime.config.engine.value, "enabled": _runtime.config.enabled},
        )

    return _runtime


def set_runtime(runtime: ObjectCacheRuntime | None) -> None:
    """Install (or clear, with None) the process runtime."""
    global _runtime
    _runtime = runtime


def _request(tenant_id: int | None = None) -> ObjectCache:
    return get_runtime().new_request(RequestContext(tenant_id=tenant_id))


@validate_input(ObjectCacheGetInput)
async def objcache_get(id: str, group: str = "default", tenant_id: int | None = None) -> dict[str, Any]:
    """
    Read an item from the object cache.

    Returns:
        found flag, value (None when not found) and the request report
    """
    cache = _request(tenant_id)
    value = await cache.get(id, group)
    found = value is not False

    return {
        "success": True,
        "found": found,
        "value": value if found else None,
        "report": cache.report(),
    }


@validate_input(ObjectCacheSetInput)
async def objcache_set(
    id: str,
    value: Any,
    group: str = "default",
    tenant_id: int | None = None,
    expire: int = 0,
) -> dict[str, Any]:
    """Store an item."""
    cache = _request(tenant_id)
    return {"success": await cache.set(id, value, group, expire)}


@validate_input(ObjectCacheSetInput)
async def objcache_add(
    id: str,
    value: Any,
    group: str = "default",
    tenant_id: int | None = None,
    expire: int = 0,
) -> dict[str, Any]:
    """Store an item only if it is not already cached."""
    cache = _request(tenant_id)
    return {"success": await cache.add(id, value, group, expire)}


@validate_input(ObjectCacheSetInput)
async def objcache_replace(
    id: str,
    value: Any,
    group: str = "default",
    tenant_id: int | None = None,
    expire: int = 0,
) -> dict[str, Any]:
    """Store an item only if it is already cached."""
    cache = _request(tenant_id)
    return {"success": await cache.replace(id, value, group, expire)}


@validate_input(ObjectCacheDeleteInput)
async def objcache_delete(
    id: str,
    group: str = "default",
    tenant_id: int | None = None,
    force: bool = False,
) -> dict[str, Any]:
    """Delete an item."""
    cache = _request(tenant_id)
    return {"success": await cache.delete(id, group, force)}


@validate_input(ObjectCacheFlushInput)
async def objcache_flush() -> dict[str, Any]:
    """Flush the whole object cache, every tenant and group."""
    cache = _request()
    success = await cache.flush()
    logger.info(f"Object cache flush requested (success: {success})")
    return {"success": success}


@validate_input(ObjectCacheStatusInput)
async def objcache_status(include_backend_stats: bool = True) -> dict[str, Any]:
    """
    Report engine, admission state and group policy.

    Returns:
        Status dict; includes backend statistics when requested
    """
    runtime = get_runtime()
    cache = runtime.new_request()

    status: dict[str, Any] = {
        "success": True,
        "engine": runtime.engine_name,
        "caching": cache.caching,
        "reject_reason": cache.reject_reason or None,
        "debug": cache.debug,
        "lifetime": cache.lifetime,
        "global_groups": runtime.groups.global_groups,
        "nonpersistent_groups": runtime.groups.nonpersistent_groups,
    }

    if include_backend_stats:
        backend = await runtime.get_backend()
        status["backend"] = await backend.get_stats()

    return status
