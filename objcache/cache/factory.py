"""
objcache - Backend Factory

Canonical factory for creating persistent backends from configuration.
This is the ONLY way the runtime obtains a backend.

Key points:
- One backend per name per process, built on first use and then reused
- Engine selected from the typed CacheEngine enum; each engine reads only its
  own settings block
- create_backend() raises ConfigurationError; get_backend() never does and
  falls back to NullCacheBackend so a broken store only turns caching off

Examples:
    from objcache.cache.factory import get_backend

    backend = get_backend()                 # global config
    backend = get_backend(cfg.object_cache) # explicit config (e.g., tests)
"""

from __future__ import annotations

import logging

from ..config import CacheEngine, ObjectCacheConfig, get_config
from ..errors import ConfigurationError
from .backends.file import FileCacheBackend
from .backends.memory import MemoryCacheBackend
from .backends.null import NullCacheBackend
from .interface import CacheInterface

logger = logging.getLogger(__name__)

DEFAULT_BACKEND_NAME = "objectcache"

# Process-wide backend registry
_backend_instances: dict[str, CacheInterface] = {}


def _create_memory_backend(config: ObjectCacheConfig) -> CacheInterface:
    return MemoryCacheBackend(max_size=config.memory.max_size)


def _create_file_backend(config: ObjectCacheConfig) -> CacheInterface:
    return FileCacheBackend(
        cache_dir=config.file.cache_dir,
        locking=config.file.locking,
        flush_timelimit=config.file.flush_timelimit,
    )


def _create_redis_backend(config: ObjectCacheConfig) -> CacheInterface:
    """Construct a redis backend with lazy import."""
    if not config.redis.url:
        raise ConfigurationError(
            "REDIS_URL must be set when engine is redis",
            details={"env": "REDIS_URL", "engine": "redis"},
        )

    # Lazy import to avoid hard dependency when other engines are used
    try:
        from .backends.redis import RedisCacheBackend
    except ImportError as e:
        logger.error(
            "Redis engine selected but redis client is not installed",
            extra={"package": "redis>=5.0.0", "error": str(e)},
        )
        raise ConfigurationError(
            "Redis engine selected but redis client is unavailable. Install with: pip install 'redis>=5.0.0'",
            details={"package": "redis>=5.0.0", "error": str(e), "engine": "redis"},
        ) from e

    return RedisCacheBackend(
        url=config.redis.url,
        prefix=config.redis.prefix,
        max_connections=config.redis.max_connections,
        socket_timeout=config.redis.socket_timeout,
    )


def create_backend(
    config: ObjectCacheConfig | None = None,
    name: str = DEFAULT_BACKEND_NAME,
) -> CacheInterface:
    """
    Create a backend instance based on configuration.

    Args:
        config: Object cache configuration (uses global config if not provided)
        name: Registry name (for multiple backends in one process)

    Returns:
        Configured backend instance

    Raises:
        ConfigurationError: If configuration is invalid or the engine cannot be built
    """
    if name in _backend_instances:
        logger.debug("Returning existing backend instance: %s", name)
        return _backend_instances[name]

    if config is None:
        config = get_config().object_cache

    engine = config.engine
    logger.info(
        "Creating backend '%s' with engine: %s",
        name,
        engine.value,
        extra={"backend_name": name, "engine": engine.value},
    )

    try:
        if engine == CacheEngine.MEMORY:
            backend = _create_memory_backend(config)
        elif engine == CacheEngine.FILE:
            backend = _create_file_backend(config)
        elif engine == CacheEngine.REDIS:
            backend = _create_redis_backend(config)
        elif engine == CacheEngine.NONE:
            backend = NullCacheBackend()
        else:
            raise ConfigurationError(
                f"Unknown cache engine: {engine}",
                details={"engine": str(engine), "supported": [e.value for e in CacheEngine]},
            )
    except ConfigurationError:
        raise
    except Exception as e:
        logger.error(
            "Unexpected error creating backend '%s': %s",
            name,
            e,
            extra={"backend_name": name, "engine": engine.value, "error": str(e)},
            exc_info=True,
        )
        raise ConfigurationError(
            f"Failed to create backend '{name}': {e}",
            details={"backend_name": name, "engine": engine.value, "error": str(e)},
        ) from e

    _backend_instances[name] = backend
    logger.info(
        "Backend '%s' created successfully",
        name,
        extra={"backend_name": name, "engine": engine.value},
    )
    return backend


def get_backend(
    config: ObjectCacheConfig | None = None,
    name: str = DEFAULT_BACKEND_NAME,
) -> CacheInterface:
    """
    Get the process-wide backend, building it on first use.

    Construction failures do not propagate: a NullCacheBackend is registered
    under the name instead, so every later call sees the same "not caching"
    backend.
    """
    if name in _backend_instances:
        return _backend_instances[name]

    try:
        return create_backend(config, name=name)
    except ConfigurationError as e:
        logger.warning(
            f"Backend '{name}' unavailable, object cache will not persist: {e.message}",
            extra={"backend_name": name, "details": e.details},
        )
        backend = NullCacheBackend(reason=e.message)
        _backend_instances[name] = backend
        return backend


async def close_all_backends() -> None:
    """
    Close all backend instances and release resources.

    Should be called during graceful shutdown.
    """
    if not _backend_instances:
        logger.debug("No backend instances to close")
        return

    logger.info("Closing %d backend instance(s)...", len(_backend_instances))

    for name, backend in list(_backend_instances.items()):
        try:
            await backend.close()
            logger.info("Closed backend instance: %s", name)
        except Exception as e:
            logger.error(
                "Error closing backend instance '%s': %s",
                name,
                e,
                extra={"backend_name": name, "error": str(e)},
                exc_info=True,
            )

    _backend_instances.clear()


def reset_backend_factory() -> None:
    """
    Clear all instance references without closing them.

    Warning: Only use this in testing contexts.
    """
    count = len(_backend_instances)
    _backend_instances.clear()
    logger.debug("Reset backend factory, cleared %d instance reference(s)", count)


def list_backend_instances() -> list[str]:
    """List all registered backend names."""
    return list(_backend_instances.keys())
