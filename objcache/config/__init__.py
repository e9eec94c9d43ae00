"""
objcache - Configuration Module

Provides typed configuration loading and validation.
"""

from .loader import get_config, load_config, reload_config
from .schemas import (
    CacheEngine,
    Environment,
    FileEngineConfig,
    LogLevel,
    MemoryEngineConfig,
    ObjcacheConfig,
    ObjectCacheConfig,
    RedisEngineConfig,
    get_engine_name,
)

__all__ = [
    # Loader functions
    "load_config",
    "get_config",
    "reload_config",
    # Main config
    "ObjcacheConfig",
    # Enums
    "Environment",
    "CacheEngine",
    "LogLevel",
    # Config sections
    "ObjectCacheConfig",
    "MemoryEngineConfig",
    "FileEngineConfig",
    "RedisEngineConfig",
    "get_engine_name",
]
