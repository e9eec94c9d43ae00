"""
objcache - Configuration Schemas

Defines typed configuration models using Pydantic for validation and type safety.
All configuration must be defined here and validated at startup.

The backend selector is a closed enum; each engine variant carries its own
typed settings block, and only the block matching the selected engine is used.
"""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_GLOBAL_GROUPS = [
    "users",
    "userlogins",
    "usermeta",
    "site-options",
    "site-lookup",
    "blog-lookup",
    "blog-details",
    "rss",
]

DEFAULT_NONPERSISTENT_GROUPS = [
    "comment",
    "counts",
]


class Environment(str, Enum):
    """Runtime environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


class CacheEngine(str, Enum):
    """Supported persistent cache engines."""

    MEMORY = "memory"
    FILE = "file"
    REDIS = "redis"
    NONE = "none"


ENGINE_NAMES: dict[CacheEngine, str] = {
    CacheEngine.MEMORY: "Memory",
    CacheEngine.FILE: "Disk",
    CacheEngine.REDIS: "Redis",
    CacheEngine.NONE: "None",
}


def get_engine_name(engine: CacheEngine | str) -> str:
    """Human-readable engine name used in reports."""
    try:
        return ENGINE_NAMES[CacheEngine(engine)]
    except ValueError:
        return str(engine)


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class MemoryEngineConfig(BaseModel):
    """Settings for the in-process memory engine."""

    max_size: int = Field(default=10000, ge=1, description="Max entries before LRU eviction")


class FileEngineConfig(BaseModel):
    """Settings for the file engine."""

    cache_dir: Path = Field(
        default=Path("./data/cache/objectcache"),
        description="Directory holding one file per cache entry",
    )
    locking: bool = Field(default=False, description="Take a file lock around reads and writes")
    flush_timelimit: int = Field(
        default=180,
        ge=0,
        description="Max seconds a flush may run (0 = unlimited)",
    )


class RedisEngineConfig(BaseModel):
    """Settings for the Redis engine."""

    url: str | None = Field(default=None, description="Redis connection URL")
    prefix: str = Field(default="objcache", description="Key prefix used for storage and flush")
    max_connections: int = Field(default=10, ge=1, description="Redis connection pool size")
    socket_timeout: int = Field(default=5, ge=1, description="Redis socket timeout in seconds")


class ObjectCacheConfig(BaseModel):
    """Object cache configuration."""

    enabled: bool = Field(default=False, description="Enable persistent object caching")
    debug: bool = Field(default=False, description="Collect per-call diagnostics")
    lifetime: int = Field(default=180, ge=0, description="Default TTL in seconds (0 = no expiry)")
    engine: CacheEngine = Field(default=CacheEngine.MEMORY, description="Persistent engine to use")

    global_groups: list[str] = Field(
        default_factory=lambda: list(DEFAULT_GLOBAL_GROUPS),
        description="Groups whose keys are shared by every tenant",
    )
    nonpersistent_groups: list[str] = Field(
        default_factory=lambda: list(DEFAULT_NONPERSISTENT_GROUPS),
        description="Groups kept in the request memo table only",
    )

    host: str = Field(default="localhost", description="Host/namespace used in key derivation")
    tenant_id: int = Field(default=0, ge=0, description="Default tenant id")

    memory: MemoryEngineConfig = Field(default_factory=MemoryEngineConfig)
    file: FileEngineConfig = Field(default_factory=FileEngineConfig)
    redis: RedisEngineConfig = Field(default_factory=RedisEngineConfig)

    @field_validator("global_groups", "nonpersistent_groups")
    @classmethod
    def dedupe_groups(cls, v: list[str]) -> list[str]:
        """Drop empty names and duplicates, keeping first-seen order."""
        return list(dict.fromkeys(g for g in v if g))

    @model_validator(mode="after")
    def validate_engine_settings(self) -> "ObjectCacheConfig":
        """Ensure the selected engine has what it needs."""
        if self.engine == CacheEngine.REDIS and not self.redis.url:
            raise ValueError("redis.url is required when engine is 'redis'")
        return self

    @property
    def engine_name(self) -> str:
        return get_engine_name(self.engine)


class ObjcacheConfig(BaseModel):
    """Root configuration for objcache."""

    environment: Environment = Field(default=Environment.DEVELOPMENT, description="Runtime environment")
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")

    object_cache: ObjectCacheConfig = Field(default_factory=ObjectCacheConfig)

    model_config = ConfigDict(validate_assignment=True)

    def summary(self) -> dict[str, Any]:
        """Small dict for startup logging."""
        return {
            "environment": self.environment.value,
            "engine": self.object_cache.engine.value,
            "enabled": self.object_cache.enabled,
            "debug": self.object_cache.debug,
        }
