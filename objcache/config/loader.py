"""
objcache - Configuration Loader

Loads and validates configuration from environment variables and .env files.
Provides a singleton configuration instance for the runtime.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from .schemas import DEFAULT_GLOBAL_GROUPS, DEFAULT_NONPERSISTENT_GROUPS, ObjcacheConfig

logger = logging.getLogger(__name__)

_config_instance: ObjcacheConfig | None = None


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_config(
    env_file: str | None = None,
    reload: bool = False,
) -> ObjcacheConfig:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Path to .env file (default: .env in working directory)
        reload: Force reload even if config already loaded

    Returns:
        Validated ObjcacheConfig instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    if env_file:
        env_path = Path(env_file)
    else:
        env_path = Path.cwd() / ".env"

    if env_path.exists():
        logger.info(f"Loading environment from {env_path}")
        try:
            load_dotenv(env_path, override=True)
        except Exception as e:
            logger.error(
                f"Failed to load .env file from {env_path}: {e}",
                extra={"path": str(env_path), "error": str(e)},
                exc_info=True,
            )
            raise ConfigurationError(
                f"Failed to load environment file: {e}",
                details={"path": str(env_path), "error": str(e)},
            ) from e
    else:
        logger.debug("No .env file found, using environment variables only")

    try:
        config_dict = {
            "environment": os.getenv("ENVIRONMENT", "development"),
            "log_level": os.getenv("LOG_LEVEL", "INFO"),
            "object_cache": {
                "enabled": _env_bool("OBJECTCACHE_ENABLED"),
                "debug": _env_bool("OBJECTCACHE_DEBUG"),
                "lifetime": int(os.getenv("OBJECTCACHE_LIFETIME", "180")),
                "engine": os.getenv("OBJECTCACHE_ENGINE", "memory"),
                "global_groups": _env_list("OBJECTCACHE_GLOBAL_GROUPS", DEFAULT_GLOBAL_GROUPS),
                "nonpersistent_groups": _env_list("OBJECTCACHE_NONPERSISTENT_GROUPS", DEFAULT_NONPERSISTENT_GROUPS),
                "host": os.getenv("OBJECTCACHE_HOST", "localhost"),
                "tenant_id": int(os.getenv("OBJECTCACHE_TENANT_ID", "0")),
                "memory": {
                    "max_size": int(os.getenv("OBJECTCACHE_MEMORY_MAX_SIZE", "10000")),
                },
                "file": {
                    "cache_dir": os.getenv("OBJECTCACHE_FILE_DIR", "./data/cache/objectcache"),
                    "locking": _env_bool("OBJECTCACHE_FILE_LOCKING"),
                    "flush_timelimit": int(os.getenv("CACHE_FLUSH_TIMELIMIT", "180")),
                },
                "redis": {
                    "url": os.getenv("REDIS_URL"),
                    "prefix": os.getenv("REDIS_PREFIX", "objcache"),
                    "max_connections": int(os.getenv("REDIS_MAX_CONNECTIONS", "10")),
                    "socket_timeout": int(os.getenv("REDIS_SOCKET_TIMEOUT", "5")),
                },
            },
        }
    except ValueError as e:
        logger.error(f"Invalid numeric environment value: {e}", extra={"error": str(e)})
        raise ConfigurationError(
            f"Invalid numeric environment value: {e}",
            details={"error": str(e)},
        ) from e

    try:
        _config_instance = ObjcacheConfig(**config_dict)  # type: ignore[arg-type]
        logger.info(
            f"Configuration loaded successfully (environment: {_config_instance.environment.value})",
            extra=_config_instance.summary(),
        )
        return _config_instance
    except ValidationError as e:
        logger.error(
            f"Configuration validation failed: {e}",
            extra={"validation_errors": e.errors(), "config_dict_keys": list(config_dict.keys())},
            exc_info=True,
        )
        raise ConfigurationError(
            "Configuration validation failed. Check your environment variables and configuration.",
            details={"validation_errors": e.errors()},
        ) from e


def get_config() -> ObjcacheConfig:
    """
    Get the current configuration instance, loading it on first access.

    Returns:
        Current ObjcacheConfig instance
    """
    if _config_instance is None:
        return load_config()

    return _config_instance


def reload_config(env_file: str | None = None) -> ObjcacheConfig:
    """
    Force reload configuration.

    Args:
        env_file: Optional path to .env file

    Returns:
        Reloaded ObjcacheConfig instance
    """
    return load_config(env_file=env_file, reload=True)
