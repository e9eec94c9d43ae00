"""
objcache - Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
"""

import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

from objcache.cache.backends.memory import MemoryCacheBackend
from objcache.config import CacheEngine, ObjectCacheConfig
from objcache.object_cache import ObjectCacheRuntime

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "DEBUG"


@pytest.fixture
def test_redis_url() -> str:
    """Get Redis URL for testing (database 15 for isolation)."""
    return os.environ.get("TEST_REDIS_URL", "redis://localhost:6379/15")


@pytest.fixture
def temp_cache_dir(tmp_path: Path) -> Path:
    """Create a temporary directory for file cache testing."""
    cache_dir = tmp_path / "cache"
    cache_dir.mkdir()
    return cache_dir


@pytest.fixture
def mock_env_file(monkeypatch: pytest.MonkeyPatch, temp_cache_dir: Path) -> None:
    """Set environment variables for an enabled file engine."""
    monkeypatch.setenv("OBJECTCACHE_ENABLED", "true")
    monkeypatch.setenv("OBJECTCACHE_ENGINE", "file")
    monkeypatch.setenv("OBJECTCACHE_LIFETIME", "300")
    monkeypatch.setenv("OBJECTCACHE_FILE_DIR", str(temp_cache_dir))


@pytest.fixture
def make_runtime() -> Callable[..., ObjectCacheRuntime]:
    """
    Build a runtime over an in-memory backend.

    Keyword arguments become ObjectCacheConfig fields. Pass backend= to share
    one store between runtimes (simulating several worker processes).
    """

    def _make(backend: Any = None, **overrides: Any) -> ObjectCacheRuntime:
        overrides.setdefault("enabled", True)
        overrides.setdefault("engine", CacheEngine.MEMORY)
        config = ObjectCacheConfig(**overrides)
        return ObjectCacheRuntime(config, backend=backend or MemoryCacheBackend())

    return _make


@pytest.fixture
def sample_cache_data() -> dict[str, Any]:
    """Sample data for cache testing."""
    return {
        "simple_string": "hello",
        "simple_int": 42,
        "simple_float": 3.14,
        "simple_bool": True,
        "complex_dict": {
            "nested": {
                "key": "value",
                "number": 123,
                "list": [1, 2, 3],
            }
        },
        "complex_list": [
            {"id": 1, "name": "Alice"},
            {"id": 2, "name": "Bob"},
        ],
    }


@pytest.fixture(autouse=True)
def reset_process_state() -> Generator[None, None, None]:
    """Reset factory registry, loaded config and tool runtime after each test."""
    yield
    from objcache.cache.factory import reset_backend_factory
    from objcache.config import loader
    from objcache.object_cache.tools import set_runtime

    reset_backend_factory()
    set_runtime(None)
    loader._config_instance = None
