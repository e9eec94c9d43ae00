"""
objcache - File Cache Backend

Stores one file per key below a cache directory. Several worker processes can
share the directory: writes go through a temp file and an atomic replace, and
with locking enabled every read and write also holds a per-entry FileLock.

Layout: <cache_dir>/<md5[0:2]>/<md5[2:4]>/<md5 of key>
Payload: pickled (expires_at, value); expires_at 0 means no expiry.
"""

import asyncio
import hashlib
import logging
import os
import time
from contextlib import AbstractContextManager, nullcontext
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

from filelock import FileLock, Timeout

from .. import serialization
from ..interface import CacheInterface

logger = logging.getLogger(__name__)

LOCK_SUFFIX = ".lock"
TEMP_PREFIX = ".tmp-"


class FileCacheBackend(CacheInterface):
    """File-per-key cache backend with optional locking."""

    backend = "file"

    def __init__(
        self,
        cache_dir: str | Path,
        locking: bool = False,
        flush_timelimit: int = 180,
        lock_timeout: float = 10.0,
    ):
        """
        Initialize file cache backend.

        Args:
            cache_dir: Root directory for entry files (created if missing)
            locking: Hold a FileLock on <entry>.lock during reads and writes
            flush_timelimit: Max seconds flush() may run (0 = unlimited)
            lock_timeout: Seconds to wait for an entry lock before giving up
        """
        self.cache_dir = Path(cache_dir)
        self.locking = locking
        self.flush_timelimit = flush_timelimit
        self.lock_timeout = lock_timeout

        self.cache_dir.mkdir(parents=True, exist_ok=True)

        self._hits = 0
        self._misses = 0
        self._sets = 0
        self._deletes = 0

    def _path(self, key: str) -> Path:
        digest = hashlib.md5(key.encode("utf-8")).hexdigest()
        return self.cache_dir / digest[:2] / digest[2:4] / digest

    def _lock(self, path: Path) -> AbstractContextManager[Any]:
        if not self.locking:
            return nullcontext()
        return FileLock(f"{path}{LOCK_SUFFIX}", timeout=self.lock_timeout)

    # ------------ Blocking helpers (run in a worker thread) ------------

    def _read(self, path: Path) -> Any | None:
        with self._lock(path):
            try:
                data = path.read_bytes()
            except FileNotFoundError:
                return None

            expires_at, value = serialization.loads(data)

            if expires_at and time.time() > expires_at:
                path.unlink(missing_ok=True)
                return None

            return value

    def _write(self, path: Path, value: Any, ttl: int) -> None:
        expires_at = time.time() + ttl if ttl and ttl > 0 else 0
        data = serialization.dumps((expires_at, value))

        path.parent.mkdir(parents=True, exist_ok=True)

        with self._lock(path):
            temp_path: Path | None = None
            try:
                with NamedTemporaryFile(dir=path.parent, prefix=TEMP_PREFIX, delete=False) as temp_file:
                    temp_path = Path(temp_file.name)
                    temp_file.write(data)
                    temp_file.flush()
                    os.fsync(temp_file.fileno())

                temp_path.replace(path)
            except Exception:
                if temp_path is not None:
                    temp_path.unlink(missing_ok=True)
                raise

    def _remove(self, path: Path) -> bool:
        with self._lock(path):
            try:
                path.unlink()
                return True
            except FileNotFoundError:
                return False

    def _entry_files(self) -> list[Path]:
        return [
            p
            for p in self.cache_dir.rglob("*")
            if p.is_file() and not p.name.endswith(LOCK_SUFFIX) and not p.name.startswith(TEMP_PREFIX)
        ]

    def _flush(self) -> bool:
        started = time.monotonic()
        removed = 0

        for path in self._entry_files():
            if self.flush_timelimit and time.monotonic() - started > self.flush_timelimit:
                logger.warning(
                    f"File cache flush stopped after {self.flush_timelimit}s with {removed} entries removed",
                    extra={"cache_dir": str(self.cache_dir), "removed": removed},
                )
                return False

            path.unlink(missing_ok=True)
            removed += 1

        logger.info(f"Flushed {removed} entries from file cache at '{self.cache_dir}'")
        return True

    # ------------ Core Interface ------------

    async def get(self, key: str) -> Any | None:
        """Retrieve a value by key."""
        path = self._path(key)
        try:
            value = await asyncio.to_thread(self._read, path)
        except Timeout:
            logger.warning(f"Timed out waiting for lock on '{path}'", extra={"key": key})
            value = None
        except Exception as e:
            logger.error(
                f"Failed to read key '{key}' from file cache: {e}",
                extra={"key": key, "path": str(path), "error": str(e)},
                exc_info=True,
            )
            value = None

        if value is None:
            self._misses += 1
        else:
            self._hits += 1
        return value

    async def set(self, key: str, value: Any, ttl: int = 0) -> bool:
        """Store a value with optional TTL."""
        path = self._path(key)
        try:
            await asyncio.to_thread(self._write, path, value, ttl)
        except Timeout:
            logger.warning(f"Timed out waiting for lock on '{path}'", extra={"key": key})
            return False
        except Exception as e:
            logger.error(
                f"Failed to write key '{key}' to file cache: {e}",
                extra={"key": key, "path": str(path), "ttl": ttl, "error": str(e)},
                exc_info=True,
            )
            return False

        self._sets += 1
        return True

    async def delete(self, key: str) -> bool:
        """Delete a single key."""
        path = self._path(key)
        try:
            deleted = await asyncio.to_thread(self._remove, path)
        except Timeout:
            logger.warning(f"Timed out waiting for lock on '{path}'", extra={"key": key})
            return False
        except OSError as e:
            logger.error(
                f"Failed to delete key '{key}' from file cache: {e}",
                extra={"key": key, "path": str(path), "error": str(e)},
                exc_info=True,
            )
            return False

        if deleted:
            self._deletes += 1
        return deleted

    async def flush(self) -> bool:
        """Delete every entry file below the cache directory."""
        try:
            return await asyncio.to_thread(self._flush)
        except OSError as e:
            logger.error(
                f"Failed to flush file cache at '{self.cache_dir}': {e}",
                extra={"cache_dir": str(self.cache_dir), "error": str(e)},
                exc_info=True,
            )
            return False

    async def get_stats(self) -> dict[str, Any]:
        """Return cache statistics."""
        try:
            size = len(await asyncio.to_thread(self._entry_files))
        except OSError as e:
            logger.warning(f"Failed to count file cache entries: {e}", extra={"error": str(e)})
            size = -1

        total_requests = self._hits + self._misses
        hit_rate = round((self._hits / total_requests) * 100, 2) if total_requests else 0.0

        return {
            "backend": self.backend,
            "cache_dir": str(self.cache_dir),
            "locking": self.locking,
            "size": size,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": hit_rate,
            "sets": self._sets,
            "deletes": self._deletes,
        }
