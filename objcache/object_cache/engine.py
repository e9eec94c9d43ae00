"""
objcache - Object Cache Engine

Request-scoped facade over the shared persistent backend.

Every ObjectCache keeps its own memo table. Once a key has been read or
written in this request, later reads return the memoized value without
asking the backend, misses included. Values are deep-copied into and out of
the memo table so callers never share mutable state with the cache.

get() returns False for "not found". A stored False (or None) is therefore
indistinguishable from a miss.

Usage:
    runtime = ObjectCacheRuntime(config.object_cache)
    cache = runtime.new_request(RequestContext(tenant_id=3))

    await cache.set("widgets_html", html, group="widgets")
    html = await cache.get("widgets_html", group="widgets")
"""

import copy
import logging
import re
import time
from collections.abc import Iterable
from typing import Any

from ..cache import serialization
from .context import RequestContext
from .diagnostics import CacheCounters, DebugRecord, DiagnosticsReporter
from .keys import DEFAULT_GROUP
from .runtime import ObjectCacheRuntime

logger = logging.getLogger(__name__)

POWERED_BY = "objcache"

REJECT_DISABLED = "Object caching is disabled"
REJECT_DO_NOT_CACHE = "Do-not-cache directive is set for this request"

_MARKUP_RE = re.compile(r"<\?xml|<html", re.IGNORECASE)

_IMMUTABLE = (str, bytes, int, float, complex, bool, type(None), frozenset)


def _clone(value: Any) -> Any:
    if isinstance(value, _IMMUTABLE):
        return value
    return copy.deepcopy(value)


def is_markup(output: str) -> bool:
    """True if output looks like an HTML or XML document."""
    return bool(_MARKUP_RE.search(output))


class ObjectCache:
    """
    Object cache for one request.

    Not safe for concurrent use; create one per request from the shared
    ObjectCacheRuntime.
    """

    def __init__(self, runtime: ObjectCacheRuntime, context: RequestContext | None = None):
        self.runtime = runtime
        self.context = context or RequestContext()
        config = runtime.config

        self.tenant_id = (
            self.context.tenant_id if self.context.tenant_id is not None else runtime.resolver.tenant_id()
        )
        self.lifetime = config.lifetime
        self.debug = config.debug

        self.cache: dict[str, Any] = {}
        self.counters = CacheCounters()
        self.debug_info: list[DebugRecord] = []

        self.reject_reason = ""
        self.caching = self._can_cache()

    def _can_cache(self) -> bool:
        """Decide once whether this request may use the persistent backend."""
        if not self.runtime.config.enabled:
            self.reject_reason = REJECT_DISABLED
            return False

        if self.context.do_not_cache:
            self.reject_reason = REJECT_DO_NOT_CACHE
            return False

        return True

    def _key(self, id: Any, group: str) -> str:
        return self.runtime.keys.derive(self.tenant_id, group, str(id))

    def _persists(self, group: str) -> bool:
        return self.caching and not self.runtime.groups.is_nonpersistent(group)

    async def get(self, id: Any, group: str = DEFAULT_GROUP) -> Any:
        """
        Read an item.

        Returns:
            The value, or False if it is not cached
        """
        if self.debug:
            time_start = time.perf_counter()

        group = group or DEFAULT_GROUP
        key = self._key(id, group)
        internal = key in self.cache

        if internal:
            value = self.cache[key]
        elif self._persists(group):
            backend = await self.runtime.get_backend()
            value = await backend.get(key)
        else:
            value = False

        if value is None:
            value = False

        self.cache[key] = value
        self.counters.total_calls += 1

        cached = value is not False
        if cached:
            self.counters.hits += 1
        else:
            self.counters.misses += 1

        if self.debug:
            elapsed = time.perf_counter() - time_start
            self.counters.total_time += elapsed
            self.debug_info.append(
                DebugRecord(
                    id=str(id),
                    group=group,
                    cached=cached,
                    internal=internal,
                    data_size=serialization.payload_size(value),
                    elapsed=elapsed,
                )
            )

        return _clone(value)

    async def set(self, id: Any, data: Any, group: str = DEFAULT_GROUP, expire: int = 0) -> bool:
        """
        Write an item to the memo table and, when allowed, to the backend.

        Args:
            expire: TTL in seconds; 0 uses the configured lifetime

        Returns:
            The backend result, or True when the item is not persisted
        """
        group = group or DEFAULT_GROUP
        key = self._key(id, group)

        data = _clone(data)
        self.cache[key] = data

        if self._persists(group):
            backend = await self.runtime.get_backend()
            return await backend.set(key, data, expire or self.lifetime)

        return True

    async def delete(self, id: Any, group: str = DEFAULT_GROUP, force: bool = False) -> bool:
        """
        Remove an item.

        Without force, an item that get() reports as missing is not deleted
        and False is returned.
        """
        group = group or DEFAULT_GROUP

        if not force and await self.get(id, group) is False:
            return False

        key = self._key(id, group)
        self.cache.pop(key, None)

        if self._persists(group):
            backend = await self.runtime.get_backend()
            return await backend.delete(key)

        return True

    async def add(self, id: Any, data: Any, group: str = DEFAULT_GROUP, expire: int = 0) -> bool:
        """Store only if get() reports a miss. Not atomic across processes."""
        if await self.get(id, group) is not False:
            return False

        return await self.set(id, data, group, expire)

    async def replace(self, id: Any, data: Any, group: str = DEFAULT_GROUP, expire: int = 0) -> bool:
        """Store only if get() reports a hit. Not atomic across processes."""
        if await self.get(id, group) is False:
            return False

        return await self.set(id, data, group, expire)

    async def flush(self) -> bool:
        """Clear the memo table and, when caching, the whole backend store."""
        self.cache = {}

        if self.caching:
            backend = await self.runtime.get_backend()
            return await backend.flush()

        return True

    def reset(self) -> bool:
        return True

    def add_global_groups(self, groups: str | Iterable[str]) -> None:
        self.runtime.groups.add_global_groups(groups)

    def add_nonpersistent_groups(self, groups: str | Iterable[str]) -> None:
        self.runtime.groups.add_nonpersistent_groups(groups)

    # ------------ Diagnostics ------------

    def reporter(self) -> DiagnosticsReporter:
        return DiagnosticsReporter(
            engine_name=self.runtime.engine_name,
            caching=self.caching,
            reject_reason=self.reject_reason,
            debug=self.debug,
            counters=self.counters,
            records=self.debug_info,
        )

    def stats(self) -> str:
        """HTML stats report for the admin page."""
        return self.reporter().render_html()

    def debug_info_block(self) -> str:
        """Diagnostics as an HTML comment block."""
        return self.reporter().render_comment()

    def report(self) -> dict[str, Any]:
        return self.reporter().to_dict()

    def can_embed(self) -> bool:
        """Whether this request's output may carry the diagnostics block."""
        if not self.runtime.config.enabled:
            return False

        if not self.debug:
            return False

        if not self.context.embeddable:
            return False

        if POWERED_BY in self.context.user_agent.lower():
            return False

        return True

    def embed_debug_info(self, output: str) -> str:
        """
        Append the diagnostics block to rendered output.

        Called by the response pipeline after rendering. Output that is empty
        or not HTML/XML is returned unchanged.
        """
        if output and self.can_embed() and is_markup(output):
            output += "\r\n\r\n" + self.debug_info_block()

        return output
