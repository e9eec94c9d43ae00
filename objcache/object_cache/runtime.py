"""
objcache - Object Cache Runtime

Process-wide application context shared by every request-scoped ObjectCache:
configuration, group policy, key filters, key deriver (with its memo) and the
persistent backend. Build one per process and hand it to each request.
"""

import logging

from ..cache.factory import get_backend
from ..cache.interface import CacheInterface
from ..config import ObjectCacheConfig, get_config
from .context import RequestContext, StaticTenantResolver, TenantResolver
from .groups import GroupPolicy
from .keys import KeyDeriver, KeyFilters

logger = logging.getLogger(__name__)


class ObjectCacheRuntime:
    """
    Shared state for all ObjectCache instances in one process.

    The backend is built lazily on first use (or injected) and then reused.
    Construction is synchronous, so concurrent first callers see one instance.

    Built backends live in the process-wide factory registry under
    backend_name. Runtimes sharing a name share one backend, built from the
    config of whichever runtime asked first; give runtimes with different
    configs different names.
    """

    def __init__(
        self,
        config: ObjectCacheConfig | None = None,
        backend: CacheInterface | None = None,
        resolver: TenantResolver | None = None,
        backend_name: str = "objectcache",
    ):
        self.config = config if config is not None else get_config().object_cache
        self.resolver = resolver or StaticTenantResolver(
            host=self.config.host,
            tenant_id=self.config.tenant_id,
        )
        self.groups = GroupPolicy(self.config.global_groups, self.config.nonpersistent_groups)
        self.key_filters = KeyFilters()
        self.keys = KeyDeriver(self.groups, self.resolver, self.key_filters)

        self._backend = backend
        self._backend_name = backend_name

    @property
    def engine_name(self) -> str:
        return self.config.engine_name

    async def get_backend(self) -> CacheInterface:
        """Return the shared backend, building it on first call."""
        if self._backend is not None:
            return self._backend

        self._backend = get_backend(self.config, self._backend_name)
        logger.debug(
            f"Object cache backend ready: {self._backend.backend}",
            extra={"engine": self.config.engine.value, "backend": self._backend.backend},
        )

        return self._backend

    def new_request(self, context: RequestContext | None = None):
        """Create an ObjectCache for one request."""
        from .engine import ObjectCache

        return ObjectCache(self, context)

    async def close(self) -> None:
        if self._backend is not None:
            await self._backend.close()
