"""
objcache - Key Derivation

Builds the canonical backend key for (tenant, group, id):

    objcache_<namespace>_object_<md5>

namespace is the host for global groups and "<host>_<tenant>" otherwise, so
non-global keys are isolated per tenant. Derived keys are memoized for the
life of the deriver; registered key filters run on every call.
"""

import hashlib
import logging
from collections.abc import Callable

from .context import TenantResolver
from .groups import GroupPolicy

logger = logging.getLogger(__name__)

KEY_PREFIX = "objcache"
DEFAULT_GROUP = "default"

KeyFilter = Callable[[str], str]


class KeyFilters:
    """Ordered registry of key rewrite hooks."""

    def __init__(self) -> None:
        self._filters: list[KeyFilter] = []

    def add(self, fn: KeyFilter) -> None:
        self._filters.append(fn)

    def remove(self, fn: KeyFilter) -> None:
        if fn in self._filters:
            self._filters.remove(fn)

    def apply(self, key: str) -> str:
        for fn in self._filters:
            key = fn(key)
        return key

    def __len__(self) -> int:
        return len(self._filters)


def item_hash(group: str, id: str) -> str:
    """Stable 128-bit digest of a (group, id) pair."""
    # length prefix keeps ("post", "s1") and ("posts", "1") apart
    material = f"{len(group)}:{group}{id}"
    return hashlib.md5(material.encode("utf-8")).hexdigest()


class KeyDeriver:
    """Derives and memoizes canonical cache keys."""

    def __init__(
        self,
        groups: GroupPolicy,
        resolver: TenantResolver,
        filters: KeyFilters | None = None,
    ):
        self.groups = groups
        self.resolver = resolver
        self.filters = filters if filters is not None else KeyFilters()
        self._memo: dict[tuple[int, str, str], str] = {}

    def derive(self, tenant_id: int, group: str | None, id: str) -> str:
        """
        Return the backend key for an item.

        Args:
            tenant_id: Tenant the request runs as
            group: Cache group; empty or None means "default"
            id: Item id (callers pass strings)
        """
        if not group:
            group = DEFAULT_GROUP

        memo_key = (tenant_id, group, id)
        key = self._memo.get(memo_key)

        if key is None:
            host = self.resolver.host()

            if self.groups.is_global(group):
                namespace = host
            else:
                namespace = f"{host}_{tenant_id}"

            key = f"{KEY_PREFIX}_{namespace}_object_{item_hash(group, id)}"
            self._memo[memo_key] = key

        return self.filters.apply(key)

    @property
    def memo_size(self) -> int:
        return len(self._memo)
