"""
objcache - Request Context and Tenant Resolution

The tenant id and host string come from the surrounding application. A
TenantResolver supplies them for the deployment; a RequestContext may name a
different tenant for one request and carries the per-request cache directives.
"""

from dataclasses import dataclass
from typing import Protocol


class TenantResolver(Protocol):
    """Supplies the current tenant id and the deployment host/namespace."""

    def tenant_id(self) -> int: ...

    def host(self) -> str: ...


class StaticTenantResolver:
    """Resolver returning fixed values, typically taken from configuration."""

    def __init__(self, host: str = "localhost", tenant_id: int = 0):
        self._host = host
        self._tenant_id = tenant_id

    def tenant_id(self) -> int:
        return self._tenant_id

    def host(self) -> str:
        return self._host


@dataclass(frozen=True)
class RequestContext:
    """
    Per-request inputs to an ObjectCache.

    Attributes:
        tenant_id: Tenant for this request (None = resolver default)
        do_not_cache: Explicit directive to skip the persistent backend
        embeddable: False for requests whose output must not carry a
            diagnostics block (AJAX, cron, RPC, short-init requests)
        user_agent: Client user agent, checked against the powered-by token
    """

    tenant_id: int | None = None
    do_not_cache: bool = False
    embeddable: bool = True
    user_agent: str = ""
