"""
objcache - Server

FastMCP server using stdio transport, exposing the object cache as admin
tools. This is the only server entrypoint.

- Single process runtime shared by every tool call
- Each tool call runs as its own request (fresh memo table)
- Graceful shutdown closes the persistent backends
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP

from .cache import close_all_backends
from .config import load_config
from .object_cache.runtime import ObjectCacheRuntime
from .object_cache.tools import (
    get_runtime,
    objcache_add,
    objcache_delete,
    objcache_flush,
    objcache_get,
    objcache_replace,
    objcache_set,
    objcache_status,
    set_runtime,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

_initialized = False


@asynccontextmanager
async def server_lifespan(server: Any) -> Any:
    """Server lifespan manager (startup/shutdown)."""
    await initialize_server()
    yield
    await cleanup_server()


mcp = FastMCP("objcache - Object Cache", lifespan=server_lifespan)

for _tool in (
    objcache_get,
    objcache_set,
    objcache_add,
    objcache_replace,
    objcache_delete,
    objcache_flush,
    objcache_status,
):
    mcp.tool()(_tool)


async def initialize_server() -> None:
    """Initialize server resources on startup."""
    global _initialized

    if _initialized:
        return

    logger.info("Initializing objcache server...")

    config = load_config()
    logging.getLogger("objcache").setLevel(config.log_level.value)

    set_runtime(ObjectCacheRuntime(config.object_cache))
    runtime = get_runtime()
    backend = await runtime.get_backend()

    logger.info(
        f"Object cache ready: engine={runtime.engine_name}, backend={backend.backend}, "
        f"enabled={config.object_cache.enabled}",
        extra=config.summary(),
    )

    _initialized = True


async def cleanup_server() -> None:
    """Cleanup server resources on shutdown."""
    global _initialized

    if not _initialized:
        return

    logger.info("Cleaning up objcache server...")

    try:
        await close_all_backends()
        set_runtime(None)
        logger.info("All backends closed")
    except Exception as e:
        logger.error(f"Error during cleanup: {e}", exc_info=True)
    finally:
        _initialized = False


def main() -> None:
    """CLI entry point for the objcache command."""
    mcp.run()


if __name__ == "__main__":
    main()
