"""Dependency injection and singleton management for the SiYuan MCP server."""

from functools import lru_cache
from typing import AsyncGenerator, Optional
import logging

logger = logging.getLogger(__name__)

# Global singletons
_app_config: Optional["AppConfig"] = None
_dispatcher: Optional["ToolDispatcher"] = None


@lru_cache()
def get_app_config() -> "AppConfig":
    """Get singleton AppConfig instance.

    This function is cached to ensure only one AppConfig instance exists.
    """
    global _app_config
    if _app_config is None:
        from core.config import AppConfig
        _app_config = AppConfig.from_env()
        logger.info("Initialized AppConfig singleton")
    return _app_config


def build_dispatcher(app_config: "AppConfig", transport=None) -> "ToolDispatcher":
    """Assemble workspace, execution context, registry and router.

    Args:
        app_config: Application configuration
        transport: Optional httpx transport for the SiYuan client (tests)

    Returns:
        A dispatcher over a frozen registry of every built-in tool
    """
    from core.context import ExecutionContext
    from protocol.dispatcher import ToolDispatcher
    from tools.registry import ToolRegistry
    from workspace import SiyuanWorkspace

    workspace = SiyuanWorkspace.from_config(app_config.siyuan, transport=transport)
    context = ExecutionContext.create(workspace, app_config)
    return ToolDispatcher(ToolRegistry.create_default(), context)


def get_dispatcher(app_config: Optional["AppConfig"] = None) -> "ToolDispatcher":
    """Get singleton ToolDispatcher instance.

    Args:
        app_config: Optional AppConfig. If None, uses get_app_config()
    """
    global _dispatcher

    if _dispatcher is None:
        _dispatcher = build_dispatcher(app_config if app_config is not None else get_app_config())
        logger.info("Initialized ToolDispatcher singleton")

    return _dispatcher


def reset_singletons():
    """Reset all singletons (useful for testing)."""
    global _app_config, _dispatcher
    _app_config = None
    _dispatcher = None
    get_app_config.cache_clear()
    logger.info("Reset all singletons")


# FastAPI Dependency Injection helpers
async def get_dispatcher_dependency() -> AsyncGenerator["ToolDispatcher", None]:
    """FastAPI dependency for ToolDispatcher.

    Usage:
        @router.get("/endpoint")
        async def endpoint(dispatcher: ToolDispatcher = Depends(get_dispatcher_dependency)):
            ...
    """
    yield get_dispatcher()
