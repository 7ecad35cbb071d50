"""HTTP application for the SiYuan MCP server.

Combines the REST API (``/api/v1``) with the MCP SSE transport (``/sse``)
on one FastAPI app. Both sides share a single ``ToolDispatcher``.
"""

from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import FastAPI

from api.middleware import setup_middleware
from api.routes import router as api_router
from core.config import AppConfig
from core.dependencies import build_dispatcher, get_dispatcher_dependency
from protocol.dispatcher import ToolDispatcher
from protocol.sse_server import SseMCPServer

logger = logging.getLogger(__name__)


def create_app(app_config: AppConfig, dispatcher: Optional[ToolDispatcher] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        app_config: Application configuration
        dispatcher: Pre-built dispatcher; one is built from ``app_config`` if omitted

    Returns:
        FastAPI app with REST routes, SSE MCP mount and middleware
    """
    dispatcher = dispatcher or build_dispatcher(app_config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"🚀 {app_config.server_name} HTTP mode ready ({len(dispatcher.registry)} tools)")
        yield
        logger.info("🛑 Shutting down, closing SiYuan client")
        await dispatcher.context.workspace.close()

    app = FastAPI(
        title="SiYuan MCP API",
        description="REST API & SSE transport for SiYuan Note via MCP",
        version=app_config.server_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    setup_middleware(app, app_config)

    app.dependency_overrides[get_dispatcher_dependency] = lambda: dispatcher
    app.include_router(api_router)
    logger.info("REST API routes registered")

    mcp_sse_server = SseMCPServer(dispatcher, app_config, messages_path="/messages")
    app.mount("/sse", mcp_sse_server.create_asgi_app())
    logger.info("MCP SSE server mounted at /sse/")

    @app.get("/")
    async def root():
        return {
            "name": app_config.server_name,
            "version": app_config.server_version,
            "modes": ["REST API", "MCP SSE"],
            "endpoints": {
                "api": "/api/v1",
                "health": "/api/v1/health",
                "tools": "/api/v1/tools",
                "mcp_sse": "/sse/",
                "docs": "/docs"
            }
        }

    return app
