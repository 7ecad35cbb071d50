"""STDIO transport MCP server."""

import logging
from typing import Optional

from mcp.server.stdio import stdio_server

from core.config import AppConfig
from core.dependencies import build_dispatcher
from protocol.base_server import BaseMCPServer
from protocol.dispatcher import ToolDispatcher

logger = logging.getLogger(__name__)


class StdioMCPServer(BaseMCPServer):
    """MCP server using STDIO transport."""

    def __init__(self, dispatcher: ToolDispatcher, app_config: AppConfig):
        super().__init__(dispatcher, app_config)

    async def run(self):
        """Run the STDIO MCP server."""
        logger.info("Starting STDIO MCP server")
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.create_initialization_options()
            )


async def run_stdio_server(app_config: Optional[AppConfig] = None):
    """Run STDIO MCP server with given configuration.

    Args:
        app_config: App configuration (optional, defaults to env)
    """
    app_config = app_config or AppConfig.from_env()
    dispatcher = build_dispatcher(app_config)

    server = StdioMCPServer(dispatcher, app_config)
    try:
        await server.run()
    finally:
        await dispatcher.context.workspace.close()
        logger.info("SiYuan client closed")
