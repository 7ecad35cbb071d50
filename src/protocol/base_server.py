"""Base MCP server - Transport-agnostic MCP protocol implementation.

Binds the MCP low-level ``Server`` request handlers to a ``ToolDispatcher``.
Transports (STDIO, SSE) subclass ``BaseMCPServer`` and only add I/O.
"""

import logging
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp import types

from core.config import AppConfig
from protocol.dispatcher import ToolDispatcher
from protocol.prompts import SERVER_INSTRUCTIONS

logger = logging.getLogger(__name__)


class BaseMCPServer:
    """Base MCP server providing core protocol functionality.

    This class encapsulates the MCP protocol logic independent of
    the transport mechanism (STDIO, HTTP/SSE, etc.).
    """

    def __init__(self, dispatcher: ToolDispatcher, app_config: AppConfig):
        """Initialize base MCP server.

        Args:
            dispatcher: Router wired to the tool registry and execution context
            app_config: Application configuration (server name and version)
        """
        self.dispatcher = dispatcher
        self.app_config = app_config
        self.server = Server(
            app_config.server_name,
            version=app_config.server_version,
            instructions=SERVER_INSTRUCTIONS,
        )
        self._setup_handlers()
        logger.info(f"Initialized {app_config.server_name} MCP server")

    def _setup_handlers(self):
        """Setup MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools() -> List[types.Tool]:
            """List all available tools."""
            return self.dispatcher.list_tools()

        # Arguments are passed through untouched; handlers check their own input
        @self.server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> types.CallToolResult:
            """Handle tool execution."""
            envelope = await self.dispatcher.call_tool(name, arguments)
            return types.CallToolResult.model_validate(envelope)

        @self.server.list_prompts()
        async def list_prompts() -> List[types.Prompt]:
            """List the prompt catalog."""
            return self.dispatcher.list_prompts()

        @self.server.get_prompt()
        async def get_prompt(name: str, arguments: Optional[Dict[str, str]]) -> types.GetPromptResult:
            """Resolve a prompt; unknown names surface as protocol errors."""
            return self.dispatcher.get_prompt(name, arguments)

    def create_initialization_options(self):
        return self.server.create_initialization_options()
