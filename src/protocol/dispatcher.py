"""Transport-independent request router for the MCP surface.

Turns list/call requests into registry lookups and handler invocations.
``call_tool`` is the single boundary where handler failures become error
envelopes; it never raises.
"""

import inspect
from typing import Any, Dict, List, Optional

from mcp.types import GetPromptResult, Prompt, Tool

from core.context import ExecutionContext
from core.error_handling import ErrorFormat, error_message, format_error_response, format_success_response
from core.exceptions import SiyuanMCPError, UnknownToolError
from protocol import prompts
from tools.registry import ToolRegistry


class ToolDispatcher:
    """Routes MCP requests to registered tool handlers."""

    def __init__(self, registry: ToolRegistry, context: ExecutionContext):
        """
        Wire the router to a registry and context.

        The registry is frozen here; handlers must all be registered first.

        Args:
            registry: Populated tool registry
            context: Execution context handed to every handler
        """
        self.registry = registry
        self.context = context
        registry.freeze()

    @property
    def logger(self):
        return self.context.logger

    def list_tools(self) -> List[Tool]:
        """Descriptors of every registered tool, in registration order."""
        tools = [handler.to_tool() for handler in self.registry.get_all()]
        self.logger.debug(f"Listing {len(tools)} tools")
        return tools

    def list_prompts(self) -> List[Prompt]:
        return prompts.list_prompts()

    def get_prompt(self, name: str, arguments: Optional[Dict[str, str]] = None) -> GetPromptResult:
        """
        Resolve a catalog prompt.

        Raises:
            UnknownPromptError: Propagated to the transport as a protocol error
        """
        return prompts.get_prompt(name)

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Invoke a tool and normalize the outcome.

        Args:
            name: Tool name
            arguments: Tool arguments (None is treated as ``{}``)

        Returns:
            ``{"content": [{"type": "text", "text": ...}], "isError": bool}``
        """
        self.logger.info(f"Tool called: {name}")

        try:
            handler = self.registry.get(name)
            if handler is None:
                raise UnknownToolError(name)

            result = handler.execute(dict(arguments or {}), self.context)
            if inspect.isawaitable(result):
                result = await result

            return format_success_response(result, ErrorFormat.MCP_TOOL)
        except Exception as e:
            self.logger.error(f"Tool execution failed: {error_message(e)}")
            if not isinstance(e, SiyuanMCPError):
                self.logger.debug(f"Unexpected error in {name}", exc_info=True)
            return format_error_response(e, ErrorFormat.MCP_TOOL)
