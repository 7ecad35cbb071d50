"""Base classes for MCP tool handlers."""

from abc import ABC, abstractmethod
from typing import Any, Dict

from mcp.types import Tool

from core.context import ExecutionContext


class ToolHandler(ABC):
    """Abstract base class for MCP tool handlers.

    Subclasses declare ``name``, ``description`` and ``input_schema`` as
    class attributes and implement ``execute``. One instance serves every
    call to the tool, concurrently, so ``execute`` must not store per-call
    state on ``self``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique tool name used as the dispatch key."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Guidance text shown to the calling model."""
        pass

    @property
    @abstractmethod
    def input_schema(self) -> Dict[str, Any]:
        """JSON schema of the accepted arguments (advertised, not enforced)."""
        pass

    @abstractmethod
    async def execute(self, args: Dict[str, Any], context: ExecutionContext) -> Any:
        """
        Run the tool.

        Args:
            args: Arguments sent by the caller (``{}`` when none)
            context: Shared execution context

        Returns:
            None, a string, or any JSON-serializable structure

        Raises:
            ToolValidationError: Invalid or conflicting arguments
            WorkspaceError: The SiYuan kernel failed the operation
        """
        pass

    def describe(self) -> Dict[str, Any]:
        """Descriptor in MCP wire shape."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }

    def to_tool(self) -> Tool:
        return Tool(name=self.name, description=self.description, inputSchema=self.input_schema)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
