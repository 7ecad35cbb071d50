"""Tool registry mapping MCP tool names to handlers."""

import logging
from typing import Dict, Iterable, List, Optional

from core.exceptions import DuplicateToolError, RegistryFrozenError
from tools.base import ToolHandler

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    Central registry for MCP tool handlers.

    Built once at startup, then frozen. Lookups are plain dict reads, and
    listing follows registration order so repeated listings are identical.
    """

    def __init__(self, handlers: Optional[Iterable[ToolHandler]] = None):
        self.handlers: Dict[str, ToolHandler] = {}
        self._frozen = False
        for handler in handlers or []:
            self.register(handler)

    @classmethod
    def create_default(cls) -> "ToolRegistry":
        """Registry holding every built-in SiYuan tool."""
        from tools.handlers import create_all_handlers

        registry = cls(create_all_handlers())
        logger.info(f"✅ Registered {len(registry)} MCP tools")
        return registry

    def register(self, handler: ToolHandler) -> None:
        """
        Register a handler under ``handler.name``.

        Raises:
            DuplicateToolError: The name is already taken
            RegistryFrozenError: The registry is already serving requests
        """
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register {handler.name}: registry is frozen")
        if handler.name in self.handlers:
            raise DuplicateToolError(handler.name)
        self.handlers[handler.name] = handler
        logger.debug(f"Registered {handler.name} -> {handler.__class__.__name__}")

    def get(self, name: str) -> Optional[ToolHandler]:
        """Handler registered under ``name``, or None."""
        return self.handlers.get(name)

    def get_all(self) -> List[ToolHandler]:
        """All handlers in registration order."""
        return list(self.handlers.values())

    def names(self) -> List[str]:
        return list(self.handlers)

    def is_tool_registered(self, tool_name: str) -> bool:
        """Check if a tool has a registered handler."""
        return tool_name in self.handlers

    def freeze(self) -> None:
        """Reject any further registration."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return len(self.handlers)

    def __contains__(self, tool_name: str) -> bool:
        return tool_name in self.handlers
