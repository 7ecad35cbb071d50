"""MCP tools package for the SiYuan MCP server."""

from tools.base import ToolHandler
from tools.registry import ToolRegistry
from tools.validators import SQLValidator, InputValidator

__all__ = [
    'ToolHandler',
    'ToolRegistry',
    'SQLValidator',
    'InputValidator',
]
