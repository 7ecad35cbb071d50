"""Core modules for the SiYuan MCP server."""

from .exceptions import (
    SiyuanMCPError,
    ConfigurationError,
    ToolExecutionError,
    ToolValidationError,
    UnknownToolError,
    UnknownPromptError,
    DuplicateToolError,
    RegistryFrozenError,
    WorkspaceError,
    WorkspaceConnectionError,
    WorkspaceAPIError,
)

__all__ = [
    "SiyuanMCPError",
    "ConfigurationError",
    "ToolExecutionError",
    "ToolValidationError",
    "UnknownToolError",
    "UnknownPromptError",
    "DuplicateToolError",
    "RegistryFrozenError",
    "WorkspaceError",
    "WorkspaceConnectionError",
    "WorkspaceAPIError",
]
