"""Custom exceptions for the SiYuan MCP server."""


class SiyuanMCPError(Exception):
    """Base exception for all SiYuan MCP server errors."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(SiyuanMCPError):
    """Exception raised when configuration is invalid."""
    pass


class ToolExecutionError(SiyuanMCPError):
    """Exception raised when tool execution fails."""
    pass


class ToolValidationError(ToolExecutionError):
    """Exception raised by a handler when its arguments are invalid or conflicting."""
    pass


class UnknownToolError(ToolExecutionError):
    """Exception raised when a call targets a tool name nobody registered."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}", {"tool": name})
        self.name = name


class UnknownPromptError(SiyuanMCPError):
    """Exception raised when a prompt name is not in the catalog."""

    def __init__(self, name: str):
        super().__init__(f"Unknown prompt: {name}", {"prompt": name})
        self.name = name


class DuplicateToolError(SiyuanMCPError):
    """Exception raised when two handlers are registered under the same name."""

    def __init__(self, name: str):
        super().__init__(f"Tool already registered: {name}", {"tool": name})
        self.name = name


class RegistryFrozenError(SiyuanMCPError):
    """Exception raised when registering after the registry was frozen."""
    pass


class WorkspaceError(SiyuanMCPError):
    """Base exception for failures talking to the SiYuan workspace."""
    pass


class WorkspaceConnectionError(WorkspaceError):
    """Exception raised when the SiYuan kernel cannot be reached."""
    pass


class WorkspaceAPIError(WorkspaceError):
    """Exception raised when the SiYuan kernel rejects an API call."""

    def __init__(self, message: str, code: int = None, endpoint: str = None):
        super().__init__(message, {"code": code, "endpoint": endpoint})
        self.code = code
        self.endpoint = endpoint
