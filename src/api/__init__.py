"""REST API for the SiYuan MCP server."""
