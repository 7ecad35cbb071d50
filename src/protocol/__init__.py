"""MCP protocol layer: request routing and transports."""
