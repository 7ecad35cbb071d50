"""SSE/HTTP transport MCP server.

Provides MCP server functionality over HTTP Server-Sent Events (SSE) transport.
The ASGI app is mounted by http_server.py under /sse next to the REST API.
"""

import logging
from typing import Optional, List
from mcp.server.sse import SseServerTransport
from core.config import AppConfig
from protocol.base_server import BaseMCPServer
from protocol.dispatcher import ToolDispatcher

logger = logging.getLogger(__name__)


class SseMCPServer(BaseMCPServer):
    """MCP server using HTTP/SSE transport."""

    def __init__(self, dispatcher: ToolDispatcher, app_config: AppConfig, messages_path: str = "/messages"):
        """Initialize SSE MCP server.

        Args:
            dispatcher: Tool dispatcher
            app_config: Application configuration
            messages_path: Path for SSE messages endpoint (relative to mount point)
        """
        super().__init__(dispatcher, app_config)
        self.sse_transport = SseServerTransport(messages_path)
        logger.info(f"SSE MCP server initialized with messages path: {messages_path}")

    async def handle_sse_connection(self, scope, receive, send):
        """Handle SSE connection.

        Args:
            scope: ASGI scope dict
            receive: ASGI receive callable
            send: ASGI send callable
        """
        logger.info("Handling SSE connection")
        async with self.sse_transport.connect_sse(scope, receive, send) as streams:
            await self.server.run(
                streams[0],
                streams[1],
                self.create_initialization_options()
            )

    async def handle_messages(self, scope, receive, send):
        """Handle MCP messages endpoint.

        Args:
            scope: ASGI scope dict
            receive: ASGI receive callable
            send: ASGI send callable
        """
        logger.info("Handling MCP messages")
        await self.sse_transport.handle_post_message(scope, receive, send)

    def create_asgi_app(self, allowed_origins: Optional[List[str]] = None):
        """Build the ASGI app serving the SSE stream and the message endpoint.

        Args:
            allowed_origins: CORS origins; defaults to the HTTP config's resolution

        Returns:
            ASGI callable to mount under /sse
        """
        if allowed_origins is None:
            allowed_origins = self.app_config.http_config.resolve_allowed_origins()
        if not allowed_origins:
            logger.warning("SSE: ⚠️  no CORS origins configured, cross-origin requests blocked")

        async def app(scope, receive, send):
            path = scope.get("path", "/")
            method = scope.get("method", "GET")
            logger.debug(f"SSE MCP app: method={method}, path={path}")

            if method == "OPTIONS":
                await self._handle_cors_preflight(scope, send, allowed_origins)
                return

            origin = self._get_origin_from_scope(scope)

            async def cors_send(message):
                if message["type"] == "http.response.start" and _origin_allowed(origin, allowed_origins):
                    headers = list(message.get("headers", []))
                    headers.append((b"access-control-allow-origin", origin.encode()))
                    headers.append((b"access-control-allow-credentials", b"true"))
                    message["headers"] = headers
                await send(message)

            if method == "GET" and path.endswith("/"):
                await self.handle_sse_connection(scope, receive, cors_send)
            elif method == "POST" and "messages" in path:
                await self.handle_messages(scope, receive, cors_send)
            else:
                logger.warning(f"Unknown path in SSE MCP app: {method} {path}")
                await _send_plain(cors_send, 404, b"Not Found")

        return app

    def _get_origin_from_scope(self, scope) -> Optional[str]:
        """Extract origin from ASGI scope headers."""
        origin = dict(scope.get("headers", [])).get(b"origin")
        return origin.decode() if origin else None

    async def _handle_cors_preflight(self, scope, send, allowed_origins: List[str]):
        """Answer an OPTIONS request."""
        origin = self._get_origin_from_scope(scope)
        headers = [(b"content-type", b"text/plain")]

        if _origin_allowed(origin, allowed_origins):
            max_age = self.app_config.http_config.cors_preflight_max_age
            headers.extend([
                (b"access-control-allow-origin", origin.encode()),
                (b"access-control-allow-methods", b"GET, POST, OPTIONS"),
                (b"access-control-allow-headers", b"Content-Type, Authorization"),
                (b"access-control-allow-credentials", b"true"),
                (b"access-control-max-age", str(max_age).encode()),
            ])

        await _send_plain(send, 200, b"", headers)


def _origin_allowed(origin: Optional[str], allowed_origins: List[str]) -> bool:
    return bool(origin) and (origin in allowed_origins or "*" in allowed_origins)


async def _send_plain(send, status: int, body: bytes, headers=None):
    await send({
        "type": "http.response.start",
        "status": status,
        "headers": headers if headers is not None else [(b"content-type", b"text/plain")],
    })
    await send({"type": "http.response.body", "body": body})
