"""Unified entry point for the SiYuan MCP server.

This module provides a single entry point that can run in either:
- STDIO mode: For use with MCP clients via stdio transport
- HTTP mode: REST API plus SSE MCP transport

Usage:
    # STDIO mode (default)
    python main.py

    # HTTP mode
    python main.py --http

    # HTTP mode with custom host/port
    python main.py --http --host 0.0.0.0 --port 8000
"""

import argparse
import asyncio
import logging
import sys

from core.config import AppConfig
from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO"):
    """Send logs to stderr; stdout carries the STDIO protocol stream."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )


async def run_stdio_mode(app_config: AppConfig):
    """Run MCP server in STDIO mode.

    Typically used when the server is spawned as a subprocess by an MCP client.
    """
    logger.info("Starting SiYuan MCP server in STDIO mode")

    from protocol.stdio_server import run_stdio_server
    try:
        await run_stdio_server(app_config)
    except Exception as e:
        logger.error(f"STDIO server error: {e}", exc_info=True)
        sys.exit(1)


async def run_http_mode(app_config: AppConfig, host: str, port: int):
    """Run MCP server in HTTP mode with REST API and SSE support.

    Args:
        app_config: Application configuration
        host: Host address to bind to
        port: Port to listen on
    """
    logger.info(f"Starting SiYuan MCP server in HTTP mode on {host}:{port}")

    import uvicorn
    from http_server import create_app

    app = create_app(app_config)

    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        log_level=app_config.log_level.lower()
    )
    server = uvicorn.Server(config)

    try:
        await server.serve()
    except Exception as e:
        logger.error(f"HTTP server error: {e}", exc_info=True)
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="SiYuan MCP Server - Unified Entry Point"
    )
    parser.add_argument(
        "--http",
        action="store_true",
        help="Run in HTTP mode (default: STDIO mode)"
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host address for HTTP mode (default: from HTTP_HOST env or 0.0.0.0)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for HTTP mode (default: from HTTP_PORT env or 8000)"
    )
    return parser


def main(argv=None):
    """Main entry point with argument parsing."""
    args = build_parser().parse_args(argv)

    try:
        app_config = AppConfig.from_env()
    except ConfigurationError as e:
        configure_logging()
        logger.error(f"Failed to load configuration: {e.message}")
        sys.exit(1)

    configure_logging(app_config.log_level)

    if args.http:
        host = args.host or app_config.http_config.host
        port = args.port or app_config.http_config.port
        asyncio.run(run_http_mode(app_config, host, port))
    else:
        asyncio.run(run_stdio_mode(app_config))


if __name__ == "__main__":
    main()
