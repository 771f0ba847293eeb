#!/usr/bin/env python3
"""PulseMCP Sub-Registry MCP Server entry point."""

import argparse
import asyncio
import logging
from typing import Optional, Tuple

from fastmcp import FastMCP

from ..config.settings import Settings, settings
from ..utils.security import setup_secure_logging
from .server_builder import ServerBuilder

logger = logging.getLogger(__name__)


async def create_subregistry_server(
    app_settings: Optional[Settings] = None,
) -> Tuple[FastMCP, ServerBuilder]:
    """Create and configure the Sub-Registry MCP server.

    :param app_settings: Settings to use, defaults to the global instance
    :return: The configured server and the builder owning its resources
    :raises ConfigurationError: If the settings are invalid

    Examples
    --------
    .. code-block:: python

        server, builder = await create_subregistry_server()
        server.run()
    """
    builder = ServerBuilder(app_settings)
    server = await builder.build()
    logger.info("MCP server setup complete")
    return server, builder


def main() -> None:
    """Run the PulseMCP Sub-Registry MCP server.

    Supported transports:
    - stdio: Standard input/output communication
    - http: HTTP-based communication
    - streamable-http: Streamable HTTP communication

    Examples
    --------
    .. code-block:: bash

        pulse-subregistry-mcp --transport stdio
        pulse-subregistry-mcp --transport http --port 9080
    """
    setup_secure_logging(level=settings.log_level)

    parser = argparse.ArgumentParser(description="PulseMCP Sub-Registry MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http", "streamable-http"],
        default="stdio",
    )
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=9080)
    args = parser.parse_args()

    logger.info("Creating PulseMCP Sub-Registry MCP server...")
    mcp, builder = asyncio.run(create_subregistry_server())

    try:
        if args.transport in ("http", "streamable-http"):
            logger.info(
                "Starting %s server on %s:%d", args.transport, args.host, args.port
            )
            mcp.run(transport=args.transport, host=args.host, port=args.port)
        else:
            logger.info("Running in stdio mode")
            mcp.run()
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    finally:
        asyncio.run(builder.close())


if __name__ == "__main__":
    main()
