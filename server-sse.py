#!/usr/bin/env python3
"""
HTTP/SSE transport entrypoint for the Pool pH MCP Server.
Imports the FastMCP instance from server.py and runs it with HTTP transport.

Environment:
    POOL_CHEM_HOST: Bind address (default 0.0.0.0)
    POOL_CHEM_PORT: Port (default 8000)
"""

import logging
import os
import sys

sys.path.insert(0, os.path.dirname(__file__))

from server import mcp

logger = logging.getLogger("pool-ph-mcp.http")

HOST = os.environ.get("POOL_CHEM_HOST", "0.0.0.0")
PORT = int(os.environ.get("POOL_CHEM_PORT", "8000"))

if __name__ == "__main__":
    logger.info(f"Starting Pool pH MCP Server with HTTP transport on {HOST}:{PORT}...")

    # FastMCP reads host/port from its settings
    mcp.settings.host = HOST
    mcp.settings.port = PORT

    # streamable-http is preferred; sse kept for older clients
    try:
        mcp.run(transport="streamable-http")
    except Exception as e:
        logger.error(f"Failed to start HTTP server: {e}")
        logger.info("Falling back to SSE transport...")
        try:
            mcp.run(transport="sse")
        except Exception as e2:
            logger.error(f"Failed to start SSE server: {e2}")
            sys.exit(1)
