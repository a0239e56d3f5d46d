"""
MCP Server for 5/3/1 Boring But Big programs on Hevy

Provides tools to generate a 4-week 5/3/1 BBB cycle from training maxes,
export it as CSV, and sync it to Hevy as routines (one folder per week)
via the Model Context Protocol (MCP).

Supports two transport modes:
- stdio: For single-user local usage (default)
- http: For multi-user HTTP server deployment
"""

import logging
import os

from fastmcp import FastMCP

from hevy_bbb import program_tools
from hevy_bbb import sync_tools


def create_app() -> FastMCP:
    """Create and configure the MCP app with all tools registered."""
    app = FastMCP("Hevy 5/3/1 BBB v1.0")

    # Program generation, CSV export, memory
    app = program_tools.register_tools(app)

    # Hevy API key and sync
    app = sync_tools.register_tools(app)

    return app


def main():
    """Initialize the MCP server and run with configured transport.

    Environment variables:
    - MCP_TRANSPORT: 'stdio' (default) or 'http'
    - MCP_HOST: Host to bind to (default: '0.0.0.0')
    - MCP_PORT: Port for HTTP transport (default: 8081)
    """
    logging.basicConfig(level=logging.INFO)
    app = create_app()

    transport = os.environ.get("MCP_TRANSPORT", "stdio")

    if transport == "http":
        host = os.environ.get("MCP_HOST", "0.0.0.0")
        port = int(os.environ.get("MCP_PORT", "8081"))
        app.run(transport="http", host=host, port=port)
    else:
        app.run()


if __name__ == "__main__":
    main()
