"""Core MCP server creation for the Datadog logs adapter."""

import logging

from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from datadog_mcp.client import DatadogClient
from datadog_mcp.models import DatadogConfig

from .resources import register_resource_handlers
from .tools import register_tool_handlers

logger = logging.getLogger(__name__)

SERVER_NAME = "datadog-server"
SERVER_VERSION = "0.1.0"


def create_server(config: DatadogConfig, client: DatadogClient) -> Server:
    """Create an MCP server exposing Datadog logs.

    Args:
        config: Server configuration (default cluster/namespace for the resource)
        client: Datadog client shared by every request
    """
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    register_resource_handlers(server, config, client)
    register_tool_handlers(server, client)

    return server


async def run_stdio(config: DatadogConfig) -> None:
    """Serve MCP over stdin/stdout until the host disconnects."""
    async with DatadogClient(config) as client:
        server = create_server(config, client)
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Datadog MCP server running on stdio")
            await server.run(
                read_stream, write_stream, server.create_initialization_options()
            )
