"""Utility functions for the Datadog MCP request handlers."""

from mcp import types
from mcp.shared.exceptions import McpError

from datadog_mcp.client import DatadogAPIError


def _text(text: str) -> types.TextContent:
    """Wrap text in TextContent for MCP response."""
    return types.TextContent(type="text", text=text)


def _api_error_message(error: DatadogAPIError) -> str:
    return f"Datadog API error: {error.message}"


def _protocol_error(code: int, message: str) -> McpError:
    """Build an McpError that the server reports as a JSON-RPC error."""
    return McpError(types.ErrorData(code=code, message=message))
