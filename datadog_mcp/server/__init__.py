"""MCP server package for the Datadog logs adapter.

Provides one logs resource and the get_logs tool.
"""

from .core import create_server, run_stdio

__all__ = [
    "create_server",
    "run_stdio",
]
