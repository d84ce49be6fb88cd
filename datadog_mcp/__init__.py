"""Datadog logs MCP server - query Kubernetes logs from Datadog over MCP."""

from datadog_mcp.client import DatadogAPIError, DatadogClient
from datadog_mcp.config import ConfigError, load_config
from datadog_mcp.models import DatadogConfig, LogEntry, LogQueryArgs
from datadog_mcp.normalize import normalize_logs
from datadog_mcp.server import create_server

__all__ = [
    "ConfigError",
    "DatadogAPIError",
    "DatadogClient",
    "DatadogConfig",
    "LogEntry",
    "LogQueryArgs",
    "create_server",
    "load_config",
    "normalize_logs",
]
