"""Tool handlers for the Datadog MCP server."""

# ruff: noqa: E501

import logging

from mcp import types
from mcp.server.lowlevel import Server
from pydantic import ValidationError

from datadog_mcp.client import DatadogAPIError, DatadogClient
from datadog_mcp.debug import timed_handler
from datadog_mcp.models import LogQueryArgs
from datadog_mcp.normalize import dump_logs, normalize_logs

from .utils import _api_error_message, _protocol_error, _text

logger = logging.getLogger(__name__)

GET_LOGS = "get_logs"

GET_LOGS_TOOL = types.Tool(
    name=GET_LOGS,
    description="Get datadog logs for a specific cluster and namespace",
    inputSchema={
        "type": "object",
        "properties": {
            "cluster": {
                "type": "string",
                "description": "Cluster name",
            },
            "namespace": {
                "type": "string",
                "description": "Namespace to retrieve logs from",
            },
        },
        "required": ["cluster", "namespace"],
    },
)


def register_tool_handlers(server: Server, client: DatadogClient) -> None:
    """Register the tool list/call handlers with the MCP server.

    Bad tool names and arguments are protocol errors. Datadog failures are
    returned as an error result instead, so the host always gets a
    well-formed tool response.
    """

    @timed_handler
    async def list_tools(req: types.ListToolsRequest) -> types.ServerResult:
        return types.ServerResult(types.ListToolsResult(tools=[GET_LOGS_TOOL]))

    @timed_handler
    async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
        if req.params.name != GET_LOGS:
            raise _protocol_error(
                types.METHOD_NOT_FOUND, f"Unknown tool: {req.params.name}"
            )
        try:
            args = LogQueryArgs.model_validate(req.params.arguments)
        except ValidationError as e:
            raise _protocol_error(
                types.INVALID_PARAMS, "Invalid request arguments"
            ) from e

        try:
            envelope = await client.fetch_logs(args.cluster, args.namespace)
        except DatadogAPIError as e:
            return types.ServerResult(
                types.CallToolResult(content=[_text(_api_error_message(e))], isError=True)
            )

        entries = normalize_logs(envelope)
        logger.debug(
            "get_logs returned %d entries for %s/%s",
            len(entries),
            args.cluster,
            args.namespace,
        )
        return types.ServerResult(
            types.CallToolResult(content=[_text(dump_logs(entries))], isError=False)
        )

    server.request_handlers[types.ListToolsRequest] = list_tools
    server.request_handlers[types.CallToolRequest] = call_tool
