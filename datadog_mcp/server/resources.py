"""Resource handlers for the Datadog MCP server."""

import logging

from mcp import types
from mcp.server.lowlevel import Server

from datadog_mcp.client import DatadogAPIError, DatadogClient
from datadog_mcp.debug import timed_handler
from datadog_mcp.models import DatadogConfig
from datadog_mcp.normalize import dump_logs, normalize_logs

from .utils import _api_error_message, _protocol_error

logger = logging.getLogger(__name__)

RESOURCE_DESCRIPTION = (
    "Latest logs that provide insights into the status of a specific "
    "Kubernetes cluster and namespace, retrieved from Datadog"
)


def register_resource_handlers(
    server: Server, config: DatadogConfig, client: DatadogClient
) -> None:
    """Register the resource list/read handlers with the MCP server.

    Only the default cluster and namespace are exposed as a resource; the
    get_logs tool covers everything else.
    """
    cluster = config.default_cluster
    namespace = config.default_namespace
    uri = config.resource_uri

    @timed_handler
    async def list_resources(req: types.ListResourcesRequest) -> types.ServerResult:
        return types.ServerResult(
            types.ListResourcesResult(
                resources=[
                    types.Resource(
                        uri=uri,
                        name=f"Latest logs for cluster {cluster} and namespace {namespace}",
                        mimeType="application/json",
                        description=RESOURCE_DESCRIPTION,
                    )
                ]
            )
        )

    @timed_handler
    async def read_resource(req: types.ReadResourceRequest) -> types.ServerResult:
        requested = str(req.params.uri)
        if requested != uri:
            raise _protocol_error(
                types.INVALID_REQUEST, f"Unknown resource: {requested}"
            )

        try:
            envelope = await client.fetch_logs(cluster, namespace)
        except DatadogAPIError as e:
            raise _protocol_error(types.INTERNAL_ERROR, _api_error_message(e)) from e

        entries = normalize_logs(envelope)
        logger.debug("Read %d log entries for %s", len(entries), uri)
        return types.ServerResult(
            types.ReadResourceResult(
                contents=[
                    types.TextResourceContents(
                        uri=req.params.uri,
                        mimeType="application/json",
                        text=dump_logs(entries),
                    )
                ]
            )
        )

    server.request_handlers[types.ListResourcesRequest] = list_resources
    server.request_handlers[types.ReadResourceRequest] = read_resource
