"""HTTP client for the Datadog logs API."""

import logging

import httpx

from datadog_mcp.models import DatadogConfig

logger = logging.getLogger(__name__)

LOGS_ENDPOINT = "logs/events"


class DatadogAPIError(Exception):
    """A transport failure or non-2xx response from the Datadog API."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def build_log_query(cluster: str, namespace: str) -> str:
    """Build the logs search filter for a cluster and namespace.

    Values are inserted verbatim.
    """
    return f"cluster_name:{cluster} AND kube_namespace:{namespace}"


def _error_message(exc: httpx.HTTPError) -> str:
    """Extract the most useful message from an httpx error."""
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            body = exc.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            if body.get("message"):
                return str(body["message"])
            errors = body.get("errors")
            if isinstance(errors, list) and errors:
                return "; ".join(str(e) for e in errors)
    return str(exc) or exc.__class__.__name__


class DatadogClient:
    """Thin async wrapper around the Datadog logs events endpoint.

    Configured once and never mutated, so a single instance is shared by all
    requests. Use as an async context manager to close the connection pool.
    """

    def __init__(
        self,
        config: DatadogConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config
        self._http = httpx.AsyncClient(
            base_url=config.base_url,
            headers={
                "Accept": "application/json",
                "DD-API-KEY": config.api_key,
                "DD-APPLICATION-KEY": config.app_key,
            },
            params={"sort": config.sort},
            transport=transport,
        )

    async def __aenter__(self) -> "DatadogClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def fetch_logs(self, cluster: str, namespace: str) -> dict:
        """Fetch one page of log events for a cluster and namespace.

        Raises:
            DatadogAPIError: on network failure or a non-2xx response.
        """
        params = {"filter[query]": build_log_query(cluster, namespace)}
        try:
            response = await self._http.get(LOGS_ENDPOINT, params=params)
            response.raise_for_status()
        except httpx.HTTPError as e:
            status = (
                e.response.status_code
                if isinstance(e, httpx.HTTPStatusError)
                else None
            )
            message = _error_message(e)
            logger.warning(
                "Datadog logs query failed (status=%s): %s", status, message
            )
            raise DatadogAPIError(message, status_code=status) from e
        return response.json()
