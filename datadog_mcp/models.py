"""Data models for the Datadog logs MCP server."""

from typing import Any

from pydantic import BaseModel, ConfigDict, StrictStr

DEFAULT_BASE_URL = "https://api.datadoghq.com/api/v2"


class DatadogConfig(BaseModel):
    """Immutable server configuration, built once at startup.

    The sort value is passed through to the logs API as-is; prefix it with
    ``-`` for descending order.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    api_key: str
    app_key: str
    base_url: str = DEFAULT_BASE_URL
    default_cluster: str = "dev"
    default_namespace: str = "dev"
    sort: str = "timestamp"

    @property
    def resource_uri(self) -> str:
        """URI of the single advertised logs resource."""
        return f"datadog://{self.default_cluster}/{self.default_namespace}/logs"


class LogQueryArgs(BaseModel):
    """Arguments accepted by the get_logs tool."""

    model_config = ConfigDict(extra="ignore")

    cluster: StrictStr
    namespace: StrictStr


class LogEntry(BaseModel):
    """A flattened log event as returned to the caller.

    Values are copied from the upstream event without conversion, so a field
    missing upstream is None here.
    """

    id: Any = None
    service: Any = None
    message: Any = None
    timestamp: Any = None
    level: Any = None
    tags: Any = None
