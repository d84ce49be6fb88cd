"""Shared fixtures for datadog_mcp tests."""

import httpx
import pytest
import pytest_asyncio

from datadog_mcp.client import DatadogClient
from datadog_mcp.config import ENV_OVERRIDES
from datadog_mcp.models import DatadogConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's Datadog environment out of the tests."""
    # setenv first so monkeypatch also removes values a .env file adds later
    for env_var in [*ENV_OVERRIDES.values(), "DATADOG_MCP_DEBUG"]:
        monkeypatch.setenv(env_var, "")
        monkeypatch.delenv(env_var)


@pytest.fixture
def config():
    """A config with test credentials and default cluster/namespace."""
    return DatadogConfig(api_key="test-api-key", app_key="test-app-key")


@pytest.fixture
def sample_envelope():
    """A logs API response with a single event."""
    return {
        "data": [
            {
                "id": "1",
                "type": "log",
                "attributes": {
                    "service": "api",
                    "attributes": {"level": "info"},
                    "message": "boot ok",
                    "timestamp": "2024-01-01T00:00:00Z",
                    "tags": ["env:dev"],
                },
            }
        ]
    }


class RecordingBackend:
    """Fake Datadog backend that records every request it receives."""

    def __init__(self, response: httpx.Response | Exception):
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


@pytest_asyncio.fixture
async def make_client(config):
    """Factory for a DatadogClient backed by a RecordingBackend.

    Every client made is closed when the test finishes.
    """
    clients: list[DatadogClient] = []

    def _make(response: httpx.Response | Exception, cfg: DatadogConfig | None = None):
        backend = RecordingBackend(response)
        client = DatadogClient(cfg or config, transport=httpx.MockTransport(backend))
        clients.append(client)
        return client, backend

    yield _make

    for client in clients:
        await client.aclose()
