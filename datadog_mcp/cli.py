"""CLI commands for datadog-mcp."""

import asyncio

import click
import yaml

from datadog_mcp.config import ConfigError, load_config, redacted
from datadog_mcp.models import DatadogConfig


def run_async(coro):
    """Run an async coroutine from sync CLI code."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
    return loop.run_until_complete(coro)


def config_option():
    """Decorator for --config option."""
    return click.option(
        "--config", "-c",
        default=None,
        type=click.Path(exists=False),
        help="Optional YAML config file",
    )


def env_file_option():
    """Decorator for --env-file option."""
    return click.option(
        "--env-file", "-e",
        default=".env",
        type=click.Path(),
        help="Path to .env file (default: .env)",
    )


def _load(config: str | None, env_file: str) -> DatadogConfig:
    """Load config, exiting with a diagnostic if it is unusable."""
    try:
        return load_config(config, env_file=env_file)
    except (ConfigError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


@click.group()
def main():
    """Datadog logs MCP server CLI."""
    pass


@main.command()
@config_option()
@env_file_option()
@click.option("--debug", is_flag=True, help="Log handler calls and timings to stderr")
def serve(config: str | None, env_file: str, debug: bool):
    """Start the MCP server on stdio."""
    from datadog_mcp.debug import configure_logging
    from datadog_mcp.server import run_stdio

    cfg = _load(config, env_file)
    configure_logging(debug=debug)

    try:
        asyncio.run(run_stdio(cfg))
    except KeyboardInterrupt:
        raise SystemExit(0)


@main.command()
@click.argument("cluster")
@click.argument("namespace")
@config_option()
@env_file_option()
def call(cluster: str, namespace: str, config: str | None, env_file: str):
    """Run get_logs once and print the result."""
    from mcp import types
    from mcp.shared.exceptions import McpError

    from datadog_mcp.client import DatadogClient
    from datadog_mcp.server import create_server

    cfg = _load(config, env_file)

    async def call_tool():
        """Dispatch a get_logs request through the server's handler."""
        async with DatadogClient(cfg) as client:
            server = create_server(cfg, client)
            handler = server.request_handlers[types.CallToolRequest]
            request = types.CallToolRequest(
                method="tools/call",
                params=types.CallToolRequestParams(
                    name="get_logs",
                    arguments={"cluster": cluster, "namespace": namespace},
                ),
            )
            return (await handler(request)).root

    try:
        result = run_async(call_tool())
    except McpError as e:
        click.echo(f"Error: {e.error.message}", err=True)
        raise SystemExit(1)

    for content in result.content:
        click.echo(content.text, err=result.isError)
    if result.isError:
        raise SystemExit(1)


@main.command()
@config_option()
@env_file_option()
def resources(config: str | None, env_file: str):
    """List the advertised resource URI."""
    cfg = _load(config, env_file)
    click.echo(cfg.resource_uri)


@main.command()
def tools():
    """List the advertised tools."""
    from datadog_mcp.server.tools import GET_LOGS_TOOL

    click.echo(f"{GET_LOGS_TOOL.name}: {GET_LOGS_TOOL.description}")


@main.command("config")
@config_option()
@env_file_option()
def config_cmd(config: str | None, env_file: str):
    """Show the resolved configuration with credentials masked."""
    cfg = _load(config, env_file)
    click.echo(yaml.dump(redacted(cfg), default_flow_style=False, sort_keys=False))


if __name__ == "__main__":
    main()
