"""Configuration loading for the Datadog logs MCP server."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from datadog_mcp.models import DatadogConfig

ENV_VAR_PATTERN = r"\$\{([^}]+)\}"

# Config field -> environment variable that overrides it
ENV_OVERRIDES = {
    "api_key": "DD_API_KEY",
    "app_key": "DD_APP_KEY",
    "base_url": "DD_SITE_URL",
    "default_cluster": "DD_DEFAULT_CLUSTER",
    "default_namespace": "DD_DEFAULT_NAMESPACE",
    "sort": "DD_LOGS_SORT",
}

CREDENTIAL_FIELDS = ("api_key", "app_key")


class ConfigError(Exception):
    """Raised when the server cannot be configured."""


def _substitute_env_vars(obj):
    """Recursively substitute ${VAR} with environment variables."""
    if isinstance(obj, str):
        return re.sub(
            ENV_VAR_PATTERN, lambda m: os.environ.get(m.group(1), m.group(0)), obj
        )
    elif isinstance(obj, dict):
        return {k: _substitute_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_substitute_env_vars(item) for item in obj]
    return obj


def _read_config_file(path: str | Path) -> dict:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping: {path}")
    return _substitute_env_vars(data)


def load_config(
    path: str | Path | None = None, env_file: str | Path | None = None
) -> DatadogConfig:
    """Build the server configuration.

    Values come from the optional YAML file first, then from environment
    variables (optionally loaded from a .env file). Both credentials are
    required; a missing one raises ConfigError before anything else runs.
    """
    if env_file is not None:
        from dotenv import load_dotenv

        load_dotenv(env_file)

    data = _read_config_file(path) if path else {}

    for field_name, env_var in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            data[field_name] = value

    missing = [
        ENV_OVERRIDES[name]
        for name in CREDENTIAL_FIELDS
        if not data.get(name) or re.search(ENV_VAR_PATTERN, str(data[name]))
    ]
    if missing:
        raise ConfigError(
            "Missing environment variables. API and APP key with access to "
            f"read logs required: {', '.join(missing)}"
        )

    try:
        return DatadogConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def redacted(config: DatadogConfig) -> dict:
    """Return the config as a dict with credentials masked."""
    data = config.model_dump()
    for name in CREDENTIAL_FIELDS:
        value = data[name]
        data[name] = f"{value[:4]}..." if len(value) > 8 else "***"
    return data
