"""Debug instrumentation for the Datadog logs MCP server.

Provides timing and request correlation for MCP request handlers.
Enable via DATADOG_MCP_DEBUG=1 environment variable or enable_debug().

All output goes to stderr; stdout carries the MCP protocol.
"""

import contextvars
import functools
import logging
import os
import sys
import time
import uuid
from typing import Any, Callable, TypeVar

logger = logging.getLogger("datadog_mcp.debug")

_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)

_debug_enabled = False

# Datadog queries routinely take a few hundred milliseconds
SLOW_HANDLER_THRESHOLD_MS = 2000

T = TypeVar("T", bound=Callable[..., Any])


def is_debug_enabled() -> bool:
    """Check if debug logging is enabled.

    Returns True if either:
    - enable_debug() was called
    - DATADOG_MCP_DEBUG env var is set to "1", "true", or "yes"
    """
    if _debug_enabled:
        return True
    env_val = os.environ.get("DATADOG_MCP_DEBUG", "").lower()
    return env_val in ("1", "true", "yes")


def enable_debug() -> None:
    """Enable debug logging programmatically."""
    global _debug_enabled
    _debug_enabled = True


def disable_debug() -> None:
    """Disable debug logging programmatically."""
    global _debug_enabled
    _debug_enabled = False


def set_request_id(req_id: str | None = None) -> str:
    """Set a request ID for the current context. Returns the ID."""
    if req_id is None:
        req_id = str(uuid.uuid4())[:8]
    _request_id.set(req_id)
    return req_id


def _describe_request(req: Any) -> str:
    params = getattr(req, "params", None)
    if params is None:
        return ""
    for attr in ("name", "uri"):
        value = getattr(params, attr, None)
        if value is not None:
            return str(value)
    return ""


def timed_handler(fn: T) -> T:
    """Wrap an MCP request handler with timing and logging.

    The handler's request type and target (tool name or resource URI) are
    logged on entry; duration and outcome on exit. Exceptions are re-raised.
    """

    @functools.wraps(fn)
    async def wrapper(req: Any) -> Any:
        if not is_debug_enabled():
            return await fn(req)

        req_id = set_request_id()
        label = f"{type(req).__name__}({_describe_request(req)})"
        logger.debug(f"CALL [req={req_id}] {label}")
        start = time.perf_counter()

        try:
            result = await fn(req)
        except Exception as e:
            elapsed = (time.perf_counter() - start) * 1000
            logger.error(
                f"FAIL [req={req_id}] {label} failed in {elapsed:.1f}ms: "
                f"{type(e).__name__}: {e}"
            )
            raise

        elapsed = (time.perf_counter() - start) * 1000
        if elapsed > SLOW_HANDLER_THRESHOLD_MS:
            logger.warning(f"SLOW [req={req_id}] {label} completed in {elapsed:.1f}ms")
        else:
            logger.debug(f"DONE [req={req_id}] {label} completed in {elapsed:.1f}ms")
        return result

    return wrapper  # type: ignore[return-value]


def configure_logging(debug: bool = False) -> None:
    """Configure stderr logging for the server process.

    Args:
        debug: Log at DEBUG level and turn on handler instrumentation
    """
    if debug:
        enable_debug()
    level = logging.DEBUG if is_debug_enabled() else logging.INFO

    root = logging.getLogger("datadog_mcp")
    root.setLevel(level)

    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
