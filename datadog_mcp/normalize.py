"""Flatten Datadog log event envelopes into LogEntry records."""

import json

from datadog_mcp.models import LogEntry


def _normalize_event(event: dict) -> LogEntry:
    attributes = event.get("attributes") or {}
    nested = attributes.get("attributes") or {}
    return LogEntry(
        id=event.get("id"),
        service=attributes.get("service"),
        message=attributes.get("message"),
        timestamp=attributes.get("timestamp"),
        level=nested.get("level"),
        tags=attributes.get("tags"),
    )


def normalize_logs(envelope: dict) -> list[LogEntry]:
    """Flatten every event in a logs API response, preserving order.

    Events are never dropped; fields missing upstream come through as None.
    """
    return [_normalize_event(event) for event in envelope.get("data") or []]


def dump_logs(entries: list[LogEntry]) -> str:
    """Serialize entries as indented JSON text."""
    return json.dumps([entry.model_dump() for entry in entries], indent=2, ensure_ascii=False)
