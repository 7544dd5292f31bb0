"""JSON payloads sent to the remote collector."""

from __future__ import annotations

from typing import Any, Dict

from ..core.models import SensorRecord

Payload = Dict[str, Any]


def start_event() -> Payload:
    return {"event": "start"}


def stop_event() -> Payload:
    return {"event": "stop"}


def data_event(record: SensorRecord) -> Payload:
    """Payload for a forwarded sample; values are already sanitized."""
    return {
        "event": "data",
        "type": record.channel.label,
        "timestamp": float(record.timestamp),
        "values": [float(v) for v in record.values],
    }
