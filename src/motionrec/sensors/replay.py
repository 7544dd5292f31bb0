"""
Replay recorded motion data as a live sensor.

``parse_line()`` understands two line formats:

  - export CSV:  ``ACC,12.345678,0.012000,-0.981000,0.034000``
  - JSON lines:  ``{"type": "ACC", "timestamp": 12.3, "values": [x, y, z]}``

The export header line and blank lines yield ``None``, as do malformed lines
(logged at warning level) so callers can skip them without raising.
"""

from __future__ import annotations

import json
import logging
from collections import deque
from typing import Deque, Iterable, List, Optional

from ..core.models import Channel, SensorRecord
from ..core.record_log import HEADER
from .base import Reading, ThreadedSensor

logger = logging.getLogger(__name__)


def _parse_json_line(text: str) -> SensorRecord | None:
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Bad JSON in motion line: %r (%s)", text, exc)
        return None
    if not isinstance(obj, dict):
        logger.warning("Expected JSON object in motion line: %r", text)
        return None

    for name in ("type", "timestamp", "values"):
        if name not in obj:
            logger.warning("Missing field %s in motion line: %r", name, obj)
            return None

    try:
        channel = Channel.from_label(obj["type"])
        timestamp = float(obj["timestamp"])
        values = tuple(float(v) for v in obj["values"])
    except (TypeError, ValueError) as exc:
        logger.warning("Bad field value in motion line %r (%s)", obj, exc)
        return None
    return SensorRecord(channel, timestamp, values)


def _parse_csv_line(text: str) -> SensorRecord | None:
    parts = text.split(",")
    if len(parts) != 5:
        logger.warning("Expected 5 comma-separated fields, got %d: %r", len(parts), text)
        return None
    try:
        channel = Channel.from_label(parts[0])
        timestamp, x, y, z = map(float, parts[1:])
    except ValueError as exc:
        logger.warning("Bad CSV field in motion line %r (%s)", text, exc)
        return None
    return SensorRecord(channel, timestamp, (x, y, z))


def parse_line(line: str) -> SensorRecord | None:
    """Parse one export CSV or JSON line into a :class:`SensorRecord`."""
    text = line.strip()
    if not text or text == HEADER:
        return None
    if text[0] == "{":
        return _parse_json_line(text)
    return _parse_csv_line(text)


def parse_lines(lines: Iterable[str]) -> List[SensorRecord]:
    records: List[SensorRecord] = []
    for line in lines:
        record = parse_line(line)
        if record is not None:
            records.append(record)
    return records


class ReplaySensor(ThreadedSensor):
    """
    Deliver the recorded records of one channel at ``rate_hz``.

    Records of other channels are ignored. The original timestamps are kept,
    so a replayed export reproduces the recorded timing columns.
    """

    def __init__(self, channel: Channel, records: Iterable[SensorRecord], rate_hz: float = 100.0) -> None:
        super().__init__(channel, rate_hz)
        self._pending: Deque[SensorRecord] = deque(r for r in records if r.channel is channel)

    def __len__(self) -> int:
        return len(self._pending)

    def is_available(self) -> bool:
        return bool(self._pending) or self.is_running()

    def read(self) -> Optional[Reading]:
        if not self._pending:
            return None
        record = self._pending.popleft()
        return record.timestamp, record.values


def build_replay_sensors(records: Iterable[SensorRecord], rate_hz: float = 100.0) -> List[ReplaySensor]:
    """One replay source per channel; channels absent from ``records`` are unavailable."""
    items = list(records)
    return [ReplaySensor(channel, items, rate_hz) for channel in Channel]
