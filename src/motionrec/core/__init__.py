"""Core recording primitives: records, the session log, and decimation.

This package sits underneath the acquisition coordinator: sensor threads hand
it records, :class:`RecordLog` keeps them in order for export, and
:class:`DecimationRouter` picks the subset that is forwarded to the network.
"""

from .decimation import DEFAULT_SEND_INTERVAL, DecimationRouter
from .models import Channel, LiveReading, SensorRecord, sanitize_values
from .record_log import HEADER, RecordLog, format_record
from .session import IngestResult, Session

__all__ = [
    "Channel",
    "SensorRecord",
    "LiveReading",
    "sanitize_values",
    "RecordLog",
    "HEADER",
    "format_record",
    "DecimationRouter",
    "DEFAULT_SEND_INTERVAL",
    "Session",
    "IngestResult",
]
