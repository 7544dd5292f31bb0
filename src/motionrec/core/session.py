"""State for one start-to-stop recording."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import NamedTuple

from .decimation import DEFAULT_SEND_INTERVAL, DecimationRouter
from .models import SensorRecord
from .record_log import RecordLog


class IngestResult(NamedTuple):
    stored: bool
    forward: bool


@dataclass
class Session:
    """
    Owns the record log and send counters of a recording.

    The log's lock is the single serialization point for the session: the
    append and the decimation check for one sample happen together under it.
    """

    send_interval: int = DEFAULT_SEND_INTERVAL
    started_at: datetime = field(default_factory=datetime.now)
    started_monotonic: float = field(default_factory=time.monotonic)
    log: RecordLog = field(init=False)
    router: DecimationRouter = field(init=False)
    active: bool = field(init=False, default=True)

    def __post_init__(self) -> None:
        self.log = RecordLog()
        self.router = DecimationRouter(self.send_interval)

    @property
    def lock(self):
        return self.log.lock

    def ingest(self, record: SensorRecord) -> IngestResult:
        """Append ``record`` and decide whether it is forwarded, as one step."""
        with self.log.lock:
            if not self.log.append(record):
                return IngestResult(stored=False, forward=False)
            return IngestResult(stored=True, forward=self.router.should_forward(record.channel))

    def close(self) -> None:
        with self.log.lock:
            self.active = False
