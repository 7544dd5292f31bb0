"""Append-only, thread-safe log of sensor records with CSV-style export.

Up to four sensor delivery threads append concurrently while the control
thread takes snapshots for export. Every access goes through one RLock so a
snapshot never observes a torn record and append order is the order in which
callers acquired the lock.
"""

from __future__ import annotations

import logging
import threading
from typing import List

from .models import SensorRecord

logger = logging.getLogger(__name__)

HEADER = "TYPE,TIMESTAMP,X,Y,Z"


def format_record(record: SensorRecord) -> str:
    """Render one record as ``LABEL,ts,x,y,z`` with six decimals per number."""
    numbers = ",".join(f"{v:.6f}" for v in record.values)
    return f"{record.channel.label},{record.timestamp:.6f},{numbers}"


class RecordLog:
    """Ordered record store for a single recording session."""

    header = HEADER

    def __init__(self) -> None:
        self._records: List[SensorRecord] = []
        # Reentrant so a Session can hold it around append + decimation.
        self.lock = threading.RLock()

    def append(self, record: SensorRecord) -> bool:
        """
        Store ``record`` after validating and sanitizing it.

        Records without exactly three components are logged and ignored
        (returns ``False``). Non-finite components are replaced with 0.0 and
        the record is kept so timing alignment is preserved.
        """
        if not record.is_well_formed():
            logger.warning(
                "Invalid values count for %s: expected 3, got %d",
                record.channel.label,
                len(record.values),
            )
            return False

        clean = record.sanitized()
        if clean is not record:
            logger.warning(
                "Non-finite %s value(s) %r replaced with 0.0", record.channel.label, record.values
            )

        with self.lock:
            self._records.append(clean)
        return True

    def snapshot(self) -> List[SensorRecord]:
        """Return a point-in-time copy of the stored records."""
        with self.lock:
            return list(self._records)

    def snapshot_and_serialize(self) -> str:
        """
        Return the export text: header line then one line per record.

        The record list is copied under the append lock; formatting happens
        on the copy so writers are held up only for the copy itself.
        """
        records = self.snapshot()
        lines = [self.header]
        lines.extend(format_record(r) for r in records)
        return "\n".join(lines)

    serialize = snapshot_and_serialize

    def count(self) -> int:
        """Number of stored records (header excluded)."""
        with self.lock:
            return len(self._records)

    def __len__(self) -> int:
        return self.count()
