"""Utilities for loading exported motion recordings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

import numpy as np

from ..core.models import Channel, SensorRecord
from ..core.record_log import HEADER
from ..sensors.replay import parse_line

logger = logging.getLogger(__name__)


def load_export(path: Path) -> List[SensorRecord]:
    """
    Load every record from an export file.

    The first line must be the export header. Lines that fail to parse are
    logged and skipped.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as fh:
        first_line = fh.readline().strip()
        if first_line != HEADER:
            raise ValueError(f"{path} does not start with {HEADER!r}: {first_line!r}")
        records: List[SensorRecord] = []
        for lineno, raw in enumerate(fh, start=2):
            if not raw.strip():
                continue
            record = parse_line(raw)
            if record is None:
                logger.warning("Skipping unparseable line %d in %s", lineno, path)
                continue
            records.append(record)
    return records


def channel_array(records: Iterable[SensorRecord], channel: Channel) -> np.ndarray:
    """Return ``[timestamp, x, y, z]`` rows for ``channel`` as an (n, 4) array."""
    rows = [(r.timestamp, *r.values) for r in records if r.channel is channel]
    if not rows:
        return np.empty((0, 4))
    return np.asarray(rows, dtype=np.float64)
