"""Shared dataclasses for motion channels, records, and live readings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import numpy as np

Vector3 = tuple[float, float, float]


class Channel(Enum):
    """The four motion streams, valued by their export/wire label."""

    ACCEL = "ACC"
    GYRO = "GYRO"
    MAG = "MAG"
    ATTITUDE = "MOTION"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, text: str) -> Channel:
        """
        Resolve ``text`` as either a wire label (``ACC``) or a member name
        (``accel``). Matching is case-insensitive.
        """
        key = str(text).strip().upper()
        for member in cls:
            if key in (member.value, member.name):
                return member
        raise ValueError(f"Unknown channel {text!r}")


def sanitize_values(values: Sequence[float]) -> tuple[tuple[float, ...], int]:
    """
    Replace NaN/Inf components with 0.0.

    Returns the cleaned tuple and how many components were replaced.
    """
    arr = np.asarray(values, dtype=np.float64).reshape(-1)
    bad = ~np.isfinite(arr)
    replaced = int(bad.sum())
    if replaced:
        arr = np.where(bad, 0.0, arr)
    return tuple(float(v) for v in arr), replaced


@dataclass(frozen=True, slots=True)
class SensorRecord:
    """One observation: channel, monotonic timestamp (s), and three components."""

    channel: Channel
    timestamp: float
    values: tuple[float, ...]

    def is_well_formed(self) -> bool:
        return len(self.values) == 3

    def sanitized(self) -> SensorRecord:
        """Return a copy with non-finite components zeroed (``self`` if clean)."""
        cleaned, replaced = sanitize_values(self.values)
        if not replaced:
            return self
        return SensorRecord(self.channel, self.timestamp, cleaned)


@dataclass(slots=True)
class LiveReading:
    """Latest sample for one channel plus its observed delivery rate."""

    record: SensorRecord
    rate_hz: float = 0.0

    @property
    def channel(self) -> Channel:
        return self.record.channel

    def describe(self) -> str:
        x, y, z = self.record.values
        if self.record.channel is Channel.ATTITUDE:
            names = ("roll", "pitch", "yaw")
        else:
            names = ("x", "y", "z")
        parts = ", ".join(f"{n}={v:.2f}" for n, v in zip(names, (x, y, z)))
        return f"{self.record.channel.label}: {parts} ({self.rate_hz:.1f} Hz)"
