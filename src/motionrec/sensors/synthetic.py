"""Synthetic motion sensors for benchmarking and running without hardware."""

from __future__ import annotations

import math
import time
from typing import Dict, Iterable, List, Optional

import numpy as np

from ..core.models import Channel
from .base import Reading, ThreadedSensor

# Per-channel (baseline, noise std) used to shape plausible readings.
_PROFILES: Dict[Channel, tuple[tuple[float, float, float], float]] = {
    Channel.ACCEL: ((0.0, 0.0, -1.0), 0.02),  # g, device lying flat
    Channel.GYRO: ((0.0, 0.0, 0.0), 0.005),  # rad/s
    Channel.MAG: ((22.0, -5.0, 41.0), 0.3),  # µT
    Channel.ATTITUDE: ((0.0, 0.0, 0.0), 0.001),  # rad
}


class SyntheticSensor(ThreadedSensor):
    """
    Generate readings for one channel from a baseline plus gaussian noise.

    The attitude channel additionally sweeps slowly in roll/pitch/yaw so
    replays show motion. Timestamps come from :func:`time.monotonic`.
    """

    def __init__(
        self,
        channel: Channel,
        rate_hz: float = 100.0,
        *,
        available: bool = True,
        seed: Optional[int] = None,
        noise: Optional[float] = None,
    ) -> None:
        super().__init__(channel, rate_hz, available=available)
        baseline, default_noise = _PROFILES[channel]
        self._baseline = np.asarray(baseline, dtype=np.float64)
        self._noise = float(default_noise if noise is None else noise)
        self._rng = np.random.default_rng(seed)
        self._t0 = time.monotonic()

    def read(self) -> Reading:
        now = time.monotonic()
        values = self._baseline + self._rng.normal(0.0, self._noise, size=3)
        if self.channel is Channel.ATTITUDE:
            phase = 2.0 * math.pi * 0.1 * (now - self._t0)
            values = values + np.array([0.3 * math.sin(phase), 0.2 * math.cos(phase), phase % (2 * math.pi) - math.pi])
        return now, values.tolist()


def build_synthetic_sensors(
    rate_hz: float = 100.0,
    *,
    disabled: Iterable[Channel] = (),
    seed: Optional[int] = None,
) -> List[SyntheticSensor]:
    """Return one synthetic source per channel; ``disabled`` ones report unavailable."""
    off = set(disabled)
    sensors: List[SyntheticSensor] = []
    for i, channel in enumerate(Channel):
        sensors.append(
            SyntheticSensor(
                channel,
                rate_hz,
                available=channel not in off,
                seed=None if seed is None else seed + i,
            )
        )
    return sensors
