from __future__ import annotations

from collections import deque
from typing import Deque


class RateTracker:
    """
    Estimate a channel's delivery rate from recent sample timestamps.

    Timestamps are assumed to be monotonic seconds. The estimate covers the
    last ``window_size`` samples.
    """

    def __init__(self, window_size: int = 100, default_hz: float = 0.0) -> None:
        if window_size <= 1:
            raise ValueError("window_size must be > 1")
        self._times: Deque[float] = deque(maxlen=window_size)
        self.default_hz = float(default_hz)

    def add_sample_time(self, t: float) -> None:
        self._times.append(float(t))

    @property
    def estimated_hz(self) -> float:
        """Estimate Hz from the current timestamp window."""
        if len(self._times) < 2:
            return self.default_hz
        span = self._times[-1] - self._times[0]
        if span <= 0:
            return self.default_hz
        return (len(self._times) - 1) / span

    @property
    def buffer_size(self) -> int:
        return len(self._times)

    def reset(self) -> None:
        self._times.clear()
