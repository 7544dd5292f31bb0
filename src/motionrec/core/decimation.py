"""Per-channel decimation deciding which samples are forwarded to the network."""

from __future__ import annotations

from typing import Dict

from .models import Channel

DEFAULT_SEND_INTERVAL = 5


class DecimationRouter:
    """
    Forward every ``interval``-th sample of each channel.

    Counters are independent per channel and start at zero, so with the
    default interval of 5 the 5th, 10th, 15th... sample of a channel is
    forwarded. The router holds no lock of its own; callers mutate it inside
    the session's critical section.
    """

    def __init__(self, interval: int = DEFAULT_SEND_INTERVAL) -> None:
        interval = int(interval)
        if interval < 1:
            raise ValueError(f"interval must be >= 1, got {interval}")
        self._interval = interval
        self._counters: Dict[Channel, int] = {ch: 0 for ch in Channel}

    @property
    def interval(self) -> int:
        return self._interval

    def should_forward(self, channel: Channel) -> bool:
        count = self._counters.get(channel, 0) + 1
        self._counters[channel] = count
        return count % self._interval == 0

    def counts(self) -> Dict[Channel, int]:
        return dict(self._counters)

    def reset(self) -> None:
        for ch in self._counters:
            self._counters[ch] = 0
