"""Sensor source interface and a threaded delivery loop shared by sources."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional, Protocol, Sequence, Tuple, runtime_checkable

from ..core.models import Channel

logger = logging.getLogger(__name__)

SampleCallback = Callable[[Channel, float, Sequence[float]], None]
Reading = Tuple[float, Sequence[float]]


@runtime_checkable
class SensorSource(Protocol):
    """One subscribable sensor channel."""

    channel: Channel

    def is_available(self) -> bool:  # pragma: no cover - protocol
        ...

    def start(self, callback: SampleCallback) -> None:  # pragma: no cover - protocol
        ...

    def stop(self) -> None:  # pragma: no cover - protocol
        ...


class ThreadedSensor:
    """
    Deliver readings for one channel from a dedicated daemon thread.

    Subclasses implement :meth:`read`, returning ``(timestamp, values)`` or
    ``None`` when the source is exhausted. Reads are paced at ``rate_hz``.
    """

    def __init__(self, channel: Channel, rate_hz: float, *, available: bool = True) -> None:
        if rate_hz <= 0:
            raise ValueError("rate_hz must be positive.")
        self.channel = channel
        self.rate_hz = float(rate_hz)
        self._available = bool(available)
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self.delivered = 0

    def is_available(self) -> bool:
        return self._available

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def read(self) -> Optional[Reading]:  # pragma: no cover - abstract
        raise NotImplementedError

    def start(self, callback: SampleCallback) -> None:
        if not self._available:
            raise RuntimeError(f"{self.channel.label} sensor is not available")
        if self.is_running():
            return
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._loop,
            args=(callback, self._stop_event),
            name=f"MotionRecSensor({self.channel.label})",
            daemon=True,
        )
        self._thread.start()

    def stop(self, timeout: float = 1.0) -> None:
        """Signal the delivery thread and wait for it to finish."""
        self._stop_event.set()
        thread = self._thread
        self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            if thread.is_alive():
                logger.warning("%s delivery thread still running after stop", self.channel.label)

    def _loop(self, callback: SampleCallback, stop_event: threading.Event) -> None:
        period = 1.0 / self.rate_hz
        next_due = time.monotonic()
        while not stop_event.is_set():
            try:
                reading = self.read()
            except Exception:
                logger.exception("Error reading %s sensor", self.channel.label)
                break
            if reading is None:
                break
            timestamp, values = reading
            try:
                callback(self.channel, timestamp, values)
            except Exception:
                logger.exception("Error in %s sample callback", self.channel.label)
            self.delivered += 1

            next_due += period
            delay = next_due - time.monotonic()
            if delay > 0:
                stop_event.wait(delay)
            else:
                # Fell behind; resync instead of bursting to catch up.
                next_due = time.monotonic()
