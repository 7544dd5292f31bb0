"""Acquisition coordinator: sensor fan-in, session lifecycle, and fan-out.

Sensor sources call :meth:`AcquisitionCoordinator.on_sample` from their own
delivery threads. Each sample is published as the channel's live reading,
appended to the active session's record log, and, every ``send_interval``
samples per channel, handed to the event sink. The sink only enqueues, so no
network I/O happens while the session lock is held.
"""

from __future__ import annotations

import logging
import threading
import time
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Optional, Sequence

from .analysis.rate import RateTracker
from .config.runtime import MotionConfig
from .core.models import Channel, LiveReading, SensorRecord
from .core.session import Session
from .dataio.export import unique_export_path, write_text_atomic
from .dataio.file_paths import export_directory
from .remote.events import Payload, data_event, start_event, stop_event
from .remote.http_sink import EventSink, HttpEventSink

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .sensors.base import SensorSource

logger = logging.getLogger(__name__)

LiveListener = Callable[[LiveReading], None]


class RecorderState(Enum):
    IDLE = "idle"
    RECORDING = "recording"


class AcquisitionCoordinator:
    """
    Own the start/stop lifecycle and route samples to storage and network.

    Parameters
    ----------
    sources:
        One :class:`~motionrec.sensors.base.SensorSource` per channel.
        Sources reporting themselves unavailable are skipped at start.
    sink:
        Destination for start/stop/data events. Defaults to an
        :class:`HttpEventSink` built from ``config``.
    config:
        Runtime configuration; see :meth:`configure` to change it later.
    export_dir:
        Directory for exported files. Falls back to ``config.export_dir`` and
        then to the application data directory.
    """

    def __init__(
        self,
        sources: Iterable[SensorSource] = (),
        *,
        sink: EventSink | None = None,
        config: MotionConfig | None = None,
        export_dir: str | Path | None = None,
    ) -> None:
        self._config = (config or MotionConfig()).sanitized()
        self._sources: List[SensorSource] = list(sources)
        if sink is None:
            sink = HttpEventSink(
                self._config.server_url,
                timeout_s=self._config.request_timeout_s,
                queue_size=self._config.send_queue_size,
            )
        self._sink: EventSink = sink
        self._explicit_export_dir = export_dir
        self._export_dir = export_directory(export_dir or self._config.export_dir)

        self._control_lock = threading.RLock()
        self._state = RecorderState.IDLE
        self._session: Optional[Session] = None
        self._subscribed: List[SensorSource] = []

        self._live_lock = threading.Lock()
        self._live: Dict[Channel, LiveReading] = {}
        self._rates: Dict[Channel, RateTracker] = {ch: RateTracker(window_size=200) for ch in Channel}
        self._listeners: List[LiveListener] = []

    # ------------------------------------------------------------ properties
    @property
    def state(self) -> RecorderState:
        return self._state

    @property
    def is_recording(self) -> bool:
        return self._state is RecorderState.RECORDING

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def config(self) -> MotionConfig:
        return self._config

    @property
    def export_dir(self) -> Path:
        return self._export_dir

    @property
    def subscribed_channels(self) -> List[Channel]:
        with self._control_lock:
            return [src.channel for src in self._subscribed]

    def configure(self, config: MotionConfig) -> None:
        """
        Replace the configuration.

        The server URL applies immediately; the send interval applies from
        the next :meth:`start`.
        """
        normalized = config.sanitized()
        with self._control_lock:
            self._config = normalized
            if hasattr(self._sink, "set_server_url"):
                self._sink.set_server_url(normalized.server_url)  # type: ignore[attr-defined]
            if self._explicit_export_dir is None and normalized.export_dir:
                self._export_dir = export_directory(normalized.export_dir)

    # ------------------------------------------------------------- lifecycle
    def start(self) -> bool:
        """Begin a new session. Returns ``False`` if already recording."""
        with self._control_lock:
            if self._state is RecorderState.RECORDING:
                return False

            session = Session(send_interval=self._config.send_interval)
            previous = self._session
            if previous is not None:
                with previous.lock:
                    self._session = session
            else:
                self._session = session
            self._state = RecorderState.RECORDING
            with self._live_lock:
                for tracker in self._rates.values():
                    tracker.reset()

            self._send(start_event())

            for source in self._sources:
                label = source.channel.label
                if not source.is_available():
                    logger.info("%s sensor unavailable; not recording it", label)
                    continue
                try:
                    source.start(self.on_sample)
                except Exception:
                    logger.exception("Failed to start %s sensor", label)
                    continue
                self._subscribed.append(source)

            logger.info(
                "Recording started with %d channel(s): %s",
                len(self._subscribed),
                ", ".join(src.channel.label for src in self._subscribed) or "none",
            )
            return True

    def stop(self) -> bool:
        """Unsubscribe all sensors and end the session. ``False`` if idle."""
        with self._control_lock:
            if self._state is RecorderState.IDLE:
                return False

            for source in self._subscribed:
                try:
                    source.stop()
                except Exception:
                    logger.exception("Failed to stop %s sensor", source.channel.label)
            self._subscribed.clear()

            self._state = RecorderState.IDLE
            session = self._session
            if session is not None:
                session.close()
            self._send(stop_event())
            logger.info(
                "Recording stopped; %d record(s) captured",
                session.log.count() if session is not None else 0,
            )
            return True

    def close(self, timeout: float = 2.0) -> None:
        """Stop recording if needed and shut the event sink down."""
        self.stop()
        try:
            self._sink.close(timeout)
        except Exception:
            logger.exception("Error closing event sink")

    def __enter__(self) -> AcquisitionCoordinator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ---------------------------------------------------------------- ingest
    def on_sample(self, channel: Channel | str, timestamp: float, values: Sequence[float]) -> None:
        """
        Entry point for sensor delivery threads.

        Samples arriving before the first :meth:`start` are dropped. A
        callback that fires after :meth:`stop` is still appended to the
        finished session, but is not forwarded to the network.
        """
        try:
            ch = channel if isinstance(channel, Channel) else Channel.from_label(channel)
            record = SensorRecord(ch, float(timestamp), tuple(float(v) for v in values))
        except (TypeError, ValueError) as exc:
            logger.warning("Dropping malformed %s sample: %s", channel, exc)
            return

        session = self._session
        if session is None:
            logger.debug("Sample for %s before any session; dropped", ch.label)
            return

        if record.is_well_formed():
            self._publish_live(record.sanitized())

        result = session.ingest(record)
        if result.forward and session.active:
            self._send(data_event(record.sanitized()))

    # ------------------------------------------------------------ live state
    def add_listener(self, listener: LiveListener) -> Callable[[], None]:
        """
        Call ``listener`` with every new live reading.

        Listeners run on the sensor delivery threads and must be quick.
        Returns a function that removes the listener.
        """
        with self._live_lock:
            self._listeners.append(listener)

        def _remove() -> None:
            with self._live_lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _remove

    def latest(self, channel: Channel) -> Optional[LiveReading]:
        with self._live_lock:
            return self._live.get(channel)

    def live_readings(self) -> Dict[Channel, LiveReading]:
        with self._live_lock:
            return dict(self._live)

    def record_count(self) -> int:
        session = self._session
        return session.log.count() if session is not None else 0

    def _publish_live(self, record: SensorRecord) -> None:
        with self._live_lock:
            tracker = self._rates[record.channel]
            tracker.add_sample_time(record.timestamp)
            reading = LiveReading(record=record, rate_hz=tracker.estimated_hz)
            self._live[record.channel] = reading
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(reading)
            except Exception:
                logger.exception("Error in live reading listener for %s", record.channel.label)

    # ---------------------------------------------------------------- export
    def export_file(self) -> Optional[Path]:
        """
        Write the current session's records to a new export file.

        Returns the written path, or ``None`` when there is no session yet or
        the write failed. A failed write never leaves a partial file behind.
        """
        session = self._session
        if session is None:
            logger.info("No recording to export")
            return None

        began = time.perf_counter()
        text = session.log.snapshot_and_serialize()
        n_records = text.count("\n")
        logger.debug(
            "Serialized %d record(s) in %.3f ms", n_records, (time.perf_counter() - began) * 1000.0
        )

        try:
            path = unique_export_path(self._export_dir)
            write_text_atomic(path, text)
        except OSError as exc:
            logger.error("Save failed: %s", exc)
            return None

        logger.info("Saved %d data points to %s", n_records, path)
        return path

    export = export_file

    # ------------------------------------------------------------- internals
    def _send(self, payload: Payload) -> None:
        try:
            self._sink.send(payload)
        except Exception:
            logger.exception("Event sink failed on %s event", payload.get("event"))
