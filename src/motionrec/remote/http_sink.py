"""Best-effort HTTP sink for recorder events.

Callers on sensor threads only enqueue payloads; a single background worker
performs the POSTs so a slow or unreachable collector never blocks ingestion.
Nothing is retried: a payload that fails to send is logged and dropped.
"""

from __future__ import annotations

import logging
import threading
import time
from queue import Empty, Full, Queue
from typing import Optional, Protocol, Tuple
from urllib.parse import urlparse

import requests

from .events import Payload

logger = logging.getLogger(__name__)

_STOP = object()
QueueItem = Tuple[str, Payload]


class EventSink(Protocol):
    """Interface the coordinator uses to publish start/stop/data events."""

    def send(self, payload: Payload) -> bool:  # pragma: no cover - protocol
        ...

    def close(self, timeout: float = 2.0) -> None:  # pragma: no cover - protocol
        ...


class NullEventSink:
    """No-op sink used when network forwarding is disabled."""

    def send(self, payload: Payload) -> bool:
        return False

    def close(self, timeout: float = 2.0) -> None:  # pragma: no cover - trivial
        return


def resolve_server_url(value: Optional[str]) -> Optional[str]:
    """
    Return ``value`` if it is a usable http(s) URL, else ``None``.

    Absent, blank, or unparseable values all mean "do not send".
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        parsed = urlparse(text)
    except ValueError:
        return None
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None
    return text


class HttpEventSink:
    """POST JSON payloads to the collector from a background worker thread."""

    def __init__(
        self,
        server_url: Optional[str] = None,
        *,
        timeout_s: float = 2.0,
        queue_size: int = 256,
        session: requests.Session | None = None,
    ) -> None:
        self._url = resolve_server_url(server_url)
        if server_url and self._url is None:
            logger.warning("Ignoring unusable server URL %r", server_url)
        self._timeout_s = max(0.05, float(timeout_s))
        self._queue: Queue = Queue(maxsize=max(1, int(queue_size)))
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()
        self._closed = False
        self.sent = 0
        self.failed = 0
        self.dropped = 0

    @property
    def server_url(self) -> Optional[str]:
        return self._url

    def set_server_url(self, server_url: Optional[str]) -> None:
        url = resolve_server_url(server_url)
        if server_url and url is None:
            logger.warning("Ignoring unusable server URL %r", server_url)
        self._url = url

    # ----------------------------------------------------------------- publish
    def send(self, payload: Payload) -> bool:
        """
        Queue ``payload`` for delivery; never blocks and never raises.

        Returns ``False`` when there is no server URL to send to or the sink
        has been closed.
        """
        url = self._url
        if url is None:
            logger.debug("No server URL set; skipping %s event", payload.get("event"))
            return False
        if not self._ensure_worker():
            logger.debug("HTTP sink closed; skipping %s event", payload.get("event"))
            return False
        self._offer((url, payload))
        return True

    def flush(self, timeout: float = 2.0) -> bool:
        """Wait until queued payloads were attempted. Returns ``True`` if drained."""
        deadline = time.monotonic() + max(0.0, timeout)
        while self._queue.unfinished_tasks:
            if time.monotonic() >= deadline:
                return False
            time.sleep(0.01)
        return True

    def close(self, timeout: float = 2.0) -> None:
        """Stop the worker after it drains what is already queued."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            thread = self._thread
            self._thread = None
        if thread is not None:
            self._offer(_STOP)
            thread.join(timeout)
            if thread.is_alive():
                logger.warning("HTTP sink worker did not stop within %.1f s", timeout)
        if self._owns_session:
            self._session.close()

    # ---------------------------------------------------------------- internal
    def _ensure_worker(self) -> bool:
        with self._lock:
            if self._closed:
                return False
            if self._thread is not None and self._thread.is_alive():
                return True
            self._thread = threading.Thread(
                target=self._run,
                name="MotionRecHttpSink",
                daemon=True,
            )
            self._thread.start()
            return True

    def _offer(self, item: object) -> None:
        """Best-effort put that drops the oldest payload when the queue is full."""
        try:
            self._queue.put_nowait(item)
            return
        except Full:
            pass
        try:
            self._queue.get_nowait()
            self._queue.task_done()
            self.dropped += 1
            logger.warning("HTTP sink queue full; dropped oldest payload")
        except Empty:
            pass
        try:
            self._queue.put_nowait(item)
        except Full:
            self.dropped += 1
            logger.warning("HTTP sink queue full; dropped payload")

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                url, payload = item
                self._post(url, payload)
            finally:
                self._queue.task_done()

    def _post(self, url: str, payload: Payload) -> None:
        try:
            response = self._session.post(
                url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self._timeout_s,
            )
        except requests.RequestException as exc:
            self.failed += 1
            logger.warning("Failed to send %s event to %s: %s", payload.get("event"), url, exc)
            return
        try:
            if response.status_code >= 400:
                self.failed += 1
                logger.debug(
                    "Collector answered %s to %s event", response.status_code, payload.get("event")
                )
            else:
                self.sent += 1
        finally:
            response.close()


__all__ = ["EventSink", "NullEventSink", "HttpEventSink", "resolve_server_url"]
