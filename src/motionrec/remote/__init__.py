"""Outbound communication with the remote collector.

:class:`HttpEventSink` posts start/stop/data events as JSON from a background
thread; :mod:`events` builds the payloads.
"""

from .events import data_event, start_event, stop_event
from .http_sink import EventSink, HttpEventSink, NullEventSink, resolve_server_url

__all__ = [
    "EventSink",
    "HttpEventSink",
    "NullEventSink",
    "resolve_server_url",
    "start_event",
    "stop_event",
    "data_event",
]
