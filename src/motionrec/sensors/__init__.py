"""Motion sensor sources.

Each source delivers one channel from its own thread through a
:data:`~motionrec.sensors.base.SampleCallback`. :mod:`synthetic` generates
plausible readings for running without hardware and :mod:`replay` plays an
exported recording back through the same path.
"""

from .base import SampleCallback, SensorSource, ThreadedSensor
from .replay import ReplaySensor, build_replay_sensors, parse_line
from .synthetic import SyntheticSensor, build_synthetic_sensors

__all__ = [
    "SampleCallback",
    "SensorSource",
    "ThreadedSensor",
    "SyntheticSensor",
    "build_synthetic_sensors",
    "ReplaySensor",
    "build_replay_sensors",
    "parse_line",
]
