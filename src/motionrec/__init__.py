"""Motion sensor recorder.

Samples accelerometer, gyroscope, magnetometer and attitude streams into a
per-session record log, forwards a decimated subset to a remote collector,
and exports the full-rate log as CSV.
"""

from .coordinator import AcquisitionCoordinator, RecorderState

__all__ = ["AcquisitionCoordinator", "RecorderState"]
