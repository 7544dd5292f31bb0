import math

import pytest

from motionrec.analysis.rate import RateTracker
from motionrec.core.models import Channel, LiveReading, SensorRecord, sanitize_values


def test_rate_tracker_estimates_rate_for_regular_samples() -> None:
    rt = RateTracker(window_size=100)
    t = 0.0
    for _ in range(100):
        rt.add_sample_time(t)
        t += 0.01  # 100 Hz
    assert 90.0 < rt.estimated_hz < 110.0


def test_rate_tracker_defaults_until_two_samples() -> None:
    rt = RateTracker(window_size=10, default_hz=5.0)
    assert rt.estimated_hz == 5.0
    rt.add_sample_time(1.0)
    assert rt.estimated_hz == 5.0
    rt.reset()
    assert rt.buffer_size == 0


def test_channel_labels() -> None:
    assert [c.label for c in Channel] == ["ACC", "GYRO", "MAG", "MOTION"]
    assert Channel.from_label("motion") is Channel.ATTITUDE
    assert Channel.from_label("attitude") is Channel.ATTITUDE
    assert Channel.from_label(" acc ") is Channel.ACCEL
    with pytest.raises(ValueError):
        Channel.from_label("baro")


def test_sanitize_values_counts_replacements() -> None:
    cleaned, replaced = sanitize_values([1.0, math.nan, -math.inf])
    assert cleaned == (1.0, 0.0, 0.0)
    assert replaced == 2


def test_clean_record_is_returned_unchanged() -> None:
    record = SensorRecord(Channel.GYRO, 1.0, (0.1, 0.2, 0.3))
    assert record.sanitized() is record


def test_record_is_immutable() -> None:
    record = SensorRecord(Channel.GYRO, 1.0, (0.1, 0.2, 0.3))
    with pytest.raises(AttributeError):
        record.timestamp = 2.0  # type: ignore[misc]


def test_live_reading_description() -> None:
    reading = LiveReading(SensorRecord(Channel.ATTITUDE, 1.0, (0.1, 0.2, 0.3)), rate_hz=99.5)
    assert reading.describe() == "MOTION: roll=0.10, pitch=0.20, yaw=0.30 (99.5 Hz)"
    accel = LiveReading(SensorRecord(Channel.ACCEL, 1.0, (0.0, 0.0, -1.0)))
    assert accel.describe().startswith("ACC: x=0.00, y=0.00, z=-1.00")
