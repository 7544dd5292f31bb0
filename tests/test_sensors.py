from __future__ import annotations

import json
import threading
import time

import pytest

from motionrec.core.models import Channel, SensorRecord
from motionrec.sensors.base import SensorSource
from motionrec.sensors.replay import ReplaySensor, build_replay_sensors, parse_line, parse_lines
from motionrec.sensors.synthetic import SyntheticSensor, build_synthetic_sensors


class Collector:
    def __init__(self) -> None:
        self.samples: list[tuple[Channel, float, list[float]]] = []
        self._lock = threading.Lock()

    def __call__(self, channel, timestamp, values) -> None:
        with self._lock:
            self.samples.append((channel, timestamp, list(values)))

    def __len__(self) -> int:
        with self._lock:
            return len(self.samples)


def _wait_for(predicate, timeout: float = 3.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def test_parse_csv_line() -> None:
    record = parse_line("MAG,12.355000,22.100000,-5.300000,41.000000\n")
    assert record == SensorRecord(Channel.MAG, 12.355, (22.1, -5.3, 41.0))


def test_parse_json_line() -> None:
    line = json.dumps({"type": "MOTION", "timestamp": 3.5, "values": [0.1, 0.2, 0.3]})
    assert parse_line(line) == SensorRecord(Channel.ATTITUDE, 3.5, (0.1, 0.2, 0.3))


@pytest.mark.parametrize(
    "line",
    [
        "",
        "TYPE,TIMESTAMP,X,Y,Z",
        "ACC,1.0,2.0",
        "ACC,abc,1,2,3",
        "XYZ,1.0,1,2,3",
        "{not json",
        json.dumps([1, 2, 3]),
        json.dumps({"type": "ACC", "values": [1, 2, 3]}),
        json.dumps({"type": "ACC", "timestamp": "soon", "values": [1, 2, 3]}),
    ],
)
def test_unparseable_lines_return_none(line: str) -> None:
    assert parse_line(line) is None


def test_parse_lines_keeps_good_records() -> None:
    records = parse_lines(["TYPE,TIMESTAMP,X,Y,Z", "ACC,1,1,2,3", "junk", "GYRO,2,4,5,6"])
    assert [r.channel for r in records] == [Channel.ACCEL, Channel.GYRO]


def test_replay_sensor_delivers_its_channel_in_order() -> None:
    records = [SensorRecord(Channel.ACCEL, float(i), (i, 0.0, 0.0)) for i in range(10)]
    records.insert(3, SensorRecord(Channel.GYRO, 99.0, (1.0, 1.0, 1.0)))
    sensor = ReplaySensor(Channel.ACCEL, records, rate_hz=1000.0)
    assert isinstance(sensor, SensorSource)
    assert len(sensor) == 10

    collected = Collector()
    sensor.start(collected)
    assert _wait_for(lambda: len(collected) == 10)
    sensor.stop()

    assert [s[1] for s in collected.samples] == [float(i) for i in range(10)]
    assert all(s[0] is Channel.ACCEL for s in collected.samples)
    assert not sensor.is_available()


def test_build_replay_sensors_marks_missing_channels_unavailable() -> None:
    records = [SensorRecord(Channel.MAG, 0.0, (1.0, 2.0, 3.0))]
    available = {s.channel: s.is_available() for s in build_replay_sensors(records)}
    assert available == {
        Channel.ACCEL: False,
        Channel.GYRO: False,
        Channel.MAG: True,
        Channel.ATTITUDE: False,
    }


def test_synthetic_sensor_streams_until_stopped() -> None:
    sensor = SyntheticSensor(Channel.ACCEL, rate_hz=200.0, seed=1)
    collected = Collector()
    sensor.start(collected)
    assert _wait_for(lambda: len(collected) >= 5)
    sensor.stop()
    assert not sensor.is_running()

    count = len(collected)
    time.sleep(0.05)
    assert len(collected) == count

    timestamps = [s[1] for s in collected.samples]
    assert timestamps == sorted(timestamps)
    for _, _, values in collected.samples:
        assert len(values) == 3
        # Gravity on z for a device lying flat.
        assert values[2] == pytest.approx(-1.0, abs=0.2)


def test_callback_errors_do_not_kill_delivery() -> None:
    sensor = SyntheticSensor(Channel.GYRO, rate_hz=500.0, seed=2)
    calls = []

    def flaky(channel, timestamp, values) -> None:
        calls.append(timestamp)
        if len(calls) == 1:
            raise RuntimeError("first one fails")

    sensor.start(flaky)
    assert _wait_for(lambda: len(calls) >= 3)
    sensor.stop()


def test_unavailable_sensor_refuses_to_start() -> None:
    sensor = SyntheticSensor(Channel.MAG, available=False)
    assert not sensor.is_available()
    with pytest.raises(RuntimeError):
        sensor.start(lambda *args: None)


def test_build_synthetic_sensors_disabled_channels() -> None:
    sensors = build_synthetic_sensors(50.0, disabled=[Channel.MAG], seed=3)
    assert [s.channel for s in sensors] == list(Channel)
    assert [s.is_available() for s in sensors] == [True, True, False, True]


def test_rate_must_be_positive() -> None:
    with pytest.raises(ValueError):
        SyntheticSensor(Channel.ACCEL, rate_hz=0)
