import pytest

from motionrec.core.decimation import DecimationRouter
from motionrec.core.models import Channel, SensorRecord
from motionrec.core.session import Session


def test_every_fifth_sample_is_forwarded() -> None:
    router = DecimationRouter(interval=5)
    results = [router.should_forward(Channel.ACCEL) for _ in range(12)]
    assert [i + 1 for i, r in enumerate(results) if r] == [5, 10]


def test_channels_count_independently() -> None:
    router = DecimationRouter(interval=5)
    for _ in range(4):
        assert not router.should_forward(Channel.ACCEL)
    # A burst on GYRO does not move the ACC counter.
    for _ in range(3):
        router.should_forward(Channel.GYRO)
    assert router.should_forward(Channel.ACCEL)
    assert router.counts()[Channel.GYRO] == 3
    assert router.counts()[Channel.MAG] == 0


def test_reset_zeroes_counters() -> None:
    router = DecimationRouter(interval=2)
    router.should_forward(Channel.MAG)
    router.reset()
    assert not router.should_forward(Channel.MAG)
    assert router.should_forward(Channel.MAG)


def test_interval_must_be_positive() -> None:
    with pytest.raises(ValueError):
        DecimationRouter(interval=0)


def test_session_rejected_sample_is_not_counted() -> None:
    session = Session(send_interval=1)
    result = session.ingest(SensorRecord(Channel.ACCEL, 0.0, (1.0, 2.0)))
    assert not result.stored and not result.forward
    assert session.router.counts()[Channel.ACCEL] == 0

    result = session.ingest(SensorRecord(Channel.ACCEL, 0.0, (1.0, 2.0, 3.0)))
    assert result.stored and result.forward
    assert session.log.count() == 1
