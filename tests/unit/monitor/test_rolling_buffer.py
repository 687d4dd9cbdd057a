"""Unit tests for the rolling chart buffer."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.monitor.application.rolling_buffer import (
    CHART_SERIES,
    TRACKED_SERIES,
    RollingSeriesBuffer,
    sample_from_reading,
)
from src.monitor.domain.exceptions import PartialSampleError
from src.monitor.domain.models import SeriesSample


def _sample(i: int, series: tuple[str, ...] = ("a", "b", "c")) -> SeriesSample:
    return SeriesSample(label=f"t{i}", values={name: float(i * 10 + k) for k, name in enumerate(series)})


def test_keeps_last_twenty_samples_oldest_first() -> None:
    buffer = RollingSeriesBuffer(series=("a", "b", "c"))

    for i in range(25):
        buffer.push(_sample(i))

    assert len(buffer) == 20
    assert buffer.labels == [f"t{i}" for i in range(5, 25)]
    assert buffer.series["a"] == [float(i * 10) for i in range(5, 25)]
    assert buffer.series["c"] == [float(i * 10 + 2) for i in range(5, 25)]


def test_series_lengths_stay_synchronized() -> None:
    buffer = RollingSeriesBuffer(series=("a", "b", "c"), capacity=7)

    for i in range(30):
        buffer.push(_sample(i))
        lengths = {len(values) for values in buffer.series.values()}
        assert lengths == {len(buffer.labels)}
        assert len(buffer.labels) == min(i + 1, 7)


def test_partial_sample_is_rejected_without_side_effects() -> None:
    buffer = RollingSeriesBuffer(series=("a", "b", "c"))
    buffer.push(_sample(0))

    with pytest.raises(PartialSampleError) as exc_info:
        buffer.push(SeriesSample(label="t1", values={"a": 1.0, "b": 2.0}))

    assert exc_info.value.details["missing"] == ["c"]
    assert buffer.labels == ["t0"]
    assert all(len(values) == 1 for values in buffer.series.values())


def test_unexpected_series_is_rejected() -> None:
    buffer = RollingSeriesBuffer(series=("a",))

    with pytest.raises(PartialSampleError):
        buffer.push(SeriesSample(label="t0", values={"a": 1.0, "z": 2.0}))

    assert len(buffer) == 0


def test_reset_clears_everything_and_keeps_capacity() -> None:
    buffer = RollingSeriesBuffer(series=("a", "b", "c"), capacity=3)
    for i in range(5):
        buffer.push(_sample(i))

    buffer.reset()

    assert len(buffer) == 0
    assert all(values == [] for values in buffer.series.values())
    assert buffer.capacity == 3

    for i in range(4):
        buffer.push(_sample(i))
    assert buffer.labels == ["t1", "t2", "t3"]


def test_snapshot_is_a_copy() -> None:
    buffer = RollingSeriesBuffer(series=("a", "b", "c"))
    buffer.push(_sample(1))

    snapshot = buffer.snapshot()
    buffer.push(_sample(2))

    assert snapshot.labels == ["t1"]
    assert snapshot.series["a"] == [10.0]


def test_invalid_configuration_is_rejected() -> None:
    with pytest.raises(ValueError):
        RollingSeriesBuffer(capacity=0)
    with pytest.raises(ValueError):
        RollingSeriesBuffer(series=("a", "a"))


def test_sample_from_reading_covers_every_chart_series(make_reading) -> None:
    reading = make_reading(currents__Ia=61.5, activePower__Total=40.0)

    sample = sample_from_reading(reading)

    assert sample.label == "12:00:00"
    assert set(sample.values) == set(TRACKED_SERIES)
    assert sample.values["Ia"] == 61.5
    assert sample.values["Total"] == 40.0
    assert CHART_SERIES["voltage"] == ("Ua", "Ub", "Uc")

    buffer = RollingSeriesBuffer()
    buffer.push(sample)
    assert buffer.capacity == 20
    assert buffer.snapshot().series["Ia"] == [61.5]


def test_sample_label_prefers_receive_time(make_reading) -> None:
    reading = make_reading()

    sample = sample_from_reading(reading, received_at=datetime(2024, 3, 1, 18, 45, 7, tzinfo=timezone.utc))

    assert sample.label == "18:45:07"
