"""Fixed-capacity rolling buffer feeding the dashboard charts."""

from datetime import datetime

from loguru import logger

from src.monitor.domain.exceptions import PartialSampleError
from src.monitor.domain.models import ChartSnapshot, Reading, SeriesSample

DEFAULT_CAPACITY = 20

# Chart name -> series it draws. Series names are unique across charts.
CHART_SERIES: dict[str, tuple[str, ...]] = {
    "voltage": ("Ua", "Ub", "Uc"),
    "current": ("Ia", "Ib", "Ic", "In"),
    "power": ("Pa", "Pb", "Pc", "Total"),
}

TRACKED_SERIES: tuple[str, ...] = tuple(name for names in CHART_SERIES.values() for name in names)


def sample_from_reading(
    reading: Reading, received_at: datetime | None = None, label_format: str = "%H:%M:%S"
) -> SeriesSample:
    """
    Build the per-tick chart sample for every tracked series.

    The label is the time the reading was received, so a device that stops
    reporting still advances the time axis. Without `received_at` the reading
    timestamp is used.
    """
    return SeriesSample(
        label=(received_at or reading.timestamp).strftime(label_format),
        values={
            "Ua": reading.voltages.Ua,
            "Ub": reading.voltages.Ub,
            "Uc": reading.voltages.Uc,
            "Ia": reading.currents.Ia,
            "Ib": reading.currents.Ib,
            "Ic": reading.currents.Ic,
            "In": reading.currents.In,
            "Pa": reading.active_power.Pa,
            "Pb": reading.active_power.Pb,
            "Pc": reading.active_power.Pc,
            "Total": reading.active_power.Total,
        },
    )


class RollingSeriesBuffer:
    """
    Synchronized FIFO window over a fixed set of series.

    Every push appends exactly one value to every series and one label, so
    all sequences always share the same length. Once the window is full the
    oldest entry is evicted from all of them before appending.
    """

    def __init__(self, series: tuple[str, ...] = TRACKED_SERIES, capacity: int = DEFAULT_CAPACITY):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        if len(set(series)) != len(series):
            raise ValueError(f"series names must be unique: {series}")

        self.capacity = capacity
        self.series_names = tuple(series)
        self.labels: list[str] = []
        self.series: dict[str, list[float]] = {name: [] for name in self.series_names}

    def __len__(self) -> int:
        return len(self.labels)

    def push(self, sample: SeriesSample) -> None:
        """
        Append one sample, evicting the oldest when full.

        Raises:
            PartialSampleError: If the sample does not carry exactly the tracked series
        """
        missing = [name for name in self.series_names if name not in sample.values]
        unexpected = [name for name in sample.values if name not in self.series]
        if missing or unexpected:
            raise PartialSampleError(missing=missing, unexpected=unexpected)

        if len(self.labels) >= self.capacity:
            self.labels.pop(0)
            for values in self.series.values():
                values.pop(0)

        self.labels.append(sample.label)
        for name, values in self.series.items():
            values.append(float(sample.values[name]))

    def reset(self) -> None:
        """Drop all samples; capacity and tracked series are kept."""
        self.labels.clear()
        for values in self.series.values():
            values.clear()
        logger.debug("Rolling buffer reset")

    def snapshot(self) -> ChartSnapshot:
        """Copy of the current window, safe to hand to a renderer."""
        return ChartSnapshot(
            labels=list(self.labels),
            series={name: list(values) for name, values in self.series.items()},
        )
