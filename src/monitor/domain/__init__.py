"""Domain layer for the power monitor core."""

from src.monitor.domain.exceptions import (
    DeviceDirectoryError,
    MalformedReadingError,
    MonitorException,
    ParameterMappingError,
    PartialSampleError,
    ReadingError,
    ReadingFetchError,
    ThresholdConfigError,
)
from src.monitor.domain.models import (
    AlarmDecision,
    ChartSnapshot,
    Connectivity,
    DashboardState,
    ParameterName,
    Reading,
    Role,
    SeriesSample,
    SessionIdentity,
    ThresholdLimits,
    ThresholdSet,
)
from src.monitor.domain.protocols import (
    AlarmSound,
    ChartRenderer,
    DeviceDirectory,
    ReadingSource,
    ThresholdRepository,
)

__all__ = [
    "AlarmDecision",
    "ChartSnapshot",
    "Connectivity",
    "DashboardState",
    "ParameterName",
    "Reading",
    "Role",
    "SeriesSample",
    "SessionIdentity",
    "ThresholdLimits",
    "ThresholdSet",
    "AlarmSound",
    "ChartRenderer",
    "DeviceDirectory",
    "ReadingSource",
    "ThresholdRepository",
    "MonitorException",
    "ReadingError",
    "ReadingFetchError",
    "MalformedReadingError",
    "ThresholdConfigError",
    "ParameterMappingError",
    "PartialSampleError",
    "DeviceDirectoryError",
]
