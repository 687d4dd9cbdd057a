"""Power monitor dashboard core package."""

from src.monitor.application import (
    AlarmState,
    DeviceSession,
    MonitorContext,
    PollingLoop,
    RollingSeriesBuffer,
    ThresholdEvaluator,
    format_reading,
)
from src.monitor.domain import AlarmDecision, DashboardState, ParameterName, Reading, ThresholdSet
from src.monitor.infrastructure import (
    HttpReadingSource,
    InMemoryReadingSource,
    JsonThresholdStore,
)

__all__ = [
    "AlarmState",
    "DeviceSession",
    "MonitorContext",
    "PollingLoop",
    "RollingSeriesBuffer",
    "ThresholdEvaluator",
    "format_reading",
    "AlarmDecision",
    "DashboardState",
    "ParameterName",
    "Reading",
    "ThresholdSet",
    "HttpReadingSource",
    "InMemoryReadingSource",
    "JsonThresholdStore",
]
