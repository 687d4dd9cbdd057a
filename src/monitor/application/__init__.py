"""Application layer for the power monitor core."""

from src.monitor.application.alarm_state import AlarmState
from src.monitor.application.context import MonitorContext
from src.monitor.application.device_catalog import DeviceCatalogService, flatten_tree
from src.monitor.application.device_session import DeviceSession
from src.monitor.application.display import format_reading
from src.monitor.application.polling_loop import PollingLoop
from src.monitor.application.rolling_buffer import (
    CHART_SERIES,
    TRACKED_SERIES,
    RollingSeriesBuffer,
    sample_from_reading,
)
from src.monitor.application.threshold_evaluator import ThresholdEvaluator, evaluate

__all__ = [
    "AlarmState",
    "MonitorContext",
    "DeviceCatalogService",
    "flatten_tree",
    "DeviceSession",
    "format_reading",
    "PollingLoop",
    "CHART_SERIES",
    "TRACKED_SERIES",
    "RollingSeriesBuffer",
    "sample_from_reading",
    "ThresholdEvaluator",
    "evaluate",
]
