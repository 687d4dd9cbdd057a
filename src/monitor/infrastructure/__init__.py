"""Infrastructure layer for the power monitor core."""

from src.monitor.infrastructure.http_source import HttpDeviceDirectory, HttpReadingSource
from src.monitor.infrastructure.logging import LoggingContext, configure_structured_logging
from src.monitor.infrastructure.memory_source import InMemoryDeviceDirectory, InMemoryReadingSource
from src.monitor.infrastructure.sound import LoggingAlarmSound, SnapshotChartRenderer
from src.monitor.infrastructure.threshold_store import InMemoryThresholdStore, JsonThresholdStore

__all__ = [
    "HttpDeviceDirectory",
    "HttpReadingSource",
    "LoggingContext",
    "configure_structured_logging",
    "InMemoryDeviceDirectory",
    "InMemoryReadingSource",
    "LoggingAlarmSound",
    "SnapshotChartRenderer",
    "InMemoryThresholdStore",
    "JsonThresholdStore",
]
