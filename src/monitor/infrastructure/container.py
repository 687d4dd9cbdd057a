"""Dependency injection container for the monitor layer."""

from dependency_injector import containers, providers

from src.config import AppConfig
from src.monitor.application.context import MonitorContext
from src.monitor.application.device_catalog import DeviceCatalogService
from src.monitor.application.polling_loop import PollingLoop
from src.monitor.application.rolling_buffer import RollingSeriesBuffer
from src.monitor.application.threshold_evaluator import ThresholdEvaluator
from src.monitor.domain.models import SessionIdentity
from src.monitor.infrastructure.http_source import HttpDeviceDirectory, HttpReadingSource
from src.monitor.infrastructure.memory_source import InMemoryDeviceDirectory, InMemoryReadingSource
from src.monitor.infrastructure.sound import LoggingAlarmSound, SnapshotChartRenderer
from src.monitor.infrastructure.threshold_store import JsonThresholdStore


class MonitorContainer(containers.DeclarativeContainer):
    """Dependency injection container for the monitor layer."""

    config = providers.Configuration()

    # Infrastructure - Reading Source
    reading_source = providers.Selector(
        config.data_source.kind,
        http=providers.Singleton(
            HttpReadingSource,
            base_url=config.data_source.base_url,
            latest_path=config.data_source.latest_path,
            timeout_s=config.data_source.timeout_s,
            api_token=config.data_source.api_token,
        ),
        memory=providers.Singleton(InMemoryReadingSource),
    )

    # Infrastructure - Device Directory
    device_directory = providers.Selector(
        config.data_source.kind,
        http=providers.Singleton(
            HttpDeviceDirectory,
            base_url=config.data_source.base_url,
            identity_path=config.data_source.identity_path,
            devices_path=config.data_source.devices_path,
            tree_path=config.data_source.tree_path,
            timeout_s=config.data_source.timeout_s,
            api_token=config.data_source.api_token,
        ),
        memory=providers.Singleton(
            InMemoryDeviceDirectory,
            identity=providers.Factory(SessionIdentity, authenticated=True, username="admin", role="admin"),
        ),
    )

    # Infrastructure - Threshold Store
    threshold_store = providers.Singleton(
        JsonThresholdStore,
        storage_path=config.thresholds.path,
        storage_key=config.thresholds.storage_key,
    )

    # Infrastructure - UI collaborators
    alarm_sound = providers.Singleton(LoggingAlarmSound)
    chart_renderer = providers.Singleton(SnapshotChartRenderer)

    # Application
    context = providers.Singleton(
        MonitorContext,
        buffer=providers.Factory(RollingSeriesBuffer, capacity=config.chart.capacity),
    )

    polling_loop = providers.Singleton(
        PollingLoop,
        source=reading_source,
        thresholds=threshold_store,
        context=context,
        evaluator=providers.Factory(ThresholdEvaluator),
        sound=alarm_sound,
        renderer=chart_renderer,
        interval_s=config.polling.interval_s,
        redraw_interval_s=config.polling.redraw_interval_s,
    )

    device_catalog = providers.Factory(DeviceCatalogService, directory=device_directory)


# Global container instance
_container: MonitorContainer | None = None


def init_container(config: AppConfig) -> MonitorContainer:
    """Initialize the global container."""
    global _container
    _container = MonitorContainer()
    _container.config.from_dict(config.model_dump())
    return _container


def get_container() -> MonitorContainer:
    """Get the global container instance."""
    if _container is None:
        raise RuntimeError("Container not initialized. Call init_container() first.")
    return _container
