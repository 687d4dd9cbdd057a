"""Tests for configuration, container wiring and logging context."""

from __future__ import annotations

import asyncio

from loguru import logger

from src.config import AppConfig, ChartConfig, DataSourceConfig, PollingConfig, ThresholdStoreConfig
from src.monitor.application.polling_loop import PollingLoop
from src.monitor.domain.models import ThresholdSet
from src.monitor.infrastructure.container import get_container, init_container
from src.monitor.infrastructure.logging import (
    LoggingContext,
    _context_filter,
    configure_structured_logging,
    get_logging_context,
)
from src.monitor.infrastructure.memory_source import InMemoryReadingSource
from src.monitor.infrastructure.threshold_store import JsonThresholdStore


def _config(tmp_path) -> AppConfig:
    return AppConfig(
        polling=PollingConfig(interval_s=1.0, redraw_interval_s=None),
        chart=ChartConfig(capacity=5),
        data_source=DataSourceConfig(kind="memory"),
        thresholds=ThresholdStoreConfig(path=str(tmp_path), storage_key="site"),
    )


def test_defaults_match_dashboard_cadence() -> None:
    polling = PollingConfig()

    assert polling.interval_s == 2.0
    assert polling.redraw_interval_s == 5.0
    assert ChartConfig().capacity == 20


def test_container_wires_memory_stack(tmp_path) -> None:
    container = init_container(_config(tmp_path))

    loop = container.polling_loop()

    assert get_container() is container
    assert isinstance(loop, PollingLoop)
    assert loop is container.polling_loop()
    assert isinstance(loop.source, InMemoryReadingSource)
    assert isinstance(loop.thresholds, JsonThresholdStore)
    assert loop.thresholds.file_path == tmp_path / "site.json"
    assert loop.context.buffer.capacity == 5
    assert loop.interval_s == 1.0
    assert loop.redraw_interval_s is None


def test_container_device_catalog_defaults_to_admin(tmp_path) -> None:
    container = init_container(_config(tmp_path))

    identity = asyncio.run(container.device_catalog().identity())

    assert identity.is_admin
    assert container.threshold_store().load() == ThresholdSet.defaults()


def test_logging_context_is_attached_to_records() -> None:
    configure_structured_logging(level="DEBUG", log_file=None)
    records = []
    sink_id = logger.add(lambda message: records.append(dict(message.record["extra"])), filter=_context_filter)

    try:
        with LoggingContext(device_id="ESP32_01"):
            assert get_logging_context() == {"device_id": "ESP32_01"}
            logger.info("inside")
        logger.info("outside")
    finally:
        logger.remove(sink_id)

    assert records[0]["device_id"] == "ESP32_01"
    assert records[1]["device_id"] == "-"
    assert get_logging_context() == {}
