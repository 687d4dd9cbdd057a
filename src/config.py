"""Configuration for the application."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PollingConfig(BaseSettings):
    """Configuration for the polling loop."""

    model_config = SettingsConfigDict(env_prefix="POLLING_", env_file=".env", extra="ignore", env_parse_none_str="none")

    interval_s: float = Field(default=2.0, gt=0, description="Seconds between latest-reading fetches")
    redraw_interval_s: float | None = Field(
        default=5.0, gt=0, description="Seconds between chart redraws ('none' to redraw after every fetch)"
    )


class ChartConfig(BaseSettings):
    """Configuration for the rolling chart window."""

    model_config = SettingsConfigDict(env_prefix="CHART_", env_file=".env", extra="ignore")

    capacity: int = Field(default=20, ge=1, description="Samples kept per series")


class DataSourceConfig(BaseSettings):
    """Configuration for the telemetry server the dashboard reads from."""

    model_config = SettingsConfigDict(env_prefix="DATA_SOURCE_", env_file=".env", extra="ignore")

    kind: Literal["http", "memory"] = Field(default="http", description="Reading source implementation")
    base_url: str = Field(default="http://localhost:3000", description="Telemetry server base URL")
    latest_path: str = Field(default="/api/data/latest", description="Latest-reading endpoint")
    identity_path: str = Field(default="/api/session", description="Session identity endpoint")
    devices_path: str = Field(default="/api/user/devices", description="Assigned devices endpoint")
    tree_path: str = Field(default="/api/hierarchy", description="Organisation tree endpoint")
    timeout_s: float = Field(default=5.0, gt=0, description="HTTP request timeout in seconds")
    api_token: str | None = Field(default=None, description="Bearer token for the telemetry server")


class ThresholdStoreConfig(BaseSettings):
    """Configuration for persisted alarm thresholds."""

    model_config = SettingsConfigDict(env_prefix="THRESHOLDS_", env_file=".env", extra="ignore")

    path: str = Field(default="./storage", description="Directory holding the settings file")
    storage_key: str = Field(default="powerMonitorAlarmSettings", description="Settings file key")


class LoggingConfig(BaseSettings):
    """Configuration for logging."""

    model_config = SettingsConfigDict(env_prefix="LOG_", env_file=".env", extra="ignore", env_parse_none_str="none")

    level: str = Field(default="INFO", description="Minimum log level")
    file: str | None = Field(default="logs/monitor.log", description="Log file path ('none' to disable)")
    rotation: str = Field(default="100 MB", description="Log file rotation size")
    retention: str = Field(default="30 days", description="Log file retention")


class ApiConfig(BaseSettings):
    """Configuration for the HTTP API."""

    model_config = SettingsConfigDict(env_prefix="API_", env_file=".env", extra="ignore")

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, description="Bind port")


class AppConfig(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    polling: PollingConfig = Field(default_factory=PollingConfig)
    chart: ChartConfig = Field(default_factory=ChartConfig)
    data_source: DataSourceConfig = Field(default_factory=DataSourceConfig)
    thresholds: ThresholdStoreConfig = Field(default_factory=ThresholdStoreConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
