"""Structured logging utilities with context management."""

import contextvars
import sys
from typing import Any

from loguru import logger


# Context variables carrying the device a log line is about
monitor_context: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar("monitor_context", default={})


class LoggingContext:
    """
    Context manager for structured logging with automatic context injection.

    Example:
        with LoggingContext(device_id="ESP32_01"):
            logger.info("Fetching latest reading")  # Will include device_id
    """

    def __init__(self, **context_data):
        self.context_data = context_data
        self.token = None

    def __enter__(self):
        current = monitor_context.get().copy()
        current.update(self.context_data)
        self.token = monitor_context.set(current)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token:
            monitor_context.reset(self.token)


def get_logging_context() -> dict[str, Any]:
    """Get a copy of the current logging context."""
    return monitor_context.get().copy()


def _context_filter(record) -> bool:
    """Add context variables to log record extras."""
    for key, value in monitor_context.get().items():
        record["extra"][key] = value
    return True


def configure_structured_logging(
    level: str = "INFO",
    log_file: str | None = "logs/monitor.log",
    rotation: str = "100 MB",
    retention: str = "30 days",
) -> None:
    """
    Configure loguru to include the device context in all log messages.

    This should be called once at application startup.
    """
    logger.remove()
    logger.configure(extra={"device_id": "-"})

    logger.add(
        sink=sys.stderr,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[device_id]}</cyan> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        ),
        filter=_context_filter,
        level=level,
        colorize=True,
    )

    if log_file:
        logger.add(
            sink=log_file,
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra} | {name}:{function}:{line} | {message}",
            filter=_context_filter,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            serialize=False,
        )
