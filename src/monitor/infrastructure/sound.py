"""Headless alarm sound and chart renderer collaborators."""

from loguru import logger

from src.monitor.domain.models import ChartSnapshot
from src.monitor.domain.protocols import AlarmSound, ChartRenderer


class LoggingAlarmSound(AlarmSound):
    """Logs sound transitions instead of driving an audio device."""

    def __init__(self):
        self.playing = False

    def play(self) -> None:
        if not self.playing:
            logger.warning("🔔 Alarm sound on")
        self.playing = True

    def stop(self) -> None:
        if self.playing:
            logger.info("Alarm sound off")
        self.playing = False


class SnapshotChartRenderer(ChartRenderer):
    """Keeps the last rendered snapshot for clients that pull chart data."""

    def __init__(self):
        self.last_snapshot = ChartSnapshot()
        self.render_count = 0

    def render(self, snapshot: ChartSnapshot) -> None:
        self.last_snapshot = snapshot
        self.render_count += 1
        logger.debug(f"Chart redrawn with {len(snapshot.labels)} points")
