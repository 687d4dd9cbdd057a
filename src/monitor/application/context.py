"""Explicit per-dashboard state owned by the polling loop."""

from dataclasses import dataclass, field
from datetime import datetime

from src.monitor.application.alarm_state import AlarmState
from src.monitor.application.device_session import DeviceSession
from src.monitor.application.rolling_buffer import RollingSeriesBuffer
from src.monitor.domain.models import Connectivity, DashboardState, Reading


@dataclass
class MonitorContext:
    """All mutable dashboard state, touched only from the loop's handlers."""

    session: DeviceSession = field(default_factory=DeviceSession)
    buffer: RollingSeriesBuffer = field(default_factory=RollingSeriesBuffer)
    alarms: AlarmState = field(default_factory=AlarmState)
    connectivity: Connectivity = Connectivity.UNKNOWN
    display_values: dict[str, str] = field(default_factory=dict)
    last_reading: Reading | None = None
    last_update: datetime | None = None

    def reset_for_device(self) -> None:
        """Entry action of a device selection. Mute and connectivity survive."""
        self.buffer.reset()
        self.alarms.clear()
        self.display_values = {}
        self.last_reading = None
        self.last_update = None

    def to_state(self) -> DashboardState:
        decision = self.alarms.decision()
        return DashboardState(
            selected_device_id=self.session.selected_device_id,
            connectivity=self.connectivity,
            last_update=self.last_update,
            display_values=dict(self.display_values),
            violations=self.alarms.ordered_violations(),
            severity=self.alarms.severity,
            banner_visible=decision.banner_visible,
            banner_text=decision.banner_text,
            status_text=decision.status_text,
            muted=self.alarms.muted,
            chart=self.buffer.snapshot(),
        )
