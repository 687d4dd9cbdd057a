"""Protocols (interfaces) for the collaborators the monitor core depends on."""

from typing import Protocol, runtime_checkable

from src.monitor.domain.models import ChartSnapshot, CityNode, DeviceRef, Reading, SessionIdentity, ThresholdSet


@runtime_checkable
class ReadingSource(Protocol):
    """Interface for fetching the latest reading of a device."""

    async def fetch_latest(self, device_id: str) -> Reading:
        """
        Fetch the most recent reading for a device.

        Returns a zeroed reading when the device has not reported yet.

        Raises:
            ReadingFetchError: On network, auth or server errors
            MalformedReadingError: If the payload is not a complete reading
        """
        ...


@runtime_checkable
class ThresholdRepository(Protocol):
    """Interface for the persisted, installation-wide threshold configuration."""

    def load(self) -> ThresholdSet:
        """Load saved thresholds, falling back to defaults when absent or corrupt."""
        ...

    def save(self, thresholds: ThresholdSet) -> None:
        """Persist thresholds."""
        ...

    def reset(self) -> ThresholdSet:
        """Replace saved thresholds with the defaults and return them."""
        ...


class AlarmSound(Protocol):
    """Audio collaborator driven by alarm decisions."""

    def play(self) -> None:
        ...

    def stop(self) -> None:
        ...


class ChartRenderer(Protocol):
    """Chart collaborator receiving buffer snapshots."""

    def render(self, snapshot: ChartSnapshot) -> None:
        ...


class DeviceDirectory(Protocol):
    """Interface for session identity and the devices a user may select."""

    async def get_identity(self) -> SessionIdentity:
        """Current session identity and role."""
        ...

    async def list_assigned_devices(self, username: str) -> list[DeviceRef]:
        """Flat list of devices assigned to a regular user."""
        ...

    async def get_organization_tree(self) -> list[CityNode]:
        """Full City -> Branch -> Client -> Device hierarchy (admin only)."""
        ...
