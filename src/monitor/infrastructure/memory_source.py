"""In-memory reading source and device directory for demos and tests."""

from loguru import logger

from src.monitor.domain.models import CityNode, DeviceRef, Reading, SessionIdentity
from src.monitor.domain.protocols import DeviceDirectory, ReadingSource


class InMemoryReadingSource(ReadingSource):
    """Serves the last published reading per device, zeroed when none exists."""

    def __init__(self, readings: list[Reading] | None = None):
        self.latest: dict[str, Reading] = {}
        for reading in readings or []:
            self.publish(reading)

    def publish(self, reading: Reading) -> None:
        """Store a reading as the latest one for its device."""
        current = self.latest.get(reading.device_id)
        if current is not None and current.timestamp > reading.timestamp:
            logger.debug(f"Ignoring out-of-order reading for {reading.device_id}")
            return
        self.latest[reading.device_id] = reading

    async def fetch_latest(self, device_id: str) -> Reading:
        reading = self.latest.get(device_id)
        if reading is None:
            return Reading.zeroed(device_id)
        return reading

    def __len__(self):
        return len(self.latest)


class InMemoryDeviceDirectory(DeviceDirectory):
    """Simple directory that returns pre-provided identity, assignments and tree."""

    def __init__(
        self,
        identity: SessionIdentity,
        assignments: dict[str, list[DeviceRef]] | None = None,
        tree: list[CityNode] | None = None,
    ):
        self.identity = identity
        self.assignments = assignments or {}
        self.tree = tree or []

    async def get_identity(self) -> SessionIdentity:
        return self.identity

    async def list_assigned_devices(self, username: str) -> list[DeviceRef]:
        return list(self.assignments.get(username, []))

    async def get_organization_tree(self) -> list[CityNode]:
        return list(self.tree)
