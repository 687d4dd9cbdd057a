"""Role-gated list of devices the current user can select."""

from loguru import logger

from src.monitor.domain.exceptions import DeviceDirectoryError
from src.monitor.domain.models import CityNode, DeviceOption, SessionIdentity
from src.monitor.domain.protocols import DeviceDirectory


def flatten_tree(cities: list[CityNode]) -> list[DeviceOption]:
    """Walk City -> Branch -> Client -> Device, keeping the path of each device."""
    options = []
    for city in cities:
        for branch in city.branches:
            for client in branch.clients:
                for device in client.devices:
                    options.append(
                        DeviceOption(
                            device_id=device.device_id,
                            name=device.name or device.device_id,
                            path=[city.name, branch.name, client.name],
                        )
                    )
    return options


class DeviceCatalogService:
    """
    Populates device selection.

    Admins pick from the whole organisational tree, regular users from their
    assigned devices. The choice does not affect polling or alarms.
    """

    def __init__(self, directory: DeviceDirectory):
        self.directory = directory

    async def identity(self) -> SessionIdentity:
        return await self.directory.get_identity()

    async def selectable_devices(self, identity: SessionIdentity | None = None) -> list[DeviceOption]:
        """
        List devices for the given (or current) identity.

        Raises:
            DeviceDirectoryError: If the session is not authenticated or lookups fail
        """
        identity = identity or await self.directory.get_identity()
        if not identity.authenticated:
            raise DeviceDirectoryError("Session is not authenticated", details={"username": identity.username})

        if identity.is_admin:
            options = flatten_tree(await self.directory.get_organization_tree())
        else:
            devices = await self.directory.list_assigned_devices(identity.username or "")
            options = [DeviceOption(device_id=d.device_id, name=d.name or d.device_id) for d in devices]

        logger.debug(f"{len(options)} selectable devices for {identity.username} ({identity.role.value})")
        return options
