"""API routes for device selection."""

from fastapi import APIRouter, Depends, HTTPException

from src.api.domain.schemas import DeviceListResponse
from src.monitor.application.device_catalog import DeviceCatalogService
from src.monitor.domain.exceptions import DeviceDirectoryError
from src.monitor.infrastructure.container import get_container

router = APIRouter(prefix="/api/devices", tags=["devices"])


def get_device_catalog() -> DeviceCatalogService:
    """Get device catalog dependency."""
    return get_container().device_catalog()


@router.get("", response_model=DeviceListResponse)
async def list_selectable_devices(catalog: DeviceCatalogService = Depends(get_device_catalog)):
    """
    Devices the current session may select.

    Admins get every device of the City -> Branch -> Client tree with its
    path; regular users get their assigned devices.
    """
    try:
        identity = await catalog.identity()
        if not identity.authenticated:
            raise HTTPException(status_code=401, detail="Not authenticated")
        devices = await catalog.selectable_devices(identity)
    except DeviceDirectoryError as e:
        raise HTTPException(status_code=502, detail=e.message)

    return DeviceListResponse(
        identity=identity,
        view="tree" if identity.is_admin else "list",
        devices=devices,
        total=len(devices),
    )
