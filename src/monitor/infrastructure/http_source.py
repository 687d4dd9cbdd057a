"""HTTP implementations of the reading source and device directory."""

import asyncio
from datetime import datetime, timezone
from typing import Any

import requests
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from src.monitor.domain.exceptions import DeviceDirectoryError, MalformedReadingError, ReadingFetchError
from src.monitor.domain.models import CityNode, DeviceRef, Reading, SessionIdentity
from src.monitor.domain.protocols import DeviceDirectory, ReadingSource


class _HttpClient:
    """Shared requests session with base URL, bearer token and timeout."""

    def __init__(self, base_url: str, timeout_s: float = 5.0, api_token: str | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.session = requests.Session()
        self.session.headers["Accept"] = "application/json"
        if api_token:
            self.session.headers["Authorization"] = f"Bearer {api_token}"

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET a JSON document without blocking the event loop."""
        response = await asyncio.to_thread(
            self.session.get, self.url(path), params=params, timeout=self.timeout_s
        )
        response.raise_for_status()
        return response.json()

    def close(self) -> None:
        self.session.close()


class HttpReadingSource(ReadingSource):
    """Fetches the latest reading of a device from the telemetry server."""

    def __init__(
        self,
        base_url: str,
        latest_path: str = "/api/data/latest",
        timeout_s: float = 5.0,
        api_token: str | None = None,
    ):
        """
        Initialize HTTP reading source.

        Args:
            base_url: Telemetry server base URL
            latest_path: Path of the latest-reading endpoint (device passed as ?deviceId=)
            timeout_s: Per-request timeout in seconds
            api_token: Optional bearer token for authenticated servers
        """
        self.client = _HttpClient(base_url, timeout_s=timeout_s, api_token=api_token)
        self.latest_path = latest_path
        logger.info(f"HTTP reading source at {self.client.url(latest_path)}")

    async def fetch_latest(self, device_id: str) -> Reading:
        try:
            payload = await self.client.get_json(self.latest_path, params={"deviceId": device_id})
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise ReadingFetchError(device_id, f"HTTP {status}", status_code=status) from e
        except requests.JSONDecodeError as e:
            raise MalformedReadingError(f"Latest reading for {device_id} is not valid JSON: {e}") from e
        except requests.RequestException as e:
            raise ReadingFetchError(device_id, str(e)) from e

        reading = Reading.from_payload(payload, device_id=device_id, received_at=datetime.now(timezone.utc))
        return reading.ensure_device(device_id)

    def close(self) -> None:
        self.client.close()


_DEVICE_LIST = TypeAdapter(list[DeviceRef])
_CITY_LIST = TypeAdapter(list[CityNode])


class HttpDeviceDirectory(DeviceDirectory):
    """Reads session identity, assigned devices and the organisation tree over HTTP."""

    def __init__(
        self,
        base_url: str,
        identity_path: str = "/api/session",
        devices_path: str = "/api/user/devices",
        tree_path: str = "/api/hierarchy",
        timeout_s: float = 5.0,
        api_token: str | None = None,
    ):
        self.client = _HttpClient(base_url, timeout_s=timeout_s, api_token=api_token)
        self.identity_path = identity_path
        self.devices_path = devices_path
        self.tree_path = tree_path

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        try:
            return await self.client.get_json(path, params=params)
        except requests.RequestException as e:
            raise DeviceDirectoryError(f"Directory request to {path} failed: {e}", details={"path": path}) from e

    async def get_identity(self) -> SessionIdentity:
        payload = await self._get(self.identity_path)
        try:
            return SessionIdentity.model_validate(payload)
        except ValidationError as e:
            raise DeviceDirectoryError("Invalid session identity payload", details={"errors": e.errors()}) from e

    async def list_assigned_devices(self, username: str) -> list[DeviceRef]:
        payload = await self._get(self.devices_path, params={"username": username})
        try:
            return _DEVICE_LIST.validate_python(payload)
        except ValidationError as e:
            raise DeviceDirectoryError("Invalid device list payload", details={"errors": e.errors()}) from e

    async def get_organization_tree(self) -> list[CityNode]:
        payload = await self._get(self.tree_path)
        try:
            return _CITY_LIST.validate_python(payload)
        except ValidationError as e:
            raise DeviceDirectoryError("Invalid organisation tree payload", details={"errors": e.errors()}) from e

    def close(self) -> None:
        self.client.close()
