"""API tests against in-memory collaborators."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from src.api.main_app import app
from src.api.routers.dashboard import get_polling_loop
from src.api.routers.devices import get_device_catalog
from src.api.routers.thresholds import get_threshold_store
from src.monitor.application.device_catalog import DeviceCatalogService
from src.monitor.application.polling_loop import PollingLoop
from src.monitor.domain.exceptions import DeviceDirectoryError
from src.monitor.domain.models import CityNode, DeviceRef, Role, SessionIdentity
from src.monitor.infrastructure.memory_source import InMemoryDeviceDirectory, InMemoryReadingSource
from src.monitor.infrastructure.threshold_store import InMemoryThresholdStore


class _FailingDirectory(InMemoryDeviceDirectory):
    async def get_organization_tree(self) -> list[CityNode]:
        raise DeviceDirectoryError("Directory request to /api/hierarchy failed")


@pytest.fixture
def store() -> InMemoryThresholdStore:
    return InMemoryThresholdStore()


@pytest.fixture
def source(make_reading) -> InMemoryReadingSource:
    return InMemoryReadingSource([make_reading("ESP32_01", currents__Ia=120.0)])


@pytest.fixture
def client(source, store):
    loop = PollingLoop(source, store, redraw_interval_s=None)
    admin = SessionIdentity(authenticated=True, username="root", role=Role.ADMIN)
    tree = CityNode.model_validate(
        {
            "name": "Lisbon",
            "branches": [{"name": "North", "clients": [{"name": "Gym", "devices": [{"device_id": "ESP32_01"}]}]}],
        }
    )
    directory = InMemoryDeviceDirectory(admin, tree=[tree])

    app.dependency_overrides[get_polling_loop] = lambda: loop
    app.dependency_overrides[get_threshold_store] = lambda: store
    app.dependency_overrides[get_device_catalog] = lambda: DeviceCatalogService(directory)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_dashboard_starts_unselected(client) -> None:
    body = client.get("/api/dashboard").json()

    assert body["selected_device_id"] is None
    assert body["connectivity"] == "unknown"
    assert body["status_text"] == "No Alarms"


def test_select_device_returns_refreshed_state(client) -> None:
    response = client.post("/api/dashboard/device", json={"device_id": "ESP32_01"})

    assert response.status_code == 200
    body = response.json()
    assert body["selected_device_id"] == "ESP32_01"
    assert body["connectivity"] == "online"
    assert body["violations"] == ["currentIa"]
    assert body["banner_text"] == "Alarms: currentIa"
    assert body["display_values"]["currentA"] == "120.00 A"
    assert body["chart"]["series"]["Ia"] == [120.0]


def test_select_device_requires_id(client) -> None:
    assert client.post("/api/dashboard/device", json={"device_id": ""}).status_code == 422


def test_mute_and_unmute(client) -> None:
    client.post("/api/dashboard/device", json={"device_id": "ESP32_01"})

    muted = client.post("/api/dashboard/mute").json()
    assert muted["muted"] is True
    assert muted["banner_visible"] is True
    assert muted["should_play_sound"] is False

    unmuted = client.post("/api/dashboard/unmute").json()
    assert unmuted["muted"] is False
    assert unmuted["should_play_sound"] is True


def test_threshold_update_and_reset(client, store) -> None:
    assert client.get("/api/thresholds").json()["voltageUa"] == {"min": 200.0, "max": 250.0}

    response = client.put("/api/thresholds", json={"currentIa": {"max": 150}})
    assert response.status_code == 200
    assert len(store.load()) == 1

    body = client.post("/api/dashboard/device", json={"device_id": "ESP32_01"}).json()
    assert body["violations"] == []

    assert len(client.post("/api/thresholds/reset").json()) == 18


@pytest.mark.parametrize(
    "payload",
    [{"currentIa": {"min": 10, "max": 5}}, {"notAParameter": {"max": 1}}],
)
def test_invalid_thresholds_are_rejected(client, store, payload) -> None:
    assert client.put("/api/thresholds", json=payload).status_code == 422
    assert len(store.load()) == 18


def test_admin_device_list_uses_tree(client) -> None:
    body = client.get("/api/devices").json()

    assert body["view"] == "tree"
    assert body["total"] == 1
    assert body["devices"][0]["path"] == ["Lisbon", "North", "Gym"]


def test_user_device_list_and_auth(client) -> None:
    user = SessionIdentity(authenticated=True, username="maria", role=Role.USER)
    user_directory = InMemoryDeviceDirectory(user, assignments={"maria": [DeviceRef(device_id="ESP32_09")]})
    app.dependency_overrides[get_device_catalog] = lambda: DeviceCatalogService(user_directory)

    body = client.get("/api/devices").json()
    assert body["view"] == "list"
    assert [d["device_id"] for d in body["devices"]] == ["ESP32_09"]

    anonymous = InMemoryDeviceDirectory(SessionIdentity(authenticated=False))
    app.dependency_overrides[get_device_catalog] = lambda: DeviceCatalogService(anonymous)
    assert client.get("/api/devices").status_code == 401


def test_directory_failure_is_bad_gateway(client) -> None:
    admin = SessionIdentity(authenticated=True, username="root", role=Role.ADMIN)
    app.dependency_overrides[get_device_catalog] = lambda: DeviceCatalogService(_FailingDirectory(admin))

    assert client.get("/api/devices").status_code == 502
