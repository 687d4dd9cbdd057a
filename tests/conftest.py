"""Shared fixtures for monitor tests."""

from __future__ import annotations

import asyncio
import copy
from datetime import datetime, timedelta, timezone

import pytest

from src.monitor.domain.models import ChartSnapshot, Reading

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

NOMINAL_POWER_DATA = {
    "voltages": {"Ua": 230.0, "Ub": 231.0, "Uc": 229.0, "Uab": 400.0, "Ubc": 401.0, "Uca": 399.0},
    "currents": {"Ia": 50.0, "Ib": 48.0, "Ic": 52.0, "In": 5.0},
    "activePower": {"Pa": 10.0, "Pb": 11.0, "Pc": 12.0, "Total": 33.0},
    "reactivePower": {"Qa": 2.0, "Qb": 2.5, "Qc": 3.0, "Total": 7.5},
    "apparentPower": {"Sa": 10.2, "Sb": 11.3, "Sc": 12.4, "Total": 33.9},
    "powerFactor": {"PFa": 0.98, "PFb": 0.97, "PFc": 0.96, "Total": 0.97},
    "frequency": 50.0,
    "energy": {
        "ActiveImport": 1200.5,
        "ActiveExport": 3.25,
        "ReactiveImport": 80.0,
        "ReactiveExport": 1.0,
        "Apparent": 1300.75,
    },
}


def reading_payload(device_id: str = "dev-A", timestamp: datetime | None = None, **overrides) -> dict:
    """Wire payload with nominal values; override fields as group__Field=value."""
    power_data = copy.deepcopy(NOMINAL_POWER_DATA)
    for key, value in overrides.items():
        if "__" in key:
            group, name = key.split("__", 1)
            power_data[group][name] = value
        else:
            power_data[key] = value
    return {
        "Device_ID": device_id,
        "timestamp": (timestamp or BASE_TIME).isoformat(),
        "powerData": power_data,
    }


@pytest.fixture
def make_reading():
    """Factory building a validated Reading; the n-th call is n seconds after BASE_TIME."""
    counter = {"n": 0}

    def _make(device_id: str = "dev-A", timestamp: datetime | None = None, **overrides) -> Reading:
        if timestamp is None:
            timestamp = BASE_TIME + timedelta(seconds=counter["n"])
            counter["n"] += 1
        return Reading.from_payload(reading_payload(device_id, timestamp, **overrides))

    return _make


class ScriptedSource:
    """Reading source replaying queued readings or errors per device, optionally gated."""

    def __init__(self, script: dict[str, list] | None = None):
        self.script = {device: list(items) for device, items in (script or {}).items()}
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[str] = []

    def gate(self, device_id: str) -> asyncio.Event:
        event = asyncio.Event()
        self.gates[device_id] = event
        return event

    async def fetch_latest(self, device_id: str) -> Reading:
        self.calls.append(device_id)
        gate = self.gates.get(device_id)
        if gate is not None:
            await gate.wait()
        item = self.script[device_id].pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class RecordingSound:
    def __init__(self):
        self.events: list[str] = []

    def play(self) -> None:
        self.events.append("play")

    def stop(self) -> None:
        self.events.append("stop")


class RecordingRenderer:
    def __init__(self):
        self.snapshots: list[ChartSnapshot] = []

    def render(self, snapshot: ChartSnapshot) -> None:
        self.snapshots.append(snapshot)


@pytest.fixture
def make_source():
    return ScriptedSource


@pytest.fixture
def sound() -> RecordingSound:
    return RecordingSound()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()
