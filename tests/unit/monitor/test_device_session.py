"""Unit tests for device selection state."""

from __future__ import annotations

import pytest

from src.monitor.application.device_session import DeviceSession


def test_starts_unselected() -> None:
    session = DeviceSession()

    assert not session.is_selected
    assert session.selected_device_id is None
    assert session.epoch == 0


def test_each_selection_bumps_epoch() -> None:
    session = DeviceSession()

    first = session.select("dev-A")
    second = session.select("dev-B")
    third = session.select("dev-B")

    assert (first, second, third) == (1, 2, 3)
    assert session.selected_device_id == "dev-B"
    assert session.is_selected


def test_is_current_requires_matching_device_and_epoch() -> None:
    session = DeviceSession()
    epoch_a = session.select("dev-A")
    epoch_b = session.select("dev-B")

    assert session.is_current("dev-B", epoch_b)
    assert not session.is_current("dev-A", epoch_a)
    assert not session.is_current("dev-B", epoch_a)


def test_empty_device_id_is_rejected() -> None:
    with pytest.raises(ValueError):
        DeviceSession().select("")
