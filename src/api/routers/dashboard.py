"""API routes for the live dashboard."""

import asyncio

from fastapi import APIRouter, Depends

from src.api.domain.schemas import AlarmDecisionResponse, SelectDeviceRequest
from src.monitor.application.polling_loop import PollingLoop
from src.monitor.domain.models import DashboardState
from src.monitor.infrastructure.container import get_container

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


def get_polling_loop() -> PollingLoop:
    """Get polling loop dependency."""
    return get_container().polling_loop()


@router.get("", response_model=DashboardState)
async def get_dashboard(loop: PollingLoop = Depends(get_polling_loop)):
    """
    Current dashboard state.

    While connectivity is offline, display values, chart and alarm banner
    show the last successfully fetched reading; check `last_update` to judge
    how stale they are.
    """
    return loop.state()


@router.post("/device", response_model=DashboardState)
async def select_device(data: SelectDeviceRequest, loop: PollingLoop = Depends(get_polling_loop)):
    """
    Select the device to monitor.

    Clears the chart window and active alarms, then waits for the immediate
    refresh of the newly selected device before returning its state.
    """
    refresh = loop.select_device(data.device_id)
    await asyncio.wait({refresh})
    return loop.state()


@router.post("/mute", response_model=AlarmDecisionResponse)
async def mute_alarm(loop: PollingLoop = Depends(get_polling_loop)):
    """Silence the alarm sound. The banner keeps showing active alarms."""
    decision = loop.mute()
    return AlarmDecisionResponse.from_decision(decision, muted=loop.alarms.muted)


@router.post("/unmute", response_model=AlarmDecisionResponse)
async def unmute_alarm(loop: PollingLoop = Depends(get_polling_loop)):
    """Re-enable the alarm sound."""
    decision = loop.unmute()
    return AlarmDecisionResponse.from_decision(decision, muted=loop.alarms.muted)
