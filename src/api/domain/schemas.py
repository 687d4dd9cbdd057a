"""Pydantic schemas for API requests and responses."""

from typing import Literal

from pydantic import BaseModel, Field

from src.monitor.domain.models import AlarmDecision, DeviceOption, SessionIdentity


# Dashboard Schemas
class SelectDeviceRequest(BaseModel):
    """Schema for selecting the device shown on the dashboard."""

    device_id: str = Field(..., min_length=1, max_length=255, description="Device identifier")


class AlarmDecisionResponse(BaseModel):
    """Schema for the alarm banner and sound state after a user action."""

    banner_visible: bool
    banner_text: str
    status_text: str
    should_play_sound: bool
    muted: bool

    @classmethod
    def from_decision(cls, decision: AlarmDecision, muted: bool) -> "AlarmDecisionResponse":
        return cls(
            banner_visible=decision.banner_visible,
            banner_text=decision.banner_text,
            status_text=decision.status_text,
            should_play_sound=decision.should_play_sound,
            muted=muted,
        )


# Device Schemas
class DeviceListResponse(BaseModel):
    """Schema for the device picker."""

    identity: SessionIdentity
    view: Literal["tree", "list"] = Field(description="Organisation tree (admin) or assigned list (user)")
    devices: list[DeviceOption]
    total: int
