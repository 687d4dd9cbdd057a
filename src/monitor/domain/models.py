"""Domain models for the power monitor core."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError, model_validator

from src.monitor.domain.exceptions import MalformedReadingError


# Reading groups. Field names follow the device wire format.
class _ReadingGroup(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class Voltages(_ReadingGroup):
    """Phase (Ua, Ub, Uc) and line (Uab, Ubc, Uca) voltages in volts."""

    Ua: float
    Ub: float
    Uc: float
    Uab: float
    Ubc: float
    Uca: float


class Currents(_ReadingGroup):
    """Phase and neutral currents in amperes."""

    Ia: float
    Ib: float
    Ic: float
    In: float


class ActivePower(_ReadingGroup):
    Pa: float
    Pb: float
    Pc: float
    Total: float


class ReactivePower(_ReadingGroup):
    Qa: float
    Qb: float
    Qc: float
    Total: float


class ApparentPower(_ReadingGroup):
    Sa: float
    Sb: float
    Sc: float
    Total: float


class PowerFactor(_ReadingGroup):
    PFa: float
    PFb: float
    PFc: float
    Total: float


class Energy(_ReadingGroup):
    """Energy counters (kWh / kvarh / kVAh)."""

    ActiveImport: float
    ActiveExport: float
    ReactiveImport: float
    ReactiveExport: float
    Apparent: float


class HarmonicDistortion(_ReadingGroup):
    """Total harmonic distortion percentages per phase."""

    Ua: float
    Ub: float
    Uc: float
    Ia: float
    Ib: float
    Ic: float


class Reading(BaseModel):
    """
    Immutable snapshot of one device's electrical state at one instant.

    Built at the fetch boundary with `Reading.from_payload`, which rejects
    structurally incomplete payloads instead of letting them reach the
    evaluator or the display layer.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    device_id: str = Field(alias="Device_ID")
    timestamp: datetime
    voltages: Voltages
    currents: Currents
    active_power: ActivePower = Field(alias="activePower")
    reactive_power: ReactivePower = Field(alias="reactivePower")
    apparent_power: ApparentPower = Field(alias="apparentPower")
    power_factor: PowerFactor = Field(alias="powerFactor")
    frequency: float
    energy: Energy
    thd: HarmonicDistortion | None = None

    @classmethod
    def from_payload(
        cls,
        payload: Any,
        device_id: str | None = None,
        received_at: datetime | None = None,
    ) -> "Reading":
        """
        Validate a wire payload into a Reading.

        Expected shape: {"Device_ID": ..., "timestamp": ..., "powerData": {...}}.
        A missing timestamp is replaced by `received_at` (or now), a missing
        Device_ID by the requested `device_id`.

        Raises:
            MalformedReadingError: If the payload is not a complete reading
        """
        if not isinstance(payload, dict):
            raise MalformedReadingError(
                f"Reading payload must be an object, got {type(payload).__name__}"
            )

        power_data = payload.get("powerData")
        if not isinstance(power_data, dict):
            raise MalformedReadingError("Reading payload has no 'powerData' object")

        data = {
            **power_data,
            "Device_ID": payload.get("Device_ID") or device_id,
            "timestamp": payload.get("timestamp") or received_at or datetime.now(timezone.utc),
        }

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            errors = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
            raise MalformedReadingError(
                f"Reading payload failed validation ({len(errors)} errors)",
                validation_errors=errors,
            ) from e

    @classmethod
    def zeroed(cls, device_id: str, timestamp: datetime | None = None) -> "Reading":
        """Default all-zero reading, served when a device has not reported yet."""
        return cls(
            device_id=device_id,
            timestamp=timestamp or datetime.now(timezone.utc),
            voltages=Voltages(Ua=0, Ub=0, Uc=0, Uab=0, Ubc=0, Uca=0),
            currents=Currents(Ia=0, Ib=0, Ic=0, In=0),
            active_power=ActivePower(Pa=0, Pb=0, Pc=0, Total=0),
            reactive_power=ReactivePower(Qa=0, Qb=0, Qc=0, Total=0),
            apparent_power=ApparentPower(Sa=0, Sb=0, Sc=0, Total=0),
            power_factor=PowerFactor(PFa=0, PFb=0, PFc=0, Total=0),
            frequency=0,
            energy=Energy(ActiveImport=0, ActiveExport=0, ReactiveImport=0, ReactiveExport=0, Apparent=0),
        )

    def ensure_device(self, device_id: str) -> "Reading":
        """
        Check that the reading belongs to the requested device.

        Raises:
            MalformedReadingError: If the payload reports another device
        """
        if self.device_id != device_id:
            raise MalformedReadingError(
                f"Reading for device '{device_id}' reports device '{self.device_id}'",
                validation_errors=[f"Device_ID: expected {device_id}, got {self.device_id}"],
            )
        return self

    def to_payload(self) -> dict[str, Any]:
        """Serialize back to the wire shape accepted by `from_payload`."""
        power_data = self.model_dump(
            mode="json", by_alias=True, exclude={"device_id", "timestamp"}, exclude_none=True
        )
        return {
            "Device_ID": self.device_id,
            "timestamp": self.timestamp.isoformat(),
            "powerData": power_data,
        }


class ParameterName(str, Enum):
    """Alarm parameters a threshold can be configured for."""

    VOLTAGE_UA = "voltageUa"
    VOLTAGE_UB = "voltageUb"
    VOLTAGE_UC = "voltageUc"
    VOLTAGE_UAB = "voltageUab"
    VOLTAGE_UBC = "voltageUbc"
    VOLTAGE_UCA = "voltageUca"
    CURRENT_IA = "currentIa"
    CURRENT_IB = "currentIb"
    CURRENT_IC = "currentIc"
    CURRENT_IN = "currentIn"
    ACTIVE_POWER_A = "activePowerA"
    ACTIVE_POWER_B = "activePowerB"
    ACTIVE_POWER_C = "activePowerC"
    ACTIVE_POWER_TOTAL = "activePowerTotal"
    POWER_FACTOR_A = "powerFactorA"
    POWER_FACTOR_B = "powerFactorB"
    POWER_FACTOR_C = "powerFactorC"
    POWER_FACTOR_TOTAL = "powerFactorTotal"


class ThresholdLimits(BaseModel):
    """Optional min/max pair for one parameter."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    min: float | None = None
    max: float | None = None

    @model_validator(mode="after")
    def _check_order(self) -> "ThresholdLimits":
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        return self


class ThresholdSet(RootModel[dict[ParameterName, ThresholdLimits]]):
    """Mapping from parameter name to its configured limits."""

    root: dict[ParameterName, ThresholdLimits] = Field(default_factory=dict)

    @classmethod
    def defaults(cls) -> "ThresholdSet":
        """Built-in limits used when no saved configuration exists."""
        phase_voltage = ThresholdLimits(min=200, max=250)
        line_voltage = ThresholdLimits(min=350, max=450)
        phase_current = ThresholdLimits(max=100)
        phase_power = ThresholdLimits(max=50)
        power_factor = ThresholdLimits(min=0.8)
        return cls(
            {
                ParameterName.VOLTAGE_UA: phase_voltage,
                ParameterName.VOLTAGE_UB: phase_voltage,
                ParameterName.VOLTAGE_UC: phase_voltage,
                ParameterName.VOLTAGE_UAB: line_voltage,
                ParameterName.VOLTAGE_UBC: line_voltage,
                ParameterName.VOLTAGE_UCA: line_voltage,
                ParameterName.CURRENT_IA: phase_current,
                ParameterName.CURRENT_IB: phase_current,
                ParameterName.CURRENT_IC: phase_current,
                ParameterName.CURRENT_IN: ThresholdLimits(max=50),
                ParameterName.ACTIVE_POWER_A: phase_power,
                ParameterName.ACTIVE_POWER_B: phase_power,
                ParameterName.ACTIVE_POWER_C: phase_power,
                ParameterName.ACTIVE_POWER_TOTAL: ThresholdLimits(max=150),
                ParameterName.POWER_FACTOR_A: power_factor,
                ParameterName.POWER_FACTOR_B: power_factor,
                ParameterName.POWER_FACTOR_C: power_factor,
                ParameterName.POWER_FACTOR_TOTAL: power_factor,
            }
        )

    def items(self):
        return self.root.items()

    def get(self, name: ParameterName) -> ThresholdLimits | None:
        return self.root.get(name)

    def __len__(self) -> int:
        return len(self.root)

    def to_payload(self) -> dict[str, dict[str, float]]:
        """Plain dict in the persisted shape, unset bounds omitted."""
        return self.model_dump(mode="json", exclude_none=True)


class Connectivity(str, Enum):
    """Reachability of the reading source as last observed."""

    UNKNOWN = "unknown"
    ONLINE = "online"
    OFFLINE = "offline"


@dataclass(frozen=True)
class SeriesSample:
    """One chart sample: a time label plus one value per tracked series."""

    label: str
    values: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class AlarmDecision:
    """What the UI should show and do after an alarm state change."""

    banner_visible: bool
    banner_text: str
    status_text: str
    should_play_sound: bool
    stop_sound: bool


class ChartSnapshot(BaseModel):
    """Chart-ready copy of the rolling buffer."""

    labels: list[str] = Field(default_factory=list)
    series: dict[str, list[float]] = Field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.labels


class DashboardState(BaseModel):
    """Everything the rendering layer needs for one redraw of the dashboard."""

    selected_device_id: str | None = None
    connectivity: Connectivity = Connectivity.UNKNOWN
    last_update: datetime | None = None
    display_values: dict[str, str] = Field(default_factory=dict)
    violations: list[ParameterName] = Field(default_factory=list)
    severity: int = 0
    banner_visible: bool = False
    banner_text: str = ""
    status_text: str = "No Alarms"
    muted: bool = False
    chart: ChartSnapshot = Field(default_factory=ChartSnapshot)


# Session identity and organisational hierarchy
class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"


class SessionIdentity(BaseModel):
    """Who is looking at the dashboard."""

    authenticated: bool
    username: str | None = None
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.authenticated and self.role == Role.ADMIN


class DeviceRef(BaseModel):
    device_id: str
    name: str | None = None


class ClientNode(BaseModel):
    name: str
    devices: list[DeviceRef] = Field(default_factory=list)


class BranchNode(BaseModel):
    name: str
    clients: list[ClientNode] = Field(default_factory=list)


class CityNode(BaseModel):
    """Root of the City -> Branch -> Client -> Device hierarchy."""

    name: str
    branches: list[BranchNode] = Field(default_factory=list)


class DeviceOption(BaseModel):
    """One selectable entry in the device picker."""

    device_id: str
    name: str
    path: list[str] = Field(default_factory=list)
