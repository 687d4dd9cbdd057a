"""Accessor table resolving alarm parameters to reading fields."""

from collections.abc import Callable, Mapping

from src.monitor.domain.exceptions import ParameterMappingError
from src.monitor.domain.models import ParameterName, Reading

ParameterAccessor = Callable[[Reading], float]


PARAMETER_ACCESSORS: dict[ParameterName, ParameterAccessor] = {
    ParameterName.VOLTAGE_UA: lambda r: r.voltages.Ua,
    ParameterName.VOLTAGE_UB: lambda r: r.voltages.Ub,
    ParameterName.VOLTAGE_UC: lambda r: r.voltages.Uc,
    ParameterName.VOLTAGE_UAB: lambda r: r.voltages.Uab,
    ParameterName.VOLTAGE_UBC: lambda r: r.voltages.Ubc,
    ParameterName.VOLTAGE_UCA: lambda r: r.voltages.Uca,
    ParameterName.CURRENT_IA: lambda r: r.currents.Ia,
    ParameterName.CURRENT_IB: lambda r: r.currents.Ib,
    ParameterName.CURRENT_IC: lambda r: r.currents.Ic,
    ParameterName.CURRENT_IN: lambda r: r.currents.In,
    ParameterName.ACTIVE_POWER_A: lambda r: r.active_power.Pa,
    ParameterName.ACTIVE_POWER_B: lambda r: r.active_power.Pb,
    ParameterName.ACTIVE_POWER_C: lambda r: r.active_power.Pc,
    ParameterName.ACTIVE_POWER_TOTAL: lambda r: r.active_power.Total,
    ParameterName.POWER_FACTOR_A: lambda r: r.power_factor.PFa,
    ParameterName.POWER_FACTOR_B: lambda r: r.power_factor.PFb,
    ParameterName.POWER_FACTOR_C: lambda r: r.power_factor.PFc,
    ParameterName.POWER_FACTOR_TOTAL: lambda r: r.power_factor.Total,
}


def validate_accessors(accessors: Mapping[ParameterName, ParameterAccessor]) -> None:
    """
    Check that an accessor table covers exactly the parameter enumeration.

    Raises:
        ParameterMappingError: If any parameter has no accessor, or the table
            carries keys that are not parameters
    """
    missing = [p.value for p in ParameterName if p not in accessors]
    unknown = [str(k) for k in accessors if not isinstance(k, ParameterName)]
    if missing or unknown:
        raise ParameterMappingError(missing=missing, unknown=unknown)


validate_accessors(PARAMETER_ACCESSORS)
