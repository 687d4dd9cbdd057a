"""Fixed-precision formatting of readings for display."""

from src.monitor.domain.models import Reading

VOLTAGE_DECIMALS = 1
CURRENT_DECIMALS = 2
POWER_DECIMALS = 2
DETAIL_DECIMALS = 3
THD_DECIMALS = 2


def _fmt(value: float, decimals: int, unit: str | None = None) -> str:
    text = f"{value:.{decimals}f}"
    return f"{text} {unit}" if unit else text


def format_reading(reading: Reading) -> dict[str, str]:
    """
    Format a reading into display strings keyed by dashboard element id.

    Voltages use 1 decimal, currents and summary power 2, power factor and
    the detailed power analysis 3, THD percentages 2.
    """
    v = reading.voltages
    i = reading.currents
    p = reading.active_power
    q = reading.reactive_power
    s = reading.apparent_power
    pf = reading.power_factor

    values = {
        # Summary cards
        "totalPower": _fmt(p.Total, POWER_DECIMALS, "kW"),
        "frequency": _fmt(reading.frequency, 2, "Hz"),
        "powerFactor": _fmt(pf.Total, DETAIL_DECIMALS),
        "energyImport": _fmt(reading.energy.ActiveImport, 2, "kWh"),
        "energyExport": _fmt(reading.energy.ActiveExport, 2, "kWh"),
        "energyReactiveImport": _fmt(reading.energy.ReactiveImport, 2, "kvarh"),
        "energyReactiveExport": _fmt(reading.energy.ReactiveExport, 2, "kvarh"),
        "energyApparent": _fmt(reading.energy.Apparent, 2, "kVAh"),
        # Voltages
        "voltageUa": _fmt(v.Ua, VOLTAGE_DECIMALS, "V"),
        "voltageUb": _fmt(v.Ub, VOLTAGE_DECIMALS, "V"),
        "voltageUc": _fmt(v.Uc, VOLTAGE_DECIMALS, "V"),
        "voltageUab": _fmt(v.Uab, VOLTAGE_DECIMALS, "V"),
        "voltageUbc": _fmt(v.Ubc, VOLTAGE_DECIMALS, "V"),
        "voltageUca": _fmt(v.Uca, VOLTAGE_DECIMALS, "V"),
        # Phase parameters
        "voltageA": _fmt(v.Ua, VOLTAGE_DECIMALS, "V"),
        "voltageB": _fmt(v.Ub, VOLTAGE_DECIMALS, "V"),
        "voltageC": _fmt(v.Uc, VOLTAGE_DECIMALS, "V"),
        "currentA": _fmt(i.Ia, CURRENT_DECIMALS, "A"),
        "currentB": _fmt(i.Ib, CURRENT_DECIMALS, "A"),
        "currentC": _fmt(i.Ic, CURRENT_DECIMALS, "A"),
        "currentN": _fmt(i.In, CURRENT_DECIMALS, "A"),
        "powerA": _fmt(p.Pa, POWER_DECIMALS, "kW"),
        "powerB": _fmt(p.Pb, POWER_DECIMALS, "kW"),
        "powerC": _fmt(p.Pc, POWER_DECIMALS, "kW"),
        "pfA": _fmt(pf.PFa, DETAIL_DECIMALS),
        "pfB": _fmt(pf.PFb, DETAIL_DECIMALS),
        "pfC": _fmt(pf.PFc, DETAIL_DECIMALS),
        # Power analysis
        "activePowerA": _fmt(p.Pa, DETAIL_DECIMALS),
        "activePowerB": _fmt(p.Pb, DETAIL_DECIMALS),
        "activePowerC": _fmt(p.Pc, DETAIL_DECIMALS),
        "activePowerTotal": _fmt(p.Total, DETAIL_DECIMALS),
        "reactivePowerA": _fmt(q.Qa, DETAIL_DECIMALS),
        "reactivePowerB": _fmt(q.Qb, DETAIL_DECIMALS),
        "reactivePowerC": _fmt(q.Qc, DETAIL_DECIMALS),
        "reactivePowerTotal": _fmt(q.Total, DETAIL_DECIMALS),
        "apparentPowerA": _fmt(s.Sa, DETAIL_DECIMALS),
        "apparentPowerB": _fmt(s.Sb, DETAIL_DECIMALS),
        "apparentPowerC": _fmt(s.Sc, DETAIL_DECIMALS),
        "apparentPowerTotal": _fmt(s.Total, DETAIL_DECIMALS),
        "powerFactorA": _fmt(pf.PFa, DETAIL_DECIMALS),
        "powerFactorB": _fmt(pf.PFb, DETAIL_DECIMALS),
        "powerFactorC": _fmt(pf.PFc, DETAIL_DECIMALS),
        "powerFactorTotal": _fmt(pf.Total, DETAIL_DECIMALS),
    }

    if reading.thd is not None:
        thd = reading.thd
        values.update(
            {
                "thdUa": _fmt(thd.Ua, THD_DECIMALS, "%"),
                "thdUb": _fmt(thd.Ub, THD_DECIMALS, "%"),
                "thdUc": _fmt(thd.Uc, THD_DECIMALS, "%"),
                "thdIa": _fmt(thd.Ia, THD_DECIMALS, "%"),
                "thdIb": _fmt(thd.Ib, THD_DECIMALS, "%"),
                "thdIc": _fmt(thd.Ic, THD_DECIMALS, "%"),
            }
        )

    return values
