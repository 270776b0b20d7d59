"""
NEC Compliance Module
=====================

Check cultivation-facility electrical loads against NFPA 70:
- Branch circuit conductor sizing (210.19)
- Equipment grounding conductors (250.122)
- Motor circuit conductors (430.22)
- Air-conditioning equipment protection (440.32)
- GFCI protection (210.8)
- Ampacity correction and adjustment (310.15)
- Conduit fill (Chapter 9)
- Voltage drop (215.2 informational note)

Table lookups are total: values outside a table clamp to the nearest
boundary and the result carries ``extrapolated=True``. Only the complete
compliance check validates its equipment record.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .nec_tables import (
    AC_EQUIPMENT_TYPES,
    AMPACITY_TABLE,
    CONDUCTOR_ADJUSTMENT_TABLE,
    CONDUCTOR_COUNT_MAX,
    CONDUCTOR_COUNT_MIN,
    CONDUCTOR_REACTANCE,
    CONDUCTOR_SIZES,
    CONDUIT_AREA_SQIN,
    COPPER_RESISTANCE,
    DEFAULT_CONDUIT_TYPE,
    DEFAULT_DEMAND_FACTOR,
    DEFAULT_RESISTANCE_GAUGE,
    DEFAULT_WIRE_AREA_GAUGE,
    DEMAND_FACTORS,
    GFCI_EQUIPMENT_TYPES,
    GROUNDING_CONDUCTOR_TABLE,
    MAX_CONDUIT_FILL_PCT,
    MAX_VOLTAGE_DROP_PCT,
    MOTOR_EQUIPMENT_TYPES,
    NON_CONTINUOUS_EQUIPMENT_TYPES,
    STANDARD_OCPD_RATINGS,
    TEMPERATURE_CORRECTION_TABLE,
    TEMPERATURE_TABLE_MAX_C,
    TEMPERATURE_TABLE_MIN_C,
    THWN2_AREA_SQIN,
    TERMINAL_RATINGS,
)
from .validation import (
    InvalidInputError,
    require_choice,
    require_non_negative,
    require_positive,
    require_range,
)


CONTINUOUS_LOAD_FACTOR = 1.25
MOTOR_CONDUCTOR_FACTOR = 1.25
AC_MAX_OCPD_FACTOR = 1.75
DEFAULT_AMBIENT_C = 30.0
DEFAULT_TERMINAL_RATING_C = 75


@dataclass
class ElectricalEquipment:
    """Electrical load descriptor."""
    type: str
    power: float                     # W
    voltage: float                   # V
    current: float                   # A (full-load / nameplate)
    phases: int = 1
    is_motor: bool = False
    is_continuous: bool = True
    is_wet_location: bool = False
    power_factor: float = 1.0
    gfci_protected: Optional[bool] = None
    name: str = ""

    @classmethod
    def from_power(
        cls,
        equipment_type: str,
        power: float,
        voltage: float,
        phases: int = 1,
        power_factor: float = 1.0,
        name: str = "",
        gfci_protected: Optional[bool] = None,
    ) -> "ElectricalEquipment":
        """
        Build an equipment record from its rated power.

        Current:
            1φ: I = P / (V × pf)
            3φ: I = P / (V × √3 × pf)

        Motor, continuous and wet-location flags are derived from the
        equipment type.
        """
        require_positive("voltage", voltage)
        require_range("power_factor", power_factor, 0.01, 1.0)
        require_non_negative("power", power)
        require_choice("phases", phases, (1, 3))

        if phases == 3:
            current = power / (voltage * math.sqrt(3) * power_factor)
        else:
            current = power / (voltage * power_factor)

        return cls(
            type=equipment_type,
            power=power,
            voltage=voltage,
            current=current,
            phases=phases,
            is_motor=equipment_type in MOTOR_EQUIPMENT_TYPES,
            is_continuous=equipment_type not in NON_CONTINUOUS_EQUIPMENT_TYPES,
            is_wet_location=equipment_type in GFCI_EQUIPMENT_TYPES,
            power_factor=power_factor,
            gfci_protected=gfci_protected,
            name=name or equipment_type,
        )


@dataclass
class NECCompliance:
    """One line of an NEC compliance checklist."""
    article: str
    section: str
    requirement: str
    is_compliant: bool
    notes: str = ""
    extrapolated: bool = False


@dataclass
class AmpacityCorrection:
    """Corrected and adjusted conductor ampacity."""
    base_ampacity: float
    ambient_temp_c: float
    conductor_count: int
    terminal_rating_c: int
    temperature_correction: float
    adjustment_factor: float
    corrected_ampacity: float
    extrapolated: bool = False


@dataclass
class ConduitFillResult:
    """Conduit selection for a bundle of identical conductors."""
    wire_gauge: str
    wire_count: int
    conduit_type: str
    conduit_size: str
    wire_area_sqin: float
    conduit_area_sqin: float
    fill_percentage: float
    is_compliant: bool
    extrapolated: bool = False


@dataclass
class VoltageDropResult:
    """Voltage drop over a circuit run."""
    wire_gauge: str
    distance_ft: float
    resistance_ohm_per_kft: float
    reactance_ohm_per_kft: float
    effective_impedance: float
    voltage_drop_volts: float
    voltage_drop_percentage: float
    is_compliant: bool
    extrapolated: bool = False


@dataclass
class DemandLoadResult:
    """Connected versus demand load for a group of equipment."""
    connected_load_w: float
    demand_load_w: float
    overall_demand_factor: float
    by_type: Dict[str, float] = field(default_factory=dict)


@dataclass
class CircuitDesign:
    """Derived circuit parameters for one equipment record."""
    equipment_name: str
    required_ampacity: float
    overcurrent_device_amps: int
    conductor_size: str
    corrected_ampacity: float
    grounding_conductor: str
    conduit_size: str
    conduit_fill_pct: float
    voltage_drop_pct: float
    notes: List[str] = field(default_factory=list)


# ============================================================================
# TABLE LOOKUPS
# ============================================================================

def conductor_size_rank(gauge: str) -> int:
    """Ordinal position of a conductor size, smallest first."""
    try:
        return CONDUCTOR_SIZES.index(gauge)
    except ValueError:
        raise InvalidInputError("wire_gauge", "unknown conductor size", gauge) from None


def get_equipment_grounding_conductor(overcurrent_device_amps: float) -> str:
    """
    Minimum copper equipment grounding conductor per Table 250.122.

    Devices above the table maximum return the largest listed size.
    """
    for max_amps, gauge in GROUNDING_CONDUCTOR_TABLE:
        if max_amps >= overcurrent_device_amps:
            return gauge
    return GROUNDING_CONDUCTOR_TABLE[-1][1]


def select_overcurrent_device(current: float, is_continuous: bool = True) -> int:
    """Next standard OCPD rating (240.6(A)) at or above the required ampacity."""
    required = current * CONTINUOUS_LOAD_FACTOR if is_continuous else current
    for rating in STANDARD_OCPD_RATINGS:
        if rating >= required:
            return rating
    return STANDARD_OCPD_RATINGS[-1]


def _terminal_column(terminal_rating_c: float) -> int:
    if terminal_rating_c <= 60:
        return 60
    if terminal_rating_c <= 75:
        return 75
    return 90


def get_conductor_ampacity(gauge: str, terminal_rating_c: float = DEFAULT_TERMINAL_RATING_C) -> float:
    """Table 310.16 allowable ampacity for a copper conductor."""
    rank = conductor_size_rank(gauge)
    column = TERMINAL_RATINGS.index(_terminal_column(terminal_rating_c))
    return AMPACITY_TABLE[CONDUCTOR_SIZES[rank]][column]


def select_conductor(required_ampacity: float, terminal_rating_c: float = DEFAULT_TERMINAL_RATING_C) -> str:
    """Smallest copper conductor whose Table 310.16 ampacity covers the load."""
    column = TERMINAL_RATINGS.index(_terminal_column(terminal_rating_c))
    for gauge in CONDUCTOR_SIZES:
        if AMPACITY_TABLE[gauge][column] >= required_ampacity:
            return gauge
    return CONDUCTOR_SIZES[-1]


def get_demand_factor(equipment_type: str) -> float:
    return DEMAND_FACTORS.get(equipment_type, DEFAULT_DEMAND_FACTOR)


def calculate_demand_load(equipment_list: List[ElectricalEquipment]) -> DemandLoadResult:
    """Apply per-type demand factors to a list of loads."""
    connected = 0.0
    demand = 0.0
    by_type: Dict[str, float] = {}

    for eq in equipment_list:
        load = eq.power * get_demand_factor(eq.type)
        connected += eq.power
        demand += load
        by_type[eq.type] = by_type.get(eq.type, 0.0) + load

    return DemandLoadResult(
        connected_load_w=connected,
        demand_load_w=demand,
        overall_demand_factor=demand / connected if connected > 0 else 0.0,
        by_type=by_type,
    )


# ============================================================================
# INDIVIDUAL CHECKS
# ============================================================================

def check_branch_circuit_loading(equipment: ElectricalEquipment) -> NECCompliance:
    """
    Required branch circuit ampacity (210.19(A)(1)).

    Informational: the selected conductor is checked against the returned
    figure by the caller.
    """
    if equipment.is_continuous:
        required = equipment.current * CONTINUOUS_LOAD_FACTOR
        basis = "125% of continuous load"
    else:
        required = equipment.current
        basis = "100% of non-continuous load"

    return NECCompliance(
        article="210",
        section="210.19(A)(1)",
        requirement=f"Branch circuit conductor ampacity >= {required:.1f}A ({basis})",
        is_compliant=True,
        notes=f"Full-load current {equipment.current:.1f}A",
    )


def check_motor_circuit_conductors(equipment: ElectricalEquipment) -> NECCompliance:
    """Motor branch circuit conductors at 125% of full-load current (430.22)."""
    if not equipment.is_motor:
        return NECCompliance(
            article="430",
            section="430.22",
            requirement="Not applicable (not a motor load)",
            is_compliant=True,
        )

    required = equipment.current * MOTOR_CONDUCTOR_FACTOR
    return NECCompliance(
        article="430",
        section="430.22",
        requirement=f"Motor circuit conductor ampacity >= {required:.1f}A (125% of FLC)",
        is_compliant=True,
        notes="Use motor nameplate or Table 430.248/430.250 FLC where available",
    )


def check_ac_equipment_protection(equipment: ElectricalEquipment) -> NECCompliance:
    """Maximum OCPD for air-conditioning equipment at 175% of nameplate (440.32)."""
    if equipment.type not in AC_EQUIPMENT_TYPES:
        return NECCompliance(
            article="440",
            section="440.32",
            requirement="Not applicable (not air-conditioning equipment)",
            is_compliant=True,
        )

    max_ocpd = equipment.current * AC_MAX_OCPD_FACTOR
    return NECCompliance(
        article="440",
        section="440.32",
        requirement=f"Maximum overcurrent protection {max_ocpd:.1f}A (175% of nameplate current)",
        is_compliant=True,
        notes="Do not exceed the maximum OCPD marked on the equipment nameplate",
    )


def check_gfci_requirements(equipment: ElectricalEquipment) -> NECCompliance:
    """
    GFCI protection for wet locations and water-handling equipment (210.8).

    ``gfci_protected=None`` means unknown; the record is informational.
    """
    required = equipment.is_wet_location or equipment.type in GFCI_EQUIPMENT_TYPES

    if not required:
        return NECCompliance(
            article="210",
            section="210.8",
            requirement="GFCI protection not required",
            is_compliant=True,
        )

    if equipment.gfci_protected is None:
        notes = "Verify GFCI protection is provided"
    elif equipment.gfci_protected:
        notes = "GFCI protection provided"
    else:
        notes = "GFCI protection missing"

    return NECCompliance(
        article="210",
        section="210.8",
        requirement="GFCI protection required (wet location or water-handling equipment)",
        is_compliant=equipment.gfci_protected is not False,
        notes=notes,
    )


def calculate_ampacity_correction(
    base_ampacity: float,
    ambient_temp_c: float,
    conductor_count: int,
    terminal_rating_c: float = DEFAULT_TERMINAL_RATING_C,
) -> AmpacityCorrection:
    """
    Apply Table 310.15(B)(1) temperature correction and Table
    310.15(B)(3)(a) adjustment.

        corrected = base × temperature factor × adjustment factor

    Temperature is looked up by whole °C, clamped to 21–50 °C; conductor
    count is clamped to 3–20.
    """
    extrapolated = False

    temp = int(round(ambient_temp_c))
    if temp < TEMPERATURE_TABLE_MIN_C or temp > TEMPERATURE_TABLE_MAX_C:
        extrapolated = True
        temp = max(TEMPERATURE_TABLE_MIN_C, min(TEMPERATURE_TABLE_MAX_C, temp))

    column = _terminal_column(terminal_rating_c)
    temp_factor = 1.0
    for low, high, factors in TEMPERATURE_CORRECTION_TABLE:
        if low <= temp <= high:
            temp_factor = factors[column]
            break

    count = conductor_count
    if count > CONDUCTOR_COUNT_MAX:
        extrapolated = True
    count = max(CONDUCTOR_COUNT_MIN, min(CONDUCTOR_COUNT_MAX, count))

    adjustment = 1.0
    for low, high, factor in CONDUCTOR_ADJUSTMENT_TABLE:
        if low <= count <= high:
            adjustment = factor
            break

    return AmpacityCorrection(
        base_ampacity=base_ampacity,
        ambient_temp_c=ambient_temp_c,
        conductor_count=conductor_count,
        terminal_rating_c=column,
        temperature_correction=temp_factor,
        adjustment_factor=adjustment,
        corrected_ampacity=base_ampacity * temp_factor * adjustment,
        extrapolated=extrapolated,
    )


def calculate_conduit_fill(
    wire_gauge: str,
    wire_count: int,
    conduit_type: str = DEFAULT_CONDUIT_TYPE,
) -> ConduitFillResult:
    """
    Select the smallest conduit with fill at or below 40%.

    Unknown gauges use the 14 AWG area and unknown conduit types use EMT.
    When no trade size is large enough the largest is reported with its
    actual (non-compliant) fill.
    """
    extrapolated = False

    area_each = THWN2_AREA_SQIN.get(wire_gauge)
    if area_each is None:
        area_each = THWN2_AREA_SQIN[DEFAULT_WIRE_AREA_GAUGE]
        extrapolated = True

    sizes = CONDUIT_AREA_SQIN.get(conduit_type)
    if sizes is None:
        conduit_type = DEFAULT_CONDUIT_TYPE
        sizes = CONDUIT_AREA_SQIN[conduit_type]
        extrapolated = True

    wire_area = area_each * wire_count

    selected_size, selected_area = sizes[-1]
    for trade_size, area in sizes:
        if wire_area / area * 100 <= MAX_CONDUIT_FILL_PCT:
            selected_size, selected_area = trade_size, area
            break
    else:
        extrapolated = True

    fill = wire_area / selected_area * 100

    return ConduitFillResult(
        wire_gauge=wire_gauge,
        wire_count=wire_count,
        conduit_type=conduit_type,
        conduit_size=selected_size,
        wire_area_sqin=wire_area,
        conduit_area_sqin=selected_area,
        fill_percentage=fill,
        is_compliant=fill <= MAX_CONDUIT_FILL_PCT,
        extrapolated=extrapolated,
    )


def _voltage_drop_result(
    current: float,
    distance_ft: float,
    wire_gauge: str,
    voltage: float,
    phases: int,
    resistance: float,
    reactance: float,
    impedance: float,
    max_drop_pct: float,
    extrapolated: bool,
) -> VoltageDropResult:
    multiplier = math.sqrt(3) if phases == 3 else 2.0
    drop_volts = multiplier * current * distance_ft * impedance / 1000

    if voltage > 0:
        drop_pct = drop_volts / voltage * 100
    else:
        drop_pct = float("inf")

    return VoltageDropResult(
        wire_gauge=wire_gauge,
        distance_ft=distance_ft,
        resistance_ohm_per_kft=resistance,
        reactance_ohm_per_kft=reactance,
        effective_impedance=impedance,
        voltage_drop_volts=drop_volts,
        voltage_drop_percentage=drop_pct,
        is_compliant=drop_pct <= max_drop_pct,
        extrapolated=extrapolated,
    )


def _copper_resistance(wire_gauge: str) -> Tuple[float, bool]:
    resistance = COPPER_RESISTANCE.get(wire_gauge)
    if resistance is None:
        return COPPER_RESISTANCE[DEFAULT_RESISTANCE_GAUGE], True
    return resistance, False


def calculate_voltage_drop_percentage(
    current: float,
    distance_ft: float,
    wire_gauge: str = DEFAULT_RESISTANCE_GAUGE,
    voltage: float = 240.0,
    phases: int = 1,
    power_factor: float = 1.0,
    max_drop_pct: float = MAX_VOLTAGE_DROP_PCT,
) -> VoltageDropResult:
    """
    Resistive voltage drop from the Chapter 9 Table 8 copper resistance.

        1φ: Vd = 2·I·L·R / 1000
        3φ: Vd = √3·I·L·R / 1000

    power_factor does not enter the resistive method; use
    calculate_voltage_drop_impedance for the Table 9 effective Z.
    Unknown gauges fall back to 12 AWG resistance and are flagged.
    """
    resistance, extrapolated = _copper_resistance(wire_gauge)
    return _voltage_drop_result(
        current, distance_ft, wire_gauge, voltage, phases,
        resistance, 0.0, resistance, max_drop_pct, extrapolated,
    )


def calculate_voltage_drop_impedance(
    current: float,
    distance_ft: float,
    wire_gauge: str = DEFAULT_RESISTANCE_GAUGE,
    voltage: float = 240.0,
    phases: int = 1,
    power_factor: float = 1.0,
    max_drop_pct: float = MAX_VOLTAGE_DROP_PCT,
) -> VoltageDropResult:
    """
    Approximate voltage drop by the Chapter 9 Table 9 effective impedance.

        Z  = R·pf + X·sinθ          (Ω / 1000 ft)
        1φ: Vd = 2·I·L·Z / 1000
        3φ: Vd = √3·I·L·Z / 1000

    At unity power factor this equals the resistive method.
    """
    resistance, extrapolated = _copper_resistance(wire_gauge)
    reactance = CONDUCTOR_REACTANCE.get(wire_gauge, CONDUCTOR_REACTANCE[DEFAULT_RESISTANCE_GAUGE])

    pf = max(0.0, min(1.0, power_factor))
    sin_theta = math.sqrt(1.0 - pf ** 2)
    impedance = resistance * pf + reactance * sin_theta

    return _voltage_drop_result(
        current, distance_ft, wire_gauge, voltage, phases,
        resistance, reactance, impedance, max_drop_pct, extrapolated,
    )


# ============================================================================
# COMPOSITE CHECKS
# ============================================================================

def _validate_equipment(equipment: ElectricalEquipment, circuit_distance_ft: float) -> None:
    require_positive("current", equipment.current)
    require_positive("voltage", equipment.voltage)
    require_choice("phases", equipment.phases, (1, 3))
    require_range("power_factor", equipment.power_factor, 0.01, 1.0)
    require_non_negative("power", equipment.power)
    require_non_negative("circuit_distance_ft", circuit_distance_ft)


def _circuit_conductor_count(equipment: ElectricalEquipment) -> int:
    # Current-carrying conductors plus equipment ground
    return 4 if equipment.phases == 3 else 3


def perform_complete_compliance_check(
    equipment: ElectricalEquipment,
    circuit_distance_ft: float,
    wire_gauge: str = DEFAULT_RESISTANCE_GAUGE,
    conduit_type: str = DEFAULT_CONDUIT_TYPE,
    ambient_temp_c: float = DEFAULT_AMBIENT_C,
    terminal_rating_c: float = DEFAULT_TERMINAL_RATING_C,
    max_voltage_drop_pct: float = MAX_VOLTAGE_DROP_PCT,
) -> List[NECCompliance]:
    """
    Run every check against one equipment record.

    Order: branch circuit, motor, AC protection, GFCI, grounding conductor,
    ampacity correction, conduit fill, voltage drop. Fill, ampacity and
    voltage drop use ``wire_gauge`` (12 AWG unless given); re-run with the
    selected conductor for a final answer.

    Raises:
        InvalidInputError: non-positive current or voltage, phases other
            than 1 or 3, non-finite values or negative distance.
    """
    _validate_equipment(equipment, circuit_distance_ft)

    checks = [
        check_branch_circuit_loading(equipment),
        check_motor_circuit_conductors(equipment),
        check_ac_equipment_protection(equipment),
        check_gfci_requirements(equipment),
    ]

    # Grounding conductor for the selected OCPD
    required = equipment.current * (CONTINUOUS_LOAD_FACTOR if equipment.is_continuous else 1.0)
    ocpd = select_overcurrent_device(equipment.current, equipment.is_continuous)
    egc = get_equipment_grounding_conductor(ocpd)
    checks.append(NECCompliance(
        article="250",
        section="250.122",
        requirement=f"Equipment grounding conductor {egc} copper minimum for {ocpd}A OCPD",
        is_compliant=True,
        notes=f"Overcurrent device {ocpd}A selected from 240.6(A) standard ratings",
        extrapolated=required > STANDARD_OCPD_RATINGS[-1],
    ))

    # Ampacity correction
    gauge_known = wire_gauge in AMPACITY_TABLE
    base_gauge = wire_gauge if gauge_known else DEFAULT_RESISTANCE_GAUGE
    base = get_conductor_ampacity(base_gauge, terminal_rating_c)
    current_carrying = 3 if equipment.phases == 3 else 2
    correction = calculate_ampacity_correction(base, ambient_temp_c, current_carrying, terminal_rating_c)
    checks.append(NECCompliance(
        article="310",
        section="310.15(B)",
        requirement=(
            f"Corrected ampacity of {base_gauge} >= {required:.1f}A "
            f"(corrected {correction.corrected_ampacity:.1f}A at {ambient_temp_c:g}°C)"
        ),
        is_compliant=correction.corrected_ampacity >= required,
        notes=(
            f"Temperature factor {correction.temperature_correction:.2f}, "
            f"adjustment factor {correction.adjustment_factor:.2f}"
        ),
        extrapolated=correction.extrapolated or not gauge_known,
    ))

    # Conduit fill
    fill = calculate_conduit_fill(base_gauge, _circuit_conductor_count(equipment), conduit_type)
    checks.append(NECCompliance(
        article="Chapter 9",
        section="Table 1",
        requirement=(
            f"{fill.wire_count} x {fill.wire_gauge} THWN-2 in {fill.conduit_size} "
            f"{fill.conduit_type}: {fill.fill_percentage:.1f}% fill (max 40%)"
        ),
        is_compliant=fill.is_compliant,
        extrapolated=fill.extrapolated,
    ))

    # Voltage drop
    vd = calculate_voltage_drop_percentage(
        current=equipment.current,
        distance_ft=circuit_distance_ft,
        wire_gauge=base_gauge,
        voltage=equipment.voltage,
        phases=equipment.phases,
        power_factor=equipment.power_factor,
        max_drop_pct=max_voltage_drop_pct,
    )
    checks.append(NECCompliance(
        article="215",
        section="215.2(A)(1)",
        requirement=(
            f"Voltage drop {vd.voltage_drop_percentage:.2f}% over {circuit_distance_ft:g} ft "
            f"with {base_gauge} (recommended max {max_voltage_drop_pct:g}%)"
        ),
        is_compliant=vd.is_compliant,
        notes=f"{vd.voltage_drop_volts:.2f}V drop at {equipment.voltage:g}V",
        extrapolated=vd.extrapolated,
    ))

    return checks


def design_circuit(
    equipment: ElectricalEquipment,
    circuit_distance_ft: float,
    conduit_type: str = DEFAULT_CONDUIT_TYPE,
    ambient_temp_c: float = DEFAULT_AMBIENT_C,
    terminal_rating_c: float = DEFAULT_TERMINAL_RATING_C,
    max_voltage_drop_pct: float = MAX_VOLTAGE_DROP_PCT,
) -> CircuitDesign:
    """
    Size a branch circuit for one load.

    Starts from the smallest conductor covering the required ampacity,
    then upsizes until the corrected ampacity and voltage drop both pass.
    """
    _validate_equipment(equipment, circuit_distance_ft)
    notes = []

    required = equipment.current * (CONTINUOUS_LOAD_FACTOR if equipment.is_continuous else 1.0)
    ocpd = select_overcurrent_device(equipment.current, equipment.is_continuous)
    current_carrying = 3 if equipment.phases == 3 else 2

    candidates = [g for g in CONDUCTOR_SIZES if g in COPPER_RESISTANCE]
    start = conductor_size_rank(select_conductor(required, terminal_rating_c))
    candidates = [g for g in candidates if conductor_size_rank(g) >= start] or candidates[-1:]

    gauge = candidates[-1]
    correction = None
    vd = None
    for candidate in candidates:
        base = get_conductor_ampacity(candidate, terminal_rating_c)
        correction = calculate_ampacity_correction(base, ambient_temp_c, current_carrying, terminal_rating_c)
        vd = calculate_voltage_drop_percentage(
            equipment.current, circuit_distance_ft, candidate,
            equipment.voltage, equipment.phases, equipment.power_factor, max_voltage_drop_pct,
        )
        if correction.corrected_ampacity >= required and vd.is_compliant:
            gauge = candidate
            break
    else:
        notes.append(f"No tabulated conductor meets ampacity and voltage drop; using {gauge}")

    if gauge != candidates[0]:
        notes.append(f"Upsized to {gauge} for ambient correction or voltage drop")

    fill = calculate_conduit_fill(gauge, _circuit_conductor_count(equipment), conduit_type)
    if not fill.is_compliant:
        notes.append(f"Conduit fill {fill.fill_percentage:.1f}% exceeds 40% in largest {fill.conduit_type}")

    return CircuitDesign(
        equipment_name=equipment.name or equipment.type,
        required_ampacity=required,
        overcurrent_device_amps=ocpd,
        conductor_size=gauge,
        corrected_ampacity=correction.corrected_ampacity,
        grounding_conductor=get_equipment_grounding_conductor(ocpd),
        conduit_size=f"{fill.conduit_size} {fill.conduit_type}",
        conduit_fill_pct=fill.fill_percentage,
        voltage_drop_pct=vd.voltage_drop_percentage,
        notes=notes,
    )
