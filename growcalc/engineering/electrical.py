"""
Electrical Discipline Calculator

Implements DisciplineCalculator for cultivation-facility electrical work.
Wraps the horti_calc NEC compliance engine: complete equipment checklists,
grounding conductor lookup, ampacity correction, conduit fill, voltage
drop, branch circuit design and demand load.
"""

from dataclasses import asdict
from typing import Any, Dict, List

from growcalc.core.config import CALC_DEFAULTS
from growcalc.core.logging import get_logger
from growcalc.engineering.base import DisciplineCalculator, DisciplineResult
from growcalc.engineering.horti_calc import (
    ElectricalEquipment,
    InvalidInputError,
    calculate_ampacity_correction,
    calculate_conduit_fill,
    calculate_demand_load,
    calculate_voltage_drop_percentage,
    calculate_voltage_drop_impedance,
    design_circuit,
    get_equipment_grounding_conductor,
    perform_complete_compliance_check,
)

logger = get_logger("growcalc.engineering.electrical")

_VOLTAGE_DROP_METHODS = {
    'resistance': calculate_voltage_drop_percentage,
    'impedance': calculate_voltage_drop_impedance,
}


def _equipment_from_params(params: Dict[str, Any]) -> ElectricalEquipment:
    """
    Build an equipment record from params.

    When ``current`` is given the record is taken as-is; otherwise current
    and the motor/continuous/wet flags are derived from power and type.
    """
    equipment_type = params.get('equipment_type', 'lighting')
    power = params.get('power', 1000)
    voltage = params.get('voltage', 240)
    phases = params.get('phases', 1)
    power_factor = params.get('power_factor', 1.0)
    gfci = params.get('gfci_protected')
    name = params.get('name', '')

    equipment = ElectricalEquipment.from_power(
        equipment_type,
        power=power,
        voltage=voltage,
        phases=phases,
        power_factor=power_factor,
        name=name,
        gfci_protected=gfci,
    )

    if params.get('current') is not None:
        equipment.current = params['current']
    for flag in ('is_motor', 'is_continuous', 'is_wet_location'):
        if params.get(flag) is not None:
            setattr(equipment, flag, bool(params[flag]))

    return equipment


# ---------------------------------------------------------------------------
# Module-level run_*() functions (used by CLI and validators directly)
# ---------------------------------------------------------------------------

def run_compliance_check(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Run the complete NEC checklist for one piece of equipment.

    Params:
        equipment_type: lighting, hvac, dehumidifier, irrigation, ...
        power: Rated power (W)
        voltage: Supply voltage (V)
        phases: 1 or 3
        power_factor: Power factor (0-1]
        current: Full-load current (A), overrides the power-derived value
        is_continuous / is_motor / is_wet_location: Flag overrides
        gfci_protected: True, False or None (unknown)
        distance_ft: One-way circuit length (ft)
        wire_gauge: Conductor used for fill and voltage drop checks

    Returns:
        Dict with equipment summary, checklist and overall verdict.
    """
    try:
        equipment = _equipment_from_params(params)
        distance = params.get('distance_ft', 100)
        checks = perform_complete_compliance_check(
            equipment,
            distance,
            wire_gauge=params.get('wire_gauge', CALC_DEFAULTS.default_wire_gauge),
            conduit_type=params.get('conduit_type', CALC_DEFAULTS.default_conduit_type),
            ambient_temp_c=params.get('ambient_temp_c', CALC_DEFAULTS.ambient_temp_c),
            terminal_rating_c=params.get('terminal_rating_c', CALC_DEFAULTS.terminal_rating_c),
            max_voltage_drop_pct=params.get('max_voltage_drop_pct', CALC_DEFAULTS.max_voltage_drop_pct),
        )
    except InvalidInputError as e:
        logger.warning("Compliance check rejected: %s", e)
        raise

    failures = [c for c in checks if not c.is_compliant]
    warnings = [f"{c.section}: {c.requirement}" for c in failures]
    warnings.extend(
        f"{c.section}: result clamped to table limits" for c in checks if c.extrapolated
    )

    logger.debug("NEC check %s: %d items, %d failing", equipment.name, len(checks), len(failures))

    return {
        'equipment': equipment.name,
        'equipment_type': equipment.type,
        'current_a': equipment.current,
        'voltage': equipment.voltage,
        'phases': equipment.phases,
        'distance_ft': distance,
        'is_compliant': not failures,
        'checks': [asdict(c) for c in checks],
        'warnings': warnings,
    }


def run_grounding(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Equipment grounding conductor per Table 250.122.

    Params:
        ocpd_amps: Overcurrent device rating (A)
    """
    ocpd = params.get('ocpd_amps', 20)
    return {
        'ocpd_amps': ocpd,
        'grounding_conductor': get_equipment_grounding_conductor(ocpd),
    }


def run_ampacity(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Ampacity temperature correction and bundling adjustment.

    Params:
        base_ampacity: Table ampacity (A)
        ambient_temp_c: Ambient temperature (C)
        conductor_count: Current-carrying conductors in the raceway
        terminal_rating_c: 60, 75 or 90
    """
    result = calculate_ampacity_correction(
        base_ampacity=params.get('base_ampacity', 100),
        ambient_temp_c=params.get('ambient_temp_c', CALC_DEFAULTS.ambient_temp_c),
        conductor_count=params.get('conductor_count', 3),
        terminal_rating_c=params.get('terminal_rating_c', CALC_DEFAULTS.terminal_rating_c),
    )
    return asdict(result)


def run_conduit_fill(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Conduit selection at 40% fill.

    Params:
        wire_gauge: Conductor size, e.g. '12 AWG'
        wire_count: Number of conductors
        conduit_type: EMT, PVC or RMC
    """
    result = calculate_conduit_fill(
        wire_gauge=params.get('wire_gauge', CALC_DEFAULTS.default_wire_gauge),
        wire_count=params.get('wire_count', 3),
        conduit_type=params.get('conduit_type', CALC_DEFAULTS.default_conduit_type),
    )
    return asdict(result)


def run_voltage_drop(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Voltage drop over a circuit run.

    Params:
        current: Load current (A)
        distance_ft: One-way length (ft)
        wire_gauge: Conductor size
        voltage: System voltage (V)
        phases: 1 or 3
        power_factor: Load power factor
        method: 'resistance' (default) or 'impedance' (Table 9 effective Z)
    """
    method = params.get('method', 'resistance')
    if method not in _VOLTAGE_DROP_METHODS:
        raise InvalidInputError('method', f"must be one of {', '.join(_VOLTAGE_DROP_METHODS)}", method)

    result = _VOLTAGE_DROP_METHODS[method](
        current=params.get('current', 20),
        distance_ft=params.get('distance_ft', 100),
        wire_gauge=params.get('wire_gauge', CALC_DEFAULTS.default_wire_gauge),
        voltage=params.get('voltage', 240),
        phases=params.get('phases', 1),
        power_factor=params.get('power_factor', 1.0),
        max_drop_pct=params.get('max_voltage_drop_pct', CALC_DEFAULTS.max_voltage_drop_pct),
    )
    return asdict(result)


def run_circuit_design(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Size OCPD, conductor, ground and conduit for one load.

    Params: as run_compliance_check (wire_gauge is ignored).
    """
    try:
        equipment = _equipment_from_params(params)
        design = design_circuit(
            equipment,
            params.get('distance_ft', 100),
            conduit_type=params.get('conduit_type', CALC_DEFAULTS.default_conduit_type),
            ambient_temp_c=params.get('ambient_temp_c', CALC_DEFAULTS.ambient_temp_c),
            terminal_rating_c=params.get('terminal_rating_c', CALC_DEFAULTS.terminal_rating_c),
            max_voltage_drop_pct=params.get('max_voltage_drop_pct', CALC_DEFAULTS.max_voltage_drop_pct),
        )
    except InvalidInputError as e:
        logger.warning("Circuit design rejected: %s", e)
        raise

    return asdict(design)


def run_demand_load(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Connected and demand load for a list of equipment.

    Params:
        equipment: List of dicts with equipment_type, power, voltage, phases
    """
    items: List[Dict[str, Any]] = params.get('equipment') or [
        {'equipment_type': 'lighting', 'power': 1000, 'voltage': 240},
    ]
    equipment = [_equipment_from_params(item) for item in items]
    return asdict(calculate_demand_load(equipment))


# ---------------------------------------------------------------------------
# Dispatch table and DisciplineCalculator implementation
# ---------------------------------------------------------------------------

_CALC_DISPATCH = {
    'nec-check': run_compliance_check,
    'grounding': run_grounding,
    'ampacity': run_ampacity,
    'conduit-fill': run_conduit_fill,
    'voltage-drop': run_voltage_drop,
    'circuit-design': run_circuit_design,
    'demand-load': run_demand_load,
}


class ElectricalCalculator(DisciplineCalculator):
    """Electrical discipline calculator (NEC)."""

    @property
    def discipline_name(self) -> str:
        return "electrical"

    def available_calculations(self) -> List[str]:
        return list(_CALC_DISPATCH.keys())

    def run_calculation(self, calculation_type: str, params: Dict[str, Any]) -> DisciplineResult:
        """
        Run an electrical calculation by type name.

        Raises:
            ValueError: If calculation_type is unknown.
            InvalidInputError: If params describe an impossible circuit.
        """
        return self._dispatch(_CALC_DISPATCH, calculation_type, params)
