"""
Irrigation Discipline Calculator

Implements DisciplineCalculator for irrigation supply hydraulics.
Wraps the horti_calc hydraulics engine for full system analysis, emitter
uniformity, water hammer and friction loss comparisons.
"""

from dataclasses import asdict
from typing import Any, Dict, List

from growcalc.core.config import CALC_DEFAULTS
from growcalc.core.logging import get_logger
from growcalc.engineering.base import DisciplineCalculator, DisciplineResult
from growcalc.engineering.horti_calc import (
    HydraulicCalculationParams,
    InvalidInputError,
    analyze_hydraulic_system,
    build_pipe_specification,
    calculate_distribution_uniformity,
    calculate_emission_uniformity,
    calculate_friction_factor,
    calculate_reynolds_number,
    calculate_wave_speed,
    calculate_water_hammer,
    classify_flow_regime,
    darcy_weisbach_head_loss,
    get_soil_properties,
    hazen_williams_friction_loss,
    kinematic_viscosity_at,
    make_fitting,
)
from growcalc.engineering.horti_calc.utils import FT_HEAD_TO_PSI, flow_velocity_fps

logger = get_logger("growcalc.engineering.irrigation")

# Fitting count params -> fitting table keys
_FITTING_PARAMS = {
    'num_90_elbows': 'elbow_90',
    'num_45_elbows': 'elbow_45',
    'num_tees': 'tee_branch',
    'num_gate_valves': 'valve_gate',
    'num_check_valves': 'valve_check',
    'num_ball_valves': 'valve_ball',
}


def _fittings_from_params(params: Dict[str, Any], nominal: float) -> list:
    fittings = []
    for key, fitting_type in _FITTING_PARAMS.items():
        qty = params.get(key, 0)
        if qty:
            fittings.append(make_fitting(fitting_type, qty, nominal, strict=True))
    for item in params.get('fittings', []):
        fittings.append(make_fitting(
            item['type'], item.get('quantity', 1), nominal, strict=True,
        ))
    return fittings


# ---------------------------------------------------------------------------
# Module-level run_*() functions (used by CLI and validators directly)
# ---------------------------------------------------------------------------

def run_hydraulic_analysis(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Run a complete irrigation supply analysis.

    Params:
        flow_gpm: Design flow (gpm)
        peak_flow_gpm: Peak flow for surge (gpm, optional)
        inlet_pressure: Inlet pressure (psi)
        outlet_pressure: Required outlet pressure (psi)
        length_ft: Total pipe length (ft)
        elevation_ft: Elevation gain (ft)
        pipe_material: PVC, HDPE or steel
        nominal_size: Nominal pipe size (in)
        water_temp_f: Water temperature (F)
        soil_type: Soil texture class for application rate check
        irrigated_area_sqft: Area served (ft2, optional)
        emitter_flows: Measured emitter flows (optional)
        num_90_elbows, num_45_elbows, num_tees, num_gate_valves,
        num_check_valves, num_ball_valves: Fitting counts

    Returns:
        Dict with HydraulicAnalysisResult fields.
    """
    try:
        nominal = params.get('nominal_size', 2)
        pipe = build_pipe_specification(
            params.get('pipe_material', CALC_DEFAULTS.pipe_material), nominal, strict=True,
        )
        soil = get_soil_properties(params.get('soil_type', CALC_DEFAULTS.soil_type), strict=True)

        system = HydraulicCalculationParams(
            design_flow_rate=params.get('flow_gpm', 50),
            peak_flow_rate=params.get('peak_flow_gpm'),
            simultaneity_factor=params.get('simultaneity_factor', 1.0),
            inlet_pressure=params.get('inlet_pressure', 60),
            required_outlet_pressure=params.get('outlet_pressure', 30),
            pressure_regulator_loss=params.get('regulator_loss', 0.0),
            total_length=params.get('length_ft', 500),
            elevation_gain=params.get('elevation_ft', 0.0),
            fittings=_fittings_from_params(params, nominal),
            water_temperature=params.get('water_temp_f', 68.0),
            operating_hours=params.get('operating_hours', 8.0),
            velocity_limit=params.get('velocity_limit', CALC_DEFAULTS.velocity_limit),
            pressure_variation=params.get('pressure_variation', CALC_DEFAULTS.pressure_variation),
            leaching_fraction=params.get('leaching_fraction', 0.15),
            emitter_flow_rates=params.get('emitter_flows'),
            irrigated_area=params.get('irrigated_area_sqft'),
            crop_water_need=params.get('crop_water_need_gal'),
        )
        result = analyze_hydraulic_system(system, pipe, soil)
    except InvalidInputError as e:
        logger.warning("Hydraulic analysis rejected: %s", e)
        raise

    logger.debug(
        "Hydraulics %s %s\" @ %s gpm: %.2f ft/s, ASABE %s",
        pipe.material, nominal, system.design_flow_rate, result.velocity, result.asabe_compliance,
    )

    d = asdict(result)
    d['pipe_material'] = pipe.material
    d['inner_diameter_in'] = pipe.inner_diameter
    return d


def run_uniformity(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Distribution and emission uniformity from catch-can or emitter flows.

    Params:
        flows: List of measured flows (any consistent unit)
    """
    flows: List[float] = params.get('flows') or []
    if not flows:
        raise InvalidInputError('flows', 'at least one flow measurement is required')
    for flow in flows:
        if flow < 0:
            raise InvalidInputError('flows', 'must not be negative', flow)

    du = calculate_distribution_uniformity(flows)
    eu = calculate_emission_uniformity(flows)
    warnings = []
    if du < CALC_DEFAULTS.min_distribution_uniformity:
        warnings.append(
            f"Distribution uniformity {du:.1f}% below "
            f"{CALC_DEFAULTS.min_distribution_uniformity:.0f}%"
        )

    return {
        'count': len(flows),
        'average_flow': sum(flows) / len(flows),
        'min_flow': min(flows),
        'max_flow': max(flows),
        'distribution_uniformity': du,
        'emission_uniformity': eu,
        'warnings': warnings,
    }


def run_water_hammer(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Joukowsky surge for instantaneous valve closure.

    Params:
        flow_gpm: Flow before closure (gpm)
        pipe_material: PVC, HDPE or steel
        nominal_size: Nominal pipe size (in)
    """
    pipe = build_pipe_specification(
        params.get('pipe_material', CALC_DEFAULTS.pipe_material),
        params.get('nominal_size', 2),
        strict=True,
    )
    velocity = flow_velocity_fps(params.get('flow_gpm', 50), pipe.inner_diameter)
    hammer = calculate_water_hammer(velocity, calculate_wave_speed(pipe))

    d = asdict(hammer)
    d['pipe_material'] = pipe.material
    d['working_pressure_psi'] = pipe.working_pressure
    return d


def run_friction_loss(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Hazen-Williams and Darcy-Weisbach friction loss for one pipe run.

    Params:
        flow_gpm: Flow (gpm)
        length_ft: Pipe length (ft)
        pipe_material: PVC, HDPE or steel
        nominal_size: Nominal pipe size (in)
        water_temp_f: Water temperature (F)
    """
    pipe = build_pipe_specification(
        params.get('pipe_material', CALC_DEFAULTS.pipe_material),
        params.get('nominal_size', 2),
        strict=True,
    )
    flow = params.get('flow_gpm', 50)
    length = params.get('length_ft', 100)
    d_in = pipe.inner_diameter

    velocity = flow_velocity_fps(flow, d_in)
    re = calculate_reynolds_number(velocity, d_in, kinematic_viscosity_at(params.get('water_temp_f', 68.0)))
    f = calculate_friction_factor(re, pipe.absolute_roughness / (d_in / 12.0))

    return {
        'pipe_material': pipe.material,
        'inner_diameter_in': d_in,
        'velocity_fps': velocity,
        'reynolds_number': re,
        'flow_regime': classify_flow_regime(re),
        'hazen_williams_psi': hazen_williams_friction_loss(flow, d_in, length, pipe.roughness_coefficient),
        'friction_factor': f,
        'darcy_weisbach_psi': darcy_weisbach_head_loss(f, length, d_in, velocity) * FT_HEAD_TO_PSI,
    }


# ---------------------------------------------------------------------------
# Dispatch table and DisciplineCalculator implementation
# ---------------------------------------------------------------------------

_CALC_DISPATCH = {
    'hydraulics': run_hydraulic_analysis,
    'uniformity': run_uniformity,
    'water-hammer': run_water_hammer,
    'friction-loss': run_friction_loss,
}


class IrrigationCalculator(DisciplineCalculator):
    """Irrigation hydraulics discipline calculator."""

    @property
    def discipline_name(self) -> str:
        return "irrigation"

    def available_calculations(self) -> List[str]:
        return list(_CALC_DISPATCH.keys())

    def run_calculation(self, calculation_type: str, params: Dict[str, Any]) -> DisciplineResult:
        """
        Run an irrigation calculation by type name.

        Raises:
            ValueError: If calculation_type is unknown.
            InvalidInputError: If params describe an impossible system.
        """
        return self._dispatch(_CALC_DISPATCH, calculation_type, params)
