"""
Irrigation Hydraulics Module
============================

Pressurized pipe and irrigation system analysis:
- Reynolds number and flow regime
- Hazen-Williams friction loss (primary)
- Darcy-Weisbach friction loss (Swamee-Jain friction factor)
- Minor (fitting) losses
- Water hammer (Joukowsky)
- Distribution and emission uniformity
- Application efficiency and rate
- Complete system analysis with ASABE-style compliance
"""

import math
import statistics
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .hydraulic_data import (
    FittingLosses,
    PipeSpecifications,
    SoilProperties,
    WATER_KINEMATIC_VISCOSITY,
)
from .utils import (
    FT_HEAD_TO_PSI,
    G,
    WATER_BULK_MODULUS_PSI,
    WATER_DENSITY_SLUG_FT3,
    flow_velocity_fps,
    interpolate_table,
    mean,
    velocity_head_ft,
)
from .validation import (
    require_finite,
    require_non_negative,
    require_positive,
    require_range,
)


LAMINAR_LIMIT = 2000
TURBULENT_LIMIT = 4000
DEFAULT_KINEMATIC_VISCOSITY = 1.13e-5   # ft²/s at 68 °F
HAZEN_WILLIAMS_PSI_COEFF = 4.52
MIN_DISTRIBUTION_UNIFORMITY = 80.0
MODELLED_EMITTERS = 20
APPLICATION_RATE_COEFF = 96.3           # in/hr per (gpm / ft²)

# Water hammer risk bands (psi)
HAMMER_LOW = 50
HAMMER_MODERATE = 100
HAMMER_HIGH = 200


@dataclass
class HydraulicCalculationParams:
    """Irrigation system description."""
    design_flow_rate: float                 # gpm
    inlet_pressure: float                   # psi
    required_outlet_pressure: float         # psi
    total_length: float                     # ft
    peak_flow_rate: Optional[float] = None  # gpm
    simultaneity_factor: float = 1.0
    pressure_regulator_loss: float = 0.0    # psi
    elevation_gain: float = 0.0             # ft
    fittings: List[FittingLosses] = field(default_factory=list)
    water_temperature: float = 68.0         # °F
    ambient_temperature: float = 75.0       # °F
    operating_hours: float = 8.0            # hr/day
    velocity_limit: float = 5.0             # ft/s
    pressure_variation: float = 10.0        # % allowed
    leaching_fraction: float = 0.15
    emitter_flow_rates: Optional[List[float]] = None   # gph or gpm, any consistent unit
    irrigated_area: Optional[float] = None  # ft²
    crop_water_need: Optional[float] = None # gal/day


@dataclass
class WaterHammerResult:
    """Surge from an instantaneous velocity change."""
    wave_speed: float           # ft/s
    velocity_change: float      # ft/s
    head_rise_ft: float
    pressure_rise_psi: float
    risk: str


@dataclass
class HydraulicAnalysisResult:
    """Complete irrigation system analysis."""
    velocity: float                     # ft/s
    reynolds_number: float
    flow_regime: str
    velocity_head: float                # ft
    friction_loss: float                # psi (Hazen-Williams)
    minor_losses: float                 # psi
    elevation_loss: float               # psi
    total_system_loss: float            # psi
    available_pressure: float           # psi
    pressure_margin: float              # psi
    pressure_variation_pct: float
    darcy_friction_loss: float          # psi
    friction_factor: float
    wave_speed: float                   # ft/s
    max_pressure_rise: float            # psi
    water_hammer_risk: str
    distribution_uniformity: float      # %
    emission_uniformity: float          # %
    application_efficiency: float       # %
    application_rate: Optional[float]   # in/hr
    total_dynamic_head: float           # ft
    velocity_compliance: bool
    pressure_compliance: bool
    pipe_rating_compliance: bool
    asabe_compliance: bool
    warnings: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


# ============================================================================
# FLOW REGIME
# ============================================================================

def kinematic_viscosity_at(temp_f: float) -> float:
    """Water kinematic viscosity (ft²/s), interpolated and clamped to 40–120 °F."""
    value, _ = interpolate_table(WATER_KINEMATIC_VISCOSITY, temp_f)
    return value


def calculate_reynolds_number(
    velocity_fps: float,
    diameter_in: float,
    kinematic_viscosity: float = DEFAULT_KINEMATIC_VISCOSITY,
) -> float:
    """
    Reynolds number.

        Re = V × D / ν     (D in ft)
    """
    if kinematic_viscosity <= 0:
        return 0.0
    return velocity_fps * (diameter_in / 12.0) / kinematic_viscosity


def classify_flow_regime(reynolds_number: float) -> str:
    """laminar < 2000 <= transitional < 4000 <= turbulent"""
    if reynolds_number < LAMINAR_LIMIT:
        return "laminar"
    if reynolds_number < TURBULENT_LIMIT:
        return "transitional"
    return "turbulent"


# ============================================================================
# FRICTION LOSS
# ============================================================================

def hazen_williams_friction_loss(
    flow_gpm: float,
    diameter_in: float,
    length_ft: float,
    c: float = 150,
) -> float:
    """
    Hazen-Williams friction loss in psi.

        hf = 4.52 × Q^1.85 × L / (C^1.85 × D^4.87)

    Q in gpm, D in inches, L in feet. The 4.52 coefficient yields psi
    directly.
    """
    if flow_gpm <= 0:
        return 0.0
    if diameter_in <= 0 or c <= 0:
        return float("inf")
    return HAZEN_WILLIAMS_PSI_COEFF * flow_gpm ** 1.85 * length_ft / (c ** 1.85 * diameter_in ** 4.87)


def calculate_friction_factor(reynolds_number: float, relative_roughness: float) -> float:
    """
    Darcy friction factor.

    Laminar (Re < 2000): f = 64 / Re
    Otherwise Swamee-Jain:
        f = 0.25 / [log10(ε/3.7D + 5.74/Re^0.9)]²
    """
    if reynolds_number <= 0:
        return 0.0
    if reynolds_number < LAMINAR_LIMIT:
        return 64.0 / reynolds_number

    term = relative_roughness / 3.7 + 5.74 / reynolds_number ** 0.9
    return 0.25 / math.log10(term) ** 2


def darcy_weisbach_head_loss(
    friction_factor: float,
    length_ft: float,
    diameter_in: float,
    velocity_fps: float,
) -> float:
    """
    Darcy-Weisbach head loss (ft).

        hf = f × (L/D) × V²/2g
    """
    if diameter_in <= 0:
        return float("inf")
    return friction_factor * (length_ft / (diameter_in / 12.0)) * velocity_head_ft(velocity_fps)


def calculate_minor_losses(fittings: Sequence[FittingLosses], velocity_fps: float) -> float:
    """Fitting losses Σ(K × qty) × V²/2g (ft)."""
    total_k = sum(f.loss_coefficient * f.quantity for f in fittings)
    return total_k * velocity_head_ft(velocity_fps)


# ============================================================================
# WATER HAMMER
# ============================================================================

def calculate_wave_speed(pipe: PipeSpecifications) -> float:
    """
    Pressure wave speed in a water-filled elastic pipe (ft/s).

        a = √(K/ρ) / √(1 + K·D / (E·t))
    """
    rigid = math.sqrt(WATER_BULK_MODULUS_PSI * 144 / WATER_DENSITY_SLUG_FT3)
    if pipe.elastic_modulus <= 0 or pipe.wall_thickness <= 0:
        return rigid
    ratio = WATER_BULK_MODULUS_PSI * pipe.inner_diameter / (pipe.elastic_modulus * pipe.wall_thickness)
    return rigid / math.sqrt(1 + ratio)


def classify_water_hammer_risk(pressure_rise_psi: float) -> str:
    if pressure_rise_psi < HAMMER_LOW:
        return "low"
    if pressure_rise_psi < HAMMER_MODERATE:
        return "moderate"
    if pressure_rise_psi < HAMMER_HIGH:
        return "high"
    return "critical"


def calculate_water_hammer(velocity_change: float, wave_speed: float) -> WaterHammerResult:
    """
    Joukowsky surge for an instantaneous velocity change.

        Δh = a × ΔV / g
        ΔP = Δh × 0.433
    """
    head = wave_speed * abs(velocity_change) / G
    rise = head * FT_HEAD_TO_PSI
    return WaterHammerResult(
        wave_speed=wave_speed,
        velocity_change=velocity_change,
        head_rise_ft=head,
        pressure_rise_psi=rise,
        risk=classify_water_hammer_risk(rise),
    )


# ============================================================================
# UNIFORMITY AND EFFICIENCY
# ============================================================================

def calculate_distribution_uniformity(flow_rates: Sequence[float]) -> float:
    """
    Low-quarter distribution uniformity (%).

        DU = mean(lowest 25%) / mean(all) × 100

    Equal flows, including all zero, give exactly 100. Empty input gives 0.
    """
    if not flow_rates:
        return 0.0
    if max(flow_rates) == min(flow_rates):
        return 100.0
    avg = mean(flow_rates)
    if avg <= 0:
        return 0.0

    ordered = sorted(flow_rates)
    low_count = max(1, math.ceil(len(ordered) / 4))
    low_avg = mean(ordered[:low_count])
    return max(0.0, min(low_avg / avg * 100, 100.0))


def calculate_emission_uniformity(flow_rates: Sequence[float]) -> float:
    """
    Emission uniformity (%).

        EU = 100 - CV,  CV = σ / mean × 100 (population σ)
    """
    if not flow_rates:
        return 0.0
    if max(flow_rates) == min(flow_rates):
        return 100.0
    avg = mean(flow_rates)
    if avg <= 0:
        return 0.0
    cv = statistics.pstdev(flow_rates) / avg * 100
    return max(0.0, 100.0 - cv)


def calculate_application_efficiency(
    applied_water: float,
    crop_need: float,
    leaching_fraction: float = 0.15,
) -> float:
    """
    Application efficiency (%).

        beneficial = crop need + applied × leaching fraction
        AE = beneficial / applied × 100
    """
    if applied_water <= 0:
        return 0.0
    beneficial = crop_need + applied_water * leaching_fraction
    return min(beneficial / applied_water * 100, 100.0)


def calculate_application_rate(flow_gpm: float, area_sqft: float) -> float:
    """Gross precipitation rate (in/hr) = 96.3 × Q / A."""
    if area_sqft <= 0:
        return 0.0
    return APPLICATION_RATE_COEFF * flow_gpm / area_sqft


def model_lateral_flows(
    end_pressure: float,
    pressure_loss: float,
    emitters: int = MODELLED_EMITTERS,
) -> List[float]:
    """
    Relative emitter flows along a lateral with linear pressure loss.

    Pressure falls from end_pressure + pressure_loss at the inlet to
    end_pressure at the last emitter; flow ∝ √P.
    """
    if emitters < 2:
        return [math.sqrt(max(end_pressure, 0.0))]
    flows = []
    for i in range(emitters):
        pressure = end_pressure + pressure_loss * (emitters - 1 - i) / (emitters - 1)
        flows.append(math.sqrt(max(pressure, 0.0)))
    return flows


# ============================================================================
# SYSTEM ANALYSIS
# ============================================================================

def _validate_params(params: HydraulicCalculationParams, pipe: PipeSpecifications) -> None:
    require_positive("design_flow_rate", params.design_flow_rate)
    if params.peak_flow_rate is not None:
        require_positive("peak_flow_rate", params.peak_flow_rate)
    require_positive("simultaneity_factor", params.simultaneity_factor)
    require_range("simultaneity_factor", params.simultaneity_factor, high=1.0)
    require_non_negative("inlet_pressure", params.inlet_pressure)
    require_non_negative("required_outlet_pressure", params.required_outlet_pressure)
    require_non_negative("pressure_regulator_loss", params.pressure_regulator_loss)
    require_positive("total_length", params.total_length)
    require_finite("elevation_gain", params.elevation_gain)
    require_range("water_temperature", params.water_temperature, 32, 212)
    require_finite("ambient_temperature", params.ambient_temperature)
    require_range("operating_hours", params.operating_hours, 0, 24)
    require_positive("velocity_limit", params.velocity_limit)
    require_positive("pressure_variation", params.pressure_variation)
    require_range("leaching_fraction", params.leaching_fraction, 0.0, 0.99)

    for fitting in params.fittings:
        require_non_negative("fitting_quantity", fitting.quantity)
        require_non_negative("loss_coefficient", fitting.loss_coefficient)
    if params.emitter_flow_rates is not None:
        for flow in params.emitter_flow_rates:
            require_non_negative("emitter_flow_rates", flow)
    if params.irrigated_area is not None:
        require_positive("irrigated_area", params.irrigated_area)
    if params.crop_water_need is not None:
        require_non_negative("crop_water_need", params.crop_water_need)

    require_positive("inner_diameter", pipe.inner_diameter)
    require_positive("wall_thickness", pipe.wall_thickness)
    require_positive("roughness_coefficient", pipe.roughness_coefficient)
    require_positive("elastic_modulus", pipe.elastic_modulus)
    require_non_negative("absolute_roughness", pipe.absolute_roughness)


def _uniformity(params: HydraulicCalculationParams, loss_psi: float) -> Tuple[float, float, bool]:
    """(DU, EU, modelled) from measured or modelled emitter flows."""
    if params.emitter_flow_rates:
        flows = params.emitter_flow_rates
        modelled = False
    else:
        flows = model_lateral_flows(max(params.required_outlet_pressure, 1.0), loss_psi)
        modelled = True
    return calculate_distribution_uniformity(flows), calculate_emission_uniformity(flows), modelled


def analyze_hydraulic_system(
    params: HydraulicCalculationParams,
    pipe: PipeSpecifications,
    soil: Optional[SoilProperties] = None,
) -> HydraulicAnalysisResult:
    """
    Complete hydraulic analysis of an irrigation supply line.

    Args:
        params: System description
        pipe: Pipe material and geometry
        soil: Soil at the irrigated area (for application rate check)

    Returns:
        HydraulicAnalysisResult

    Raises:
        InvalidInputError: non-positive flow, diameter or length, or other
            out-of-domain inputs.
    """
    _validate_params(params, pipe)
    warnings = []
    recommendations = []

    d_in = pipe.inner_diameter
    flow = params.design_flow_rate

    # Flow regime
    velocity = flow_velocity_fps(flow, d_in)
    v_head = velocity_head_ft(velocity)
    nu = kinematic_viscosity_at(params.water_temperature)
    re = calculate_reynolds_number(velocity, d_in, nu)
    regime = classify_flow_regime(re)

    # Losses (psi)
    friction = hazen_williams_friction_loss(flow, d_in, params.total_length, pipe.roughness_coefficient)
    minor = calculate_minor_losses(params.fittings, velocity) * FT_HEAD_TO_PSI
    elevation = params.elevation_gain * FT_HEAD_TO_PSI
    total_loss = friction + minor + elevation

    # Darcy-Weisbach comparison
    rel_roughness = pipe.absolute_roughness / (d_in / 12.0)
    f = calculate_friction_factor(re, rel_roughness)
    darcy = darcy_weisbach_head_loss(f, params.total_length, d_in, velocity) * FT_HEAD_TO_PSI

    available = params.inlet_pressure - total_loss - params.pressure_regulator_loss
    margin = available - params.required_outlet_pressure

    if params.required_outlet_pressure > 0:
        variation = (friction + minor) / params.required_outlet_pressure * 100
    else:
        variation = 0.0

    # Water hammer on peak velocity
    peak_flow = (params.peak_flow_rate or flow) * params.simultaneity_factor
    peak_velocity = flow_velocity_fps(peak_flow, d_in)
    wave_speed = calculate_wave_speed(pipe)
    hammer = calculate_water_hammer(peak_velocity, wave_speed)

    # Uniformity
    du, eu, modelled = _uniformity(params, friction + minor)

    # Efficiency
    applied = flow * params.operating_hours * 60
    if params.crop_water_need is not None:
        crop_need = params.crop_water_need
    else:
        crop_need = applied * du / 100 * (1 - params.leaching_fraction)
    efficiency = calculate_application_efficiency(applied, crop_need, params.leaching_fraction)

    app_rate = None
    if params.irrigated_area is not None:
        app_rate = calculate_application_rate(flow, params.irrigated_area)

    tdh = (total_loss + params.required_outlet_pressure) / FT_HEAD_TO_PSI

    # Compliance
    velocity_ok = velocity <= params.velocity_limit
    pressure_ok = margin >= 0 and variation <= params.pressure_variation
    rating_ok = params.inlet_pressure + hammer.pressure_rise_psi <= pipe.working_pressure
    asabe_ok = velocity_ok and pressure_ok and du >= MIN_DISTRIBUTION_UNIFORMITY

    if params.required_outlet_pressure > params.inlet_pressure:
        warnings.append(
            f"Required outlet pressure {params.required_outlet_pressure:.1f} psi exceeds "
            f"inlet pressure {params.inlet_pressure:.1f} psi"
        )

    if not velocity_ok:
        warnings.append(f"Velocity {velocity:.2f} ft/s exceeds limit of {params.velocity_limit:.1f} ft/s")
        recommendations.append("Increase pipe diameter to reduce velocity and surge potential")

    if margin < 0:
        warnings.append(f"Insufficient pressure: {abs(margin):.1f} psi short of required outlet pressure")
        recommendations.append("Increase inlet pressure, add a booster pump, or reduce system losses")

    if variation > params.pressure_variation:
        warnings.append(
            f"Pressure variation {variation:.1f}% exceeds {params.pressure_variation:.0f}% tolerance"
        )
        recommendations.append("Use pressure-compensating emitters or add pressure regulation")

    if hammer.risk != "low":
        warnings.append(f"Water hammer risk {hammer.risk}: {hammer.pressure_rise_psi:.0f} psi surge")
        recommendations.append("Install slow-closing valves and surge arrestors")

    if not rating_ok:
        warnings.append(
            f"Inlet plus surge pressure exceeds {pipe.material} working pressure "
            f"of {pipe.working_pressure:.0f} psi"
        )
        recommendations.append("Select a higher pressure class pipe")

    if du < MIN_DISTRIBUTION_UNIFORMITY:
        source = "modelled" if modelled else "measured"
        warnings.append(f"Distribution uniformity {du:.1f}% ({source}) below 80%")
        recommendations.append("Shorten laterals or improve emitter pressure regulation")

    if regime != "turbulent":
        recommendations.append(f"Flow is {regime}; verify emitter and filter performance at low flow")

    if app_rate is not None and soil is not None and app_rate > soil.infiltration_rate:
        warnings.append(
            f"Application rate {app_rate:.2f} in/hr exceeds {soil.type} infiltration "
            f"rate {soil.infiltration_rate:.2f} in/hr"
        )
        recommendations.append("Pulse irrigate or reduce application rate to prevent runoff")

    return HydraulicAnalysisResult(
        velocity=velocity,
        reynolds_number=re,
        flow_regime=regime,
        velocity_head=v_head,
        friction_loss=friction,
        minor_losses=minor,
        elevation_loss=elevation,
        total_system_loss=total_loss,
        available_pressure=available,
        pressure_margin=margin,
        pressure_variation_pct=variation,
        darcy_friction_loss=darcy,
        friction_factor=f,
        wave_speed=wave_speed,
        max_pressure_rise=hammer.pressure_rise_psi,
        water_hammer_risk=hammer.risk,
        distribution_uniformity=du,
        emission_uniformity=eu,
        application_efficiency=efficiency,
        application_rate=app_rate,
        total_dynamic_head=tdh,
        velocity_compliance=velocity_ok,
        pressure_compliance=pressure_ok,
        pipe_rating_compliance=rating_ok,
        asabe_compliance=asabe_ok,
        warnings=warnings,
        recommendations=recommendations,
    )
