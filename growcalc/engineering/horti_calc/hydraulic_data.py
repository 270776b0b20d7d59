"""
Hydraulic Reference Data
========================

Soil, pipe material and fitting data for irrigation hydraulics.

Sources:
- Soil hydraulic properties: Rawls, Brakensiek & Saxton (1982) texture classes
- Pipe dimensions: ASTM D1785 (PVC Sch 40), ASTM F714 DR11 (HDPE), ASME B36.10 (steel)
- Fitting resistance coefficients: Crane TP-410
- Water kinematic viscosity: Hydraulic Institute
"""

from dataclasses import dataclass, replace
from typing import Dict

from .validation import InvalidInputError


@dataclass(frozen=True)
class SoilProperties:
    """Hydraulic properties of a soil texture class."""
    type: str
    hydraulic_conductivity: float   # in/hr (saturated)
    infiltration_rate: float        # in/hr (basic intake)
    field_capacity: float           # % volumetric
    wilting_point: float            # % volumetric
    available_water: float          # % volumetric
    bulk_density: float             # g/cm³
    porosity: float                 # %


@dataclass(frozen=True)
class PipeSpecifications:
    """Pipe material and geometry."""
    material: str
    nominal_diameter: float         # in
    inner_diameter: float           # in
    wall_thickness: float           # in
    roughness_coefficient: float    # Hazen-Williams C
    absolute_roughness: float       # ft
    elastic_modulus: float          # psi
    working_pressure: float         # psi
    safety_factor: float = 2.0


@dataclass(frozen=True)
class FittingLosses:
    """A group of identical fittings."""
    type: str
    quantity: int
    nominal_size: float = 0.0       # in
    loss_coefficient: float = 1.0   # K


def _soil(name, ks, intake, fc, wp, bd, porosity):
    return SoilProperties(
        type=name,
        hydraulic_conductivity=ks,
        infiltration_rate=intake,
        field_capacity=fc,
        wilting_point=wp,
        available_water=fc - wp,
        bulk_density=bd,
        porosity=porosity,
    )


SOIL_DATABASE: Dict[str, SoilProperties] = {
    "sand": _soil("sand", 8.27, 2.0, 10, 5, 1.60, 39.6),
    "loamy_sand": _soil("loamy_sand", 2.41, 1.5, 14, 6, 1.55, 41.5),
    "sandy_loam": _soil("sandy_loam", 1.02, 1.0, 23, 10, 1.50, 43.4),
    "loam": _soil("loam", 0.52, 0.5, 31, 15, 1.40, 47.2),
    "silt_loam": _soil("silt_loam", 0.27, 0.4, 34, 12, 1.35, 49.1),
    "clay_loam": _soil("clay_loam", 0.09, 0.3, 36, 22, 1.30, 50.9),
    "clay": _soil("clay", 0.02, 0.1, 42, 30, 1.25, 52.8),
}

DEFAULT_SOIL = "loam"


# Base material records at 4" nominal; build_pipe_specification resizes them
PIPE_SPECIFICATIONS: Dict[str, PipeSpecifications] = {
    "PVC": PipeSpecifications(
        material="PVC",
        nominal_diameter=4,
        inner_diameter=3.826,
        wall_thickness=0.237,
        roughness_coefficient=150,
        absolute_roughness=5e-6,
        elastic_modulus=400_000,
        working_pressure=200,
    ),
    "HDPE": PipeSpecifications(
        material="HDPE",
        nominal_diameter=4,
        inner_diameter=3.640,
        wall_thickness=0.409,
        roughness_coefficient=150,
        absolute_roughness=5e-6,
        elastic_modulus=110_000,
        working_pressure=160,
    ),
    "steel": PipeSpecifications(
        material="steel",
        nominal_diameter=4,
        inner_diameter=3.826,
        wall_thickness=0.237,
        roughness_coefficient=120,
        absolute_roughness=1.5e-4,
        elastic_modulus=30_000_000,
        working_pressure=600,
    ),
}

DEFAULT_PIPE_MATERIAL = "PVC"

# Inside diameter (in) by material and nominal size
PIPE_INNER_DIAMETERS: Dict[str, Dict[float, float]] = {
    "PVC": {2: 1.939, 3: 2.864, 4: 3.826, 6: 5.761, 8: 7.625},
    "HDPE": {2: 1.860, 3: 2.760, 4: 3.640, 6: 5.500, 8: 7.280},
    "steel": {2: 1.939, 3: 2.900, 4: 3.826, 6: 5.761, 8: 7.625},
}

# Wall thickness (in) by nominal size
SCH40_WALL_THICKNESS: Dict[float, float] = {2: 0.154, 3: 0.216, 4: 0.237, 6: 0.280, 8: 0.322}
HDPE_DR11_WALL_THICKNESS: Dict[float, float] = {2: 0.216, 3: 0.318, 4: 0.409, 6: 0.602, 8: 0.784}

# Untabulated sizes: ID = nominal - allowance
INNER_DIAMETER_ALLOWANCE = 0.2


FITTING_K_FACTORS: Dict[str, float] = {
    "elbow_90": 0.9,
    "elbow_45": 0.4,
    "tee_run": 0.6,
    "tee_branch": 1.8,
    "valve_gate": 0.2,
    "valve_globe": 10.0,
    "valve_ball": 0.05,
    "valve_check": 2.5,
    "valve_butterfly": 0.3,
    "coupling": 0.08,
    "entrance": 0.5,
    "exit": 1.0,
}

DEFAULT_FITTING_K = 1.0


# Kinematic viscosity of water (ft²/s) by temperature (°F)
WATER_KINEMATIC_VISCOSITY: Dict[float, float] = {
    40: 1.664e-5,
    50: 1.410e-5,
    60: 1.217e-5,
    68: 1.130e-5,
    70: 1.059e-5,
    80: 0.930e-5,
    90: 0.826e-5,
    100: 0.739e-5,
    120: 0.609e-5,
}


# ============================================================================
# LOOKUPS
# ============================================================================

def get_soil_properties(name: str, strict: bool = False) -> SoilProperties:
    """
    Soil properties by texture class name.

    Unknown names return loam unless ``strict`` is set.
    """
    key = name.lower().replace(" ", "_").replace("-", "_")
    soil = SOIL_DATABASE.get(key)
    if soil is None:
        if strict:
            raise InvalidInputError(
                "soil_type", f"must be one of {', '.join(SOIL_DATABASE)}", name
            )
        return SOIL_DATABASE[DEFAULT_SOIL]
    return soil


def get_fitting_coefficient(fitting_type: str, strict: bool = False) -> float:
    """Resistance coefficient K for a fitting type (1.0 when unknown)."""
    k = FITTING_K_FACTORS.get(fitting_type)
    if k is None:
        if strict:
            raise InvalidInputError(
                "fitting_type", f"must be one of {', '.join(FITTING_K_FACTORS)}", fitting_type
            )
        return DEFAULT_FITTING_K
    return k


def make_fitting(fitting_type: str, quantity: int = 1, nominal_size: float = 0.0,
                 strict: bool = False) -> FittingLosses:
    """Build a FittingLosses record with its tabulated K factor."""
    return FittingLosses(
        type=fitting_type,
        quantity=quantity,
        nominal_size=nominal_size,
        loss_coefficient=get_fitting_coefficient(fitting_type, strict=strict),
    )


def _resolve_material(material: str) -> str:
    for key in PIPE_SPECIFICATIONS:
        if key.lower() == material.lower():
            return key
    return ""


def build_pipe_specification(
    material: str,
    nominal_diameter: float,
    strict: bool = False,
) -> PipeSpecifications:
    """
    Pipe record for a material and nominal size.

    Untabulated sizes use ID = nominal - 0.2 in and the nearest tabulated
    wall thickness. Unknown materials fall back to PVC unless ``strict``.
    """
    key = _resolve_material(material)
    if not key:
        if strict:
            raise InvalidInputError(
                "pipe_material", f"must be one of {', '.join(PIPE_SPECIFICATIONS)}", material
            )
        key = DEFAULT_PIPE_MATERIAL

    base = PIPE_SPECIFICATIONS[key]
    ids = PIPE_INNER_DIAMETERS[key]
    walls = HDPE_DR11_WALL_THICKNESS if key == "HDPE" else SCH40_WALL_THICKNESS

    inner = ids.get(nominal_diameter, nominal_diameter - INNER_DIAMETER_ALLOWANCE)
    nearest = min(walls, key=lambda size: abs(size - nominal_diameter))
    wall = walls.get(nominal_diameter, walls[nearest])

    return replace(
        base,
        nominal_diameter=nominal_diameter,
        inner_diameter=inner,
        wall_thickness=wall,
    )
