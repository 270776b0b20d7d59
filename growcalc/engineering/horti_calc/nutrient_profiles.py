"""
Nutrient Profiles
=================

Tomato fertigation formula presets and deficiency reference data.

Base concentrations are ppm (mg/L) in the delivered solution at the
flowering stage, at 22 °C, 400 µmol/m²/s PPFD, 400 ppm CO2 and 70 % RH.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from .validation import InvalidInputError


NUTRIENTS: Tuple[str, ...] = (
    "nitrogen", "phosphorus", "potassium", "calcium", "magnesium", "sulfur",
    "iron", "manganese", "zinc", "copper", "boron", "molybdenum",
)

GROWTH_STAGES: Tuple[str, ...] = ("seedling", "vegetative", "flowering", "fruiting", "ripening")

STAGE_MULTIPLIERS: Dict[str, float] = {
    "seedling": 0.5,
    "vegetative": 0.8,
    "flowering": 1.0,
    "fruiting": 1.2,
    "ripening": 1.0,
}

# Fractional change in demand per unit deviation from the reference climate
ENVIRONMENTAL_COEFFICIENTS: Dict[str, float] = {
    "temperature": 0.02,     # per °C from 22
    "light": 0.0005,         # per µmol/m²/s from 400
    "co2": 0.0001,           # per ppm from 400
    "humidity": -0.005,      # per % RH from 70
}

REFERENCE_CONDITIONS: Dict[str, float] = {
    "temperature": 22.0,
    "light": 400.0,
    "co2": 400.0,
    "humidity": 70.0,
}


@dataclass(frozen=True)
class NutrientProfile:
    """Named fertigation formula."""
    name: str
    base_ppm: Dict[str, float]
    stage_multipliers: Dict[str, float]
    environmental_coefficients: Dict[str, float]
    ec_target: float        # mS/cm
    ph_target: float


def _profile(
    name: str,
    values: List[float],
    ec: float,
    ph: float,
    stages: Dict[str, float] = STAGE_MULTIPLIERS,
    climate: Dict[str, float] = ENVIRONMENTAL_COEFFICIENTS,
) -> NutrientProfile:
    return NutrientProfile(
        name=name,
        base_ppm=dict(zip(NUTRIENTS, values)),
        stage_multipliers=dict(stages),
        environmental_coefficients=dict(climate),
        ec_target=ec,
        ph_target=ph,
    )


NUTRIENT_PROFILES: Dict[str, NutrientProfile] = {
    "standard": _profile(
        "standard", [190, 50, 300, 190, 50, 70, 3.0, 0.8, 0.3, 0.1, 0.5, 0.05], 2.5, 5.8
    ),
    # Pushes fruit load hard and tracks extra light and CO2 closely
    "high_yield": _profile(
        "high_yield", [220, 60, 350, 210, 60, 80, 3.5, 1.0, 0.4, 0.12, 0.6, 0.06], 3.0, 5.8,
        stages={"seedling": 0.5, "vegetative": 0.85, "flowering": 1.05, "fruiting": 1.3, "ripening": 1.05},
        climate={"temperature": 0.025, "light": 0.0006, "co2": 0.00015, "humidity": -0.005},
    ),
    # Mineralized feed responds slowly; flatter curve on both axes
    "organic": _profile(
        "organic", [150, 45, 250, 170, 45, 60, 2.5, 0.6, 0.3, 0.08, 0.4, 0.04], 2.0, 6.2,
        stages={"seedling": 0.6, "vegetative": 0.85, "flowering": 1.0, "fruiting": 1.1, "ripening": 0.9},
        climate={"temperature": 0.015, "light": 0.0004, "co2": 0.00008, "humidity": -0.004},
    ),
    # Holds feed through ripening for sugars and potassium; high EC
    "flavor_focus": _profile(
        "flavor_focus", [160, 55, 380, 200, 55, 75, 3.0, 0.8, 0.3, 0.1, 0.5, 0.05], 3.5, 5.8,
        stages={"seedling": 0.5, "vegetative": 0.75, "flowering": 1.0, "fruiting": 1.15, "ripening": 1.1},
        climate={"temperature": 0.02, "light": 0.0004, "co2": 0.0001, "humidity": -0.006},
    ),
}


def get_profile(name: str) -> NutrientProfile:
    """Look up a nutrient profile by name."""
    profile = NUTRIENT_PROFILES.get(name)
    if profile is None:
        raise InvalidInputError(
            "profile", f"must be one of {', '.join(NUTRIENT_PROFILES)}", name
        )
    return profile


# ============================================================================
# DEFICIENCY REFERENCE
# ============================================================================

# Allowed shortfall before a deficiency is flagged (fraction of requirement)
DEFICIENCY_TOLERANCES: Dict[str, float] = {
    "nitrogen": 0.15,
    "phosphorus": 0.20,
    "potassium": 0.15,
    "calcium": 0.10,
    "magnesium": 0.15,
    "sulfur": 0.20,
    "iron": 0.25,
    "manganese": 0.25,
    "zinc": 0.25,
    "copper": 0.25,
    "boron": 0.20,
    "molybdenum": 0.30,
}

DEFAULT_TOLERANCE = 0.20

DEFICIENCY_SYMPTOMS: Dict[str, List[str]] = {
    "nitrogen": ["Uniform yellowing of older leaves", "Stunted growth", "Thin, spindly stems"],
    "phosphorus": ["Purple discoloration on leaf undersides", "Delayed flowering", "Poor root development"],
    "potassium": ["Marginal leaf scorch on older leaves", "Uneven fruit ripening", "Blotchy ripening"],
    "calcium": ["Blossom end rot", "Distorted young leaves", "Tip burn"],
    "magnesium": ["Interveinal chlorosis on older leaves", "Leaf curling", "Premature leaf drop"],
    "sulfur": ["Yellowing of young leaves", "Woody stems", "Reduced growth"],
    "iron": ["Interveinal chlorosis on young leaves", "Pale new growth"],
    "manganese": ["Mottled chlorosis on young leaves", "Necrotic spots"],
    "zinc": ["Small, narrow leaves", "Shortened internodes", "Bronzing"],
    "copper": ["Wilting of young leaves", "Blue-green foliage", "Poor fruit set"],
    "boron": ["Death of growing tips", "Brittle stems", "Fruit cracking"],
    "molybdenum": ["Pale, mottled older leaves", "Leaf margin necrosis"],
}

REMEDIATION: Dict[str, str] = {
    "nitrogen": "Increase calcium nitrate or potassium nitrate in the A tank",
    "phosphorus": "Add monopotassium phosphate; check solution pH is below 6.5",
    "potassium": "Increase potassium sulfate or potassium nitrate",
    "calcium": "Increase calcium nitrate; improve air movement to support transpiration",
    "magnesium": "Add magnesium sulfate (Epsom salt)",
    "sulfur": "Add magnesium sulfate or potassium sulfate",
    "iron": "Add chelated iron (Fe-DTPA or Fe-EDDHA); lower pH toward 5.8",
    "manganese": "Add manganese sulfate or chelated manganese",
    "zinc": "Add zinc sulfate or chelated zinc",
    "copper": "Add copper sulfate or chelated copper",
    "boron": "Add boric acid or Solubor; avoid overcorrection",
    "molybdenum": "Add sodium molybdate at trace rates",
}

# Severity bands (% below requirement)
SEVERITY_MILD = 25.0
SEVERITY_MODERATE = 50.0
