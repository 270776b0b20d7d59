"""
Tomato Nutrient Module
======================

Fertigation targets for greenhouse tomatoes:
- Stage- and climate-adjusted ppm targets for 12 nutrients
- EC and pH setpoints
- Water uptake and feed volume
- Growth rate and yield estimates
- Deficiency diagnosis from solution or tissue analysis

All nutrients scale by a single composite modifier:

    modifier = stage × Π(1 + deviation × coefficient) × yield × quality × age
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .nutrient_profiles import (
    DEFAULT_TOLERANCE,
    DEFICIENCY_SYMPTOMS,
    DEFICIENCY_TOLERANCES,
    GROWTH_STAGES,
    NutrientProfile,
    REFERENCE_CONDITIONS,
    REMEDIATION,
    SEVERITY_MILD,
    SEVERITY_MODERATE,
    get_profile,
)
from .validation import (
    require_choice,
    require_non_negative,
    require_positive,
    require_range,
)


AGE_RAMP_DAYS = 21
QUALITY_MODIFIERS: Dict[str, float] = {"yield": 1.1, "flavor": 0.9, "balanced": 1.0}

BASE_UPTAKE_L_PER_LAI = 0.8
FEED_EXCESS_FACTOR = 1.2            # 20 % leaching excess
MAX_GROWTH_CM_DAY = 3.0
TEMP_STRESS_PER_C = 0.05
LIGHT_SATURATION_PPFD = 400.0
ENV_FACTOR_LOW = 0.5
ENV_FACTOR_HIGH = 1.5


@dataclass
class PlantParameters:
    growth_stage: str = "vegetative"
    plant_age_days: float = 30.0
    leaf_count: int = 20
    variety_average_yield: float = 10.0     # kg/plant/season


@dataclass
class EnvironmentalConditions:
    temperature_c: float = 22.0
    humidity_pct: float = 70.0
    ppfd: float = 400.0                     # µmol/m²/s
    co2_ppm: float = 400.0


@dataclass
class ProductionTargets:
    target_yield: Optional[float] = None    # kg/plant/season
    quality_focus: str = "balanced"         # yield, flavor, balanced


@dataclass
class NutrientRequirements:
    """Solution targets for one plant condition."""
    profile: str
    growth_stage: str
    nutrients_ppm: Dict[str, float]
    ec_target: float
    ph_target: float
    composite_modifier: float
    stage_modifier: float
    environmental_factor: float
    yield_modifier: float
    quality_modifier: float
    age_modifier: float
    water_uptake_l_day: float
    feed_volume_l_day: float
    growth_rate_cm_day: float
    estimated_yield: float
    warnings: List[str] = field(default_factory=list)


@dataclass
class DeficiencyDiagnosis:
    nutrient: str
    current_ppm: float
    required_ppm: float
    severity_pct: float
    severity: str
    symptoms: List[str] = field(default_factory=list)
    remediation: str = ""


class NutrientCalculator:
    """
    Fertigation calculator for one nutrient profile.

    Example:
        >>> calc = NutrientCalculator("standard")
        >>> req = calc.calculate_requirements(
        ...     PlantParameters(growth_stage="fruiting", plant_age_days=60),
        ...     EnvironmentalConditions(temperature_c=24, ppfd=600),
        ... )
        >>> print(f"N: {req.nutrients_ppm['nitrogen']:.0f} ppm")
    """

    def __init__(self, profile: str = "standard"):
        self.profile: NutrientProfile = get_profile(profile)

    def environmental_factor(self, env: EnvironmentalConditions) -> float:
        """Π(1 + deviation × coefficient) over temperature, light, CO2, humidity."""
        coeffs = self.profile.environmental_coefficients
        deviations = {
            "temperature": env.temperature_c - REFERENCE_CONDITIONS["temperature"],
            "light": env.ppfd - REFERENCE_CONDITIONS["light"],
            "co2": env.co2_ppm - REFERENCE_CONDITIONS["co2"],
            "humidity": env.humidity_pct - REFERENCE_CONDITIONS["humidity"],
        }
        factor = 1.0
        for key, deviation in deviations.items():
            factor *= 1 + deviation * coeffs[key]
        return factor

    @staticmethod
    def age_modifier(plant_age_days: float) -> float:
        """Ramps 0 → 1 over the first 21 days."""
        return min(1.0, max(0.0, plant_age_days) / AGE_RAMP_DAYS)

    @staticmethod
    def water_uptake(plant: PlantParameters, env: EnvironmentalConditions) -> float:
        """
        Daily water uptake (L/plant).

            LAI ≈ ln(leaf count + 1) × 0.5
            uptake = LAI × 0.8 × temperature × light × humidity scaling
        """
        lai = math.log(plant.leaf_count + 1) * 0.5
        temp_scale = 1 + (env.temperature_c - REFERENCE_CONDITIONS["temperature"]) * 0.05
        light_scale = 1 + (env.ppfd - REFERENCE_CONDITIONS["light"]) * 0.0005
        humidity_scale = 1 - (env.humidity_pct - REFERENCE_CONDITIONS["humidity"]) * 0.01
        return max(0.0, lai * BASE_UPTAKE_L_PER_LAI * temp_scale * light_scale * humidity_scale)

    @staticmethod
    def growth_factors(plant: PlantParameters, env: EnvironmentalConditions):
        """(temperature factor, light factor) for growth and yield."""
        optimum = 24.0 if plant.growth_stage == "fruiting" else 22.0
        temp_factor = max(0.0, 1 - abs(env.temperature_c - optimum) * TEMP_STRESS_PER_C)
        light_factor = min(1.0, env.ppfd / LIGHT_SATURATION_PPFD)
        return temp_factor, light_factor

    def _validate(self, plant, env, targets) -> None:
        require_choice("growth_stage", plant.growth_stage, GROWTH_STAGES)
        require_non_negative("plant_age_days", plant.plant_age_days)
        require_non_negative("leaf_count", plant.leaf_count)
        require_positive("variety_average_yield", plant.variety_average_yield)
        require_range("temperature_c", env.temperature_c, 0, 50)
        require_range("humidity_pct", env.humidity_pct, 0, 100)
        require_range("ppfd", env.ppfd, 0, 3000)
        require_range("co2_ppm", env.co2_ppm, 0, 5000)
        if targets.target_yield is not None:
            require_positive("target_yield", targets.target_yield)
        require_choice("quality_focus", targets.quality_focus, QUALITY_MODIFIERS)

    def calculate_requirements(
        self,
        plant: PlantParameters,
        env: EnvironmentalConditions,
        targets: Optional[ProductionTargets] = None,
    ) -> NutrientRequirements:
        """
        Nutrient targets for a plant condition.

        Raises:
            InvalidInputError: unknown stage or quality focus, or
                environment outside 0-50 °C, 0-100 % RH.
        """
        targets = targets or ProductionTargets()
        self._validate(plant, env, targets)
        warnings = []

        stage = self.profile.stage_multipliers[plant.growth_stage]
        env_factor = self.environmental_factor(env)
        if targets.target_yield is not None:
            yield_mod = targets.target_yield / plant.variety_average_yield
        else:
            yield_mod = 1.0
        quality_mod = QUALITY_MODIFIERS[targets.quality_focus]
        age_mod = self.age_modifier(plant.plant_age_days)

        composite = stage * env_factor * yield_mod * quality_mod * age_mod
        ppm = {name: base * composite for name, base in self.profile.base_ppm.items()}

        if not ENV_FACTOR_LOW <= env_factor <= ENV_FACTOR_HIGH:
            warnings.append(
                f"Environmental factor {env_factor:.2f} outside 0.50-1.50; "
                f"check climate inputs before dosing"
            )
        if yield_mod > 1.5:
            warnings.append(f"Target yield is {yield_mod:.1f}x the variety average")
        if age_mod < 1.0:
            warnings.append(f"Young plant ({plant.plant_age_days:g} days): feed ramped to {age_mod:.0%}")

        uptake = self.water_uptake(plant, env)
        temp_factor, light_factor = self.growth_factors(plant, env)

        return NutrientRequirements(
            profile=self.profile.name,
            growth_stage=plant.growth_stage,
            nutrients_ppm=ppm,
            ec_target=self.profile.ec_target * stage,
            ph_target=self.profile.ph_target,
            composite_modifier=composite,
            stage_modifier=stage,
            environmental_factor=env_factor,
            yield_modifier=yield_mod,
            quality_modifier=quality_mod,
            age_modifier=age_mod,
            water_uptake_l_day=uptake,
            feed_volume_l_day=uptake * FEED_EXCESS_FACTOR,
            growth_rate_cm_day=MAX_GROWTH_CM_DAY * temp_factor * light_factor,
            estimated_yield=plant.variety_average_yield * temp_factor * light_factor,
            warnings=warnings,
        )


def calculate_nutrient_requirements(
    plant: PlantParameters,
    env: EnvironmentalConditions,
    targets: Optional[ProductionTargets] = None,
    profile: str = "standard",
) -> NutrientRequirements:
    """Quick nutrient target calculation."""
    return NutrientCalculator(profile).calculate_requirements(plant, env, targets)


def _severity_band(severity_pct: float) -> str:
    if severity_pct < SEVERITY_MILD:
        return "mild"
    if severity_pct < SEVERITY_MODERATE:
        return "moderate"
    return "severe"


def diagnose_potential_deficiencies(
    current: Dict[str, float],
    required: Dict[str, float],
) -> List[DeficiencyDiagnosis]:
    """
    Flag nutrients below requirement by more than their tolerance.

    A nutrient is deficient when current < required × (1 - tolerance).
    Nutrients absent from ``current`` are not assessed.
    """
    diagnoses = []
    for nutrient, required_ppm in required.items():
        if nutrient not in current or required_ppm <= 0:
            continue
        current_ppm = current[nutrient]
        tolerance = DEFICIENCY_TOLERANCES.get(nutrient, DEFAULT_TOLERANCE)
        if current_ppm >= required_ppm * (1 - tolerance):
            continue

        severity = (required_ppm - current_ppm) / required_ppm * 100
        diagnoses.append(DeficiencyDiagnosis(
            nutrient=nutrient,
            current_ppm=current_ppm,
            required_ppm=required_ppm,
            severity_pct=severity,
            severity=_severity_band(severity),
            symptoms=list(DEFICIENCY_SYMPTOMS.get(nutrient, [])),
            remediation=REMEDIATION.get(nutrient, ""),
        ))
    return diagnoses
