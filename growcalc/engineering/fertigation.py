"""
Fertigation Discipline Calculator

Implements DisciplineCalculator for greenhouse tomato nutrition.
Wraps the horti_calc nutrient engine for solution targets and deficiency
diagnosis against those targets.
"""

from dataclasses import asdict
from typing import Any, Dict, List

from growcalc.core.config import CALC_DEFAULTS
from growcalc.core.logging import get_logger
from growcalc.engineering.base import DisciplineCalculator, DisciplineResult
from growcalc.engineering.horti_calc import (
    EnvironmentalConditions,
    InvalidInputError,
    NUTRIENTS,
    PlantParameters,
    ProductionTargets,
    calculate_nutrient_requirements,
    diagnose_potential_deficiencies,
)

logger = get_logger("growcalc.engineering.fertigation")


def _requirements(params: Dict[str, Any]):
    plant = PlantParameters(
        growth_stage=params.get('growth_stage', 'vegetative'),
        plant_age_days=params.get('plant_age_days', 30),
        leaf_count=params.get('leaf_count', 20),
        variety_average_yield=params.get('variety_average_yield', 10.0),
    )
    env = EnvironmentalConditions(
        temperature_c=params.get('temperature_c', 22.0),
        humidity_pct=params.get('humidity_pct', 70.0),
        ppfd=params.get('ppfd', 400.0),
        co2_ppm=params.get('co2_ppm', 400.0),
    )
    targets = ProductionTargets(
        target_yield=params.get('target_yield'),
        quality_focus=params.get('quality_focus', 'balanced'),
    )
    return calculate_nutrient_requirements(
        plant, env, targets, profile=params.get('profile', CALC_DEFAULTS.nutrient_profile),
    )


# ---------------------------------------------------------------------------
# Module-level run_*() functions (used by CLI and validators directly)
# ---------------------------------------------------------------------------

def run_nutrient_targets(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Nutrient solution targets for one crop condition.

    Params:
        profile: standard, high_yield, organic or flavor_focus
        growth_stage: seedling, vegetative, flowering, fruiting, ripening
        plant_age_days: Days since transplant
        leaf_count: Leaves per plant
        variety_average_yield: kg/plant/season
        temperature_c, humidity_pct, ppfd, co2_ppm: Climate
        target_yield: kg/plant/season (optional)
        quality_focus: yield, flavor or balanced

    Returns:
        Dict with NutrientRequirements fields.
    """
    try:
        result = _requirements(params)
    except InvalidInputError as e:
        logger.warning("Nutrient targets rejected: %s", e)
        raise

    logger.debug(
        "Nutrients %s/%s: modifier %.3f, N %.0f ppm",
        result.profile, result.growth_stage, result.composite_modifier,
        result.nutrients_ppm['nitrogen'],
    )
    return asdict(result)


def run_deficiency_diagnosis(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Diagnose deficiencies in a measured solution or tissue analysis.

    Params:
        current: Dict of measured ppm by nutrient
        required: Dict of required ppm (optional; computed from the
            remaining params via run_nutrient_targets when absent)

    Returns:
        Dict with the required targets and a list of diagnoses.
    """
    current: Dict[str, float] = params.get('current') or {}
    unknown = [n for n in current if n not in NUTRIENTS]
    if unknown:
        raise InvalidInputError('current', f"unknown nutrients {', '.join(unknown)}")

    required = params.get('required')
    if required is None:
        required = _requirements(params).nutrients_ppm

    diagnoses = diagnose_potential_deficiencies(current, required)
    warnings = [
        f"{d.nutrient} {d.severity} deficiency ({d.severity_pct:.1f}% below target)"
        for d in diagnoses
    ]

    return {
        'assessed': [n for n in required if n in current],
        'required': required,
        'deficiencies': [asdict(d) for d in diagnoses],
        'warnings': warnings,
    }


# ---------------------------------------------------------------------------
# Dispatch table and DisciplineCalculator implementation
# ---------------------------------------------------------------------------

_CALC_DISPATCH = {
    'nutrients': run_nutrient_targets,
    'deficiencies': run_deficiency_diagnosis,
}


class FertigationCalculator(DisciplineCalculator):
    """Fertigation discipline calculator."""

    @property
    def discipline_name(self) -> str:
        return "fertigation"

    def available_calculations(self) -> List[str]:
        return list(_CALC_DISPATCH.keys())

    def run_calculation(self, calculation_type: str, params: Dict[str, Any]) -> DisciplineResult:
        """
        Run a fertigation calculation by type name.

        Raises:
            ValueError: If calculation_type is unknown.
        """
        return self._dispatch(_CALC_DISPATCH, calculation_type, params)
