"""
growcalc Engineering Module

Discipline calculators for cultivation facilities: electrical (NEC),
irrigation hydraulics, greenhouse climate energy and fertigation.
"""

from typing import List

from growcalc.engineering.base import (
    DisciplineCalculator,
    CalculationResult,
    DisciplineResult,
    ValidationResult,
    ValidationStatus,
)


def discipline_calculators() -> List[DisciplineCalculator]:
    """One instance of every discipline calculator."""
    from growcalc.engineering.climate import ClimateCalculator
    from growcalc.engineering.electrical import ElectricalCalculator
    from growcalc.engineering.fertigation import FertigationCalculator
    from growcalc.engineering.irrigation import IrrigationCalculator

    return [
        ElectricalCalculator(),
        IrrigationCalculator(),
        ClimateCalculator(),
        FertigationCalculator(),
    ]


__all__ = [
    "DisciplineCalculator",
    "CalculationResult",
    "DisciplineResult",
    "ValidationResult",
    "ValidationStatus",
    "discipline_calculators",
]
