"""
Base classes for engineering discipline calculators.

All discipline modules implement DisciplineCalculator.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class ValidationStatus(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    WARNING = "WARNING"
    REVIEW = "REVIEW"


@dataclass
class CalculationResult:
    calculation_type: str = ""
    warnings: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return self.__dict__.copy()


@dataclass
class DisciplineResult(CalculationResult):
    """Calculation result carrying discipline-specific output data."""

    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        # Flatten data into top-level for convenience
        d.pop("data", None)
        d.update(self.data)
        return d


@dataclass
class ValidationResult:
    item_type: str
    item_tag: str
    provided_value: str
    required_value: str
    tolerance_pct: float
    deviation_pct: float
    status: ValidationStatus
    notes: str = ""

    def to_dict(self) -> Dict[str, Any]:
        d = self.__dict__.copy()
        d["status"] = self.status.value
        return d


class DisciplineCalculator(ABC):
    """Abstract base class for discipline calculators."""

    @property
    @abstractmethod
    def discipline_name(self) -> str:
        pass

    @abstractmethod
    def available_calculations(self) -> List[str]:
        pass

    @abstractmethod
    def run_calculation(self, calculation_type: str, params: Dict[str, Any]) -> CalculationResult:
        pass

    def _dispatch(self, dispatch: Dict[str, Any], calculation_type: str, params: Dict[str, Any]) -> DisciplineResult:
        """Look up and run a calculation from a dispatch table."""
        func = dispatch.get(calculation_type)
        if func is None:
            raise ValueError(
                f"Unknown calculation type: {calculation_type}. "
                f"Available: {', '.join(self.available_calculations())}"
            )

        data = func(params)

        return DisciplineResult(
            calculation_type=calculation_type,
            warnings=list(data.get("warnings", [])),
            data=data,
        )
