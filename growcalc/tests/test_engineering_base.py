"""Tests for engineering base classes and data classes."""

import pytest

from growcalc.engineering import discipline_calculators
from growcalc.engineering.base import (
    CalculationResult,
    DisciplineCalculator,
    DisciplineResult,
    ValidationResult,
    ValidationStatus,
)


def test_validation_status_values():
    assert ValidationStatus.PASS.value == "PASS"
    assert ValidationStatus.FAIL.value == "FAIL"
    assert ValidationStatus.WARNING.value == "WARNING"
    assert ValidationStatus.REVIEW.value == "REVIEW"


def test_calculation_result_to_dict():
    r = CalculationResult(calculation_type="test", warnings=["w1"], notes=[])
    d = r.to_dict()
    assert d["calculation_type"] == "test"
    assert d["warnings"] == ["w1"]
    assert d["notes"] == []


def test_discipline_result_flattens_data():
    r = DisciplineResult(calculation_type="grounding", data={"grounding_conductor": "8 AWG"})
    d = r.to_dict()
    assert d["grounding_conductor"] == "8 AWG"
    assert "data" not in d


def test_validation_result_to_dict():
    v = ValidationResult(
        item_type="conductor", item_tag="LP-1", provided_value="#12",
        required_value="10 AWG", tolerance_pct=0.0,
        deviation_pct=-37.1, status=ValidationStatus.FAIL,
    )
    d = v.to_dict()
    assert d["status"] == "FAIL"  # serialized as string, not enum
    assert d["item_tag"] == "LP-1"


def test_discipline_calculator_is_abstract():
    with pytest.raises(TypeError):
        DisciplineCalculator()


def test_discipline_calculators_registry():
    names = [c.discipline_name for c in discipline_calculators()]
    assert names == ["electrical", "irrigation", "climate", "fertigation"]


def test_dispatch_copies_warnings():
    calc = next(c for c in discipline_calculators() if c.discipline_name == "irrigation")
    result = calc.run_calculation("uniformity", {"flows": [1, 2, 3, 4]})
    assert result.calculation_type == "uniformity"
    assert result.warnings
    assert result.to_dict()["distribution_uniformity"] == pytest.approx(40.0)
