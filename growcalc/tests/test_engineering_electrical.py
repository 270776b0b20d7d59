"""Tests for ElectricalCalculator and the electrical run_*() functions."""

import pytest

from growcalc.engineering.electrical import (
    ElectricalCalculator,
    run_ampacity,
    run_circuit_design,
    run_compliance_check,
    run_conduit_fill,
    run_demand_load,
    run_grounding,
    run_voltage_drop,
)
from growcalc.engineering.horti_calc import InvalidInputError


class TestElectricalCalculator:
    def test_discipline_name(self):
        assert ElectricalCalculator().discipline_name == "electrical"

    def test_available_calculations(self):
        calcs = ElectricalCalculator().available_calculations()
        assert set(calcs) == {
            "nec-check", "grounding", "ampacity", "conduit-fill",
            "voltage-drop", "circuit-design", "demand-load",
        }

    def test_unknown_type_raises(self):
        with pytest.raises(ValueError, match="Unknown calculation type"):
            ElectricalCalculator().run_calculation("bogus", {})

    def test_dispatch_returns_result(self):
        result = ElectricalCalculator().run_calculation("grounding", {})
        assert result.calculation_type == "grounding"
        assert result.to_dict()["grounding_conductor"] == "12 AWG"


class TestRunComplianceCheck:
    def test_defaults_run(self):
        result = run_compliance_check({})
        assert result["equipment_type"] == "lighting"
        assert result["current_a"] == pytest.approx(1000 / 240)
        assert len(result["checks"]) == 8
        assert result["is_compliant"] is True
        assert result["warnings"] == []

    def test_long_run_fails_voltage_drop(self):
        result = run_compliance_check({"current": 20, "distance_ft": 100})
        assert result["is_compliant"] is False
        assert any(w.startswith("215.2(A)(1)") for w in result["warnings"])

    def test_missing_gfci_flagged(self):
        result = run_compliance_check({
            "equipment_type": "dehumidifier", "power": 2400, "voltage": 240,
            "gfci_protected": False,
        })
        gfci = next(c for c in result["checks"] if c["section"] == "210.8")
        assert gfci["is_compliant"] is False
        assert result["is_compliant"] is False

    def test_flag_overrides(self):
        result = run_compliance_check({"current": 20, "is_continuous": False, "distance_ft": 10})
        assert "20.0A" in result["checks"][0]["requirement"]

    def test_invalid_voltage(self):
        with pytest.raises(InvalidInputError):
            run_compliance_check({"voltage": 0})

    def test_invalid_phases(self):
        with pytest.raises(InvalidInputError):
            run_compliance_check({"phases": 2})


class TestRunSingleCalculations:
    def test_grounding(self):
        assert run_grounding({"ocpd_amps": 100})["grounding_conductor"] == "8 AWG"

    def test_ampacity(self):
        result = run_ampacity({"base_ampacity": 100, "ambient_temp_c": 30, "conductor_count": 3})
        assert result["corrected_ampacity"] == pytest.approx(100)

    def test_conduit_fill(self):
        result = run_conduit_fill({"wire_gauge": "12 AWG", "wire_count": 3})
        assert result["conduit_size"] == '1/2"'
        assert result["is_compliant"]

    def test_voltage_drop(self):
        result = run_voltage_drop({"current": 20, "distance_ft": 100, "wire_gauge": "12 AWG"})
        assert result["voltage_drop_percentage"] == pytest.approx(7.72 / 240 * 100)

    def test_voltage_drop_impedance_method(self):
        params = {"current": 20, "distance_ft": 100, "wire_gauge": "12 AWG", "power_factor": 0.85}
        resistive = run_voltage_drop(params)
        impedance = run_voltage_drop({**params, "method": "impedance"})
        assert resistive["voltage_drop_percentage"] == pytest.approx(7.72 / 240 * 100)
        assert impedance["voltage_drop_percentage"] < resistive["voltage_drop_percentage"]
        assert impedance["reactance_ohm_per_kft"] == pytest.approx(0.054)

    def test_voltage_drop_unknown_method(self):
        with pytest.raises(InvalidInputError):
            run_voltage_drop({"method": "exact"})

    def test_circuit_design(self):
        result = run_circuit_design({"power": 4800, "voltage": 240, "distance_ft": 100})
        assert result["overcurrent_device_amps"] == 25
        assert result["conductor_size"] == "10 AWG"
        assert result["conduit_size"].endswith("EMT")

    def test_circuit_design_invalid(self):
        with pytest.raises(InvalidInputError):
            run_circuit_design({"power": -1})

    def test_demand_load(self):
        result = run_demand_load({"equipment": [
            {"equipment_type": "lighting", "power": 1000, "voltage": 240},
            {"equipment_type": "irrigation", "power": 1000, "voltage": 240},
        ]})
        assert result["demand_load_w"] == pytest.approx(1700)
        assert result["by_type"]["irrigation"] == pytest.approx(700)
