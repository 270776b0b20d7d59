"""Tests for IrrigationCalculator and the irrigation run_*() functions."""

import pytest

from growcalc.engineering.horti_calc import InvalidInputError
from growcalc.engineering.irrigation import (
    IrrigationCalculator,
    run_friction_loss,
    run_hydraulic_analysis,
    run_uniformity,
    run_water_hammer,
)

SUPPLY_LINE = {
    "flow_gpm": 40, "inlet_pressure": 50, "outlet_pressure": 30,
    "length_ft": 300, "nominal_size": 3, "num_90_elbows": 4, "num_gate_valves": 1,
}


class TestIrrigationCalculator:
    def test_discipline_name(self):
        assert IrrigationCalculator().discipline_name == "irrigation"

    def test_available_calculations(self):
        calcs = IrrigationCalculator().available_calculations()
        assert set(calcs) == {"hydraulics", "uniformity", "water-hammer", "friction-loss"}

    def test_unknown_type_raises(self):
        with pytest.raises(ValueError, match="Unknown calculation type"):
            IrrigationCalculator().run_calculation("bogus", {})


class TestRunHydraulicAnalysis:
    def test_defaults_run(self):
        result = run_hydraulic_analysis({})
        assert result["pipe_material"] == "PVC"
        assert result["inner_diameter_in"] == pytest.approx(1.939)
        assert "asabe_compliance" in result

    def test_supply_line_compliant(self):
        result = run_hydraulic_analysis(SUPPLY_LINE)
        assert result["flow_regime"] == "turbulent"
        assert result["asabe_compliance"] is True
        assert result["warnings"] == []

    def test_fitting_list(self):
        with_fittings = run_hydraulic_analysis(dict(SUPPLY_LINE, fittings=[{"type": "valve_globe"}]))
        without = run_hydraulic_analysis(SUPPLY_LINE)
        assert with_fittings["minor_losses"] > without["minor_losses"]

    @pytest.mark.parametrize("override", [
        {"flow_gpm": 0},
        {"length_ft": -1},
        {"pipe_material": "copper"},
        {"soil_type": "peat"},
        {"fittings": [{"type": "swing_joint"}]},
    ])
    def test_invalid_inputs(self, override):
        with pytest.raises(InvalidInputError):
            run_hydraulic_analysis(dict(SUPPLY_LINE, **override))


class TestRunUniformity:
    def test_uniform(self):
        result = run_uniformity({"flows": [1.0, 1.0, 1.0]})
        assert result["distribution_uniformity"] == 100.0
        assert result["count"] == 3
        assert result["warnings"] == []

    def test_poor_uniformity_warns(self):
        result = run_uniformity({"flows": [1, 2, 3, 4]})
        assert result["min_flow"] == 1
        assert result["max_flow"] == 4
        assert result["warnings"]

    def test_empty_rejected(self):
        with pytest.raises(InvalidInputError):
            run_uniformity({"flows": []})

    def test_negative_rejected(self):
        with pytest.raises(InvalidInputError):
            run_uniformity({"flows": [1.0, -0.5]})


class TestRunWaterHammer:
    def test_steel_surges_more_than_pvc(self):
        steel = run_water_hammer({"pipe_material": "steel", "nominal_size": 3, "flow_gpm": 100})
        pvc = run_water_hammer({"pipe_material": "PVC", "nominal_size": 3, "flow_gpm": 100})
        assert steel["pressure_rise_psi"] > pvc["pressure_rise_psi"]
        assert pvc["working_pressure_psi"] == 200


class TestRunFrictionLoss:
    def test_both_methods_reported(self):
        result = run_friction_loss({"flow_gpm": 50, "nominal_size": 2, "length_ft": 100})
        assert result["hazen_williams_psi"] > 0
        assert result["darcy_weisbach_psi"] > 0
        assert result["flow_regime"] == "turbulent"
