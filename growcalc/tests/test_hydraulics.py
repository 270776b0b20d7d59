"""Tests for irrigation hydraulics and the hydraulic reference data."""

import dataclasses
import math

import pytest

from growcalc.engineering.horti_calc import (
    InvalidInputError,
    analyze_hydraulic_system,
    build_pipe_specification,
    calculate_application_efficiency,
    calculate_application_rate,
    calculate_distribution_uniformity,
    calculate_emission_uniformity,
    calculate_friction_factor,
    calculate_minor_losses,
    calculate_reynolds_number,
    calculate_water_hammer,
    calculate_wave_speed,
    classify_flow_regime,
    darcy_weisbach_head_loss,
    get_fitting_coefficient,
    get_soil_properties,
    hazen_williams_friction_loss,
    kinematic_viscosity_at,
    make_fitting,
)


class TestFlowRegime:
    def test_reynolds_number(self):
        assert calculate_reynolds_number(1.0, 12.0, 1.13e-5) == pytest.approx(1 / 1.13e-5)

    def test_zero_viscosity_gives_zero(self):
        assert calculate_reynolds_number(1.0, 12.0, 0) == 0.0

    @pytest.mark.parametrize("re,regime", [
        (500, "laminar"),
        (1999.9, "laminar"),
        (2000, "transitional"),
        (3999, "transitional"),
        (4000, "turbulent"),
        (1e6, "turbulent"),
    ])
    def test_classification(self, re, regime):
        assert classify_flow_regime(re) == regime

    def test_viscosity_table(self):
        assert kinematic_viscosity_at(68) == pytest.approx(1.13e-5)
        assert kinematic_viscosity_at(200) == pytest.approx(0.609e-5)
        assert kinematic_viscosity_at(50) > kinematic_viscosity_at(90)


class TestFrictionLoss:
    def test_hazen_williams_formula(self):
        expected = 4.52 * 100 ** 1.85 * 1000 / (150 ** 1.85 * 4 ** 4.87)
        assert hazen_williams_friction_loss(100, 4, 1000, 150) == pytest.approx(expected)

    def test_hazen_williams_zero_flow(self):
        assert hazen_williams_friction_loss(0, 4, 1000) == 0.0

    def test_rougher_pipe_loses_more(self):
        assert hazen_williams_friction_loss(50, 2, 100, 120) > hazen_williams_friction_loss(50, 2, 100, 150)

    def test_laminar_friction_factor(self):
        assert calculate_friction_factor(1000, 0.0) == pytest.approx(0.064)

    def test_swamee_jain_smooth_pipe(self):
        f = calculate_friction_factor(1e5, 0.0)
        assert 0.017 < f < 0.019

    def test_darcy_head_loss(self):
        vh = 5.0 ** 2 / (2 * 32.174)
        assert darcy_weisbach_head_loss(0.02, 100, 12, 5.0) == pytest.approx(0.02 * 100 * vh)

    def test_minor_losses(self):
        fittings = [make_fitting("elbow_90", 4), make_fitting("valve_gate", 1)]
        vh = 5.0 ** 2 / (2 * 32.174)
        assert calculate_minor_losses(fittings, 5.0) == pytest.approx(3.8 * vh)


class TestWaterHammer:
    def test_pvc_wave_speed(self, pvc_3in):
        rigid = math.sqrt(320000 * 144 / 1.94)
        ratio = 320000 * 2.864 / (400000 * 0.216)
        assert calculate_wave_speed(pvc_3in) == pytest.approx(rigid / math.sqrt(1 + ratio))

    def test_stiffer_pipe_faster_wave(self):
        steel = calculate_wave_speed(build_pipe_specification("steel", 3))
        pvc = calculate_wave_speed(build_pipe_specification("PVC", 3))
        hdpe = calculate_wave_speed(build_pipe_specification("HDPE", 3))
        assert steel > pvc > hdpe

    def test_joukowsky(self):
        result = calculate_water_hammer(3.0, 1000.0)
        assert result.head_rise_ft == pytest.approx(1000 * 3 / 32.174)
        assert result.pressure_rise_psi == pytest.approx(result.head_rise_ft * 0.433)

    def test_monotonic_in_velocity(self):
        rises = [calculate_water_hammer(v, 1400).pressure_rise_psi for v in (0.5, 1, 2, 4, 8)]
        assert rises == sorted(rises)

    @pytest.mark.parametrize("velocity,risk", [
        (3, "low"),
        (5, "moderate"),
        (10, "high"),
        (20, "critical"),
    ])
    def test_risk_bands(self, velocity, risk):
        assert calculate_water_hammer(velocity, 1000.0).risk == risk


class TestUniformity:
    def test_equal_flows_are_uniform(self):
        assert calculate_distribution_uniformity([2.0] * 8) == 100.0
        assert calculate_emission_uniformity([2.0] * 8) == 100.0

    def test_all_zero_flows_are_uniform(self):
        assert calculate_distribution_uniformity([0, 0, 0, 0]) == 100.0
        assert calculate_emission_uniformity([0.0] * 6) == 100.0

    @pytest.mark.parametrize("flows", [
        [2.0, 2.0, 2.0, 2.01],
        [0.0, 0.0, 0.0, 1.0],
        [1, 2, 3, 4],
    ])
    def test_unequal_flows_below_100(self, flows):
        assert calculate_distribution_uniformity(flows) < 100.0

    def test_low_quarter(self):
        assert calculate_distribution_uniformity([1, 2, 3, 4]) == pytest.approx(40.0)

    @pytest.mark.parametrize("flows", [
        [0.5, 1.0, 1.5],
        [1.9, 2.0, 2.1, 2.0, 1.8],
        [0.0, 0.0, 5.0],
        [10] * 19 + [1],
    ])
    def test_bounded(self, flows):
        assert 0.0 <= calculate_distribution_uniformity(flows) <= 100.0
        assert 0.0 <= calculate_emission_uniformity(flows) <= 100.0

    def test_empty(self):
        assert calculate_distribution_uniformity([]) == 0.0
        assert calculate_emission_uniformity([]) == 0.0

    def test_application_efficiency(self):
        assert calculate_application_efficiency(100, 70, 0.15) == pytest.approx(85.0)
        assert calculate_application_efficiency(0, 70) == 0.0

    def test_application_rate(self):
        assert calculate_application_rate(10, 1000) == pytest.approx(0.963)
        assert calculate_application_rate(10, 0) == 0.0


class TestReferenceData:
    def test_soil_lookup_normalizes_name(self):
        assert get_soil_properties("Sandy Loam").type == "sandy_loam"

    def test_unknown_soil_defaults_to_loam(self):
        assert get_soil_properties("peat").type == "loam"

    def test_unknown_soil_strict(self):
        with pytest.raises(InvalidInputError):
            get_soil_properties("peat", strict=True)

    def test_fitting_coefficient(self):
        assert get_fitting_coefficient("valve_globe") == 10.0
        assert get_fitting_coefficient("swing_joint") == 1.0
        with pytest.raises(InvalidInputError):
            get_fitting_coefficient("swing_joint", strict=True)

    def test_pipe_specification(self):
        pipe = build_pipe_specification("pvc", 4)
        assert pipe.material == "PVC"
        assert pipe.inner_diameter == pytest.approx(3.826)

    def test_untabulated_pipe_size(self):
        assert build_pipe_specification("PVC", 5).inner_diameter == pytest.approx(4.8)

    def test_unknown_material(self):
        assert build_pipe_specification("copper", 2).material == "PVC"
        with pytest.raises(InvalidInputError):
            build_pipe_specification("copper", 2, strict=True)


class TestSystemAnalysis:
    def test_supply_line(self, supply_line, pvc_3in):
        result = analyze_hydraulic_system(supply_line, pvc_3in)
        area = math.pi * (2.864 / 12) ** 2 / 4
        assert result.velocity == pytest.approx(40 / 448.831 / area)
        assert result.flow_regime == "turbulent"
        assert result.friction_loss == pytest.approx(
            hazen_williams_friction_loss(40, 2.864, 300, 150)
        )
        assert result.total_system_loss == pytest.approx(
            result.friction_loss + result.minor_losses + result.elevation_loss
        )
        assert result.pressure_margin > 0
        assert result.water_hammer_risk == "low"
        assert result.distribution_uniformity > 99
        assert result.asabe_compliance
        assert result.warnings == []

    def test_friction_loss_is_hazen_williams_psi(self, supply_line, pvc_3in):
        result = analyze_hydraulic_system(supply_line, pvc_3in)
        expected = 4.52 * 40 ** 1.85 * 300 / (150 ** 1.85 * 2.864 ** 4.87)
        assert result.friction_loss == pytest.approx(expected)
        # psi form already; agrees with the Darcy-Weisbach head converted to psi
        assert result.friction_loss == pytest.approx(result.darcy_friction_loss, rel=0.25)
        assert result.minor_losses == pytest.approx(
            calculate_minor_losses(supply_line.fittings, result.velocity) * 0.433
        )

    def test_all_zero_emitter_flows(self, supply_line, pvc_3in):
        params = dataclasses.replace(supply_line, emitter_flow_rates=[0.0, 0.0, 0.0, 0.0])
        result = analyze_hydraulic_system(params, pvc_3in)
        assert result.distribution_uniformity == 100.0

    def test_high_velocity_flagged(self, supply_line, pvc_3in):
        params = dataclasses.replace(supply_line, design_flow_rate=200)
        result = analyze_hydraulic_system(params, pvc_3in)
        assert result.velocity_compliance is False
        assert result.asabe_compliance is False
        assert any("Velocity" in w for w in result.warnings)

    def test_outlet_above_inlet_flagged(self, supply_line, pvc_3in):
        params = dataclasses.replace(supply_line, inlet_pressure=20)
        result = analyze_hydraulic_system(params, pvc_3in)
        assert result.pressure_compliance is False
        assert any("exceeds inlet" in w for w in result.warnings)

    def test_measured_emitter_flows(self, supply_line, pvc_3in):
        params = dataclasses.replace(supply_line, emitter_flow_rates=[1.0, 1.0, 1.0, 1.0])
        result = analyze_hydraulic_system(params, pvc_3in)
        assert result.distribution_uniformity == 100.0

    def test_infiltration_check(self, supply_line, pvc_3in):
        params = dataclasses.replace(supply_line, irrigated_area=100)
        result = analyze_hydraulic_system(params, pvc_3in, get_soil_properties("loam"))
        assert result.application_rate == pytest.approx(96.3 * 40 / 100)
        assert any("infiltration" in w for w in result.warnings)

    @pytest.mark.parametrize("field,value", [
        ("design_flow_rate", 0),
        ("design_flow_rate", -10),
        ("total_length", 0),
        ("inlet_pressure", float("nan")),
        ("simultaneity_factor", 1.5),
    ])
    def test_invalid_params(self, supply_line, pvc_3in, field, value):
        params = dataclasses.replace(supply_line, **{field: value})
        with pytest.raises(InvalidInputError) as exc:
            analyze_hydraulic_system(params, pvc_3in)
        assert exc.value.field == field

    def test_invalid_pipe(self, supply_line, pvc_3in):
        pipe = dataclasses.replace(pvc_3in, inner_diameter=0)
        with pytest.raises(InvalidInputError):
            analyze_hydraulic_system(supply_line, pipe)
