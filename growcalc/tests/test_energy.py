"""Tests for the greenhouse energy module."""

import dataclasses

import pytest

from growcalc.engineering.horti_calc import (
    EnergyRates,
    InvalidInputError,
    calculate_co2_requirements,
    calculate_energy_demand,
    calculate_evaporative_cooling,
    calculate_heat_loss,
    calculate_lighting_requirements,
    calculate_solar_heat_gain,
    calculate_thermal_storage,
)

CO2_LB_HR = 36000 * 0.5 * 600 / 1e6 * 28.3168 / 24.45 * 0.044 * 2.20462


class TestGreenhouseGeometry:
    def test_areas(self, greenhouse):
        assert greenhouse.floor_area == 3000
        assert greenhouse.wall_area == 3120
        assert greenhouse.roof_area == pytest.approx(3450)
        assert greenhouse.volume == 36000


class TestHeatLoss:
    def test_reference_wind(self, greenhouse):
        result = calculate_heat_loss(greenhouse, 65, 10, wind_speed_mph=10)
        assert result.ua_value == pytest.approx(0.65 * 6570)
        assert result.wind_factor == pytest.approx(1.0)
        assert result.total_btu_hr == pytest.approx(234877.5 + 17820)

    def test_wind_increases_loss(self, greenhouse):
        calm = calculate_heat_loss(greenhouse, 65, 10, wind_speed_mph=10)
        windy = calculate_heat_loss(greenhouse, 65, 10, wind_speed_mph=15)
        assert windy.total_btu_hr == pytest.approx(calm.total_btu_hr * 1.1)

    def test_glass_loses_more_than_polycarbonate(self, greenhouse):
        glass = dataclasses.replace(greenhouse, glazing_type="glass")
        assert calculate_heat_loss(glass, 65, 10).total_btu_hr > calculate_heat_loss(greenhouse, 65, 10).total_btu_hr


class TestComponentLoads:
    def test_solar_gain(self):
        assert calculate_solar_heat_gain(1000, 300, 0.5, "glass") == pytest.approx(120000)

    def test_evaporative_cooling(self):
        result = calculate_evaporative_cooling(10000, 95, 75, 0.8)
        assert result.cooling_btu_hr == pytest.approx(172800)
        assert result.supply_air_temp_f == pytest.approx(79)

    def test_evaporative_cooling_saturated_air(self):
        assert calculate_evaporative_cooling(10000, 80, 85).cooling_btu_hr == 0.0

    def test_co2_rate(self):
        result = calculate_co2_requirements(36000, 0.5, 1000, 400)
        assert result.generation_rate_lb_hr == pytest.approx(CO2_LB_HR)

    def test_co2_target_below_ambient(self):
        assert calculate_co2_requirements(36000, 0.5, 350, 400).generation_rate_lb_hr == 0.0

    def test_lighting(self):
        result = calculate_lighting_requirements(20, 10, 16, area_m2=1, efficacy=2.7)
        assert result.supplemental_dli == 10
        assert result.ppfd == pytest.approx(1e7 / 57600)
        assert result.power == pytest.approx(result.ppfd / 2.7)
        assert result.annual_kwh == pytest.approx(result.power * 16 * 365 / 1000)

    def test_lighting_not_needed(self):
        result = calculate_lighting_requirements(15, 20, 16)
        assert result.power == 0.0
        assert result.annual_cost == 0.0

    def test_thermal_storage_water(self):
        result = calculate_thermal_storage(1000, "water", 0.9, heating_load_btu_hr=14994)
        assert result.capacity_btu == pytest.approx(149940)
        assert result.backup_hours == pytest.approx(10.0)

    def test_thermal_storage_concrete(self):
        result = calculate_thermal_storage(100, "concrete", 1.0)
        assert result.capacity_btu == pytest.approx(60000)
        assert result.backup_hours is None


class TestEnergyDemand:
    def test_lighting_annual_energy(self, greenhouse, setpoints, weather):
        result = calculate_energy_demand(greenhouse, setpoints, weather)
        assert result.lighting.annual_kwh == pytest.approx(result.lighting.power * 16 * 365 / 1000)

    def test_co2_rate_and_price_are_separate(self, greenhouse, setpoints, weather):
        rates = EnergyRates(co2_price_per_lb=0.25)
        result = calculate_energy_demand(greenhouse, setpoints, weather, rates)
        assert result.co2.generation_rate_lb_hr == pytest.approx(CO2_LB_HR)
        assert result.co2.price_per_lb == 0.25
        assert result.co2.annual_lb == pytest.approx(CO2_LB_HR * 16 * 365)
        assert result.co2.annual_cost == pytest.approx(result.co2.annual_lb * 0.25)

    def test_ambient_co2_from_weather(self, greenhouse, setpoints, weather):
        richer_air = dataclasses.replace(weather, ambient_co2_ppm=500)
        result = calculate_energy_demand(greenhouse, setpoints, richer_air)
        assert result.co2.generation_rate_lb_hr == pytest.approx(CO2_LB_HR * 500 / 600)

    def test_totals(self, greenhouse, setpoints, weather):
        result = calculate_energy_demand(greenhouse, setpoints, weather)
        assert result.total_annual_kwh == pytest.approx(
            result.lighting.annual_kwh + result.ventilation.annual_kwh
            + result.heating.annual_kwh_equivalent
        )
        assert result.total_annual_cost == pytest.approx(
            result.heating.annual_cost + result.lighting.annual_cost
            + result.ventilation.annual_cost + result.co2.annual_cost
        )

    def test_heating_peak(self, greenhouse, setpoints, weather):
        result = calculate_energy_demand(greenhouse, setpoints, weather)
        expected = calculate_heat_loss(greenhouse, 65, 10, 15).total_btu_hr
        assert result.heating.peak_load_btu_hr == pytest.approx(expected)

    def test_natural_light_warning(self, greenhouse, setpoints, weather):
        bright = dataclasses.replace(weather, natural_dli=25)
        result = calculate_energy_demand(greenhouse, setpoints, bright)
        assert result.lighting.power == 0.0
        assert any("Natural light" in w for w in result.warnings)

    def test_high_co2_warning(self, greenhouse, setpoints, weather):
        enriched = dataclasses.replace(setpoints, co2_ppm=2000)
        result = calculate_energy_demand(greenhouse, enriched, weather)
        assert any("1500 ppm" in w for w in result.warnings)

    @pytest.mark.parametrize("field,value", [
        ("length", 0),
        ("width", -5),
        ("glazing_type", "acrylic"),
    ])
    def test_invalid_specs(self, greenhouse, setpoints, weather, field, value):
        specs = dataclasses.replace(greenhouse, **{field: value})
        with pytest.raises(InvalidInputError) as exc:
            calculate_energy_demand(specs, setpoints, weather)
        assert exc.value.field == field

    @pytest.mark.parametrize("field,value", [
        ("cloud_cover", 1.5),
        ("design_winter_temp_f", 200),
        ("natural_dli", float("inf")),
    ])
    def test_invalid_weather(self, greenhouse, setpoints, weather, field, value):
        bad = dataclasses.replace(weather, **{field: value})
        with pytest.raises(InvalidInputError):
            calculate_energy_demand(greenhouse, setpoints, bad)

    def test_invalid_photoperiod(self, greenhouse, setpoints, weather):
        with pytest.raises(InvalidInputError):
            calculate_energy_demand(greenhouse, dataclasses.replace(setpoints, photoperiod_hours=30), weather)
