"""
Climate Discipline Calculator

Implements DisciplineCalculator for greenhouse climate energy.
Wraps the horti_calc energy engine for annual energy demand, supplemental
lighting, heat loss and thermal storage sizing.
"""

from dataclasses import asdict
from typing import Any, Dict, List

from growcalc.core.config import CALC_DEFAULTS
from growcalc.core.logging import get_logger
from growcalc.engineering.base import DisciplineCalculator, DisciplineResult
from growcalc.engineering.horti_calc import (
    ClimateSetpoints,
    EnergyRates,
    GreenhouseSpecs,
    InvalidInputError,
    STORAGE_HEAT_CAPACITY,
    WeatherConditions,
    calculate_energy_demand,
    calculate_heat_loss,
    calculate_lighting_requirements,
    calculate_thermal_storage,
)
from growcalc.engineering.horti_calc.utils import SQM_PER_SQFT
from growcalc.engineering.horti_calc.validation import (
    require_choice,
    require_positive,
    require_range,
)

logger = get_logger("growcalc.engineering.climate")


def _rates_from_config() -> EnergyRates:
    return EnergyRates(
        electricity_per_kwh=CALC_DEFAULTS.electricity_rate,
        natural_gas_per_therm=CALC_DEFAULTS.natural_gas_price,
        co2_price_per_lb=CALC_DEFAULTS.co2_price_per_lb,
        heater_efficiency=CALC_DEFAULTS.heater_efficiency,
        fan_cfm_per_watt=CALC_DEFAULTS.fan_cfm_per_watt,
        led_efficacy=CALC_DEFAULTS.led_efficacy,
        cooling_hours=CALC_DEFAULTS.cooling_hours,
    )


def _specs_from_params(params: Dict[str, Any]) -> GreenhouseSpecs:
    return GreenhouseSpecs(
        length=params.get('length_ft', 100),
        width=params.get('width_ft', 30),
        height=params.get('height_ft', 12),
        glazing_type=params.get('glazing_type', 'polycarbonate'),
        air_changes_per_hour=params.get('air_changes_per_hour', 0.5),
    )


# ---------------------------------------------------------------------------
# Module-level run_*() functions (used by CLI and validators directly)
# ---------------------------------------------------------------------------

def run_energy_demand(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Annual greenhouse energy demand.

    Params:
        length_ft, width_ft, height_ft: Greenhouse dimensions (ft)
        glazing_type: glass, polycarbonate or polyethylene
        air_changes_per_hour: Infiltration rate
        day_temp_f, night_temp_f: Setpoints (F)
        target_dli: Target daily light integral (mol/m2/day)
        photoperiod_hours: Lighting hours per day
        co2_ppm: CO2 setpoint (ppm)
        winter_temp_f, summer_temp_f, wet_bulb_f: Design weather (F)
        wind_speed_mph, solar_radiation, cloud_cover, natural_dli,
        heating_degree_days, ambient_co2_ppm: Site weather

    Returns:
        Dict with heating, cooling, lighting, ventilation and co2 sections.
    """
    try:
        specs = _specs_from_params(params)
        setpoints = ClimateSetpoints(
            day_temp_f=params.get('day_temp_f', 75.0),
            night_temp_f=params.get('night_temp_f', 65.0),
            target_dli=params.get('target_dli', 20.0),
            photoperiod_hours=params.get('photoperiod_hours', 16.0),
            co2_ppm=params.get('co2_ppm', 1000.0),
            humidity_pct=params.get('humidity_pct', 70.0),
        )
        weather = WeatherConditions(
            design_winter_temp_f=params.get('winter_temp_f', 10.0),
            design_summer_temp_f=params.get('summer_temp_f', 95.0),
            summer_wet_bulb_f=params.get('wet_bulb_f', 75.0),
            wind_speed_mph=params.get('wind_speed_mph', 15.0),
            solar_radiation=params.get('solar_radiation', 300.0),
            cloud_cover=params.get('cloud_cover', 0.3),
            natural_dli=params.get('natural_dli', 15.0),
            heating_degree_days=params.get('heating_degree_days', 5000.0),
            ambient_co2_ppm=params.get('ambient_co2_ppm', CALC_DEFAULTS.ambient_co2_ppm),
        )
        result = calculate_energy_demand(specs, setpoints, weather, _rates_from_config())
    except InvalidInputError as e:
        logger.warning("Energy demand rejected: %s", e)
        raise

    logger.debug(
        "Energy %gx%g ft %s: %.0f kWh/yr, $%.0f/yr",
        specs.length, specs.width, specs.glazing_type,
        result.total_annual_kwh, result.total_annual_cost,
    )
    return asdict(result)


def run_lighting(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Supplemental LED lighting to reach a target DLI.

    Params:
        target_dli: Target DLI (mol/m2/day)
        natural_dli: Natural DLI (mol/m2/day)
        photoperiod_hours: Lighting hours per day
        area_sqft: Lit area (ft2)
    """
    area_sqft = params.get('area_sqft', 1000)
    photoperiod = params.get('photoperiod_hours', 16.0)
    require_positive('area_sqft', area_sqft)
    require_range('photoperiod_hours', photoperiod, 0, 24)

    result = calculate_lighting_requirements(
        target_dli=params.get('target_dli', 20.0),
        natural_dli=params.get('natural_dli', 10.0),
        photoperiod_hours=photoperiod,
        area_m2=area_sqft * SQM_PER_SQFT,
        efficacy=params.get('efficacy', CALC_DEFAULTS.led_efficacy),
        electricity_rate=params.get('electricity_rate', CALC_DEFAULTS.electricity_rate),
    )
    d = asdict(result)
    d['area_sqft'] = area_sqft
    return d


def run_heat_loss(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Peak envelope heat loss.

    Params:
        length_ft, width_ft, height_ft, glazing_type, air_changes_per_hour
        inside_temp_f: Inside setpoint (F)
        outside_temp_f: Design outside temperature (F)
        wind_speed_mph: Design wind speed (mph)
    """
    specs = _specs_from_params(params)
    require_positive('length_ft', specs.length)
    require_positive('width_ft', specs.width)
    require_positive('height_ft', specs.height)

    result = calculate_heat_loss(
        specs,
        inside_temp_f=params.get('inside_temp_f', 65.0),
        outside_temp_f=params.get('outside_temp_f', 10.0),
        wind_speed_mph=params.get('wind_speed_mph', 15.0),
    )
    return asdict(result)


def run_thermal_storage(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Thermal storage capacity over a 20 F swing.

    Params:
        volume: Storage volume (gal for water, ft3 otherwise)
        medium: water, concrete or phase_change
        efficiency: Round-trip efficiency (0-1]
        heating_load_btu_hr: Load for backup hours (optional)
    """
    medium = params.get('medium', 'water')
    volume = params.get('volume', 5000)
    efficiency = params.get('efficiency', 0.9)
    require_choice('medium', medium, STORAGE_HEAT_CAPACITY)
    require_positive('volume', volume)
    require_range('efficiency', efficiency, 0.01, 1.0)

    result = calculate_thermal_storage(
        volume=volume,
        medium=medium,
        efficiency=efficiency,
        heating_load_btu_hr=params.get('heating_load_btu_hr'),
    )
    return asdict(result)


# ---------------------------------------------------------------------------
# Dispatch table and DisciplineCalculator implementation
# ---------------------------------------------------------------------------

_CALC_DISPATCH = {
    'energy': run_energy_demand,
    'lighting': run_lighting,
    'heat-loss': run_heat_loss,
    'thermal-storage': run_thermal_storage,
}


class ClimateCalculator(DisciplineCalculator):
    """Greenhouse climate energy discipline calculator."""

    @property
    def discipline_name(self) -> str:
        return "climate"

    def available_calculations(self) -> List[str]:
        return list(_CALC_DISPATCH.keys())

    def run_calculation(self, calculation_type: str, params: Dict[str, Any]) -> DisciplineResult:
        """
        Run a climate calculation by type name.

        Raises:
            ValueError: If calculation_type is unknown.
        """
        return self._dispatch(_CALC_DISPATCH, calculation_type, params)
