"""
Greenhouse Energy Module
========================

Heating, cooling, lighting, ventilation and CO2 enrichment loads for
controlled-environment greenhouses, with annualized energy and cost.

Based on:
- ASABE EP406 Heating, Ventilating and Cooling Greenhouses
- NGMA Greenhouse Heat Loss standards
- ASHRAE Fundamentals, psychrometrics
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .utils import (
    AIR_HEAT_CAPACITY,
    BTU_PER_KWH,
    BTU_PER_THERM,
    DAYS_PER_YEAR,
    HOURS_PER_DAY,
    SECONDS_PER_HOUR,
    SENSIBLE_HEAT_FACTOR,
    SQM_PER_SQFT,
    WATTS_TO_BTU_HR,
)
from .validation import (
    require_choice,
    require_non_negative,
    require_positive,
    require_range,
)


# Glazing properties: U-value (BTU/hr·ft²·°F), SHGC, PAR transmission
GLAZING_PROPERTIES: Dict[str, Dict[str, float]] = {
    "glass": {"u_value": 1.1, "shgc": 0.8, "transmission": 0.9},
    "polycarbonate": {"u_value": 0.65, "shgc": 0.7, "transmission": 0.8},
    "polyethylene": {"u_value": 0.7, "shgc": 0.85, "transmission": 0.87},
}

DEFAULT_GLAZING = "polycarbonate"

# Storage media heat capacity: water BTU/gal·°F, concrete 0.2 BTU/lb·°F × 150 lb/ft³, PCM BTU/ft³·°F equivalent
STORAGE_HEAT_CAPACITY: Dict[str, float] = {
    "water": 8.33,
    "concrete": 0.2 * 150,
    "phase_change": 100.0,
}

STORAGE_TEMPERATURE_SWING_F = 20.0

ROOF_AREA_FACTOR = 1.15          # gable roof surface / floor area
WIND_REFERENCE_MPH = 10.0
WIND_FACTOR_PER_MPH = 0.02
DEFAULT_AIR_CHANGES = 0.5
VENTILATION_TEMP_RISE_F = 7.0    # allowable inside-outside rise
VENTILATION_CFM_PER_SQFT = 8.0   # ASABE summer ventilation rate

# CO2 conversion
LITERS_PER_CUFT = 28.3168
MOLAR_VOLUME_L = 24.45           # L/mol at 25 °C
CO2_MOLAR_MASS_KG = 0.044        # kg/mol
LB_PER_KG = 2.20462


@dataclass
class GreenhouseSpecs:
    """Greenhouse geometry and envelope."""
    length: float                   # ft
    width: float                    # ft
    height: float                   # ft (eave)
    glazing_type: str = DEFAULT_GLAZING
    air_changes_per_hour: float = DEFAULT_AIR_CHANGES

    @property
    def floor_area(self) -> float:
        return self.length * self.width

    @property
    def wall_area(self) -> float:
        return 2 * (self.length + self.width) * self.height

    @property
    def roof_area(self) -> float:
        return self.floor_area * ROOF_AREA_FACTOR

    @property
    def volume(self) -> float:
        return self.floor_area * self.height


@dataclass
class ClimateSetpoints:
    """Target indoor climate."""
    day_temp_f: float = 75.0
    night_temp_f: float = 65.0
    target_dli: float = 20.0        # mol/m²/day
    photoperiod_hours: float = 16.0
    co2_ppm: float = 1000.0
    humidity_pct: float = 70.0


@dataclass
class WeatherConditions:
    """Site design weather."""
    design_winter_temp_f: float = 10.0
    design_summer_temp_f: float = 95.0
    summer_wet_bulb_f: float = 75.0
    wind_speed_mph: float = 15.0
    solar_radiation: float = 300.0  # BTU/hr·ft² peak
    cloud_cover: float = 0.3        # fraction 0-1
    natural_dli: float = 15.0       # mol/m²/day
    heating_degree_days: float = 5000.0
    ambient_co2_ppm: float = 400.0  # outdoor air


@dataclass
class EnergyRates:
    """Utility prices and equipment efficiencies."""
    electricity_per_kwh: float = 0.12
    natural_gas_per_therm: float = 1.20
    co2_price_per_lb: float = 0.12
    heater_efficiency: float = 0.80
    fan_cfm_per_watt: float = 15.0
    led_efficacy: float = 2.7       # µmol/J
    cooling_hours: float = 1200.0   # ventilation hours/year


@dataclass
class HeatLossResult:
    """Envelope heat loss at one temperature difference."""
    ua_value: float                 # BTU/hr·°F (conduction)
    conduction_btu_hr: float
    infiltration_btu_hr: float
    wind_factor: float
    total_btu_hr: float


@dataclass
class EvaporativeCoolingResult:
    cooling_btu_hr: float
    supply_air_temp_f: float


@dataclass
class CO2Result:
    """CO2 needed to hold a setpoint against air exchange."""
    target_ppm: float
    ambient_ppm: float
    generation_rate_lb_hr: float


@dataclass
class LightingResult:
    """Supplemental LED lighting sizing."""
    supplemental_dli: float         # mol/m²/day
    ppfd: float                     # µmol/m²/s
    power: float                    # W
    annual_kwh: float
    annual_cost: float


@dataclass
class ThermalStorageResult:
    medium: str
    volume: float                   # gal (water) or ft³
    capacity_btu: float
    capacity_kwh: float
    backup_hours: Optional[float] = None


@dataclass
class HeatingLoad:
    peak_load_btu_hr: float
    conduction_btu_hr: float
    infiltration_btu_hr: float
    annual_btu: float
    annual_therms: float
    annual_kwh_equivalent: float
    annual_cost: float


@dataclass
class CoolingLoad:
    solar_gain_btu_hr: float
    envelope_gain_btu_hr: float
    lighting_gain_btu_hr: float
    total_btu_hr: float
    evaporative_capacity_btu_hr: float
    supply_air_temp_f: float


@dataclass
class VentilationLoad:
    required_cfm: float
    fan_power_kw: float
    annual_kwh: float
    annual_cost: float


@dataclass
class CO2Load:
    target_ppm: float
    generation_rate_lb_hr: float
    annual_lb: float
    price_per_lb: float
    annual_cost: float


@dataclass
class EnergyRequirements:
    """Annual energy demand for a greenhouse."""
    heating: HeatingLoad
    cooling: CoolingLoad
    lighting: LightingResult
    ventilation: VentilationLoad
    co2: CO2Load
    total_annual_kwh: float
    total_annual_cost: float
    warnings: List[str] = field(default_factory=list)


# ============================================================================
# COMPONENT LOADS
# ============================================================================

def _glazing(glazing_type: str) -> Dict[str, float]:
    return GLAZING_PROPERTIES.get(glazing_type, GLAZING_PROPERTIES[DEFAULT_GLAZING])


def calculate_heat_loss(
    specs: GreenhouseSpecs,
    inside_temp_f: float,
    outside_temp_f: float,
    wind_speed_mph: float = WIND_REFERENCE_MPH,
) -> HeatLossResult:
    """
    Envelope heat loss.

        Q_cond = U × (A_walls + A_roof) × ΔT
        Q_inf  = 0.018 × V × ACH × ΔT
        Q      = (Q_cond + Q_inf) × [1 + (wind - 10) × 0.02]
    """
    u_value = _glazing(specs.glazing_type)["u_value"]
    delta_t = inside_temp_f - outside_temp_f

    ua = u_value * (specs.wall_area + specs.roof_area)
    conduction = ua * delta_t
    infiltration = AIR_HEAT_CAPACITY * specs.volume * specs.air_changes_per_hour * delta_t
    wind_factor = 1 + (wind_speed_mph - WIND_REFERENCE_MPH) * WIND_FACTOR_PER_MPH

    return HeatLossResult(
        ua_value=ua,
        conduction_btu_hr=conduction * wind_factor,
        infiltration_btu_hr=infiltration * wind_factor,
        wind_factor=wind_factor,
        total_btu_hr=(conduction + infiltration) * wind_factor,
    )


def calculate_solar_heat_gain(
    area_sqft: float,
    solar_radiation: float,
    cloud_cover: float = 0.0,
    glazing_type: str = DEFAULT_GLAZING,
) -> float:
    """Solar gain (BTU/hr) = area × radiation × (1 - cloud cover) × SHGC."""
    effective = solar_radiation * (1 - cloud_cover)
    return area_sqft * effective * _glazing(glazing_type)["shgc"]


def calculate_evaporative_cooling(
    airflow_cfm: float,
    dry_bulb_f: float,
    wet_bulb_f: float,
    pad_efficiency: float = 0.8,
) -> EvaporativeCoolingResult:
    """
    Pad-and-fan evaporative cooling capacity.

        Q = CFM × 1.08 × (DB - WB) × η
        T_supply = DB - η × (DB - WB)
    """
    depression = max(0.0, dry_bulb_f - wet_bulb_f)
    return EvaporativeCoolingResult(
        cooling_btu_hr=airflow_cfm * SENSIBLE_HEAT_FACTOR * depression * pad_efficiency,
        supply_air_temp_f=dry_bulb_f - pad_efficiency * depression,
    )


def calculate_co2_requirements(
    volume_ft3: float,
    air_changes_per_hour: float,
    target_ppm: float,
    ambient_ppm: float = 400.0,
) -> CO2Result:
    """
    CO2 injection rate to replace enrichment lost to air exchange.

        CO2 ft³/hr = V × ACH × (target - ambient) / 10⁶
        lb/hr      = ft³/hr × 28.3168 / 24.45 × 0.044 × 2.20462
    """
    deficit = max(0.0, target_ppm - ambient_ppm)
    co2_cuft_hr = volume_ft3 * air_changes_per_hour * deficit / 1e6
    moles = co2_cuft_hr * LITERS_PER_CUFT / MOLAR_VOLUME_L
    return CO2Result(
        target_ppm=target_ppm,
        ambient_ppm=ambient_ppm,
        generation_rate_lb_hr=moles * CO2_MOLAR_MASS_KG * LB_PER_KG,
    )


def calculate_lighting_requirements(
    target_dli: float,
    natural_dli: float,
    photoperiod_hours: float,
    area_m2: float = 1.0,
    efficacy: float = 2.7,
    electricity_rate: float = 0.12,
) -> LightingResult:
    """
    Supplemental lighting to reach a target DLI.

        DLI_supp = max(0, target - natural)
        PPFD     = DLI_supp × 10⁶ / (photoperiod × 3600)
        W        = PPFD × area / efficacy
        kWh/yr   = W × photoperiod × 365 / 1000
    """
    supplemental = max(0.0, target_dli - natural_dli)
    if photoperiod_hours > 0:
        ppfd = supplemental * 1e6 / (photoperiod_hours * SECONDS_PER_HOUR)
    else:
        ppfd = 0.0
    power = ppfd * area_m2 / efficacy if efficacy > 0 else 0.0
    annual_kwh = power * photoperiod_hours * DAYS_PER_YEAR / 1000

    return LightingResult(
        supplemental_dli=supplemental,
        ppfd=ppfd,
        power=power,
        annual_kwh=annual_kwh,
        annual_cost=annual_kwh * electricity_rate,
    )


def calculate_thermal_storage(
    volume: float,
    medium: str = "water",
    efficiency: float = 0.9,
    heating_load_btu_hr: Optional[float] = None,
) -> ThermalStorageResult:
    """
    Sensible thermal storage capacity over a 20 °F swing.

        capacity = volume × heat capacity × 20 × efficiency

    Water volume is in gallons; concrete and phase-change media in ft³.
    """
    capacity = volume * STORAGE_HEAT_CAPACITY.get(medium, STORAGE_HEAT_CAPACITY["water"])
    capacity *= STORAGE_TEMPERATURE_SWING_F * efficiency

    backup = None
    if heating_load_btu_hr:
        backup = capacity / heating_load_btu_hr

    return ThermalStorageResult(
        medium=medium,
        volume=volume,
        capacity_btu=capacity,
        capacity_kwh=capacity / BTU_PER_KWH,
        backup_hours=backup,
    )


# ============================================================================
# ANNUAL DEMAND
# ============================================================================

def _validate_inputs(
    specs: GreenhouseSpecs,
    setpoints: ClimateSetpoints,
    weather: WeatherConditions,
    rates: EnergyRates,
) -> None:
    require_positive("length", specs.length)
    require_positive("width", specs.width)
    require_positive("height", specs.height)
    require_choice("glazing_type", specs.glazing_type, GLAZING_PROPERTIES)
    require_non_negative("air_changes_per_hour", specs.air_changes_per_hour)

    for name in ("day_temp_f", "night_temp_f"):
        require_range(name, getattr(setpoints, name), -60, 140)
    require_non_negative("target_dli", setpoints.target_dli)
    require_positive("photoperiod_hours", setpoints.photoperiod_hours)
    require_range("photoperiod_hours", setpoints.photoperiod_hours, high=HOURS_PER_DAY)
    require_non_negative("co2_ppm", setpoints.co2_ppm)
    require_range("humidity_pct", setpoints.humidity_pct, 0, 100)

    for name in ("design_winter_temp_f", "design_summer_temp_f", "summer_wet_bulb_f"):
        require_range(name, getattr(weather, name), -60, 140)
    require_range("summer_wet_bulb_f", weather.summer_wet_bulb_f, high=weather.design_summer_temp_f)
    require_non_negative("wind_speed_mph", weather.wind_speed_mph)
    require_non_negative("solar_radiation", weather.solar_radiation)
    require_range("cloud_cover", weather.cloud_cover, 0, 1)
    require_non_negative("natural_dli", weather.natural_dli)
    require_non_negative("heating_degree_days", weather.heating_degree_days)
    require_non_negative("ambient_co2_ppm", weather.ambient_co2_ppm)

    require_non_negative("electricity_per_kwh", rates.electricity_per_kwh)
    require_non_negative("natural_gas_per_therm", rates.natural_gas_per_therm)
    require_non_negative("co2_price_per_lb", rates.co2_price_per_lb)
    require_range("heater_efficiency", rates.heater_efficiency, 0.01, 1.0)
    require_positive("fan_cfm_per_watt", rates.fan_cfm_per_watt)
    require_positive("led_efficacy", rates.led_efficacy)
    require_range("cooling_hours", rates.cooling_hours, 0, HOURS_PER_DAY * DAYS_PER_YEAR)


def calculate_energy_demand(
    specs: GreenhouseSpecs,
    setpoints: ClimateSetpoints,
    weather: WeatherConditions,
    rates: Optional[EnergyRates] = None,
) -> EnergyRequirements:
    """
    Annual heating, cooling, lighting, ventilation and CO2 demand.

    Heating fuel is reported in therms and as kWh-equivalent; the total
    annual kWh sums lighting, ventilation and heating kWh-equivalent.

    Raises:
        InvalidInputError: non-positive dimensions, unknown glazing,
            temperatures outside -60 to 140 °F and similar.
    """
    rates = rates or EnergyRates()
    _validate_inputs(specs, setpoints, weather, rates)
    warnings = []

    # Heating
    loss = calculate_heat_loss(specs, setpoints.night_temp_f, weather.design_winter_temp_f, weather.wind_speed_mph)
    delta_t = setpoints.night_temp_f - weather.design_winter_temp_f
    ua_total = loss.total_btu_hr / delta_t if delta_t > 0 else 0.0
    annual_btu = ua_total * weather.heating_degree_days * HOURS_PER_DAY
    annual_therms = annual_btu / BTU_PER_THERM / rates.heater_efficiency
    heating = HeatingLoad(
        peak_load_btu_hr=max(0.0, loss.total_btu_hr),
        conduction_btu_hr=loss.conduction_btu_hr,
        infiltration_btu_hr=loss.infiltration_btu_hr,
        annual_btu=annual_btu,
        annual_therms=annual_therms,
        annual_kwh_equivalent=annual_therms * BTU_PER_THERM / BTU_PER_KWH,
        annual_cost=annual_therms * rates.natural_gas_per_therm,
    )

    # Lighting
    lighting = calculate_lighting_requirements(
        target_dli=setpoints.target_dli,
        natural_dli=weather.natural_dli,
        photoperiod_hours=setpoints.photoperiod_hours,
        area_m2=specs.floor_area * SQM_PER_SQFT,
        efficacy=rates.led_efficacy,
        electricity_rate=rates.electricity_per_kwh,
    )

    # Cooling (loads only; fan energy is counted under ventilation)
    solar = calculate_solar_heat_gain(
        specs.floor_area, weather.solar_radiation, weather.cloud_cover, specs.glazing_type
    )
    envelope = max(0.0, loss.ua_value * (weather.design_summer_temp_f - setpoints.day_temp_f))
    lamp_heat = lighting.power * WATTS_TO_BTU_HR
    cooling_total = solar + envelope + lamp_heat

    # Ventilation
    required_cfm = max(
        cooling_total / (SENSIBLE_HEAT_FACTOR * VENTILATION_TEMP_RISE_F),
        VENTILATION_CFM_PER_SQFT * specs.floor_area,
    )
    fan_kw = required_cfm / rates.fan_cfm_per_watt / 1000
    vent_kwh = fan_kw * rates.cooling_hours
    ventilation = VentilationLoad(
        required_cfm=required_cfm,
        fan_power_kw=fan_kw,
        annual_kwh=vent_kwh,
        annual_cost=vent_kwh * rates.electricity_per_kwh,
    )

    evap = calculate_evaporative_cooling(
        required_cfm, weather.design_summer_temp_f, weather.summer_wet_bulb_f
    )
    cooling = CoolingLoad(
        solar_gain_btu_hr=solar,
        envelope_gain_btu_hr=envelope,
        lighting_gain_btu_hr=lamp_heat,
        total_btu_hr=cooling_total,
        evaporative_capacity_btu_hr=evap.cooling_btu_hr,
        supply_air_temp_f=evap.supply_air_temp_f,
    )

    # CO2 enrichment during the photoperiod
    co2 = calculate_co2_requirements(
        specs.volume, specs.air_changes_per_hour, setpoints.co2_ppm, weather.ambient_co2_ppm,
    )
    annual_lb = co2.generation_rate_lb_hr * setpoints.photoperiod_hours * DAYS_PER_YEAR
    co2_load = CO2Load(
        target_ppm=setpoints.co2_ppm,
        generation_rate_lb_hr=co2.generation_rate_lb_hr,
        annual_lb=annual_lb,
        price_per_lb=rates.co2_price_per_lb,
        annual_cost=annual_lb * rates.co2_price_per_lb,
    )

    if evap.cooling_btu_hr < cooling_total:
        warnings.append(
            f"Evaporative cooling capacity {evap.cooling_btu_hr:,.0f} BTU/hr is below "
            f"peak cooling load {cooling_total:,.0f} BTU/hr"
        )
    if weather.natural_dli >= setpoints.target_dli:
        warnings.append("Natural light meets target DLI; no supplemental lighting sized")
    if delta_t <= 0:
        warnings.append("Night setpoint is at or below design winter temperature; no heating load")
    if setpoints.co2_ppm > 1500:
        warnings.append(f"CO2 setpoint {setpoints.co2_ppm:.0f} ppm exceeds typical 1500 ppm maximum")
    if math.isclose(specs.air_changes_per_hour, 0.0):
        warnings.append("Zero air exchange assumed; CO2 and infiltration loads are zero")

    total_kwh = lighting.annual_kwh + ventilation.annual_kwh + heating.annual_kwh_equivalent
    total_cost = heating.annual_cost + lighting.annual_cost + ventilation.annual_cost + co2_load.annual_cost

    return EnergyRequirements(
        heating=heating,
        cooling=cooling,
        lighting=lighting,
        ventilation=ventilation,
        co2=co2_load,
        total_annual_kwh=total_kwh,
        total_annual_cost=total_cost,
        warnings=warnings,
    )
