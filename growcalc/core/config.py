"""
Configuration management for growcalc.

Loads config.yaml and provides type-safe access to calculation defaults.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional

# Config file location - lives inside the growcalc package
_PACKAGE_DIR = Path(__file__).parent.parent.resolve()
CONFIG_PATH = _PACKAGE_DIR / "config.yaml"

# Cache for loaded config
_config_cache: Optional[Dict[str, Any]] = None


def get_config(reload: bool = False) -> Dict[str, Any]:
    """
    Load configuration from config.yaml.

    Args:
        reload: Force reload even if cached

    Returns:
        Configuration dictionary
    """
    global _config_cache

    if _config_cache is not None and not reload:
        return _config_cache

    if not CONFIG_PATH.exists():
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as f:
        _config_cache = yaml.safe_load(f) or {}

    return _config_cache


def get_config_value(*keys: str, default: Any = None) -> Any:
    """
    Get a nested config value safely.

    Args:
        *keys: Path of keys to traverse (e.g., 'economics', 'electricity_rate_per_kwh')
        default: Value to return if key not found

    Example:
        rate = get_config_value('economics', 'electricity_rate_per_kwh', default=0.12)
    """
    config = get_config()

    for key in keys:
        if isinstance(config, dict) and key in config:
            config = config[key]
        else:
            return default

    return config


class CalcDefaults:
    """
    Centralized access to calculation defaults.

    All values are loaded from config.yaml with sensible fallbacks.

    Usage:
        from growcalc.core.config import CALC_DEFAULTS
        rate = CALC_DEFAULTS.electricity_rate
        gauge = CALC_DEFAULTS.default_wire_gauge
    """

    def __init__(self):
        self._config = None

    def _ensure_config(self):
        if self._config is None:
            self._config = get_config()

    def _section(self, name: str) -> Dict[str, Any]:
        self._ensure_config()
        return self._config.get(name, {}) or {}

    @property
    def electricity_rate(self) -> float:
        return float(self._section("economics").get("electricity_rate_per_kwh", 0.12))

    @property
    def natural_gas_price(self) -> float:
        return float(self._section("economics").get("natural_gas_per_therm", 1.20))

    @property
    def co2_price_per_lb(self) -> float:
        return float(self._section("economics").get("co2_price_per_lb", 0.12))

    @property
    def heater_efficiency(self) -> float:
        return float(self._section("energy").get("heater_efficiency", 0.80))

    @property
    def fan_cfm_per_watt(self) -> float:
        return float(self._section("energy").get("fan_cfm_per_watt", 15.0))

    @property
    def led_efficacy(self) -> float:
        return float(self._section("energy").get("led_efficacy_umol_per_j", 2.7))

    @property
    def cooling_hours(self) -> float:
        return float(self._section("energy").get("cooling_hours_per_year", 1200))

    @property
    def ambient_co2_ppm(self) -> float:
        return float(self._section("energy").get("ambient_co2_ppm", 400))

    @property
    def default_wire_gauge(self) -> str:
        return str(self._section("electrical").get("default_wire_gauge", "12 AWG"))

    @property
    def default_conduit_type(self) -> str:
        return str(self._section("electrical").get("default_conduit_type", "EMT"))

    @property
    def max_voltage_drop_pct(self) -> float:
        return float(self._section("electrical").get("max_voltage_drop_pct", 3.0))

    @property
    def terminal_rating_c(self) -> int:
        return int(self._section("electrical").get("terminal_rating_c", 75))

    @property
    def ambient_temp_c(self) -> float:
        return float(self._section("electrical").get("ambient_temp_c", 30))

    @property
    def velocity_limit(self) -> float:
        return float(self._section("hydraulics").get("velocity_limit_fps", 5.0))

    @property
    def pressure_variation(self) -> float:
        return float(self._section("hydraulics").get("pressure_variation_pct", 10.0))

    @property
    def min_distribution_uniformity(self) -> float:
        return float(self._section("hydraulics").get("min_distribution_uniformity_pct", 80.0))

    @property
    def pipe_material(self) -> str:
        return str(self._section("hydraulics").get("pipe_material", "PVC"))

    @property
    def soil_type(self) -> str:
        return str(self._section("hydraulics").get("soil_type", "loam"))

    @property
    def nutrient_profile(self) -> str:
        return str(self._section("nutrients").get("default_profile", "standard"))

    @property
    def config_dir(self) -> Path:
        return _PACKAGE_DIR


# Singleton instance
CALC_DEFAULTS = CalcDefaults()
