"""Tests for config loading and calculation defaults."""

from growcalc.core.config import CALC_DEFAULTS, CONFIG_PATH, get_config, get_config_value


def test_config_file_ships_with_package():
    assert CONFIG_PATH.exists()
    assert CONFIG_PATH.name == "config.yaml"


def test_get_config_returns_dict():
    config = get_config(reload=True)
    assert isinstance(config, dict)
    assert "economics" in config


def test_get_config_caching():
    c1 = get_config()
    c2 = get_config()
    assert c1 is c2


def test_get_config_reload_returns_fresh():
    get_config()
    c2 = get_config(reload=True)
    c3 = get_config()
    assert c3 is c2


def test_get_config_value_nested():
    assert get_config_value("economics", "electricity_rate_per_kwh") == 0.12


def test_get_config_value_missing_returns_default():
    result = get_config_value("nonexistent", "deep", "path", default="fallback")
    assert result == "fallback"


def test_calc_defaults_types():
    assert isinstance(CALC_DEFAULTS.electricity_rate, float)
    assert CALC_DEFAULTS.default_wire_gauge == "12 AWG"
    assert CALC_DEFAULTS.terminal_rating_c == 75
    assert CALC_DEFAULTS.nutrient_profile == "standard"


def test_calc_defaults_match_engine_defaults():
    from growcalc.engineering.horti_calc import EnergyRates

    rates = EnergyRates()
    assert CALC_DEFAULTS.led_efficacy == rates.led_efficacy
    assert CALC_DEFAULTS.co2_price_per_lb == rates.co2_price_per_lb
