"""
Shared test fixtures for growcalc.

Provides a CLI runner and representative equipment, irrigation,
greenhouse and crop inputs.
"""

import pytest

from growcalc.engineering.horti_calc import (
    ClimateSetpoints,
    ElectricalEquipment,
    EnvironmentalConditions,
    GreenhouseSpecs,
    HydraulicCalculationParams,
    PlantParameters,
    WeatherConditions,
    build_pipe_specification,
    make_fitting,
)


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()


@pytest.fixture
def lighting_load():
    """20A continuous 240V lighting circuit."""
    return ElectricalEquipment(
        type="lighting", power=4800, voltage=240, current=20.0, name="LED row 1",
    )


@pytest.fixture
def rooftop_unit():
    """Three-phase HVAC motor load."""
    return ElectricalEquipment(
        type="hvac", power=10000, voltage=208, current=32.0, phases=3,
        is_motor=True, power_factor=0.85, name="RTU-1",
    )


@pytest.fixture
def pvc_3in():
    return build_pipe_specification("PVC", 3)


@pytest.fixture
def supply_line():
    """40 gpm through 300 ft of 3\" PVC with a few fittings."""
    return HydraulicCalculationParams(
        design_flow_rate=40,
        inlet_pressure=50,
        required_outlet_pressure=30,
        total_length=300,
        fittings=[make_fitting("elbow_90", 4), make_fitting("valve_gate", 1)],
    )


@pytest.fixture
def greenhouse():
    return GreenhouseSpecs(length=100, width=30, height=12, glazing_type="polycarbonate")


@pytest.fixture
def setpoints():
    return ClimateSetpoints()


@pytest.fixture
def weather():
    return WeatherConditions()


@pytest.fixture
def fruiting_plant():
    return PlantParameters(growth_stage="fruiting", plant_age_days=60, leaf_count=25)


@pytest.fixture
def reference_climate():
    """Climate at the profile reference point (environmental factor 1.0)."""
    return EnvironmentalConditions(temperature_c=22, humidity_pct=70, ppfd=400, co2_ppm=400)
