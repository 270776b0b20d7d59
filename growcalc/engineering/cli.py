"""Engineering CLI sub-commands."""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import typer

from growcalc.core.output import OutputFormat

app = typer.Typer(no_args_is_help=True)

FORMAT_OPTION = typer.Option(OutputFormat.HUMAN, "--format", "-f", help="Output format: human, json, markdown")


def _run(func: Callable[[Dict[str, Any]], Dict[str, Any]], params: Dict[str, Any]) -> Dict[str, Any]:
    """Run a calculation, turning invalid input into exit code 1."""
    from growcalc.engineering.horti_calc import InvalidInputError

    try:
        return func(params)
    except InvalidInputError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def _emit(result: Any, fmt: OutputFormat, title: str) -> None:
    from growcalc.engineering import output

    typer.echo(output.format_result(result, fmt=fmt, title=title))


def _parse_levels(levels: List[str]) -> Dict[str, float]:
    parsed = {}
    for item in levels:
        name, _, value = item.partition("=")
        try:
            parsed[name.strip().lower()] = float(value)
        except ValueError:
            typer.echo(f"Error: expected NUTRIENT=PPM, got {item!r}", err=True)
            raise typer.Exit(1)
    return parsed


# ---------------------------------------------------------------------------
# Electrical commands
# ---------------------------------------------------------------------------

@app.command("nec-check")
def nec_check(
    equipment_type: str = typer.Option("lighting", help="Equipment type: lighting, hvac, dehumidifier, irrigation, ..."),
    power: float = typer.Option(1000, help="Rated power (W)"),
    voltage: float = typer.Option(240, help="Supply voltage (V)"),
    phases: int = typer.Option(1, help="Phases: 1 or 3"),
    power_factor: float = typer.Option(1.0, help="Power factor"),
    current: Optional[float] = typer.Option(None, help="Full-load current (A), overrides power"),
    distance_ft: float = typer.Option(100, help="One-way circuit length (ft)"),
    wire_gauge: str = typer.Option("12 AWG", help="Conductor for fill and voltage drop"),
    gfci: Optional[bool] = typer.Option(None, "--gfci/--no-gfci", help="GFCI protection provided"),
    fmt: OutputFormat = FORMAT_OPTION,
):
    """Run the complete NEC checklist for one load."""
    from growcalc.engineering.electrical import run_compliance_check
    from growcalc.engineering import output

    params = {
        'equipment_type': equipment_type,
        'power': power,
        'voltage': voltage,
        'phases': phases,
        'power_factor': power_factor,
        'current': current,
        'distance_ft': distance_ft,
        'wire_gauge': wire_gauge,
        'gfci_protected': gfci,
    }

    result = _run(run_compliance_check, params)
    typer.echo(output.format_compliance_report(result, fmt=fmt))


@app.command("grounding")
def grounding(
    ocpd_amps: float = typer.Option(20, help="Overcurrent device rating (A)"),
    fmt: OutputFormat = FORMAT_OPTION,
):
    """Equipment grounding conductor size (Table 250.122)."""
    from growcalc.engineering.electrical import run_grounding

    _emit(_run(run_grounding, {'ocpd_amps': ocpd_amps}), fmt, "Equipment Grounding Conductor")


@app.command("ampacity")
def ampacity(
    base_ampacity: float = typer.Option(100, help="Table ampacity (A)"),
    ambient_temp_c: float = typer.Option(30, help="Ambient temperature (C)"),
    conductor_count: int = typer.Option(3, help="Current-carrying conductors"),
    terminal_rating_c: int = typer.Option(75, help="Terminal rating: 60, 75, 90"),
    fmt: OutputFormat = FORMAT_OPTION,
):
    """Ampacity temperature correction and bundling adjustment."""
    from growcalc.engineering.electrical import run_ampacity

    params = {
        'base_ampacity': base_ampacity,
        'ambient_temp_c': ambient_temp_c,
        'conductor_count': conductor_count,
        'terminal_rating_c': terminal_rating_c,
    }
    _emit(_run(run_ampacity, params), fmt, "Ampacity Correction")


@app.command("conduit-fill")
def conduit_fill(
    wire_gauge: str = typer.Option("12 AWG", help="Conductor size"),
    wire_count: int = typer.Option(3, help="Number of conductors"),
    conduit_type: str = typer.Option("EMT", help="Conduit type: EMT, PVC, RMC"),
    fmt: OutputFormat = FORMAT_OPTION,
):
    """Select the smallest conduit at 40% fill."""
    from growcalc.engineering.electrical import run_conduit_fill

    params = {'wire_gauge': wire_gauge, 'wire_count': wire_count, 'conduit_type': conduit_type}
    _emit(_run(run_conduit_fill, params), fmt, "Conduit Fill")


@app.command("voltage-drop")
def voltage_drop(
    current: float = typer.Option(20, help="Load current (A)"),
    distance_ft: float = typer.Option(100, help="One-way length (ft)"),
    wire_gauge: str = typer.Option("12 AWG", help="Conductor size"),
    voltage: float = typer.Option(240, help="System voltage (V)"),
    phases: int = typer.Option(1, help="Phases: 1 or 3"),
    power_factor: float = typer.Option(1.0, help="Power factor"),
    method: str = typer.Option("resistance", help="Method: resistance or impedance"),
    fmt: OutputFormat = FORMAT_OPTION,
):
    """Voltage drop percentage for a circuit run."""
    from growcalc.engineering.electrical import run_voltage_drop

    params = {
        'current': current,
        'distance_ft': distance_ft,
        'wire_gauge': wire_gauge,
        'voltage': voltage,
        'phases': phases,
        'power_factor': power_factor,
        'method': method,
    }
    _emit(_run(run_voltage_drop, params), fmt, "Voltage Drop")


@app.command("circuit-design")
def circuit_design(
    equipment_type: str = typer.Option("lighting", help="Equipment type"),
    power: float = typer.Option(1000, help="Rated power (W)"),
    voltage: float = typer.Option(240, help="Supply voltage (V)"),
    phases: int = typer.Option(1, help="Phases: 1 or 3"),
    power_factor: float = typer.Option(1.0, help="Power factor"),
    distance_ft: float = typer.Option(100, help="One-way circuit length (ft)"),
    conduit_type: str = typer.Option("EMT", help="Conduit type: EMT, PVC, RMC"),
    fmt: OutputFormat = FORMAT_OPTION,
):
    """Size breaker, conductor, ground and conduit for one load."""
    from growcalc.engineering.electrical import run_circuit_design

    params = {
        'equipment_type': equipment_type,
        'power': power,
        'voltage': voltage,
        'phases': phases,
        'power_factor': power_factor,
        'distance_ft': distance_ft,
        'conduit_type': conduit_type,
    }
    _emit(_run(run_circuit_design, params), fmt, "Branch Circuit Design")


# ---------------------------------------------------------------------------
# Irrigation commands
# ---------------------------------------------------------------------------

@app.command("hydraulics")
def hydraulics(
    flow_gpm: float = typer.Option(50, help="Design flow (gpm)"),
    inlet_pressure: float = typer.Option(60, help="Inlet pressure (psi)"),
    outlet_pressure: float = typer.Option(30, help="Required outlet pressure (psi)"),
    length_ft: float = typer.Option(500, help="Total pipe length (ft)"),
    elevation_ft: float = typer.Option(0, help="Elevation gain (ft)"),
    pipe_material: str = typer.Option("PVC", help="Pipe material: PVC, HDPE, steel"),
    nominal_size: float = typer.Option(2, help="Nominal pipe size (in)"),
    soil_type: str = typer.Option("loam", help="Soil texture class"),
    irrigated_area_sqft: Optional[float] = typer.Option(None, help="Irrigated area (ft2)"),
    num_90_elbows: int = typer.Option(0, help="Number of 90-degree elbows"),
    num_tees: int = typer.Option(0, help="Number of tees"),
    num_gate_valves: int = typer.Option(0, help="Number of gate valves"),
    fmt: OutputFormat = FORMAT_OPTION,
):
    """Analyze an irrigation supply line."""
    from growcalc.engineering.irrigation import run_hydraulic_analysis

    params = {
        'flow_gpm': flow_gpm,
        'inlet_pressure': inlet_pressure,
        'outlet_pressure': outlet_pressure,
        'length_ft': length_ft,
        'elevation_ft': elevation_ft,
        'pipe_material': pipe_material,
        'nominal_size': nominal_size,
        'soil_type': soil_type,
        'irrigated_area_sqft': irrigated_area_sqft,
        'num_90_elbows': num_90_elbows,
        'num_tees': num_tees,
        'num_gate_valves': num_gate_valves,
    }
    _emit(_run(run_hydraulic_analysis, params), fmt, "Hydraulic Analysis")


@app.command("uniformity")
def uniformity(
    flows: List[float] = typer.Argument(..., help="Measured emitter or catch-can flows"),
    fmt: OutputFormat = FORMAT_OPTION,
):
    """Distribution and emission uniformity from measured flows."""
    from growcalc.engineering.irrigation import run_uniformity

    _emit(_run(run_uniformity, {'flows': flows}), fmt, "Irrigation Uniformity")


@app.command("water-hammer")
def water_hammer(
    flow_gpm: float = typer.Option(50, help="Flow before closure (gpm)"),
    pipe_material: str = typer.Option("PVC", help="Pipe material: PVC, HDPE, steel"),
    nominal_size: float = typer.Option(2, help="Nominal pipe size (in)"),
    fmt: OutputFormat = FORMAT_OPTION,
):
    """Surge pressure for instantaneous valve closure."""
    from growcalc.engineering.irrigation import run_water_hammer

    params = {'flow_gpm': flow_gpm, 'pipe_material': pipe_material, 'nominal_size': nominal_size}
    _emit(_run(run_water_hammer, params), fmt, "Water Hammer")


# ---------------------------------------------------------------------------
# Climate commands
# ---------------------------------------------------------------------------

@app.command("energy")
def energy(
    length_ft: float = typer.Option(100, help="Greenhouse length (ft)"),
    width_ft: float = typer.Option(30, help="Greenhouse width (ft)"),
    height_ft: float = typer.Option(12, help="Eave height (ft)"),
    glazing_type: str = typer.Option("polycarbonate", help="glass, polycarbonate, polyethylene"),
    night_temp_f: float = typer.Option(65, help="Night setpoint (F)"),
    day_temp_f: float = typer.Option(75, help="Day setpoint (F)"),
    target_dli: float = typer.Option(20, help="Target DLI (mol/m2/day)"),
    co2_ppm: float = typer.Option(1000, help="CO2 setpoint (ppm)"),
    winter_temp_f: float = typer.Option(10, help="Design winter temperature (F)"),
    summer_temp_f: float = typer.Option(95, help="Design summer temperature (F)"),
    natural_dli: float = typer.Option(15, help="Natural DLI (mol/m2/day)"),
    fmt: OutputFormat = FORMAT_OPTION,
):
    """Annual greenhouse energy demand and cost."""
    from growcalc.engineering.climate import run_energy_demand

    params = {
        'length_ft': length_ft,
        'width_ft': width_ft,
        'height_ft': height_ft,
        'glazing_type': glazing_type,
        'night_temp_f': night_temp_f,
        'day_temp_f': day_temp_f,
        'target_dli': target_dli,
        'co2_ppm': co2_ppm,
        'winter_temp_f': winter_temp_f,
        'summer_temp_f': summer_temp_f,
        'natural_dli': natural_dli,
    }
    _emit(_run(run_energy_demand, params), fmt, "Greenhouse Energy Demand")


@app.command("lighting")
def lighting(
    target_dli: float = typer.Option(20, help="Target DLI (mol/m2/day)"),
    natural_dli: float = typer.Option(10, help="Natural DLI (mol/m2/day)"),
    photoperiod_hours: float = typer.Option(16, help="Lighting hours per day"),
    area_sqft: float = typer.Option(1000, help="Lit area (ft2)"),
    fmt: OutputFormat = FORMAT_OPTION,
):
    """Size supplemental LED lighting."""
    from growcalc.engineering.climate import run_lighting

    params = {
        'target_dli': target_dli,
        'natural_dli': natural_dli,
        'photoperiod_hours': photoperiod_hours,
        'area_sqft': area_sqft,
    }
    _emit(_run(run_lighting, params), fmt, "Supplemental Lighting")


@app.command("thermal-storage")
def thermal_storage(
    volume: float = typer.Option(5000, help="Volume (gal for water, ft3 otherwise)"),
    medium: str = typer.Option("water", help="water, concrete, phase_change"),
    efficiency: float = typer.Option(0.9, help="Storage efficiency"),
    heating_load_btu_hr: Optional[float] = typer.Option(None, help="Heating load for backup hours"),
    fmt: OutputFormat = FORMAT_OPTION,
):
    """Thermal storage capacity."""
    from growcalc.engineering.climate import run_thermal_storage

    params = {
        'volume': volume,
        'medium': medium,
        'efficiency': efficiency,
        'heating_load_btu_hr': heating_load_btu_hr,
    }
    _emit(_run(run_thermal_storage, params), fmt, "Thermal Storage")


# ---------------------------------------------------------------------------
# Fertigation commands
# ---------------------------------------------------------------------------

@app.command("nutrients")
def nutrients(
    profile: str = typer.Option("standard", help="standard, high_yield, organic, flavor_focus"),
    growth_stage: str = typer.Option("vegetative", help="seedling, vegetative, flowering, fruiting, ripening"),
    plant_age_days: float = typer.Option(30, help="Days since transplant"),
    leaf_count: int = typer.Option(20, help="Leaves per plant"),
    temperature_c: float = typer.Option(22, help="Air temperature (C)"),
    humidity_pct: float = typer.Option(70, help="Relative humidity (%)"),
    ppfd: float = typer.Option(400, help="Light intensity (umol/m2/s)"),
    co2_ppm: float = typer.Option(400, help="CO2 (ppm)"),
    target_yield: Optional[float] = typer.Option(None, help="Target yield (kg/plant)"),
    quality_focus: str = typer.Option("balanced", help="yield, flavor, balanced"),
    fmt: OutputFormat = FORMAT_OPTION,
):
    """Nutrient solution targets for a crop condition."""
    from growcalc.engineering.fertigation import run_nutrient_targets

    params = {
        'profile': profile,
        'growth_stage': growth_stage,
        'plant_age_days': plant_age_days,
        'leaf_count': leaf_count,
        'temperature_c': temperature_c,
        'humidity_pct': humidity_pct,
        'ppfd': ppfd,
        'co2_ppm': co2_ppm,
        'target_yield': target_yield,
        'quality_focus': quality_focus,
    }
    _emit(_run(run_nutrient_targets, params), fmt, "Nutrient Targets")


@app.command("deficiencies")
def deficiencies(
    levels: List[str] = typer.Argument(..., help="Measured levels as NUTRIENT=PPM"),
    profile: str = typer.Option("standard", help="Profile for the required targets"),
    growth_stage: str = typer.Option("vegetative", help="Growth stage for the required targets"),
    plant_age_days: float = typer.Option(30, help="Days since transplant"),
    fmt: OutputFormat = FORMAT_OPTION,
):
    """Diagnose deficiencies against calculated targets."""
    from growcalc.engineering.fertigation import run_deficiency_diagnosis

    params = {
        'current': _parse_levels(levels),
        'profile': profile,
        'growth_stage': growth_stage,
        'plant_age_days': plant_age_days,
    }
    result = _run(run_deficiency_diagnosis, params)

    if fmt == OutputFormat.HUMAN and not result['deficiencies']:
        typer.echo("No deficiencies detected.")
        return
    _emit(result, fmt, "Deficiency Diagnosis")


# ---------------------------------------------------------------------------
# Validation commands
# ---------------------------------------------------------------------------

@app.command("validate-circuits")
def validate_circuits(
    schedule: Path = typer.Argument(..., help="Circuit schedule (YAML or JSON list of circuits)"),
    tolerance: float = typer.Option(0.0, help="Allowed conductor oversize (%)"),
    fmt: OutputFormat = FORMAT_OPTION,
):
    """Validate a branch circuit schedule against calculated designs."""
    import yaml

    from growcalc.engineering import validators, output

    if not schedule.exists():
        typer.echo(f"Schedule not found: {schedule}", err=True)
        raise typer.Exit(1)

    with open(schedule, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or []

    circuits = data.get('circuits', []) if isinstance(data, dict) else data
    results = validators.validate_circuit_schedule(circuits, tolerance_pct=tolerance)

    typer.echo(output.format_validation_report(results, fmt=fmt, schedule=schedule.stem))
