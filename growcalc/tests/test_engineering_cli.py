"""Tests for engineering CLI commands via Typer CliRunner."""

import json

from growcalc.engineering.cli import app as eng_app


def test_nec_check_command(cli_runner):
    result = cli_runner.invoke(eng_app, [
        "nec-check", "--equipment-type", "hvac", "--power", "10000",
        "--voltage", "208", "--phases", "3", "--distance-ft", "50",
    ])
    assert result.exit_code == 0, result.output
    assert "NEC COMPLIANCE" in result.output


def test_nec_check_no_gfci(cli_runner):
    result = cli_runner.invoke(eng_app, [
        "nec-check", "--equipment-type", "irrigation", "--no-gfci",
    ])
    assert result.exit_code == 0, result.output
    assert "NON-COMPLIANT" in result.output


def test_nec_check_invalid_voltage(cli_runner):
    result = cli_runner.invoke(eng_app, ["nec-check", "--voltage", "0"])
    assert result.exit_code == 1
    assert "Invalid voltage" in result.output


def test_grounding_json(cli_runner):
    result = cli_runner.invoke(eng_app, ["grounding", "--ocpd-amps", "100", "--format", "json"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["grounding_conductor"] == "8 AWG"


def test_ampacity_command(cli_runner):
    result = cli_runner.invoke(eng_app, ["ampacity", "--ambient-temp-c", "40", "--conductor-count", "6"])
    assert result.exit_code == 0, result.output


def test_conduit_fill_command(cli_runner):
    result = cli_runner.invoke(eng_app, ["conduit-fill", "--wire-gauge", "10 AWG", "--wire-count", "9"])
    assert result.exit_code == 0, result.output


def test_voltage_drop_markdown(cli_runner):
    result = cli_runner.invoke(eng_app, ["voltage-drop", "-f", "markdown"])
    assert result.exit_code == 0, result.output
    assert "| Parameter | Value |" in result.output


def test_circuit_design_command(cli_runner):
    result = cli_runner.invoke(eng_app, ["circuit-design", "--power", "4800"])
    assert result.exit_code == 0, result.output
    assert "10 AWG" in result.output


def test_hydraulics_command(cli_runner):
    result = cli_runner.invoke(eng_app, [
        "hydraulics", "--flow-gpm", "40", "--nominal-size", "3", "--length-ft", "300",
        "--num-90-elbows", "4",
    ])
    assert result.exit_code == 0, result.output


def test_hydraulics_invalid_flow(cli_runner):
    result = cli_runner.invoke(eng_app, ["hydraulics", "--flow-gpm", "0"])
    assert result.exit_code == 1


def test_uniformity_command(cli_runner):
    result = cli_runner.invoke(eng_app, ["uniformity", "1.0", "1.1", "0.9", "1.0"])
    assert result.exit_code == 0, result.output


def test_water_hammer_command(cli_runner):
    result = cli_runner.invoke(eng_app, ["water-hammer", "--pipe-material", "HDPE"])
    assert result.exit_code == 0, result.output


def test_energy_command(cli_runner):
    result = cli_runner.invoke(eng_app, ["energy", "--glazing-type", "glass"])
    assert result.exit_code == 0, result.output


def test_energy_invalid_glazing(cli_runner):
    result = cli_runner.invoke(eng_app, ["energy", "--glazing-type", "acrylic"])
    assert result.exit_code == 1


def test_lighting_command(cli_runner):
    result = cli_runner.invoke(eng_app, ["lighting", "--area-sqft", "5000"])
    assert result.exit_code == 0, result.output


def test_thermal_storage_command(cli_runner):
    result = cli_runner.invoke(eng_app, ["thermal-storage", "--heating-load-btu-hr", "100000"])
    assert result.exit_code == 0, result.output


def test_nutrients_command(cli_runner):
    result = cli_runner.invoke(eng_app, ["nutrients", "--growth-stage", "fruiting", "--plant-age-days", "60"])
    assert result.exit_code == 0, result.output


def test_nutrients_invalid_profile(cli_runner):
    result = cli_runner.invoke(eng_app, ["nutrients", "--profile", "bogus"])
    assert result.exit_code == 1


def test_deficiencies_none(cli_runner):
    result = cli_runner.invoke(eng_app, ["deficiencies", "nitrogen=152", "calcium=152"])
    assert result.exit_code == 0, result.output
    assert "No deficiencies detected." in result.output


def test_deficiencies_found(cli_runner):
    result = cli_runner.invoke(eng_app, ["deficiencies", "nitrogen=50", "--format", "json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["deficiencies"][0]["nutrient"] == "nitrogen"


def test_deficiencies_bad_level(cli_runner):
    result = cli_runner.invoke(eng_app, ["deficiencies", "nitrogen=abc"])
    assert result.exit_code == 1


def test_validate_circuits_command(cli_runner, tmp_path):
    schedule = tmp_path / "panel-a.yaml"
    schedule.write_text(
        "circuits:\n"
        "  - tag: LP-1\n"
        "    equipment_type: lighting\n"
        "    power: 4800\n"
        "    voltage: 240\n"
        "    distance_ft: 100\n"
        "    wire_gauge: '12'\n"
        "    ocpd_amps: 25\n",
        encoding="utf-8",
    )
    result = cli_runner.invoke(eng_app, ["validate-circuits", str(schedule)])
    assert result.exit_code == 0, result.output
    assert "VALIDATION REPORT: panel-a" in result.output
    assert "LP-1" in result.output


def test_validate_circuits_missing_file(cli_runner, tmp_path):
    result = cli_runner.invoke(eng_app, ["validate-circuits", str(tmp_path / "none.yaml")])
    assert result.exit_code == 1
