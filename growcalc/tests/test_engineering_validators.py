"""Tests for conductor parsing, comparison logic and circuit schedule validation."""

import pytest

from growcalc.engineering.base import ValidationStatus
from growcalc.engineering.validators import (
    compare_conductors,
    compare_overcurrent_device,
    parse_wire_gauge,
    validate_circuit_schedule,
)


class TestParseWireGauge:
    def test_plain_number(self):
        assert parse_wire_gauge("12") == "12 AWG"

    def test_hash_prefix(self):
        assert parse_wire_gauge("#10") == "10 AWG"

    def test_aught(self):
        assert parse_wire_gauge("1/0") == "1/0 AWG"
        assert parse_wire_gauge("2/0 AWG") == "2/0 AWG"

    def test_mcm(self):
        assert parse_wire_gauge("250MCM") == "250 kcmil"

    def test_kcmil(self):
        assert parse_wire_gauge("350 kcmil") == "350 kcmil"

    def test_untabulated_returns_none(self):
        assert parse_wire_gauge("13") is None
        assert parse_wire_gauge("275 kcmil") is None

    def test_empty_returns_none(self):
        assert parse_wire_gauge("") is None

    def test_garbage_returns_none(self):
        assert parse_wire_gauge("abc") is None


class TestCompareConductors:
    def test_exact_match(self):
        status, dev, notes = compare_conductors("#10", "10 AWG")
        assert status == ValidationStatus.PASS
        assert dev == 0.0

    def test_oversized(self):
        status, dev, notes = compare_conductors("8", "10 AWG")
        assert status == ValidationStatus.WARNING
        assert dev == pytest.approx((16.51 - 10.38) / 10.38 * 100)
        assert "Oversized" in notes

    def test_oversized_within_tolerance(self):
        status, _, _ = compare_conductors("8", "10 AWG", tolerance_pct=100.0)
        assert status == ValidationStatus.PASS

    def test_undersized(self):
        status, dev, notes = compare_conductors("12", "10 AWG")
        assert status == ValidationStatus.FAIL
        assert dev < 0
        assert "UNDERSIZED" in notes

    def test_unparseable(self):
        status, _, notes = compare_conductors("abc", "10 AWG")
        assert status == ValidationStatus.REVIEW
        assert "Cannot parse" in notes


class TestCompareOvercurrentDevice:
    def test_pass(self):
        status, dev, _ = compare_overcurrent_device(25, 25, 35)
        assert status == ValidationStatus.PASS
        assert dev == 0.0

    def test_undersized(self):
        status, _, notes = compare_overcurrent_device(20, 25, 35)
        assert status == ValidationStatus.FAIL
        assert "UNDERSIZED" in notes

    def test_next_size_up_allowance(self):
        status, _, notes = compare_overcurrent_device(30, 20, 28)
        assert status == ValidationStatus.WARNING
        assert "240.4(B)" in notes

    def test_exceeds_conductor(self):
        status, _, _ = compare_overcurrent_device(50, 25, 35)
        assert status == ValidationStatus.FAIL

    def test_missing_rating(self):
        status, _, _ = compare_overcurrent_device(0, 25, 35)
        assert status == ValidationStatus.REVIEW


class TestValidateCircuitSchedule:
    LIGHTING = {
        "equipment_type": "lighting", "power": 4800, "voltage": 240, "distance_ft": 100,
    }

    def test_correct_circuit_passes(self):
        results = validate_circuit_schedule([
            dict(self.LIGHTING, tag="LP-1", wire_gauge="#10", ocpd_amps=25),
        ])
        assert [r["item_type"] for r in results] == ["conductor", "ocpd"]
        assert all(r["status"] == "PASS" for r in results)
        assert results[0]["required_value"] == "10 AWG"
        assert results[1]["required_value"] == "25A"

    def test_undersized_conductor_fails(self):
        results = validate_circuit_schedule([dict(self.LIGHTING, tag="LP-2", wire_gauge="12")])
        assert len(results) == 1
        assert results[0]["status"] == "FAIL"
        assert "UNDERSIZED" in results[0]["notes"]

    def test_oversized_breaker_fails(self):
        results = validate_circuit_schedule([
            dict(self.LIGHTING, tag="LP-3", wire_gauge="10", ocpd_amps=50),
        ])
        assert results[1]["status"] == "FAIL"

    def test_bad_circuit_needs_review(self):
        results = validate_circuit_schedule([dict(self.LIGHTING, tag="LP-4", voltage=0, wire_gauge="10")])
        assert results[0]["status"] == "REVIEW"
        assert "Calculation error" in results[0]["notes"]

    def test_empty_schedule(self):
        results = validate_circuit_schedule([])
        assert len(results) == 1
        assert results[0]["status"] == "REVIEW"
