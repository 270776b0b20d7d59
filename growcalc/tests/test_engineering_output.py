"""Tests for engineering output formatters."""

import json

from growcalc.engineering.electrical import run_compliance_check
from growcalc.engineering.output import (
    OutputFormat,
    format_compliance_report,
    format_result,
    format_validation_report,
)


def _report(**params):
    return run_compliance_check(dict({"name": "LED row 1", "current": 20}, **params))


def test_format_result_reexported():
    text = format_result({"grounding_conductor": "8 AWG"}, title="Grounding")
    assert "Grounding" in text
    assert "8 AWG" in text


def test_compliance_report_human():
    text = format_compliance_report(_report(distance_ft=100))
    assert "NEC COMPLIANCE: LED row 1" in text
    assert "[FAIL] 215.2(A)(1)" in text
    assert "NON-COMPLIANT" in text
    assert "Summary: 7/8 PASS" in text


def test_compliance_report_compliant():
    text = format_compliance_report(_report(distance_ft=20))
    assert "Summary: 8/8 PASS | COMPLIANT" in text


def test_compliance_report_markdown():
    text = format_compliance_report(_report(distance_ft=20), fmt=OutputFormat.MARKDOWN)
    assert "| Section | Requirement | Status | Notes |" in text
    assert "**Result**: COMPLIANT" in text


def test_compliance_report_json():
    data = json.loads(format_compliance_report(_report(), fmt=OutputFormat.JSON))
    assert data["equipment"] == "LED row 1"
    assert len(data["checks"]) == 8


def test_validation_report_with_results():
    validations = [
        {"status": "PASS", "item_tag": "LP-1", "item_type": "conductor"},
        {"status": "FAIL", "item_tag": "LP-2", "item_type": "conductor",
         "provided_value": "12", "required_value": "10 AWG", "notes": "UNDERSIZED"},
        {"status": "WARNING", "item_tag": "LP-3", "item_type": "conductor",
         "provided_value": "8", "required_value": "10 AWG", "notes": "Oversized"},
    ]
    report = format_validation_report(validations, schedule="panel-A")
    assert "VALIDATION REPORT: panel-A" in report
    assert "LP-2" in report
    assert "Summary: 1 PASS | 1 WARNING | 1 FAIL" in report


def test_validation_report_markdown():
    report = format_validation_report(
        [{"status": "REVIEW", "item_tag": "LP-9", "notes": "Cannot parse"}],
        fmt=OutputFormat.MARKDOWN,
    )
    assert "## Needs Review" in report
    assert "## Summary" in report


def test_validation_report_empty():
    report = format_validation_report([])
    assert "0 PASS" in report
