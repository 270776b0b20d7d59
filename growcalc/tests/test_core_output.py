"""Tests for core output formatters."""

import json
from dataclasses import dataclass

from growcalc.core.output import format_result, OutputFormat


@dataclass
class _Sample:
    name: str
    value: float
    ok: bool


def test_format_human_with_title():
    text = format_result({"key": "val"}, title="Test Title")
    assert "Test Title" in text
    assert "===" in text


def test_format_json():
    text = format_result({"temp": 28.5}, fmt=OutputFormat.JSON)
    data = json.loads(text)
    assert data["temp"] == 28.5


def test_format_json_dataclass():
    text = format_result(_Sample("a", 1.5, True), fmt=OutputFormat.JSON)
    assert json.loads(text) == {"name": "a", "value": 1.5, "ok": True}


def test_format_markdown():
    text = format_result({"size": 4.0}, fmt=OutputFormat.MARKDOWN)
    assert "| Parameter | Value |" in text
    assert "Size" in text


def test_format_float_precision():
    text = format_result({"small": 0.12345, "large": 12345.6})
    assert "0.123" in text
    assert "12,345.6" in text


def test_format_bool_as_yes_no():
    text = format_result(_Sample("a", 1.0, False))
    assert "No" in text


def test_format_list_values():
    text = format_result({"items": ["a", "b"]})
    assert "- a" in text
    assert "- b" in text


def test_format_empty_list():
    text = format_result({"items": []})
    assert "(none)" in text


def test_format_nested_dict():
    text = format_result({"heating": {"peak_load_btu_hr": 250000.0}})
    assert "peak load btu hr" in text
