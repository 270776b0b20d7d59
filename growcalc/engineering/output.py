"""
Output Formatters

Format engineering results for different output modes:
- Human-readable (default)
- JSON (for programmatic use)
- Markdown (for reports)

Single results use growcalc.core.output.format_result; this module adds
the NEC checklist and circuit validation reports.
"""

import json
from typing import Any, Dict, List, Optional

from growcalc.core.output import OutputFormat, format_result

__all__ = [
    "OutputFormat",
    "format_result",
    "format_compliance_report",
    "format_validation_report",
]


def format_compliance_report(
    report: Dict[str, Any],
    fmt: OutputFormat = OutputFormat.HUMAN,
) -> str:
    """
    Format an NEC checklist as returned by run_compliance_check.

    Args:
        report: Dict with 'equipment', 'checks' and 'is_compliant'
        fmt: Output format

    Returns:
        Formatted report
    """
    if fmt == OutputFormat.JSON:
        return json.dumps(report, indent=2, default=str)

    checks: List[Dict[str, Any]] = report.get('checks', [])
    equipment = report.get('equipment', 'equipment')
    verdict = "COMPLIANT" if report.get('is_compliant') else "NON-COMPLIANT"
    lines = []

    if fmt == OutputFormat.MARKDOWN:
        lines.append(f"# NEC Compliance: {equipment}")
        lines.append("")
        lines.append(
            f"{report.get('current_a', 0):.1f}A at {report.get('voltage', 0):g}V, "
            f"{report.get('phases', 1)}-phase, {report.get('distance_ft', 0):g} ft"
        )
        lines.append("")
        lines.append("| Section | Requirement | Status | Notes |")
        lines.append("|---------|-------------|--------|-------|")
        for c in checks:
            status = "PASS" if c.get('is_compliant') else "FAIL"
            if c.get('extrapolated'):
                status += " *"
            lines.append(f"| {c.get('section', '')} | {c.get('requirement', '')} | {status} | {c.get('notes', '')} |")
        lines.append("")
        if any(c.get('extrapolated') for c in checks):
            lines.append("\\* clamped to table limits")
            lines.append("")
        lines.append(f"**Result**: {verdict}")
    else:
        title = f"NEC COMPLIANCE: {equipment}"
        lines.append(title)
        lines.append("=" * len(title))
        lines.append(
            f"{report.get('current_a', 0):.1f}A at {report.get('voltage', 0):g}V, "
            f"{report.get('phases', 1)}-phase, {report.get('distance_ft', 0):g} ft"
        )
        lines.append("")
        for c in checks:
            status = "PASS" if c.get('is_compliant') else "FAIL"
            flag = " (clamped)" if c.get('extrapolated') else ""
            lines.append(f"  [{status}] {c.get('section', ''):<14} {c.get('requirement', '')}{flag}")
            if c.get('notes'):
                lines.append(f"         {'':<14} {c['notes']}")
        lines.append("")
        passed = sum(1 for c in checks if c.get('is_compliant'))
        lines.append(f"Summary: {passed}/{len(checks)} PASS | {verdict}")

    return "\n".join(lines)


def format_validation_report(
    validations: List[Dict],
    fmt: OutputFormat = OutputFormat.HUMAN,
    schedule: Optional[str] = None,
) -> str:
    """
    Format circuit validation results as a report.

    Args:
        validations: List of validation result dicts
        fmt: Output format
        schedule: Schedule or panel identifier

    Returns:
        Formatted report
    """
    if fmt == OutputFormat.JSON:
        return json.dumps(validations, indent=2, default=str)

    # Group by status
    failures = [v for v in validations if v.get('status') == 'FAIL']
    warnings = [v for v in validations if v.get('status') == 'WARNING']
    passed = [v for v in validations if v.get('status') == 'PASS']
    reviews = [v for v in validations if v.get('status') == 'REVIEW']

    lines = []

    if fmt == OutputFormat.MARKDOWN:
        title = f"Validation Report: {schedule}" if schedule else "Validation Report"
        lines.append(f"# {title}")
        lines.append("")

        for heading, group in (("Failures", failures), ("Warnings", warnings), ("Needs Review", reviews)):
            if group:
                lines.append(f"## {heading}")
                for v in group:
                    lines.append(f"- **{v.get('item_tag', 'Unknown')}** ({v.get('item_type', '')}): {v.get('notes', '')}")
                lines.append("")

        lines.append("## Summary")
        lines.append(f"- **Passed**: {len(passed)}")
        lines.append(f"- **Warnings**: {len(warnings)}")
        lines.append(f"- **Failures**: {len(failures)}")
        lines.append(f"- **Review**: {len(reviews)}")
    else:
        title = f"VALIDATION REPORT: {schedule}" if schedule else "VALIDATION REPORT"
        lines.append(title)
        lines.append("=" * len(title))
        lines.append("")

        for heading, group in (("FAILURES", failures), ("WARNINGS", warnings)):
            if group:
                lines.append(f"{heading} ({len(group)}):")
                for v in group:
                    tag = v.get('item_tag', 'Unknown')
                    provided = v.get('provided_value', '?')
                    required = v.get('required_value', '?')
                    notes = v.get('notes', '')
                    lines.append(f"  {tag} [{v.get('item_type', '')}]: Scheduled={provided} | Required={required} | {notes}")
                lines.append("")

        if reviews:
            lines.append(f"NEEDS REVIEW ({len(reviews)}):")
            for v in reviews:
                lines.append(f"  {v.get('item_tag', 'Unknown')}: {v.get('notes', '')}")
            lines.append("")

        lines.append(f"PASSED ({len(passed)}):")
        if len(passed) <= 5:
            for v in passed:
                lines.append(f"  {v.get('item_tag', 'Unknown')} [{v.get('item_type', '')}]")
        else:
            lines.append("  All other items within tolerance")
        lines.append("")

        lines.append(f"Summary: {len(passed)} PASS | {len(warnings)} WARNING | {len(failures)} FAIL")

    return "\n".join(lines)
