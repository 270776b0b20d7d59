"""
Electrical Validators

QC validation logic to compare a circuit schedule against calculated
requirements. Validates conductor sizing and overcurrent device ratings
for each scheduled circuit.
"""

import re
from typing import Any, Dict, List, Optional

from growcalc.core.logging import get_logger
from growcalc.engineering.base import ValidationStatus, ValidationResult
from growcalc.engineering.electrical import run_circuit_design
from growcalc.engineering.horti_calc import (
    InvalidInputError,
    get_conductor_ampacity,
    select_overcurrent_device,
)
from growcalc.engineering.horti_calc.nec_tables import CONDUCTOR_AREA_KCMIL

logger = get_logger("growcalc.engineering.validators")


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------

def parse_wire_gauge(gauge_str: str) -> Optional[str]:
    """
    Normalize a conductor size string.

    Examples:
        '12'        -> '12 AWG'
        '#10'       -> '10 AWG'
        '1/0'       -> '1/0 AWG'
        '2/0 AWG'   -> '2/0 AWG'
        '250MCM'    -> '250 kcmil'
        '350 kcmil' -> '350 kcmil'

    Returns None for sizes that are not tabulated.
    """
    if not gauge_str:
        return None

    s = str(gauge_str).strip().upper().replace('#', '').replace(' ', '')

    match = re.fullmatch(r'(\d+)(KCMIL|MCM)', s)
    if match:
        gauge = f"{int(match.group(1))} kcmil"
        return gauge if gauge in CONDUCTOR_AREA_KCMIL else None

    match = re.fullmatch(r'(\d+(?:/0)?)(AWG)?', s)
    if match:
        gauge = f"{match.group(1)} AWG"
        return gauge if gauge in CONDUCTOR_AREA_KCMIL else None

    return None


# ---------------------------------------------------------------------------
# Comparisons
# ---------------------------------------------------------------------------

def compare_conductors(
    provided: str,
    required: str,
    tolerance_pct: float = 0.0,
) -> tuple:
    """
    Compare a scheduled conductor against the required size by cross-section.

    Args:
        provided: Size string from the schedule (e.g., '#10', '1/0')
        required: Required size (normalized, e.g., '10 AWG')
        tolerance_pct: Allowed oversize before a warning

    Returns:
        Tuple of (ValidationStatus, deviation_pct, notes)
    """
    gauge = parse_wire_gauge(provided)
    if gauge is None:
        return ValidationStatus.REVIEW, 0.0, f"Cannot parse conductor size: {provided}"

    required_area = CONDUCTOR_AREA_KCMIL.get(required)
    if not required_area:
        return ValidationStatus.REVIEW, 0.0, f"Unknown required size: {required}"

    deviation = (CONDUCTOR_AREA_KCMIL[gauge] - required_area) / required_area * 100

    if gauge == required or 0 <= deviation <= tolerance_pct:
        return ValidationStatus.PASS, deviation, ""
    elif deviation > 0:
        return ValidationStatus.WARNING, deviation, f"Oversized: {gauge} where {required} is required"
    else:
        return ValidationStatus.FAIL, deviation, f"UNDERSIZED: {gauge} where {required} is required"


def compare_overcurrent_device(
    provided_amps: float,
    required_ampacity: float,
    conductor_ampacity: float,
) -> tuple:
    """
    Check a scheduled breaker against the load and its conductor.

    The device must cover the required ampacity (210.20(A)) and must not
    exceed the next standard size above the conductor ampacity (240.4(B)).

    Returns:
        Tuple of (ValidationStatus, deviation_pct, notes)
    """
    if provided_amps <= 0 or required_ampacity <= 0:
        return ValidationStatus.REVIEW, 0.0, "Missing device or load rating"

    deviation = (provided_amps - required_ampacity) / required_ampacity * 100

    if provided_amps < required_ampacity:
        return ValidationStatus.FAIL, deviation, (
            f"UNDERSIZED: {provided_amps:g}A device for {required_ampacity:.1f}A required"
        )
    if provided_amps > conductor_ampacity:
        next_size = select_overcurrent_device(conductor_ampacity, is_continuous=False)
        if provided_amps > next_size:
            return ValidationStatus.FAIL, deviation, (
                f"{provided_amps:g}A device exceeds conductor ampacity {conductor_ampacity:.1f}A"
            )
        return ValidationStatus.WARNING, deviation, (
            f"{provided_amps:g}A device uses the next-size-up allowance (240.4(B))"
        )
    return ValidationStatus.PASS, deviation, ""


# ---------------------------------------------------------------------------
# Validation functions
# ---------------------------------------------------------------------------

def _review(tag: str, item_type: str, provided: str, tolerance_pct: float, notes: str) -> Dict:
    return ValidationResult(
        item_type=item_type,
        item_tag=tag,
        provided_value=provided,
        required_value='N/A',
        tolerance_pct=tolerance_pct,
        deviation_pct=0.0,
        status=ValidationStatus.REVIEW,
        notes=notes,
    ).to_dict()


def validate_circuit_schedule(
    circuits: List[Dict[str, Any]],
    tolerance_pct: float = 0.0,
) -> List[Dict]:
    """
    Validate a branch circuit schedule against calculated designs.

    Each circuit dict carries the run_circuit_design params plus:
        tag: Circuit identifier
        wire_gauge: Scheduled conductor size
        ocpd_amps: Scheduled breaker rating (optional)

    Args:
        circuits: Scheduled circuits
        tolerance_pct: Allowed conductor oversize before a warning

    Returns:
        List of validation result dicts (one conductor result and, when a
        breaker is scheduled, one device result per circuit)
    """
    if not circuits:
        return [_review('N/A', 'conductor', 'N/A', tolerance_pct, 'No circuits in schedule')]

    results = []

    for circuit in circuits:
        tag = str(circuit.get('tag', 'unnamed'))
        provided = circuit.get('wire_gauge', '')

        try:
            design = run_circuit_design(circuit)
        except InvalidInputError as e:
            results.append(_review(tag, 'conductor', str(provided), tolerance_pct, f'Calculation error: {e}'))
            continue

        required = design['conductor_size']
        status, deviation, notes = compare_conductors(str(provided), required, tolerance_pct)
        basis = f"{design['required_ampacity']:.1f}A over {circuit.get('distance_ft', 100)} ft"
        notes = f"{notes} (based on {basis})" if notes else f"Based on {basis}"

        results.append(ValidationResult(
            item_type='conductor',
            item_tag=tag,
            provided_value=str(provided),
            required_value=required,
            tolerance_pct=tolerance_pct,
            deviation_pct=deviation,
            status=status,
            notes=notes,
        ).to_dict())

        ocpd = circuit.get('ocpd_amps')
        if ocpd is None:
            continue

        scheduled = parse_wire_gauge(str(provided)) or required
        conductor_amps = get_conductor_ampacity(scheduled, circuit.get('terminal_rating_c', 75))
        status, deviation, notes = compare_overcurrent_device(
            ocpd, design['required_ampacity'], conductor_amps,
        )
        results.append(ValidationResult(
            item_type='ocpd',
            item_tag=tag,
            provided_value=f"{ocpd:g}A",
            required_value=f"{design['overcurrent_device_amps']}A",
            tolerance_pct=tolerance_pct,
            deviation_pct=deviation,
            status=status,
            notes=notes,
        ).to_dict())

    failures = sum(1 for r in results if r['status'] == ValidationStatus.FAIL.value)
    logger.debug("Validated %d circuits: %d failures", len(circuits), failures)

    return results
