"""
Input Validation
================

Boundary checks for the composite calculation entry points.

The formula functions in this package are total: they clamp or default
rather than raise. Composite entry points (system analysis, energy demand,
compliance checklist, nutrient requirements) call these helpers first and
raise InvalidInputError for inputs that cannot describe a real system.
"""

import math
from typing import Any, Iterable, Optional


class InvalidInputError(ValueError):
    """Raised when a calculation input is outside its physical domain."""

    def __init__(self, field: str, reason: str, value: Any = None):
        self.field = field
        self.reason = reason
        self.value = value
        super().__init__(f"Invalid {field}: {reason}" + (f" (got {value!r})" if value is not None else ""))


def require_finite(field: str, value: float) -> float:
    """Reject NaN, infinity and non-numeric values."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(field, "must be a number", value)
    if not math.isfinite(value):
        raise InvalidInputError(field, "must be finite", value)
    return value


def require_positive(field: str, value: float) -> float:
    require_finite(field, value)
    if value <= 0:
        raise InvalidInputError(field, "must be greater than zero", value)
    return value


def require_non_negative(field: str, value: float) -> float:
    require_finite(field, value)
    if value < 0:
        raise InvalidInputError(field, "must not be negative", value)
    return value


def require_range(field: str, value: float, low: Optional[float] = None, high: Optional[float] = None) -> float:
    """Require low <= value <= high (either bound may be None)."""
    require_finite(field, value)
    if low is not None and value < low:
        raise InvalidInputError(field, f"must be at least {low}", value)
    if high is not None and value > high:
        raise InvalidInputError(field, f"must be at most {high}", value)
    return value


def require_choice(field: str, value: Any, choices: Iterable[Any]) -> Any:
    """Require value to be one of choices."""
    options = list(choices)
    if value not in options:
        raise InvalidInputError(
            field, f"must be one of {', '.join(str(c) for c in options)}", value
        )
    return value
