"""
Utilities Module
================

Common constants and unit conversions for horticultural engineering
calculations:
- Gravity, water and air constants
- Flow and area conversions
- Table interpolation
"""

import math
from typing import Dict, Sequence, Tuple


# ============================================================================
# ENGINEERING CONSTANTS
# ============================================================================

# Gravitational acceleration
G = 32.174  # ft/s²

# Water
FT_HEAD_TO_PSI = 0.433          # psi per ft of water column
GPM_PER_CFS = 448.831           # gal/min per ft³/s
WATER_BULK_MODULUS_PSI = 320_000.0
WATER_DENSITY_SLUG_FT3 = 1.94

# Air
SENSIBLE_HEAT_FACTOR = 1.08     # BTU/hr per CFM per °F
AIR_HEAT_CAPACITY = 0.018       # BTU/ft³·°F

# Energy
BTU_PER_KWH = 3412.14
BTU_PER_THERM = 100_000.0
WATTS_TO_BTU_HR = 3.412

# Time
HOURS_PER_DAY = 24
DAYS_PER_YEAR = 365
SECONDS_PER_HOUR = 3600

# Area
SQFT_PER_SQM = 10.7639
SQM_PER_SQFT = 1 / SQFT_PER_SQM


# ============================================================================
# FLOW / GEOMETRY
# ============================================================================

def pipe_area_sqft(diameter_in: float) -> float:
    """Internal cross-sectional area (ft²) for a diameter in inches."""
    d_ft = diameter_in / 12.0
    return math.pi * d_ft ** 2 / 4.0


def flow_velocity_fps(flow_gpm: float, diameter_in: float) -> float:
    """
    Mean flow velocity in a full pipe.

        V = Q / A,  Q in ft³/s, A in ft²
    """
    return (flow_gpm / GPM_PER_CFS) / pipe_area_sqft(diameter_in)


def velocity_head_ft(velocity_fps: float) -> float:
    """Velocity head V²/2g (ft)."""
    return velocity_fps ** 2 / (2 * G)


# ============================================================================
# TABLE HELPERS
# ============================================================================

def interpolate_table(table: Dict[float, float], x: float) -> Tuple[float, bool]:
    """
    Linearly interpolate a {x: y} table.

    Values outside the table clamp to the nearest end point.

    Returns:
        (value, clamped) tuple
    """
    keys = sorted(table.keys())

    if x <= keys[0]:
        return table[keys[0]], x < keys[0]
    if x >= keys[-1]:
        return table[keys[-1]], x > keys[-1]

    for i in range(len(keys) - 1):
        x1, x2 = keys[i], keys[i + 1]
        if x1 <= x <= x2:
            frac = (x - x1) / (x2 - x1)
            return table[x1] + frac * (table[x2] - table[x1]), False

    return table[keys[-1]], True


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; 0.0 for an empty sequence."""
    return sum(values) / len(values) if values else 0.0
