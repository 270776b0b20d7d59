"""
NEC Reference Tables
====================

Static lookup data from NFPA 70 (National Electrical Code) used by the
compliance engine. All conductor data is copper.

Tables:
    250.122       - Equipment grounding conductor size by OCPD rating
    310.16        - Allowable ampacity at 60/75/90 °C
    310.15(B)(1)  - Ambient temperature correction factors (30 °C basis)
    310.15(B)(3)(a) - Adjustment for more than three current-carrying conductors
    240.6(A)      - Standard overcurrent device ratings
    Ch. 9 Table 4 - Conduit internal area (EMT, PVC Sch 40, RMC)
    Ch. 9 Table 5 - THWN-2 conductor area
    Ch. 9 Table 8 - Uncoated copper DC resistance
    Ch. 9 Table 9 - Conductor reactance (PVC/aluminum raceway)
"""

from typing import Dict, List, Tuple


# ==============================================================================
# CONDUCTOR SIZES
# Ordered smallest to largest; cross-section in kcmil (Chapter 9 Table 8)
# ==============================================================================

CONDUCTOR_AREA_KCMIL: Dict[str, float] = {
    "14 AWG": 4.11,
    "12 AWG": 6.53,
    "10 AWG": 10.38,
    "8 AWG": 16.51,
    "6 AWG": 26.24,
    "4 AWG": 41.74,
    "3 AWG": 52.62,
    "2 AWG": 66.36,
    "1 AWG": 83.69,
    "1/0 AWG": 105.6,
    "2/0 AWG": 133.1,
    "3/0 AWG": 167.8,
    "4/0 AWG": 211.6,
    "250 kcmil": 250.0,
    "300 kcmil": 300.0,
    "350 kcmil": 350.0,
    "400 kcmil": 400.0,
    "500 kcmil": 500.0,
    "600 kcmil": 600.0,
    "700 kcmil": 700.0,
    "750 kcmil": 750.0,
    "800 kcmil": 800.0,
}

CONDUCTOR_SIZES: List[str] = list(CONDUCTOR_AREA_KCMIL.keys())


# ==============================================================================
# TABLE 250.122 - EQUIPMENT GROUNDING CONDUCTOR (COPPER)
# (max OCPD rating A, minimum EGC size), ascending
# ==============================================================================

GROUNDING_CONDUCTOR_TABLE: List[Tuple[float, str]] = [
    (15, "14 AWG"),
    (20, "12 AWG"),
    (60, "10 AWG"),
    (100, "8 AWG"),
    (200, "6 AWG"),
    (300, "4 AWG"),
    (400, "3 AWG"),
    (500, "2 AWG"),
    (600, "1 AWG"),
    (800, "1/0 AWG"),
    (1000, "2/0 AWG"),
    (1200, "3/0 AWG"),
    (1600, "4/0 AWG"),
    (2000, "250 kcmil"),
    (2500, "350 kcmil"),
    (3000, "400 kcmil"),
    (4000, "500 kcmil"),
    (5000, "700 kcmil"),
    (6000, "800 kcmil"),
]


# ==============================================================================
# TABLE 310.16 - ALLOWABLE AMPACITY, COPPER, 30 °C AMBIENT
# {size: (60 °C, 75 °C, 90 °C)}
# ==============================================================================

AMPACITY_TABLE: Dict[str, Tuple[float, float, float]] = {
    "14 AWG": (15, 20, 25),
    "12 AWG": (20, 25, 30),
    "10 AWG": (30, 35, 40),
    "8 AWG": (40, 50, 55),
    "6 AWG": (55, 65, 75),
    "4 AWG": (70, 85, 95),
    "3 AWG": (85, 100, 115),
    "2 AWG": (95, 115, 130),
    "1 AWG": (110, 130, 145),
    "1/0 AWG": (125, 150, 170),
    "2/0 AWG": (145, 175, 195),
    "3/0 AWG": (165, 200, 225),
    "4/0 AWG": (195, 230, 260),
    "250 kcmil": (215, 255, 290),
    "300 kcmil": (240, 285, 320),
    "350 kcmil": (260, 310, 350),
    "400 kcmil": (280, 335, 380),
    "500 kcmil": (320, 380, 430),
    "600 kcmil": (350, 420, 475),
    "700 kcmil": (385, 460, 520),
    "750 kcmil": (400, 475, 535),
    "800 kcmil": (410, 490, 555),
}

TERMINAL_RATINGS = (60, 75, 90)


# ==============================================================================
# TABLE 310.15(B)(1) - AMBIENT TEMPERATURE CORRECTION (30 °C BASIS)
# (low °C, high °C, {rating: factor}); rows cover the 21–50 °C lookup range
# ==============================================================================

TEMPERATURE_CORRECTION_TABLE: List[Tuple[int, int, Dict[int, float]]] = [
    (21, 25, {60: 1.08, 75: 1.05, 90: 1.04}),
    (26, 30, {60: 1.00, 75: 1.00, 90: 1.00}),
    (31, 35, {60: 0.91, 75: 0.94, 90: 0.96}),
    (36, 40, {60: 0.82, 75: 0.88, 90: 0.91}),
    (41, 45, {60: 0.71, 75: 0.82, 90: 0.87}),
    (46, 50, {60: 0.58, 75: 0.75, 90: 0.82}),
]

TEMPERATURE_TABLE_MIN_C = 21
TEMPERATURE_TABLE_MAX_C = 50


# ==============================================================================
# TABLE 310.15(B)(3)(a) - MORE THAN THREE CURRENT-CARRYING CONDUCTORS
# (low count, high count, factor); lookup clamped to 3–20 conductors
# ==============================================================================

CONDUCTOR_ADJUSTMENT_TABLE: List[Tuple[int, int, float]] = [
    (1, 3, 1.00),
    (4, 6, 0.80),
    (7, 9, 0.70),
    (10, 20, 0.50),
]

CONDUCTOR_COUNT_MIN = 3
CONDUCTOR_COUNT_MAX = 20


# ==============================================================================
# 240.6(A) - STANDARD AMPERE RATINGS FOR FUSES AND CIRCUIT BREAKERS
# ==============================================================================

STANDARD_OCPD_RATINGS: List[int] = [
    15, 20, 25, 30, 35, 40, 45, 50, 60, 70, 80, 90, 100, 110, 125, 150, 175,
    200, 225, 250, 300, 350, 400, 450, 500, 600, 700, 800, 1000, 1200, 1600,
    2000, 2500, 3000, 4000, 5000, 6000,
]


# ==============================================================================
# CHAPTER 9 TABLE 5 - THWN-2 APPROXIMATE AREA (in²)
# ==============================================================================

THWN2_AREA_SQIN: Dict[str, float] = {
    "14 AWG": 0.0097,
    "12 AWG": 0.0133,
    "10 AWG": 0.0211,
    "8 AWG": 0.0366,
    "6 AWG": 0.0507,
    "4 AWG": 0.0824,
    "3 AWG": 0.0973,
    "2 AWG": 0.1158,
    "1 AWG": 0.1562,
    "1/0 AWG": 0.1855,
    "2/0 AWG": 0.2223,
    "3/0 AWG": 0.2679,
    "4/0 AWG": 0.3237,
    "250 kcmil": 0.3970,
    "300 kcmil": 0.4608,
    "350 kcmil": 0.5242,
    "400 kcmil": 0.5863,
    "500 kcmil": 0.7073,
}

DEFAULT_WIRE_AREA_GAUGE = "14 AWG"


# ==============================================================================
# CHAPTER 9 TABLE 4 - CONDUIT TOTAL INTERNAL AREA (in², 100 %)
# {conduit type: [(trade size, area), ...]} ascending
# ==============================================================================

CONDUIT_AREA_SQIN: Dict[str, List[Tuple[str, float]]] = {
    "EMT": [
        ('1/2"', 0.304),
        ('3/4"', 0.533),
        ('1"', 0.864),
        ('1-1/4"', 1.496),
        ('1-1/2"', 2.036),
        ('2"', 3.356),
        ('2-1/2"', 5.858),
        ('3"', 8.846),
        ('3-1/2"', 11.545),
        ('4"', 14.753),
    ],
    "PVC": [
        ('1/2"', 0.285),
        ('3/4"', 0.508),
        ('1"', 0.832),
        ('1-1/4"', 1.453),
        ('1-1/2"', 1.986),
        ('2"', 3.291),
        ('2-1/2"', 4.695),
        ('3"', 7.268),
        ('3-1/2"', 9.737),
        ('4"', 12.554),
    ],
    "RMC": [
        ('1/2"', 0.314),
        ('3/4"', 0.549),
        ('1"', 0.887),
        ('1-1/4"', 1.526),
        ('1-1/2"', 2.071),
        ('2"', 3.408),
        ('2-1/2"', 4.866),
        ('3"', 7.499),
        ('3-1/2"', 10.010),
        ('4"', 12.882),
    ],
}

DEFAULT_CONDUIT_TYPE = "EMT"
MAX_CONDUIT_FILL_PCT = 40.0


# ==============================================================================
# CHAPTER 9 TABLE 8 - UNCOATED COPPER DC RESISTANCE (Ω / 1000 ft at 75 °C)
# CHAPTER 9 TABLE 9 - INDUCTIVE REACTANCE XL (Ω / 1000 ft, PVC conduit)
# ==============================================================================

COPPER_RESISTANCE: Dict[str, float] = {
    "14 AWG": 3.07,
    "12 AWG": 1.93,
    "10 AWG": 1.21,
    "8 AWG": 0.764,
    "6 AWG": 0.491,
    "4 AWG": 0.308,
    "3 AWG": 0.245,
    "2 AWG": 0.194,
    "1 AWG": 0.154,
    "1/0 AWG": 0.122,
    "2/0 AWG": 0.0967,
    "3/0 AWG": 0.0766,
    "4/0 AWG": 0.0608,
    "250 kcmil": 0.0515,
    "300 kcmil": 0.0429,
    "350 kcmil": 0.0367,
    "400 kcmil": 0.0321,
    "500 kcmil": 0.0258,
}

CONDUCTOR_REACTANCE: Dict[str, float] = {
    "14 AWG": 0.058,
    "12 AWG": 0.054,
    "10 AWG": 0.050,
    "8 AWG": 0.052,
    "6 AWG": 0.051,
    "4 AWG": 0.048,
    "3 AWG": 0.047,
    "2 AWG": 0.045,
    "1 AWG": 0.046,
    "1/0 AWG": 0.044,
    "2/0 AWG": 0.043,
    "3/0 AWG": 0.042,
    "4/0 AWG": 0.041,
    "250 kcmil": 0.041,
    "300 kcmil": 0.041,
    "350 kcmil": 0.040,
    "400 kcmil": 0.040,
    "500 kcmil": 0.039,
}

DEFAULT_RESISTANCE_GAUGE = "12 AWG"
MAX_VOLTAGE_DROP_PCT = 3.0


# ==============================================================================
# EQUIPMENT CLASSIFICATION
# ==============================================================================

MOTOR_EQUIPMENT_TYPES = {
    "hvac", "fan", "circulation-fan", "oscillating-fan", "exhaust-fan",
    "pump", "irrigation", "chiller",
}
AC_EQUIPMENT_TYPES = {"hvac", "chiller", "dehumidifier"}
GFCI_EQUIPMENT_TYPES = {"irrigation", "dehumidifier", "humidifier"}
NON_CONTINUOUS_EQUIPMENT_TYPES = {"irrigation", "co2-system"}

# Demand factors by equipment type (fraction of connected load)
DEMAND_FACTORS: Dict[str, float] = {
    "lighting": 1.0,
    "hvac": 1.0,
    "chiller": 1.0,
    "boiler": 1.0,
    "circulation-fan": 0.8,
    "oscillating-fan": 0.75,
    "exhaust-fan": 0.85,
    "dehumidifier": 0.9,
    "humidifier": 0.85,
    "irrigation": 0.7,
    "co2-system": 0.6,
    "controller": 1.0,
    "sensor": 1.0,
    "ups": 1.0,
    "transformer": 1.0,
    "emergency": 1.0,
    "monitor": 1.0,
    "other": 0.8,
}

DEFAULT_DEMAND_FACTOR = 0.8
