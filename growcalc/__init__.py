"""
growcalc - Horticultural Engineering Calculations

Deterministic calculation engines for controlled-environment growing
facilities.

Modules:
    core        - Shared services (config, logging, output)
    engineering - Calculation library and discipline calculators
                    electrical  - NEC branch circuit, grounding, conduit, voltage drop
                    irrigation  - Pipe hydraulics, water hammer, uniformity
                    climate     - Greenhouse heating, cooling, lighting, CO2
                    fertigation - Nutrient targets and deficiency diagnosis
    cli         - Typer command line entry point
"""

__version__ = "0.1.0"
