"""
growcalc Core - Shared services for all modules.

Usage:
    from growcalc.core import get_config, get_logger, CALC_DEFAULTS
"""

from growcalc.core.config import get_config, get_config_value, CALC_DEFAULTS
from growcalc.core.logging import get_logger

__all__ = [
    "get_config",
    "get_config_value",
    "CALC_DEFAULTS",
    "get_logger",
]
