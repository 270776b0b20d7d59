"""
Logging configuration for growcalc.

Provides consistent log formatting across all modules. Level, stream and
format come from the ``logging`` section of config.yaml.
"""

import logging
import sys
from typing import Dict, Optional, TextIO

from growcalc.core.config import get_config_value

DEFAULT_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

_loggers: Dict[str, logging.Logger] = {}


def configured_level() -> int:
    """Log level from config.yaml; INFO when missing or unrecognized."""
    value = get_config_value("logging", "level", default="INFO")
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).upper())
    return level if isinstance(level, int) else logging.INFO


def _configured_stream() -> TextIO:
    name = str(get_config_value("logging", "stream", default="stdout")).lower()
    return sys.stderr if name == "stderr" else sys.stdout


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a configured logger for a module.

    Args:
        name: Logger name (e.g., 'growcalc.engineering.irrigation')
        level: Logging level (default: logging.level from config.yaml)

    Returns:
        Configured logger
    """
    if name in _loggers:
        return _loggers[name]

    if level is None:
        level = configured_level()

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(_configured_stream())
        handler.setLevel(level)

        formatter = logging.Formatter(
            get_config_value("logging", "format", default=DEFAULT_FORMAT),
            datefmt=get_config_value("logging", "datefmt", default=DEFAULT_DATEFMT),
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    _loggers[name] = logger
    return logger
