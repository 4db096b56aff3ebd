"""
ECIES Configuration Package

Default algorithm choices, named schemes, environment overrides and
runtime logging configuration.
"""

from .ecies_config import (
    ECIES_CONSTANTS,
    ECIES_SCHEMES,
    configure_logging,
    get_default_parameters,
    get_scheme_parameters,
    set_log_level,
)

__all__ = [
    'ECIES_CONSTANTS',
    'ECIES_SCHEMES',
    'configure_logging',
    'set_log_level',
    'get_default_parameters',
    'get_scheme_parameters',
]
