"""
Utils Package

Logging helpers.
"""

from .logger import ECIESLogger, parse_level

__all__ = [
    "ECIESLogger",
    "parse_level",
]
