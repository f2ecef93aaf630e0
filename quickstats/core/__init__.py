"""
Core infrastructure for quickstats.

This module provides shared abstractions and utilities used by the
domain-specific submodules.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing utilities
"""

from quickstats.core.result import Result
from quickstats.core.exceptions import (
    QuickStatsError,
    ValidationError,
    DimensionError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "QuickStatsError",
    "ValidationError",
    "DimensionError",
]
