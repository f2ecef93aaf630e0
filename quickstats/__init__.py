"""
quickstats: selection-based descriptive statistics for Python.

Mean (optionally trimmed), median, mode, variance, standard deviation,
covariance and correlation over 1D numeric arrays, with an explicit
policy for missing (NaN) values.

Submodules:
    descriptive: the statistics
    core: results, exceptions, validation, timing
"""

__version__ = "0.1.0"

from quickstats import descriptive
from quickstats.descriptive import (
    describe,
    mean,
    median,
    mode,
    variance,
    sd,
    covariance,
    correlation,
    select,
)

__all__ = [
    "__version__",
    "descriptive",
    "describe",
    "mean",
    "median",
    "mode",
    "variance",
    "sd",
    "covariance",
    "correlation",
    "select",
]
