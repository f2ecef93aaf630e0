"""
Descriptive statistics module.

Order statistics are computed with quickselect and moment statistics with
a single-pass accumulator, over 1D numeric data that may contain NaN.

Public API:
    describe(x)           - mean, median, mode, variance and sd at once
    mean(x, trim)         - Arithmetic mean, optionally trimmed
    median(x)             - Median
    mode(x)               - Most frequent value
    variance(x)           - Variance (Bessel-corrected by default)
    sd(x)                 - Standard deviation
    covariance(x, y)      - Covariance of paired data
    correlation(x, y)     - Pearson correlation
    select(buffer, k)     - k-th smallest value, in place
"""

from quickstats.descriptive.design import DescriptiveDesign
from quickstats.descriptive.solution import DescriptiveParams, DescriptiveSolution
from quickstats.descriptive.solvers import (
    describe,
    mean,
    median,
    mode,
    variance,
    sd,
    covariance,
    correlation,
)
from quickstats.descriptive._selection import select

__all__ = [
    "describe",
    "mean",
    "median",
    "mode",
    "variance",
    "sd",
    "covariance",
    "correlation",
    "select",
    "DescriptiveDesign",
    "DescriptiveParams",
    "DescriptiveSolution",
]
