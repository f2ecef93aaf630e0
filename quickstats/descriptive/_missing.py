"""
Missing data handling for descriptive statistics.

Implements R-compatible missing data policies:
- 'everything': any NaN makes the statistic undefined (R default)
- 'complete.obs': drop NaN values; for paired data drop the whole pair

Counts, ranks and trim counts are always taken against the values that
remain after the policy is applied.
"""

from __future__ import annotations

from typing import Literal
import numpy as np
from numpy.typing import NDArray

from quickstats.core.validation import check_choice


UseMethod = Literal['everything', 'complete.obs']
USE_METHODS: tuple[str, ...] = ('everything', 'complete.obs')

MISSING_REASON = 'missing values present'


def check_use(use: str) -> str:
    """Validate the use= parameter."""
    return check_choice(use, USE_METHODS, 'use')


def count_missing(x: NDArray) -> int:
    """Number of NaN entries in a 1D array."""
    return int(np.sum(np.isnan(x)))


def apply_use_policy(x: NDArray, use: str) -> tuple[NDArray, int]:
    """
    Apply missing data policy to a single sequence.

    Parameters
    ----------
    x : NDArray
        1D data, may contain NaN.
    use : str
        'everything' or 'complete.obs'.

    Returns
    -------
    clean : NDArray
        For 'everything', x unchanged (NaN still present; the caller
        decides the result is undefined). For 'complete.obs', x without
        its NaN entries.
    n_dropped : int
        Number of values removed (always 0 for 'everything').
    """
    check_use(use)
    if use == 'everything':
        return x, 0

    mask = ~np.isnan(x)
    n_dropped = int(x.shape[0] - np.sum(mask))
    if n_dropped == 0:
        return x, 0
    return x[mask], n_dropped


def pairwise_mask(x: NDArray, y: NDArray) -> NDArray:
    """
    Boolean mask where both sequences are non-NaN.

    Parameters
    ----------
    x, y : NDArray
        1D arrays of the same length.
    """
    return ~(np.isnan(x) | np.isnan(y))


def apply_pair_policy(
    x: NDArray,
    y: NDArray,
    use: str,
) -> tuple[NDArray, NDArray, int]:
    """
    Apply missing data policy to paired sequences.

    Under 'complete.obs' a pair is kept only if both values are present.

    Returns
    -------
    x_clean, y_clean : NDArray
    n_dropped : int
        Number of pairs removed.
    """
    check_use(use)
    if use == 'everything':
        return x, y, 0

    mask = pairwise_mask(x, y)
    n_dropped = int(x.shape[0] - np.sum(mask))
    if n_dropped == 0:
        return x, y, 0
    return x[mask], y[mask], n_dropped
