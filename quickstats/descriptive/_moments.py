"""
Single-pass moment accumulation.

Computes the sums needed by mean, variance, covariance and correlation in
one forward pass over the data, then applies the shortcut identities

    Var(X)    = (sum(x^2) - n * mean_x^2)          / d
    Cov(X, Y) = (sum(x*y) - n * mean_x * mean_y)   / d

with d = n (population) or d = n - 1 (sample, Bessel-corrected).

The shortcut form can lose precision through cancellation when the data
have a large magnitude relative to their spread. A numerator that comes
out slightly negative is clipped to zero.

Accumulation runs over 4-element lanes (the largest multiple-of-4 prefix
reshaped to (m, 4), summed per group) followed by a scalar loop over the
remainder. The summation order therefore differs from a plain left-to-right
sum; results agree to rounding, not bit for bit.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any

import numpy as np
from numpy.typing import NDArray


LANES = 4


def _split_lanes(x: NDArray) -> tuple[NDArray, NDArray]:
    """Split x into an (m, LANES) block and the scalar remainder."""
    n_full = (len(x) // LANES) * LANES
    return x[:n_full].reshape(-1, LANES), x[n_full:]


def _grouped_sum(block: NDArray) -> float:
    # Per-group partial sums first, then across groups.
    return float(np.sum(np.sum(block, axis=1)))


@dataclass(frozen=True)
class Moments:
    """Accumulated sums of a single sequence."""
    n: int
    total: float
    total_sq: float

    @property
    def mean(self) -> float:
        if self.n == 0:
            return math.nan
        return self.total / self.n

    @property
    def centered_sq(self) -> float:
        """sum((x - mean)^2) via the shortcut identity, before clipping."""
        if self.n == 0:
            return math.nan
        mean = self.total / self.n
        return self.total_sq - self.n * mean * mean

    def variance(self, population: bool = False) -> float:
        """Shortcut variance; NaN when n < 2."""
        if self.n < 2:
            return math.nan
        divisor = self.n if population else self.n - 1
        numerator = self.centered_sq
        if numerator < 0:
            numerator = 0.0
        return numerator / divisor


@dataclass(frozen=True)
class CrossMoments:
    """Accumulated sums and cross-products of two paired sequences."""
    n: int
    sum_x: float
    sum_y: float
    sum_xy: float
    sum_xx: float
    sum_yy: float

    def _centered(self, cross: float, sum_a: float, sum_b: float) -> float:
        if self.n == 0:
            return math.nan
        mean_a = sum_a / self.n
        mean_b = sum_b / self.n
        return cross - self.n * mean_a * mean_b

    @property
    def centered_xy(self) -> float:
        return self._centered(self.sum_xy, self.sum_x, self.sum_y)

    @property
    def centered_xx(self) -> float:
        return self._centered(self.sum_xx, self.sum_x, self.sum_x)

    @property
    def centered_yy(self) -> float:
        return self._centered(self.sum_yy, self.sum_y, self.sum_y)

    def covariance(self, population: bool = False) -> float:
        """Shortcut covariance; NaN when n < 2."""
        if self.n < 2:
            return math.nan
        divisor = self.n if population else self.n - 1
        return self.centered_xy / divisor

    def correlation(self) -> float:
        """
        Pearson correlation, clipped to [-1, 1].

        The population/sample divisor cancels between numerator and
        denominator. NaN when n < 2 or when either sequence is constant.
        """
        if self.n < 2:
            return math.nan
        sxx = self.centered_xx
        syy = self.centered_yy
        if sxx < 0:
            sxx = 0.0
        if syy < 0:
            syy = 0.0

        denominator = math.sqrt(sxx * syy)
        # Also rejects NaN from non-finite input
        if not denominator > 0:
            return math.nan

        r = self.centered_xy / denominator
        if math.isnan(r):
            return r
        return min(1.0, max(-1.0, r))


def block_sum(x: NDArray[np.floating[Any]]) -> float:
    """Sum of x, in 4-element groups plus a scalar remainder."""
    x = np.asarray(x, dtype=np.float64)
    block, rest = _split_lanes(x)
    total = _grouped_sum(block)
    for value in rest:
        total += float(value)
    return total


def accumulate(x: NDArray[np.floating[Any]]) -> Moments:
    """
    Accumulate n, sum(x) and sum(x^2) in one pass.

    Parameters
    ----------
    x : NDArray
        1D float array. NaN propagates into the sums.
    """
    x = np.asarray(x, dtype=np.float64)
    block, rest = _split_lanes(x)

    total = _grouped_sum(block)
    total_sq = _grouped_sum(block * block)
    for value in rest:
        value = float(value)
        total += value
        total_sq += value * value

    return Moments(n=len(x), total=total, total_sq=total_sq)


def accumulate_pair(
    x: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
) -> CrossMoments:
    """
    Accumulate the sums and cross-products of two paired sequences.

    x and y must have the same length; that is checked by the caller.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    bx, rx = _split_lanes(x)
    by, ry = _split_lanes(y)

    sum_x = _grouped_sum(bx)
    sum_y = _grouped_sum(by)
    sum_xy = _grouped_sum(bx * by)
    sum_xx = _grouped_sum(bx * bx)
    sum_yy = _grouped_sum(by * by)
    for xi, yi in zip(rx, ry):
        xi = float(xi)
        yi = float(yi)
        sum_x += xi
        sum_y += yi
        sum_xy += xi * yi
        sum_xx += xi * xi
        sum_yy += yi * yi

    return CrossMoments(
        n=len(x),
        sum_x=sum_x,
        sum_y=sum_y,
        sum_xy=sum_xy,
        sum_xx=sum_xx,
        sum_yy=sum_yy,
    )
