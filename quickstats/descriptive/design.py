"""
DescriptiveDesign: data wrapper for descriptive statistics.

Wraps one validated 1D sample, or two paired samples of equal length, and
provides metadata for the descriptive statistics pipeline. Validation
happens here, at the boundary; the selection and moment engines assume a
real floating-point array and only care about NaN.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from quickstats.core.validation import (
    check_array, check_1d, check_consistent_length,
)


def _to_vector(data: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    if hasattr(data, 'values') and not isinstance(data, np.ndarray):
        # pandas Series and similar
        data = data.values
    arr = check_array(data, name)
    check_1d(arr, name)
    return arr


@dataclass(frozen=True)
class DescriptiveDesign:
    """
    Design for descriptive statistics.

    Wraps a 1D float array that may contain NaN (missing values) and,
    for two-variable statistics, a second array of the same length.
    Infinite values are accepted. Empty samples are accepted; statistics
    on them are reported as undefined rather than rejected.

    Construction:
        DescriptiveDesign.from_array(x)
        DescriptiveDesign.from_pair(x, y)

    The wrapped arrays are the caller's own arrays whenever they are
    already floating point, so that in-place selection can be requested.
    Solvers copy before mutating unless told otherwise.
    """
    _x: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]] | None = None

    @classmethod
    def from_array(cls, x: ArrayLike) -> DescriptiveDesign:
        """
        Build DescriptiveDesign from a 1D array-like.

        Raises
        ------
        ValidationError
            If x is not real numeric data (strings, booleans, None
            entries, mixed objects, complex numbers).
        DimensionError
            If x is not one-dimensional.
        """
        return cls(_x=_to_vector(x, 'x'))

    @classmethod
    def from_pair(cls, x: ArrayLike, y: ArrayLike) -> DescriptiveDesign:
        """
        Build DescriptiveDesign from two paired 1D array-likes.

        Raises
        ------
        DimensionError
            If either input is not 1D or the lengths differ.
        """
        x_arr = _to_vector(x, 'x')
        y_arr = _to_vector(y, 'y')
        check_consistent_length(x_arr, y_arr, names=('x', 'y'))
        return cls(_x=x_arr, _y=y_arr)

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        """First (or only) sample, may contain NaN."""
        return self._x

    @property
    def y(self) -> NDArray[np.floating[Any]] | None:
        """Second sample for paired statistics, or None."""
        return self._y

    @property
    def n(self) -> int:
        """Number of observations (pairs, for paired designs)."""
        return int(self._x.shape[0])

    @property
    def is_paired(self) -> bool:
        return self._y is not None

    @property
    def n_missing(self) -> int:
        """Number of observations with a missing value in any variable."""
        missing = np.isnan(self._x)
        if self._y is not None:
            missing = missing | np.isnan(self._y)
        return int(np.sum(missing))

    @property
    def has_missing(self) -> bool:
        """Whether any observation has a missing value."""
        return self.n_missing > 0

    def __repr__(self) -> str:
        missing = f", missing={self.n_missing}" if self.has_missing else ""
        paired = ", paired" if self.is_paired else ""
        return f"DescriptiveDesign(n={self.n}{paired}{missing})"
