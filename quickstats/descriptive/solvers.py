"""
Solver dispatch for descriptive statistics.

Provides describe() as the comprehensive entry point, plus individual
functions: mean(), median(), mode(), variance(), sd(), covariance(),
correlation().

Every function validates its options before looking at the data, and
returns a DescriptiveSolution. Undefined results (empty input, too few
observations, missing values under use='everything', ...) are reported on
the solution, never raised.
"""

from __future__ import annotations

from typing import Literal
from numpy.typing import ArrayLike

from quickstats.core.validation import check_choice, check_fraction
from quickstats.descriptive.design import DescriptiveDesign
from quickstats.descriptive.solution import DescriptiveSolution
from quickstats.descriptive.backends.cpu import CPUDescriptiveBackend
from quickstats.descriptive._missing import UseMethod, check_use


TiesMethod = Literal['first', 'none']
TIES_METHODS: tuple[str, ...] = ('first', 'none')


def _ensure_design(data: ArrayLike | DescriptiveDesign) -> DescriptiveDesign:
    """Convert raw array to DescriptiveDesign if needed."""
    if isinstance(data, DescriptiveDesign):
        return data
    return DescriptiveDesign.from_array(data)


def _ensure_pair(
    x: ArrayLike | DescriptiveDesign, y: ArrayLike | DescriptiveDesign,
) -> DescriptiveDesign:
    """Pair two samples; a DescriptiveDesign contributes its x."""
    if isinstance(x, DescriptiveDesign):
        x = x.x
    if isinstance(y, DescriptiveDesign):
        y = y.x
    return DescriptiveDesign.from_pair(x, y)


def _get_backend() -> CPUDescriptiveBackend:
    return CPUDescriptiveBackend()


def describe(
    data: ArrayLike | DescriptiveDesign,
    *,
    trim: float = 0.0,
    population: bool = False,
    ties: TiesMethod = 'first',
    use: UseMethod = 'everything',
) -> DescriptiveSolution:
    """
    Compute all single-sample statistics at once.

    Computes: mean (trimmed if trim > 0), median, mode, variance and
    standard deviation. The input is never modified.

    Parameters
    ----------
    data : array-like or DescriptiveDesign
        1D numeric data.
    trim : float
        Fraction trimmed from each end for the mean, 0 <= trim < 0.5.
    population : bool
        Divide by n instead of n - 1 for variance and sd.
    ties : str
        Mode tie policy, see mode().
    use : str
        Missing data handling. 'everything' (NaN makes a statistic
        undefined) or 'complete.obs' (NaN values are dropped).

    Returns
    -------
    DescriptiveSolution with all five statistics populated.
    """
    trim = check_fraction(trim, 'trim')
    check_choice(ties, TIES_METHODS, 'ties')
    check_use(use)
    design = _ensure_design(data)

    result = _get_backend().solve(
        design,
        compute={'mean', 'median', 'mode', 'variance', 'sd'},
        use=use,
        trim=trim,
        population=population,
        ties=ties,
    )
    return DescriptiveSolution(_result=result, _design=design)


def mean(
    x: ArrayLike | DescriptiveDesign,
    trim: float = 0.0,
    *,
    use: UseMethod = 'everything',
    overwrite_input: bool = False,
) -> DescriptiveSolution:
    """
    Arithmetic mean, optionally trimmed. Matches R mean(x, trim).

    With trim > 0, floor(n * trim) values are dropped from each end of
    the sorted data before averaging. The trim points are found with
    quickselect, so the data are never fully sorted.

    Parameters
    ----------
    x : array-like or DescriptiveDesign
        1D numeric data.
    trim : float
        Fraction to trim from each end, 0 <= trim < 0.5. Unlike R, values
        of 0.5 and above are rejected rather than returning the median.
    use : str
        Missing data handling. Under 'complete.obs' the trim count is
        taken against the number of non-missing values.
    overwrite_input : bool
        If True and x is a writeable float array, the trimmed mean
        partially reorders x in place instead of working on a copy.

    Returns
    -------
    DescriptiveSolution; ``.value`` is the mean, or None for empty input.
    A single observation is its own mean whatever the trim.

    Raises
    ------
    ValidationError
        If trim is outside [0, 0.5) or x is not numeric.
    """
    trim = check_fraction(trim, 'trim')
    check_use(use)
    design = _ensure_design(x)

    result = _get_backend().solve(
        design,
        compute={'mean'},
        use=use,
        trim=trim,
        overwrite_input=overwrite_input,
    )
    return DescriptiveSolution(_result=result, _design=design)


def median(
    x: ArrayLike | DescriptiveDesign,
    *,
    use: UseMethod = 'everything',
    overwrite_input: bool = False,
) -> DescriptiveSolution:
    """
    Median via quickselect. Matches R median().

    Odd n takes one selection of rank n // 2; even n averages ranks
    n/2 - 1 and n/2.

    Parameters
    ----------
    x : array-like or DescriptiveDesign
        1D numeric data.
    use : str
        Missing data handling. Under 'complete.obs' the ranks are taken
        against the number of non-missing values.
    overwrite_input : bool
        If True and x is a writeable float array, x is reordered in place
        (as numpy.median(..., overwrite_input=True)). Otherwise selection
        runs on a private copy and x is left untouched.

    Returns
    -------
    DescriptiveSolution; ``.value`` is the median, or None for empty input.
    """
    check_use(use)
    design = _ensure_design(x)

    result = _get_backend().solve(
        design,
        compute={'median'},
        use=use,
        overwrite_input=overwrite_input,
    )
    return DescriptiveSolution(_result=result, _design=design)


def mode(
    x: ArrayLike | DescriptiveDesign,
    *,
    ties: TiesMethod = 'first',
    use: UseMethod = 'everything',
) -> DescriptiveSolution:
    """
    Most frequent value.

    Parameters
    ----------
    x : array-like or DescriptiveDesign
        1D numeric data.
    ties : str
        'first': among values sharing the highest count, the first one to
        reach that count while scanning left to right wins.
        'none': a shared highest count means there is no mode.
    use : str
        Missing data handling.

    Returns
    -------
    DescriptiveSolution; ``.value`` is the mode, or None when there is no
    mode (empty input, or a tie under ties='none').

    Examples
    --------
    >>> mode([1, 1, 1, 3, 2, 1, 5, 3]).value
    1.0
    >>> mode([1, 2, 3, 4, 5]).value
    1.0
    >>> mode([1, 2, 3, 4, 5], ties='none').value is None
    True
    """
    check_choice(ties, TIES_METHODS, 'ties')
    check_use(use)
    design = _ensure_design(x)

    result = _get_backend().solve(design, compute={'mode'}, use=use, ties=ties)
    return DescriptiveSolution(_result=result, _design=design)


def variance(
    x: ArrayLike | DescriptiveDesign,
    y: ArrayLike | None = None,
    *,
    population: bool = False,
    use: UseMethod = 'everything',
) -> DescriptiveSolution:
    """
    Variance from the single-pass shortcut formula. Matches R var().

    Parameters
    ----------
    x : array-like or DescriptiveDesign
        1D numeric data.
    y : array-like, optional
        Second variable. If given, returns the covariance of x and y,
        as covariance(x, y) would.
    population : bool
        Divide by n instead of n - 1 (Bessel's correction).
    use : str
        Missing data handling.

    Returns
    -------
    DescriptiveSolution; ``.value`` is None for fewer than 2 observations.
    """
    if y is not None:
        return covariance(x, y, population=population, use=use)

    check_use(use)
    design = _ensure_design(x)

    result = _get_backend().solve(
        design, compute={'variance'}, use=use, population=population,
    )
    return DescriptiveSolution(_result=result, _design=design)


def sd(
    x: ArrayLike | DescriptiveDesign,
    *,
    population: bool = False,
    use: UseMethod = 'everything',
) -> DescriptiveSolution:
    """
    Standard deviation, the square root of variance(). Matches R sd().

    Parameters
    ----------
    x : array-like or DescriptiveDesign
        1D numeric data.
    population : bool
        Divide by n instead of n - 1.
    use : str
        Missing data handling.

    Returns
    -------
    DescriptiveSolution; ``.value`` is None for fewer than 2 observations.
    """
    check_use(use)
    design = _ensure_design(x)

    result = _get_backend().solve(
        design, compute={'sd'}, use=use, population=population,
    )
    return DescriptiveSolution(_result=result, _design=design)


def covariance(
    x: ArrayLike | DescriptiveDesign,
    y: ArrayLike | DescriptiveDesign,
    *,
    population: bool = False,
    use: UseMethod = 'everything',
) -> DescriptiveSolution:
    """
    Covariance of two paired sequences. Matches R cov(x, y).

    Parameters
    ----------
    x, y : array-like or DescriptiveDesign
        1D numeric data of equal length. A design contributes its x.
    population : bool
        Divide by n instead of n - 1.
    use : str
        Missing data handling. 'complete.obs' drops every pair in which
        either value is missing.

    Returns
    -------
    DescriptiveSolution; ``.value`` is None for fewer than 2 pairs.

    Raises
    ------
    DimensionError
        If x and y differ in length. Nothing is truncated.
    """
    check_use(use)
    design = _ensure_pair(x, y)

    result = _get_backend().solve(
        design, compute={'covariance'}, use=use, population=population,
    )
    return DescriptiveSolution(_result=result, _design=design)


def correlation(
    x: ArrayLike | DescriptiveDesign,
    y: ArrayLike | DescriptiveDesign,
    *,
    use: UseMethod = 'everything',
) -> DescriptiveSolution:
    """
    Pearson correlation of two paired sequences. Matches R cor(x, y).

    cov(x, y) / (sd(x) * sd(y)), from one pass over the pairs. The result
    lies in [-1, 1] and is symmetric in x and y.

    Parameters
    ----------
    x, y : array-like or DescriptiveDesign
        1D numeric data of equal length.
    use : str
        Missing data handling.

    Returns
    -------
    DescriptiveSolution; ``.value`` is None for fewer than 2 pairs or when
    either sequence is constant.

    Raises
    ------
    DimensionError
        If x and y differ in length.
    """
    check_use(use)
    design = _ensure_pair(x, y)

    result = _get_backend().solve(design, compute={'correlation'}, use=use)
    return DescriptiveSolution(_result=result, _design=design)
