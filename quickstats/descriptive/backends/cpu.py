"""
CPU reference backend for descriptive statistics.

Order statistics (median, trimmed mean) go through quickselect; moment
statistics (mean, variance, sd, covariance, correlation) go through the
single-pass moment engine.
"""

from __future__ import annotations

import math
import numpy as np
from numpy.typing import NDArray

from quickstats.core.exceptions import ValidationError
from quickstats.core.result import Result
from quickstats.core.compute.timing import Timer
from quickstats.descriptive.design import DescriptiveDesign
from quickstats.descriptive.solution import DescriptiveParams, STATISTICS
from quickstats.descriptive._missing import (
    MISSING_REASON, apply_use_policy, apply_pair_policy, check_use, count_missing,
)
from quickstats.descriptive._moments import (
    Moments, CrossMoments, accumulate, accumulate_pair, block_sum,
)
from quickstats.descriptive._selection import select, segregate_invalid


EMPTY_REASON = 'empty sequence'
TOO_FEW_REASON = 'fewer than 2 observations'
ZERO_VARIANCE_REASON = 'zero variance'
NO_UNIQUE_MODE_REASON = 'no unique mode'
NON_FINITE_REASON = 'non-finite arithmetic'

PAIRED_STATISTICS = frozenset({'covariance', 'correlation'})

# (value, reason): exactly one of the two is None
Outcome = tuple[float | None, str | None]


def _is_constant(x: NDArray) -> bool:
    """Every value equal and finite; the shortcut sums need not cancel exactly."""
    return x.shape[0] > 0 and bool(np.isfinite(x[0])) and x.min() == x.max()


def _checked(value: float) -> Outcome:
    """NaN coming out of arithmetic on valid input means inf - inf or similar."""
    if math.isnan(value):
        return None, NON_FINITE_REASON
    return float(value), None


class CPUDescriptiveBackend:
    """CPU reference backend for descriptive statistics."""

    @property
    def name(self) -> str:
        return 'cpu_descriptive'

    def solve(
        self,
        design: DescriptiveDesign,
        *,
        compute: set[str],
        use: str = 'everything',
        trim: float = 0.0,
        population: bool = False,
        ties: str = 'first',
        overwrite_input: bool = False,
    ) -> Result[DescriptiveParams]:
        """
        Compute requested descriptive statistics.

        Parameters
        ----------
        design : DescriptiveDesign
        compute : set of str
            Which statistics to compute. Valid entries:
            'mean', 'median', 'mode', 'variance', 'sd', 'covariance',
            'correlation'. The last two need a paired design.
        use : str
            Missing data policy.
        trim : float
            Fraction trimmed from each end for the mean, 0 <= trim < 0.5.
            Validated by the caller.
        population : bool
            Divide by n instead of n - 1 in variance, sd and covariance.
        ties : str
            Mode tie policy, 'first' or 'none'.
        overwrite_input : bool
            Let selection permute design.x in place when it is a writeable
            array, instead of working on a copy.
        """
        unknown = set(compute) - set(STATISTICS)
        if unknown:
            raise ValidationError(
                f"Unknown statistics: {sorted(unknown)}. Valid: {list(STATISTICS)}"
            )
        if PAIRED_STATISTICS & set(compute) and not design.is_paired:
            raise ValidationError(
                f"{sorted(PAIRED_STATISTICS & set(compute))} require paired data (x and y)"
            )
        check_use(use)

        timer = Timer()
        timer.start()

        x = design.x
        warnings_list: list[str] = []
        values: dict[str, float | None] = {}
        undefined: dict[str, str] = {}
        algorithms: dict[str, str] = {}

        def record(name: str, outcome: Outcome) -> None:
            value, reason = outcome
            values[name] = value
            if reason is not None:
                undefined[name] = reason

        if design.is_paired:
            n_dropped = design.n_missing if use == 'complete.obs' else 0
        else:
            n_dropped = count_missing(x) if use == 'complete.obs' else 0
        if n_dropped:
            unit = 'incomplete pairs' if design.is_paired else 'missing values'
            warnings_list.append(f"dropped {n_dropped} {unit}")

        if 'mean' in compute:
            with timer.section('mean'):
                record('mean', self._compute_mean(x, use, trim, overwrite_input))
            algorithms['mean'] = 'quickselect' if trim > 0 else 'single_pass_moments'

        if 'median' in compute:
            with timer.section('median'):
                record('median', self._compute_median(x, use, overwrite_input))
            algorithms['median'] = 'quickselect'

        if 'mode' in compute:
            with timer.section('mode'):
                record('mode', self._compute_mode(x, use, ties))
            algorithms['mode'] = 'frequency_table'

        moments: Moments | None = None
        if 'variance' in compute or 'sd' in compute:
            with timer.section('moments'):
                moments, reason, constant = self._accumulate(x, use)
            if moments is not None and not constant and moments.centered_sq < 0:
                warnings_list.append(
                    f"variance numerator {moments.centered_sq:.3e} was negative "
                    f"from cancellation; clipped to 0"
                )
            variance = self._variance(moments, reason, population, constant)
            if 'variance' in compute:
                record('variance', variance)
                algorithms['variance'] = 'single_pass_moments'
            if 'sd' in compute:
                v, r = variance
                record('sd', (math.sqrt(v), None) if v is not None else (None, r))
                algorithms['sd'] = 'single_pass_moments'

        if PAIRED_STATISTICS & set(compute):
            with timer.section('cross_moments'):
                cross, reason, constant = self._accumulate_pair(x, design.y, use)
            if 'covariance' in compute:
                record('covariance', self._covariance(cross, reason, population, constant))
                algorithms['covariance'] = 'single_pass_moments'
            if 'correlation' in compute:
                record('correlation', self._correlation(cross, reason, constant))
                algorithms['correlation'] = 'single_pass_moments'

        timer.stop()

        params = DescriptiveParams(
            **values,
            n_obs=design.n,
            n_used=design.n - n_dropped,
            trim=trim if 'mean' in compute else None,
            population=population if {'variance', 'sd', 'covariance'} & set(compute) else None,
            undefined=undefined,
        )

        return Result(
            params=params,
            info={
                'use': use,
                'computed': [s for s in STATISTICS if s in compute],
                'algorithms': algorithms,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=warnings_list,
        )

    # --- Selection-based statistics ---

    def _working_buffer(self, x: NDArray, overwrite_input: bool):
        """
        Buffer for quickselect to permute.

        The caller's array itself when overwrite_input is set and it is
        writeable, otherwise a private list copy.
        """
        if overwrite_input and x.flags.writeable:
            return x
        return x.tolist()

    def _valid_prefix(self, buffer, use: str) -> int:
        """Length of the region selection may use; NaN moved past it."""
        n = len(buffer)
        if use == 'complete.obs':
            n = segregate_invalid(buffer, 0, n - 1)
        return n

    def _compute_mean(
        self, x: NDArray, use: str, trim: float, overwrite_input: bool,
    ) -> Outcome:
        """
        Arithmetic mean, trimmed when trim > 0.

        trim_count = floor(n * trim) values are discarded from each end,
        with n the number of valid values.
        """
        if use == 'everything' and np.any(np.isnan(x)):
            return None, MISSING_REASON

        if trim == 0:
            clean, _ = apply_use_policy(x, use)
            if clean.shape[0] == 0:
                return None, EMPTY_REASON
            return _checked(block_sum(clean) / clean.shape[0])

        buffer = self._working_buffer(x, overwrite_input)
        n = self._valid_prefix(buffer, use)
        if n == 0:
            return None, EMPTY_REASON
        if n == 1:
            return _checked(float(buffer[0]))

        trim_count = math.floor(n * trim)
        low = trim_count
        high = n - trim_count

        # Bring both trim points into place; [low, high) then holds exactly
        # the untrimmed values, in no particular order.
        select(buffer, low, 0, n - 1)
        select(buffer, high - 1, low, n - 1)

        middle = np.asarray(buffer[low:high], dtype=np.float64)
        return _checked(block_sum(middle) / (high - low))

    def _compute_median(self, x: NDArray, use: str, overwrite_input: bool) -> Outcome:
        """Median via one (odd n) or two (even n) selections."""
        if use == 'everything' and np.any(np.isnan(x)):
            return None, MISSING_REASON

        buffer = self._working_buffer(x, overwrite_input)
        n = self._valid_prefix(buffer, use)
        if n == 0:
            return None, EMPTY_REASON

        half = n // 2
        if n % 2 == 1:
            return _checked(float(select(buffer, half, 0, n - 1)))

        lower = float(select(buffer, half - 1, 0, n - 1))
        # Everything from index half on is >= lower now.
        upper = float(select(buffer, half, half, n - 1))
        return _checked((lower + upper) / 2)

    # --- Frequency-based statistics ---

    def _compute_mode(self, x: NDArray, use: str, ties: str) -> Outcome:
        """
        Most frequent value, from one pass over the data.

        With ties='first' the first value to reach the highest count wins.
        With ties='none' a shared highest count gives no mode.
        """
        if use == 'everything' and np.any(np.isnan(x)):
            return None, MISSING_REASON

        clean, _ = apply_use_policy(x, use)
        if clean.shape[0] == 0:
            return None, EMPTY_REASON

        counts: dict[float, int] = {}
        max_count = 0
        mode_value: float | None = None
        n_at_max = 0

        for value in clean.tolist():
            count = counts.get(value, 0) + 1
            counts[value] = count
            if count > max_count:
                max_count = count
                mode_value = value
                n_at_max = 1
            elif count == max_count:
                n_at_max += 1

        if ties == 'none' and n_at_max > 1:
            return None, NO_UNIQUE_MODE_REASON
        return float(mode_value), None

    # --- Moment statistics ---
    #
    # A constant sequence is detected on the data itself: the shortcut
    # identities can leave a tiny nonzero residue for values that are not
    # exactly representable, e.g. [496.4485501624897] * 9.

    def _accumulate(
        self, x: NDArray, use: str,
    ) -> tuple[Moments | None, str | None, bool]:
        if use == 'everything' and np.any(np.isnan(x)):
            return None, MISSING_REASON, False
        clean, _ = apply_use_policy(x, use)
        if clean.shape[0] < 2:
            return None, TOO_FEW_REASON, False
        return accumulate(clean), None, _is_constant(clean)

    def _variance(
        self,
        moments: Moments | None,
        reason: str | None,
        population: bool,
        constant: bool = False,
    ) -> Outcome:
        if moments is None:
            return None, reason
        if constant:
            return 0.0, None
        return _checked(moments.variance(population))

    def _accumulate_pair(
        self, x: NDArray, y: NDArray, use: str,
    ) -> tuple[CrossMoments | None, str | None, bool]:
        """Paired sums; the flag is True when either sequence is constant."""
        if use == 'everything' and (np.any(np.isnan(x)) or np.any(np.isnan(y))):
            return None, MISSING_REASON, False
        x_clean, y_clean, _ = apply_pair_policy(x, y, use)
        if x_clean.shape[0] < 2:
            return None, TOO_FEW_REASON, False
        constant = _is_constant(x_clean) or _is_constant(y_clean)
        return accumulate_pair(x_clean, y_clean), None, constant

    def _covariance(
        self,
        cross: CrossMoments | None,
        reason: str | None,
        population: bool,
        constant: bool = False,
    ) -> Outcome:
        if cross is None:
            return None, reason
        if constant:
            return 0.0, None
        return _checked(cross.covariance(population))

    def _correlation(
        self, cross: CrossMoments | None, reason: str | None, constant: bool = False,
    ) -> Outcome:
        """Pearson correlation; a constant sequence gives no correlation."""
        if cross is None:
            return None, reason
        if constant or cross.centered_xx <= 0 or cross.centered_yy <= 0:
            return None, ZERO_VARIANCE_REASON
        return _checked(cross.correlation())
