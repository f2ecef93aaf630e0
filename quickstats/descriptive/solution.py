"""
Descriptive statistics solution types.

Contains the parameter payload and user-facing solution wrapper.

A statistic that was requested but has no meaningful value (empty input,
too few observations, missing values under use='everything', a constant
sequence in correlation, no unique mode) is stored as None and listed in
DescriptiveParams.undefined together with the reason. A valid 0.0 is
therefore never confused with "no result".
"""

from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Any, TYPE_CHECKING

from quickstats.core.result import Result

if TYPE_CHECKING:
    from quickstats.descriptive.design import DescriptiveDesign


STATISTICS: tuple[str, ...] = (
    'mean', 'median', 'mode', 'variance', 'sd', 'covariance', 'correlation',
)


@dataclass(frozen=True)
class DescriptiveParams:
    """
    Parameter payload for descriptive statistics.

    Statistic fields are None when not computed or undefined; the two
    cases are told apart by the ``undefined`` mapping.
    """
    mean: float | None = None
    median: float | None = None
    mode: float | None = None
    variance: float | None = None
    sd: float | None = None
    covariance: float | None = None
    correlation: float | None = None

    # Bookkeeping
    n_obs: int = 0
    n_used: int = 0
    trim: float | None = None
    population: bool | None = None
    undefined: dict[str, str] = field(default_factory=dict)


@dataclass
class DescriptiveSolution:
    """
    User-facing descriptive statistics results.

    Wraps Result[DescriptiveParams] and provides convenient accessors.
    """
    _result: Result[DescriptiveParams]
    _design: 'DescriptiveDesign'

    # --- Statistics ---

    @property
    def mean(self) -> float | None:
        """Arithmetic mean (trimmed if trim > 0)."""
        return self._result.params.mean

    @property
    def median(self) -> float | None:
        return self._result.params.median

    @property
    def mode(self) -> float | None:
        """Most frequent value, or None when there is no mode."""
        return self._result.params.mode

    @property
    def variance(self) -> float | None:
        return self._result.params.variance

    @property
    def sd(self) -> float | None:
        return self._result.params.sd

    @property
    def covariance(self) -> float | None:
        return self._result.params.covariance

    @property
    def correlation(self) -> float | None:
        """Pearson correlation coefficient."""
        return self._result.params.correlation

    @property
    def computed(self) -> tuple[str, ...]:
        """Names of the statistics this solution was asked for."""
        return tuple(self._result.info.get('computed', ()))

    @property
    def value(self) -> float | None:
        """
        The single requested statistic, or None if it is undefined.

        Raises
        ------
        ValueError
            If more than one statistic was computed (e.g. by describe());
            use the named properties instead.
        """
        return getattr(self, self._resolve(None))

    def _resolve(self, name: str | None) -> str:
        computed = self.computed
        if name is None:
            if len(computed) != 1:
                raise ValueError(
                    f"Solution holds {len(computed)} statistics {list(computed)}; "
                    f"ask for one by name"
                )
            return computed[0]
        if name not in computed:
            raise ValueError(
                f"Statistic {name!r} was not computed; available: {list(computed)}"
            )
        return name

    def is_defined(self, name: str | None = None) -> bool:
        """Whether the (named) statistic has a meaningful value."""
        name = self._resolve(name)
        return name not in self._result.params.undefined

    def reason(self, name: str | None = None) -> str | None:
        """Why the (named) statistic is undefined, or None if it is defined."""
        name = self._resolve(name)
        return self._result.params.undefined.get(name)

    def as_float(self, name: str | None = None) -> float:
        """The (named) statistic as a float, NaN when undefined."""
        value = getattr(self, self._resolve(name))
        return math.nan if value is None else float(value)

    # --- Bookkeeping ---

    @property
    def n_obs(self) -> int:
        """Number of observations supplied."""
        return self._result.params.n_obs

    @property
    def n_used(self) -> int:
        """Number of observations used after the missing data policy."""
        return self._result.params.n_used

    @property
    def n_dropped(self) -> int:
        return self.n_obs - self.n_used

    @property
    def trim(self) -> float | None:
        return self._result.params.trim

    @property
    def population(self) -> bool | None:
        return self._result.params.population

    # --- Metadata ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def has_warning(self, substring: str) -> bool:
        return self._result.has_warning(substring)

    def algorithm(self, name: str | None = None) -> str | None:
        """Algorithm used for the (named) statistic."""
        return self._result.algorithm(self._resolve(name))

    def summary(self) -> str:
        """Plain-text table of the computed statistics."""
        lines = [f"Descriptive Statistics (n={self.n_obs}, used={self.n_used}):"]
        computed = self.computed
        width = max((len(name) for name in computed), default=0)

        for name in computed:
            reason = self._result.params.undefined.get(name)
            if reason is not None:
                text = f"undefined ({reason})"
            else:
                text = f"{getattr(self, name):.6f}"
            lines.append(f"  {name.ljust(width)}  {text}")

        for w in self.warnings:
            lines.append(f"Warning: {w}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        parts = []
        for name in self.computed:
            if name in self._result.params.undefined:
                parts.append(f"{name}=undefined")
            else:
                parts.append(f"{name}={getattr(self, name)!r}")
        stats_str = ", ".join(parts) if parts else "none"
        return f"DescriptiveSolution(n={self.n_obs}, {stats_str})"
