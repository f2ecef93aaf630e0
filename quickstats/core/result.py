"""
Generic result container for all quickstats computations.

The Result class provides a standardized envelope around a statistic
payload. It carries the timing, warnings and metadata for a single call
so that nothing about a computation has to live in module-level state.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (policy used, algorithm per statistic)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True); warnings are stored as a tuple whatever
      sequence the backend collected them in
"""

from dataclasses import dataclass
from typing import TypeVar, Generic, Any, Sequence

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for statistical computations.

    Type Parameters:
        P: The payload type, e.g. DescriptiveParams

    Attributes:
        params: Statistic values and observation counts
        info: Structured metadata. Backends record 'use', 'computed' and
            'algorithms' (statistic name -> algorithm name)
        timing: Seconds per Timer section plus 'total_seconds', or None
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal notes, e.g. dropped missing values

    Examples:
        >>> Result(
        ...     params=DescriptiveParams(median=3.0, n_obs=5, n_used=5),
        ...     info={'use': 'everything', 'computed': ['median'],
        ...           'algorithms': {'median': 'quickselect'}},
        ...     timing={'total_seconds': 0.0001, 'median': 0.00008},
        ...     backend_name='cpu_descriptive',
        ...     warnings=[],
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: Sequence[str] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, 'warnings', tuple(self.warnings))

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)

    def algorithm(self, statistic: str) -> str | None:
        """Algorithm the backend used for a statistic, if recorded."""
        return self.info.get('algorithms', {}).get(statistic)
