"""
Exception hierarchy for quickstats.

All exceptions inherit from QuickStatsError to allow catching any
library-specific error.

Design principles:
    - Exceptions are reserved for caller mistakes (bad configuration,
      non-numeric data, mismatched lengths)
    - Statistically undefined results are NOT exceptions; they are
      reported through the result object
    - Error messages are actionable with actual vs expected values
"""


class QuickStatsError(Exception):
    """Base exception for all quickstats errors."""
    pass


class ValidationError(QuickStatsError):
    """
    Input validation failed.

    Raised when user-provided inputs or options fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when an input is not one-dimensional, or when paired
    sequences have different lengths.

    Attributes:
        lengths: Mapping of parameter name to observed length, if known
    """

    def __init__(self, message: str, lengths: dict[str, int] | None = None):
        super().__init__(message)
        self.lengths = lengths
