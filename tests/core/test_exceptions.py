"""
Tests for quickstats exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via QuickStatsError)
    - Diagnostic attributes on DimensionError
    - Validators raise the right exception types
"""

import numpy as np
import pytest

from quickstats.core.exceptions import (
    DimensionError,
    QuickStatsError,
    ValidationError,
)
from quickstats.core.validation import check_consistent_length


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via QuickStatsError."""

    def test_validation_error_is_quickstats_error(self):
        with pytest.raises(QuickStatsError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_dimension_error_is_quickstats_error(self):
        with pytest.raises(QuickStatsError):
            raise DimensionError("wrong shape")

    def test_not_a_value_error(self):
        """Library errors are distinct from builtin ValueError."""
        assert not issubclass(QuickStatsError, ValueError)


# ═══════════════════════════════════════════════════════════════════════
# DimensionError attributes
# ═══════════════════════════════════════════════════════════════════════


class TestDimensionError:
    """DimensionError carries the observed lengths."""

    def test_lengths_default_none(self):
        err = DimensionError("mismatch")
        assert err.lengths is None
        assert str(err) == "mismatch"

    def test_lengths_explicit(self):
        err = DimensionError("mismatch", lengths={"x": 3, "y": 2})
        assert err.lengths == {"x": 3, "y": 2}

    def test_lengths_from_validator(self):
        with pytest.raises(DimensionError) as excinfo:
            check_consistent_length(
                np.zeros(3), np.zeros(2), names=("x", "y"),
            )
        assert excinfo.value.lengths == {"x": 3, "y": 2}
