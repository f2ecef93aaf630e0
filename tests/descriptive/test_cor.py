"""
Tests for Pearson correlation(), cross-checked against scipy.stats.pearsonr.
"""

import numpy as np
import pytest
from scipy import stats

from quickstats.core.exceptions import DimensionError
from quickstats.descriptive import correlation


class TestPearsonBasic:

    def test_known_value(self, paired_data):
        x, y = paired_data
        r, _ = stats.pearsonr(x, y)
        np.testing.assert_allclose(correlation(x, y).value, r, rtol=1e-12)

    def test_perfect_positive(self):
        x = np.arange(1.0, 11.0)
        np.testing.assert_allclose(correlation(x, 3 * x + 2).value, 1.0, rtol=1e-12)

    def test_perfect_negative(self):
        x = np.arange(1.0, 11.0)
        np.testing.assert_allclose(correlation(x, -x).value, -1.0, rtol=1e-12)

    def test_self_correlation_is_one(self, rng):
        x = rng.standard_normal(80)
        assert correlation(x, x).value == 1.0

    def test_symmetric(self, rng):
        x = rng.standard_normal(60)
        y = rng.standard_normal(60)
        np.testing.assert_allclose(
            correlation(x, y).value, correlation(y, x).value, rtol=1e-12
        )

    @pytest.mark.parametrize("n", [3, 10, 250])
    def test_matches_scipy(self, rng, n):
        x = rng.standard_normal(n)
        y = 0.7 * x + rng.standard_normal(n)
        r, _ = stats.pearsonr(x, y)
        np.testing.assert_allclose(correlation(x, y).value, r, rtol=1e-10)

    def test_matches_numpy(self, rng):
        x = rng.standard_normal(200)
        y = rng.standard_normal(200)
        np.testing.assert_allclose(
            correlation(x, y).value, np.corrcoef(x, y)[0, 1], rtol=1e-9, atol=1e-12
        )

    def test_bounded(self, rng):
        for _ in range(20):
            x = rng.standard_normal(5)
            y = x + 1e-9 * rng.standard_normal(5)
            r = correlation(x, y).value
            assert -1.0 <= r <= 1.0

    def test_metadata(self, paired_data):
        result = correlation(*paired_data)
        assert result.computed == ("correlation",)
        assert result.population is None
        assert "cross_moments" in result.timing


class TestPearsonUndefined:

    def test_constant_sequence(self):
        result = correlation([1, 2, 3], [4, 4, 4])
        assert result.value is None
        assert result.reason() == "zero variance"

    @pytest.mark.parametrize("c", [496.4485501624897, 0.1, 1e8 + 0.3, -7.77])
    @pytest.mark.parametrize("n", [2, 3, 9, 17])
    def test_inexact_constant(self, rng, c, n):
        """Constants whose shortcut sums do not cancel exactly."""
        y = rng.standard_normal(n)
        for x, other in (([c] * n, y), (y, [c] * n)):
            result = correlation(x, other)
            assert result.value is None
            assert result.reason() == "zero variance"

    def test_constant_after_dropping_nan(self):
        x = [0.1, np.nan, 0.1, 0.1]
        y = [1.0, 2.0, 3.0, 5.0]
        result = correlation(x, y, use="complete.obs")
        assert result.reason() == "zero variance"

    def test_both_constant(self):
        assert correlation([1, 1], [2, 2]).reason() == "zero variance"

    def test_single_pair(self):
        result = correlation([1], [2])
        assert result.value is None
        assert result.reason() == "fewer than 2 observations"

    def test_empty(self):
        assert correlation([], []).value is None

    def test_length_mismatch(self):
        with pytest.raises(DimensionError):
            correlation([1, 2, 3, 4], [1, 2, 3])

    def test_infinite_value(self):
        result = correlation([1.0, np.inf, 3.0], [1.0, 2.0, 3.0])
        assert result.value is None


class TestPearsonWithNaN:

    def test_everything_propagates(self):
        result = correlation([1.0, 2.0, 3.0], [1.0, np.nan, 2.0])
        assert result.value is None
        assert result.reason() == "missing values present"

    def test_complete_obs_matches_clean_data(self, rng):
        x = rng.standard_normal(40)
        y = x + rng.standard_normal(40)
        x_nan = x.copy()
        y_nan = y.copy()
        x_nan[[3, 17]] = np.nan
        y_nan[[17, 25]] = np.nan
        keep = np.ones(40, dtype=bool)
        keep[[3, 17, 25]] = False

        result = correlation(x_nan, y_nan, use="complete.obs")
        r, _ = stats.pearsonr(x[keep], y[keep])
        np.testing.assert_allclose(result.value, r, rtol=1e-10)
        assert result.n_dropped == 3
        assert result.warnings == ("dropped 3 incomplete pairs",)
