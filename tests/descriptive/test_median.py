"""
Tests for median(), cross-checked against a full sort.
"""

import numpy as np
import pytest

from quickstats.core.exceptions import DimensionError, ValidationError
from quickstats.descriptive import median


def _sorted_median(values):
    s = sorted(values)
    n = len(s)
    if n % 2 == 1:
        return s[n // 2]
    return (s[n // 2 - 1] + s[n // 2]) / 2


class TestMedianBasic:

    def test_odd(self):
        assert median([3, 1, 2]).value == 2.0

    def test_even(self):
        assert median([4, 1, 3, 2]).value == 2.5

    def test_single(self):
        assert median([42]).value == 42.0

    def test_two(self):
        assert median([10, 0]).value == 5.0

    def test_empty_undefined(self):
        result = median([])
        assert result.value is None
        assert result.reason() == "empty sequence"

    def test_duplicates(self):
        assert median([2, 2, 2, 1, 3, 2]).value == 2.0

    def test_negative_values(self):
        assert median([-5, -1, 0, 1, 5]).value == 0.0

    @pytest.mark.parametrize("n", list(range(1, 30)) + [100, 101, 1000, 1001])
    def test_matches_full_sort(self, rng, n):
        x = rng.standard_normal(n)
        assert median(x).value == _sorted_median(x.tolist())

    @pytest.mark.parametrize("n", [50, 51])
    def test_matches_full_sort_integers_with_ties(self, rng, n):
        x = rng.integers(-3, 4, size=n)
        assert median(x).value == _sorted_median(x.astype(float).tolist())

    @pytest.mark.parametrize("order", ["sorted", "reversed"])
    def test_structured_input(self, order):
        x = np.arange(500.0)
        if order == "reversed":
            x = x[::-1]
        assert median(x).value == 249.5

    def test_matches_numpy(self, rng):
        x = rng.standard_normal(777)
        np.testing.assert_allclose(median(x).value, np.median(x), rtol=1e-15)


class TestMedianInvalidValues:

    def test_nan_propagates(self):
        result = median([1.0, np.nan, 3.0])
        assert result.value is None
        assert result.reason() == "missing values present"

    def test_complete_obs(self):
        assert median([1, 2, 3, 4, 5, np.nan], use="complete.obs").value == 3.0

    def test_ranks_against_valid_count(self):
        """[1, nan, 2, nan, 3]: three valid values → median 2, not the n=5 rank."""
        assert median([1, np.nan, 2, np.nan, 3], use="complete.obs").value == 2.0

    def test_even_valid_count(self, sample_with_nan):
        x = np.append(sample_with_nan, 6.0)
        assert median(x, use="complete.obs").value == 3.5

    def test_all_nan_undefined(self):
        result = median([np.nan, np.nan], use="complete.obs")
        assert result.value is None
        assert result.reason() == "empty sequence"

    def test_non_numeric_rejected(self):
        with pytest.raises(ValidationError):
            median([1, 2, "3", 4, 5])

    def test_2d_rejected(self):
        with pytest.raises(DimensionError):
            median([[1, 2], [3, 4]])


class TestMedianAliasing:

    def test_input_untouched_by_default(self):
        x = np.array([5.0, 4.0, 3.0, 2.0, 1.0])
        median(x)
        np.testing.assert_array_equal(x, [5.0, 4.0, 3.0, 2.0, 1.0])

    def test_overwrite_input_mutates_float_array(self):
        x = np.array([5.0, 4.0, 3.0, 2.0, 1.0])
        assert median(x, overwrite_input=True).value == 3.0
        assert x[2] == 3.0
        assert set(x[:2]) == {1.0, 2.0}

    def test_overwrite_input_with_nan_moves_nan_to_tail(self):
        x = np.array([np.nan, 3.0, 1.0, np.nan, 2.0])
        assert median(x, use="complete.obs", overwrite_input=True).value == 2.0
        assert np.all(np.isnan(x[3:]))

    def test_overwrite_input_on_list_copies(self):
        """Lists are converted at the boundary, so they are never mutated."""
        x = [5.0, 4.0, 3.0, 2.0, 1.0]
        median(x, overwrite_input=True)
        assert x == [5.0, 4.0, 3.0, 2.0, 1.0]

    def test_overwrite_input_on_readonly_array_copies(self):
        x = np.array([5.0, 4.0, 3.0, 2.0, 1.0])
        x.flags.writeable = False
        assert median(x, overwrite_input=True).value == 3.0
        np.testing.assert_array_equal(x, [5.0, 4.0, 3.0, 2.0, 1.0])
