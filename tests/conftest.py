"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def sample_with_nan():
    """Small sample with two missing values."""
    return np.array([4.0, np.nan, 1.0, 3.0, np.nan, 2.0, 5.0])


@pytest.fixture
def paired_data():
    """Paired sequences used in the correlation examples."""
    x = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
    y = np.array([2.0, 4.0, 5.0, 4.0, 5.0])
    return x, y
