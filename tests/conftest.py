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
def normal_sample(rng):
    """100 standard normal draws."""
    return rng.standard_normal(100)


@pytest.fixture
def paired_data(rng):
    """Paired (x, y) observations with a linear relationship, slope 3."""
    n = 50
    x = rng.uniform(0, 10, n)
    y = 2.0 + 3.0 * x + rng.normal(0, 1, n)
    return np.column_stack([x, y])
