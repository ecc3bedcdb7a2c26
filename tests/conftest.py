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
def toy_X():
    """Intercept column plus one feature taking values 0..3."""
    return np.array([[1.0, 0.0], [1.0, 1.0], [1.0, 2.0], [1.0, 3.0]])


@pytest.fixture
def binary_data(rng):
    """Non-separable binary dataset drawn from a known logistic model."""
    n = 300
    X = np.column_stack([np.ones(n), rng.standard_normal((n, 2))])
    w_true = np.array([-0.5, 1.5, -1.0])
    p = 1.0 / (1.0 + np.exp(-(X @ w_true)))
    y = (rng.uniform(size=n) < p).astype(np.float64)
    return X, y, w_true


@pytest.fixture
def count_data(rng):
    """Count dataset drawn from a known Poisson model."""
    n = 300
    X = np.column_stack([np.ones(n), 0.5 * rng.standard_normal((n, 2))])
    w_true = np.array([0.5, 0.8, -0.4])
    y = rng.poisson(np.exp(X @ w_true)).astype(np.float64)
    return X, y, w_true
