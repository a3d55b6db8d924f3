"""
pytest configuration and shared fixtures.
"""

from decimal import Decimal

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def quadratic_points():
    """Three points on y = x^2 + x + 1."""
    return [(0, 1), (1, 2), (2, 5)]


@pytest.fixture
def cubic_data(rng):
    """Exact cubic: integer x, integer coefficients, y computed exactly."""
    coefficients = [Decimal(int(c)) for c in rng.integers(-9, 10, size=4)]
    x = list(range(-4, 6))
    y = [sum(c * xi ** i for i, c in enumerate(coefficients)) for xi in x]
    return x, y, coefficients


@pytest.fixture
def noisy_quadratic(rng):
    """Quadratic with Gaussian noise, as float arrays."""
    n = 60
    x = np.linspace(-3.0, 3.0, n)
    y = 0.5 - 1.25 * x + 0.75 * x ** 2 + rng.standard_normal(n) * 0.2
    return x, y
