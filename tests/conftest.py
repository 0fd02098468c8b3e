"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pyinar.likelihood import GeometricInnovation
from pyinar.simulation import simulate


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def geometric_inar1():
    """INAR(1), alpha = 0.5, Geo(0.5) innovations truncated at 60, n = 200."""
    pmf = GeometricInnovation(0.5).truncated_pmf(60)
    return simulate(200, 1, [0.5], pmf, seed=2024)


@pytest.fixture
def empirical_inar1():
    """INAR(1), alpha = 0.5, small empirical innovation pmf, n = 200."""
    return simulate(200, 1, [0.5], [0.3, 0.3, 0.2, 0.1, 0.1], seed=7)
