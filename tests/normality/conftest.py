"""
Shared samples for normality tests.
"""

import numpy as np
import pytest

from statinsight.distributions import normal_inverse


@pytest.fixture
def ideal_normal():
    """Normal quantiles at plotting positions: as normal as a sample gets."""
    n = 50
    return np.array([normal_inverse((i - 0.5) / n) for i in range(1, n + 1)])


@pytest.fixture
def normal_sample(rng):
    return rng.standard_normal(200)


@pytest.fixture
def skewed_sample(rng):
    return rng.exponential(1.0, size=200)
