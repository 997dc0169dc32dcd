"""
Tests for measures of dispersion.
"""

import numpy as np
import pytest
from scipy import stats

from statinsight.core.exceptions import DomainError, InsufficientDataError
from statinsight.descriptive import (
    coefficient_of_variation,
    gini,
    iqr,
    mean_absolute_deviation,
    median_absolute_deviation,
    percentile_range,
    quartile_coefficient,
    robust_scale,
    standard_error,
    std,
    value_range,
    variance,
)


SAMPLE = [2, 4, 4, 4, 5, 5, 7, 9]


class TestVariance:

    def test_sample(self):
        assert variance(SAMPLE) == pytest.approx(32 / 7)

    def test_population(self):
        assert variance(SAMPLE, population=True) == pytest.approx(4.0)
        assert std(SAMPLE, population=True) == pytest.approx(2.0)

    def test_definition(self, rng):
        x = rng.normal(size=41)
        expected = np.sum((x - x.mean()) ** 2) / (len(x) - 1)
        assert variance(x) == pytest.approx(expected, rel=1e-12)
        assert std(x) == pytest.approx(np.sqrt(expected), rel=1e-12)

    def test_needs_two(self):
        with pytest.raises(InsufficientDataError):
            variance([1])
        assert variance([1], population=True) == 0.0


class TestSpread:

    def test_range_and_iqr(self):
        x = [1, 2, 3, 4, 5]
        assert value_range(x) == 4.0
        assert iqr(x) == 2.0

    def test_cv(self):
        assert coefficient_of_variation(SAMPLE) == pytest.approx(np.sqrt(32 / 7) / 5)
        assert coefficient_of_variation(SAMPLE, percent=True) == pytest.approx(
            100 * np.sqrt(32 / 7) / 5
        )
        with pytest.raises(DomainError):
            coefficient_of_variation([-1, 1])

    def test_mad(self):
        assert mean_absolute_deviation(SAMPLE) == pytest.approx(1.5)
        assert median_absolute_deviation([1, 1, 2, 2, 4, 6, 9]) == 1.0

    def test_standard_error(self):
        assert standard_error(SAMPLE) == pytest.approx(stats.sem(SAMPLE))

    def test_quartile_coefficient(self):
        assert quartile_coefficient([1, 2, 3, 4, 5]) == pytest.approx(2 / 6)
        with pytest.raises(DomainError):
            quartile_coefficient([-1, 0, 1])

    def test_percentile_range(self):
        x = list(range(11))
        assert percentile_range(x) == pytest.approx(8.0)
        with pytest.raises(DomainError):
            percentile_range(x, 90, 10)


class TestGini:

    def test_equal(self):
        assert gini([5, 5, 5]) == 0.0

    def test_brute_force(self, rng):
        x = rng.exponential(size=20)
        brute = np.abs(x[:, None] - x[None, :]).sum() / (2 * len(x) ** 2 * x.mean())
        assert gini(x) == pytest.approx(brute, rel=1e-12)

    def test_zero_mean(self):
        assert gini([0, 0]) == 0.0

    def test_negative_values_dropped(self):
        assert gini([-4.0, 1.0, 3.0, -1.0]) == pytest.approx(gini([1.0, 3.0]), rel=1e-12)
        assert gini([1.0, 3.0]) == pytest.approx(0.25, rel=1e-12)

    def test_all_negative(self):
        with pytest.raises(InsufficientDataError):
            gini([-1.0, -2.0])


class TestRobustScale:

    def test_values(self):
        np.testing.assert_allclose(robust_scale([1, 2, 3, 4, 5]), [-1, -0.5, 0, 0.5, 1])

    def test_zero_iqr(self):
        np.testing.assert_array_equal(robust_scale([3, 3, 3, 3]), [0, 0, 0, 0])
