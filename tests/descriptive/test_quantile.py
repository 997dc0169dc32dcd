"""
Tests for quantiles, ranks and positional summaries.

quantile() uses linear interpolation between order statistics, the same
rule as numpy's default method.
"""

import numpy as np
import pytest

from statinsight.core.exceptions import DomainError, ValidationError
from statinsight.descriptive import (
    boxplot_stats,
    deciles,
    five_number_summary,
    normalized_rank,
    percentile,
    percentile_rank,
    quantile,
    quartiles,
    quintiles,
    rank,
    z_scores,
)


class TestQuantile:

    def test_reference(self):
        x = [1, 2, 3, 4, 5]
        assert quantile(x, 0.25) == 2.0
        assert quantile(x, 0.75) == 4.0

    def test_interpolation(self):
        assert quantile([1, 2, 3, 4], 0.5) == pytest.approx(2.5)
        assert quantile([10, 20], 0.3) == pytest.approx(13.0)

    def test_matches_numpy(self, rng):
        x = rng.normal(size=37)
        qs = np.array([0.0, 0.1, 0.33, 0.5, 0.9, 1.0])
        np.testing.assert_allclose(quantile(x, qs), np.quantile(x, qs), rtol=1e-12)

    def test_bounds_and_monotone(self, rng):
        x = rng.gamma(2.0, size=25)
        assert quantile(x, 0.0) == np.min(x)
        assert quantile(x, 1.0) == np.max(x)
        values = quantile(x, np.linspace(0, 1, 101))
        assert np.all(np.diff(values) >= 0)

    def test_unsorted_input(self):
        assert quantile([5, 1, 4, 2, 3], 0.5) == 3.0

    def test_ignores_missing(self):
        assert quantile([1, None, "x", 3], 0.5) == 2.0

    @pytest.mark.parametrize("q", [-0.1, 1.1, float("nan")])
    def test_domain(self, q):
        with pytest.raises(DomainError):
            quantile([1, 2, 3], q)

    def test_percentile(self):
        assert percentile([1, 2, 3, 4, 5], 50) == 3.0
        with pytest.raises(DomainError):
            percentile([1, 2, 3], 101)


class TestSplits:

    def test_quartiles(self):
        assert quartiles([1, 2, 3, 4, 5]) == (2.0, 3.0, 4.0)

    def test_quintiles_deciles(self):
        x = list(range(11))
        assert quintiles(x) == pytest.approx((2.0, 4.0, 6.0, 8.0))
        assert deciles(x) == pytest.approx(tuple(float(i) for i in range(1, 10)))

    def test_five_number_summary(self):
        s = five_number_summary([1, 2, 3, 4, 5])
        assert s.as_tuple() == (1.0, 2.0, 3.0, 4.0, 5.0)


class TestBoxplot:

    def test_outlier_and_whiskers(self):
        s = boxplot_stats([1, 2, 3, 4, 5, 6, 7, 8, 9, 100])
        assert s.q1 == pytest.approx(3.25)
        assert s.q3 == pytest.approx(7.75)
        assert s.iqr == pytest.approx(4.5)
        assert s.upper_fence == pytest.approx(14.5)
        assert s.outliers == (100.0,)
        assert s.upper_whisker == 9.0
        assert s.lower_whisker == 1.0


class TestRanks:

    def test_average_ties(self):
        np.testing.assert_array_equal(rank([10, 20, 20, 30]), [1, 2.5, 2.5, 4])

    def test_methods(self):
        x = [3, 1, 3]
        np.testing.assert_array_equal(rank(x, "min"), [2, 1, 2])
        np.testing.assert_array_equal(rank(x, "max"), [3, 1, 3])
        np.testing.assert_array_equal(rank(x, "first"), [2, 1, 3])

    def test_bad_method(self):
        with pytest.raises(ValidationError):
            rank([1, 2], "dense")

    def test_normalized(self):
        np.testing.assert_allclose(normalized_rank([5, 1, 3]), [1.0, 0.0, 0.5])
        np.testing.assert_array_equal(normalized_rank([4]), [0.0])

    def test_percentile_rank(self):
        assert percentile_rank([1, 2, 3, 4], 3) == pytest.approx(62.5)


class TestZScores:

    def test_standardized(self, rng):
        x = rng.normal(5, 2, size=30)
        z = z_scores(x)
        assert np.mean(z) == pytest.approx(0.0, abs=1e-12)
        assert np.std(z, ddof=1) == pytest.approx(1.0)

    def test_constant(self):
        np.testing.assert_array_equal(z_scores([2, 2, 2]), [0, 0, 0])
