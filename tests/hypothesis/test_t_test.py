"""
Tests for t_test() and z_test().

Reference values from scipy.stats. Critical values and confidence limits
use the Cornish-Fisher t quantile, so they carry a looser tolerance than
the statistics and p-values.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy import stats

from statinsight.core.exceptions import (
    DimensionError,
    DomainError,
    InsufficientDataError,
    StructuralError,
    ValidationError,
    ZeroStdError,
)
from statinsight.hypothesis import TTestKind, t_test, z_test


class TestOneSampleTTest:
    """One-sample t-test: H0: mean(x) = mu."""

    def test_reference_sample(self):
        """[5,5,6,6,7,7] against 5: t = 1 / sqrt(0.8 / 6), df = 5."""
        x = [5, 5, 6, 6, 7, 7]
        result = t_test(x, mu=5)
        expected = stats.ttest_1samp(x, 5)
        assert result.statistic == pytest.approx(2.7386127875258306, rel=1e-10)
        assert result.statistic == pytest.approx(expected.statistic, rel=1e-10)
        assert result.df == 5.0
        assert result.p_value == pytest.approx(expected.pvalue, abs=1e-8)
        assert result.significant
        assert result.test_type == "one-sample"
        assert result.method == "One Sample t-test"

    def test_mu_equal_to_mean(self):
        result = t_test([1, 2, 3, 4, 5], mu=3)
        assert result.statistic == pytest.approx(0.0, abs=1e-15)
        assert result.p_value == pytest.approx(1.0, abs=1e-12)
        assert not result.significant

    def test_confidence_interval(self, rng):
        x = rng.normal(3, 2, size=40)
        result = t_test(x, mu=3)
        lo, hi = stats.t.interval(0.95, len(x) - 1, loc=np.mean(x), scale=stats.sem(x))
        assert_allclose(result.conf_int, [lo, hi], atol=1e-3)
        assert result.critical_value == pytest.approx(stats.t.ppf(0.975, 39), abs=1e-3)

    def test_missing_cells_ignored(self):
        a = t_test([1, 2, None, 4, "x", 5], mu=3)
        b = t_test([1, 2, 4, 5], mu=3)
        assert a.statistic == pytest.approx(b.statistic, rel=1e-12)

    def test_constant_raises(self):
        with pytest.raises(ZeroStdError) as info:
            t_test([4, 4, 4, 4], mu=3)
        assert info.value.quantity == "standard error"

    def test_small_sample_warning(self):
        assert t_test([1, 2, 4], mu=0).has_warning("very small sample")

    def test_needs_two_values(self):
        with pytest.raises(InsufficientDataError):
            t_test([1], mu=0)


class TestTwoSampleTTest:

    def test_welch_matches_scipy(self, rng):
        x = rng.normal(0, 1, size=25)
        y = rng.normal(0.8, 2, size=30)
        result = t_test(x, y)
        expected = stats.ttest_ind(x, y, equal_var=False)
        assert result.statistic == pytest.approx(expected.statistic, rel=1e-10)
        assert result.p_value == pytest.approx(expected.pvalue, abs=1e-8)
        assert result.method == "Welch Two Sample t-test"

    def test_pooled_matches_scipy(self, rng):
        x = rng.normal(0, 1, size=12)
        y = rng.normal(1, 1, size=15)
        result = t_test(x, y, var_equal=True)
        expected = stats.ttest_ind(x, y, equal_var=True)
        assert result.statistic == pytest.approx(expected.statistic, rel=1e-10)
        assert result.p_value == pytest.approx(expected.pvalue, abs=1e-8)
        assert result.df == 25.0

    def test_record(self):
        record = t_test([1, 2, 3, 4, 5], [4, 5, 6, 7, 8]).to_dict()
        assert record["type"] == "t-test"
        assert record["sample1Mean"] == 3.0
        assert record["sample2Mean"] == 6.0
        assert record["meanDifference"] == -3.0
        assert record["sampleSize"] == 10
        assert "degreesOfFreedom" in record

    def test_both_constant(self):
        with pytest.raises(ZeroStdError):
            t_test([1, 1, 1], [2, 2, 2])

    def test_one_constant_ok(self):
        result = t_test([1, 1, 1], [2, 3, 4])
        assert np.isfinite(result.statistic)


class TestPairedTTest:

    def test_equals_one_sample_on_differences(self, rng):
        x = rng.normal(10, 2, size=20)
        y = x + rng.normal(0.5, 1, size=20)
        paired = t_test(x, y, test_type="paired")
        one = t_test(x - y, mu=0)
        assert paired.statistic == pytest.approx(one.statistic, rel=1e-12)
        assert paired.p_value == pytest.approx(one.p_value, rel=1e-12)
        assert paired.df == one.df
        assert paired.method == "Paired t-test"

    def test_matches_scipy(self, rng):
        x = rng.normal(size=15)
        y = rng.normal(0.3, size=15)
        expected = stats.ttest_rel(x, y)
        result = t_test(x, y, test_type=TTestKind.PAIRED)
        assert result.statistic == pytest.approx(expected.statistic, rel=1e-10)
        assert result.p_value == pytest.approx(expected.pvalue, abs=1e-8)

    def test_incomplete_pairs_skipped(self):
        result = t_test([1, 2, None, 4, 6], [0, 1, 5, None, 4], test_type="paired")
        assert result.to_dict()["sampleSize"] == 3

    def test_length_mismatch(self):
        with pytest.raises(DimensionError):
            t_test([1, 2, 3], [1, 2], test_type="paired")

    def test_missing_y(self):
        with pytest.raises(StructuralError):
            t_test([1, 2, 3], test_type="paired")


class TestArguments:

    def test_unknown_type(self):
        with pytest.raises(ValidationError, match="Unknown t-test type"):
            t_test([1, 2, 3], test_type="three-sample")

    def test_bad_alpha(self):
        with pytest.raises(DomainError):
            t_test([1, 2, 3], alpha=0)

    def test_bad_mu(self):
        with pytest.raises(ValidationError):
            t_test([1, 2, 3], mu="zero")

    def test_unknown_backend(self):
        with pytest.raises(ValidationError, match="Unknown backend"):
            t_test([1, 2, 3], backend="gpu")


class TestZTest:

    def test_statistic(self):
        x = [102, 98, 105, 110, 101, 99, 104, 107]
        result = z_test(x, mu=100, population_std=5)
        z = (np.mean(x) - 100) / (5 / np.sqrt(len(x)))
        assert result.statistic == pytest.approx(z)
        assert result.p_value == pytest.approx(2 * stats.norm.sf(abs(z)), abs=1e-6)
        assert result.critical_value == pytest.approx(1.959964, abs=1e-6)

    def test_record_type(self):
        record = z_test([1, 2, 3], mu=0, population_std=1).to_dict()
        assert record["type"] == "z-test"
        assert "degreesOfFreedom" not in record

    def test_requires_sigma(self):
        with pytest.raises(ValidationError, match="population_std"):
            z_test([1, 2, 3], mu=0)

    def test_sigma_positive(self):
        with pytest.raises(DomainError):
            z_test([1, 2, 3], mu=0, population_std=0)


class TestPValueRange:

    def test_all_in_unit_interval(self, rng):
        for _ in range(20):
            x = rng.normal(rng.uniform(-2, 2), 1, size=10)
            y = rng.normal(0, rng.uniform(0.5, 3), size=12)
            for result in (t_test(x), t_test(x, y), t_test(x[:10], y[:10], test_type="paired")):
                assert 0.0 <= result.p_value <= 1.0
