"""
Tests for jarque_bera() and dagostino().
"""

import numpy as np
import pytest
from scipy import stats

from statinsight.core.exceptions import InsufficientDataError
from statinsight.normality import dagostino, jarque_bera


class TestJarqueBera:

    def test_formula(self, normal_sample):
        x = normal_sample
        n = len(x)
        g1 = stats.skew(x, bias=False)
        g2 = stats.kurtosis(x, bias=False)
        expected = n / 6 * (g1 ** 2 + g2 ** 2 / 4)
        result = jarque_bera(x)
        assert result.statistic == pytest.approx(expected, rel=1e-10)
        assert result.p_value == pytest.approx(stats.chi2.sf(expected, 2), abs=1e-8)
        assert result.extras["skewness"] == pytest.approx(g1)

    def test_skewed_rejected(self, skewed_sample):
        assert not jarque_bera(skewed_sample).is_normal

    def test_small_sample_warning(self):
        result = jarque_bera([1.0, 2.0, 2.5, 4.0, 7.0])
        assert result.has_warning("large-sample chi-square approximation")

    def test_no_warning_large(self, normal_sample):
        assert jarque_bera(normal_sample).warnings == ()

    def test_constant_sentinel(self):
        result = jarque_bera([2, 2, 2, 2])
        assert np.isnan(result.statistic)
        assert result.error == "All values are identical"

    def test_requires_four(self):
        with pytest.raises(InsufficientDataError):
            jarque_bera([1, 2, 3])


class TestDAgostino:

    def test_matches_scipy_normaltest(self, skewed_sample):
        expected = stats.normaltest(skewed_sample)
        result = dagostino(skewed_sample)
        assert result.statistic == pytest.approx(expected.statistic, rel=1e-8)
        assert result.p_value == pytest.approx(expected.pvalue, abs=1e-8)

    def test_z_components(self, normal_sample):
        result = dagostino(normal_sample)
        assert result.extras["z_skewness"] == pytest.approx(
            stats.skewtest(normal_sample).statistic, rel=1e-8
        )
        assert result.extras["z_kurtosis"] == pytest.approx(
            stats.kurtosistest(normal_sample).statistic, rel=1e-8
        )

    def test_symmetric_sentinel(self):
        result = dagostino(list(range(-10, 11)))
        assert np.isnan(result.statistic)
        assert not result.is_normal
        assert "skewness transform undefined" in result.error

    def test_constant_sentinel(self):
        result = dagostino([1.0] * 25)
        assert result.error == "All values are identical"

    def test_requires_twenty(self):
        with pytest.raises(InsufficientDataError):
            dagostino(list(range(19)))
