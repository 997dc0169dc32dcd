"""
Tests for distribution CDFs and quantiles, validated against scipy.stats.
"""

import math

import numpy as np
import pytest
from scipy import stats

from statinsight.core.exceptions import DomainError
from statinsight.distributions import (
    chi_square_cdf,
    chi_square_inverse,
    clamp_probability,
    f_cdf,
    normal_cdf,
    normal_inverse,
    t_cdf,
    t_inverse,
)


class TestNormalCDF:

    @pytest.mark.parametrize("z", [-4.0, -1.96, -0.5, 0.0, 0.5, 1.0, 1.96, 3.0])
    def test_matches_scipy(self, z):
        assert normal_cdf(z) == pytest.approx(stats.norm.cdf(z), abs=1e-6)

    def test_center(self):
        assert normal_cdf(0.0) == pytest.approx(0.5, abs=1e-12)

    def test_bounds(self):
        assert normal_cdf(40.0) == 1.0
        assert normal_cdf(-40.0) == 0.0

    @pytest.mark.parametrize("p", [0.001, 0.05, 0.25, 0.5, 0.8, 0.99])
    def test_round_trip(self, p):
        assert normal_cdf(normal_inverse(p)) == pytest.approx(p, abs=1e-6)


class TestTCDF:

    @pytest.mark.parametrize("df", [1, 2, 5, 10, 30, 100])
    @pytest.mark.parametrize("t", [-3.0, -1.0, 0.0, 0.7, 2.0, 4.5])
    def test_matches_scipy(self, t, df):
        assert t_cdf(t, df) == pytest.approx(stats.t.cdf(t, df), abs=1e-8)

    def test_symmetry(self):
        for t in (0.3, 1.5, 2.8):
            assert t_cdf(-t, 7) == pytest.approx(1.0 - t_cdf(t, 7), abs=1e-12)

    def test_infinite(self):
        assert t_cdf(math.inf, 4) == 1.0
        assert t_cdf(-math.inf, 4) == 0.0

    def test_df_domain(self):
        with pytest.raises(DomainError):
            t_cdf(1.0, 0)


class TestTInverse:

    @pytest.mark.parametrize("df", [10, 30, 100])
    @pytest.mark.parametrize("p", [0.025, 0.05, 0.5, 0.95, 0.975])
    def test_moderate_df(self, p, df):
        assert t_inverse(p, df) == pytest.approx(stats.t.ppf(p, df), abs=1e-3)

    def test_small_df_close(self):
        assert t_inverse(0.975, 5) == pytest.approx(stats.t.ppf(0.975, 5), abs=1e-2)

    def test_expansion_uses_powers_of_z(self):
        """The correction terms are polynomials in z, not in t."""
        z = normal_inverse(0.975)
        expected = (
            z
            + (z ** 3 + z) / 4.0 / 5
            + (5 * z ** 5 + 16 * z ** 3 + 3 * z) / 96.0 / 5 ** 2
            + (3 * z ** 7 + 19 * z ** 5 + 17 * z ** 3 - 15 * z) / 384.0 / 5 ** 3
        )
        assert t_inverse(0.975, 5) == pytest.approx(expected, rel=1e-12)
        assert t_inverse(0.975, 5) == pytest.approx(2.5678, abs=1e-3)

    def test_domain(self):
        with pytest.raises(DomainError):
            t_inverse(1.0, 10)


class TestChiSquare:

    @pytest.mark.parametrize("df", [1, 2, 3, 10, 50])
    @pytest.mark.parametrize("x", [0.1, 1.0, 3.84, 10.0, 60.0])
    def test_cdf_matches_scipy(self, x, df):
        assert chi_square_cdf(x, df) == pytest.approx(stats.chi2.cdf(x, df), abs=1e-8)

    def test_non_positive(self):
        assert chi_square_cdf(0.0, 3) == 0.0
        assert chi_square_cdf(-2.0, 3) == 0.0

    @pytest.mark.parametrize("x, df", [(400.0, 2), (300.0, 10), (150.0, 100)])
    def test_far_upper_tail(self, x, df):
        """Beyond the mean the continued fraction keeps the CDF at 1, not 0."""
        assert chi_square_cdf(x, df) == pytest.approx(stats.chi2.cdf(x, df), abs=1e-10)
        assert chi_square_cdf(x, df) > 0.99

    @pytest.mark.parametrize("df", [1, 4, 20])
    @pytest.mark.parametrize("p", [0.05, 0.5, 0.95, 0.999])
    def test_inverse_round_trip(self, p, df):
        x = chi_square_inverse(p, df)
        assert chi_square_cdf(x, df) == pytest.approx(p, abs=1e-8)
        assert x == pytest.approx(stats.chi2.ppf(p, df), rel=1e-6)

    def test_inverse_domain(self):
        with pytest.raises(DomainError):
            chi_square_inverse(0.0, 3)


class TestFCDF:

    @pytest.mark.parametrize("df1, df2", [(1, 1), (2, 10), (3, 27), (10, 5)])
    @pytest.mark.parametrize("f", [0.2, 1.0, 3.5, 12.0])
    def test_matches_scipy(self, f, df1, df2):
        assert f_cdf(f, df1, df2) == pytest.approx(stats.f.cdf(f, df1, df2), abs=1e-8)

    def test_non_positive(self):
        assert f_cdf(0.0, 2, 10) == 0.0

    def test_df_domain(self):
        with pytest.raises(DomainError):
            f_cdf(1.0, 2, 0)


class TestClampProbability:

    def test_clamps(self):
        assert clamp_probability(1.0000001) == 1.0
        assert clamp_probability(-1e-17) == 0.0
        assert clamp_probability(0.3) == 0.3

    def test_nan_passes(self):
        assert np.isnan(clamp_probability(math.nan))
