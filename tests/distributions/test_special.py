"""
Tests for the special functions, validated against scipy.special.
"""

import math

import numpy as np
import pytest
from scipy import special

from statinsight.core.exceptions import DomainError
from statinsight.distributions import (
    erf,
    gamma,
    incomplete_gamma,
    log_gamma,
    normal_inverse,
    regularized_gamma_p,
    regularized_incomplete_beta,
)


class TestErf:
    """Abramowitz-Stegun 7.1.26, |error| <= 1.5e-7."""

    @pytest.mark.parametrize("x", [0.0, 0.1, 0.5, 1.0, 2.0, 3.5])
    def test_matches_scipy(self, x):
        assert erf(x) == pytest.approx(special.erf(x), abs=2e-7)

    def test_odd(self):
        for x in (0.3, 1.2, 2.7):
            assert erf(-x) == pytest.approx(-erf(x), abs=1e-15)

    def test_saturates(self):
        assert erf(10.0) == pytest.approx(1.0, abs=1e-12)

    def test_zero_is_exact(self):
        assert erf(0.0) == 0.0
        assert erf(-0.0) == 0.0
        assert erf(1e-12) == pytest.approx(0.0, abs=2e-7)


class TestGamma:

    @pytest.mark.parametrize("n, expected", [(1, 1), (2, 1), (5, 24), (10, 362880)])
    def test_factorials(self, n, expected):
        assert gamma(n) == pytest.approx(expected, rel=1e-9)

    def test_half(self):
        assert gamma(0.5) == pytest.approx(math.sqrt(math.pi), rel=1e-9)

    def test_reflection_negative(self):
        assert gamma(-0.5) == pytest.approx(special.gamma(-0.5), rel=1e-9)

    @pytest.mark.parametrize("x", [0, -1, -3])
    def test_poles(self, x):
        with pytest.raises(DomainError):
            gamma(x)

    @pytest.mark.parametrize("x", [0.1, 1.5, 7.0, 50.0, 300.0])
    def test_log_gamma(self, x):
        assert log_gamma(x) == pytest.approx(special.gammaln(x), rel=1e-8)

    def test_log_gamma_domain(self):
        with pytest.raises(DomainError):
            log_gamma(0.0)


class TestIncompleteGamma:

    @pytest.mark.parametrize("x", [0.1, 0.5, 1.0, 3.0, 10.0])
    def test_exponential_case(self, x):
        """gamma(1, x) = 1 - e^-x."""
        assert incomplete_gamma(1.0, x) == pytest.approx(1.0 - math.exp(-x), rel=1e-9)

    @pytest.mark.parametrize("a, x", [(0.5, 0.2), (2.0, 1.0), (3.0, 8.0), (10.0, 4.0), (10.0, 15.0)])
    def test_matches_scipy(self, a, x):
        expected = special.gammainc(a, x) * special.gamma(a)
        assert incomplete_gamma(a, x) == pytest.approx(expected, rel=1e-8)

    @pytest.mark.parametrize("a, x", [(1.0, 200.0), (2.5, 120.0), (5.0, 60.0)])
    def test_far_beyond_a(self, a, x):
        """A truncated series would return about 0 here; the full value is gamma(a)."""
        expected = special.gammainc(a, x) * special.gamma(a)
        assert incomplete_gamma(a, x) == pytest.approx(expected, rel=1e-10)
        assert incomplete_gamma(a, x) == pytest.approx(gamma(a), rel=1e-10)

    def test_non_positive_x(self):
        assert incomplete_gamma(2.0, 0.0) == 0.0
        assert incomplete_gamma(2.0, -1.0) == 0.0

    def test_domain(self):
        with pytest.raises(DomainError):
            incomplete_gamma(0.0, 1.0)

    @pytest.mark.parametrize("a, x", [(0.5, 0.2), (5.0, 3.0), (20.0, 15.0), (20.0, 30.0)])
    def test_regularized(self, a, x):
        assert regularized_gamma_p(a, x) == pytest.approx(special.gammainc(a, x), abs=1e-8)


class TestIncompleteBeta:

    @pytest.mark.parametrize("a, b, x", [
        (0.5, 0.5, 0.3), (2.0, 3.0, 0.4), (5.0, 1.0, 0.9), (10.0, 0.5, 0.7), (1.0, 1.0, 0.25),
    ])
    def test_matches_scipy(self, a, b, x):
        assert regularized_incomplete_beta(a, b, x) == pytest.approx(
            special.betainc(a, b, x), abs=1e-9
        )

    def test_endpoints(self):
        assert regularized_incomplete_beta(2.0, 3.0, 0.0) == 0.0
        assert regularized_incomplete_beta(2.0, 3.0, 1.0) == 1.0

    def test_domain(self):
        with pytest.raises(DomainError):
            regularized_incomplete_beta(2.0, 3.0, 1.5)
        with pytest.raises(DomainError):
            regularized_incomplete_beta(0.0, 3.0, 0.5)


class TestNormalInverse:

    @pytest.mark.parametrize("p", [1e-10, 0.001, 0.02, 0.025, 0.3, 0.5, 0.7, 0.975, 0.999])
    def test_matches_scipy(self, p):
        assert normal_inverse(p) == pytest.approx(special.ndtri(p), rel=1e-8, abs=1e-12)

    def test_known_value(self):
        assert normal_inverse(0.975) == pytest.approx(1.959964, abs=1e-6)

    def test_symmetry(self):
        for p in (0.01, 0.2, 0.4):
            assert normal_inverse(1 - p) == pytest.approx(-normal_inverse(p), rel=1e-12)

    @pytest.mark.parametrize("p", [0.0, 1.0, -0.5, 1.5])
    def test_domain(self, p):
        with pytest.raises(DomainError):
            normal_inverse(p)

    def test_monotone(self):
        ps = np.linspace(0.001, 0.999, 200)
        qs = [normal_inverse(p) for p in ps]
        assert all(b > a for a, b in zip(qs, qs[1:]))
