"""
Special-function kernels.

Scalar, closed-form or short-iteration approximations of erf, log-gamma,
gamma, the lower incomplete gamma function, the regularized incomplete
beta function and the inverse standard normal CDF. Everything else in
the distributions package is built on these.
"""

from __future__ import annotations

import math

from statinsight.core.compute.tolerances import (
    BETA_CONTINUED_FRACTION,
    GAMMA_SERIES,
    TINY,
)
from statinsight.core.exceptions import DomainError


# Abramowitz & Stegun 7.1.26
_ERF_P = 0.3275911
_ERF_A = (0.254829592, -0.284496736, 1.421413741, -1.453152027, 1.061405429)

# Lanczos series, g = 5 (tmp = x + 5.5)
_LANCZOS_COEFFS = (
    76.18009172947146,
    -86.50532032941677,
    24.01409824083091,
    -1.231739572450155,
    0.1208650973866179e-2,
    -0.5395239384953e-5,
)
_LANCZOS_SERIES_START = 1.000000000190015
_SQRT_TWO_PI = 2.5066282746310005

# Rational approximation of the inverse normal CDF (Acklam)
_NORMINV_A = (
    -3.969683028665376e+01, 2.209460984245205e+02, -2.759285104469687e+02,
    1.383577518672690e+02, -3.066479806614716e+01, 2.506628277459239e+00,
)
_NORMINV_B = (
    -5.447609879822406e+01, 1.615858368580409e+02, -1.556989798598866e+02,
    6.680131188771972e+01, -1.328068155288572e+01,
)
_NORMINV_C = (
    -7.784894002430293e-03, -3.223964580411365e-01, -2.400758277161838e+00,
    -2.549732539343734e+00, 4.374664141464968e+00, 2.938163982698783e+00,
)
_NORMINV_D = (
    7.784695709041462e-03, 3.224671290700398e-01, 2.445134137142996e+00,
    3.754408661907416e+00,
)
_NORMINV_P_LOW = 0.02425


def erf(x: float) -> float:
    """
    Error function, |error| <= 1.5e-7.

    Odd-symmetric: erf(-x) = -erf(x), and erf(0) is exactly 0 (the
    polynomial alone leaves about -1e-9 there).
    """
    if x == 0.0:
        return 0.0
    sign = -1.0 if x < 0 else 1.0
    x = abs(x)
    t = 1.0 / (1.0 + _ERF_P * x)
    a1, a2, a3, a4, a5 = _ERF_A
    poly = ((((a5 * t + a4) * t + a3) * t + a2) * t + a1) * t
    return sign * (1.0 - poly * math.exp(-x * x))


def log_gamma(x: float) -> float:
    """
    Natural log of the gamma function for x > 0 (Lanczos).

    Raises:
        DomainError: If x <= 0
    """
    if not x > 0:
        raise DomainError(f"log_gamma: x must be > 0, got {x}", name="x", value=x)
    y = x
    tmp = x + 5.5
    tmp -= (x + 0.5) * math.log(tmp)
    ser = _LANCZOS_SERIES_START
    for coeff in _LANCZOS_COEFFS:
        y += 1.0
        ser += coeff / y
    return -tmp + math.log(_SQRT_TWO_PI * ser / x)


def gamma(x: float) -> float:
    """
    Gamma function.

    Uses exp(log_gamma(x)) for x >= 0.5 and the reflection formula
    Gamma(x) = pi / (sin(pi x) Gamma(1 - x)) below that.

    Raises:
        DomainError: At the poles (0, -1, -2, ...)
    """
    if x >= 0.5:
        return math.exp(log_gamma(x))
    if x == math.floor(x):
        raise DomainError(f"gamma: pole at x = {x}", name="x", value=x)
    return math.pi / (math.sin(math.pi * x) * gamma(1.0 - x))


def _gamma_series(a: float, x: float) -> float:
    """sum_{n>=0} x^n / (a (a+1) ... (a+n))."""
    term = 1.0 / a
    total = term
    for n in range(1, GAMMA_SERIES.max_iter):
        term *= x / (a + n)
        total += term
        if abs(term) < GAMMA_SERIES.eps:
            break
    return total


def _gamma_continued_fraction(a: float, x: float) -> float:
    """Continued fraction F with Gamma(a, x) = x^a e^-x F (Lentz)."""
    b = x + 1.0 - a
    c = 1.0 / TINY
    d = 1.0 / b
    h = d
    for i in range(1, GAMMA_SERIES.max_iter + 1):
        an = -i * (i - a)
        b += 2.0
        d = an * d + b
        if abs(d) < TINY:
            d = TINY
        c = b + an / c
        if abs(c) < TINY:
            c = TINY
        d = 1.0 / d
        delta = d * c
        h *= delta
        if abs(delta - 1.0) < GAMMA_SERIES.eps:
            break
    return h


def incomplete_gamma(a: float, x: float) -> float:
    """
    Lower incomplete gamma function gamma(a, x), unregularized.

    gamma(a, x) = x^a e^-x sum_{n>=0} x^n / (a)_{n+1}. The series is used
    for x < a + 1; beyond that the complement Gamma(a) - Gamma(a, x) is
    evaluated with a continued fraction, where the series would need far
    more than GAMMA_SERIES.max_iter terms. Divide by gamma(a) to regularize.

    Returns 0 for x <= 0.

    Raises:
        DomainError: If a <= 0
    """
    if not a > 0:
        raise DomainError(f"incomplete_gamma: a must be > 0, got {a}", name="a", value=a)
    if x <= 0:
        return 0.0
    prefactor = math.exp(a * math.log(x) - x)
    if x < a + 1.0:
        return prefactor * _gamma_series(a, x)
    return gamma(a) - prefactor * _gamma_continued_fraction(a, x)


def regularized_gamma_p(a: float, x: float) -> float:
    """
    incomplete_gamma(a, x) / gamma(a), evaluated in log space.

    Equal to the ratio callers would form by hand, but safe for a > 171
    where gamma(a) overflows.
    """
    if not a > 0:
        raise DomainError(f"regularized_gamma_p: a must be > 0, got {a}", name="a", value=a)
    if x <= 0:
        return 0.0
    log_prefactor = a * math.log(x) - x - log_gamma(a)
    if x < a + 1.0:
        value = math.exp(log_prefactor) * _gamma_series(a, x)
    else:
        value = 1.0 - math.exp(log_prefactor) * _gamma_continued_fraction(a, x)
    return min(1.0, max(0.0, value))


def _beta_continued_fraction(a: float, b: float, x: float) -> float:
    """Lentz evaluation of the incomplete beta continued fraction."""
    qab = a + b
    qap = a + 1.0
    qam = a - 1.0
    c = 1.0
    d = 1.0 - qab * x / qap
    if abs(d) < TINY:
        d = TINY
    d = 1.0 / d
    h = d
    for m in range(1, BETA_CONTINUED_FRACTION.max_iter + 1):
        m2 = 2 * m
        # Even step
        aa = m * (b - m) * x / ((qam + m2) * (a + m2))
        d = 1.0 + aa * d
        if abs(d) < TINY:
            d = TINY
        c = 1.0 + aa / c
        if abs(c) < TINY:
            c = TINY
        d = 1.0 / d
        h *= d * c
        # Odd step
        aa = -(a + m) * (qab + m) * x / ((a + m2) * (qap + m2))
        d = 1.0 + aa * d
        if abs(d) < TINY:
            d = TINY
        c = 1.0 + aa / c
        if abs(c) < TINY:
            c = TINY
        d = 1.0 / d
        delta = d * c
        h *= delta
        if abs(delta - 1.0) < BETA_CONTINUED_FRACTION.eps:
            break
    return h


def regularized_incomplete_beta(a: float, b: float, x: float) -> float:
    """
    Regularized incomplete beta function I_x(a, b), in [0, 1].

    The continued fraction converges fastest for x < (a+1)/(a+b+2); above
    that the symmetry I_x(a, b) = 1 - I_{1-x}(b, a) is used.

    Raises:
        DomainError: If a <= 0, b <= 0, or x outside [0, 1]
    """
    if not (a > 0 and b > 0):
        raise DomainError(
            f"regularized_incomplete_beta: a and b must be > 0, got a={a}, b={b}"
        )
    if not (0.0 <= x <= 1.0):
        raise DomainError(
            f"regularized_incomplete_beta: x must be in [0, 1], got {x}",
            name="x",
            value=x,
        )
    if x == 0.0 or x == 1.0:
        return x

    log_front = (
        log_gamma(a + b) - log_gamma(a) - log_gamma(b)
        + a * math.log(x) + b * math.log(1.0 - x)
    )
    front = math.exp(log_front)
    if x < (a + 1.0) / (a + b + 2.0):
        value = front * _beta_continued_fraction(a, b, x) / a
    else:
        value = 1.0 - front * _beta_continued_fraction(b, a, 1.0 - x) / b
    return min(1.0, max(0.0, value))


def normal_inverse(p: float) -> float:
    """
    Inverse of the standard normal CDF.

    Rational approximation with relative error below 1.2e-9. Probabilities
    above 0.5 are mirrored: normal_inverse(p) = -normal_inverse(1 - p).

    Raises:
        DomainError: If p is not strictly between 0 and 1
    """
    if not (0.0 < p < 1.0):
        raise DomainError(
            f"normal_inverse: p must be in (0, 1), got {p}", name="p", value=p
        )
    if p > 0.5:
        return -normal_inverse(1.0 - p)

    if p < _NORMINV_P_LOW:
        c1, c2, c3, c4, c5, c6 = _NORMINV_C
        d1, d2, d3, d4 = _NORMINV_D
        q = math.sqrt(-2.0 * math.log(p))
        return (
            (((((c1 * q + c2) * q + c3) * q + c4) * q + c5) * q + c6)
            / ((((d1 * q + d2) * q + d3) * q + d4) * q + 1.0)
        )

    a1, a2, a3, a4, a5, a6 = _NORMINV_A
    b1, b2, b3, b4, b5 = _NORMINV_B
    q = p - 0.5
    r = q * q
    return (
        (((((a1 * r + a2) * r + a3) * r + a4) * r + a5) * r + a6) * q
        / (((((b1 * r + b2) * r + b3) * r + b4) * r + b5) * r + 1.0)
    )
